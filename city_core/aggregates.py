from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional

from city_core.data import CityRecord, format_area, format_density, format_int, format_percent


@dataclass(frozen=True)
class AggregateSummary:
    """Sum/mean statistics over a caller-chosen subset of cities.

    The means are None for an empty subset: there is no average to show,
    and reporting 0 would read as a real value.
    """

    count: int
    total_population: int
    total_area: float
    average_literacy_rate: Optional[float]
    average_density: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize_cities(cities: Iterable[CityRecord]) -> AggregateSummary:
    count = 0
    total_population = 0
    total_area = 0.0
    literacy_sum = 0.0
    density_sum = 0.0
    for city in cities:
        count += 1
        total_population += city.total_population
        total_area += city.area
        literacy_sum += city.literacy_rate
        density_sum += city.population_density
    return AggregateSummary(
        count=count,
        total_population=total_population,
        total_area=total_area,
        average_literacy_rate=(literacy_sum / count) if count else None,
        average_density=(density_sum / count) if count else None,
    )


def summary_tiles(summary: AggregateSummary) -> list[Dict[str, str]]:
    return [
        {"key": "total_population", "title": "Total Population", "value": format_int(summary.total_population)},
        {"key": "total_area", "title": "Total Area", "value": format_area(summary.total_area)},
        {
            "key": "average_literacy_rate",
            "title": "Avg. Literacy Rate",
            "value": format_percent(summary.average_literacy_rate),
        },
        {"key": "average_density", "title": "Avg. Density", "value": format_density(summary.average_density)},
    ]
