from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from city_core.charts import gender_pie, labelled_bar, to_vega_spec, trend_line
from city_core.data import CityRecord, round_half_up
from city_core.filters import ExplorerSettings


def gender_split(city: CityRecord) -> Tuple[float, float]:
    """Male and female share of the population, in percent to one decimal."""
    assert city.total_population > 0, f"{city.name} has non-positive total population"
    total = Decimal(city.total_population)
    male = round_half_up(Decimal(city.male_population) * 100 / total, 1)
    female = round_half_up(Decimal(city.female_population) * 100 / total, 1)
    return male, female


def density_trend(city: CityRecord, settings: ExplorerSettings) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "year": list(settings.density_trend_years),
            "density": [city.population_density * f for f in settings.density_trend_factors],
        }
    )


def compute_city_detail(city: CityRecord, settings: Optional[ExplorerSettings] = None) -> Dict[str, Any]:
    settings = settings or ExplorerSettings()
    male_pct, female_pct = gender_split(city)

    literacy_df = pd.DataFrame(
        {
            "label": ["City Literacy", "National Average"],
            "literacy_rate": [city.literacy_rate, settings.national_literacy_average],
        }
    )
    charts = {
        "gender_distribution": to_vega_spec(gender_pie(city.male_population, city.female_population)),
        "literacy_comparison": to_vega_spec(
            labelled_bar(
                literacy_df,
                x="label",
                y="literacy_rate",
                title="Literacy Rate Comparison",
                y_title="Literacy Rate (%)",
            )
        ),
        "density_trend": to_vega_spec(
            trend_line(
                density_trend(city, settings),
                x="year",
                y="density",
                title="Population Density Trend",
                y_title="Population Density (per km²)",
            )
        ),
    }

    return {
        "city": {
            "id": city.id,
            "name": city.name,
            "state": city.state,
            "region": city.region,
            "total_population": city.total_population,
            "male_population": city.male_population,
            "female_population": city.female_population,
            "area": city.area,
            "population_density": city.population_density,
            "literacy_rate": city.literacy_rate,
            "established_year": city.established_year,
        },
        "gender": {"male_pct": male_pct, "female_pct": female_pct},
        "population_growth_pct": round_half_up((city.population_growth or 0) * 100, 1),
        "urban_area": city.urban_area or "N/A",
        "literacy_vs_national": round_half_up(city.literacy_rate - settings.national_literacy_average, 2),
        "charts": charts,
    }
