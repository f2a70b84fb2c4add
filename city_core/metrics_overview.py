from __future__ import annotations

from typing import Any, Dict

from city_core.aggregates import summarize_cities, summary_tiles
from city_core.data import CityDataset, CityRecord, round_half_up
from city_core.filters import CityQuery, query_to_dict
from city_core.metrics_detail import gender_split
from city_core.query import run_query


def city_row(city: CityRecord) -> Dict[str, Any]:
    male_pct, female_pct = gender_split(city)
    return {
        "rank": city.id,
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
        "population_growth": city.population_growth,
        "population_growth_pct": round_half_up((city.population_growth or 0) * 100, 1),
        "urban_area": city.urban_area,
        "male_pct": male_pct,
        "female_pct": female_pct,
    }


def compute_overview(dataset: CityDataset, query: CityQuery) -> Dict[str, Any]:
    result = run_query(dataset, query)
    overall = summarize_cities(dataset.all())
    return {
        "query": query_to_dict(query),
        "showing": len(result.cities),
        "total": result.total_count,
        "no_matches": result.is_empty,
        "summary": result.summary.to_dict(),
        "tiles": summary_tiles(result.summary),
        "overall_summary": overall.to_dict(),
        "cities": [city_row(c) for c in result.cities],
    }
