from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from city_core.charts import gender_grouped_bar, labelled_bar, population_bar, to_vega_spec, trend_line
from city_core.data import CityDataset, CityRecord, cities_frame, round_half_up
from city_core.filters import ExplorerSettings, SortDirection, SortKey
from city_core.query import sort_cities, top_n_by_population


def city_profile(city: CityRecord) -> pd.DataFrame:
    # Scaled so the four measures share one axis.
    return pd.DataFrame(
        {
            "metric": ["Population", "Literacy Rate", "Density", "Growth Rate"],
            "value": [
                city.total_population / 1_000_000,
                city.literacy_rate,
                city.population_density / 1000,
                (city.population_growth or 0) * 100,
            ],
        }
    )


def compute_comparison(
    dataset: CityDataset,
    selected: CityRecord,
    settings: Optional[ExplorerSettings] = None,
) -> Dict[str, Any]:
    settings = settings or ExplorerSettings()
    top = top_n_by_population(dataset.all(), settings.comparison_top_n)
    top_df = cities_frame(top)
    top_df["growth_pct"] = top_df["population_growth"].fillna(0).astype(float) * 100

    charts = {
        "population": to_vega_spec(population_bar(top_df, title="City Comparison", color="#35A2EB")),
        "growth": to_vega_spec(
            trend_line(
                top_df,
                x="name",
                y="growth_pct",
                title="Population Growth Rate (%)",
                y_title="Growth Rate (%)",
                color="#4BC0C0",
            )
        ),
        "profile": to_vega_spec(
            labelled_bar(
                city_profile(selected),
                x="metric",
                y="value",
                title=f"{selected.name} Profile",
                y_title="Scaled value",
                y_format=",.2f",
            )
        ),
    }
    return {
        "selected_id": selected.id,
        "top_n": settings.comparison_top_n,
        "top_cities": [
            {
                "id": c.id,
                "name": c.name,
                "total_population": c.total_population,
                "population_growth_pct": round_half_up((c.population_growth or 0) * 100, 1),
            }
            for c in top
        ],
        "selected_in_top": any(c.id == selected.id for c in top),
        "charts": charts,
    }


def compute_population_breakdown(dataset: CityDataset) -> Dict[str, Any]:
    ordered = sort_cities(dataset.all(), SortKey.POPULATION, SortDirection.DESC)
    df = cities_frame(ordered)
    if df.empty:
        return {"cities": [], "charts": {}}
    return {
        "cities": df[["id", "name", "total_population", "male_population", "female_population"]].to_dict(
            orient="records"
        ),
        "charts": {
            "total_population": to_vega_spec(population_bar(df, title="Total Population Distribution")),
            "gender_distribution": to_vega_spec(gender_grouped_bar(df, title="Gender Distribution")),
        },
    }
