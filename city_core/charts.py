from __future__ import annotations

from typing import Any, Dict, List, Optional

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

MALE_COLOR = "#3B82F6"
FEMALE_COLOR = "#EC4899"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def population_bar(df: pd.DataFrame, *, title: str, color: str = "#4BC0C0") -> alt.Chart:
    hover = alt.selection_point(fields=["name"], on="mouseover", empty="all")
    return (
        alt.Chart(df, title=title)
        .mark_bar(color=color)
        .encode(
            x=alt.X("name:N", title="Cities", sort=None, axis=alt.Axis(labelAngle=-45)),
            y=alt.Y("total_population:Q", title="Population", axis=alt.Axis(format="~s", gridDash=[4, 4])),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.5)),
            tooltip=[
                alt.Tooltip("name:N", title="City"),
                alt.Tooltip("total_population:Q", title="Population", format=","),
            ],
        )
        .add_params(hover)
    )


def gender_grouped_bar(df: pd.DataFrame, *, title: str) -> alt.Chart:
    long_df = df.melt(
        id_vars=["name"],
        value_vars=["male_population", "female_population"],
        var_name="gender",
        value_name="population",
    )
    long_df["gender"] = long_df["gender"].map({"male_population": "Male", "female_population": "Female"})
    order: List[str] = df["name"].tolist()
    return (
        alt.Chart(long_df, title=title)
        .mark_bar()
        .encode(
            x=alt.X("name:N", title="Cities", sort=order, axis=alt.Axis(labelAngle=-45)),
            xOffset=alt.XOffset("gender:N", sort=["Male", "Female"]),
            y=alt.Y("population:Q", title="Population", axis=alt.Axis(format="~s", gridDash=[4, 4])),
            color=alt.Color(
                "gender:N",
                title="Gender",
                scale=alt.Scale(domain=["Male", "Female"], range=[MALE_COLOR, FEMALE_COLOR]),
            ),
            tooltip=[
                alt.Tooltip("name:N", title="City"),
                alt.Tooltip("gender:N", title="Gender"),
                alt.Tooltip("population:Q", title="Population", format=","),
            ],
        )
    )


def gender_pie(male: int, female: int, *, title: Optional[str] = None) -> alt.Chart:
    df = pd.DataFrame({"gender": ["Male", "Female"], "population": [male, female]})
    return (
        alt.Chart(df, title=title or "Population Distribution")
        .mark_arc()
        .encode(
            theta=alt.Theta("population:Q"),
            color=alt.Color(
                "gender:N",
                title="Gender",
                scale=alt.Scale(domain=["Male", "Female"], range=[MALE_COLOR, FEMALE_COLOR]),
            ),
            tooltip=[alt.Tooltip("gender:N"), alt.Tooltip("population:Q", format=",")],
        )
    )


def labelled_bar(df: pd.DataFrame, *, x: str, y: str, title: str, y_title: str, y_format: str = ",.1f") -> alt.Chart:
    return (
        alt.Chart(df, title=title)
        .mark_bar()
        .encode(
            x=alt.X(f"{x}:N", title=None, sort=None, axis=alt.Axis(labelAngle=0)),
            y=alt.Y(f"{y}:Q", title=y_title, axis=alt.Axis(gridDash=[4, 4])),
            color=alt.Color(f"{x}:N", legend=None),
            tooltip=[alt.Tooltip(f"{x}:N", title="Label"), alt.Tooltip(f"{y}:Q", title=y_title, format=y_format)],
        )
    )


def trend_line(df: pd.DataFrame, *, x: str, y: str, title: str, y_title: str, color: str = "#10B981") -> alt.Chart:
    return (
        alt.Chart(df, title=title)
        .mark_line(point={"filled": True}, color=color)
        .encode(
            x=alt.X(f"{x}:O", title=None, sort=None, axis=alt.Axis(grid=False, labelAngle=0)),
            y=alt.Y(f"{y}:Q", title=y_title, axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            tooltip=[alt.Tooltip(f"{x}:O", title="Label"), alt.Tooltip(f"{y}:Q", title=y_title, format=",.1f")],
        )
    )
