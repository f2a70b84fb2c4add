import logging
from contextlib import contextmanager
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from city_core.data import CityDataset, format_area, format_density, format_int, format_percent, load_dataset
from city_core.filters import SORT_KEY_LABELS, ExplorerSettings, SortDirection, SortKey
from city_core.metrics_comparison import compute_comparison, compute_population_breakdown
from city_core.metrics_detail import compute_city_detail
from city_core.metrics_overview import compute_overview
from city_core import state as ui

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

ALL_STATES = "All States"
ALL_REGIONS = "All Regions"
STATE_KEY = "_dashboard_state"


# ---------- UI / layout helpers ----------
def inject_base_styles(dark_mode: bool = False):
    background = "#111827" if dark_mode else "#ffffff"
    text = "#f9fafb" if dark_mode else "#111827"
    border = "#374151" if dark_mode else "#e5e7eb"
    page = "#0b1120" if dark_mode else "#f8fafc"
    st.markdown(
        f"""
        <style>
        .stApp {{background: {page};color: {text};}}
        .card {{border: 1px solid {border};border-radius: 12px;padding: 16px;background: {background};
               color: {text};box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}}
        .card-header {{display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}}
        .card-title {{font-weight: 600;font-size: 1.0rem;}}
        .card-actions {{font-size: 0.9rem;color: #2563eb;}}
        .chip-row {{display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}}
        .chip {{background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}}
        .gender-bar {{height: 8px;border-radius: 4px;background: #e5e7eb;margin-bottom: 6px;}}
        .gender-fill {{height: 8px;border-radius: 4px;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, actions: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
            <div class="card-actions">{actions or ""}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(state: ui.DashboardState) -> str:
    chips = [
        f"Search: “{state.search_term}”" if state.search_term else "Search: none",
        f"State: {state.state_filter}" if state.state_filter else "State: All",
        f"Region: {state.region_filter}" if state.region_filter else "Region: All",
        f"Sort: {SORT_KEY_LABELS[state.sort_key]} ({state.sort_direction.value})",
    ]
    return "".join([f"<span class='chip'>{txt}</span>" for txt in chips])


def gender_bar_html(male_pct: float, female_pct: float) -> str:
    return (
        f"<div>Male {male_pct:.1f}%</div>"
        f"<div class='gender-bar'><div class='gender-fill' style='width:{male_pct}%;background:#3B82F6'></div></div>"
        f"<div>Female {female_pct:.1f}%</div>"
        f"<div class='gender-bar'><div class='gender-fill' style='width:{female_pct}%;background:#EC4899'></div></div>"
    )


def current_state() -> ui.DashboardState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = ui.DashboardState()
    return st.session_state[STATE_KEY]


def commit_state(new_state: ui.DashboardState):
    st.session_state[STATE_KEY] = new_state


# ---------- page sections ----------
def render_stat_tiles(overview: Dict):
    cols = st.columns(4)
    for col, tile in zip(cols, overview["tiles"]):
        col.metric(tile["title"], tile["value"])
    st.caption(f"Showing {overview['showing']} of {overview['total']} cities")


def render_breakdown(dataset: CityDataset):
    breakdown = compute_population_breakdown(dataset)
    charts = breakdown.get("charts", {})
    if not charts:
        return
    with card("Total Population by City"):
        st.vega_lite_chart(charts["total_population"], use_container_width=True)
    with card("Gender Distribution by City"):
        st.vega_lite_chart(charts["gender_distribution"], use_container_width=True)


def render_city_grid(rows: List[Dict], state: ui.DashboardState) -> ui.DashboardState:
    per_row = 4
    for start in range(0, len(rows), per_row):
        cols = st.columns(per_row)
        for col, row in zip(cols, rows[start : start + per_row]):
            with col:
                with card(row["name"], actions=row["region"]):
                    st.caption(row["state"])
                    st.write(f"**Population:** {format_int(row['total_population'])}")
                    st.write(f"**Area:** {format_area(row['area'])}")
                    st.write(f"**Literacy:** {format_percent(row['literacy_rate'], 2)}")
                    st.write(f"**Density:** {format_density(row['population_density'])}")
                    st.markdown(gender_bar_html(row["male_pct"], row["female_pct"]), unsafe_allow_html=True)
                    st.caption(f"Est. {row['established_year']} · Rank #{row['rank']}")
                    with st.expander("Show More"):
                        st.write(f"Population growth: {row['population_growth_pct']:.1f}%")
                        st.write(f"Urban area: {row['urban_area'] or 'N/A'}")
                    if st.button("Details", key=f"open_{row['id']}"):
                        state = ui.open_city(state, row["id"])
    return state


def render_city_detail(dataset: CityDataset, state: ui.DashboardState, settings: ExplorerSettings) -> ui.DashboardState:
    city = dataset.get(state.selected_city_id)
    detail = compute_city_detail(city, settings)
    comparison = compute_comparison(dataset, city, settings)

    st.markdown("---")
    header, close = st.columns([8, 1])
    header.subheader(f"{city.name}")
    header.caption(f"{city.state}, {city.region}")
    if close.button("Close", key="close_detail"):
        return ui.close_city(state)

    info = detail["city"]
    cols = st.columns(4)
    cols[0].metric("Total Population", format_int(info["total_population"]))
    cols[1].metric("Area", format_area(info["area"]))
    cols[2].metric("Literacy Rate", format_percent(info["literacy_rate"], 2))
    cols[3].metric("Density", format_density(info["population_density"]))

    with card("Gender Distribution"):
        st.markdown(gender_bar_html(detail["gender"]["male_pct"], detail["gender"]["female_pct"]), unsafe_allow_html=True)

    cols = st.columns(3)
    cols[0].metric("Established", str(info["established_year"]))
    cols[1].metric("Population Growth", f"{detail['population_growth_pct']:.1f}%")
    cols[2].metric("Urban Area", detail["urban_area"])

    chart_cols = st.columns(3)
    for col, key in zip(chart_cols, ["gender_distribution", "literacy_comparison", "density_trend"]):
        col.vega_lite_chart(detail["charts"][key], use_container_width=True)

    chart_cols = st.columns(3)
    for col, key in zip(chart_cols, ["population", "growth", "profile"]):
        col.vega_lite_chart(comparison["charts"][key], use_container_width=True)
    return state


# ---------- UI setup ----------
st.set_page_config(page_title="Top Cities in India", layout="wide")
dashboard_state = current_state()
st.title("Top Cities in India")
st.caption(
    "Explore demographic data and statistics for India's most populous cities: "
    "population distributions, literacy rates, and geographic information."
)

dataset = load_dataset()
settings = ExplorerSettings()

# ----- Sidebar: filters -----
with st.sidebar:
    st.markdown("### Filters")
    search_term = st.text_input("Search cities...", dashboard_state.search_term)
    dashboard_state = ui.with_search(dashboard_state, search_term)

    state_options = [ALL_STATES] + dataset.distinct_states()
    state_choice = st.selectbox(
        "State",
        state_options,
        index=state_options.index(dashboard_state.state_filter) if dashboard_state.state_filter in state_options else 0,
    )
    dashboard_state = ui.with_state_filter(dashboard_state, "" if state_choice == ALL_STATES else state_choice)

    region_options = [ALL_REGIONS] + dataset.distinct_regions()
    region_choice = st.selectbox(
        "Region",
        region_options,
        index=(
            region_options.index(dashboard_state.region_filter)
            if dashboard_state.region_filter in region_options
            else 0
        ),
    )
    dashboard_state = ui.with_region_filter(dashboard_state, "" if region_choice == ALL_REGIONS else region_choice)

    st.markdown("---")
    st.markdown("### Sort")
    sort_keys = list(SortKey)
    sort_choice = st.selectbox(
        "Sort by",
        sort_keys,
        index=sort_keys.index(dashboard_state.sort_key),
        format_func=lambda k: SORT_KEY_LABELS[k],
    )
    dashboard_state = ui.with_sort_key(dashboard_state, sort_choice)
    arrow = "↑ Ascending" if dashboard_state.sort_direction is SortDirection.ASC else "↓ Descending"
    if st.button(arrow):
        dashboard_state = ui.toggle_sort_direction(dashboard_state)

    st.markdown("---")
    if st.toggle("Dark mode", value=dashboard_state.dark_mode) != dashboard_state.dark_mode:
        dashboard_state = ui.toggle_dark_mode(dashboard_state)

inject_base_styles(dashboard_state.dark_mode)

overview = compute_overview(dataset, dashboard_state.to_query())
logger.debug("Rendering %d of %d cities", overview["showing"], overview["total"])

st.markdown(f"<div class='chip-row'>{format_filter_summary(dashboard_state)}</div>", unsafe_allow_html=True)
render_stat_tiles(overview)
render_breakdown(dataset)

if overview["no_matches"]:
    st.info("No cities found. Try adjusting your search criteria or filters to find more cities.")
else:
    dashboard_state = render_city_grid(overview["cities"], dashboard_state)
    with st.expander("Table view"):
        st.dataframe(pd.DataFrame(overview["cities"]), hide_index=True, use_container_width=True)

if dashboard_state.detail_open and dashboard_state.selected_city_id is not None:
    dashboard_state = render_city_detail(dataset, dashboard_state, settings)

commit_state(dashboard_state)
st.markdown("---")
st.caption("Data sourced from Government of India Census Reports")
