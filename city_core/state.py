from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from city_core.filters import CityQuery, SortDirection, SortKey, parse_sort_direction, parse_sort_key


@dataclass(frozen=True)
class DashboardState:
    """Everything the dashboard remembers between interactions.

    Each handler takes the current state and returns a new one; nothing is
    mutated in place, so a state value can be cached or compared freely.
    """

    search_term: str = ""
    state_filter: str = ""
    region_filter: str = ""
    sort_key: SortKey = SortKey.POPULATION
    sort_direction: SortDirection = SortDirection.DESC
    selected_city_id: Optional[int] = None
    detail_open: bool = False
    dark_mode: bool = False

    def to_query(self) -> CityQuery:
        return CityQuery(
            search_term=self.search_term,
            state_filter=self.state_filter,
            region_filter=self.region_filter,
            sort_key=self.sort_key,
            sort_direction=self.sort_direction,
        )


def with_search(state: DashboardState, term: Optional[str]) -> DashboardState:
    return replace(state, search_term=term or "")


def with_state_filter(state: DashboardState, value: Optional[str]) -> DashboardState:
    return replace(state, state_filter=value or "")


def with_region_filter(state: DashboardState, value: Optional[str]) -> DashboardState:
    return replace(state, region_filter=value or "")


def with_sort_key(state: DashboardState, key: object) -> DashboardState:
    return replace(state, sort_key=parse_sort_key(key))


def with_sort_direction(state: DashboardState, direction: object) -> DashboardState:
    return replace(state, sort_direction=parse_sort_direction(direction))


def toggle_sort_direction(state: DashboardState) -> DashboardState:
    return with_sort_direction(state, state.sort_direction.toggled())


def open_city(state: DashboardState, city_id: int) -> DashboardState:
    return replace(state, selected_city_id=int(city_id), detail_open=True)


def close_city(state: DashboardState) -> DashboardState:
    return replace(state, selected_city_id=None, detail_open=False)


def toggle_dark_mode(state: DashboardState) -> DashboardState:
    return replace(state, dark_mode=not state.dark_mode)
