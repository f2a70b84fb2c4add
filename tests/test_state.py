import pytest

from city_core import state as ui
from city_core.filters import CityQuery, InvalidSortKeyError, SortDirection, SortKey


def test_default_state_projects_to_default_query():
    assert ui.DashboardState().to_query() == CityQuery()


def test_transitions_return_new_values():
    start = ui.DashboardState()
    after = ui.with_search(start, "pune")
    assert after.search_term == "pune"
    assert start.search_term == ""


def test_filters_map_none_to_empty():
    s = ui.with_state_filter(ui.DashboardState(state_filter="Delhi"), None)
    s = ui.with_region_filter(s, None)
    assert s.state_filter == ""
    assert s.region_filter == ""


def test_sort_transitions():
    s = ui.with_sort_key(ui.DashboardState(), "literacyRate")
    assert s.sort_key is SortKey.LITERACY_RATE
    s = ui.toggle_sort_direction(s)
    assert s.sort_direction is SortDirection.ASC
    s = ui.with_sort_direction(s, "descending")
    assert s.sort_direction is SortDirection.DESC
    with pytest.raises(InvalidSortKeyError):
        ui.with_sort_key(s, "established_year")


def test_city_selection_and_dark_mode():
    s = ui.open_city(ui.DashboardState(), 3)
    assert s.selected_city_id == 3 and s.detail_open
    s = ui.close_city(s)
    assert s.selected_city_id is None and not s.detail_open
    assert ui.toggle_dark_mode(s).dark_mode is True


def test_selection_does_not_change_query():
    s = ui.with_search(ui.DashboardState(), "mum")
    assert ui.open_city(s, 1).to_query() == s.to_query()


def test_toggle_twice_restores_direction():
    start = ui.DashboardState()
    assert ui.toggle_sort_direction(ui.toggle_sort_direction(start)) == start
