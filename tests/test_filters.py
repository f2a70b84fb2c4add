import pytest

from city_core.filters import (
    CityQuery,
    ExplorerSettings,
    InvalidSortDirectionError,
    InvalidSortKeyError,
    SortDirection,
    SortKey,
    normalize_query,
    normalize_settings,
    parse_sort_key,
    query_to_dict,
)


def test_normalize_query_defaults():
    q = normalize_query({})
    assert q == CityQuery()
    assert q.sort_key is SortKey.POPULATION
    assert q.sort_direction is SortDirection.DESC


def test_normalize_query_strips_and_maps_none_to_empty():
    q = normalize_query({"search_term": "  mum ", "state_filter": None, "region_filter": " West "})
    assert q.search_term == "mum"
    assert q.state_filter == ""
    assert q.region_filter == "West"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("population", SortKey.POPULATION),
        ("totalPopulation", SortKey.POPULATION),
        ("literacyRate", SortKey.LITERACY_RATE),
        ("populationDensity", SortKey.DENSITY),
        ("density", SortKey.DENSITY),
        ("name", SortKey.NAME),
        (SortKey.AREA, SortKey.AREA),
    ],
)
def test_parse_sort_key_accepts_aliases(raw, expected):
    assert parse_sort_key(raw) is expected


def test_unknown_sort_key_fails_fast():
    with pytest.raises(InvalidSortKeyError):
        normalize_query({"sort_key": "establishedYear"})


def test_unknown_sort_direction_fails_fast():
    with pytest.raises(InvalidSortDirectionError):
        normalize_query({"sort_direction": "sideways"})


def test_sort_direction_aliases_and_toggle():
    q = normalize_query({"sort_direction": "Ascending"})
    assert q.sort_direction is SortDirection.ASC
    assert q.sort_direction.toggled() is SortDirection.DESC


def test_query_to_dict_uses_wire_values():
    q = CityQuery(search_term="x", sort_key=SortKey.LITERACY_RATE, sort_direction=SortDirection.ASC)
    assert query_to_dict(q) == {
        "search_term": "x",
        "state_filter": "",
        "region_filter": "",
        "sort_key": "literacy_rate",
        "sort_direction": "asc",
    }


def test_normalize_settings_clamps_and_falls_back():
    assert normalize_settings() == ExplorerSettings()
    assert normalize_settings({"comparison_top_n": 500}).comparison_top_n == 50
    assert normalize_settings({"comparison_top_n": 0}).comparison_top_n == 1
    assert normalize_settings({"comparison_top_n": "abc"}).comparison_top_n == 5
    assert normalize_settings({"national_literacy_average": "n/a"}).national_literacy_average == 77.7
