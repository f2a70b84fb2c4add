import math

from city_core.aggregates import summarize_cities, summary_tiles


def test_summary_over_full_dataset(sample_cities):
    summary = summarize_cities(sample_cities.all())
    assert summary.count == 5
    assert summary.total_population == sum(c.total_population for c in sample_cities.all())
    assert math.isclose(summary.total_area, sum(c.area for c in sample_cities.all()))
    assert math.isclose(summary.average_literacy_rate, (89.5 + 73.1 + 91.9 + 84.1 + 97.4) / 5)
    assert math.isclose(summary.average_density, (9_000 + 8_400 + 11_000 + 6_800 + 6_300) / 5)


def test_summary_over_empty_subset_has_undefined_means():
    summary = summarize_cities([])
    assert summary.count == 0
    assert summary.total_population == 0
    assert summary.total_area == 0
    assert summary.average_literacy_rate is None
    assert summary.average_density is None


def test_summary_accepts_generators(two_cities):
    summary = summarize_cities(c for c in two_cities.all() if c.region == "North")
    assert summary.count == 1
    assert summary.total_population == 19_000_000


def test_summary_tiles_show_dash_for_empty_subset():
    tiles = {t["key"]: t["value"] for t in summary_tiles(summarize_cities([]))}
    assert tiles["total_population"] == "0"
    assert tiles["total_area"] == "0 km²"
    assert tiles["average_literacy_rate"] == "—"
    assert tiles["average_density"] == "—"
