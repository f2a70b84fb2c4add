import pytest

from city_core.filters import CityQuery, ExplorerSettings, SortDirection, SortKey
from city_core.metrics_comparison import compute_comparison, compute_population_breakdown
from city_core.metrics_detail import compute_city_detail, density_trend, gender_split
from city_core.metrics_overview import compute_overview


def test_gender_split_rounds_to_one_decimal(city_factory):
    city = city_factory(total_population=3, male_population=2, female_population=1)
    assert gender_split(city) == (66.7, 33.3)


def test_gender_split_rounds_half_away_from_zero(city_factory):
    # 1049 / 2000 = 52.45%
    city = city_factory(total_population=2000, male_population=1049, female_population=951)
    assert gender_split(city) == (52.5, 47.6)


def test_gender_split_asserts_on_zero_total(city_factory):
    city = city_factory(total_population=0, male_population=0, female_population=0)
    with pytest.raises(AssertionError):
        gender_split(city)


def test_city_detail_payload(two_cities):
    delhi = two_cities.get(2)
    detail = compute_city_detail(delhi)
    assert detail["city"]["name"] == "Delhi"
    assert detail["gender"] == {"male_pct": 52.6, "female_pct": 47.4}
    assert detail["population_growth_pct"] == 0.0
    assert detail["urban_area"] == "N/A"
    assert set(detail["charts"]) == {"gender_distribution", "literacy_comparison", "density_trend"}
    mark = detail["charts"]["gender_distribution"]["mark"]
    assert (mark["type"] if isinstance(mark, dict) else mark) == "arc"


def test_density_trend_factors(city_factory):
    trend = density_trend(city_factory(population_density=1000.0), ExplorerSettings())
    assert trend["year"].tolist() == ["2011", "2015", "2020", "2024"]
    assert trend["density"].tolist() == pytest.approx([800.0, 900.0, 950.0, 1000.0])


def test_comparison_uses_top_five_by_population(sample_cities):
    selected = sample_cities.get(5)
    payload = compute_comparison(sample_cities, selected)
    assert [c["name"] for c in payload["top_cities"]] == ["Pune", "Kanpur", "Nagpur", "agra", "Kochi"]
    assert payload["selected_in_top"] is True
    assert set(payload["charts"]) == {"population", "growth", "profile"}


def test_comparison_respects_top_n_and_missing_growth(sample_cities):
    payload = compute_comparison(sample_cities, sample_cities.get(2), ExplorerSettings(comparison_top_n=2))
    assert [c["name"] for c in payload["top_cities"]] == ["Pune", "Kanpur"]
    assert payload["selected_in_top"] is False
    payload = compute_comparison(sample_cities, sample_cities.get(2))
    agra = next(c for c in payload["top_cities"] if c["name"] == "agra")
    assert agra["population_growth_pct"] == 0.0


def test_population_breakdown_sorted_descending(two_cities):
    payload = compute_population_breakdown(two_cities)
    assert [c["name"] for c in payload["cities"]] == ["Mumbai", "Delhi"]
    assert set(payload["charts"]) == {"total_population", "gender_distribution"}


def test_overview_scenario(two_cities):
    payload = compute_overview(two_cities, CityQuery(search_term="mum"))
    assert payload["showing"] == 1
    assert payload["total"] == 2
    assert payload["summary"]["total_population"] == 20_000_000
    assert payload["overall_summary"]["total_population"] == 39_000_000
    assert payload["cities"][0]["name"] == "Mumbai"
    assert payload["cities"][0]["male_pct"] == 52.5


def test_overview_no_matches(two_cities):
    payload = compute_overview(two_cities, CityQuery(state_filter="Karnataka"))
    assert payload["no_matches"] is True
    assert payload["cities"] == []
    assert payload["summary"]["average_literacy_rate"] is None
    assert payload["query"]["state_filter"] == "Karnataka"


def test_overview_order_follows_query(two_cities):
    payload = compute_overview(two_cities, CityQuery(sort_key=SortKey.NAME, sort_direction=SortDirection.ASC))
    assert [c["name"] for c in payload["cities"]] == ["Delhi", "Mumbai"]
