from __future__ import annotations

import pytest

from city_core.data import CityDataset, CityRecord


def make_city(**overrides) -> CityRecord:
    base = dict(
        id=1,
        name="Mumbai",
        state="Maharashtra",
        region="West",
        total_population=20_000_000,
        male_population=10_500_000,
        female_population=9_500_000,
        area=603.4,
        population_density=33_145.5,
        literacy_rate=89.7,
        established_year=1507,
        population_growth=0.04,
        urban_area="Mumbai Metropolitan Region",
    )
    base.update(overrides)
    return CityRecord(**base)


@pytest.fixture
def two_cities() -> CityDataset:
    return CityDataset(
        [
            make_city(),
            make_city(
                id=2,
                name="Delhi",
                state="Delhi",
                region="North",
                total_population=19_000_000,
                male_population=10_000_000,
                female_population=9_000_000,
                area=1484.0,
                population_density=12_803.2,
                literacy_rate=86.2,
                established_year=736,
                population_growth=None,
                urban_area=None,
            ),
        ]
    )


@pytest.fixture
def sample_cities() -> CityDataset:
    return CityDataset(
        [
            make_city(id=1, name="Pune", state="Maharashtra", region="West", total_population=3_000_000,
                      male_population=1_600_000, female_population=1_400_000, area=331.3, literacy_rate=89.5,
                      population_density=9_000.0),
            make_city(id=2, name="agra", state="Uttar Pradesh", region="North", total_population=1_500_000,
                      male_population=800_000, female_population=700_000, area=188.4, literacy_rate=73.1,
                      population_density=8_400.0, population_growth=None),
            make_city(id=3, name="Nagpur", state="Maharashtra", region="Central", total_population=2_400_000,
                      male_population=1_200_000, female_population=1_200_000, area=217.6, literacy_rate=91.9,
                      population_density=11_000.0),
            make_city(id=4, name="Kanpur", state="Uttar Pradesh", region="North", total_population=3_000_000,
                      male_population=1_550_000, female_population=1_450_000, area=403.7, literacy_rate=84.1,
                      population_density=6_800.0),
            make_city(id=5, name="Kochi", state="Kerala", region="South", total_population=600_000,
                      male_population=297_000, female_population=303_000, area=94.9, literacy_rate=97.4,
                      population_density=6_300.0),
        ]
    )


@pytest.fixture
def city_factory():
    return make_city
