from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class InvalidSortKeyError(ValueError):
    pass


class InvalidSortDirectionError(ValueError):
    pass


class SortKey(str, Enum):
    POPULATION = "population"
    AREA = "area"
    LITERACY_RATE = "literacy_rate"
    DENSITY = "density"
    NAME = "name"

    @property
    def label(self) -> str:
        return SORT_KEY_LABELS[self]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


SORT_KEY_LABELS = {
    SortKey.POPULATION: "Population",
    SortKey.AREA: "Area",
    SortKey.LITERACY_RATE: "Literacy Rate",
    SortKey.DENSITY: "Density",
    SortKey.NAME: "Name",
}

# Field names used by the browser front end map onto the same keys.
SORT_KEY_ALIASES = {
    "totalpopulation": SortKey.POPULATION,
    "total_population": SortKey.POPULATION,
    "literacyrate": SortKey.LITERACY_RATE,
    "literacy": SortKey.LITERACY_RATE,
    "populationdensity": SortKey.DENSITY,
    "population_density": SortKey.DENSITY,
}

SORT_DIRECTION_ALIASES = {
    "ascending": SortDirection.ASC,
    "descending": SortDirection.DESC,
}


@dataclass(frozen=True)
class ExplorerSettings:
    comparison_top_n: int = 5
    national_literacy_average: float = 77.7
    density_trend_years: Tuple[str, ...] = ("2011", "2015", "2020", "2024")
    density_trend_factors: Tuple[float, ...] = (0.8, 0.9, 0.95, 1.0)


@dataclass(frozen=True)
class CityQuery:
    search_term: str = ""
    state_filter: str = ""
    region_filter: str = ""
    sort_key: SortKey = SortKey.POPULATION
    sort_direction: SortDirection = SortDirection.DESC


def parse_sort_key(value: object) -> SortKey:
    if isinstance(value, SortKey):
        return value
    token = str(value or "").strip()
    try:
        return SortKey(token)
    except ValueError:
        pass
    alias = SORT_KEY_ALIASES.get(token.lower())
    if alias is None:
        raise InvalidSortKeyError(f"Unknown sort key: {value!r}")
    return alias


def parse_sort_direction(value: object) -> SortDirection:
    if isinstance(value, SortDirection):
        return value
    token = str(value or "").strip().lower()
    try:
        return SortDirection(token)
    except ValueError:
        pass
    alias = SORT_DIRECTION_ALIASES.get(token)
    if alias is None:
        raise InvalidSortDirectionError(f"Unknown sort direction: {value!r}")
    return alias


def _clean_text(value: Optional[object]) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_query(raw: dict) -> CityQuery:
    """Build a CityQuery from loosely-typed UI/API input.

    Missing keys fall back to the dashboard defaults (population, descending).
    Unknown sort keys or directions raise instead of degrading to an
    unsorted result.
    """
    sort_key = raw.get("sort_key")
    sort_direction = raw.get("sort_direction")
    return CityQuery(
        search_term=_clean_text(raw.get("search_term")),
        state_filter=_clean_text(raw.get("state_filter")),
        region_filter=_clean_text(raw.get("region_filter")),
        sort_key=parse_sort_key(sort_key) if sort_key not in (None, "") else SortKey.POPULATION,
        sort_direction=(
            parse_sort_direction(sort_direction) if sort_direction not in (None, "") else SortDirection.DESC
        ),
    )


def normalize_settings(raw: Optional[dict] = None) -> ExplorerSettings:
    raw = raw or {}
    defaults = ExplorerSettings()

    top_n = raw.get("comparison_top_n", defaults.comparison_top_n)
    try:
        top_n = int(top_n)
    except (TypeError, ValueError):
        top_n = defaults.comparison_top_n
    top_n = max(1, min(50, top_n))

    national = raw.get("national_literacy_average", defaults.national_literacy_average)
    try:
        national = float(national)
    except (TypeError, ValueError):
        national = defaults.national_literacy_average

    return ExplorerSettings(
        comparison_top_n=top_n,
        national_literacy_average=national,
        density_trend_years=defaults.density_trend_years,
        density_trend_factors=defaults.density_trend_factors,
    )


def query_to_dict(query: CityQuery) -> dict:
    return {
        "search_term": query.search_term,
        "state_filter": query.state_filter,
        "region_filter": query.region_filter,
        "sort_key": query.sort_key.value,
        "sort_direction": query.sort_direction.value,
    }
