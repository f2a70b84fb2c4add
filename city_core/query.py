from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from city_core.aggregates import AggregateSummary, summarize_cities
from city_core.data import CityDataset, CityRecord
from city_core.filters import CityQuery, SortDirection, SortKey, parse_sort_direction, parse_sort_key


SortValue = Union[float, str]


def _numeric(value: Optional[float]) -> float:
    # Absent values sort as the numeric minimum.
    return 0.0 if value is None else float(value)


SORT_ACCESSORS: Dict[SortKey, Callable[[CityRecord], SortValue]] = {
    SortKey.POPULATION: lambda c: _numeric(c.total_population),
    SortKey.AREA: lambda c: _numeric(c.area),
    SortKey.LITERACY_RATE: lambda c: _numeric(c.literacy_rate),
    SortKey.DENSITY: lambda c: _numeric(c.population_density),
    SortKey.NAME: lambda c: c.name.lower(),
}


def sort_value(city: CityRecord, key: SortKey) -> SortValue:
    return SORT_ACCESSORS[parse_sort_key(key)](city)


def matches_query(city: CityRecord, query: CityQuery) -> bool:
    term = query.search_term.lower()
    if term and term not in city.name.lower() and term not in city.state.lower():
        return False
    if query.state_filter and city.state != query.state_filter:
        return False
    if query.region_filter and city.region != query.region_filter:
        return False
    return True


def filter_cities(cities: Iterable[CityRecord], query: CityQuery) -> List[CityRecord]:
    return [c for c in cities if matches_query(c, query)]


def compare_cities(a: CityRecord, b: CityRecord, key: SortKey, direction: SortDirection) -> int:
    key = parse_sort_key(key)
    av, bv = sort_value(a, key), sort_value(b, key)
    result = -1 if av < bv else (1 if av > bv else 0)
    return -result if parse_sort_direction(direction) is SortDirection.DESC else result


def sort_cities(cities: Iterable[CityRecord], key: SortKey, direction: SortDirection) -> List[CityRecord]:
    """Stable sort; equal keys keep their input order in both directions."""
    key = parse_sort_key(key)
    direction = parse_sort_direction(direction)
    return sorted(cities, key=cmp_to_key(lambda a, b: compare_cities(a, b, key, direction)))


def top_n_by_population(cities: Iterable[CityRecord], n: int = 5) -> List[CityRecord]:
    return sort_cities(cities, SortKey.POPULATION, SortDirection.DESC)[: max(0, int(n))]


@dataclass(frozen=True)
class QueryResult:
    cities: Tuple[CityRecord, ...]
    summary: AggregateSummary
    total_count: int

    @property
    def is_empty(self) -> bool:
        return not self.cities


def run_query(dataset: CityDataset, query: CityQuery) -> QueryResult:
    filtered = filter_cities(dataset.all(), query)
    ordered = sort_cities(filtered, query.sort_key, query.sort_direction)
    return QueryResult(cities=tuple(ordered), summary=summarize_cities(ordered), total_count=len(dataset))
