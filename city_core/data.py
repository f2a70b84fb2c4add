from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "datasets"
CITIES_CSV = DATA_DIR / "cities.csv"

REGIONS = ("North", "South", "East", "West", "Central", "Northeast")

INT_COLUMNS = ["id", "total_population", "male_population", "female_population", "established_year"]
FLOAT_COLUMNS = ["area", "population_density", "literacy_rate", "population_growth"]
STR_COLUMNS = ["name", "state", "region", "urban_area"]


class DatasetIntegrityError(ValueError):
    pass


class CityNotFoundError(KeyError):
    pass


@dataclass(frozen=True)
class CityRecord:
    id: int
    name: str
    state: str
    region: str
    total_population: int
    male_population: int
    female_population: int
    area: float
    population_density: float
    literacy_rate: float
    established_year: int
    population_growth: Optional[float] = None
    urban_area: Optional[str] = None


def _optional_float(value: object) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _optional_str(value: object) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    s = str(value).strip()
    return s or None


def numericize(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def coerce_str_safe(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            series = df[col].astype("string").str.strip()
            df[col] = series.replace({"nan": pd.NA, "None": pd.NA, "": pd.NA})
    return df


def records_from_frame(df: pd.DataFrame) -> List[CityRecord]:
    missing = [c for c in INT_COLUMNS + FLOAT_COLUMNS + STR_COLUMNS if c not in df.columns]
    if missing:
        raise DatasetIntegrityError(f"City data is missing columns: {', '.join(missing)}")

    df = numericize(df.copy(), INT_COLUMNS + FLOAT_COLUMNS)
    df = coerce_str_safe(df, STR_COLUMNS)
    required = [c for c in INT_COLUMNS + FLOAT_COLUMNS + STR_COLUMNS if c not in {"population_growth", "urban_area"}]
    bad_rows = df[df[required].isna().any(axis=1)]
    if not bad_rows.empty:
        raise DatasetIntegrityError(f"City data has blank required values in rows: {bad_rows.index.tolist()}")

    records: List[CityRecord] = []
    for row in df.to_dict(orient="records"):
        records.append(
            CityRecord(
                id=int(row["id"]),
                name=str(row["name"]),
                state=str(row["state"]),
                region=str(row["region"]),
                total_population=int(row["total_population"]),
                male_population=int(row["male_population"]),
                female_population=int(row["female_population"]),
                area=float(row["area"]),
                population_density=float(row["population_density"]),
                literacy_rate=float(row["literacy_rate"]),
                established_year=int(row["established_year"]),
                population_growth=_optional_float(row["population_growth"]),
                urban_area=_optional_str(row["urban_area"]),
            )
        )
    return records


def validate_records(records: Sequence[CityRecord]) -> None:
    """Check the dataset preconditions the query engine relies on.

    Raises DatasetIntegrityError on duplicate ids, non-positive ids or
    populations, regions outside REGIONS, and male/female counts that do
    not add up to the total.
    """
    problems: List[str] = []
    dupes = sorted(i for i, n in Counter(r.id for r in records).items() if n > 1)
    if dupes:
        problems.append(f"duplicate ids {dupes}")
    for r in records:
        if r.id <= 0:
            problems.append(f"{r.name}: id must be positive (got {r.id})")
        if r.region not in REGIONS:
            problems.append(f"{r.name}: unknown region {r.region!r}")
        if r.total_population <= 0:
            problems.append(f"{r.name}: total population must be positive")
        elif r.male_population + r.female_population != r.total_population:
            problems.append(
                f"{r.name}: male + female ({r.male_population + r.female_population}) != total ({r.total_population})"
            )
    if problems:
        logger.error("City dataset failed validation: %s", "; ".join(problems))
        raise DatasetIntegrityError("; ".join(problems))


class CityDataset:
    """Immutable, ordered collection of city records."""

    def __init__(self, records: Iterable[CityRecord], *, validate: bool = True) -> None:
        self._records: Tuple[CityRecord, ...] = tuple(records)
        if validate:
            validate_records(self._records)
        self._by_id: Dict[int, CityRecord] = {r.id: r for r in self._records}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def all(self) -> Tuple[CityRecord, ...]:
        return self._records

    def distinct_states(self) -> List[str]:
        return sorted({r.state for r in self._records})

    def distinct_regions(self) -> List[str]:
        return sorted({r.region for r in self._records})

    def get(self, city_id: int) -> CityRecord:
        try:
            return self._by_id[int(city_id)]
        except KeyError:
            raise CityNotFoundError(city_id) from None

    def to_frame(self, records: Optional[Iterable[CityRecord]] = None) -> pd.DataFrame:
        return cities_frame(self._records if records is None else records)


def cities_frame(records: Iterable[CityRecord]) -> pd.DataFrame:
    rows = [asdict(r) for r in records]
    columns = list(CityRecord.__dataclass_fields__.keys())
    return pd.DataFrame(rows, columns=columns)


def load_cities_frame(path: Path = CITIES_CSV) -> pd.DataFrame:
    return pd.read_csv(path, dtype={"urban_area": "string"}, keep_default_na=True)


@lru_cache(maxsize=4)
def _load_dataset_cached(path_str: str, mtime: float) -> CityDataset:
    df = load_cities_frame(Path(path_str))
    dataset = CityDataset(records_from_frame(df))
    logger.info("Loaded %d cities from %s", len(dataset), path_str)
    return dataset


def load_dataset(path: Optional[Path] = None) -> CityDataset:
    path = Path(path) if path is not None else CITIES_CSV
    return _load_dataset_cached(str(path), path.stat().st_mtime)


# ---------- display helpers ----------
UNDEFINED_DISPLAY = "—"


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def format_int(value: object) -> str:
    if value is None or pd.isna(value):
        return UNDEFINED_DISPLAY
    return f"{round_half_up(value):,.0f}"


def format_area(value: object) -> str:
    if value is None or pd.isna(value):
        return UNDEFINED_DISPLAY
    return f"{float(value):,.2f}".rstrip("0").rstrip(".") + " km²"


def format_percent(value: object, decimals: int = 1) -> str:
    if value is None or pd.isna(value):
        return UNDEFINED_DISPLAY
    return f"{round_half_up(value, decimals):.{decimals}f}%"


def format_density(value: object) -> str:
    if value is None or pd.isna(value):
        return UNDEFINED_DISPLAY
    return f"{format_int(value)} /km²"
