from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SettingsModel(BaseModel):
    comparison_top_n: int = 5
    national_literacy_average: float = 77.7


class CityQueryModel(BaseModel):
    search_term: str = ""
    state_filter: Optional[str] = None
    region_filter: Optional[str] = None
    sort_key: str = "population"
    sort_direction: str = "desc"


class SummaryModel(BaseModel):
    count: int
    total_population: int
    total_area: float
    average_literacy_rate: Optional[float] = None
    average_density: Optional[float] = None


class MetaListResponse(BaseModel):
    values: List[str] = Field(default_factory=list)
