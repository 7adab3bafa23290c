"""Bike search request/response schemas."""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bikefit.search import SearchCriteria, records_from_rows


class CriteriaModel(BaseModel):
    """Search criteria as posted by the bike search tool."""

    model_config = ConfigDict(populate_by_name=True)

    reach_target: float = Field(..., alias="reachTarget")
    stack_target: float = Field(..., alias="stackTarget")
    reach_range: float = Field(5.0, alias="reachRange")
    stack_range: float = Field(5.0, alias="stackRange")
    brand_filter: list[str] = Field(default_factory=list, alias="brandFilter")
    material_filter: list[str] = Field(default_factory=list, alias="materialFilter")
    style_filter: Optional[str] = Field(None, alias="styleFilter")
    sr_ratio_min: Optional[float] = Field(None, alias="srRatioMin")
    sr_ratio_max: Optional[float] = Field(None, alias="srRatioMax")
    sta_min: Optional[float] = Field(None, alias="staMin")
    sta_max: Optional[float] = Field(None, alias="staMax")

    def to_criteria(self) -> SearchCriteria:
        return SearchCriteria(
            reach_target=self.reach_target,
            stack_target=self.stack_target,
            reach_range=self.reach_range,
            stack_range=self.stack_range,
            brand_filter=frozenset(self.brand_filter),
            material_filter=frozenset(self.material_filter),
            style_filter=self.style_filter or None,
            sr_ratio_min=_or(self.sr_ratio_min, -math.inf),
            sr_ratio_max=_or(self.sr_ratio_max, math.inf),
            sta_min=_or(self.sta_min, -math.inf),
            sta_max=_or(self.sta_max, math.inf),
        )


class DatasetModel(BaseModel):
    """A bike dataset as records or as raw sheet rows (header row first)."""

    bikes: Optional[list[dict[str, Any]]] = None
    values: Optional[list[list[Any]]] = None

    @model_validator(mode="after")
    def require_one_source(self) -> "DatasetModel":
        if self.bikes is None and self.values is None:
            raise ValueError("either bikes or values must be provided")
        return self

    def records(self) -> list[dict[str, Any]]:
        if self.bikes is not None:
            return self.bikes
        return records_from_rows(self.values or [])


class SearchRequest(DatasetModel):
    model_config = ConfigDict(populate_by_name=True)

    criteria: CriteriaModel
    sort_column: Optional[str] = Field(None, alias="sortColumn")
    sort_descending: bool = Field(False, alias="sortDescending")


class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    matches: list[dict[str, Any]]
    total_matches: int = Field(..., serialization_alias="totalMatches")
    displayed: int
    warnings: list[str] = Field(default_factory=list)


class SummaryResponse(BaseModel):
    bounds: dict[str, Optional[dict[str, Any]]]
    options: dict[str, list[str]]


def _or(value: Optional[float], default: float) -> float:
    return default if value is None else value
