from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ViewFiltersModel(BaseModel):
    city: str = ""
    sort: str = "approvalHigh"
    language: str = "en"
    thresholds_version: str = "v1"
    animate: bool = True


class RingRequestModel(BaseModel):
    percentage: float
    size: float = Field(default=180, gt=0)
    stroke_width: float = Field(default=20, ge=0)
    reference_mark_percentage: Optional[float] = None
    color: Optional[str] = None
    thresholds_version: str = "v1"
    animate: bool = True
    title: str = ""


class SortOption(BaseModel):
    value: str
    label: str


class MetaSortOptionsResponse(BaseModel):
    options: List[SortOption]


class MetaListResponse(BaseModel):
    values: List[str]
