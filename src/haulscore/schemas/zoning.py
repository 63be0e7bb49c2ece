"""Pydantic request/response models for expansion opportunity endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PortfolioRequest


class OpportunityRequest(PortfolioRequest):
    min_roi_percent: Optional[float] = Field(
        default=None, description="Minimum potential ROI; the configured default applies when omitted."
    )
    grid_divisions: int = Field(25, description="Grid cells per degree of latitude/longitude.")
    min_members: int = Field(3, ge=1, description="Subscriptions a cell needs to be considered.")

    @field_validator("grid_divisions")
    @classmethod
    def validate_grid_divisions(cls, value: int) -> int:
        if value < 1:
            raise ValueError("grid_divisions must be >= 1")
        return value


class OpportunityZoneModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    center_lat: float
    center_lng: float
    member_count: int
    member_ids: List[str]
    avg_revenue: float
    avg_distance_from_depot: float
    potential_roi_percent: float
    nearby_hoa_count: int
    nearby_hoa_ids: List[str]
    risk_level: str
    reasoning: str


class OpportunityResponse(BaseModel):
    opportunities: List[OpportunityZoneModel]
    counts_by_risk: dict[str, int]
    metadata: dict
