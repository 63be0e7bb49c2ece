"""Pricing API schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import CustomerModel


class PricingQuoteRequest(BaseModel):
    route_density: Literal["High", "Medium", "Low"]
    nearest_distance_miles: float = Field(0.0, ge=0.0)
    customers_within_500ft: int = Field(0, ge=0)
    customers_within_1000ft: int = Field(0, ge=0)
    number_of_carts: int = Field(1, ge=1)


class PricingDecisionModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    suggested_price: float
    recommendation: str
    serviceability_score: int
    route_density: str
    tier_description: str


class ServiceabilityRequest(BaseModel):
    latitude: float
    longitude: float
    number_of_carts: int = Field(1, ge=1)
    customers: Optional[List[CustomerModel]] = Field(
        default=None, description="Existing customers; the configured export is used when omitted."
    )


class PricingFactorsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    route_density: str
    nearest_distance_miles: float
    customers_within_500ft: int
    customers_within_1000ft: int
    number_of_carts: int


class ServiceabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    latitude: float
    longitude: float
    factors: PricingFactorsModel
    decision: PricingDecisionModel
    nearest_customer_id: Optional[str] = None
    nearest_customer_distance: str
