"""Pricing and serviceability value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

RouteDensity = Literal["High", "Medium", "Low"]
PricingRecommendation = Literal["Accept", "Borderline", "Decline"]


@dataclass(slots=True)
class PricingFactors:
    route_density: RouteDensity
    nearest_distance_miles: float
    customers_within_500ft: int
    customers_within_1000ft: int
    number_of_carts: int = 1


@dataclass(slots=True)
class PricingDecision:
    suggested_price: float
    recommendation: PricingRecommendation
    serviceability_score: int
    route_density: RouteDensity
    tier_description: str


@dataclass(slots=True)
class ServiceabilityAssessment:
    """Pricing decision for a prospective stop plus the neighbourhood it was derived from."""

    latitude: float
    longitude: float
    factors: PricingFactors
    decision: PricingDecision
    nearest_customer_id: Optional[str]
    nearest_customer_distance: str
