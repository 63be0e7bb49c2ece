"""Density-based pricing helpers."""

from .models import PricingDecision, PricingFactors, ServiceabilityAssessment
from .policy import (
    analyze_pricing,
    assess_serviceability,
    pricing_recommendation,
    pricing_tier_description,
    route_density,
    serviceability_score,
    suggested_price,
)

__all__ = [
    "PricingFactors",
    "PricingDecision",
    "ServiceabilityAssessment",
    "route_density",
    "suggested_price",
    "serviceability_score",
    "pricing_recommendation",
    "pricing_tier_description",
    "analyze_pricing",
    "assess_serviceability",
]
