"""RFP parsing, bid evaluation and fleet feasibility."""

from .evaluator import (
    bid_recommendation,
    classify_proximity,
    comparable_baseline,
    evaluate_bid,
    strategic_fit,
)
from .fleet import (
    current_utilization_percent,
    fleet_feasibility,
    routing_impact,
    service_compatibility,
    service_days_per_week,
)
from .models import BidAnalysis, BidRequirements, ComparableBaseline, FleetFeasibility
from .parser import parse_rfp_text

__all__ = [
    "parse_rfp_text",
    "classify_proximity",
    "comparable_baseline",
    "strategic_fit",
    "bid_recommendation",
    "evaluate_bid",
    "service_days_per_week",
    "current_utilization_percent",
    "routing_impact",
    "service_compatibility",
    "fleet_feasibility",
    "BidRequirements",
    "BidAnalysis",
    "ComparableBaseline",
    "FleetFeasibility",
]
