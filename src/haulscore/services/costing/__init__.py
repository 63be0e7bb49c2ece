"""Cost-to-serve models."""

from .model import mileage_time_cost, rfp_monthly_cost, visit_cost, visits_per_month
from .models import CostBreakdown, RFPCostBreakdown, VisitCostBreakdown

__all__ = [
    "mileage_time_cost",
    "visit_cost",
    "visits_per_month",
    "rfp_monthly_cost",
    "CostBreakdown",
    "VisitCostBreakdown",
    "RFPCostBreakdown",
]
