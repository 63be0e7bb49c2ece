"""Profitability and risk value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from ..costing.models import CostBreakdown, VisitCostBreakdown

RevenueTier = Literal["High", "Moderate", "Low"]
EfficiencyRating = Literal["excellent", "good", "fair", "poor"]
RiskLevel = Literal["low", "medium", "high"]
RiskAction = Literal["reprice", "phase-out", "bundle"]


@dataclass(slots=True)
class ProfitabilityResult:
    customer_id: str
    monthly_revenue: float
    revenue_per_minute: float
    profit_margin_percent: float
    monthly_profit: float
    tier: RevenueTier
    risk_flags: List[str]
    is_viable: bool
    in_service_zone: bool
    service_zone: Optional[str]
    distance_to_depot_miles: float
    distance_to_nearest_landfill_miles: float
    cost: CostBreakdown


@dataclass(slots=True)
class CustomerScore:
    """Composite 0-100 score shown on the strategic map."""

    customer_id: str
    revenue_per_minute: float
    distance_from_depot_miles: float
    profitability_score: int
    risk_level: RiskLevel
    is_red_flag: bool


@dataclass(slots=True)
class CostAnalysis:
    """Cost estimator row built on the detailed visit model."""

    customer_id: str
    monthly_revenue: float
    service_minutes: float
    visits_per_month: int
    visit: VisitCostBreakdown
    monthly_cost: float
    monthly_profit: float
    profit_margin_percent: float
    revenue_per_minute: float
    rating: EfficiencyRating


@dataclass(slots=True)
class RiskAssessment:
    customer_id: str
    revenue_per_minute: float
    distance_from_depot_miles: float
    distance_to_nearest_landfill_miles: float
    risk_score: int
    recommended_action: RiskAction
    reason: str


@dataclass(slots=True)
class PortfolioSummary:
    customer_count: int
    viable_count: int
    total_monthly_revenue: float
    average_revenue_per_minute: float
    average_margin_percent: float
    tier_counts: dict[str, int] = field(default_factory=dict)
