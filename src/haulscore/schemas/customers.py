"""Customer economics API schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .common import PortfolioRequest


class _AttributesModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CostBreakdownModel(_AttributesModel):
    distance_miles: float
    service_minutes: float
    fuel_cost: float
    labor_cost: float
    total_cost: float


class VisitCostModel(_AttributesModel):
    distance_miles: float
    service_hours: float
    travel_hours: float
    labor_cost: float
    fuel_cost: float
    total_cost: float


class ProfitabilityModel(_AttributesModel):
    customer_id: str
    monthly_revenue: float
    revenue_per_minute: float
    profit_margin_percent: float
    monthly_profit: float
    tier: str
    risk_flags: List[str]
    is_viable: bool
    in_service_zone: bool
    service_zone: Optional[str] = None
    distance_to_depot_miles: float
    distance_to_nearest_landfill_miles: float
    cost: CostBreakdownModel


class CustomerScoreModel(_AttributesModel):
    customer_id: str
    revenue_per_minute: float
    distance_from_depot_miles: float
    profitability_score: int
    risk_level: str
    is_red_flag: bool


class PortfolioSummaryModel(_AttributesModel):
    customer_count: int
    viable_count: int
    total_monthly_revenue: float
    average_revenue_per_minute: float
    average_margin_percent: float
    tier_counts: dict[str, int]


class CustomerScoresResponse(BaseModel):
    results: List[ProfitabilityModel]
    strategic_scores: List[CustomerScoreModel]
    summary: PortfolioSummaryModel


class RiskReportRequest(PortfolioRequest):
    sort_by: Literal["risk", "revenue", "distance"] = "risk"


class RiskAssessmentModel(_AttributesModel):
    customer_id: str
    revenue_per_minute: float
    distance_from_depot_miles: float
    distance_to_nearest_landfill_miles: float
    risk_score: int
    recommended_action: str
    reason: str


class RiskReportResponse(BaseModel):
    items: List[RiskAssessmentModel]
    total: int
    counts_by_action: dict[str, int]


class CostAnalysisModel(_AttributesModel):
    customer_id: str
    monthly_revenue: float
    service_minutes: float
    visits_per_month: int
    visit: VisitCostModel
    monthly_cost: float
    monthly_profit: float
    profit_margin_percent: float
    revenue_per_minute: float
    rating: str


class CostAnalysisResponse(BaseModel):
    items: List[CostAnalysisModel]
    total_monthly_cost: float
    total_monthly_profit: float
