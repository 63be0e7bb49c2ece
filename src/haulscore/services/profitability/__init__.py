"""Profitability scoring helpers."""

from .scoring import (
    composite_profitability_score,
    composite_risk_level,
    cost_efficiency_rating,
    profit_margin_percent,
    revenue_per_minute,
    revenue_tier,
)
from .service import (
    analyze_service_cost,
    assess_risk,
    build_risk_report,
    score_customer,
    score_customers,
    strategic_score,
    summarize_portfolio,
)

__all__ = [
    "revenue_per_minute",
    "profit_margin_percent",
    "revenue_tier",
    "cost_efficiency_rating",
    "composite_profitability_score",
    "composite_risk_level",
    "score_customer",
    "score_customers",
    "strategic_score",
    "analyze_service_cost",
    "assess_risk",
    "build_risk_report",
    "summarize_portfolio",
]
