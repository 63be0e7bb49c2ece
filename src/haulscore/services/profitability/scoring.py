"""Revenue ratios and the three tiering schemes.

Each scheme serves a different consumer and has its own thresholds:

* :func:`revenue_tier` for the overview map (revenue per minute).
* :func:`cost_efficiency_rating` for the cost estimator (margin percent).
* :func:`composite_profitability_score` for the strategic map (0-100).
"""

from __future__ import annotations

import math

from ...models.domain import HOA
from .models import EfficiencyRating, RevenueTier, RiskLevel

HIGH_TIER_MIN_RPM = 5.0
MODERATE_TIER_MIN_RPM = 2.0

EXCELLENT_MIN_MARGIN = 60.0
GOOD_MIN_MARGIN = 40.0
FAIR_MIN_MARGIN = 20.0

COMPOSITE_BASE_SCORE = 50
# (minimum revenue per minute, points), checked top-down
COMPOSITE_RPM_POINTS = ((100.0, 40), (75.0, 30), (50.0, 20), (25.0, 10))
COMPOSITE_RPM_PENALTY = -20
COMPOSITE_HOA_BONUS = 10
LOW_RISK_MIN_SCORE = 70
HIGH_RISK_MAX_SCORE = 40


def revenue_per_minute(monthly_revenue: float, completion_time_minutes: float) -> float:
    if not math.isfinite(completion_time_minutes) or completion_time_minutes <= 0:
        return 0.0
    if not math.isfinite(monthly_revenue):
        return 0.0
    return monthly_revenue / completion_time_minutes


def profit_margin_percent(revenue: float, cost: float) -> float:
    if not math.isfinite(revenue) or revenue <= 0:
        return 0.0
    if not math.isfinite(cost):
        return 0.0
    return (revenue - cost) / revenue * 100


def revenue_tier(rpm: float) -> RevenueTier:
    if rpm >= HIGH_TIER_MIN_RPM:
        return "High"
    if rpm >= MODERATE_TIER_MIN_RPM:
        return "Moderate"
    return "Low"


def cost_efficiency_rating(margin_percent: float) -> EfficiencyRating:
    if margin_percent >= EXCELLENT_MIN_MARGIN:
        return "excellent"
    if margin_percent >= GOOD_MIN_MARGIN:
        return "good"
    if margin_percent >= FAIR_MIN_MARGIN:
        return "fair"
    return "poor"


def _distance_points(distance_miles: float) -> int:
    if distance_miles <= 10:
        return 10
    if distance_miles <= 15:
        return 5
    if distance_miles > 25:
        return -20
    if distance_miles > 20:
        return -10
    return 0


def composite_profitability_score(rpm: float, distance_from_depot_miles: float, customer_type: str) -> int:
    """Strategic-map score, clamped to ``[0, 100]``."""

    score = COMPOSITE_BASE_SCORE
    for threshold, points in COMPOSITE_RPM_POINTS:
        if rpm >= threshold:
            score += points
            break
    else:
        score += COMPOSITE_RPM_PENALTY

    score += _distance_points(distance_from_depot_miles)
    if customer_type == HOA:
        score += COMPOSITE_HOA_BONUS
    return max(0, min(100, score))


def composite_risk_level(score: float) -> RiskLevel:
    if score >= LOW_RISK_MIN_SCORE:
        return "low"
    if score <= HIGH_RISK_MAX_SCORE:
        return "high"
    return "medium"
