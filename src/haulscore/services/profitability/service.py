"""Customer-level profitability, cost and risk analysis."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Literal, Optional, Sequence

import numpy as np

from ...config import DEFAULT_ASSUMPTIONS, EconomicAssumptions, settings
from ...data.facilities import DEFAULT_FACILITIES, DEFAULT_SERVICE_ZONES
from ...models.domain import CustomerRecord, FacilitySet, ServiceZone
from ..costing import mileage_time_cost, visit_cost, visits_per_month
from ..geospatial import depot_distance_miles, nearest_landfill_miles, zone_containing
from .models import (
    CostAnalysis,
    CustomerScore,
    PortfolioSummary,
    ProfitabilityResult,
    RiskAssessment,
)
from .scoring import (
    composite_profitability_score,
    composite_risk_level,
    cost_efficiency_rating,
    profit_margin_percent,
    revenue_per_minute,
    revenue_tier,
)

logger = logging.getLogger(__name__)

LONG_HAUL_MILES = 20.0
RED_FLAG_MAX_RPM = 30.0
RISK_REPORT_MIN_SCORE = 15


def score_customer(
    customer: CustomerRecord,
    facilities: FacilitySet = DEFAULT_FACILITIES,
    zones: Sequence[ServiceZone] = DEFAULT_SERVICE_ZONES,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> ProfitabilityResult:
    """Overview profitability of one customer using the mileage/time cost model."""

    to_depot = depot_distance_miles(customer.latitude, customer.longitude, facilities)
    to_landfill = nearest_landfill_miles(customer.latitude, customer.longitude, facilities)
    cost = mileage_time_cost(to_depot + to_landfill, customer.completion_time_minutes, assumptions)

    rpm = revenue_per_minute(customer.monthly_revenue, customer.completion_time_minutes)
    margin = profit_margin_percent(customer.monthly_revenue, cost.total_cost)
    tier = revenue_tier(rpm)

    zone = zone_containing(customer.latitude, customer.longitude, zones)
    in_zone = zone is not None
    # Only subscriptions are restricted to service zones
    is_viable = in_zone if customer.is_subscription else True

    flags: list[str] = []
    if customer.completion_time_minutes <= 0:
        flags.append("Missing completion time")
    if tier == "Low":
        flags.append("Low revenue per minute")
    if customer.monthly_revenue > 0 and margin < 0:
        flags.append("Cost to serve exceeds revenue")
    if to_depot > LONG_HAUL_MILES:
        flags.append("High travel cost from depot")
    if customer.is_subscription and not in_zone:
        flags.append("Subscription outside service zones")

    return ProfitabilityResult(
        customer_id=customer.customer_id,
        monthly_revenue=customer.monthly_revenue,
        revenue_per_minute=rpm,
        profit_margin_percent=margin,
        monthly_profit=customer.monthly_revenue - cost.total_cost,
        tier=tier,
        risk_flags=flags,
        is_viable=is_viable,
        in_service_zone=in_zone,
        service_zone=zone.name if zone else None,
        distance_to_depot_miles=to_depot,
        distance_to_nearest_landfill_miles=to_landfill,
        cost=cost,
    )


def score_customers(
    customers: Iterable[CustomerRecord],
    facilities: FacilitySet = DEFAULT_FACILITIES,
    zones: Sequence[ServiceZone] = DEFAULT_SERVICE_ZONES,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
    *,
    max_workers: Optional[int] = None,
) -> list[ProfitabilityResult]:
    """Score many customers in parallel; results keep the input order."""

    customers = list(customers)
    if not customers:
        return []
    workers = max_workers or settings.batch_max_workers
    logger.info("Scoring %d customers with %d workers", len(customers), workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(
            executor.map(lambda customer: score_customer(customer, facilities, zones, assumptions), customers)
        )


def strategic_score(customer: CustomerRecord, facilities: FacilitySet = DEFAULT_FACILITIES) -> CustomerScore:
    rpm = revenue_per_minute(customer.monthly_revenue, customer.completion_time_minutes)
    distance = depot_distance_miles(customer.latitude, customer.longitude, facilities)
    score = composite_profitability_score(rpm, distance, customer.customer_type)
    risk = composite_risk_level(score)
    return CustomerScore(
        customer_id=customer.customer_id,
        revenue_per_minute=rpm,
        distance_from_depot_miles=distance,
        profitability_score=score,
        risk_level=risk,
        is_red_flag=risk == "high" or rpm < RED_FLAG_MAX_RPM,
    )


def analyze_service_cost(
    customer: CustomerRecord,
    facilities: FacilitySet = DEFAULT_FACILITIES,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> CostAnalysis:
    """Monthly cost estimate from depot round trips and the collection schedule."""

    distance = depot_distance_miles(customer.latitude, customer.longitude, facilities)
    visit = visit_cost(distance * 2, customer.completion_time_minutes, assumptions)
    visits = visits_per_month(
        customer.trash_days, customer.recycling_days, customer.yard_waste_days, assumptions
    )
    monthly_cost = visit.total_cost * visits
    margin = profit_margin_percent(customer.monthly_revenue, monthly_cost)
    return CostAnalysis(
        customer_id=customer.customer_id,
        monthly_revenue=customer.monthly_revenue,
        service_minutes=customer.completion_time_minutes,
        visits_per_month=visits,
        visit=visit,
        monthly_cost=monthly_cost,
        monthly_profit=customer.monthly_revenue - monthly_cost,
        profit_margin_percent=margin,
        revenue_per_minute=revenue_per_minute(customer.monthly_revenue, customer.completion_time_minutes),
        rating=cost_efficiency_rating(margin),
    )


def _join_reason(reason: str, addition: str) -> str:
    return f"{reason} + {addition}" if reason else addition


def assess_risk(customer: CustomerRecord, facilities: FacilitySet = DEFAULT_FACILITIES) -> RiskAssessment:
    """Score how much a customer drags on route economics and what to do about it."""

    rpm = revenue_per_minute(customer.monthly_revenue, customer.completion_time_minutes)
    to_depot = depot_distance_miles(customer.latitude, customer.longitude, facilities)
    to_landfill = nearest_landfill_miles(customer.latitude, customer.longitude, facilities)

    score = 0
    action = "reprice"
    reason = ""
    if rpm < 30:
        score += 40
        action = "phase-out"
        reason = "Very low revenue efficiency"
    elif rpm < 50:
        score += 25
        reason = "Below target revenue efficiency"
    elif rpm < 75:
        score += 15
        reason = "Marginal revenue efficiency"

    if to_depot > 20:
        score += 20
        if action == "reprice":
            action = "bundle"
        reason = _join_reason(reason, "High travel cost")
    elif to_depot > 15:
        score += 10
        reason = _join_reason(reason, "Moderate travel cost")

    if customer.is_subscription and rpm < 60:
        score += 10
        reason = _join_reason(reason, "Single home inefficiency")

    return RiskAssessment(
        customer_id=customer.customer_id,
        revenue_per_minute=rpm,
        distance_from_depot_miles=to_depot,
        distance_to_nearest_landfill_miles=to_landfill,
        risk_score=score,
        recommended_action=action,
        reason=reason,
    )


def build_risk_report(
    customers: Iterable[CustomerRecord],
    facilities: FacilitySet = DEFAULT_FACILITIES,
    *,
    sort_by: Literal["risk", "revenue", "distance"] = "risk",
) -> List[RiskAssessment]:
    """Customers with a meaningful risk score, worst first."""

    assessments = [assess_risk(customer, facilities) for customer in customers]
    flagged = [item for item in assessments if item.risk_score > RISK_REPORT_MIN_SCORE]
    if sort_by == "revenue":
        return sorted(flagged, key=lambda item: item.revenue_per_minute)
    if sort_by == "distance":
        return sorted(flagged, key=lambda item: -item.distance_from_depot_miles)
    return sorted(flagged, key=lambda item: -item.risk_score)


def summarize_portfolio(results: Sequence[ProfitabilityResult]) -> PortfolioSummary:
    if not results:
        return PortfolioSummary(
            customer_count=0,
            viable_count=0,
            total_monthly_revenue=0.0,
            average_revenue_per_minute=0.0,
            average_margin_percent=0.0,
        )
    revenues = np.array([item.monthly_revenue for item in results], dtype=float)
    rpms = np.array([item.revenue_per_minute for item in results], dtype=float)
    margins = np.array([item.profit_margin_percent for item in results], dtype=float)
    return PortfolioSummary(
        customer_count=len(results),
        viable_count=sum(1 for item in results if item.is_viable),
        total_monthly_revenue=float(revenues.sum()),
        average_revenue_per_minute=float(rpms.mean()),
        average_margin_percent=float(margins.mean()),
        tier_counts=dict(Counter(item.tier for item in results)),
    )
