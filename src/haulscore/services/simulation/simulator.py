"""What-if analysis for adding a single stop to the existing route network."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...config import DEFAULT_ASSUMPTIONS, EconomicAssumptions
from ...data.facilities import DEFAULT_FACILITIES
from ...models.domain import CustomerRecord, FacilitySet
from ..costing import visit_cost
from ..geospatial import depot_distance_miles, haversine_miles
from ..profitability import profit_margin_percent, revenue_per_minute
from .models import RouteSimulationResult, SimulationRecommendation

logger = logging.getLogger(__name__)

# Share of the depot leg still driven when the stop is slotted into an existing route
ROUTED_DEPOT_SHARE = 0.3
DECLINE_MAX_MARGIN = 20.0
NEGOTIATE_MAX_MARGIN = 40.0
NEGOTIATE_MAX_RPM = 50.0
SUBSCRIPTION_TARGET_RPM = 75.0
LONG_DETOUR_MILES = 20.0
SYNERGY_MAX_MILES = 2.0
REASON_SEPARATOR = " • "


def _nearest_customer(stop: CustomerRecord, customers: Sequence[CustomerRecord]) -> tuple[Optional[CustomerRecord], float]:
    nearest: Optional[CustomerRecord] = None
    nearest_distance = float("inf")
    for customer in customers:
        if customer.customer_id == stop.customer_id:
            continue
        distance = haversine_miles(stop.latitude, stop.longitude, customer.latitude, customer.longitude)
        if distance < nearest_distance:
            nearest, nearest_distance = customer, distance
    return nearest, nearest_distance


def additional_distance_miles(depot_miles: float, nearest_miles: Optional[float]) -> float:
    if nearest_miles is None:
        return depot_miles * 2
    return max(nearest_miles, depot_miles * ROUTED_DEPOT_SHARE)


def _recommend(
    stop: CustomerRecord,
    margin: float,
    rpm: float,
    distance: float,
    nearest_miles: Optional[float],
) -> tuple[SimulationRecommendation, str]:
    if margin < DECLINE_MAX_MARGIN:
        recommendation: SimulationRecommendation = "decline"
        reasons = ["Low profit margin - below 20% threshold"]
    elif margin < NEGOTIATE_MAX_MARGIN:
        recommendation = "negotiate"
        reasons = ["Moderate profit margin - negotiate for better terms"]
    elif rpm < NEGOTIATE_MAX_RPM:
        recommendation = "negotiate"
        reasons = ["Low revenue efficiency - negotiate higher rates"]
    else:
        recommendation = "accept"
        reasons = ["Strong profit potential and efficiency"]

    if stop.is_subscription and rpm < SUBSCRIPTION_TARGET_RPM:
        if recommendation == "accept":
            recommendation = "negotiate"
        reasons.append("Single home subscription below efficiency target")

    if distance > LONG_DETOUR_MILES:
        if recommendation == "accept":
            recommendation = "negotiate"
        reasons.append("High travel distance increases costs")

    if nearest_miles is not None and nearest_miles < SYNERGY_MAX_MILES:
        reasons.append("Excellent route synergy with existing customers")

    return recommendation, REASON_SEPARATOR.join(reasons)


def simulate_route_addition(
    stop: CustomerRecord,
    customers: Sequence[CustomerRecord],
    facilities: FacilitySet = DEFAULT_FACILITIES,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> RouteSimulationResult:
    """Estimate the monthly economics of adding ``stop`` to the current routes.

    The stop is assumed to be served from the nearest existing customer. With
    no existing customers it costs a full depot round trip.
    """

    nearest, nearest_distance = _nearest_customer(stop, customers)
    nearest_miles = nearest_distance if nearest is not None else None
    depot_miles = depot_distance_miles(stop.latitude, stop.longitude, facilities)
    distance = additional_distance_miles(depot_miles, nearest_miles)

    cost = visit_cost(distance, stop.completion_time_minutes, assumptions)
    net_profit = stop.monthly_revenue - cost.total_cost
    margin = profit_margin_percent(stop.monthly_revenue, cost.total_cost)
    rpm = revenue_per_minute(stop.monthly_revenue, stop.completion_time_minutes)

    recommendation, reasoning = _recommend(stop, margin, rpm, distance, nearest_miles)
    logger.debug("Simulated %s: %.2f mi detour, %.1f%% margin -> %s", stop.customer_id, distance, margin, recommendation)

    return RouteSimulationResult(
        additional_revenue=stop.monthly_revenue,
        additional_time_minutes=stop.completion_time_minutes,
        additional_distance_miles=distance,
        fuel_cost=cost.fuel_cost,
        labor_cost=cost.labor_cost,
        total_cost=cost.total_cost,
        net_profit=net_profit,
        profit_margin_percent=margin,
        revenue_per_minute=rpm,
        recommendation=recommendation,
        reasoning=reasoning,
        nearest_customer_id=nearest.customer_id if nearest else None,
        nearest_customer_miles=nearest_miles,
    )
