"""Bid / no-bid evaluation of community RFPs."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ...config import DEFAULT_ASSUMPTIONS, DEFAULT_FLEET, EconomicAssumptions, FleetConfig
from ...data.facilities import DEFAULT_FACILITIES
from ...errors import MissingLocationError
from ...models.domain import CustomerRecord, FacilitySet
from ..costing import rfp_monthly_cost
from ..geospatial import depot_distance_miles, nearest_landfill_miles
from ..profitability import profit_margin_percent
from .fleet import fleet_feasibility
from .models import (
    DEFAULT_PICKUP_FREQUENCY,
    BidAnalysis,
    BidRecommendation,
    BidRequirements,
    ComparableBaseline,
    Proximity,
    StrategicFit,
)

logger = logging.getLogger(__name__)

FALLBACK_MINUTES_PER_HOME = 1.0
FALLBACK_REVENUE_PER_HOME = 25.0
COMPARABLE_UNIT_TOLERANCE = 0.3

MARKET_PREMIUM: dict[str, float] = {"far": 0.15, "moderate": 0.05, "close": 0.0}

DO_NOT_BID_MARGIN = 15.0
CONDITIONAL_MARGIN = 20.0
CONDITIONAL_FLAG_COUNT = 3
HIGH_FIT_MIN_HOMES = 500
LOW_FIT_MAX_HOMES = 100


def classify_proximity(depot_miles: float, landfill_miles: float) -> Proximity:
    if depot_miles <= 10 and landfill_miles <= 15:
        return "close"
    if depot_miles <= 20 and landfill_miles <= 25:
        return "moderate"
    return "far"


def comparable_baseline(customers: Sequence[CustomerRecord], homes: int) -> ComparableBaseline:
    """Per-home service time and revenue of HOAs of a similar size.

    A customer is comparable when its unit count is within 30% of ``homes``.
    """

    tolerance = homes * COMPARABLE_UNIT_TOLERANCE
    comparables = [
        customer
        for customer in customers
        if customer.is_hoa and customer.units > 0 and abs(customer.units - homes) <= tolerance
    ]
    if not comparables:
        logger.debug("No comparable HOAs for %d homes; using fallback baseline", homes)
        return ComparableBaseline(FALLBACK_MINUTES_PER_HOME, FALLBACK_REVENUE_PER_HOME, 0)

    minutes = np.array([c.completion_time_minutes / c.units for c in comparables], dtype=float)
    revenue = np.array([c.monthly_revenue / c.units for c in comparables], dtype=float)
    return ComparableBaseline(float(minutes.mean()), float(revenue.mean()), len(comparables))


def strategic_fit(proximity: Proximity, homes: int) -> StrategicFit:
    if proximity == "close" and homes >= HIGH_FIT_MIN_HOMES:
        return "high"
    if proximity == "far" or homes < LOW_FIT_MAX_HOMES:
        return "low"
    return "medium"


def bid_recommendation(margin_percent: float, fit: StrategicFit, flag_count: int) -> BidRecommendation:
    if margin_percent < DO_NOT_BID_MARGIN or fit == "low":
        return "do-not-bid"
    if flag_count >= CONDITIONAL_FLAG_COUNT or margin_percent < CONDITIONAL_MARGIN:
        return "bid-with-conditions"
    return "bid"


def _operating_multipliers(requirements: BidRequirements, proximity: Proximity) -> tuple[float, float, list[str]]:
    time_multiplier = 1.0
    cost_multiplier = 1.0
    flags: list[str] = []

    if proximity == "far":
        time_multiplier += 0.3
        cost_multiplier += 0.2
        flags.append("High travel time to service area")

    if requirements.has_restricted_window:
        time_multiplier += 0.2
        cost_multiplier += 0.15
        flags.append("Restricted pickup time window")

    if not requirements.fuel_surcharge_allowed:
        cost_multiplier += 0.1
        flags.append("No fuel surcharge protection")

    if requirements.recycling_required:
        time_multiplier += 0.1
        cost_multiplier += 0.05

    if requirements.yard_waste_required:
        time_multiplier += 0.15
        cost_multiplier += 0.08

    return time_multiplier, cost_multiplier, flags


def evaluate_bid(
    requirements: BidRequirements,
    customers: Sequence[CustomerRecord],
    facilities: FacilitySet = DEFAULT_FACILITIES,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
    fleet: FleetConfig = DEFAULT_FLEET,
) -> BidAnalysis:
    """Price an RFP and recommend whether to bid on it.

    Fleet capacity and routing conditions are reported alongside the risk flags.

    Raises:
        MissingLocationError: the RFP has no geocoded coordinates.
    """

    if not requirements.has_location:
        raise MissingLocationError(
            f"RFP for {requirements.community_name!r} has no coordinates; geocode {requirements.location!r} first"
        )

    lat, lng = float(requirements.latitude), float(requirements.longitude)
    homes = max(requirements.homes, 0)
    depot_miles = depot_distance_miles(lat, lng, facilities)
    landfill_miles = nearest_landfill_miles(lat, lng, facilities)
    proximity = classify_proximity(depot_miles, landfill_miles)

    baseline = comparable_baseline(customers, homes)
    time_multiplier, cost_multiplier, flags = _operating_multipliers(requirements, proximity)
    flags.extend(requirements.special_requirements)

    feasibility = fleet_feasibility(
        customers,
        homes,
        lat,
        lng,
        pickup_frequency=requirements.pickup_frequency,
        recycling_frequency=DEFAULT_PICKUP_FREQUENCY if requirements.recycling_required else "",
        config=fleet,
        assumptions=assumptions,
    )
    flags.extend(condition for condition in feasibility.conditions if condition not in flags)

    minutes_per_home = baseline.minutes_per_home * time_multiplier
    cost = rfp_monthly_cost(homes, minutes_per_home, depot_miles, landfill_miles, cost_multiplier, assumptions)

    market_rate = baseline.revenue_per_home * (1 + MARKET_PREMIUM[proximity])
    price_per_unit = market_rate * (1 + assumptions.rfp_markup)
    monthly_revenue = price_per_unit * homes
    margin = profit_margin_percent(monthly_revenue, cost.total_cost)
    efficiency = monthly_revenue / cost.minutes_per_pass if cost.minutes_per_pass > 0 else 0.0

    fit = strategic_fit(proximity, homes)
    recommendation = bid_recommendation(margin, fit, len(flags))
    logger.info(
        "Evaluated RFP %s: %d homes, %s proximity, %.1f%% margin -> %s",
        requirements.community_name,
        homes,
        proximity,
        margin,
        recommendation,
    )

    return BidAnalysis(
        community_name=requirements.community_name,
        homes=homes,
        proximity_score=proximity,
        distance_from_depot_miles=depot_miles,
        distance_from_landfill_miles=landfill_miles,
        estimated_time_per_home=minutes_per_home,
        time_multiplier=time_multiplier,
        cost_multiplier=cost_multiplier,
        market_rate=market_rate,
        suggested_price_per_unit=price_per_unit,
        estimated_monthly_revenue=monthly_revenue,
        estimated_monthly_cost=cost.total_cost,
        projected_gross_margin=margin,
        efficiency_per_minute=efficiency,
        strategic_fit_score=fit,
        risk_flags=flags,
        recommendation=recommendation,
        labor_cost=cost.labor_cost,
        fuel_cost=cost.fuel_cost,
        equipment_cost=cost.equipment_cost,
        dumping_fee=cost.dumping_fee,
        comparable_customers=baseline.sample_size,
        fleet_feasibility=feasibility,
    )
