"""Operational feasibility of a new contract against the existing fleet and routes."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...config import DEFAULT_ASSUMPTIONS, DEFAULT_FLEET, EconomicAssumptions, FleetConfig
from ...models.domain import CustomerRecord
from ..geospatial import haversine_miles
from .models import FleetCapacity, FleetFeasibility, FleetRiskLevel, RoutingImpact, ServiceCompatibility

logger = logging.getLogger(__name__)

WEEKDAYS = ("mon", "tue", "wed", "thu", "fri")

FAR_FROM_ROUTES_MILES = 10.0
DETOUR_MILES = 5.0
SHORT_DETOUR_MILES = 2.0
HIGH_FREQUENCY_TRASH_DAYS = 2
HIGH_FREQUENCY_TRASH_HOMES = 300
MULTI_DAY_RECYCLING_HOMES = 500


def service_days_per_week(frequency: str) -> int:
    """Collection days per week for a frequency label or a ``Mon/Thu`` style schedule."""

    label = (frequency or "").strip().lower()
    if not label:
        return 1
    if label.startswith(("twice", "two", "2")):
        return 2
    if label.startswith(("three", "3")):
        return 3
    return max(1, len(label.split("/")))


def current_utilization_percent(customers: Sequence[CustomerRecord], config: FleetConfig = DEFAULT_FLEET) -> float:
    """Peak weekday workload of the existing customers as a share of daily fleet capacity."""

    workload = dict.fromkeys(WEEKDAYS, 0)
    for customer in customers:
        for schedule in (customer.trash_days, customer.recycling_days, customer.yard_waste_days):
            schedule = (schedule or "").lower()
            for day in WEEKDAYS:
                if day in schedule:
                    workload[day] += customer.units

    peak = max(workload.values())
    return round(peak / config.daily_capacity * 100, 1)


def routing_impact(
    latitude: float,
    longitude: float,
    customers: Sequence[CustomerRecord],
    config: FleetConfig = DEFAULT_FLEET,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> RoutingImpact:
    """Cost of extending the existing routes out to a new location.

    Without existing customers there is nothing to extend and every figure is zero.
    """

    if not customers:
        return RoutingImpact(0.0, 0.0, 0.0, 0.0)

    nearest = min(haversine_miles(latitude, longitude, c.latitude, c.longitude) for c in customers)
    drive_minutes = nearest / config.route_speed_mph * 60

    # Round trip on every working day
    weekly_miles = nearest * 2 * config.days_per_week
    weekly_hours = drive_minutes * 2 * config.days_per_week / 60
    weekly_cost = weekly_miles * assumptions.rfp_fuel_cost_per_mile + weekly_hours * assumptions.crew_rate_per_hour

    if nearest > DETOUR_MILES:
        efficiency = -10.0
    elif nearest > SHORT_DETOUR_MILES:
        efficiency = -5.0
    else:
        efficiency = 0.0

    return RoutingImpact(
        nearest_customer_miles=round(nearest, 1),
        drive_time_minutes=float(round(drive_minutes)),
        monthly_route_extension_cost=round(weekly_cost * assumptions.weeks_per_month, 2),
        efficiency_impact_percent=efficiency,
    )


def service_compatibility(homes: int, trash_days: int, recycling_days: int) -> ServiceCompatibility:
    result = ServiceCompatibility()
    if trash_days > HIGH_FREQUENCY_TRASH_DAYS and homes > HIGH_FREQUENCY_TRASH_HOMES:
        result.trash_compatible = False
        result.conflicts.append("High-frequency trash service may require dedicated truck")
    if recycling_days > 1 and homes > MULTI_DAY_RECYCLING_HOMES:
        result.recycling_compatible = False
        result.conflicts.append("Multi-day recycling service may conflict with existing routes")
    return result


def _risk_level(additional_trucks: int, conditions: Sequence[str], nearest_miles: float) -> FleetRiskLevel:
    if additional_trucks > 0 or len(conditions) > 2:
        return "high"
    if conditions or nearest_miles > DETOUR_MILES:
        return "medium"
    return "low"


def fleet_feasibility(
    customers: Sequence[CustomerRecord],
    homes: int,
    latitude: float,
    longitude: float,
    *,
    pickup_frequency: str = "Weekly",
    recycling_frequency: str = "",
    config: FleetConfig = DEFAULT_FLEET,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> FleetFeasibility:
    """Check whether the fleet can absorb a new contract of ``homes`` at the given location.

    ``recycling_frequency`` is empty when the contract has no recycling stream.
    """

    trash_days = service_days_per_week(pickup_frequency)
    recycling_days = service_days_per_week(recycling_frequency) if recycling_frequency else 0

    current = current_utilization_percent(customers, config)
    added_homes_per_day = homes * (trash_days + recycling_days) / config.days_per_week
    after = current + added_homes_per_day / config.daily_capacity * 100

    additional_trucks = 0
    if after > config.truck_threshold_percent:
        additional_trucks = math.ceil((after - config.truck_threshold_percent) / config.percent_per_added_truck)
    capacity = FleetCapacity(current, round(after, 1), additional_trucks)

    routing = routing_impact(latitude, longitude, customers, config, assumptions)
    compatibility = service_compatibility(homes, trash_days, recycling_days)

    conditions = list(compatibility.conflicts)
    if additional_trucks > 0:
        conditions.append(f"Requires {additional_trucks} additional truck(s)")
    if routing.nearest_customer_miles > FAR_FROM_ROUTES_MILES:
        conditions.append("Location is far from existing routes")

    risk = _risk_level(additional_trucks, conditions, routing.nearest_customer_miles)
    logger.debug(
        "Fleet utilization %.1f%% -> %.1f%% for %d homes; %d extra trucks, %s risk",
        current,
        capacity.utilization_after_contract_percent,
        homes,
        additional_trucks,
        risk,
    )

    return FleetFeasibility(
        capacity=capacity,
        routing=routing,
        compatibility=compatibility,
        additional_truck_cost=additional_trucks * config.monthly_truck_cost,
        conditions=conditions,
        risk_level=risk,
        feasible=risk != "high" and capacity.can_accommodate,
    )
