"""Cost-to-serve models.

Three cost bases coexist, each feeding a different downstream decision:

* :func:`mileage_time_cost` backs the overview map and revenue tiers.
* :func:`visit_cost` backs the cost estimator and the route simulator.
* :func:`rfp_monthly_cost` backs the bid evaluator.

Their rates are not interchangeable.
"""

from __future__ import annotations

from ...config import DEFAULT_ASSUMPTIONS, EconomicAssumptions
from ...models.domain import coerce_float
from .models import CostBreakdown, RFPCostBreakdown, VisitCostBreakdown


def mileage_time_cost(
    total_distance_miles: float,
    service_minutes: float,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> CostBreakdown:
    """Cost of one service from distance travelled and minutes on site."""

    miles = coerce_float(total_distance_miles, minimum=0.0)
    minutes = coerce_float(service_minutes, minimum=0.0)
    fuel_cost = miles * assumptions.cost_per_mile
    labor_cost = minutes * assumptions.cost_per_minute
    return CostBreakdown(
        distance_miles=miles,
        service_minutes=minutes,
        fuel_cost=fuel_cost,
        labor_cost=labor_cost,
        total_cost=fuel_cost + labor_cost,
    )


def visit_cost(
    round_trip_miles: float,
    service_minutes: float,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> VisitCostBreakdown:
    """Crew and fuel cost of a single visit covering ``round_trip_miles``."""

    miles = coerce_float(round_trip_miles, minimum=0.0)
    minutes = coerce_float(service_minutes, minimum=0.0)
    service_hours = minutes / 60
    travel_hours = miles / assumptions.average_speed_mph
    labor_cost = (service_hours + travel_hours) * assumptions.crew_rate_per_hour
    fuel_cost = (miles / assumptions.fuel_efficiency_mpg) * assumptions.fuel_cost_per_gallon
    return VisitCostBreakdown(
        distance_miles=miles,
        service_hours=service_hours,
        travel_hours=travel_hours,
        labor_cost=labor_cost,
        fuel_cost=fuel_cost,
        total_cost=labor_cost + fuel_cost,
    )


def _service_day_count(schedule: str | None) -> int:
    if not schedule or not schedule.strip():
        return 0
    return len(schedule.split("/"))


def visits_per_month(
    trash_days: str | None,
    recycling_days: str | None,
    yard_waste_days: str | None,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> int:
    """Visits per month from weekly schedules such as ``"Mon/Thu"``."""

    weekly = sum(_service_day_count(days) for days in (trash_days, recycling_days, yard_waste_days))
    # Half-up rounding
    return int(weekly * assumptions.weeks_per_month + 0.5)


def rfp_monthly_cost(
    homes: int,
    minutes_per_home: float,
    depot_miles: float,
    landfill_miles: float,
    cost_multiplier: float = 1.0,
    assumptions: EconomicAssumptions = DEFAULT_ASSUMPTIONS,
) -> RFPCostBreakdown:
    """Monthly cost of servicing ``homes`` under the RFP rate card."""

    homes = max(int(coerce_float(homes, minimum=0.0)), 0)
    per_home = coerce_float(minutes_per_home, minimum=0.0)
    depot = coerce_float(depot_miles, minimum=0.0)
    landfill = coerce_float(landfill_miles, minimum=0.0)
    multiplier = coerce_float(cost_multiplier, 1.0, minimum=0.0)
    weeks = assumptions.weeks_per_month

    minutes_per_pass = per_home * homes
    hours_per_pass = minutes_per_pass / 60
    labor_cost = hours_per_pass * assumptions.rfp_labor_rate_per_hour * weeks
    fuel_cost = (depot * 2 + landfill) * assumptions.rfp_fuel_cost_per_mile * weeks * assumptions.rfp_trips_per_week
    equipment_cost = hours_per_pass * assumptions.rfp_equipment_cost_per_hour * weeks
    dumping_fee = homes * assumptions.rfp_tons_per_home_per_month * assumptions.rfp_dumping_fee_per_ton

    total = (labor_cost + fuel_cost + equipment_cost + dumping_fee) * multiplier
    return RFPCostBreakdown(
        minutes_per_pass=minutes_per_pass,
        labor_cost=labor_cost,
        fuel_cost=fuel_cost,
        equipment_cost=equipment_cost,
        dumping_fee=dumping_fee,
        cost_multiplier=multiplier,
        total_cost=total,
    )
