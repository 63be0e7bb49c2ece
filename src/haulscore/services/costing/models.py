"""Cost breakdown value objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CostBreakdown:
    """Overview cost-to-serve from mileage and service minutes."""

    distance_miles: float
    service_minutes: float
    fuel_cost: float
    labor_cost: float
    total_cost: float


@dataclass(slots=True)
class VisitCostBreakdown:
    """Per-visit cost from crew time and fuel burn."""

    distance_miles: float
    service_hours: float
    travel_hours: float
    labor_cost: float
    fuel_cost: float
    total_cost: float


@dataclass(slots=True)
class RFPCostBreakdown:
    """Monthly cost of servicing a bid community."""

    minutes_per_pass: float
    labor_cost: float
    fuel_cost: float
    equipment_cost: float
    dumping_fee: float
    cost_multiplier: float
    total_cost: float
