"""Bid (RFP) request and analysis value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Literal, Optional

Proximity = Literal["close", "moderate", "far"]
StrategicFit = Literal["high", "medium", "low"]
BidRecommendation = Literal["bid", "bid-with-conditions", "do-not-bid"]
FleetRiskLevel = Literal["low", "medium", "high"]

DEFAULT_COMMUNITY_NAME = "Unknown Community"
DEFAULT_LOCATION = "Unknown Location"
DEFAULT_SERVICE_TYPE = "Residential Waste & Recycling"
DEFAULT_PICKUP_FREQUENCY = "Weekly"
FLEXIBLE_TIME_WINDOW = "Flexible"


@dataclass(slots=True)
class BidRequirements:
    """Requirements of a community's request for proposal."""

    community_name: str = DEFAULT_COMMUNITY_NAME
    location: str = DEFAULT_LOCATION
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    homes: int = 0
    service_type: str = DEFAULT_SERVICE_TYPE
    pickup_frequency: str = DEFAULT_PICKUP_FREQUENCY
    special_requirements: List[str] = field(default_factory=list)
    contract_length_months: int = 12
    fuel_surcharge_allowed: bool = True
    time_windows: str = FLEXIBLE_TIME_WINDOW
    recycling_required: bool = False
    yard_waste_required: bool = False

    @property
    def has_location(self) -> bool:
        return all(
            value is not None and math.isfinite(value) for value in (self.latitude, self.longitude)
        )

    @property
    def has_restricted_window(self) -> bool:
        return "8AM" in self.time_windows or "morning" in self.time_windows.lower()


@dataclass(slots=True)
class ComparableBaseline:
    minutes_per_home: float
    revenue_per_home: float
    sample_size: int

    @property
    def is_fallback(self) -> bool:
        return self.sample_size == 0


@dataclass(slots=True)
class FleetCapacity:
    current_utilization_percent: float
    utilization_after_contract_percent: float
    additional_trucks_needed: int

    @property
    def can_accommodate(self) -> bool:
        return self.additional_trucks_needed == 0


@dataclass(slots=True)
class RoutingImpact:
    nearest_customer_miles: float
    drive_time_minutes: float
    monthly_route_extension_cost: float
    efficiency_impact_percent: float


@dataclass(slots=True)
class ServiceCompatibility:
    trash_compatible: bool = True
    recycling_compatible: bool = True
    yard_waste_compatible: bool = True
    conflicts: List[str] = field(default_factory=list)


@dataclass(slots=True)
class FleetFeasibility:
    """Whether the current fleet can take on a contract, and at what cost."""

    capacity: FleetCapacity
    routing: RoutingImpact
    compatibility: ServiceCompatibility
    additional_truck_cost: float
    conditions: List[str]
    risk_level: FleetRiskLevel
    feasible: bool

    @property
    def total_additional_cost(self) -> float:
        return self.additional_truck_cost + self.routing.monthly_route_extension_cost


@dataclass(slots=True)
class BidAnalysis:
    community_name: str
    homes: int
    proximity_score: Proximity
    distance_from_depot_miles: float
    distance_from_landfill_miles: float
    estimated_time_per_home: float
    time_multiplier: float
    cost_multiplier: float
    market_rate: float
    suggested_price_per_unit: float
    estimated_monthly_revenue: float
    estimated_monthly_cost: float
    projected_gross_margin: float
    efficiency_per_minute: float
    strategic_fit_score: StrategicFit
    risk_flags: List[str]
    recommendation: BidRecommendation
    labor_cost: float = 0.0
    fuel_cost: float = 0.0
    equipment_cost: float = 0.0
    dumping_fee: float = 0.0
    comparable_customers: int = 0
    fleet_feasibility: Optional[FleetFeasibility] = None
