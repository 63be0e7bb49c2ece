"""Bid (RFP) API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_FLEET, FleetConfig
from .common import PortfolioRequest


class ParseRFPRequest(BaseModel):
    text: str = Field(..., description="RFP text or a structured document analysis report.")


class BidRequirementsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    community_name: str = "Unknown Community"
    location: str = "Unknown Location"
    latitude: Optional[float] = Field(None, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, allow_inf_nan=False)
    homes: int = Field(0, ge=0)
    service_type: str = "Residential Waste & Recycling"
    pickup_frequency: str = "Weekly"
    special_requirements: List[str] = Field(default_factory=list)
    contract_length_months: int = Field(12, ge=0)
    fuel_surcharge_allowed: bool = True
    time_windows: str = "Flexible"
    recycling_required: bool = False
    yard_waste_required: bool = False


class EvaluateBidRequest(PortfolioRequest):
    requirements: BidRequirementsModel
    fleet: Optional[FleetConfig] = None

    def fleet_config(self) -> FleetConfig:
        return self.fleet or DEFAULT_FLEET


class FleetCapacityModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_utilization_percent: float
    utilization_after_contract_percent: float
    additional_trucks_needed: int
    can_accommodate: bool


class RoutingImpactModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    nearest_customer_miles: float
    drive_time_minutes: float
    monthly_route_extension_cost: float
    efficiency_impact_percent: float


class ServiceCompatibilityModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    trash_compatible: bool
    recycling_compatible: bool
    yard_waste_compatible: bool
    conflicts: List[str]


class FleetFeasibilityModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    capacity: FleetCapacityModel
    routing: RoutingImpactModel
    compatibility: ServiceCompatibilityModel
    additional_truck_cost: float
    total_additional_cost: float
    conditions: List[str]
    risk_level: str
    feasible: bool


class BidAnalysisModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    community_name: str
    homes: int
    proximity_score: str
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
    strategic_fit_score: str
    risk_flags: List[str]
    recommendation: str
    labor_cost: float
    fuel_cost: float
    equipment_cost: float
    dumping_fee: float
    comparable_customers: int
    fleet_feasibility: Optional[FleetFeasibilityModel] = None
