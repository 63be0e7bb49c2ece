"""Route simulation API schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .common import CustomerModel, PortfolioRequest


class RouteSimulationRequest(PortfolioRequest):
    stop: CustomerModel


class RouteSimulationModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    additional_revenue: float
    additional_time_minutes: float
    additional_distance_miles: float
    fuel_cost: float
    labor_cost: float
    total_cost: float
    net_profit: float
    profit_margin_percent: float
    revenue_per_minute: float
    recommendation: str
    reasoning: str
    nearest_customer_id: Optional[str] = None
    nearest_customer_miles: Optional[float] = None
