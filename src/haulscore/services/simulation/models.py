"""Route simulation value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

SimulationRecommendation = Literal["accept", "negotiate", "decline"]


@dataclass(slots=True)
class RouteSimulationResult:
    additional_revenue: float
    additional_time_minutes: float
    additional_distance_miles: float
    fuel_cost: float
    labor_cost: float
    total_cost: float
    net_profit: float
    profit_margin_percent: float
    revenue_per_minute: float
    recommendation: SimulationRecommendation
    reasoning: str
    nearest_customer_id: Optional[str] = None
    nearest_customer_miles: Optional[float] = None
