"""Route addition what-if simulation."""

from .models import RouteSimulationResult
from .simulator import additional_distance_miles, simulate_route_addition

__all__ = ["RouteSimulationResult", "additional_distance_miles", "simulate_route_addition"]
