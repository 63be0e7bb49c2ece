"""API routes for route addition simulation."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...schemas.simulation import RouteSimulationModel, RouteSimulationRequest
from ...services.simulation import simulate_route_addition

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/simulate", response_model=RouteSimulationModel, status_code=status.HTTP_200_OK)
def simulate(payload: RouteSimulationRequest) -> RouteSimulationModel:
    result = simulate_route_addition(
        payload.stop.to_record(),
        payload.customer_records(),
        payload.facility_set(),
        payload.rate_card(),
    )
    return RouteSimulationModel.model_validate(result)
