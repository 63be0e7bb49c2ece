"""API routes for expansion opportunity zones."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ...schemas.zoning import OpportunityRequest, OpportunityResponse, OpportunityZoneModel
from ...services.zoning import GridClustering

router = APIRouter(prefix="/zones", tags=["zones"])


@router.post("/opportunities", response_model=OpportunityResponse, status_code=status.HTTP_200_OK)
def opportunities(payload: OpportunityRequest) -> OpportunityResponse:
    """Grid cells of subscriptions that could be converted into HOA-style service."""

    min_roi = settings.default_min_roi_percent if payload.min_roi_percent is None else payload.min_roi_percent
    strategy = GridClustering(grid_divisions=payload.grid_divisions, min_members=payload.min_members)
    result = strategy.generate(
        depot=payload.facility_set().depot,
        customers=payload.customer_records(),
        min_roi_percent=min_roi,
    )
    return OpportunityResponse(
        opportunities=[OpportunityZoneModel.model_validate(zone) for zone in result.opportunities],
        counts_by_risk=result.counts_by_risk(),
        metadata=result.metadata,
    )
