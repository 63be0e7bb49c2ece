"""API routes for RFP parsing and bid evaluation."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...schemas.bids import BidAnalysisModel, BidRequirementsModel, EvaluateBidRequest, ParseRFPRequest
from ...services.bidding import BidRequirements, evaluate_bid, parse_rfp_text

router = APIRouter(prefix="/bids", tags=["bids"])


@router.post("/parse", response_model=BidRequirementsModel, status_code=status.HTTP_200_OK)
def parse(payload: ParseRFPRequest) -> BidRequirementsModel:
    return BidRequirementsModel.model_validate(parse_rfp_text(payload.text))


@router.post("/evaluate", response_model=BidAnalysisModel, status_code=status.HTTP_200_OK)
def evaluate(payload: EvaluateBidRequest) -> BidAnalysisModel:
    """Evaluate geocoded RFP requirements; 422 when coordinates are missing."""

    requirements = BidRequirements(**payload.requirements.model_dump())
    analysis = evaluate_bid(
        requirements,
        payload.customer_records(),
        payload.facility_set(),
        payload.rate_card(),
        payload.fleet_config(),
    )
    return BidAnalysisModel.model_validate(analysis)
