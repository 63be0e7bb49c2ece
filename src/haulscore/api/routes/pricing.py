"""API routes for density-based pricing."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...data.customers_repository import load_configured_customers
from ...schemas.pricing import (
    PricingDecisionModel,
    PricingQuoteRequest,
    ServiceabilityRequest,
    ServiceabilityResponse,
)
from ...services.pricing import PricingFactors, analyze_pricing, assess_serviceability

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post("/quote", response_model=PricingDecisionModel, status_code=status.HTTP_200_OK)
def quote(payload: PricingQuoteRequest) -> PricingDecisionModel:
    """Price from already known density factors."""

    decision = analyze_pricing(PricingFactors(**payload.model_dump()))
    return PricingDecisionModel.model_validate(decision)


@router.post("/serviceability", response_model=ServiceabilityResponse, status_code=status.HTTP_200_OK)
def serviceability(payload: ServiceabilityRequest) -> ServiceabilityResponse:
    """Price a prospective address from the customers around it."""

    if payload.customers is None:
        customers = load_configured_customers()
    else:
        customers = [customer.to_record() for customer in payload.customers]
    assessment = assess_serviceability(payload.latitude, payload.longitude, customers, payload.number_of_carts)
    return ServiceabilityResponse.model_validate(assessment)
