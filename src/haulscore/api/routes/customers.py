"""API routes for customer profitability, risk and cost analysis."""

from __future__ import annotations

import logging
from collections import Counter

from fastapi import APIRouter, status

from ...config import settings
from ...schemas.common import PortfolioRequest
from ...schemas.customers import (
    CostAnalysisModel,
    CostAnalysisResponse,
    CustomerScoreModel,
    CustomerScoresResponse,
    PortfolioSummaryModel,
    ProfitabilityModel,
    RiskAssessmentModel,
    RiskReportRequest,
    RiskReportResponse,
)
from ...services.profitability import (
    analyze_service_cost,
    build_risk_report,
    score_customers,
    strategic_score,
    summarize_portfolio,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("/score", response_model=CustomerScoresResponse, status_code=status.HTTP_200_OK)
def score(payload: PortfolioRequest) -> CustomerScoresResponse:
    """Overview profitability and strategic score for every customer."""

    customers = payload.customer_records()
    facilities = payload.facility_set()
    results = score_customers(
        customers,
        facilities,
        payload.service_zones(),
        payload.rate_card(),
        max_workers=settings.batch_max_workers,
    )
    return CustomerScoresResponse(
        results=[ProfitabilityModel.model_validate(item) for item in results],
        strategic_scores=[
            CustomerScoreModel.model_validate(strategic_score(customer, facilities)) for customer in customers
        ],
        summary=PortfolioSummaryModel.model_validate(summarize_portfolio(results)),
    )


@router.post("/risk-report", response_model=RiskReportResponse, status_code=status.HTTP_200_OK)
def risk_report(payload: RiskReportRequest) -> RiskReportResponse:
    items = build_risk_report(payload.customer_records(), payload.facility_set(), sort_by=payload.sort_by)
    logger.info("Risk report flagged %d customers", len(items))
    return RiskReportResponse(
        items=[RiskAssessmentModel.model_validate(item) for item in items],
        total=len(items),
        counts_by_action=dict(Counter(item.recommended_action for item in items)),
    )


@router.post("/cost-analysis", response_model=CostAnalysisResponse, status_code=status.HTTP_200_OK)
def cost_analysis(payload: PortfolioRequest) -> CostAnalysisResponse:
    facilities = payload.facility_set()
    assumptions = payload.rate_card()
    items = [analyze_service_cost(customer, facilities, assumptions) for customer in payload.customer_records()]
    return CostAnalysisResponse(
        items=[CostAnalysisModel.model_validate(item) for item in items],
        total_monthly_cost=sum(item.monthly_cost for item in items),
        total_monthly_profit=sum(item.monthly_profit for item in items),
    )
