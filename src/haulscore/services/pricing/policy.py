"""Density-based pricing and serviceability scoring for new stops."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ...models.domain import CANCELLED, CustomerRecord, coerce_float, coerce_int
from ..geospatial import feet_to_miles, format_distance, haversine_miles
from .models import (
    PricingDecision,
    PricingFactors,
    PricingRecommendation,
    RouteDensity,
    ServiceabilityAssessment,
)

logger = logging.getLogger(__name__)

BASE_PRICE_BY_DENSITY: dict[str, float] = {"High": 26.0, "Medium": 30.0, "Low": 36.0}
DEFAULT_BASE_PRICE = 30.0
MINIMUM_PRICE = 24.0
EXTRA_CART_PRICE = 8.0
CLOSE_RADIUS_FEET = 500.0
NEIGHBOURHOOD_RADIUS_FEET = 1000.0
ACCEPT_MIN_SCORE = 75
BORDERLINE_MIN_SCORE = 50


def route_density(customers_within_1000ft: int) -> RouteDensity:
    if customers_within_1000ft >= 5:
        return "High"
    if customers_within_1000ft >= 2:
        return "Medium"
    return "Low"


def suggested_price(factors: PricingFactors) -> float:
    """Monthly price per cart, never below the floor.

    Only one proximity adjustment applies: the 500 ft discounts win over the
    isolation premium.
    """

    price = BASE_PRICE_BY_DENSITY.get(factors.route_density, DEFAULT_BASE_PRICE)

    if factors.customers_within_500ft >= 3:
        price -= 2
    elif factors.customers_within_500ft >= 1:
        price -= 1
    elif factors.nearest_distance_miles > 1:
        price += 4

    if factors.number_of_carts > 1:
        price += (factors.number_of_carts - 1) * EXTRA_CART_PRICE

    return max(price, MINIMUM_PRICE)


def serviceability_score(factors: PricingFactors) -> int:
    score = 50

    if factors.customers_within_500ft >= 3:
        score += 30
    elif factors.customers_within_500ft >= 1:
        score += 20
    elif factors.customers_within_1000ft >= 2:
        score += 10

    if factors.route_density == "High":
        score += 20
    elif factors.route_density == "Medium":
        score += 10

    if factors.nearest_distance_miles > 2:
        score -= 20
    elif factors.nearest_distance_miles > 1:
        score -= 10

    return max(0, min(100, score))


def pricing_recommendation(score: float) -> PricingRecommendation:
    if score >= ACCEPT_MIN_SCORE:
        return "Accept"
    if score >= BORDERLINE_MIN_SCORE:
        return "Borderline"
    return "Decline"


def pricing_tier_description(price: float) -> str:
    if price <= 28:
        return "Premium Route - High Density"
    if price <= 32:
        return "Standard Route - Medium Density"
    if price <= 36:
        return "Extended Route - Low Density"
    return "Premium Route - Isolated Location"


def analyze_pricing(factors: PricingFactors) -> PricingDecision:
    price = suggested_price(factors)
    score = serviceability_score(factors)
    return PricingDecision(
        suggested_price=price,
        recommendation=pricing_recommendation(score),
        serviceability_score=score,
        route_density=factors.route_density,
        tier_description=pricing_tier_description(price),
    )


def assess_serviceability(
    latitude: float,
    longitude: float,
    customers: Iterable[CustomerRecord],
    number_of_carts: int = 1,
) -> ServiceabilityAssessment:
    """Price a prospective stop from the density of active customers around it."""

    lat = coerce_float(latitude)
    lng = coerce_float(longitude)
    carts = coerce_int(number_of_carts, 1, minimum=1)
    close_radius = feet_to_miles(CLOSE_RADIUS_FEET)
    neighbourhood_radius = feet_to_miles(NEIGHBOURHOOD_RADIUS_FEET)

    within_500 = 0
    within_1000 = 0
    nearest: Optional[CustomerRecord] = None
    nearest_distance = float("inf")
    for customer in customers:
        if customer.service_status == CANCELLED:
            continue
        distance = haversine_miles(lat, lng, customer.latitude, customer.longitude)
        if distance <= close_radius:
            within_500 += 1
        if distance <= neighbourhood_radius:
            within_1000 += 1
        if distance < nearest_distance:
            nearest, nearest_distance = customer, distance

    if nearest is None:
        logger.debug("No active customers to compare against; nearest distance defaults to 0")
        nearest_distance = 0.0

    factors = PricingFactors(
        route_density=route_density(within_1000),
        nearest_distance_miles=nearest_distance,
        customers_within_500ft=within_500,
        customers_within_1000ft=within_1000,
        number_of_carts=carts,
    )
    return ServiceabilityAssessment(
        latitude=lat,
        longitude=lng,
        factors=factors,
        decision=analyze_pricing(factors),
        nearest_customer_id=nearest.customer_id if nearest else None,
        nearest_customer_distance=format_distance(nearest_distance) if nearest else "N/A",
    )
