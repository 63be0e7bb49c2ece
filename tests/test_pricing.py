import pytest

from src.haulscore.models.domain import CustomerRecord
from src.haulscore.services.pricing import (
    PricingFactors,
    analyze_pricing,
    assess_serviceability,
    pricing_recommendation,
    route_density,
    serviceability_score,
    suggested_price,
)

ORIGIN = (38.90, -77.25)


def _customer(cid: str, lat: float, lng: float, status: str = "Serviced") -> CustomerRecord:
    return CustomerRecord(
        customer_id=cid,
        name=f"Customer {cid}",
        latitude=lat,
        longitude=lng,
        customer_type="Subscription",
        service_status=status,
    )


def test_route_density_thresholds():
    assert route_density(5) == "High"
    assert route_density(4) == "Medium"
    assert route_density(2) == "Medium"
    assert route_density(1) == "Low"


def test_dense_route_price_hits_floor():
    factors = PricingFactors(
        route_density="High",
        nearest_distance_miles=0.02,
        customers_within_500ft=3,
        customers_within_1000ft=6,
    )

    decision = analyze_pricing(factors)

    assert decision.suggested_price == 24
    assert decision.serviceability_score == 100
    assert decision.recommendation == "Accept"
    assert decision.tier_description == "Premium Route - High Density"


def test_isolated_stop_pays_premium_and_is_declined():
    factors = PricingFactors(
        route_density="Low",
        nearest_distance_miles=1.5,
        customers_within_500ft=0,
        customers_within_1000ft=0,
    )

    decision = analyze_pricing(factors)

    assert decision.suggested_price == 40
    assert decision.serviceability_score == 40
    assert decision.recommendation == "Decline"
    assert decision.tier_description == "Premium Route - Isolated Location"


def test_only_one_proximity_adjustment_applies():
    factors = PricingFactors(
        route_density="Medium",
        nearest_distance_miles=1.2,
        customers_within_500ft=1,
        customers_within_1000ft=2,
    )

    assert suggested_price(factors) == 29


def test_extra_carts_add_to_price():
    factors = PricingFactors(
        route_density="Medium",
        nearest_distance_miles=0.05,
        customers_within_500ft=1,
        customers_within_1000ft=3,
        number_of_carts=3,
    )

    assert suggested_price(factors) == 45


def test_serviceability_score_is_clamped():
    factors = PricingFactors("Low", 5.0, 0, 0)

    assert serviceability_score(factors) == 30
    assert pricing_recommendation(75) == "Accept"
    assert pricing_recommendation(74.9) == "Borderline"
    assert pricing_recommendation(49) == "Decline"


def test_assess_serviceability_counts_neighbours_and_skips_cancelled():
    lat, lng = ORIGIN
    # 0.001 degrees of latitude is about 365 feet
    neighbours = [_customer(f"N{index}", lat + 0.001, lng + index * 0.0001) for index in range(5)]
    cancelled = _customer("X", lat, lng, status="Cancelled")

    assessment = assess_serviceability(lat, lng, neighbours + [cancelled])

    assert assessment.factors.customers_within_500ft == 5
    assert assessment.factors.route_density == "High"
    assert assessment.decision.suggested_price == 24
    assert assessment.decision.recommendation == "Accept"
    assert assessment.nearest_customer_id == "N0"
    assert assessment.nearest_customer_distance.endswith("feet")


def test_assess_serviceability_without_customers():
    assessment = assess_serviceability(*ORIGIN, [], number_of_carts=2)

    assert assessment.nearest_customer_id is None
    assert assessment.nearest_customer_distance == "N/A"
    assert assessment.factors.nearest_distance_miles == 0.0
    assert assessment.decision.suggested_price == pytest.approx(44.0)
    assert assessment.decision.recommendation == "Borderline"
