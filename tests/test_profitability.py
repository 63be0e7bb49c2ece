import pytest

from src.haulscore.data.facilities import DEFAULT_SERVICE_ZONES, DEPOT
from src.haulscore.models.domain import CustomerRecord
from src.haulscore.services.profitability import (
    analyze_service_cost,
    assess_risk,
    build_risk_report,
    composite_profitability_score,
    composite_risk_level,
    cost_efficiency_rating,
    revenue_per_minute,
    revenue_tier,
    score_customer,
    score_customers,
    strategic_score,
    summarize_portfolio,
)

# Roughly 24 miles north of the depot
FAR_LAT = DEPOT.latitude + 0.35


def _customer(
    cid: str,
    *,
    lat: float = DEPOT.latitude,
    lng: float = DEPOT.longitude,
    customer_type: str = "HOA",
    revenue: float = 1000.0,
    minutes: float = 60.0,
    trash: str = "",
) -> CustomerRecord:
    return CustomerRecord(
        customer_id=cid,
        name=f"Customer {cid}",
        latitude=lat,
        longitude=lng,
        customer_type=customer_type,
        monthly_revenue=revenue,
        completion_time_minutes=minutes,
        trash_days=trash,
    )


def test_revenue_per_minute_guards_zero_minutes():
    assert revenue_per_minute(1000, 0) == 0.0
    assert revenue_per_minute(1200, 60) == pytest.approx(20.0)


def test_revenue_tier_boundaries():
    assert revenue_tier(5.0) == "High"
    assert revenue_tier(4.999) == "Moderate"
    assert revenue_tier(2.0) == "Moderate"
    assert revenue_tier(1.99) == "Low"


def test_cost_efficiency_rating_boundaries():
    assert cost_efficiency_rating(60) == "excellent"
    assert cost_efficiency_rating(40) == "good"
    assert cost_efficiency_rating(20) == "fair"
    assert cost_efficiency_rating(19.9) == "poor"


def test_composite_score_is_clamped():
    assert composite_profitability_score(200, 5, "HOA") == 100
    assert composite_profitability_score(0, 30, "Subscription") == 10
    assert composite_profitability_score(60, 18, "Commercial") == 70
    assert composite_risk_level(100) == "low"
    assert composite_risk_level(55) == "medium"
    assert composite_risk_level(40) == "high"


def test_subscription_outside_zones_is_not_viable():
    result = score_customer(_customer("S1", customer_type="Subscription"))

    assert not result.in_service_zone
    assert not result.is_viable
    assert "Subscription outside service zones" in result.risk_flags


def test_subscription_inside_zone_is_viable():
    lat, lng = DEFAULT_SERVICE_ZONES[0].centroid
    result = score_customer(_customer("S2", lat=lat, lng=lng, customer_type="Subscription"))

    assert result.is_viable
    assert result.service_zone == "Dunn Loring Zone"


def test_hoa_outside_zones_stays_viable_and_flags_distance():
    result = score_customer(_customer("H1", lat=FAR_LAT))

    assert result.is_viable
    assert result.distance_to_depot_miles > 20
    assert "High travel cost from depot" in result.risk_flags


def test_missing_completion_time_is_flagged():
    result = score_customer(_customer("H2", minutes=0))

    assert result.revenue_per_minute == 0.0
    assert result.tier == "Low"
    assert "Missing completion time" in result.risk_flags


def test_score_customers_preserves_input_order():
    customers = [_customer(f"C{index}", revenue=100.0 * (index + 1)) for index in range(12)]

    results = score_customers(customers, max_workers=4)

    assert [item.customer_id for item in results] == [customer.customer_id for customer in customers]


def test_strategic_score_red_flags_low_rpm():
    score = strategic_score(_customer("H3", revenue=1200, minutes=60))

    # rpm of 20 earns the penalty even for a nearby HOA
    assert score.profitability_score == 50
    assert score.risk_level == "medium"
    assert score.is_red_flag


def test_service_cost_uses_schedule_and_round_trip():
    analysis = analyze_service_cost(_customer("H4", trash="Mon"))

    assert analysis.visits_per_month == 4
    assert analysis.visit.distance_miles == 0.0
    assert analysis.monthly_cost == pytest.approx(44.0 * 4)
    assert analysis.rating == "excellent"


def test_assess_risk_for_low_value_subscription():
    risk = assess_risk(_customer("S3", customer_type="Subscription", revenue=1200, minutes=60))

    assert risk.risk_score == 50
    assert risk.recommended_action == "phase-out"
    assert risk.reason == "Very low revenue efficiency + Single home inefficiency"


def test_assess_risk_bundles_distant_marginal_customer():
    risk = assess_risk(_customer("H5", lat=FAR_LAT, revenue=3600, minutes=60))

    assert risk.risk_score == 35
    assert risk.recommended_action == "bundle"
    assert risk.reason == "Marginal revenue efficiency + High travel cost"


def test_risk_report_filters_and_sorts():
    customers = [
        _customer("healthy", revenue=6000, minutes=60),
        _customer("marginal", revenue=2400, minutes=60),
        _customer("poor", revenue=600, minutes=60),
    ]

    report = build_risk_report(customers)

    assert [item.customer_id for item in report] == ["poor", "marginal"]
    by_revenue = build_risk_report(customers, sort_by="revenue")
    assert by_revenue[0].revenue_per_minute <= by_revenue[-1].revenue_per_minute


def test_summarize_portfolio():
    results = score_customers([_customer("A", revenue=600), _customer("B", revenue=1200)])

    summary = summarize_portfolio(results)

    assert summary.customer_count == 2
    assert summary.total_monthly_revenue == pytest.approx(1800.0)
    assert summary.average_revenue_per_minute == pytest.approx(15.0)
    assert summary.tier_counts == {"High": 2}
    assert summarize_portfolio([]).customer_count == 0
