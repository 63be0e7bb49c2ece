import pytest

from src.haulscore.data.facilities import DEFAULT_FACILITIES, DEPOT
from src.haulscore.models.domain import CustomerRecord
from src.haulscore.services.geospatial import depot_distance_miles
from src.haulscore.services.simulation import additional_distance_miles, simulate_route_addition


def _customer(
    cid: str,
    *,
    lat: float = DEPOT.latitude,
    lng: float = DEPOT.longitude,
    customer_type: str = "HOA",
    revenue: float = 1000.0,
    minutes: float = 60.0,
) -> CustomerRecord:
    return CustomerRecord(
        customer_id=cid,
        name=f"Customer {cid}",
        latitude=lat,
        longitude=lng,
        customer_type=customer_type,
        monthly_revenue=revenue,
        completion_time_minutes=minutes,
    )


def test_additional_distance_rules():
    assert additional_distance_miles(10.0, 1.0) == pytest.approx(3.0)
    assert additional_distance_miles(10.0, 5.0) == pytest.approx(5.0)
    assert additional_distance_miles(10.0, None) == pytest.approx(20.0)


def test_low_margin_stop_is_declined():
    # One crew hour costs $44, so $51 of revenue leaves roughly a 14% margin
    result = simulate_route_addition(_customer("new", revenue=51.0), [_customer("existing")])

    assert result.additional_distance_miles == 0.0
    assert result.total_cost == pytest.approx(44.0)
    assert result.profit_margin_percent < 20
    assert result.recommendation == "decline"
    assert result.reasoning == (
        "Low profit margin - below 20% threshold • Excellent route synergy with existing customers"
    )
    assert result.nearest_customer_id == "existing"


def test_profitable_stop_near_existing_customers_is_accepted():
    result = simulate_route_addition(_customer("new", revenue=10000.0), [_customer("existing")])

    assert result.recommendation == "accept"
    assert result.reasoning == "Strong profit potential and efficiency • Excellent route synergy with existing customers"
    assert result.net_profit == pytest.approx(10000.0 - 44.0)


def test_low_efficiency_subscription_is_negotiated():
    stop = _customer("new", customer_type="Subscription", revenue=4000.0)

    result = simulate_route_addition(stop, [_customer("existing")])

    assert result.revenue_per_minute == pytest.approx(4000.0 / 60)
    assert result.recommendation == "negotiate"
    assert "Single home subscription below efficiency target" in result.reasoning


def test_isolated_stop_pays_full_round_trip():
    stop = _customer("new", lat=DEPOT.latitude + 0.35, revenue=10000.0)

    result = simulate_route_addition(stop, [])

    depot_miles = depot_distance_miles(stop.latitude, stop.longitude, DEFAULT_FACILITIES)
    assert result.additional_distance_miles == pytest.approx(depot_miles * 2)
    assert result.nearest_customer_id is None
    assert result.recommendation == "negotiate"
    assert "High travel distance increases costs" in result.reasoning
    assert "synergy" not in result.reasoning


def test_zero_revenue_stop_has_zero_margin():
    result = simulate_route_addition(_customer("new", revenue=0.0), [])

    assert result.profit_margin_percent == 0.0
    assert result.revenue_per_minute == 0.0
    assert result.recommendation == "decline"


def test_stop_already_in_portfolio_is_not_its_own_neighbor():
    stop = _customer("new", lat=DEPOT.latitude + 0.35, revenue=10000.0)

    result = simulate_route_addition(stop, [stop, _customer("existing")])

    assert result.nearest_customer_id == "existing"
    assert result.nearest_customer_miles > 0
