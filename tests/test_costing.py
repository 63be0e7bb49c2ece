import pytest

from src.haulscore.config import DEFAULT_ASSUMPTIONS, EconomicAssumptions
from src.haulscore.services.costing import mileage_time_cost, rfp_monthly_cost, visit_cost, visits_per_month


def test_mileage_time_cost_uses_overview_rates():
    cost = mileage_time_cost(10, 60)

    assert cost.fuel_cost == pytest.approx(25.0)
    assert cost.labor_cost == pytest.approx(43.8)
    assert cost.total_cost == pytest.approx(68.8)


def test_mileage_time_cost_treats_invalid_inputs_as_zero():
    cost = mileage_time_cost(float("nan"), -5)

    assert cost.total_cost == 0.0


def test_visit_cost_charges_crew_for_service_and_travel_time():
    cost = visit_cost(25, 60)

    assert cost.service_hours == pytest.approx(1.0)
    assert cost.travel_hours == pytest.approx(1.0)
    assert cost.labor_cost == pytest.approx(88.0)
    assert cost.fuel_cost == pytest.approx(25 / 6 * 4.11)
    assert cost.total_cost == pytest.approx(cost.labor_cost + cost.fuel_cost)


@pytest.mark.parametrize(
    "trash, recycling, yard, expected",
    [
        ("Mon", "", "", 4),
        ("Mon/Thu", "Wed", "", 13),
        ("Mon/Wed/Fri", "Tue", "Thu", 22),
        ("", None, "", 0),
    ],
)
def test_visits_per_month(trash, recycling, yard, expected):
    assert visits_per_month(trash, recycling, yard) == expected


def test_rfp_monthly_cost_components():
    cost = rfp_monthly_cost(100, 1.0, 5.0, 10.0)
    weeks = DEFAULT_ASSUMPTIONS.weeks_per_month
    hours = 100 / 60

    assert cost.minutes_per_pass == pytest.approx(100.0)
    assert cost.labor_cost == pytest.approx(hours * 85 * weeks)
    assert cost.fuel_cost == pytest.approx(20 * 0.65 * weeks * 4)
    assert cost.equipment_cost == pytest.approx(hours * 25 * weeks)
    assert cost.dumping_fee == pytest.approx(100 * 0.3 * 45)
    assert cost.total_cost == pytest.approx(cost.labor_cost + cost.fuel_cost + cost.equipment_cost + cost.dumping_fee)


def test_rfp_cost_multiplier_scales_total():
    base = rfp_monthly_cost(200, 1.2, 8.0, 12.0)
    loaded = rfp_monthly_cost(200, 1.2, 8.0, 12.0, cost_multiplier=1.25)

    assert loaded.total_cost == pytest.approx(base.total_cost * 1.25)


def test_custom_assumptions_flow_through():
    cheap_fuel = EconomicAssumptions(cost_per_mile=1.0)

    assert mileage_time_cost(10, 0, cheap_fuel).total_cost == pytest.approx(10.0)
    assert cheap_fuel.crew_rate_per_hour == pytest.approx(44.0)
