import math

import pytest

from src.haulscore.config import FleetConfig
from src.haulscore.data.facilities import DEPOT
from src.haulscore.errors import MissingLocationError
from src.haulscore.models.domain import CustomerRecord
from src.haulscore.services.bidding import (
    BidRequirements,
    bid_recommendation,
    classify_proximity,
    comparable_baseline,
    current_utilization_percent,
    evaluate_bid,
    fleet_feasibility,
    parse_rfp_text,
    routing_impact,
    service_compatibility,
    service_days_per_week,
    strategic_fit,
)
from src.haulscore.services.geospatial import haversine_miles

PROSE_RFP = """Association: Oak Ridge HOA
Total of 350 homes located in Vienna, VA.
Collection twice per week, recycling included.
Service must begin no earlier than 8am.
The board requests a 3 year contract. No fuel surcharge will be accepted.
"""

STRUCTURED_RFP = """PDF Document Analysis Report
COMMUNITY: Maple Glen
LOCATION: Reston, VA
UNITS: 420
Special Requirements: Rear alley access, Bulk pickup twice a year
"""


def _hoa(cid: str, units: int, revenue: float, minutes: float) -> CustomerRecord:
    return CustomerRecord(
        customer_id=cid,
        name=f"HOA {cid}",
        latitude=DEPOT.latitude,
        longitude=DEPOT.longitude,
        customer_type="HOA",
        monthly_revenue=revenue,
        completion_time_minutes=minutes,
        units=units,
    )


def _requirements(homes: int, lat: float | None = DEPOT.latitude, lng: float | None = DEPOT.longitude, **extra):
    return BidRequirements(community_name="Test Community", homes=homes, latitude=lat, longitude=lng, **extra)


def test_parse_prose_rfp():
    requirements = parse_rfp_text(PROSE_RFP)

    assert requirements.community_name == "Oak Ridge HOA"
    assert requirements.homes == 350
    assert "Vienna" in requirements.location
    assert requirements.pickup_frequency == "Twice Weekly"
    assert requirements.time_windows == "8AM-12PM"
    assert requirements.contract_length_months == 36
    assert requirements.recycling_required
    assert not requirements.yard_waste_required
    assert not requirements.fuel_surcharge_allowed
    assert requirements.special_requirements == [
        "Morning pickup window restriction",
        "No fuel surcharge allowed",
    ]
    assert requirements.latitude is None and requirements.longitude is None


def test_parse_structured_report():
    requirements = parse_rfp_text(STRUCTURED_RFP)

    assert requirements.community_name == "Maple Glen"
    assert requirements.location == "Reston, VA"
    assert requirements.homes == 420
    assert requirements.special_requirements.count("Rear alley access") == 1
    assert "Bulk pickup twice a year" in requirements.special_requirements


def test_parse_empty_text_keeps_defaults():
    requirements = parse_rfp_text("   ")

    assert requirements.community_name == "Unknown Community"
    assert requirements.homes == 0
    assert requirements.contract_length_months == 12


@pytest.mark.parametrize(
    "depot, landfill, expected",
    [
        (10, 15, "close"),
        (10.1, 15, "moderate"),
        (20, 25, "moderate"),
        (20, 25.1, "far"),
    ],
)
def test_classify_proximity(depot, landfill, expected):
    assert classify_proximity(depot, landfill) == expected


def test_comparable_baseline_uses_similar_hoas():
    customers = [
        _hoa("match", units=550, revenue=550 * 30, minutes=550 * 1.5),
        _hoa("too-big", units=900, revenue=900 * 50, minutes=900),
        _hoa("no-units", units=0, revenue=1000, minutes=60),
    ]

    baseline = comparable_baseline(customers, 500)

    assert baseline.sample_size == 1
    assert baseline.revenue_per_home == pytest.approx(30.0)
    assert baseline.minutes_per_home == pytest.approx(1.5)


def test_comparable_baseline_falls_back():
    baseline = comparable_baseline([], 500)

    assert baseline.is_fallback
    assert (baseline.minutes_per_home, baseline.revenue_per_home) == (1.0, 25.0)


def test_fit_and_recommendation_rules():
    assert strategic_fit("close", 500) == "high"
    assert strategic_fit("moderate", 500) == "medium"
    assert strategic_fit("far", 800) == "low"
    assert strategic_fit("close", 99) == "low"
    assert bid_recommendation(50, "high", 0) == "bid"
    assert bid_recommendation(18, "high", 0) == "bid-with-conditions"
    assert bid_recommendation(50, "medium", 3) == "bid-with-conditions"
    assert bid_recommendation(14.9, "high", 0) == "do-not-bid"
    assert bid_recommendation(50, "low", 0) == "do-not-bid"


def test_large_nearby_community_gets_a_bid():
    customers = [_hoa("comparable", units=600, revenue=600 * 35, minutes=600)]

    analysis = evaluate_bid(_requirements(600), customers)

    assert analysis.proximity_score == "close"
    assert analysis.strategic_fit_score == "high"
    assert analysis.suggested_price_per_unit == pytest.approx(38.5)
    assert analysis.projected_gross_margin > 20
    assert analysis.risk_flags == []
    assert analysis.recommendation == "bid"
    assert analysis.comparable_customers == 1


def test_small_community_is_not_bid():
    analysis = evaluate_bid(_requirements(50), [])

    assert analysis.strategic_fit_score == "low"
    assert analysis.recommendation == "do-not-bid"


def test_requirements_raise_multipliers_and_flags():
    requirements = _requirements(
        600,
        lat=DEPOT.latitude + 0.4,
        time_windows="8AM-12PM",
        fuel_surcharge_allowed=False,
        recycling_required=True,
        yard_waste_required=True,
        special_requirements=["Gated community access required"],
    )

    analysis = evaluate_bid(requirements, [])

    assert analysis.proximity_score == "far"
    assert analysis.time_multiplier == pytest.approx(1.75)
    assert analysis.cost_multiplier == pytest.approx(1.58)
    assert analysis.risk_flags == [
        "High travel time to service area",
        "Restricted pickup time window",
        "No fuel surcharge protection",
        "Gated community access required",
    ]
    assert analysis.market_rate == pytest.approx(25.0 * 1.15)
    assert analysis.recommendation == "do-not-bid"


def test_missing_location_is_rejected():
    with pytest.raises(MissingLocationError):
        evaluate_bid(_requirements(600, lat=None, lng=None), [])


@pytest.mark.parametrize(
    "lat, lng",
    [
        (math.nan, math.nan),
        (math.inf, DEPOT.longitude),
        (DEPOT.latitude, -math.inf),
    ],
)
def test_non_finite_location_is_rejected(lat, lng):
    requirements = _requirements(600, lat=lat, lng=lng)

    assert not requirements.has_location
    with pytest.raises(MissingLocationError):
        evaluate_bid(requirements, [])


@pytest.mark.parametrize(
    "frequency, expected",
    [
        ("Weekly", 1),
        ("Twice Weekly", 2),
        ("Three Times Weekly", 3),
        ("Monday/Thursday", 2),
        ("", 1),
    ],
)
def test_service_days_per_week(frequency, expected):
    assert service_days_per_week(frequency) == expected


def _scheduled(cid: str, units: int, lat: float = DEPOT.latitude, **days) -> CustomerRecord:
    return CustomerRecord(customer_id=cid, name=cid, latitude=lat, longitude=DEPOT.longitude, units=units, **days)


def test_current_utilization_uses_the_busiest_weekday():
    customers = [
        _scheduled("a", 600, trash_days="Monday/Thursday"),
        _scheduled("b", 300, recycling_days="Monday"),
    ]

    assert current_utilization_percent(customers) == pytest.approx(50.0)
    assert current_utilization_percent([]) == 0.0


def test_large_contract_on_a_busy_fleet_needs_another_truck():
    customers = [
        _scheduled("a", 600, trash_days="Monday/Thursday"),
        _scheduled("b", 300, recycling_days="Monday"),
    ]

    feasibility = fleet_feasibility(
        customers,
        2000,
        DEPOT.latitude,
        DEPOT.longitude,
        pickup_frequency="Twice Weekly",
        recycling_frequency="Weekly",
    )

    assert feasibility.capacity.current_utilization_percent == pytest.approx(50.0)
    assert feasibility.capacity.utilization_after_contract_percent == pytest.approx(116.7)
    assert feasibility.capacity.additional_trucks_needed == 1
    assert feasibility.additional_truck_cost == pytest.approx(8500.0)
    assert feasibility.conditions == ["Requires 1 additional truck(s)"]
    assert feasibility.risk_level == "high"
    assert not feasibility.feasible


def test_small_contract_without_existing_routes_is_feasible():
    feasibility = fleet_feasibility([], 100, DEPOT.latitude, DEPOT.longitude)

    assert feasibility.capacity.utilization_after_contract_percent == pytest.approx(1.1)
    assert feasibility.routing.nearest_customer_miles == 0.0
    assert feasibility.total_additional_cost == 0.0
    assert feasibility.conditions == []
    assert feasibility.risk_level == "low"
    assert feasibility.feasible


def test_routing_impact_of_a_distant_location():
    customers = [_scheduled("a", 100)]
    lat = DEPOT.latitude + 0.1
    miles = haversine_miles(lat, DEPOT.longitude, DEPOT.latitude, DEPOT.longitude)

    impact = routing_impact(lat, DEPOT.longitude, customers)

    weekly_cost = miles * 10 * 0.65 + (miles / 30 * 10) * 44
    assert impact.nearest_customer_miles == pytest.approx(round(miles, 1))
    assert impact.drive_time_minutes == round(miles * 2)
    assert impact.monthly_route_extension_cost == pytest.approx(weekly_cost * 4.33, abs=0.01)
    assert impact.efficiency_impact_percent == -10.0
    assert fleet_feasibility(customers, 100, lat, DEPOT.longitude).risk_level == "medium"


def test_high_frequency_service_conflicts():
    moderate = service_compatibility(400, 3, 2)
    large = service_compatibility(600, 3, 2)

    assert not moderate.trash_compatible
    assert moderate.recycling_compatible
    assert len(moderate.conflicts) == 1
    assert not large.recycling_compatible
    assert large.conflicts == [
        "High-frequency trash service may require dedicated truck",
        "Multi-day recycling service may conflict with existing routes",
    ]


def test_fleet_conditions_are_reported_as_risk_flags():
    customers = [_hoa("comparable", units=600, revenue=600 * 35, minutes=600)]
    small_fleet = FleetConfig(total_trucks=1, homes_per_truck_per_day=100)

    analysis = evaluate_bid(_requirements(600), customers, fleet=small_fleet)

    assert analysis.fleet_feasibility is not None
    assert analysis.fleet_feasibility.capacity.additional_trucks_needed == 1
    assert analysis.risk_flags == ["Requires 1 additional truck(s)"]
    assert analysis.recommendation == "bid"
