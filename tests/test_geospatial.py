import math

import pytest

from src.haulscore.data.facilities import DEFAULT_FACILITIES, DEFAULT_SERVICE_ZONES, DEPOT, FAIRFAX_LANDFILL
from src.haulscore.errors import InvalidFacilitySetError, InvalidPolygonError
from src.haulscore.models.domain import FacilitySet, ServiceZone, build_zone
from src.haulscore.services.geospatial import (
    depot_distance_miles,
    format_distance,
    haversine_miles,
    nearest_landfill_miles,
    point_in_polygon,
    zone_containing,
)


def test_haversine_is_symmetric_and_zero_for_same_point():
    forward = haversine_miles(DEPOT.latitude, DEPOT.longitude, FAIRFAX_LANDFILL.latitude, FAIRFAX_LANDFILL.longitude)
    backward = haversine_miles(FAIRFAX_LANDFILL.latitude, FAIRFAX_LANDFILL.longitude, DEPOT.latitude, DEPOT.longitude)

    assert forward == pytest.approx(backward)
    assert 8.0 < forward < 10.0
    assert haversine_miles(DEPOT.latitude, DEPOT.longitude, DEPOT.latitude, DEPOT.longitude) == 0.0


def test_haversine_returns_zero_for_non_finite_input():
    assert haversine_miles(math.nan, -77.2, 38.9, -77.2) == 0.0
    assert haversine_miles(38.9, math.inf, 38.9, -77.2) == 0.0


def test_zone_centroid_is_inside_and_depot_is_outside():
    dunn_loring = DEFAULT_SERVICE_ZONES[0]
    lat, lng = dunn_loring.centroid

    assert point_in_polygon(lat, lng, dunn_loring.vertices)
    assert not point_in_polygon(DEPOT.latitude, DEPOT.longitude, dunn_loring.vertices)
    assert zone_containing(lat, lng, DEFAULT_SERVICE_ZONES) is dunn_loring
    assert zone_containing(DEPOT.latitude, DEPOT.longitude, DEFAULT_SERVICE_ZONES) is None


def test_points_far_outside_the_bounding_box_are_not_contained():
    dunn_loring = DEFAULT_SERVICE_ZONES[0]

    assert not point_in_polygon(0.0, 0.0, dunn_loring.vertices)
    assert not point_in_polygon(45.0, -100.0, dunn_loring.vertices)
    assert zone_containing(45.0, -100.0, DEFAULT_SERVICE_ZONES) is None


def test_concave_ring_excludes_its_notch():
    # U shape open to the north between lng 1 and 2
    ring = [(0.0, 0.0), (3.0, 0.0), (3.0, 3.0), (2.0, 3.0), (2.0, 1.0), (1.0, 1.0), (1.0, 3.0), (0.0, 3.0)]
    zone = ServiceZone(name="Horseshoe", vertices=tuple(ring))

    assert point_in_polygon(2.0, 0.5, ring)
    assert point_in_polygon(2.0, 2.5, ring)
    assert point_in_polygon(0.5, 1.5, ring)
    assert not point_in_polygon(2.0, 1.5, ring)
    assert zone_containing(2.0, 1.5, [zone]) is None
    assert zone_containing(2.0, 0.5, [zone]) is zone
    assert zone.to_polygon() is zone.to_polygon()


def test_polygon_with_fewer_than_three_vertices_is_rejected():
    with pytest.raises(InvalidPolygonError):
        point_in_polygon(38.9, -77.2, [(-77.2, 38.9), (-77.3, 38.8), (-77.2, 38.9)])
    with pytest.raises(InvalidPolygonError):
        ServiceZone(name="Line", vertices=((-77.2, 38.9), (-77.3, 38.8)))


def test_build_zone_accepts_geojson_vertices_with_altitude():
    zone = build_zone("Square", [[-77.0, 38.0, 0], [-76.0, 38.0, 0], [-76.0, 39.0, 0], [-77.0, 39.0, 0]])

    assert zone.bounds == (38.0, -77.0, 39.0, -76.0)
    assert zone_containing(38.5, -76.5, [zone]) is zone


def test_facility_distances():
    assert depot_distance_miles(DEPOT.latitude, DEPOT.longitude, DEFAULT_FACILITIES) == 0.0
    # Fairfax is the closer of the two landfills to the depot
    expected = haversine_miles(DEPOT.latitude, DEPOT.longitude, FAIRFAX_LANDFILL.latitude, FAIRFAX_LANDFILL.longitude)
    assert nearest_landfill_miles(DEPOT.latitude, DEPOT.longitude, DEFAULT_FACILITIES) == pytest.approx(expected)


def test_facility_set_requires_a_landfill():
    with pytest.raises(InvalidFacilitySetError):
        FacilitySet(depot=DEPOT, landfills=())


@pytest.mark.parametrize(
    "miles, expected",
    [
        (0.05, "264 feet"),
        (0.5, "2.6k feet"),
        (3.4, "3.4 miles"),
    ],
)
def test_format_distance(miles, expected):
    assert format_distance(miles) == expected
