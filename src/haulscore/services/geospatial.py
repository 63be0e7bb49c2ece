"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from shapely.geometry import Point, Polygon

from ..errors import InvalidPolygonError
from ..models.domain import FacilitySet, ServiceZone

EARTH_RADIUS_MILES = 3959.0
FEET_PER_MILE = 5280.0


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Compute distance in miles between two coordinates using the Haversine formula."""

    if not all(math.isfinite(value) for value in (lat1, lng1, lat2, lng2)):
        return 0.0

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def point_in_polygon(lat: float, lng: float, vertices: Sequence[tuple[float, float]]) -> bool:
    """Return True if the point lies strictly inside the ring of ``(lng, lat)`` vertices.

    The last vertex implicitly connects back to the first. Points on an edge
    are not contained.
    """

    if len(set(map(tuple, vertices))) < 3:
        raise InvalidPolygonError("A polygon needs at least 3 distinct vertices.")

    return Polygon(vertices).contains(Point(lng, lat))


def zone_containing(lat: float, lng: float, zones: Iterable[ServiceZone]) -> Optional[ServiceZone]:
    """Return the first zone containing the point, or None."""

    for zone in zones:
        min_lat, min_lng, max_lat, max_lng = zone.bounds
        if not (min_lat <= lat <= max_lat and min_lng <= lng <= max_lng):
            continue
        if zone.contains(lat, lng):
            return zone
    return None


def depot_distance_miles(lat: float, lng: float, facilities: FacilitySet) -> float:
    return haversine_miles(facilities.depot.latitude, facilities.depot.longitude, lat, lng)


def nearest_landfill_miles(lat: float, lng: float, facilities: FacilitySet) -> float:
    return min(
        haversine_miles(lat, lng, landfill.latitude, landfill.longitude)
        for landfill in facilities.landfills
    )


def miles_to_feet(miles: float) -> float:
    return miles * FEET_PER_MILE


def feet_to_miles(feet: float) -> float:
    return feet / FEET_PER_MILE


def format_distance(distance_miles: float) -> str:
    """Format a distance for display, switching units at 1,000 feet and 1 mile."""

    feet = miles_to_feet(distance_miles)
    if feet < 1000:
        return f"{math.floor(feet + 0.5)} feet"
    if distance_miles < 1:
        return f"{feet / 1000:.1f}k feet"
    return f"{distance_miles:.1f} miles"
