"""Domain models for customer, facility and service zone records."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from shapely.geometry import Point, Polygon

from ..errors import InvalidFacilitySetError, InvalidPolygonError


HOA = "HOA"
SUBSCRIPTION = "Subscription"
COMMERCIAL = "Commercial"
OTHER = "Other"
CUSTOMER_TYPES = (HOA, SUBSCRIPTION, COMMERCIAL)

SERVICED = "Serviced"
PENDING = "Pending"
CANCELLED = "Cancelled"
SERVICE_STATUSES = (SERVICED, PENDING, CANCELLED)


def coerce_float(value: Any, default: float = 0.0, *, minimum: Optional[float] = None) -> float:
    """Return ``value`` as a finite float, or ``default`` when it cannot be used."""

    if isinstance(value, str):
        value = value.replace("$", "").replace(",", "").strip()
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    if minimum is not None and number < minimum:
        return default
    return number


def coerce_int(value: Any, default: int = 0, *, minimum: Optional[int] = None) -> int:
    number = coerce_float(value, float(default))
    result = int(number)
    if minimum is not None and result < minimum:
        return default
    return result


def normalize_customer_type(value: Any) -> str:
    label = str(value or "").strip()
    for known in CUSTOMER_TYPES:
        if label.lower() == known.lower():
            return known
    return OTHER


def normalize_service_status(value: Any) -> str:
    label = str(value or "").strip()
    for known in SERVICE_STATUSES:
        if label.lower() == known.lower():
            return known
    return PENDING


@dataclass(frozen=True, slots=True)
class CustomerRecord:
    """Snapshot of a customer supplied by the dashboard's data layer.

    Numeric fields that are missing, negative or non-finite are replaced by
    zero; unknown types fall into the ``Other`` bucket.
    """

    customer_id: str
    name: str
    latitude: float
    longitude: float
    customer_type: str = HOA
    monthly_revenue: float = 0.0
    completion_time_minutes: float = 0.0
    units: int = 1
    address: str = ""
    service_status: str = SERVICED
    trash_days: str = ""
    recycling_days: str = ""
    yard_waste_days: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", coerce_float(self.latitude))
        object.__setattr__(self, "longitude", coerce_float(self.longitude))
        object.__setattr__(self, "customer_type", normalize_customer_type(self.customer_type))
        object.__setattr__(self, "monthly_revenue", coerce_float(self.monthly_revenue, minimum=0.0))
        object.__setattr__(
            self, "completion_time_minutes", coerce_float(self.completion_time_minutes, minimum=0.0)
        )
        object.__setattr__(self, "units", coerce_int(self.units, minimum=0))
        object.__setattr__(self, "service_status", normalize_service_status(self.service_status))

    @property
    def is_hoa(self) -> bool:
        return self.customer_type == HOA

    @property
    def is_subscription(self) -> bool:
        return self.customer_type == SUBSCRIPTION


@dataclass(frozen=True, slots=True)
class FacilityRecord:
    """A depot or landfill with coordinates."""

    name: str
    latitude: float
    longitude: float
    address: str = ""


@dataclass(frozen=True, slots=True)
class FacilitySet:
    """The fixed facility dataset: one depot and at least one landfill."""

    depot: FacilityRecord
    landfills: tuple[FacilityRecord, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "landfills", tuple(self.landfills))
        if not self.landfills:
            raise InvalidFacilitySetError("At least one landfill is required.")


@dataclass(frozen=True, slots=True)
class ServiceZone:
    """A named service area; vertices are ``(lng, lat)`` pairs of a closed ring."""

    name: str
    vertices: tuple[tuple[float, float], ...] = field(default_factory=tuple)
    _polygon: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ring = tuple((float(lng), float(lat)) for lng, lat in self.vertices)
        object.__setattr__(self, "vertices", ring)
        if len(set(ring)) < 3:
            raise InvalidPolygonError(
                f"Service zone '{self.name}' needs at least 3 distinct vertices, got {len(set(ring))}."
            )
        object.__setattr__(self, "_polygon", Polygon(ring))

    def to_polygon(self) -> Polygon:
        return self._polygon

    def contains(self, lat: float, lng: float) -> bool:
        return self._polygon.contains(Point(lng, lat))

    @property
    def centroid(self) -> tuple[float, float]:
        """Centroid as ``(lat, lng)``."""

        point = self._polygon.centroid
        return (point.y, point.x)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Bounding box as ``(min_lat, min_lng, max_lat, max_lng)``."""

        min_lng, min_lat, max_lng, max_lat = self._polygon.bounds
        return (min_lat, min_lng, max_lat, max_lng)


def build_zone(name: str, vertices: Sequence[Sequence[float]]) -> ServiceZone:
    """Build a zone from ``[lng, lat(, alt)]`` vertex lists such as GeoJSON rings."""

    return ServiceZone(name=name, vertices=tuple((point[0], point[1]) for point in vertices))
