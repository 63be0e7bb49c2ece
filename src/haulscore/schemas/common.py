"""Shared request models: customers, facilities, service zones and rate cards."""

from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from ..config import DEFAULT_ASSUMPTIONS, EconomicAssumptions
from ..data.customers_repository import load_configured_customers
from ..data.facilities import DEFAULT_FACILITIES, DEFAULT_SERVICE_ZONES
from ..models.domain import HOA, SERVICED, CustomerRecord, FacilityRecord, FacilitySet, ServiceZone, build_zone


class CustomerModel(BaseModel):
    customer_id: str
    name: str = ""
    latitude: float
    longitude: float
    customer_type: str = Field(default=HOA, description="HOA, Subscription, Commercial or Other.")
    monthly_revenue: float = 0.0
    completion_time_minutes: float = 0.0
    units: int = 1
    address: str = ""
    service_status: str = SERVICED
    trash_days: str = ""
    recycling_days: str = ""
    yard_waste_days: str = ""

    def to_record(self) -> CustomerRecord:
        return CustomerRecord(**self.model_dump())


class FacilityModel(BaseModel):
    name: str
    latitude: float
    longitude: float
    address: str = ""

    def to_record(self) -> FacilityRecord:
        return FacilityRecord(**self.model_dump())


class FacilitySetModel(BaseModel):
    depot: FacilityModel
    landfills: List[FacilityModel]

    def to_facility_set(self) -> FacilitySet:
        return FacilitySet(
            depot=self.depot.to_record(),
            landfills=tuple(landfill.to_record() for landfill in self.landfills),
        )


class ServiceZoneModel(BaseModel):
    name: str
    coordinates: List[List[float]] = Field(..., description="Ring of [lng, lat] pairs, GeoJSON order.")

    def to_zone(self) -> ServiceZone:
        return build_zone(self.name, self.coordinates)


class PortfolioRequest(BaseModel):
    """Base request carrying the data every analysis runs against.

    Omitted fields fall back to the configured customer export, the built-in
    facilities and service zones, and the default rate card.
    """

    customers: Optional[List[CustomerModel]] = None
    facilities: Optional[FacilitySetModel] = None
    zones: Optional[List[ServiceZoneModel]] = None
    assumptions: Optional[EconomicAssumptions] = None

    def customer_records(self) -> Sequence[CustomerRecord]:
        if self.customers is None:
            return load_configured_customers()
        return [customer.to_record() for customer in self.customers]

    def facility_set(self) -> FacilitySet:
        if self.facilities is None:
            return DEFAULT_FACILITIES
        return self.facilities.to_facility_set()

    def service_zones(self) -> Sequence[ServiceZone]:
        if self.zones is None:
            return DEFAULT_SERVICE_ZONES
        return [zone.to_zone() for zone in self.zones]

    def rate_card(self) -> EconomicAssumptions:
        return self.assumptions or DEFAULT_ASSUMPTIONS
