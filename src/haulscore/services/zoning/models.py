"""Expansion opportunity value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

ZoneRiskLevel = Literal["low", "medium", "high"]


@dataclass(slots=True)
class OpportunityZone:
    """A grid cell of subscription customers worth converting to denser service."""

    center_lat: float
    center_lng: float
    member_count: int
    member_ids: List[str]
    avg_revenue: float
    avg_distance_from_depot: float
    potential_roi_percent: float
    nearby_hoa_count: int
    nearby_hoa_ids: List[str]
    risk_level: ZoneRiskLevel
    reasoning: str


@dataclass(slots=True)
class ClusteringResult:
    opportunities: List[OpportunityZone]
    metadata: dict = field(default_factory=dict)

    def counts_by_risk(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for zone in self.opportunities:
            counts[zone.risk_level] = counts.get(zone.risk_level, 0) + 1
        return counts
