"""Grid clustering of subscription customers into expansion opportunity zones."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Sequence

import numpy as np

from ...models.domain import CustomerRecord, FacilityRecord
from ..geospatial import haversine_miles
from .models import ClusteringResult, OpportunityZone, ZoneRiskLevel

logger = logging.getLogger(__name__)


class GridClustering:
    """Bucket subscription customers into fixed grid cells and rank the cells.

    Features:
    - Cells are ``1 / grid_divisions`` degrees wide (about 2.5 miles at 25)
    - Cells with fewer than ``min_members`` subscriptions are ignored
    - ROI assumes an HOA contract earns ``hoa_efficiency_factor`` times the
      cell's current subscription revenue
    """

    def __init__(
        self,
        *,
        grid_divisions: int = 25,
        min_members: int = 3,
        hoa_radius_miles: float = 5.0,
        hoa_efficiency_factor: float = 2.5,
        dense_cell_members: int = 8,
    ) -> None:
        if grid_divisions < 1:
            raise ValueError("grid_divisions must be >= 1")
        self.grid_divisions = grid_divisions
        self.min_members = min_members
        self.hoa_radius_miles = hoa_radius_miles
        self.hoa_efficiency_factor = hoa_efficiency_factor
        self.dense_cell_members = dense_cell_members

    def _snap(self, values: np.ndarray) -> np.ndarray:
        # Half-up rounding to the nearest grid line
        return np.floor(values * self.grid_divisions + 0.5) / self.grid_divisions

    def _group_cells(self, subscriptions: Sequence[CustomerRecord]) -> dict[tuple[float, float], list[CustomerRecord]]:
        coordinates = np.array([(c.latitude, c.longitude) for c in subscriptions], dtype=float)
        snapped = self._snap(coordinates)
        cells: dict[tuple[float, float], list[CustomerRecord]] = defaultdict(list)
        for customer, (grid_lat, grid_lng) in zip(subscriptions, snapped):
            cells[(float(grid_lat), float(grid_lng))].append(customer)
        return cells

    def _assess_risk(self, nearby_hoas: int, avg_distance: float, members: int) -> tuple[ZoneRiskLevel, str]:
        if nearby_hoas >= 2 and avg_distance < 15:
            risk: ZoneRiskLevel = "low"
            reasoning = "Strong HOA presence nearby, reasonable distance"
        elif nearby_hoas >= 1 and avg_distance < 20:
            risk = "medium"
            reasoning = "Some HOA presence, moderate distance"
        else:
            risk = "high"
            reasoning = "Limited HOA presence or high distance"

        if members >= self.dense_cell_members:
            reasoning += ", High subscription density"
            if risk == "high":
                risk = "medium"
        return risk, reasoning

    def potential_roi_percent(self, avg_revenue: float, members: int, current_revenue: float) -> float:
        if current_revenue <= 0:
            return 0.0
        projected = avg_revenue * members * self.hoa_efficiency_factor
        return (projected - current_revenue) / current_revenue * 100

    def generate(
        self,
        *,
        depot: FacilityRecord,
        customers: Sequence[CustomerRecord],
        min_roi_percent: float = 0.0,
    ) -> ClusteringResult:
        subscriptions = [customer for customer in customers if customer.is_subscription]
        hoas = [customer for customer in customers if customer.is_hoa]
        if not subscriptions:
            return ClusteringResult([], metadata={"strategy": "grid", "error": "No subscription customers provided"})

        cells = self._group_cells(subscriptions)
        opportunities: list[OpportunityZone] = []
        skipped_cells = 0

        for (grid_lat, grid_lng), members in cells.items():
            if len(members) < self.min_members:
                skipped_cells += 1
                continue

            revenues = np.array([member.monthly_revenue for member in members], dtype=float)
            distances = np.array(
                [
                    haversine_miles(depot.latitude, depot.longitude, member.latitude, member.longitude)
                    for member in members
                ],
                dtype=float,
            )
            total_revenue = float(revenues.sum())
            avg_revenue = float(revenues.mean())
            avg_distance = float(distances.mean())

            nearby = [
                hoa
                for hoa in hoas
                if haversine_miles(grid_lat, grid_lng, hoa.latitude, hoa.longitude) <= self.hoa_radius_miles
            ]
            risk, reasoning = self._assess_risk(len(nearby), avg_distance, len(members))

            opportunities.append(
                OpportunityZone(
                    center_lat=grid_lat,
                    center_lng=grid_lng,
                    member_count=len(members),
                    member_ids=[member.customer_id for member in members],
                    avg_revenue=avg_revenue,
                    avg_distance_from_depot=avg_distance,
                    potential_roi_percent=self.potential_roi_percent(avg_revenue, len(members), total_revenue),
                    nearby_hoa_count=len(nearby),
                    nearby_hoa_ids=[hoa.customer_id for hoa in nearby],
                    risk_level=risk,
                    reasoning=reasoning,
                )
            )

        qualifying = [zone for zone in opportunities if zone.potential_roi_percent >= min_roi_percent]
        qualifying.sort(key=lambda zone: zone.potential_roi_percent, reverse=True)
        logger.debug(
            "Grid clustering: %d cells, %d below member minimum, %d opportunities above %.1f%% ROI",
            len(cells),
            skipped_cells,
            len(qualifying),
            min_roi_percent,
        )

        metadata = {
            "strategy": "grid",
            "grid_divisions": self.grid_divisions,
            "cells": len(cells),
            "cells_below_minimum": skipped_cells,
            "min_roi_percent": min_roi_percent,
            "subscription_customers": len(subscriptions),
        }
        return ClusteringResult(qualifying, metadata=metadata)


def find_opportunities(
    customers: Sequence[CustomerRecord],
    depot: FacilityRecord,
    min_roi_percent: float = 0.0,
) -> list[OpportunityZone]:
    return GridClustering().generate(depot=depot, customers=customers, min_roi_percent=min_roi_percent).opportunities
