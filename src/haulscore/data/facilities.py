"""Default facility and service zone datasets for the Northern Virginia operation."""

from __future__ import annotations

from ..models.domain import FacilityRecord, FacilitySet, ServiceZone, build_zone

DEPOT = FacilityRecord(
    name="Vehicle Depot",
    latitude=38.923867,
    longitude=-77.235103,
    address="8401 Westpark Dr. McLean VA 22012",
)

FAIRFAX_LANDFILL = FacilityRecord(
    name="Fairfax Landfill",
    latitude=38.85319175,
    longitude=-77.37514310524120,
    address="4618E West Ox Rd, Fairfax, VA 22030",
)

LORTON_LANDFILL = FacilityRecord(
    name="Lorton Landfill",
    latitude=38.691352122449,
    longitude=-77.2377658367347,
    address="9850 Furnace Rd, Lorton, VA 22079",
)

DEFAULT_FACILITIES = FacilitySet(depot=DEPOT, landfills=(FAIRFAX_LANDFILL, LORTON_LANDFILL))

# Subscription customers are only viable inside these polygons.
DEFAULT_SERVICE_ZONES: tuple[ServiceZone, ...] = (
    build_zone(
        "Dunn Loring Zone",
        [
            [-77.2392687, 38.896546],
            [-77.2488818, 38.8820488],
            [-77.2277674, 38.8764362],
            [-77.2169528, 38.8899992],
            [-77.2392687, 38.896546],
        ],
    ),
    build_zone(
        "Polo Fields Zone",
        [
            [-77.3910159, 38.9504015],
            [-77.3929041, 38.9448277],
            [-77.3847502, 38.940355],
            [-77.3810595, 38.9432923],
            [-77.3792564, 38.9453617],
            [-77.3771972, 38.9485993],
            [-77.3825615, 38.9507021],
            [-77.3910159, 38.9504015],
        ],
    ),
)
