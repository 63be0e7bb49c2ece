"""Loading customers from the dashboard's CSV export."""

from __future__ import annotations

import csv
import functools
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from ..config import settings
from ..models.domain import SERVICED, CustomerRecord, coerce_float, coerce_int

logger = logging.getLogger(__name__)


def _field(row: Mapping[str, Any], *names: str) -> str:
    for name in names:
        value = row.get(name)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return ""


def parse_revenue(value: Any) -> float:
    """Parse a revenue cell such as ``"$1,200.00"``; invalid values become 0."""

    return coerce_float(value, minimum=0.0)


def customer_from_row(row: Mapping[str, Any], index: int = 0) -> CustomerRecord:
    """Build a :class:`CustomerRecord` from one export row.

    Rows without an id column are keyed by their HOA name, falling back to
    their position in the file. Units default to 1 and the status to
    ``Serviced``.
    """

    name = _field(row, "HOA Name", "name", "Name")
    customer_id = _field(row, "ID", "id", "Customer ID", "customer_id") or name or f"row-{index}"
    return CustomerRecord(
        customer_id=customer_id,
        name=name,
        latitude=coerce_float(_field(row, "latitude", "Latitude")),
        longitude=coerce_float(_field(row, "longitude", "Longitude")),
        customer_type=_field(row, "Type", "type"),
        monthly_revenue=parse_revenue(_field(row, "Monthly Revenue", "monthly_revenue")),
        completion_time_minutes=coerce_float(
            _field(row, "Average Completion Time in Minutes", "completion_time_minutes"), minimum=0.0
        ),
        units=coerce_int(_field(row, "Number of Units", "units"), 1, minimum=1),
        address=_field(row, "Full Address", "address"),
        service_status=_field(row, "Service Status", "service_status") or SERVICED,
        trash_days=_field(row, "Trash Collection"),
        recycling_days=_field(row, "Recycling Collection"),
        yard_waste_days=_field(row, "Yard Waste Collection"),
    )


def load_customers(source: Path) -> tuple[CustomerRecord, ...]:
    """Load customers from a dashboard CSV export."""

    if not source.exists():
        raise FileNotFoundError(f"Customer file not found: {source}")

    customers: list[CustomerRecord] = []
    skipped = 0
    with source.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Customer file '{source}' is missing a header row.")
        for index, row in enumerate(reader):
            if not _field(row, "latitude", "Latitude") or not _field(row, "longitude", "Longitude"):
                skipped += 1
                continue  # ignore records without coordinates
            customers.append(customer_from_row(row, index))

    if skipped:
        logger.debug("Skipped %d rows without coordinates in %s", skipped, source)
    logger.info("Loaded %d customers from %s", len(customers), source)
    return tuple(customers)


@functools.lru_cache(maxsize=1)
def load_configured_customers(source: Optional[Path] = None) -> tuple[CustomerRecord, ...]:
    """Customers from the configured export, or none when no file is configured."""

    csv_path = source or settings.customer_file
    if csv_path is None:
        return tuple()
    return load_customers(Path(csv_path))


def set_active_customer_file(path: Optional[Path]) -> None:
    """Update the active customer CSV and clear the cached load."""

    settings.customer_file = path
    load_configured_customers.cache_clear()
