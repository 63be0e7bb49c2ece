"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ...data.facilities import DEFAULT_FACILITIES, DEFAULT_SERVICE_ZONES

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {
        "status": "ok",
        "depot": DEFAULT_FACILITIES.depot.name,
        "landfills": len(DEFAULT_FACILITIES.landfills),
        "service_zones": len(DEFAULT_SERVICE_ZONES),
        "customer_file_configured": settings.customer_file is not None,
    }
