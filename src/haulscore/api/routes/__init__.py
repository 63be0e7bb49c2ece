"""Route group exports."""

from . import bids, customers, health, pricing, simulation, zoning

__all__ = ["bids", "customers", "health", "pricing", "simulation", "zoning"]
