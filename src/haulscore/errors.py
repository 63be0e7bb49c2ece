"""Exceptions raised for caller-side data defects."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for errors surfaced by the scoring engine."""


class InvalidPolygonError(EngineError, ValueError):
    """A service zone polygon has fewer than three distinct vertices."""


class InvalidFacilitySetError(EngineError, ValueError):
    """The facility set is missing its depot or landfills."""


class MissingLocationError(EngineError, ValueError):
    """A bid was submitted without geocoded coordinates."""
