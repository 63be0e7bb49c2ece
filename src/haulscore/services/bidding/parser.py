"""Keyword extraction of bid requirements from free-form RFP text.

Two layouts are understood: the structured report produced by document
analysis (``COMMUNITY:`` / ``LOCATION:`` / ``UNITS:`` headings) and plain
prose, where requirements are picked up by keyword.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .models import BidRequirements

logger = logging.getLogger(__name__)

_STRUCTURED_MARKER = re.compile(r"^\s*COMMUNITY:", re.MULTILINE)
_STRUCTURED_COMMUNITY = re.compile(r"COMMUNITY:\s*([^\n]+)", re.IGNORECASE)
_STRUCTURED_LOCATION = re.compile(r"LOCATION:\s*([^\n]+)", re.IGNORECASE)
_STRUCTURED_UNITS = re.compile(r"UNITS:\s*(\d+)", re.IGNORECASE)
_STRUCTURED_SCOPE = re.compile(r"ESTIMATED SCOPE:\s*(\d+)\s*units", re.IGNORECASE)
_SPECIAL_REQUIREMENTS = re.compile(r"Special Requirements:\s*([^\n]+)", re.IGNORECASE)
_ACCESS_NOTES = re.compile(r"Access Notes:\s*([^\n]+)", re.IGNORECASE)

_COMMUNITY_NAME = re.compile(
    r"\b(?:community|association|estate|manor|complex|village|park|hoa|neighborhood)\b[ \t]*:?[ \t]*([^\s,][^\n\r,]{0,49})",
    re.IGNORECASE,
)
_HOMES = re.compile(r"(\d+)\s*(?:homes|units|residences|dwellings|houses)\b", re.IGNORECASE)
_LOCATION = re.compile(r"(?:address|location|situated|located)\s*:?\s*([^\n\r]{1,100})", re.IGNORECASE)
_CONTRACT_YEARS = re.compile(r"(\d+)\s*-?\s*years?\b", re.IGNORECASE)
_FREQUENCY = re.compile(r"\b(once|twice|two|three|\d+)\s*(?:times?|x)?\s*(?:per|a)?\s*week", re.IGNORECASE)

_MORNING_WINDOW = re.compile(r"\b8\s*am\b|\b8:00\b|morning only", re.IGNORECASE)
_NO_FUEL_SURCHARGE = re.compile(r"no fuel surcharge|fuel surcharge not allowed", re.IGNORECASE)
_RECYCLING = re.compile(r"recycl", re.IGNORECASE)
_YARD_WASTE = re.compile(r"yard (?:waste|debris)|landscaping|organic", re.IGNORECASE)
_CONTAMINATION = re.compile(r"contamination|penalt|\bfines?\b", re.IGNORECASE)
_GATED = re.compile(r"\bgated?\b", re.IGNORECASE)
_REAR_ALLEY = re.compile(r"\brear\b|\balley", re.IGNORECASE)
_CONTAINERS = re.compile(r"\bcarts?\b|\bcontainers?\b", re.IGNORECASE)

MORNING_WINDOW = "8AM-12PM"


def _first_group(pattern: re.Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1).strip() if match else None


def _frequency_label(token: str) -> Optional[str]:
    token = token.lower()
    if token in {"twice", "two", "2"}:
        return "Twice Weekly"
    if token in {"three", "3"}:
        return "Three Times Weekly"
    if token in {"once", "1"}:
        return "Weekly"
    return None


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _add_requirement(requirements: BidRequirements, text: str) -> None:
    if text not in requirements.special_requirements:
        requirements.special_requirements.append(text)


def parse_rfp_text(text: str) -> BidRequirements:
    """Extract bid requirements from RFP text.

    Fields that cannot be found keep the defaults of :class:`BidRequirements`.
    Coordinates are never inferred from the text.
    """

    requirements = BidRequirements()
    if not text or not text.strip():
        return requirements

    structured = _STRUCTURED_MARKER.search(text) is not None

    if structured:
        requirements.community_name = _first_group(_STRUCTURED_COMMUNITY, text) or requirements.community_name
        requirements.location = _first_group(_STRUCTURED_LOCATION, text) or requirements.location
        units = _first_group(_STRUCTURED_UNITS, text) or _first_group(_STRUCTURED_SCOPE, text)
        if units:
            requirements.homes = int(units)
        for pattern in (_SPECIAL_REQUIREMENTS, _ACCESS_NOTES):
            section = _first_group(pattern, text)
            if section:
                for item in _split_list(section):
                    _add_requirement(requirements, item)
    else:
        requirements.community_name = _first_group(_COMMUNITY_NAME, text) or requirements.community_name
        requirements.location = _first_group(_LOCATION, text) or requirements.location

    if requirements.homes == 0:
        homes = _first_group(_HOMES, text)
        if homes:
            requirements.homes = int(homes)

    if _MORNING_WINDOW.search(text):
        requirements.time_windows = MORNING_WINDOW
        _add_requirement(requirements, "Morning pickup window restriction")

    if _NO_FUEL_SURCHARGE.search(text):
        requirements.fuel_surcharge_allowed = False
        _add_requirement(requirements, "No fuel surcharge allowed")

    requirements.recycling_required = _RECYCLING.search(text) is not None
    requirements.yard_waste_required = _YARD_WASTE.search(text) is not None

    if _CONTAMINATION.search(text):
        _add_requirement(requirements, "Contamination penalties")
    if _GATED.search(text):
        _add_requirement(requirements, "Gated community access required")
    if _REAR_ALLEY.search(text):
        _add_requirement(requirements, "Rear alley access")
    if _CONTAINERS.search(text):
        _add_requirement(requirements, "Specific container requirements")

    years = _first_group(_CONTRACT_YEARS, text)
    if years and int(years) > 0:
        requirements.contract_length_months = int(years) * 12

    frequency = _first_group(_FREQUENCY, text)
    if frequency:
        requirements.pickup_frequency = _frequency_label(frequency) or requirements.pickup_frequency

    logger.debug(
        "Parsed RFP for %s: %d homes, %d special requirements",
        requirements.community_name,
        requirements.homes,
        len(requirements.special_requirements),
    )
    return requirements
