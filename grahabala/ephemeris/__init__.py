"""Ephemeris collaborator interfaces and the Swiss Ephemeris implementation."""

from .models import ChartLocation, PlanetPosition, SolarCycle
from .provider import AngleSet, EphemerisProvider
from .swe import EphemerisUnavailableError, has_swe
from .swisseph_adapter import SwissEphemerisProvider, from_julian_day, julian_day

__all__ = [
    "AngleSet",
    "ChartLocation",
    "EphemerisProvider",
    "EphemerisUnavailableError",
    "PlanetPosition",
    "SolarCycle",
    "SwissEphemerisProvider",
    "from_julian_day",
    "has_swe",
    "julian_day",
]
