"""Protocol describing the ephemeris collaborator consumed by chart builders."""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, runtime_checkable

from ..core.bodies import Planet
from .models import ChartLocation, PlanetPosition, SolarCycle

__all__ = ["EphemerisProvider", "AngleSet"]


AngleSet = tuple[float, tuple[float, ...], float]
"""``(ascendant, cusps, midheaven)`` in sidereal degrees."""


@runtime_checkable
class EphemerisProvider(Protocol):
    """Minimal interface required to build a :class:`~grahabala.chart.VedicChart`."""

    def position_of(
        self, planet: Planet, moment: datetime, location: ChartLocation
    ) -> PlanetPosition:
        """Return the sidereal position of ``planet`` at ``moment``."""

    def sunrise_sunset(self, day: date, location: ChartLocation) -> SolarCycle:
        """Return sunrise/sunset for the local ``day``; bounds may be ``None``."""

    def angles(
        self, moment: datetime, location: ChartLocation, house_system: str
    ) -> AngleSet:
        """Return the sidereal ascendant, house cusps and midheaven."""
