"""Immutable chart records shared by the strength engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType

from ..core.bodies import Planet, canonical_planet
from ..ephemeris.models import ChartLocation, PlanetPosition, SolarCycle
from ..jyotish.dignity import Dignity, sign_lord
from ..utils.angles import norm360, sign_index

__all__ = [
    "HouseSystem",
    "PlanetInfo",
    "VedicChart",
    "whole_sign_houses",
    "equal_houses",
]


@dataclass(frozen=True)
class HouseSystem:
    """Twelve house cusps plus the angles they were derived from."""

    system: str
    cusps: tuple[float, ...]
    ascendant: float
    midheaven: float

    def __post_init__(self) -> None:
        if len(self.cusps) != 12:
            raise ValueError(f"expected 12 house cusps, got {len(self.cusps)}")
        object.__setattr__(self, "cusps", tuple(norm360(c) for c in self.cusps))
        object.__setattr__(self, "ascendant", norm360(self.ascendant))
        object.__setattr__(self, "midheaven", norm360(self.midheaven))

    @property
    def ascendant_sign(self) -> int:
        return sign_index(self.ascendant)

    def house_for(self, longitude: float) -> int:
        """Return the house (1–12) containing ``longitude``."""

        if self.system == "whole_sign":
            return (sign_index(longitude) - self.ascendant_sign) % 12 + 1
        lon = norm360(longitude)
        for idx in range(12):
            start = self.cusps[idx]
            span = (self.cusps[(idx + 1) % 12] - start) % 360.0
            if (lon - start) % 360.0 < span:
                return idx + 1
        # Degenerate cusp tables (all spans zero) collapse into the first house.
        return 1


def whole_sign_houses(ascendant: float) -> HouseSystem:
    """Return whole-sign houses whose first cusp starts the ascendant's sign."""

    start = sign_index(ascendant)
    cusps = tuple(((start + i) % 12) * 30.0 for i in range(12))
    return HouseSystem("whole_sign", cusps, ascendant, ascendant + 270.0)


def equal_houses(ascendant: float, midheaven: float | None = None) -> HouseSystem:
    """Return equal houses of 30° measured from the exact ascendant degree."""

    cusps = tuple(norm360(ascendant + 30.0 * i) for i in range(12))
    mc = ascendant + 270.0 if midheaven is None else midheaven
    return HouseSystem("equal", cusps, ascendant, mc)


@dataclass(frozen=True, slots=True)
class PlanetInfo:
    """A planet's placement inside one chart (base or divisional)."""

    position: PlanetPosition
    house: int
    dignity: Dignity
    is_combust: bool = False
    position_in_subdivision: float | None = None
    subdivision_span: float | None = None

    def __post_init__(self) -> None:
        if not 1 <= self.house <= 12:
            raise ValueError(f"house {self.house} outside 1–12")

    @property
    def longitude(self) -> float:
        return self.position.longitude

    @property
    def planet(self) -> Planet:
        return self.position.planet

    @property
    def sign_index(self) -> int:
        return self.position.sign_index


@dataclass(frozen=True)
class VedicChart:
    """Immutable snapshot of planetary placements at one instant.

    ``varga`` is the divisional chart code (``"D1"`` for a base chart).
    Divisional charts are new :class:`VedicChart` values derived from a base
    chart, never mutations of it.
    """

    moment: datetime
    location: ChartLocation
    houses: HouseSystem
    planets: Mapping[Planet, PlanetInfo]
    solar_cycle: SolarCycle | None = None
    varga: str = "D1"

    def __post_init__(self) -> None:
        object.__setattr__(self, "planets", MappingProxyType(dict(self.planets)))

    @property
    def ascendant(self) -> float:
        return self.houses.ascendant

    @property
    def ascendant_sign(self) -> int:
        return self.houses.ascendant_sign

    def planet(self, planet: Planet | str) -> PlanetInfo | None:
        """Return ``planet``'s placement or ``None`` when it is absent.

        ``planet`` may also be a name or alias such as ``"guru"`` or
        ``"north_node"``; unknown names raise :class:`ValueError`.
        """

        return self.planets.get(canonical_planet(planet))

    @property
    def rahu(self) -> PlanetInfo | None:
        return self.planets.get(Planet.RAHU)

    @property
    def ketu(self) -> PlanetInfo | None:
        return self.planets.get(Planet.KETU)

    def house_lord(self, house: int) -> Planet:
        """Return the ruler of the sign occupying ``house`` (whole-sign count)."""

        if not 1 <= house <= 12:
            raise ValueError(f"house {house} outside 1–12")
        return sign_lord((self.ascendant_sign + house - 1) % 12)
