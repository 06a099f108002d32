"""Reference tables for classical Jyotish dignity and rulership data.

The constants in this module are drawn from widely cited Vedic astrology
sources:

* Sign rulership, exaltation and debilitation follow *Brihat Parashara Hora
  Shastra* (BPHS) chapter 3. Debilitation is always the seventh sign from
  exaltation, so only the exaltation table is stored.
* Deep exaltation points (paramochcha) are the degree values used for Uchcha
  Bala in BPHS chapter 27; the deep debilitation point lies 180° away.
* Natural friendship (naisargika maitri) mirrors BPHS chapter 3, verses
  55–58. The table is not symmetric.
* Combustion orbs are the values reproduced by B. V. Raman in *Graha and
  Bhava Balas* (1984, chapter 5); Mercury and Venus use a tighter orb while
  retrograde.
* Mean daily motions and Naisargika values are the Shadbala constants of
  BPHS chapter 27.

Every table is keyed by :class:`~grahabala.core.bodies.Planet` and covers the
seven classical planets only; the lunar nodes are absent by construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ..core.bodies import Planet

__all__ = [
    "SIGN_LORDS",
    "EXALTATION_SIGNS",
    "OWN_SIGNS",
    "MOOLATRIKONA_SIGNS",
    "DEEP_EXALTATION_POINTS",
    "NATURAL_RELATIONSHIPS",
    "COMBUSTION_ORBS",
    "COMBUSTION_ORBS_RETROGRADE",
    "MEAN_DAILY_MOTION",
    "NAISARGIKA_BALA",
    "DIG_BALA_STRONGEST_HOUSE",
    "SPECIAL_ASPECTS",
]


# Sign index (0 = Aries) → ruling planet.
SIGN_LORDS: tuple[Planet, ...] = (
    Planet.MARS,
    Planet.VENUS,
    Planet.MERCURY,
    Planet.MOON,
    Planet.SUN,
    Planet.MERCURY,
    Planet.VENUS,
    Planet.MARS,
    Planet.JUPITER,
    Planet.SATURN,
    Planet.SATURN,
    Planet.JUPITER,
)

EXALTATION_SIGNS: Mapping[Planet, int] = MappingProxyType(
    {
        Planet.SUN: 0,
        Planet.MOON: 1,
        Planet.MARS: 9,
        Planet.MERCURY: 5,
        Planet.JUPITER: 3,
        Planet.VENUS: 11,
        Planet.SATURN: 6,
    }
)

OWN_SIGNS: Mapping[Planet, frozenset[int]] = MappingProxyType(
    {
        Planet.SUN: frozenset({4}),
        Planet.MOON: frozenset({3}),
        Planet.MARS: frozenset({0, 7}),
        Planet.MERCURY: frozenset({2, 5}),
        Planet.JUPITER: frozenset({8, 11}),
        Planet.VENUS: frozenset({1, 6}),
        Planet.SATURN: frozenset({9, 10}),
    }
)

MOOLATRIKONA_SIGNS: Mapping[Planet, int] = MappingProxyType(
    {
        Planet.SUN: 4,
        Planet.MOON: 1,
        Planet.MARS: 0,
        Planet.MERCURY: 5,
        Planet.JUPITER: 8,
        Planet.VENUS: 6,
        Planet.SATURN: 10,
    }
)

# Absolute sidereal longitude of maximum exaltation.
DEEP_EXALTATION_POINTS: Mapping[Planet, float] = MappingProxyType(
    {
        Planet.SUN: 10.0,
        Planet.MOON: 33.0,
        Planet.MARS: 298.0,
        Planet.MERCURY: 165.0,
        Planet.JUPITER: 95.0,
        Planet.VENUS: 357.0,
        Planet.SATURN: 200.0,
    }
)

# +1 friend, 0 neutral, -1 enemy, read as "how the row planet regards the column".
NATURAL_RELATIONSHIPS: Mapping[Planet, Mapping[Planet, int]] = MappingProxyType(
    {
        Planet.SUN: {
            Planet.MOON: 1,
            Planet.MARS: 1,
            Planet.JUPITER: 1,
            Planet.MERCURY: 0,
            Planet.VENUS: -1,
            Planet.SATURN: -1,
        },
        Planet.MOON: {
            Planet.SUN: 1,
            Planet.MERCURY: 1,
            Planet.MARS: 0,
            Planet.JUPITER: 0,
            Planet.VENUS: 0,
            Planet.SATURN: 0,
        },
        Planet.MARS: {
            Planet.SUN: 1,
            Planet.MOON: 1,
            Planet.JUPITER: 1,
            Planet.MERCURY: -1,
            Planet.VENUS: 0,
            Planet.SATURN: 0,
        },
        Planet.MERCURY: {
            Planet.SUN: 1,
            Planet.VENUS: 1,
            Planet.MOON: -1,
            Planet.MARS: 0,
            Planet.JUPITER: 0,
            Planet.SATURN: 0,
        },
        Planet.JUPITER: {
            Planet.SUN: 1,
            Planet.MOON: 1,
            Planet.MARS: 1,
            Planet.MERCURY: -1,
            Planet.VENUS: -1,
            Planet.SATURN: 0,
        },
        Planet.VENUS: {
            Planet.MERCURY: 1,
            Planet.SATURN: 1,
            Planet.SUN: -1,
            Planet.MOON: -1,
            Planet.MARS: 0,
            Planet.JUPITER: 0,
        },
        Planet.SATURN: {
            Planet.MERCURY: 1,
            Planet.VENUS: 1,
            Planet.SUN: -1,
            Planet.MOON: -1,
            Planet.MARS: -1,
            Planet.JUPITER: 0,
        },
    }
)

# Combustion orbs measured in degrees of separation from the Sun.
COMBUSTION_ORBS: Mapping[Planet, float] = MappingProxyType(
    {
        Planet.MOON: 12.0,
        Planet.MARS: 17.0,
        Planet.MERCURY: 14.0,
        Planet.JUPITER: 11.0,
        Planet.VENUS: 10.0,
        Planet.SATURN: 15.0,
    }
)

COMBUSTION_ORBS_RETROGRADE: Mapping[Planet, float] = MappingProxyType(
    {
        Planet.MERCURY: 12.0,
        Planet.VENUS: 8.0,
    }
)

# Degrees per day; luminaries have no Chesta Bala and are omitted.
MEAN_DAILY_MOTION: Mapping[Planet, float] = MappingProxyType(
    {
        Planet.MARS: 0.524,
        Planet.MERCURY: 1.383,
        Planet.JUPITER: 0.083,
        Planet.VENUS: 1.2,
        Planet.SATURN: 0.033,
    }
)

NAISARGIKA_BALA: Mapping[Planet, float] = MappingProxyType(
    {
        Planet.SUN: 60.0,
        Planet.MOON: 51.43,
        Planet.VENUS: 42.85,
        Planet.JUPITER: 34.28,
        Planet.MERCURY: 25.71,
        Planet.MARS: 17.14,
        Planet.SATURN: 8.57,
    }
)

DIG_BALA_STRONGEST_HOUSE: Mapping[Planet, int] = MappingProxyType(
    {
        Planet.SUN: 10,
        Planet.MARS: 10,
        Planet.SATURN: 7,
        Planet.MOON: 4,
        Planet.VENUS: 4,
        Planet.MERCURY: 1,
        Planet.JUPITER: 1,
    }
)

# Aspect angles cast in addition to the universal 180° aspect.
SPECIAL_ASPECTS: Mapping[Planet, tuple[float, ...]] = MappingProxyType(
    {
        Planet.MARS: (90.0, 210.0),
        Planet.JUPITER: (120.0, 240.0),
        Planet.SATURN: (60.0, 270.0),
    }
)
