"""Planet catalogue and classical groupings used across the Jyotisa engine."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "Planet",
    "CLASSICAL_PLANETS",
    "LUNAR_NODES",
    "ALL_PLANETS",
    "MALE_PLANETS",
    "FEMALE_PLANETS",
    "NEUTRAL_PLANETS",
    "NATURAL_BENEFICS",
    "NATURAL_MALEFICS",
    "canonical_planet",
]


class Planet(str, Enum):
    """Grahas recognised by the strength engine.

    The enum value is the canonical display name so tables keyed by
    :class:`Planet` serialise to the names used in classical references.
    """

    SUN = "Sun"
    MOON = "Moon"
    MARS = "Mars"
    MERCURY = "Mercury"
    JUPITER = "Jupiter"
    VENUS = "Venus"
    SATURN = "Saturn"
    RAHU = "Rahu"
    KETU = "Ketu"

    @property
    def is_node(self) -> bool:
        return self in LUNAR_NODES

    @property
    def is_classical(self) -> bool:
        return self in CLASSICAL_PLANETS

    def __str__(self) -> str:
        return self.value


CLASSICAL_PLANETS: tuple[Planet, ...] = (
    Planet.SUN,
    Planet.MOON,
    Planet.MARS,
    Planet.MERCURY,
    Planet.JUPITER,
    Planet.VENUS,
    Planet.SATURN,
)

LUNAR_NODES: tuple[Planet, ...] = (Planet.RAHU, Planet.KETU)

ALL_PLANETS: tuple[Planet, ...] = CLASSICAL_PLANETS + LUNAR_NODES

# Gender classes from BPHS ch. 3, used by Ojayugmarasyamsa and Drekkana bala.
MALE_PLANETS = frozenset({Planet.SUN, Planet.MARS, Planet.JUPITER})
FEMALE_PLANETS = frozenset({Planet.MOON, Planet.VENUS})
NEUTRAL_PLANETS = frozenset({Planet.MERCURY, Planet.SATURN})

# Drik Bala polarity: benefic aspects add, malefic aspects subtract.
NATURAL_BENEFICS = frozenset({Planet.JUPITER, Planet.VENUS, Planet.MERCURY, Planet.MOON})
NATURAL_MALEFICS = frozenset({Planet.SUN, Planet.MARS, Planet.SATURN})


_PLANET_ALIASES: dict[str, Planet] = {
    "sun": Planet.SUN,
    "surya": Planet.SUN,
    "moon": Planet.MOON,
    "chandra": Planet.MOON,
    "mars": Planet.MARS,
    "mangala": Planet.MARS,
    "mercury": Planet.MERCURY,
    "budha": Planet.MERCURY,
    "jupiter": Planet.JUPITER,
    "guru": Planet.JUPITER,
    "venus": Planet.VENUS,
    "shukra": Planet.VENUS,
    "saturn": Planet.SATURN,
    "shani": Planet.SATURN,
    "rahu": Planet.RAHU,
    "mean_node": Planet.RAHU,
    "true_node": Planet.RAHU,
    "north_node": Planet.RAHU,
    "ketu": Planet.KETU,
    "south_node": Planet.KETU,
}


def canonical_planet(name: str | Planet) -> Planet:
    """Return the :class:`Planet` for ``name`` (case and alias insensitive)."""

    if isinstance(name, Planet):
        return name
    key = str(name).strip().lower().replace(" ", "_").replace("-", "_")
    try:
        return _PLANET_ALIASES[key]
    except KeyError as exc:
        raise ValueError(f"Unknown planet '{name}'") from exc
