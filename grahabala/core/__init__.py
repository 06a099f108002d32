"""Core catalogues shared by the grahabala engine."""

from __future__ import annotations

from .bodies import (
    ALL_PLANETS,
    CLASSICAL_PLANETS,
    FEMALE_PLANETS,
    LUNAR_NODES,
    MALE_PLANETS,
    NATURAL_BENEFICS,
    NATURAL_MALEFICS,
    NEUTRAL_PLANETS,
    Planet,
    canonical_planet,
)

__all__ = [
    "ALL_PLANETS",
    "CLASSICAL_PLANETS",
    "FEMALE_PLANETS",
    "LUNAR_NODES",
    "MALE_PLANETS",
    "NATURAL_BENEFICS",
    "NATURAL_MALEFICS",
    "NEUTRAL_PLANETS",
    "Planet",
    "canonical_planet",
]
