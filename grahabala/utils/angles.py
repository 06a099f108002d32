"""Angle and zodiac-sign utilities shared across grahabala modules.

Every helper here works on positive residues: intermediate values may be
negative or exceed a full turn, results never are.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

__all__ = [
    "ZODIAC_SIGNS",
    "norm360",
    "circular_separation",
    "sign_index",
    "sign_name",
    "degree_in_sign",
    "is_odd_sign",
    "validate_sign_index",
    "InvalidSignError",
]


ZODIAC_SIGNS: Sequence[str] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)


class InvalidSignError(ValueError):
    """Raised when a sign index lies outside the 0–11 range."""


def norm360(x: float) -> float:
    """Normalize angle to [0, 360)."""

    y = math.fmod(float(x), 360.0)
    if y < 0:
        y += 360.0
    # fmod of a tiny negative value can round up to exactly 360.0
    return 0.0 if y >= 360.0 else y


def circular_separation(a: float, b: float) -> float:
    """Return the unsigned angular separation between ``a`` and ``b`` (0–180)."""

    return abs((a - b + 180.0) % 360.0 - 180.0)


def sign_index(longitude: float) -> int:
    """Return the zero-based zodiac sign index for ``longitude`` in degrees."""

    return int(math.floor(norm360(longitude) / 30.0)) % 12


def degree_in_sign(longitude: float) -> float:
    """Return the degree within the active sign (0–30)."""

    return norm360(longitude) % 30.0


def validate_sign_index(index: int) -> int:
    """Return ``index`` unchanged, raising :class:`InvalidSignError` when out of range."""

    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidSignError(f"sign index must be an integer, got {index!r}")
    if not 0 <= index <= 11:
        raise InvalidSignError(f"sign index {index} outside 0–11")
    return index


def sign_name(index: int) -> str:
    """Return the canonical sign name for ``index`` (0 = Aries)."""

    return ZODIAC_SIGNS[validate_sign_index(index)]


def is_odd_sign(index: int) -> bool:
    # Aries (index 0) is the first, odd sign.
    return validate_sign_index(index) % 2 == 0
