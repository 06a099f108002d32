"""Utility helpers (angles, signs) for grahabala."""

from __future__ import annotations

from .angles import (
    ZODIAC_SIGNS,
    InvalidSignError,
    circular_separation,
    degree_in_sign,
    is_odd_sign,
    norm360,
    sign_index,
    sign_name,
    validate_sign_index,
)

__all__ = [
    "ZODIAC_SIGNS",
    "InvalidSignError",
    "circular_separation",
    "degree_in_sign",
    "is_odd_sign",
    "norm360",
    "sign_index",
    "sign_name",
    "validate_sign_index",
]
