"""Sign dignity and natural planetary relationships."""

from __future__ import annotations

from enum import Enum

from ..core.bodies import Planet
from ..utils.angles import validate_sign_index
from .data import (
    EXALTATION_SIGNS,
    MOOLATRIKONA_SIGNS,
    NATURAL_RELATIONSHIPS,
    OWN_SIGNS,
    SIGN_LORDS,
)

__all__ = [
    "Dignity",
    "Relationship",
    "exaltation_sign",
    "debilitation_sign",
    "own_signs",
    "moolatrikona_sign",
    "sign_lord",
    "relationship",
    "dignity",
]


class Dignity(str, Enum):
    """Placement categories ordered from strongest to weakest."""

    EXALTED = "exalted"
    MOOLATRIKONA = "moolatrikona"
    OWN_SIGN = "own_sign"
    GREAT_FRIEND = "great_friend"
    FRIEND_SIGN = "friend_sign"
    NEUTRAL_SIGN = "neutral_sign"
    ENEMY_SIGN = "enemy_sign"
    GREAT_ENEMY = "great_enemy"
    DEBILITATED = "debilitated"

    @property
    def rank(self) -> int:
        """Return 0 for the strongest placement and 8 for the weakest."""

        return _DIGNITY_ORDER.index(self)


_DIGNITY_ORDER: tuple[Dignity, ...] = tuple(Dignity)


class Relationship(str, Enum):
    FRIEND = "friend"
    NEUTRAL = "neutral"
    ENEMY = "enemy"


_RELATIONSHIP_FROM_SCORE = {
    1: Relationship.FRIEND,
    0: Relationship.NEUTRAL,
    -1: Relationship.ENEMY,
}


def exaltation_sign(planet: Planet) -> int | None:
    return EXALTATION_SIGNS.get(planet)


def debilitation_sign(planet: Planet) -> int | None:
    exalted = EXALTATION_SIGNS.get(planet)
    if exalted is None:
        return None
    return (exalted + 6) % 12


def own_signs(planet: Planet) -> frozenset[int]:
    return OWN_SIGNS.get(planet, frozenset())


def moolatrikona_sign(planet: Planet) -> int | None:
    return MOOLATRIKONA_SIGNS.get(planet)


def sign_lord(sign: int) -> Planet:
    """Return the planet ruling ``sign`` (0 = Aries)."""

    return SIGN_LORDS[validate_sign_index(sign)]


def relationship(planet: Planet, other: Planet) -> Relationship:
    """Return how ``planet`` naturally regards ``other``.

    The table is directional: the Moon regards Mercury as a friend while
    Mercury regards the Moon as an enemy. Nodes and self-comparisons are
    neutral.
    """

    score = NATURAL_RELATIONSHIPS.get(planet, {}).get(other, 0)
    return _RELATIONSHIP_FROM_SCORE[score]


def dignity(planet: Planet, sign: int) -> Dignity:
    """Classify ``planet`` placed in ``sign``.

    Precedence is fixed: exaltation, debilitation, own sign, moolatrikona,
    then the relationship with the sign lord (mutual friendship yields a
    great friend, one-way friendship a friend sign, and likewise for
    enmity). Lunar nodes always report :attr:`Dignity.NEUTRAL_SIGN`.
    """

    sign = validate_sign_index(sign)
    if not planet.is_classical:
        return Dignity.NEUTRAL_SIGN
    if sign == exaltation_sign(planet):
        return Dignity.EXALTED
    if sign == debilitation_sign(planet):
        return Dignity.DEBILITATED
    if sign in own_signs(planet):
        return Dignity.OWN_SIGN
    if sign == moolatrikona_sign(planet):
        return Dignity.MOOLATRIKONA

    lord = SIGN_LORDS[sign]
    forward = relationship(planet, lord)
    backward = relationship(lord, planet)
    if forward is Relationship.FRIEND:
        return Dignity.GREAT_FRIEND if backward is Relationship.FRIEND else Dignity.FRIEND_SIGN
    if forward is Relationship.ENEMY:
        return Dignity.GREAT_ENEMY if backward is Relationship.ENEMY else Dignity.ENEMY_SIGN
    return Dignity.NEUTRAL_SIGN
