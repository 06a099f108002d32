"""Vimsopaka Bala: twenty-point dignity strength over the Shodasavarga."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from ...chart.models import VedicChart
from ...core.bodies import CLASSICAL_PLANETS, Planet
from ...jyotish.dignity import Dignity
from .varga import DivisionalChartType, calculate_divisional_chart

__all__ = [
    "SHODASAVARGA_WEIGHTS",
    "VIMSOPAKA_POINTS",
    "VimsopakaCategory",
    "VimsopakaResult",
    "calculate_vimsopaka_bala",
]

_D = DivisionalChartType

SHODASAVARGA_WEIGHTS: Mapping[DivisionalChartType, float] = MappingProxyType(
    {
        _D.D1: 3.5,
        _D.D2: 1.0,
        _D.D3: 1.0,
        _D.D4: 0.5,
        _D.D7: 0.5,
        _D.D9: 3.0,
        _D.D10: 0.5,
        _D.D12: 0.5,
        _D.D16: 0.5,
        _D.D20: 0.5,
        _D.D24: 0.5,
        _D.D27: 0.5,
        _D.D30: 1.0,
        _D.D40: 0.5,
        _D.D45: 0.5,
        _D.D60: 4.0,
    }
)

VIMSOPAKA_POINTS: Mapping[Dignity, float] = MappingProxyType(
    {
        Dignity.EXALTED: 20.0,
        Dignity.MOOLATRIKONA: 18.0,
        Dignity.OWN_SIGN: 15.0,
        Dignity.GREAT_FRIEND: 12.0,
        Dignity.FRIEND_SIGN: 10.0,
        Dignity.NEUTRAL_SIGN: 8.0,
        Dignity.ENEMY_SIGN: 5.0,
        Dignity.GREAT_ENEMY: 3.0,
        Dignity.DEBILITATED: 1.0,
    }
)

MAX_VIMSOPAKA = 20.0


class VimsopakaCategory(str, Enum):
    ATIPOORNA = "atipoorna"
    POORNA = "poorna"
    ATIMADHYA = "atimadhya"
    MADHYA = "madhya"
    ADHAMA = "adhama"
    DURGA = "durga"
    SANGAT_DURGA = "sangat_durga"

    @classmethod
    def from_score(cls, score: float) -> VimsopakaCategory:
        for threshold, category in (
            (18.0, cls.ATIPOORNA),
            (16.0, cls.POORNA),
            (14.0, cls.ATIMADHYA),
            (12.0, cls.MADHYA),
            (10.0, cls.ADHAMA),
            (8.0, cls.DURGA),
        ):
            if score >= threshold:
                return category
        return cls.SANGAT_DURGA


@dataclass(frozen=True)
class VimsopakaResult:
    planet: Planet
    score: float
    dignities: Mapping[DivisionalChartType, Dignity]

    @property
    def category(self) -> VimsopakaCategory:
        return VimsopakaCategory.from_score(self.score)


def calculate_vimsopaka_bala(chart: VedicChart) -> dict[Planet, VimsopakaResult]:
    """Score each classical planet on the 0–20 Vimsopaka scale.

    Weights sum to 18.5 and are rescaled so that a planet exalted in every
    varga scores exactly 20.
    """

    scale = MAX_VIMSOPAKA / sum(SHODASAVARGA_WEIGHTS.values())
    vargas = {
        varga: calculate_divisional_chart(chart, varga) for varga in SHODASAVARGA_WEIGHTS
    }
    results: dict[Planet, VimsopakaResult] = {}
    for planet in CLASSICAL_PLANETS:
        if chart.planet(planet) is None:
            continue
        dignities: dict[DivisionalChartType, Dignity] = {}
        score = 0.0
        for varga, weight in SHODASAVARGA_WEIGHTS.items():
            info = vargas[varga].planet(planet)
            if info is None:
                continue
            dignities[varga] = info.dignity
            score += weight * scale * VIMSOPAKA_POINTS[info.dignity] / MAX_VIMSOPAKA
        results[planet] = VimsopakaResult(
            planet=planet, score=score, dignities=MappingProxyType(dignities)
        )
    return results
