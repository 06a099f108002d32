"""Bhava (house) strength built on Shadbala and drishti."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ...chart.models import VedicChart
from ...config.settings import Settings, resolve_settings
from ...core.bodies import CLASSICAL_PLANETS, Planet
from ...jyotish.aspects import aspect_strength, drishti_virupas
from .shadbala import ShadbalaResult, calculate_shadbala

logger = logging.getLogger(__name__)

__all__ = [
    "BhavaStrengthCategory",
    "HouseStrengthResult",
    "HouseStrengthSummary",
    "KendraType",
    "calculate_house_strength",
    "house_drishti_strength",
    "house_scores",
    "kendra_type",
    "summarize_house_strength",
]


class KendraType(str, Enum):
    KENDRA = "kendra"
    PANAPHARA = "panaphara"
    APOKLIMA = "apoklima"

    @property
    def points(self) -> float:
        return _KENDRADI_POINTS[self]


_KENDRADI_POINTS: Mapping[KendraType, float] = {
    KendraType.KENDRA: 60.0,
    KendraType.PANAPHARA: 30.0,
    KendraType.APOKLIMA: 15.0,
}


class BhavaStrengthCategory(str, Enum):
    """House strength bands, weakest first."""

    ATI_KRISHNA = "ati_krishna"
    KRISHNA = "krishna"
    MADHYAMA = "madhyama"
    SHADBALARDHA = "shadbalardha"
    SHADBALAPURNA = "shadbalapurna"
    ATI_SHADBALAPURNA = "ati_shadbalapurna"

    @property
    def rank(self) -> int:
        return list(BhavaStrengthCategory).index(self)

    @classmethod
    def from_total(cls, total: float) -> BhavaStrengthCategory:
        if total >= 150.0:
            return cls.ATI_SHADBALAPURNA
        if total >= 120.0:
            return cls.SHADBALAPURNA
        if total >= 90.0:
            return cls.SHADBALARDHA
        if total >= 60.0:
            return cls.MADHYAMA
        if total >= 30.0:
            return cls.KRISHNA
        return cls.ATI_KRISHNA


@dataclass(frozen=True)
class HouseStrengthResult:
    house: int
    lord: Planet
    lord_strength: float
    kendradi_strength: float
    drishti_strength: float
    kendra_type: KendraType

    @property
    def total(self) -> float:
        return self.lord_strength + self.kendradi_strength + self.drishti_strength

    @property
    def category(self) -> BhavaStrengthCategory:
        return BhavaStrengthCategory.from_total(self.total)


@dataclass(frozen=True)
class HouseStrengthSummary:
    results: Mapping[int, HouseStrengthResult]
    average: float
    strongest_house: int
    weakest_house: int


def kendra_type(house: int) -> KendraType:
    if not 1 <= house <= 12:
        raise ValueError(f"house {house} outside 1–12")
    return (KendraType.KENDRA, KendraType.PANAPHARA, KendraType.APOKLIMA)[(house - 1) % 3]


def house_drishti_strength(
    chart: VedicChart, house: int, *, settings: Settings | None = None
) -> float:
    """Return the net drishti on ``house``'s cusp, in quarter virupas."""

    settings = resolve_settings(settings)
    cusp = chart.houses.cusps[house - 1]
    total = 0.0
    for planet in CLASSICAL_PLANETS:
        info = chart.planet(planet)
        if info is None:
            continue
        total += drishti_virupas(
            planet, aspect_strength(planet, info.longitude, cusp, settings=settings)
        )
    return total


def calculate_house_strength(
    chart: VedicChart,
    shadbala: Mapping[Planet, ShadbalaResult] | None = None,
    *,
    settings: Settings | None = None,
) -> dict[int, HouseStrengthResult]:
    """Score all twelve houses of ``chart``.

    Each score is the house lord's Shadbala total plus the 60/30/15 kendradi
    value plus the net drishti on the cusp. ``shadbala`` is computed when not
    supplied; a lord missing from it contributes 0.
    """

    settings = resolve_settings(settings)
    if shadbala is None:
        shadbala = calculate_shadbala(chart, settings=settings)
    results: dict[int, HouseStrengthResult] = {}
    for house in range(1, 13):
        lord = chart.house_lord(house)
        lord_result = shadbala.get(lord)
        kind = kendra_type(house)
        results[house] = HouseStrengthResult(
            house=house,
            lord=lord,
            lord_strength=lord_result.total if lord_result is not None else 0.0,
            kendradi_strength=kind.points,
            drishti_strength=house_drishti_strength(chart, house, settings=settings),
            kendra_type=kind,
        )
    logger.debug({"event": "house_strength_computed", "varga": chart.varga})
    return results


def house_scores(results: Mapping[int, HouseStrengthResult]) -> dict[int, float]:
    return {house: result.total for house, result in results.items()}


def summarize_house_strength(
    results: Mapping[int, HouseStrengthResult],
) -> HouseStrengthSummary:
    if not results:
        raise ValueError("no house strength results to summarise")
    totals = house_scores(results)
    return HouseStrengthSummary(
        results=dict(results),
        average=sum(totals.values()) / len(totals),
        strongest_house=max(totals, key=lambda h: (totals[h], -h)),
        weakest_house=min(totals, key=lambda h: (totals[h], h)),
    )
