"""Classical Shadbala (six-fold strength) for Jyotisa charts.

All six components are evaluated in virupas (60 virupas = 1 rupa):

* Sthana Bala: Uchcha, Saptavargaja, Ojayugmarasyamsa, Drekkana and Kendra.
* Dig Bala from the distance to each planet's strongest house.
* Kala Bala: Natonnata, Paksha, Tribhaga, Vara, Hora, Maasa, Varsha and Ayana.
* Chesta Bala from apparent motion.
* Naisargika Bala, the fixed natural luminosity scale.
* Drik Bala, the signed quarter-strength drishti received from other grahas.

The formulas follow *Brihat Parashara Hora Shastra* chapter 27 as simplified
for computation; the temporal lordships are the approximations documented in
:mod:`grahabala.engine.vedic.kala`. Lunar nodes receive a result with only
Kendra and Drik Bala populated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from types import MappingProxyType

from ...chart.models import PlanetInfo, VedicChart
from ...config.settings import Settings, resolve_settings
from ...core.bodies import (
    CLASSICAL_PLANETS,
    FEMALE_PLANETS,
    LUNAR_NODES,
    MALE_PLANETS,
    NEUTRAL_PLANETS,
    Planet,
)
from ...jyotish.aspects import aspect_strength, drishti_virupas
from ...jyotish.data import (
    DEEP_EXALTATION_POINTS,
    DIG_BALA_STRONGEST_HOUSE,
    MEAN_DAILY_MOTION,
    NAISARGIKA_BALA,
)
from ...jyotish.dignity import Dignity
from ...observability import COMPUTE_ERRORS, SHADBALA_COMPUTE_DURATION
from ...utils.angles import is_odd_sign, norm360
from .kala import DayNightContext, day_night_context, maasa_lord, varsha_lord
from .varga import DivisionalChartType, calculate_divisional_chart

logger = logging.getLogger(__name__)

__all__ = [
    "SAPTAVARGAJA_POINTS",
    "ShadbalaFactor",
    "ShadbalaResult",
    "ShadbalaStrength",
    "calculate_shadbala",
    "chesta_bala",
    "dig_bala",
    "drekkana_bala",
    "drik_bala",
    "kendra_bala",
    "naisargika_bala",
    "ojayugma_bala",
    "saptavargaja_bala",
    "uchcha_bala",
]


SAPTAVARGAJA_POINTS: Mapping[Dignity, float] = MappingProxyType(
    {
        Dignity.EXALTED: 60.0,
        Dignity.MOOLATRIKONA: 45.0,
        Dignity.OWN_SIGN: 30.0,
        Dignity.GREAT_FRIEND: 22.5,
        Dignity.FRIEND_SIGN: 15.0,
        Dignity.NEUTRAL_SIGN: 7.5,
        Dignity.ENEMY_SIGN: 3.75,
        Dignity.GREAT_ENEMY: 1.875,
        Dignity.DEBILITATED: 0.0,
    }
)

VARA_POINTS = 45.0
MAASA_POINTS = 30.0
VARSHA_POINTS = 15.0
HORA_POINTS = 60.0
DRIK_LIMIT = 60.0

_DAY_STRONG = frozenset({Planet.SUN, Planet.JUPITER, Planet.SATURN})
_NIGHT_STRONG = frozenset({Planet.MOON, Planet.MARS, Planet.VENUS})
_WAXING_BENEFICS = frozenset({Planet.JUPITER, Planet.VENUS})
_WANING_MALEFICS = frozenset({Planet.SUN, Planet.MARS, Planet.SATURN})
_NORTHERN = frozenset({Planet.SUN, Planet.MARS, Planet.JUPITER, Planet.VENUS})
_SOUTHERN = frozenset({Planet.MOON, Planet.SATURN})


class ShadbalaStrength(str, Enum):
    VERY_STRONG = "very_strong"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    VERY_WEAK = "very_weak"

    @classmethod
    def from_total(cls, total: float) -> ShadbalaStrength:
        if total >= 380.0:
            return cls.VERY_STRONG
        if total >= 330.0:
            return cls.STRONG
        if total >= 280.0:
            return cls.MODERATE
        if total >= 230.0:
            return cls.WEAK
        return cls.VERY_WEAK


@dataclass(frozen=True)
class ShadbalaFactor:
    """Individual sub-component contributing to one of the six balas."""

    name: str
    value: float
    maximum: float
    description: str


@dataclass(frozen=True)
class ShadbalaResult:
    """Six-fold strength of one planet in one chart."""

    planet: Planet
    sthana_bala: float
    dig_bala: float
    kala_bala: float
    chesta_bala: float
    naisargika_bala: float
    drik_bala: float
    factors: Mapping[str, ShadbalaFactor] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return (
            self.sthana_bala
            + self.dig_bala
            + self.kala_bala
            + self.chesta_bala
            + self.naisargika_bala
            + self.drik_bala
        )

    @property
    def strength(self) -> ShadbalaStrength:
        return ShadbalaStrength.from_total(self.total)

    @property
    def rupas(self) -> float:
        return self.total / 60.0

    @property
    def is_strong(self) -> bool:
        return self.total >= 330.0

    @property
    def is_weak(self) -> bool:
        return self.total < 280.0

    @property
    def components(self) -> Mapping[str, float]:
        return {
            "sthana_bala": self.sthana_bala,
            "dig_bala": self.dig_bala,
            "kala_bala": self.kala_bala,
            "chesta_bala": self.chesta_bala,
            "naisargika_bala": self.naisargika_bala,
            "drik_bala": self.drik_bala,
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "planet": self.planet.value,
            **self.components,
            "total": self.total,
            "rupas": self.rupas,
            "strength": self.strength.value,
            "factors": {key: factor.value for key, factor in self.factors.items()},
        }


# -------------------- Sthana Bala --------------------


def uchcha_bala(planet: Planet, longitude: float) -> float:
    """Return 60 at the deep exaltation point falling linearly to 0 at debilitation."""

    exaltation = DEEP_EXALTATION_POINTS.get(planet)
    if exaltation is None:
        return 0.0
    elongation = norm360(longitude - (exaltation + 180.0))
    return 60.0 * min(elongation, 360.0 - elongation) / 180.0


def saptavargaja_bala(planet: Planet, vargas: Mapping[str, VedicChart]) -> float:
    if not planet.is_classical:
        return 0.0
    total = 0.0
    for varga_chart in vargas.values():
        info = varga_chart.planet(planet)
        if info is not None:
            total += SAPTAVARGAJA_POINTS[info.dignity]
    return total


def ojayugma_bala(planet: Planet, rasi_sign: int, navamsa_sign: int | None) -> float:
    """Return 15 per odd (male planets) or even (female planets) placement in D1 and D9."""

    if planet in MALE_PLANETS:
        wanted = True
    elif planet in FEMALE_PLANETS:
        wanted = False
    else:
        return 0.0
    score = 15.0 if is_odd_sign(rasi_sign) == wanted else 0.0
    if navamsa_sign is not None and is_odd_sign(navamsa_sign) == wanted:
        score += 15.0
    return score


def drekkana_bala(planet: Planet, degree_in_sign: float) -> float:
    decanate = min(2, int(degree_in_sign // 10.0))
    if planet in MALE_PLANETS:
        return 15.0 if decanate == 0 else 0.0
    if planet in NEUTRAL_PLANETS:
        return 15.0 if decanate == 1 else 0.0
    if planet in FEMALE_PLANETS:
        return 15.0 if decanate == 2 else 0.0
    return 0.0


def kendra_bala(house: int) -> float:
    if house in (1, 4, 7, 10):
        return 60.0
    if house in (2, 5, 8, 11):
        return 30.0
    return 15.0


# -------------------- Dig, Chesta, Naisargika --------------------


def dig_bala(planet: Planet, house: int) -> float:
    strongest = DIG_BALA_STRONGEST_HOUSE.get(planet)
    if strongest is None:
        return 0.0
    distance = abs(house - strongest) % 12
    distance = min(distance, 12 - distance)
    return 60.0 * (1.0 - distance / 6.0)


def chesta_bala(
    planet: Planet, speed_longitude: float, *, stationary_speed: float = 0.01
) -> float:
    """Return motional strength; any retrograde motion scores the full 60."""

    average = MEAN_DAILY_MOTION.get(planet)
    if average is None:
        return 0.0
    if speed_longitude < 0.0:
        return 60.0
    if speed_longitude < stationary_speed:
        return 0.0
    return 60.0 * min(1.0, max(0.0, speed_longitude / average))


def naisargika_bala(planet: Planet) -> float:
    return NAISARGIKA_BALA.get(planet, 0.0)


# -------------------- Kala Bala --------------------


def _natonnata_bala(planet: Planet, ctx: DayNightContext) -> float:
    if planet is Planet.MERCURY:
        return 60.0
    if planet in _DAY_STRONG:
        return 60.0 if ctx.is_day else 0.0
    if planet in _NIGHT_STRONG:
        return 0.0 if ctx.is_day else 60.0
    return 0.0


def _paksha_bala(planet: Planet, elongation: float | None) -> float:
    if planet is Planet.MERCURY:
        return 30.0
    if elongation is None or not planet.is_classical:
        return 0.0
    if planet is Planet.MOON:
        return 60.0 * min(elongation, 360.0 - elongation) / 180.0
    if planet in _WAXING_BENEFICS:
        return 60.0 * elongation / 360.0
    if planet in _WANING_MALEFICS:
        return 60.0 * (360.0 - elongation) / 360.0
    return 0.0


def _tribhaga_bala(planet: Planet, ctx: DayNightContext) -> float:
    if planet is Planet.MERCURY:
        return 60.0
    return 60.0 if planet is ctx.tribhaga_lord else 0.0


def _ayana_bala(planet: Planet, declination: float, obliquity: float) -> float:
    if planet in _NORTHERN:
        raw = 60.0 * (obliquity + declination) / (2.0 * obliquity)
    elif planet in _SOUTHERN:
        raw = 60.0 * (obliquity - declination) / (2.0 * obliquity)
    elif planet is Planet.MERCURY:
        raw = 60.0 * (obliquity + abs(declination)) / (2.0 * obliquity)
    else:
        return 0.0
    return max(0.0, min(60.0, raw))


@dataclass(frozen=True)
class _KalaInputs:
    ctx: DayNightContext
    elongation: float | None
    maasa_lord: Planet | None
    varsha_lord: Planet | None
    obliquity: float


def _kala_factors(planet: Planet, info: PlanetInfo, inputs: _KalaInputs) -> dict[str, ShadbalaFactor]:
    ctx = inputs.ctx
    return {
        "natonnata_bala": ShadbalaFactor(
            "Natonnata Bala",
            _natonnata_bala(planet, ctx),
            60.0,
            "Day or night strength from the sunrise/sunset bracket.",
        ),
        "paksha_bala": ShadbalaFactor(
            "Paksha Bala",
            _paksha_bala(planet, inputs.elongation),
            60.0,
            "Lunar phase strength from the Sun–Moon elongation.",
        ),
        "tribhaga_bala": ShadbalaFactor(
            "Tribhaga Bala",
            _tribhaga_bala(planet, ctx),
            60.0,
            "Lordship of the current third of the day or night.",
        ),
        "vara_bala": ShadbalaFactor(
            "Vara Bala",
            VARA_POINTS if planet is ctx.vara_lord else 0.0,
            VARA_POINTS,
            "Lordship of the Vedic weekday.",
        ),
        "hora_bala": ShadbalaFactor(
            "Hora Bala",
            HORA_POINTS if planet is ctx.hora_lord else 0.0,
            HORA_POINTS,
            "Lordship of the current planetary hour.",
        ),
        "maasa_bala": ShadbalaFactor(
            "Maasa Bala",
            MAASA_POINTS if planet is inputs.maasa_lord else 0.0,
            MAASA_POINTS,
            "Weekday lord at the Sun's ingress into its sign.",
        ),
        "varsha_bala": ShadbalaFactor(
            "Varsha Bala",
            VARSHA_POINTS if planet is inputs.varsha_lord else 0.0,
            VARSHA_POINTS,
            "Weekday lord at the Sun's entry into Aries.",
        ),
        "ayana_bala": ShadbalaFactor(
            "Ayana Bala",
            _ayana_bala(planet, info.position.declination, inputs.obliquity),
            60.0,
            "Declination strength relative to the obliquity of the ecliptic.",
        ),
    }


# -------------------- Drik Bala --------------------


def drik_bala(
    planet: Planet, chart: VedicChart, *, settings: Settings | None = None
) -> float:
    """Return the net drishti received by ``planet``, clamped to ±60.

    Benefics (Jupiter, Venus, Mercury, Moon) add a quarter of their aspect
    strength and malefics (Sun, Mars, Saturn) subtract it.
    """

    target = chart.planet(planet)
    if target is None:
        return 0.0
    total = 0.0
    settings = resolve_settings(settings)
    for other in CLASSICAL_PLANETS:
        if other is planet:
            continue
        source = chart.planet(other)
        if source is None:
            continue
        strength = aspect_strength(
            other, source.longitude, target.longitude, settings=settings
        )
        total += drishti_virupas(other, strength)
    return max(-DRIK_LIMIT, min(DRIK_LIMIT, total))


# -------------------- Assembly --------------------


def _sthana_factors(
    planet: Planet,
    info: PlanetInfo,
    vargas: Mapping[str, VedicChart],
    navamsa_sign: int | None,
) -> dict[str, ShadbalaFactor]:
    return {
        "uchcha_bala": ShadbalaFactor(
            "Uchcha Bala",
            uchcha_bala(planet, info.longitude),
            60.0,
            "Distance from the deep debilitation point.",
        ),
        "saptavargaja_bala": ShadbalaFactor(
            "Saptavargaja Bala",
            saptavargaja_bala(planet, vargas),
            60.0 * len(vargas),
            "Dignity across the seven divisional charts.",
        ),
        "ojayugma_bala": ShadbalaFactor(
            "Ojayugmarasyamsa Bala",
            ojayugma_bala(planet, info.sign_index, navamsa_sign),
            30.0,
            "Odd or even sign placement in the rasi and navamsa.",
        ),
        "drekkana_bala": ShadbalaFactor(
            "Drekkana Bala",
            drekkana_bala(planet, info.position.degree_in_sign),
            15.0,
            "Decanate matching the planet's gender class.",
        ),
        "kendra_bala": ShadbalaFactor(
            "Kendra Bala",
            kendra_bala(info.house),
            60.0,
            "Angular, succedent or cadent house placement.",
        ),
    }


def _node_result(planet: Planet, info: PlanetInfo, chart: VedicChart, settings: Settings) -> ShadbalaResult:
    kendra = kendra_bala(info.house)
    return ShadbalaResult(
        planet=planet,
        sthana_bala=kendra,
        dig_bala=0.0,
        kala_bala=0.0,
        chesta_bala=0.0,
        naisargika_bala=0.0,
        drik_bala=drik_bala(planet, chart, settings=settings),
        factors=MappingProxyType(
            {
                "kendra_bala": ShadbalaFactor(
                    "Kendra Bala", kendra, 60.0, "Angular, succedent or cadent house placement."
                )
            }
        ),
    )


def calculate_shadbala(
    chart: VedicChart, *, settings: Settings | None = None
) -> dict[Planet, ShadbalaResult]:
    """Compute Shadbala for every planet present in ``chart``.

    Planets missing from the chart are skipped. Each configured Saptavarga
    chart is derived once per call and shared by all planets. When the chart
    carries no usable sunrise/sunset the day/night terms fall back to
    :meth:`DayNightContext.from_house_heuristic`.
    """

    resolved = resolve_settings(settings)
    cfg = resolved.shadbala
    start = perf_counter()
    try:
        vargas = {
            code: calculate_divisional_chart(chart, DivisionalChartType.from_code(code))
            for code in cfg.saptavarga
        }
        navamsa = vargas.get("D9") or calculate_divisional_chart(chart, DivisionalChartType.D9)
        sun = chart.planet(Planet.SUN)
        moon = chart.planet(Planet.MOON)
        inputs = _KalaInputs(
            ctx=day_night_context(chart),
            elongation=(
                norm360(moon.longitude - sun.longitude) if sun is not None and moon is not None else None
            ),
            maasa_lord=maasa_lord(chart),
            varsha_lord=varsha_lord(chart),
            obliquity=cfg.obliquity,
        )

        results: dict[Planet, ShadbalaResult] = {}
        for planet in CLASSICAL_PLANETS:
            info = chart.planet(planet)
            if info is None:
                continue
            navamsa_info = navamsa.planet(planet)
            sthana = _sthana_factors(
                planet,
                info,
                vargas,
                navamsa_info.sign_index if navamsa_info is not None else None,
            )
            kala = _kala_factors(planet, info, inputs)
            results[planet] = ShadbalaResult(
                planet=planet,
                sthana_bala=sum(f.value for f in sthana.values()),
                dig_bala=dig_bala(planet, info.house),
                kala_bala=sum(f.value for f in kala.values()),
                chesta_bala=chesta_bala(
                    planet,
                    info.position.speed_longitude,
                    stationary_speed=cfg.stationary_speed,
                ),
                naisargika_bala=naisargika_bala(planet),
                drik_bala=drik_bala(planet, chart, settings=resolved),
                factors=MappingProxyType({**sthana, **kala}),
            )
        if cfg.include_nodes:
            for planet in LUNAR_NODES:
                info = chart.planet(planet)
                if info is not None:
                    results[planet] = _node_result(planet, info, chart, resolved)
    except Exception as exc:
        COMPUTE_ERRORS.labels(component="shadbala", error=type(exc).__name__).inc()
        raise
    SHADBALA_COMPUTE_DURATION.observe(perf_counter() - start)
    logger.debug(
        {
            "event": "shadbala_computed",
            "planets": len(results),
            "varga_count": len(vargas),
            "kala_fallback": inputs.ctx.fallback_reason,
        }
    )
    return results
