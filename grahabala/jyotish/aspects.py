"""Orb-based drishti (aspect) strength between grahas."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..config.settings import Settings, resolve_settings
from ..core.bodies import CLASSICAL_PLANETS, NATURAL_BENEFICS, Planet
from ..utils.angles import circular_separation, norm360, validate_sign_index
from .data import SPECIAL_ASPECTS

__all__ = [
    "AspectInfo",
    "aspect_strength",
    "aspect_angles",
    "aspects_cast_by",
    "aspects_received_by",
    "calculate_aspects",
    "drishti_virupas",
    "planets_aspecting_sign",
]

FULL_ASPECT = 180.0
FULL_STRENGTH = 60.0

# Classical partial (ekapada/dvipada/tripada) drishti values in virupas.
PARTIAL_ASPECTS: tuple[tuple[float, float], ...] = (
    (60.0, 15.0),
    (270.0, 15.0),
    (120.0, 30.0),
    (240.0, 30.0),
    (90.0, 45.0),
    (210.0, 45.0),
)


@dataclass(frozen=True)
class _AspectAngle:
    angle: float
    kind: str
    peak: float
    max_orb: float


@dataclass(frozen=True)
class AspectInfo:
    aspecting: Planet
    aspected: Planet
    angle: float
    kind: str
    orb: float
    strength: float


def aspect_angles(planet: Planet, settings: Settings | None = None) -> tuple[_AspectAngle, ...]:
    """Return every aspect angle ``planet`` casts under ``settings``.

    Nodes cast no aspects. With partial aspects enabled, a partial angle the
    planet already casts as a special aspect keeps its full value.
    """

    if not planet.is_classical:
        return ()
    cfg = resolve_settings(settings).aspects
    angles = [_AspectAngle(FULL_ASPECT, "full", FULL_STRENGTH, cfg.full_max_orb)]
    special = SPECIAL_ASPECTS.get(planet, ())
    angles.extend(
        _AspectAngle(angle, "special", FULL_STRENGTH, cfg.special_max_orb) for angle in special
    )
    if cfg.partial_aspects:
        angles.extend(
            _AspectAngle(angle, "partial", peak, cfg.partial_max_orb)
            for angle, peak in PARTIAL_ASPECTS
            if angle not in special
        )
    return tuple(angles)


def _strength_at(spec: _AspectAngle, angular_diff: float) -> tuple[float, float]:
    orb = circular_separation(angular_diff, spec.angle)
    if orb >= spec.max_orb:
        return orb, 0.0
    return orb, spec.peak * (1.0 - orb / spec.max_orb)


def aspect_strength(
    aspecting: Planet,
    aspecting_longitude: float,
    aspected_longitude: float,
    *,
    settings: Settings | None = None,
) -> float:
    """Return the drishti of ``aspecting`` onto a point, in virupas (0–60).

    Strength falls linearly from 60 at the exact aspect angle to 0 at the
    configured maximum orb (30° for the full aspect, 15° for special
    aspects). Only the strongest applicable angle counts.
    """

    angular_diff = norm360(aspected_longitude - aspecting_longitude)
    best = 0.0
    for spec in aspect_angles(aspecting, settings):
        _, strength = _strength_at(spec, angular_diff)
        best = max(best, strength)
    return best


def drishti_virupas(aspecting: Planet, strength: float) -> float:
    """Return the signed Drik contribution: a quarter of ``strength``, negative for malefics."""

    sign = 1.0 if aspecting in NATURAL_BENEFICS else -1.0
    return sign * strength / 4.0


def _longitudes(source: object) -> dict[Planet, float]:
    planets = getattr(source, "planets", source)
    if not isinstance(planets, Mapping):
        raise TypeError("expected a chart or a mapping of planet positions")
    result: dict[Planet, float] = {}
    for planet, value in planets.items():
        longitude = getattr(value, "longitude", value)
        result[planet] = float(longitude)  # type: ignore[arg-type]
    return result


def calculate_aspects(
    chart_or_positions: object,
    *,
    min_strength: float = 0.0,
    settings: Settings | None = None,
) -> list[AspectInfo]:
    """List every aspect in a chart whose strength exceeds ``min_strength``.

    ``chart_or_positions`` is a :class:`~grahabala.chart.VedicChart` or a
    mapping of :class:`Planet` to a longitude, position or placement.
    """

    settings = resolve_settings(settings)
    longitudes = _longitudes(chart_or_positions)
    found: list[AspectInfo] = []
    for aspecting, source_lon in longitudes.items():
        specs = aspect_angles(aspecting, settings)
        for aspected, target_lon in longitudes.items():
            if aspected is aspecting:
                continue
            angular_diff = norm360(target_lon - source_lon)
            for spec in specs:
                orb, strength = _strength_at(spec, angular_diff)
                if strength > min_strength:
                    found.append(
                        AspectInfo(
                            aspecting=aspecting,
                            aspected=aspected,
                            angle=spec.angle,
                            kind=spec.kind,
                            orb=orb,
                            strength=strength,
                        )
                    )
    return found


def aspects_cast_by(
    planet: Planet,
    chart_or_positions: object,
    *,
    min_strength: float = 0.0,
    settings: Settings | None = None,
) -> list[AspectInfo]:
    return [
        info
        for info in calculate_aspects(
            chart_or_positions, min_strength=min_strength, settings=settings
        )
        if info.aspecting is planet
    ]


def aspects_received_by(
    planet: Planet,
    chart_or_positions: object,
    *,
    min_strength: float = 0.0,
    settings: Settings | None = None,
) -> list[AspectInfo]:
    return [
        info
        for info in calculate_aspects(
            chart_or_positions, min_strength=min_strength, settings=settings
        )
        if info.aspected is planet
    ]


def planets_aspecting_sign(
    sign: int,
    chart_or_positions: object,
    *,
    settings: Settings | None = None,
    planets: Iterable[Planet] = CLASSICAL_PLANETS,
) -> list[Planet]:
    """Return planets whose drishti reaches the midpoint of ``sign``."""

    target = validate_sign_index(sign) * 30.0 + 15.0
    settings = resolve_settings(settings)
    longitudes = _longitudes(chart_or_positions)
    return [
        planet
        for planet in planets
        if planet in longitudes
        and aspect_strength(planet, longitudes[planet], target, settings=settings) > 0.0
    ]
