"""Divisional chart (varga) transformations.

Every varga is described by a :class:`VargaRule` in :data:`VARGA_RULES`.
Equal-division charts only need a destination function ``(sign, part) ->
sign``; the Trimsamsa (D30) and the dasha-proportional D249 carry their own
segment tables and interpolate the position inside the destination sign.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from types import MappingProxyType

from ...chart.builder import derive_ketu
from ...chart.models import PlanetInfo, VedicChart, whole_sign_houses
from ...core.bodies import Planet
from ...ephemeris.models import PlanetPosition
from ...jyotish.dignity import dignity
from ...observability import COMPUTE_ERRORS, VARGA_COMPUTE_DURATION
from ...utils.angles import degree_in_sign, is_odd_sign, norm360, sign_index, sign_name

logger = logging.getLogger(__name__)

__all__ = [
    "DivisionalChartType",
    "UnsupportedVargaError",
    "VargaPosition",
    "VargaRule",
    "VARGA_RULES",
    "D30_SEGMENTS_ODD",
    "D30_SEGMENTS_EVEN",
    "D249_DASHA_SLOTS",
    "calculate_divisional_chart",
    "varga_longitude",
    "varga_position",
]


class UnsupportedVargaError(ValueError):
    """Raised when a divisional chart code is not recognised."""


class DivisionalChartType(str, Enum):
    D1 = "D1"
    D2 = "D2"
    D3 = "D3"
    D4 = "D4"
    D5 = "D5"
    D6 = "D6"
    D7 = "D7"
    D8 = "D8"
    D9 = "D9"
    D10 = "D10"
    D11 = "D11"
    D12 = "D12"
    D16 = "D16"
    D20 = "D20"
    D24 = "D24"
    D27 = "D27"
    D30 = "D30"
    D40 = "D40"
    D45 = "D45"
    D60 = "D60"
    D150 = "D150"
    D249 = "D249"

    @classmethod
    def from_code(cls, code: str | DivisionalChartType) -> DivisionalChartType:
        """Return the chart type for ``code`` (``"D9"``, ``"d9"`` or ``"9"``)."""

        if isinstance(code, cls):
            return code
        key = str(code).strip().upper()
        if key and not key.startswith("D"):
            key = f"D{key}"
        try:
            return cls(key)
        except ValueError as exc:
            raise UnsupportedVargaError(f"Unsupported divisional chart '{code}'") from exc

    @property
    def divisions(self) -> int:
        return int(self.value[1:])

    @property
    def rule(self) -> VargaRule:
        return VARGA_RULES[self]

    def __str__(self) -> str:
        return self.value


MOVABLE_SIGNS = frozenset({0, 3, 6, 9})
FIXED_SIGNS = frozenset({1, 4, 7, 10})


def _modal_start(movable: int, fixed: int, dual: int) -> Callable[[int], int]:
    def _inner(sign_idx: int) -> int:
        if sign_idx in MOVABLE_SIGNS:
            return movable
        if sign_idx in FIXED_SIGNS:
            return fixed
        return dual

    return _inner


def _parity_start(odd: int, even: int) -> Callable[[int], int]:
    def _inner(sign_idx: int) -> int:
        return odd if is_odd_sign(sign_idx) else even

    return _inner


def _parity_offset(even_offset: int) -> Callable[[int], int]:
    # Odd signs count from themselves; even signs from the sign ``even_offset`` ahead.
    def _inner(sign_idx: int) -> int:
        if is_odd_sign(sign_idx):
            return sign_idx
        return (sign_idx + even_offset) % 12

    return _inner


def _element_start(fire: int, earth: int, air: int, water: int) -> Callable[[int], int]:
    starts = (fire, earth, air, water)

    def _inner(sign_idx: int) -> int:
        return starts[sign_idx % 4]

    return _inner


def _stepped(step: int) -> Callable[[int, int], int]:
    def _inner(sign_idx: int, part: int) -> int:
        return (sign_idx + step * part) % 12

    return _inner


def _hora_dest(sign_idx: int, part: int) -> int:
    first, second = (4, 3) if is_odd_sign(sign_idx) else (3, 4)
    return first if part == 0 else second


def _shashtiamsa_dest(sign_idx: int, part: int) -> int:
    if is_odd_sign(sign_idx):
        return (sign_idx + part) % 12
    return (sign_idx + 9 - part) % 12


def _nadiamsa_dest(sign_idx: int, part: int) -> int:
    if is_odd_sign(sign_idx):
        return part % 12
    return (11 - part) % 12


def _identity_start(sign_idx: int) -> int:
    return sign_idx


# (upper bound in degrees, destination sign); lower bound is the previous row.
D30_SEGMENTS_ODD: tuple[tuple[float, int], ...] = (
    (5.0, 0),
    (10.0, 10),
    (18.0, 8),
    (25.0, 2),
    (30.0, 6),
)
D30_SEGMENTS_EVEN: tuple[tuple[float, int], ...] = (
    (5.0, 1),
    (12.0, 5),
    (20.0, 11),
    (25.0, 9),
    (30.0, 7),
)

# Vimshottari order with each lord's years scaled to degrees: years / 120 * 30.
D249_DASHA_SLOTS: tuple[tuple[Planet, int, float], ...] = (
    (Planet.KETU, 7, 1.75),
    (Planet.VENUS, 20, 5.0),
    (Planet.SUN, 6, 1.5),
    (Planet.MOON, 10, 2.5),
    (Planet.MARS, 7, 1.75),
    (Planet.RAHU, 18, 4.5),
    (Planet.JUPITER, 16, 4.0),
    (Planet.SATURN, 19, 4.75),
    (Planet.MERCURY, 17, 4.25),
)
D249_TOTAL_SLOTS = 249


@dataclass(frozen=True)
class VargaRule:
    varga: DivisionalChartType
    name: str
    kind: str
    description: str
    start_fn: Callable[[int], int] = _identity_start
    dest_fn: Callable[[int, int], int] | None = None

    @property
    def divisions(self) -> int:
        return self.varga.divisions

    @property
    def span(self) -> float:
        return 30.0 / self.divisions

    def destination(self, sign_idx: int, part: int) -> int:
        """Return the sign that part ``part`` (0-based) of ``sign_idx`` maps to."""

        if self.dest_fn is not None:
            return self.dest_fn(sign_idx, part)
        return (self.start_fn(sign_idx) + part) % 12


@dataclass(frozen=True)
class VargaPosition:
    """Where a longitude lands in one divisional chart."""

    varga: DivisionalChartType
    sign_index: int
    longitude: float
    part: int
    start_sign: int
    span: float
    position_in_subdivision: float
    rule: str
    lord: Planet | None = None

    @property
    def sign(self) -> str:
        return sign_name(self.sign_index)


def _equal(
    varga: DivisionalChartType,
    name: str,
    description: str,
    start_fn: Callable[[int], int],
    dest_fn: Callable[[int, int], int] | None = None,
) -> VargaRule:
    return VargaRule(
        varga=varga,
        name=name,
        kind="equal",
        description=description,
        start_fn=start_fn,
        dest_fn=dest_fn,
    )


_D = DivisionalChartType

VARGA_RULES: Mapping[DivisionalChartType, VargaRule] = MappingProxyType(
    {
        _D.D1: VargaRule(_D.D1, "Rasi", "identity", "The natal sign without subdivision."),
        _D.D2: _equal(
            _D.D2,
            "Hora",
            "Odd signs give Leo then Cancer; even signs Cancer then Leo.",
            _parity_start(4, 3),
            _hora_dest,
        ),
        _D.D3: _equal(
            _D.D3,
            "Drekkana",
            "Each 10° segment maps to the sign itself, the 5th and the 9th.",
            _identity_start,
            _stepped(4),
        ),
        _D.D4: _equal(
            _D.D4,
            "Chaturthamsa",
            "Each 7°30' segment maps to the sign and its kendras.",
            _identity_start,
            _stepped(3),
        ),
        _D.D5: _equal(
            _D.D5, "Panchamsa", "Odd signs count from Aries; even signs from Libra.", _parity_start(0, 6)
        ),
        _D.D6: _equal(
            _D.D6, "Shashthamsa", "Odd signs count from Aries; even signs from Libra.", _parity_start(0, 6)
        ),
        _D.D7: _equal(
            _D.D7,
            "Saptamsa",
            "Odd signs count from the natal sign; even signs count from the 7th sign.",
            _parity_offset(6),
        ),
        _D.D8: _equal(
            _D.D8,
            "Ashtamsa",
            "Movable signs count from Aries, fixed from Leo, dual from Sagittarius.",
            _modal_start(0, 4, 8),
        ),
        _D.D9: _equal(
            _D.D9,
            "Navamsa",
            "Fire signs count from Aries, earth from Capricorn, air from Libra, water from Cancer.",
            _element_start(0, 9, 6, 3),
        ),
        _D.D10: _equal(
            _D.D10,
            "Dasamsa",
            "Odd signs count from the natal sign; even signs count from the 9th sign.",
            _parity_offset(8),
        ),
        _D.D11: _equal(
            _D.D11,
            "Rudramsa",
            "Movable signs count from Aries, fixed from Leo, dual from Sagittarius.",
            _modal_start(0, 4, 8),
        ),
        _D.D12: _equal(
            _D.D12,
            "Dvadasamsa",
            "Every sign counts forward from itself.",
            _identity_start,
        ),
        _D.D16: _equal(
            _D.D16,
            "Shodasamsa",
            "Movable signs count from Aries, fixed from Leo, dual from Sagittarius.",
            _modal_start(0, 4, 8),
        ),
        _D.D20: _equal(
            _D.D20,
            "Vimsamsa",
            "Movable signs count from Aries, fixed from Sagittarius, dual from Leo.",
            _modal_start(0, 8, 4),
        ),
        _D.D24: _equal(
            _D.D24,
            "Chaturvimsamsa",
            "Odd signs count from Leo; even signs from Cancer.",
            _parity_start(4, 3),
        ),
        _D.D27: _equal(
            _D.D27,
            "Bhamsa",
            "Fire signs count from Aries, earth from Cancer, air from Libra, water from Capricorn.",
            _element_start(0, 3, 6, 9),
        ),
        _D.D30: VargaRule(
            _D.D30,
            "Trimsamsa",
            "trimsamsa",
            "Unequal segments: odd signs 5/5/8/7/5° to Aries, Aquarius, Sagittarius, "
            "Gemini, Libra; even signs 5/7/8/5/5° to Taurus, Virgo, Pisces, Capricorn, Scorpio.",
        ),
        _D.D40: _equal(
            _D.D40, "Khavedamsa", "Odd signs count from Aries; even signs from Libra.", _parity_start(0, 6)
        ),
        _D.D45: _equal(
            _D.D45,
            "Akshavedamsa",
            "Movable signs count from Aries, fixed from Leo, dual from Sagittarius.",
            _modal_start(0, 4, 8),
        ),
        _D.D60: _equal(
            _D.D60,
            "Shashtiamsa",
            "Odd signs count forward from themselves; even signs count back from the 10th sign.",
            _identity_start,
            _shashtiamsa_dest,
        ),
        _D.D150: _equal(
            _D.D150,
            "Nadiamsa",
            "Odd signs count forward from Aries; even signs count back from Pisces.",
            _parity_start(0, 11),
            _nadiamsa_dest,
        ),
        _D.D249: VargaRule(
            _D.D249,
            "Dasha sub-lords",
            "dasha",
            "Vimshottari-proportional slots; odd signs count from themselves, even from the 9th.",
            _parity_offset(8),
        ),
    }
)


def _place(dest_sign: int, offset: float) -> float:
    """Return ``dest_sign * 30 + offset`` kept strictly inside ``dest_sign``."""

    longitude = dest_sign * 30.0 + max(0.0, offset)
    upper = dest_sign * 30.0 + 30.0
    if longitude >= upper:
        longitude = math.nextafter(upper, 0.0)
    return norm360(longitude)


def _equal_position(rule: VargaRule, sign_idx: int, deg: float) -> VargaPosition:
    n = rule.divisions
    part, offset = divmod(deg * n, 30.0)
    part_idx = int(part)
    if part_idx >= n:
        part_idx, offset = n - 1, 30.0
    dest = rule.destination(sign_idx, part_idx)
    longitude = _place(dest, offset)
    return VargaPosition(
        varga=rule.varga,
        sign_index=dest,
        longitude=longitude,
        part=part_idx + 1,
        start_sign=rule.start_fn(sign_idx),
        span=rule.span,
        position_in_subdivision=degree_in_sign(longitude),
        rule=rule.description,
    )


def _trimsamsa_position(rule: VargaRule, sign_idx: int, deg: float) -> VargaPosition:
    segments = D30_SEGMENTS_ODD if is_odd_sign(sign_idx) else D30_SEGMENTS_EVEN
    lower = 0.0
    for index, (upper, dest) in enumerate(segments, start=1):
        if deg < upper or index == len(segments):
            width = upper - lower
            offset = (deg - lower) / width * 30.0
            longitude = _place(dest, offset)
            return VargaPosition(
                varga=rule.varga,
                sign_index=dest,
                longitude=longitude,
                part=index,
                start_sign=segments[0][1],
                span=width,
                position_in_subdivision=degree_in_sign(longitude),
                rule=rule.description,
            )
        lower = upper
    raise AssertionError("unreachable: D30 segments cover the full sign")


def _dasha_position(rule: VargaRule, sign_idx: int, deg: float) -> VargaPosition:
    start = rule.start_fn(sign_idx)
    cumulative = 0.0
    slot = 0
    lord, _, width = D249_DASHA_SLOTS[0]
    # 27 full cycles of nine slots plus six more: slot numbers stop at 249.
    for slot in range(D249_TOTAL_SLOTS):
        lord, _, width = D249_DASHA_SLOTS[slot % len(D249_DASHA_SLOTS)]
        if deg < cumulative + width:
            break
        cumulative += width
    else:
        # Only reachable through float rounding at the very end of the sign.
        cumulative = max(0.0, deg - width)
    fraction = min(1.0, max(0.0, (deg - cumulative) / width))
    dest = (start + slot) % 12
    longitude = _place(dest, fraction * 30.0)
    return VargaPosition(
        varga=rule.varga,
        sign_index=dest,
        longitude=longitude,
        part=slot + 1,
        start_sign=start,
        span=width,
        position_in_subdivision=degree_in_sign(longitude),
        rule=rule.description,
        lord=lord,
    )


def varga_position(
    longitude: float, varga: DivisionalChartType | str
) -> VargaPosition:
    """Return the full placement of ``longitude`` in ``varga``.

    Raises :class:`UnsupportedVargaError` for unknown chart codes.
    """

    chart_type = DivisionalChartType.from_code(varga)
    rule = VARGA_RULES[chart_type]
    lon = norm360(longitude)
    sign_idx = sign_index(lon)
    deg = degree_in_sign(lon)
    if rule.kind == "identity":
        return VargaPosition(
            varga=chart_type,
            sign_index=sign_idx,
            longitude=lon,
            part=1,
            start_sign=sign_idx,
            span=30.0,
            position_in_subdivision=deg,
            rule=rule.description,
        )
    if rule.kind == "trimsamsa":
        return _trimsamsa_position(rule, sign_idx, deg)
    if rule.kind == "dasha":
        return _dasha_position(rule, sign_idx, deg)
    return _equal_position(rule, sign_idx, deg)


def varga_longitude(longitude: float, varga: DivisionalChartType | str) -> float:
    """Return the longitude ``longitude`` maps to in ``varga``."""

    return varga_position(longitude, varga).longitude


def calculate_divisional_chart(
    chart: VedicChart, varga: DivisionalChartType | str
) -> VedicChart:
    """Derive the ``varga`` chart from the base ``chart``.

    ``D1`` returns ``chart`` itself. Other vargas get whole-sign houses from
    the transformed ascendant, and every planet is moved, re-housed and
    re-classified. Ketu is rebuilt opposite the transformed Rahu and
    combustion never carries over.
    """

    chart_type = DivisionalChartType.from_code(varga)
    if chart_type is DivisionalChartType.D1:
        return chart

    start = perf_counter()
    try:
        asc = varga_position(chart.ascendant, chart_type)
        houses = whole_sign_houses(asc.longitude)
        planets: dict[Planet, PlanetInfo] = {}
        rahu_span: float | None = None
        for planet, info in chart.planets.items():
            if planet is Planet.KETU and chart.rahu is not None:
                continue
            placed = varga_position(info.longitude, chart_type)
            position = info.position.with_longitude(placed.longitude)
            planets[planet] = _placement(position, houses.house_for, placed.span)
            if planet is Planet.RAHU:
                rahu_span = placed.span
        rahu = planets.get(Planet.RAHU)
        if rahu is not None:
            planets[Planet.KETU] = _placement(
                derive_ketu(rahu.position), houses.house_for, rahu_span
            )
    except Exception as exc:
        COMPUTE_ERRORS.labels(component="varga", error=type(exc).__name__).inc()
        raise
    VARGA_COMPUTE_DURATION.labels(varga=chart_type.value).observe(perf_counter() - start)
    logger.debug(
        {
            "event": "varga_computed",
            "varga": chart_type.value,
            "planets": len(planets),
            "ascendant_sign": houses.ascendant_sign,
        }
    )
    return VedicChart(
        moment=chart.moment,
        location=chart.location,
        houses=houses,
        planets=planets,
        solar_cycle=chart.solar_cycle,
        varga=chart_type.value,
    )


def _placement(
    position: PlanetPosition,
    house_for: Callable[[float], int],
    span: float | None,
) -> PlanetInfo:
    return PlanetInfo(
        position=position,
        house=house_for(position.longitude),
        dignity=dignity(position.planet, position.sign_index),
        is_combust=False,
        position_in_subdivision=position.degree_in_sign,
        subdivision_span=span,
    )
