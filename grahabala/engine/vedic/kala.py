"""Day/night context and time lordships used by Kala Bala.

The lordships here are documented approximations rather than exact
calendrical reckonings:

* The Vedic weekday (vara) starts at sunrise, so the hours before dawn belong
  to the previous civil day.
* Horas split the day (sunrise to sunset) and the night (sunset to the next
  sunrise) into twelve equal parts each, counted in Chaldean order from the
  weekday lord.
* The month (maasa) lord is the weekday lord at the approximate solar ingress
  into the Sun's current sign, and the year (varsha) lord is the weekday
  lord at the approximate Mesha Sankranti, both back-projected from the Sun's
  daily motion.
* Night bounds use the same-day sunrise and sunset shifted by a day.

When sunrise or sunset is unknown (polar day or night, or a chart built
without a solar cycle) :meth:`DayNightContext.from_house_heuristic` decides
day or night from the Sun's house instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ...chart.builder import local_date, local_mean_time
from ...chart.models import VedicChart
from ...core.bodies import Planet
from ...ephemeris.models import ChartLocation, SolarCycle
from ...observability import KALA_BALA_FALLBACKS

logger = logging.getLogger(__name__)

__all__ = [
    "CHALDEAN_ORDER",
    "DAY_TRIBHAGA_LORDS",
    "NIGHT_TRIBHAGA_LORDS",
    "WEEKDAY_LORDS",
    "DayNightContext",
    "FALLBACK_SOLAR_CYCLE_MISSING",
    "FALLBACK_SUNRISE_MISSING",
    "FALLBACK_SUNSET_MISSING",
    "FALLBACK_SOLAR_CYCLE_INVERTED",
    "day_night_context",
    "maasa_lord",
    "varsha_lord",
    "weekday_lord",
]


# Indexed by :meth:`datetime.date.weekday` (Monday = 0).
WEEKDAY_LORDS: tuple[Planet, ...] = (
    Planet.MOON,
    Planet.MARS,
    Planet.MERCURY,
    Planet.JUPITER,
    Planet.VENUS,
    Planet.SATURN,
    Planet.SUN,
)

# Descending orbital period; consecutive horas step through this list.
CHALDEAN_ORDER: tuple[Planet, ...] = (
    Planet.SATURN,
    Planet.JUPITER,
    Planet.MARS,
    Planet.SUN,
    Planet.VENUS,
    Planet.MERCURY,
    Planet.MOON,
)

DAY_TRIBHAGA_LORDS: tuple[Planet, ...] = (Planet.JUPITER, Planet.SUN, Planet.SATURN)
NIGHT_TRIBHAGA_LORDS: tuple[Planet, ...] = (Planet.MOON, Planet.VENUS, Planet.MARS)

FALLBACK_SOLAR_CYCLE_MISSING = "solar_cycle_missing"
FALLBACK_SUNRISE_MISSING = "sunrise_missing"
FALLBACK_SUNSET_MISSING = "sunset_missing"
FALLBACK_SOLAR_CYCLE_INVERTED = "solar_cycle_inverted"

MEAN_SOLAR_MOTION = 0.9856


def weekday_lord(day: date) -> Planet:
    return WEEKDAY_LORDS[day.weekday()]


def _clamp_fraction(value: float) -> float:
    return min(max(value, 0.0), 1.0 - 1e-12)


@dataclass(frozen=True)
class DayNightContext:
    """Whether a moment falls by day or night and how far through it is.

    ``fraction`` is the elapsed share of the current day (sunrise to sunset)
    or night (sunset to sunrise), in ``[0, 1)``. ``fallback_reason`` is
    ``None`` when true sunrise/sunset bracketed the moment.
    """

    is_day: bool
    fraction: float
    vedic_day: date
    period_start: datetime | None = None
    period_end: datetime | None = None
    fallback_reason: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None

    @property
    def vara_lord(self) -> Planet:
        return weekday_lord(self.vedic_day)

    @property
    def tribhaga_lord(self) -> Planet:
        lords = DAY_TRIBHAGA_LORDS if self.is_day else NIGHT_TRIBHAGA_LORDS
        return lords[min(2, int(self.fraction * 3))]

    @property
    def hora_index(self) -> int:
        """Return the hora counted from sunrise (0–23)."""

        hora = min(11, int(self.fraction * 12))
        return hora if self.is_day else 12 + hora

    @property
    def hora_lord(self) -> Planet:
        start = CHALDEAN_ORDER.index(self.vara_lord)
        return CHALDEAN_ORDER[(start + self.hora_index) % 7]

    @classmethod
    def from_solar_cycle(
        cls, moment: datetime, cycle: SolarCycle, day: date
    ) -> DayNightContext:
        """Bracket ``moment`` with the sunrise and sunset of local ``day``."""

        sunrise, sunset = cycle.sunrise, cycle.sunset
        if sunrise is None or sunset is None or sunrise >= sunset:
            raise ValueError("solar cycle requires sunrise before sunset")
        if moment < sunrise:
            start, end = sunset - timedelta(days=1), sunrise
            is_day, vedic_day = False, day - timedelta(days=1)
        elif moment < sunset:
            start, end = sunrise, sunset
            is_day, vedic_day = True, day
        else:
            start, end = sunset, sunrise + timedelta(days=1)
            is_day, vedic_day = False, day
        fraction = (moment - start) / (end - start)
        return cls(
            is_day=is_day,
            fraction=_clamp_fraction(fraction),
            vedic_day=vedic_day,
            period_start=start,
            period_end=end,
        )

    @classmethod
    def from_house_heuristic(
        cls,
        moment: datetime,
        location: ChartLocation,
        sun_house: int | None,
        reason: str,
    ) -> DayNightContext:
        """Estimate day or night from the Sun's house.

        The Sun above the horizon occupies houses 7–12, moving from the 12th
        (just after sunrise) to the 7th (just before sunset); by night it
        moves from the 6th to the 1st. Each house counts as one sixth of the
        day or night. Without the Sun the local mean hour decides, with day
        from 06:00 to 18:00.
        """

        local = local_mean_time(moment, location)
        day = local.date()
        hour = local.hour + local.minute / 60.0
        if sun_house is None:
            is_day = 6.0 <= hour < 18.0
            fraction = ((hour - 6.0) % 12.0) / 12.0
        else:
            is_day = 7 <= sun_house <= 12
            if is_day:
                fraction = (12 - sun_house + 0.5) / 6.0
            else:
                fraction = (6 - sun_house + 0.5) / 6.0
        vedic_day = day
        if not is_day and hour < 12.0:
            vedic_day = day - timedelta(days=1)
        return cls(
            is_day=is_day,
            fraction=_clamp_fraction(fraction),
            vedic_day=vedic_day,
            fallback_reason=reason,
        )


def _fallback_reason(cycle: SolarCycle | None) -> str | None:
    if cycle is None:
        return FALLBACK_SOLAR_CYCLE_MISSING
    if cycle.sunrise is None:
        return FALLBACK_SUNRISE_MISSING
    if cycle.sunset is None:
        return FALLBACK_SUNSET_MISSING
    if not cycle.is_complete:
        return FALLBACK_SOLAR_CYCLE_INVERTED
    return None


def day_night_context(chart: VedicChart) -> DayNightContext:
    """Return the :class:`DayNightContext` for ``chart``'s instant."""

    cycle = chart.solar_cycle
    reason = _fallback_reason(cycle)
    if cycle is not None and reason is None:
        return DayNightContext.from_solar_cycle(
            chart.moment, cycle, local_date(chart.moment, chart.location)
        )
    sun = chart.planet(Planet.SUN)
    KALA_BALA_FALLBACKS.labels(reason=reason).inc()
    logger.info(
        {
            "event": "kala_bala_fallback",
            "reason": reason,
            "moment": chart.moment.isoformat(),
            "latitude": chart.location.latitude,
            "sun_house": sun.house if sun else None,
        }
    )
    return DayNightContext.from_house_heuristic(
        chart.moment, chart.location, sun.house if sun else None, reason
    )


def _sun_motion(chart: VedicChart) -> tuple[float, float] | None:
    sun = chart.planet(Planet.SUN)
    if sun is None:
        return None
    speed = sun.position.speed_longitude
    if speed <= 0.0:
        speed = MEAN_SOLAR_MOTION
    return sun.longitude, speed


def maasa_lord(chart: VedicChart) -> Planet | None:
    """Return the weekday lord at the Sun's approximate ingress into its sign."""

    motion = _sun_motion(chart)
    if motion is None:
        return None
    longitude, speed = motion
    days = (longitude % 30.0) / speed
    ingress = chart.moment - timedelta(days=days)
    return weekday_lord(local_date(ingress, chart.location))


def varsha_lord(chart: VedicChart) -> Planet | None:
    """Return the weekday lord at the approximate Mesha Sankranti."""

    motion = _sun_motion(chart)
    if motion is None:
        return None
    longitude, speed = motion
    days = longitude / speed
    sankranti = chart.moment - timedelta(days=days)
    return weekday_lord(local_date(sankranti, chart.location))
