"""Swiss Ephemeris implementation of :class:`~grahabala.ephemeris.EphemerisProvider`."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from datetime import UTC, date, datetime, timedelta
from time import perf_counter

from ..core.bodies import Planet
from ..observability import EPHEMERIS_COMPUTE_DURATION
from .models import ChartLocation, PlanetPosition, SolarCycle
from .provider import AngleSet
from .swe import swe as _swe

logger = logging.getLogger(__name__)

__all__ = ["SwissEphemerisProvider", "julian_day", "from_julian_day"]


# Swiss Ephemeris body indexes remain stable across releases.
_BODY_CODES: Mapping[Planet, int] = {
    Planet.SUN: 0,
    Planet.MOON: 1,
    Planet.MERCURY: 2,
    Planet.VENUS: 3,
    Planet.MARS: 4,
    Planet.JUPITER: 5,
    Planet.SATURN: 6,
}
_MEAN_NODE = 10
_TRUE_NODE = 11

_HOUSE_SYSTEM_CODES: Mapping[str, bytes] = {
    "whole_sign": b"W",
    "equal": b"E",
    "placidus": b"P",
    "koch": b"K",
    "porphyry": b"O",
    "sripati": b"S",
}

_AYANAMSA_ATTRS: Mapping[str, str] = {
    "lahiri": "SIDM_LAHIRI",
    "raman": "SIDM_RAMAN",
    "krishnamurti": "SIDM_KRISHNAMURTI",
    "fagan_bradley": "SIDM_FAGAN_BRADLEY",
    "yukteshwar": "SIDM_YUKTESHWAR",
}


def julian_day(moment: datetime) -> float:
    """Return the Julian day (UT) for a timezone-aware :class:`datetime`."""

    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        raise ValueError("datetime must be timezone-aware")
    moment_utc = moment.astimezone(UTC)
    hour = (
        moment_utc.hour
        + moment_utc.minute / 60.0
        + moment_utc.second / 3600.0
        + moment_utc.microsecond / 3.6e9
    )
    return _swe().julday(moment_utc.year, moment_utc.month, moment_utc.day, hour)


def from_julian_day(jd_ut: float) -> datetime:
    """Convert a Julian Day in UT back to a timezone-aware datetime."""

    swe = _swe()
    year, month, day, hour = swe.revjul(jd_ut, swe.GREG_CAL)
    return datetime(year, month, day, tzinfo=UTC) + timedelta(hours=hour)


class SwissEphemerisProvider:
    """Sidereal ephemeris backed by :mod:`pyswisseph`.

    Positions are returned in the sidereal frame selected by ``ayanamsa``.
    Rahu follows the mean node unless ``nodes_variant="true"``; Ketu is never
    requested from the ephemeris because charts derive it from Rahu.
    """

    def __init__(
        self,
        ephemeris_path: str | os.PathLike[str] | None = None,
        *,
        ayanamsa: str = "lahiri",
        nodes_variant: str = "mean",
    ) -> None:
        key = ayanamsa.strip().lower()
        if key not in _AYANAMSA_ATTRS:
            options = ", ".join(sorted(_AYANAMSA_ATTRS))
            raise ValueError(f"Unsupported ayanamsa '{ayanamsa}'. Options: {options}")
        self.ayanamsa = key
        self.nodes_variant = "true" if nodes_variant.lower() == "true" else "mean"
        path = ephemeris_path or os.environ.get("SE_EPHE_PATH")
        if path:
            _swe().set_ephe_path(str(path))

    def _apply_sidereal_mode(self) -> None:
        swe = _swe()
        swe.set_sid_mode(getattr(swe, _AYANAMSA_ATTRS[self.ayanamsa]), 0.0, 0.0)

    def _body_code(self, planet: Planet) -> int:
        if planet is Planet.RAHU:
            return _TRUE_NODE if self.nodes_variant == "true" else _MEAN_NODE
        try:
            return _BODY_CODES[planet]
        except KeyError as exc:
            raise ValueError(f"{planet} is derived, not computed by the ephemeris") from exc

    def position_of(
        self, planet: Planet, moment: datetime, location: ChartLocation
    ) -> PlanetPosition:
        start = perf_counter()
        swe = _swe()
        jd_ut = julian_day(moment)
        code = self._body_code(planet)
        self._apply_sidereal_mode()
        flags = swe.FLG_SWIEPH | swe.FLG_SPEED
        ecliptic = swe.calc_ut(jd_ut, code, flags | swe.FLG_SIDEREAL)[0]
        equatorial = swe.calc_ut(jd_ut, code, flags | swe.FLG_EQUATORIAL)[0]
        lon, lat, dist, speed_lon, speed_lat, speed_dist = ecliptic[:6]
        EPHEMERIS_COMPUTE_DURATION.labels(operation="position").observe(
            perf_counter() - start
        )
        return PlanetPosition(
            planet=planet,
            moment=moment,
            longitude=lon,
            latitude=lat,
            distance=dist,
            speed_longitude=speed_lon,
            speed_latitude=speed_lat,
            speed_distance=speed_dist,
            declination=equatorial[1],
        )

    def sunrise_sunset(self, day: date, location: ChartLocation) -> SolarCycle:
        swe = _swe()
        # Search from local mean midnight so the events belong to ``day``.
        midnight = datetime(day.year, day.month, day.day, tzinfo=UTC)
        jd_start = julian_day(midnight) - location.longitude / 360.0
        geopos = (float(location.longitude), float(location.latitude), float(location.elevation))
        events: dict[str, datetime | None] = {}
        for label, rsmi in (("sunrise", swe.CALC_RISE), ("sunset", swe.CALC_SET)):
            status, tret = swe.rise_trans(
                jd_start, swe.SUN, rsmi, geopos, 0.0, 0.0, swe.FLG_SWIEPH
            )
            event_jd = tret[0] if tret else None
            if status != 0 or not event_jd:
                logger.warning(
                    {
                        "event": "solar_event_missing",
                        "kind": label,
                        "day": day.isoformat(),
                        "latitude": location.latitude,
                    }
                )
                events[label] = None
            else:
                events[label] = from_julian_day(event_jd)
        return SolarCycle(sunrise=events["sunrise"], sunset=events["sunset"])

    def angles(
        self, moment: datetime, location: ChartLocation, house_system: str
    ) -> AngleSet:
        swe = _swe()
        try:
            code = _HOUSE_SYSTEM_CODES[house_system]
        except KeyError as exc:
            options = ", ".join(sorted(_HOUSE_SYSTEM_CODES))
            raise ValueError(f"Unknown house system '{house_system}'. Options: {options}") from exc
        self._apply_sidereal_mode()
        jd_ut = julian_day(moment)
        try:
            cusps, ascmc = swe.houses_ex(
                jd_ut, location.latitude, location.longitude, code, swe.FLG_SIDEREAL
            )
        except swe.Error:
            if house_system == "whole_sign":
                raise
            # Quadrant systems fail near the poles.
            logger.warning(
                {
                    "event": "house_system_fallback",
                    "from": house_system,
                    "to": "whole_sign",
                    "latitude": location.latitude,
                }
            )
            cusps, ascmc = swe.houses_ex(
                jd_ut, location.latitude, location.longitude, b"W", swe.FLG_SIDEREAL
            )
        return float(ascmc[0]) % 360.0, tuple(float(c) % 360.0 for c in cusps[:12]), float(ascmc[1]) % 360.0
