"""Assemble :class:`VedicChart` values from ephemeris positions."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime, timedelta

from ..core.bodies import CLASSICAL_PLANETS, Planet
from ..ephemeris.models import ChartLocation, PlanetPosition, SolarCycle
from ..ephemeris.provider import EphemerisProvider
from ..jyotish.data import COMBUSTION_ORBS, COMBUSTION_ORBS_RETROGRADE
from ..jyotish.dignity import dignity
from ..utils.angles import circular_separation
from .models import HouseSystem, PlanetInfo, VedicChart, equal_houses, whole_sign_houses

logger = logging.getLogger(__name__)

__all__ = [
    "build_chart",
    "compute_vedic_chart",
    "derive_ketu",
    "is_combust",
    "local_date",
    "local_mean_time",
]


def derive_ketu(rahu: PlanetPosition) -> PlanetPosition:
    """Return Ketu exactly opposite ``rahu``; the nodes share their motion."""

    return PlanetPosition(
        planet=Planet.KETU,
        moment=rahu.moment,
        longitude=rahu.longitude + 180.0,
        latitude=-rahu.latitude,
        distance=rahu.distance,
        speed_longitude=rahu.speed_longitude,
        speed_latitude=-rahu.speed_latitude,
        speed_distance=rahu.speed_distance,
        declination=-rahu.declination,
    )


def is_combust(position: PlanetPosition, sun: PlanetPosition | None) -> bool:
    """Return ``True`` when ``position`` lies within its combustion orb of ``sun``."""

    if sun is None or position.planet not in COMBUSTION_ORBS:
        return False
    orb = COMBUSTION_ORBS[position.planet]
    if position.is_retrograde:
        orb = COMBUSTION_ORBS_RETROGRADE.get(position.planet, orb)
    return circular_separation(position.longitude, sun.longitude) <= orb


def _index_positions(
    positions: Mapping[Planet, PlanetPosition] | Iterable[PlanetPosition],
) -> dict[Planet, PlanetPosition]:
    items = positions.values() if isinstance(positions, Mapping) else positions
    indexed: dict[Planet, PlanetPosition] = {}
    for pos in items:
        indexed[pos.planet] = pos
    rahu = indexed.get(Planet.RAHU)
    if rahu is not None:
        indexed[Planet.KETU] = derive_ketu(rahu)
    return indexed


def build_chart(
    moment: datetime,
    location: ChartLocation,
    positions: Mapping[Planet, PlanetPosition] | Iterable[PlanetPosition],
    houses: HouseSystem,
    *,
    solar_cycle: SolarCycle | None = None,
) -> VedicChart:
    """Return a base (D1) chart for ``positions``.

    Ketu is always rebuilt from Rahu when Rahu is supplied; a Ketu position
    passed alongside Rahu is ignored. House numbers come from ``houses`` and
    dignity from the occupied sign.
    """

    indexed = _index_positions(positions)
    sun = indexed.get(Planet.SUN)
    planets: dict[Planet, PlanetInfo] = {}
    for planet, pos in indexed.items():
        planets[planet] = PlanetInfo(
            position=pos,
            house=houses.house_for(pos.longitude),
            dignity=dignity(planet, pos.sign_index),
            is_combust=is_combust(pos, sun),
        )
    logger.debug(
        {
            "event": "chart_built",
            "planets": len(planets),
            "house_system": houses.system,
        }
    )
    return VedicChart(
        moment=moment,
        location=location,
        houses=houses,
        planets=planets,
        solar_cycle=solar_cycle,
    )


def local_mean_time(moment: datetime, location: ChartLocation) -> datetime:
    """Return ``moment`` as UTC wall-clock time shifted to local mean time."""

    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        raise ValueError("datetime must be timezone-aware")
    return moment.astimezone(UTC) + timedelta(hours=location.longitude / 15.0)


def local_date(moment: datetime, location: ChartLocation) -> date:
    """Return the local mean solar date of ``moment`` at ``location``."""

    return local_mean_time(moment, location).date()


def compute_vedic_chart(
    moment: datetime,
    location: ChartLocation,
    provider: EphemerisProvider,
    *,
    house_system: str = "whole_sign",
) -> VedicChart:
    """Query ``provider`` and return the base sidereal chart for ``moment``."""

    positions = [
        provider.position_of(planet, moment, location)
        for planet in (*CLASSICAL_PLANETS, Planet.RAHU)
    ]
    ascendant, cusps, midheaven = provider.angles(moment, location, house_system)
    if house_system == "whole_sign":
        houses = whole_sign_houses(ascendant)
    elif house_system == "equal":
        houses = equal_houses(ascendant, midheaven)
    else:
        houses = HouseSystem(house_system, tuple(cusps), ascendant, midheaven)
    solar_cycle = provider.sunrise_sunset(local_date(moment, location), location)
    return build_chart(moment, location, positions, houses, solar_cycle=solar_cycle)
