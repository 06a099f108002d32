"""Synthetic chart builders used across the test suite."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from grahabala.chart import VedicChart, build_chart, whole_sign_houses
from grahabala.core import Planet
from grahabala.ephemeris import ChartLocation, PlanetPosition, SolarCycle

MOMENT = datetime(2024, 3, 20, 6, 30, tzinfo=UTC)
DELHI = ChartLocation(latitude=28.6139, longitude=77.2090)
DELHI_SOLAR_CYCLE = SolarCycle(
    sunrise=datetime(2024, 3, 20, 0, 50, tzinfo=UTC),
    sunset=datetime(2024, 3, 20, 13, 0, tzinfo=UTC),
)

DEFAULT_ASCENDANT = 60.0

DEFAULT_LONGITUDES: Mapping[Planet, float] = {
    Planet.SUN: 335.0,
    Planet.MOON: 95.0,
    Planet.MARS: 298.0,
    Planet.MERCURY: 345.0,
    Planet.JUPITER: 25.0,
    Planet.VENUS: 320.0,
    Planet.SATURN: 318.0,
    Planet.RAHU: 350.0,
}

DEFAULT_SPEEDS: Mapping[Planet, float] = {
    Planet.SUN: 1.0,
    Planet.MOON: 13.2,
    Planet.MARS: 0.78,
    Planet.MERCURY: 1.6,
    Planet.JUPITER: 0.21,
    Planet.VENUS: 1.23,
    Planet.SATURN: 0.12,
    Planet.RAHU: -0.053,
}

_UNSET = object()


def make_positions(
    longitudes: Mapping[Planet, float],
    *,
    speeds: Mapping[Planet, float] | None = None,
    declinations: Mapping[Planet, float] | None = None,
    moment: datetime = MOMENT,
) -> list[PlanetPosition]:
    speeds = DEFAULT_SPEEDS if speeds is None else {**DEFAULT_SPEEDS, **speeds}
    declinations = declinations or {}
    return [
        PlanetPosition(
            planet=planet,
            moment=moment,
            longitude=longitude,
            speed_longitude=speeds.get(planet, 0.0),
            declination=declinations.get(planet, 0.0),
        )
        for planet, longitude in longitudes.items()
    ]


def make_chart(
    longitudes: Mapping[Planet, float] | None = None,
    *,
    ascendant: float = DEFAULT_ASCENDANT,
    speeds: Mapping[Planet, float] | None = None,
    declinations: Mapping[Planet, float] | None = None,
    moment: datetime = MOMENT,
    location: ChartLocation = DELHI,
    solar_cycle: SolarCycle | None | object = _UNSET,
) -> VedicChart:
    """Return a whole-sign chart; defaults reproduce a Delhi noon chart in March 2024."""

    cycle = DELHI_SOLAR_CYCLE if solar_cycle is _UNSET else solar_cycle
    positions = make_positions(
        DEFAULT_LONGITUDES if longitudes is None else longitudes,
        speeds=speeds,
        declinations=declinations,
        moment=moment,
    )
    return build_chart(
        moment,
        location,
        positions,
        whole_sign_houses(ascendant),
        solar_cycle=cycle,  # type: ignore[arg-type]
    )


@dataclass
class FixedEphemeris:
    """Ephemeris provider with fixed longitudes, used to exercise chart assembly."""

    longitudes: Mapping[Planet, float] = field(default_factory=lambda: dict(DEFAULT_LONGITUDES))
    ascendant: float = DEFAULT_ASCENDANT
    solar_cycle: SolarCycle = DELHI_SOLAR_CYCLE
    requested_days: list[date] = field(default_factory=list)
    requested_planets: list[Planet] = field(default_factory=list)

    def position_of(
        self, planet: Planet, moment: datetime, location: ChartLocation
    ) -> PlanetPosition:
        self.requested_planets.append(planet)
        return PlanetPosition(
            planet=planet,
            moment=moment,
            longitude=self.longitudes[planet],
            speed_longitude=DEFAULT_SPEEDS.get(planet, 0.0),
        )

    def sunrise_sunset(self, day: date, location: ChartLocation) -> SolarCycle:
        self.requested_days.append(day)
        return self.solar_cycle

    def angles(
        self, moment: datetime, location: ChartLocation, house_system: str
    ) -> tuple[float, tuple[float, ...], float]:
        cusps = tuple((self.ascendant + 30.0 * i) % 360.0 for i in range(12))
        return self.ascendant, cusps, (self.ascendant + 270.0) % 360.0
