"""Records produced by the ephemeris collaborator and consumed by the engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from ..core.bodies import Planet
from ..utils.angles import degree_in_sign, norm360, sign_index

__all__ = ["ChartLocation", "PlanetPosition", "SolarCycle"]


@dataclass(frozen=True, slots=True)
class ChartLocation:
    """Geographic observer location (degrees, east longitude positive)."""

    latitude: float
    longitude: float
    elevation: float = 0.0

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude {self.latitude} outside [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude {self.longitude} outside [-180, 180]")


@dataclass(frozen=True, slots=True)
class PlanetPosition:
    """Sidereal ephemeris output for a single planet at a single instant."""

    planet: Planet
    moment: datetime
    longitude: float
    latitude: float = 0.0
    distance: float = 0.0
    speed_longitude: float = 0.0
    speed_latitude: float = 0.0
    speed_distance: float = 0.0
    declination: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "longitude", norm360(self.longitude))

    @property
    def sign_index(self) -> int:
        return sign_index(self.longitude)

    @property
    def degree_in_sign(self) -> float:
        return degree_in_sign(self.longitude)

    @property
    def is_retrograde(self) -> bool:
        return self.speed_longitude < 0.0

    def with_longitude(self, longitude: float) -> PlanetPosition:
        """Return a copy of this position moved to ``longitude``."""

        return PlanetPosition(
            planet=self.planet,
            moment=self.moment,
            longitude=longitude,
            latitude=self.latitude,
            distance=self.distance,
            speed_longitude=self.speed_longitude,
            speed_latitude=self.speed_latitude,
            speed_distance=self.speed_distance,
            declination=self.declination,
        )


@dataclass(frozen=True, slots=True)
class SolarCycle:
    """Sunrise and sunset bracketing the chart's local date.

    Either bound may be ``None`` when the Sun does not rise or set (polar
    day or night); consumers must then fall back to a heuristic.
    """

    sunrise: datetime | None
    sunset: datetime | None

    @property
    def is_complete(self) -> bool:
        return (
            self.sunrise is not None
            and self.sunset is not None
            and self.sunrise < self.sunset
        )

    def to_dict(self) -> Mapping[str, str | None]:
        return {
            "sunrise": self.sunrise.isoformat() if self.sunrise else None,
            "sunset": self.sunset.isoformat() if self.sunset else None,
        }
