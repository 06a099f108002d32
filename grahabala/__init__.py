"""grahabala: Shadbala, divisional charts and house strength for Jyotisa."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

from .chart import (
    HouseSystem,
    PlanetInfo,
    VedicChart,
    build_chart,
    compute_vedic_chart,
    equal_houses,
    whole_sign_houses,
)
from .config import Settings, default_settings, load_settings, save_settings
from .core import Planet
from .engine.vedic import (
    DivisionalChartType,
    HouseStrengthResult,
    ShadbalaResult,
    ShadbalaStrength,
    UnsupportedVargaError,
    calculate_divisional_chart,
    calculate_house_strength,
    calculate_shadbala,
    calculate_vimsopaka_bala,
    summarize_house_strength,
)
from .ephemeris import (
    ChartLocation,
    EphemerisProvider,
    EphemerisUnavailableError,
    PlanetPosition,
    SolarCycle,
)
from .jyotish import Dignity, aspect_strength, calculate_aspects, dignity
from .utils import InvalidSignError

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("grahabala")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"


def get_version() -> str:
    """Return the resolved grahabala package version."""

    return __version__


__all__ = [
    "ChartLocation",
    "Dignity",
    "DivisionalChartType",
    "EphemerisProvider",
    "EphemerisUnavailableError",
    "HouseStrengthResult",
    "HouseSystem",
    "InvalidSignError",
    "Planet",
    "PlanetInfo",
    "PlanetPosition",
    "Settings",
    "ShadbalaResult",
    "ShadbalaStrength",
    "SolarCycle",
    "UnsupportedVargaError",
    "VedicChart",
    "__version__",
    "aspect_strength",
    "build_chart",
    "calculate_aspects",
    "calculate_divisional_chart",
    "calculate_house_strength",
    "calculate_shadbala",
    "calculate_vimsopaka_bala",
    "compute_vedic_chart",
    "default_settings",
    "dignity",
    "equal_houses",
    "get_version",
    "load_settings",
    "save_settings",
    "summarize_house_strength",
    "whole_sign_houses",
]
