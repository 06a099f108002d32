"""Chart records and builders."""

from .builder import (
    build_chart,
    compute_vedic_chart,
    derive_ketu,
    is_combust,
    local_date,
    local_mean_time,
)
from .models import HouseSystem, PlanetInfo, VedicChart, equal_houses, whole_sign_houses

__all__ = [
    "HouseSystem",
    "PlanetInfo",
    "VedicChart",
    "build_chart",
    "compute_vedic_chart",
    "derive_ketu",
    "equal_houses",
    "is_combust",
    "local_date",
    "local_mean_time",
    "whole_sign_houses",
]
