"""Vedic strength engine: vargas, Shadbala, Bhava Bala and Vimsopaka."""

from .bhava_bala import (
    BhavaStrengthCategory,
    HouseStrengthResult,
    HouseStrengthSummary,
    KendraType,
    calculate_house_strength,
    house_drishti_strength,
    house_scores,
    kendra_type,
    summarize_house_strength,
)
from .kala import DayNightContext, day_night_context, maasa_lord, varsha_lord, weekday_lord
from .shadbala import (
    SAPTAVARGAJA_POINTS,
    ShadbalaFactor,
    ShadbalaResult,
    ShadbalaStrength,
    calculate_shadbala,
    chesta_bala,
    dig_bala,
    drekkana_bala,
    drik_bala,
    kendra_bala,
    naisargika_bala,
    ojayugma_bala,
    saptavargaja_bala,
    uchcha_bala,
)
from .varga import (
    VARGA_RULES,
    DivisionalChartType,
    UnsupportedVargaError,
    VargaPosition,
    VargaRule,
    calculate_divisional_chart,
    varga_longitude,
    varga_position,
)
from .vimsopaka import (
    VimsopakaCategory,
    VimsopakaResult,
    calculate_vimsopaka_bala,
)

__all__ = [
    "BhavaStrengthCategory",
    "DayNightContext",
    "DivisionalChartType",
    "HouseStrengthResult",
    "HouseStrengthSummary",
    "KendraType",
    "SAPTAVARGAJA_POINTS",
    "ShadbalaFactor",
    "ShadbalaResult",
    "ShadbalaStrength",
    "UnsupportedVargaError",
    "VARGA_RULES",
    "VargaPosition",
    "VargaRule",
    "VimsopakaCategory",
    "VimsopakaResult",
    "calculate_divisional_chart",
    "calculate_house_strength",
    "calculate_shadbala",
    "calculate_vimsopaka_bala",
    "chesta_bala",
    "day_night_context",
    "dig_bala",
    "drekkana_bala",
    "drik_bala",
    "house_drishti_strength",
    "house_scores",
    "kendra_bala",
    "kendra_type",
    "maasa_lord",
    "naisargika_bala",
    "ojayugma_bala",
    "saptavargaja_bala",
    "summarize_house_strength",
    "uchcha_bala",
    "varga_longitude",
    "varga_position",
    "varsha_lord",
    "weekday_lord",
]
