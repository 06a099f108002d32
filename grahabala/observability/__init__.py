"""Observability helpers (Prometheus metrics)."""

from .metrics import (
    COMPUTE_ERRORS,
    EPHEMERIS_COMPUTE_DURATION,
    KALA_BALA_FALLBACKS,
    SHADBALA_COMPUTE_DURATION,
    VARGA_COMPUTE_DURATION,
    ensure_metrics_registered,
)

__all__ = [
    "COMPUTE_ERRORS",
    "EPHEMERIS_COMPUTE_DURATION",
    "KALA_BALA_FALLBACKS",
    "SHADBALA_COMPUTE_DURATION",
    "VARGA_COMPUTE_DURATION",
    "ensure_metrics_registered",
]
