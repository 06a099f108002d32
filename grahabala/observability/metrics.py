"""Prometheus metric definitions shared across grahabala components."""

from __future__ import annotations

from collections.abc import Iterable

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

__all__ = [
    "COMPUTE_ERRORS",
    "EPHEMERIS_COMPUTE_DURATION",
    "KALA_BALA_FALLBACKS",
    "SHADBALA_COMPUTE_DURATION",
    "VARGA_COMPUTE_DURATION",
    "ensure_metrics_registered",
]


VARGA_COMPUTE_DURATION = Histogram(
    "grahabala_varga_compute_duration_seconds",
    "Duration of divisional chart derivations.",
    ("varga",),
    registry=None,
)


SHADBALA_COMPUTE_DURATION = Histogram(
    "grahabala_shadbala_compute_duration_seconds",
    "Duration of full Shadbala computations for one chart.",
    registry=None,
)


EPHEMERIS_COMPUTE_DURATION = Histogram(
    "grahabala_ephemeris_compute_duration_seconds",
    "Duration of Swiss ephemeris lookups issued while building charts.",
    ("operation",),
    registry=None,
)


KALA_BALA_FALLBACKS = Counter(
    "grahabala_kala_bala_fallbacks_total",
    "Kala Bala computations that fell back to the house-based day/night heuristic.",
    ("reason",),
    registry=None,
)


COMPUTE_ERRORS = Counter(
    "grahabala_compute_errors_total",
    "Count of runtime failures across compute-heavy routines.",
    ("component", "error"),
    registry=None,
)


def _iter_metrics() -> Iterable[Counter | Histogram]:
    yield VARGA_COMPUTE_DURATION
    yield SHADBALA_COMPUTE_DURATION
    yield EPHEMERIS_COMPUTE_DURATION
    yield KALA_BALA_FALLBACKS
    yield COMPUTE_ERRORS


def ensure_metrics_registered(
    registry: CollectorRegistry | None = None,
) -> None:
    """Register shared metrics with ``registry`` if not already present."""

    target = registry or REGISTRY
    for metric in _iter_metrics():
        try:
            target.register(metric)
        except ValueError:
            # Prometheus raises when a metric name already exists in the registry.
            continue
