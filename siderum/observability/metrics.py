"""Prometheus metric definitions shared across Siderum components."""

from __future__ import annotations

from collections.abc import Iterable

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

__all__ = [
    "CHART_COMPUTE_DURATION",
    "COMPUTE_ERRORS",
    "HORIZON_EVENTS",
    "HORIZON_SEARCH_DURATION",
    "ensure_metrics_registered",
    "record_error",
]


CHART_COMPUTE_DURATION = Histogram(
    "siderum_chart_compute_duration_seconds",
    "Duration of full chart snapshot assembly.",
    registry=None,
)


HORIZON_SEARCH_DURATION = Histogram(
    "siderum_horizon_search_duration_seconds",
    "Duration of individual event horizon sub-searches.",
    ("search",),
    registry=None,
)


HORIZON_EVENTS = Counter(
    "siderum_horizon_events_total",
    "Total events emitted by the event horizon engine.",
    ("type",),
    registry=None,
)


COMPUTE_ERRORS = Counter(
    "siderum_compute_errors_total",
    "Count of runtime failures across compute-heavy routines.",
    ("component", "error"),
    registry=None,
)


def _iter_metrics() -> Iterable[Counter | Histogram]:
    yield CHART_COMPUTE_DURATION
    yield HORIZON_SEARCH_DURATION
    yield HORIZON_EVENTS
    yield COMPUTE_ERRORS


def record_error(component: str, exc: BaseException) -> None:
    """Increment :data:`COMPUTE_ERRORS` for ``exc`` raised in ``component``."""

    COMPUTE_ERRORS.labels(component=component, error=exc.__class__.__name__).inc()


def ensure_metrics_registered(
    registry: CollectorRegistry | None = None,
) -> None:
    """Register shared metrics with ``registry`` if not already present."""

    target = registry or REGISTRY
    for metric in _iter_metrics():
        try:
            target.register(metric)
        except ValueError:
            # Prometheus raises when the metric name already exists.
            continue
