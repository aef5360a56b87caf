"""Observability helpers (Prometheus collectors)."""

from __future__ import annotations

from .metrics import (
    CHART_COMPUTE_DURATION,
    COMPUTE_ERRORS,
    HORIZON_EVENTS,
    HORIZON_SEARCH_DURATION,
    ensure_metrics_registered,
    record_error,
)

__all__ = [
    "CHART_COMPUTE_DURATION",
    "COMPUTE_ERRORS",
    "HORIZON_EVENTS",
    "HORIZON_SEARCH_DURATION",
    "ensure_metrics_registered",
    "record_error",
]
