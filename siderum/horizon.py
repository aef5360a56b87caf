"""Multi-year event horizon: eclipses, stations and close conjunctions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from .chart.models import ChartLocation
from .config.settings import Settings, get_settings
from .core.time import require_aware
from .detectors import (
    find_conjunctions,
    find_lunar_eclipses,
    find_solar_eclipses,
    find_stations,
)
from .ephemeris.provider import EphemerisProvider
from .events import AstroEvent

__all__ = ["compute_event_horizon", "search_events", "next_major_event"]

LOG = logging.getLogger(__name__)


def _sub_searches(
    provider: EphemerisProvider, start: datetime, years: float, settings: Settings
) -> list[Callable[[], list[AstroEvent]]]:
    cfg = settings.event_horizon
    return [
        lambda: find_solar_eclipses(
            provider,
            start,
            years,
            skip_days=cfg.eclipse_skip_days,
            iterations_per_year=cfg.eclipse_iterations_per_year,
        ),
        lambda: find_lunar_eclipses(
            provider,
            start,
            years,
            skip_days=cfg.eclipse_skip_days,
            iterations_per_year=cfg.eclipse_iterations_per_year,
        ),
        lambda: find_stations(
            provider,
            start,
            years,
            fast_step_days=cfg.fast_step_days,
            slow_step_days=cfg.slow_step_days,
        ),
        lambda: find_conjunctions(
            provider,
            start,
            years,
            pairs=cfg.conjunction_pairs,
            step_days=cfg.conjunction_step_days,
            gate_deg=cfg.conjunction_gate_deg,
        ),
    ]


def compute_event_horizon(
    start: datetime,
    location: ChartLocation | None = None,
    years: float | None = None,
    *,
    provider: EphemerisProvider | None = None,
    settings: Settings | None = None,
) -> list[AstroEvent]:
    """Return every event between ``start`` and ``start + years`` in date order.

    ``location`` is accepted for interface stability; all searches are
    geocentric. ``years`` defaults to ``settings.event_horizon.years``.
    A provider failure inside an eclipse search ends that search only, and
    failed samples in the station and conjunction searches are skipped.
    """

    start = require_aware(start, label="start")
    settings = settings or get_settings()
    span = settings.event_horizon.years if years is None else float(years)
    if span <= 0:
        return []
    if provider is None:
        from .ephemeris import default_provider

        provider = default_provider(settings)

    searches = _sub_searches(provider, start, span, settings)
    events: list[AstroEvent] = []
    if settings.event_horizon.parallel:
        with ThreadPoolExecutor(max_workers=len(searches)) as executor:
            futures = [executor.submit(search) for search in searches]
            for future in futures:
                events.extend(future.result())
    else:
        for search in searches:
            events.extend(search())

    events.sort(key=lambda event: event.date)
    LOG.info(
        "Event horizon from %s over %.2f years: %d events",
        start.isoformat(),
        span,
        len(events),
    )
    return events


def _matches(event: AstroEvent, needle: str) -> bool:
    planets = [p.value.lower() for p in (event.planet, event.planet2) if p is not None]
    return (
        needle in event.title.lower()
        or needle in event.description.lower()
        or any(needle in name for name in planets)
        or needle in event.type.label
    )


def search_events(events: Sequence[AstroEvent], query: str | None) -> list[AstroEvent]:
    """Filter ``events`` by a case-insensitive substring, preserving order."""

    needle = (query or "").strip().lower()
    if not needle:
        return list(events)
    return [event for event in events if _matches(event, needle)]


def next_major_event(
    events: Iterable[AstroEvent], from_instant: datetime
) -> AstroEvent | None:
    """Return the earliest event strictly after ``from_instant``."""

    reference = require_aware(from_instant, label="from_instant")
    upcoming = [event for event in events if event.date > reference]
    if not upcoming:
        return None
    return min(upcoming, key=lambda event: event.date)
