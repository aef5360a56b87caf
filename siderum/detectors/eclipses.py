"""Solar and lunar eclipse search driven by the provider's eclipse primitives."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime, timedelta

from ..core.bodies import PlanetId
from ..core.time import epoch_millis, require_aware
from ..errors import EphemerisUnavailable, SearchExhausted
from ..ephemeris.provider import (
    LUNAR_ECLIPSE_KINDS,
    SOLAR_ECLIPSE_KINDS,
    EclipseInfo,
    EphemerisProvider,
)
from ..events import AstroEvent, EventType
from ..observability import HORIZON_SEARCH_DURATION, record_error
from .common import count_events, horizon_end, long_date

__all__ = ["find_solar_eclipses", "find_lunar_eclipses"]

LOG = logging.getLogger(__name__)

_SOLAR_TITLES = {
    "total": "Total Solar Eclipse",
    "annular": "Annular Solar Eclipse",
    "partial": "Partial Solar Eclipse",
    "hybrid": "Hybrid Solar Eclipse",
}

_LUNAR_TITLES = {
    "total": "Total Lunar Eclipse",
    "partial": "Partial Lunar Eclipse",
    "penumbral": "Penumbral Lunar Eclipse",
}


def _next_within(
    search: Callable[[datetime], EclipseInfo | None], cursor: datetime, end: datetime
) -> EclipseInfo:
    info = search(cursor)
    if info is None:
        raise SearchExhausted("provider reports no further eclipses")
    if info.peak > end:
        raise SearchExhausted("next eclipse falls after the horizon")
    return info


def _search(
    kind: str,
    search: Callable[[datetime], EclipseInfo | None],
    build: Callable[[EclipseInfo], AstroEvent],
    kinds: frozenset[str],
    start: datetime,
    years: float,
    skip_days: float,
    iterations_per_year: int,
) -> list[AstroEvent]:
    start = require_aware(start, label="start")
    if years <= 0:
        return []
    end = horizon_end(start, years)
    budget = math.ceil(years * iterations_per_year)
    skip = timedelta(days=skip_days)

    events: list[AstroEvent] = []
    cursor = start
    with HORIZON_SEARCH_DURATION.labels(search=kind).time():
        for _ in range(budget):
            try:
                info = _next_within(search, cursor, end)
            except SearchExhausted:
                break
            except EphemerisUnavailable as exc:
                record_error(f"horizon_{kind}", exc)
                LOG.warning(
                    "%s search aborted at %s: %s",
                    kind,
                    cursor.isoformat(),
                    exc,
                    extra={"err_code": exc.error_code},
                )
                break
            peak = require_aware(info.peak, label="eclipse peak")
            cursor = peak + skip
            if peak < start:
                continue
            if info.kind not in kinds:
                LOG.warning(
                    "Unrecognised %s kind %r at %s; using a generic title",
                    kind,
                    info.kind,
                    peak.isoformat(),
                    extra={"err_code": "ECLIPSE_KIND_UNKNOWN"},
                )
            events.append(build(info))
    count_events(events)
    return events


def _solar_event(info: EclipseInfo) -> AstroEvent:
    peak = require_aware(info.peak, label="eclipse peak")
    title = _SOLAR_TITLES.get(info.kind, "Solar Eclipse")
    return AstroEvent(
        id=f"solar_ecl_{epoch_millis(peak)}",
        type=EventType.SOLAR_ECLIPSE,
        title=title,
        description=f"{title} on {long_date(peak)}. Obscuration: {info.obscuration * 100:.0f}%",
        date=peak,
        planet=PlanetId.SUN,
        magnitude=info.obscuration,
    )


def _lunar_event(info: EclipseInfo) -> AstroEvent:
    peak = require_aware(info.peak, label="eclipse peak")
    title = _LUNAR_TITLES.get(info.kind, "Lunar Eclipse")
    return AstroEvent(
        id=f"lunar_ecl_{epoch_millis(peak)}",
        type=EventType.LUNAR_ECLIPSE,
        title=title,
        description=f"{title} on {long_date(peak)}. Magnitude: {info.obscuration:.2f}",
        date=peak,
        planet=PlanetId.MOON,
        magnitude=info.obscuration,
    )


def find_solar_eclipses(
    provider: EphemerisProvider,
    start: datetime,
    years: float,
    *,
    skip_days: float = 30.0,
    iterations_per_year: int = 3,
) -> list[AstroEvent]:
    """Return solar eclipses whose greatest eclipse falls in the window."""

    return _search(
        "solar_eclipse",
        provider.next_solar_eclipse,
        _solar_event,
        SOLAR_ECLIPSE_KINDS,
        start,
        years,
        skip_days,
        iterations_per_year,
    )


def find_lunar_eclipses(
    provider: EphemerisProvider,
    start: datetime,
    years: float,
    *,
    skip_days: float = 30.0,
    iterations_per_year: int = 3,
) -> list[AstroEvent]:
    """Return lunar eclipses whose greatest eclipse falls in the window."""

    return _search(
        "lunar_eclipse",
        provider.next_lunar_eclipse,
        _lunar_event,
        LUNAR_ECLIPSE_KINDS,
        start,
        years,
        skip_days,
        iterations_per_year,
    )
