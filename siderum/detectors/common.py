"""Shared helpers for provider-sampling detectors."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime, timedelta

from ..core.bodies import PlanetId
from ..errors import EphemerisUnavailable
from ..ephemeris.provider import EphemerisProvider
from ..observability import HORIZON_EVENTS, record_error
from ..utils.angles import delta_deg, norm360, separation

__all__ = [
    "DAYS_PER_YEAR",
    "norm360",
    "delta_deg",
    "separation",
    "horizon_end",
    "iter_sample_times",
    "safe_longitude",
    "long_date",
    "count_events",
]

LOG = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25


def horizon_end(start: datetime, years: float) -> datetime:
    """Return ``start`` advanced by ``years`` Julian years."""

    return start + timedelta(days=years * DAYS_PER_YEAR)


def iter_sample_times(start: datetime, end: datetime, step_days: float) -> Iterator[datetime]:
    """Yield ``start + k * step_days`` for every sample not after ``end``."""

    if step_days <= 0:
        raise ValueError("step_days must be positive")
    step = timedelta(days=step_days)
    index = 0
    moment = start
    while moment <= end:
        yield moment
        index += 1
        moment = start + step * index


def safe_longitude(
    provider: EphemerisProvider, body: PlanetId, instant: datetime, *, component: str
) -> float | None:
    """Return the body's longitude, or ``None`` when the provider fails."""

    try:
        return norm360(provider.position(body, instant).longitude)
    except EphemerisUnavailable as exc:
        record_error(component, exc)
        LOG.debug(
            "Skipping %s sample for %s at %s: %s",
            component,
            body.value,
            instant.isoformat(),
            exc,
            extra={"err_code": exc.error_code},
        )
        return None


def long_date(moment: datetime) -> str:
    """Format ``moment`` as ``Month D, YYYY``."""

    return f"{moment.strftime('%B')} {moment.day}, {moment.year}"


def count_events(events: list) -> None:
    for event in events:
        HORIZON_EVENTS.labels(type=event.type.value).inc()
