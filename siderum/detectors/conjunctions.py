"""Close-conjunction search between selected planet pairs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

from ..core.bodies import PlanetId
from ..core.time import epoch_millis, require_aware
from ..ephemeris.provider import EphemerisProvider
from ..events import AstroEvent, EventType
from ..observability import HORIZON_SEARCH_DURATION
from .common import count_events, horizon_end, iter_sample_times, safe_longitude, separation

__all__ = ["CONJUNCTION_PAIRS", "find_conjunctions", "pair_separation"]

LOG = logging.getLogger(__name__)

CONJUNCTION_PAIRS: tuple[tuple[PlanetId, PlanetId], ...] = (
    (PlanetId.JUPITER, PlanetId.SATURN),
    (PlanetId.MARS, PlanetId.JUPITER),
    (PlanetId.VENUS, PlanetId.JUPITER),
    (PlanetId.VENUS, PlanetId.MARS),
    (PlanetId.MERCURY, PlanetId.VENUS),
)

# Separation a pair starts from before any sample is read.
_NO_PREVIOUS = 999.0


def pair_separation(
    provider: EphemerisProvider, first: PlanetId, second: PlanetId, instant: datetime
) -> float | None:
    lon1 = safe_longitude(provider, first, instant, component="horizon_conjunctions")
    if lon1 is None:
        return None
    lon2 = safe_longitude(provider, second, instant, component="horizon_conjunctions")
    if lon2 is None:
        return None
    return separation(lon1, lon2)


def _conjunction_event(
    first: PlanetId, second: PlanetId, moment: datetime, sep: float
) -> AstroEvent:
    return AstroEvent(
        id=f"conj_{first.value}_{second.value}_{epoch_millis(moment)}",
        type=EventType.CONJUNCTION,
        title=f"{first.value}-{second.value} Conjunction",
        description=f"{first.value} and {second.value} in conjunction ({sep:.1f}° separation).",
        date=moment,
        planet=first,
        planet2=second,
        magnitude=sep,
    )


def _conjunctions_for(
    provider: EphemerisProvider,
    first: PlanetId,
    second: PlanetId,
    start: datetime,
    end: datetime,
    step_days: float,
    gate_deg: float,
) -> list[AstroEvent]:
    times = list(iter_sample_times(start, end, step_days))
    if not times:
        return []
    # One sample past the window so the last in-window minimum can be confirmed.
    lookahead = times[-1] + timedelta(days=step_days)
    seps = [pair_separation(provider, first, second, t) for t in [*times, lookahead]]

    events: list[AstroEvent] = []
    previous = _NO_PREVIOUS
    for index, moment in enumerate(times):
        sep = seps[index]
        if sep is None:
            continue
        following = seps[index + 1]
        if sep < gate_deg and previous > sep and following is not None and following > sep:
            events.append(_conjunction_event(first, second, moment, sep))
        previous = sep
    return events


def find_conjunctions(
    provider: EphemerisProvider,
    start: datetime,
    years: float,
    *,
    pairs: Sequence[tuple[PlanetId | str, PlanetId | str]] | None = None,
    step_days: float = 7.0,
    gate_deg: float = 5.0,
) -> list[AstroEvent]:
    """Return sampled local minima of separation below ``gate_deg``.

    A sample qualifies when its separation is under the gate, smaller than
    the previous usable sample and smaller than the following sample.
    ``magnitude`` carries the separation in degrees.
    """

    start = require_aware(start, label="start")
    if years <= 0:
        return []
    end = horizon_end(start, years)
    resolved = [
        (PlanetId.parse(a), PlanetId.parse(b))
        for a, b in (pairs if pairs is not None else CONJUNCTION_PAIRS)
    ]

    events: list[AstroEvent] = []
    with HORIZON_SEARCH_DURATION.labels(search="conjunctions").time():
        for first, second in resolved:
            found = _conjunctions_for(provider, first, second, start, end, step_days, gate_deg)
            LOG.debug("Found %d conjunctions for %s-%s", len(found), first.value, second.value)
            events.extend(found)
    count_events(events)
    return events
