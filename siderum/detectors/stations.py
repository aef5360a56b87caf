"""Retrograde station search by sampling daily motion."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

from ..core.bodies import PlanetId
from ..core.time import epoch_millis, require_aware
from ..ephemeris.provider import EphemerisProvider
from ..events import AstroEvent, EventType
from ..observability import HORIZON_SEARCH_DURATION
from .common import count_events, delta_deg, horizon_end, iter_sample_times, safe_longitude

__all__ = ["STATION_PLANETS", "FAST_PLANETS", "daily_motion", "find_stations"]

LOG = logging.getLogger(__name__)

STATION_PLANETS: tuple[PlanetId, ...] = (
    PlanetId.MERCURY,
    PlanetId.VENUS,
    PlanetId.MARS,
    PlanetId.JUPITER,
    PlanetId.SATURN,
)
FAST_PLANETS: frozenset[PlanetId] = frozenset({PlanetId.MERCURY, PlanetId.VENUS})

_ONE_DAY = timedelta(days=1)


def daily_motion(
    provider: EphemerisProvider, planet: PlanetId, instant: datetime
) -> float | None:
    """Forward-difference motion over one day in degrees, or ``None`` on failure."""

    first = safe_longitude(provider, planet, instant, component="horizon_stations")
    if first is None:
        return None
    second = safe_longitude(provider, planet, instant + _ONE_DAY, component="horizon_stations")
    if second is None:
        return None
    return delta_deg(second, first)


def _station_event(planet: PlanetId, moment: datetime, retrograde: bool) -> AstroEvent:
    if retrograde:
        return AstroEvent(
            id=f"retro_start_{planet.value}_{epoch_millis(moment)}",
            type=EventType.RETROGRADE_START,
            title=f"{planet.value} Retrograde",
            description=f"{planet.value} stations retrograde. Apparent backward motion begins.",
            date=moment,
            planet=planet,
        )
    return AstroEvent(
        id=f"retro_end_{planet.value}_{epoch_millis(moment)}",
        type=EventType.RETROGRADE_END,
        title=f"{planet.value} Direct",
        description=f"{planet.value} stations direct. Forward motion resumes.",
        date=moment,
        planet=planet,
    )


def _stations_for(
    provider: EphemerisProvider,
    planet: PlanetId,
    start: datetime,
    end: datetime,
    step_days: float,
) -> list[AstroEvent]:
    events: list[AstroEvent] = []
    was_retrograde: bool | None = None
    for moment in iter_sample_times(start, end, step_days):
        motion = daily_motion(provider, planet, moment)
        if motion is None:
            continue
        is_retrograde = motion < 0.0
        if was_retrograde is not None and is_retrograde != was_retrograde:
            events.append(_station_event(planet, moment, is_retrograde))
        was_retrograde = is_retrograde
    return events


def find_stations(
    provider: EphemerisProvider,
    start: datetime,
    years: float,
    *,
    planets: Sequence[PlanetId | str] | None = None,
    fast_step_days: float = 5.0,
    slow_step_days: float = 10.0,
) -> list[AstroEvent]:
    """Return retrograde and direct stations for the visible planets.

    Each planet is sampled on its own grid (``fast_step_days`` for Mercury
    and Venus, ``slow_step_days`` otherwise) and a station is dated at the
    first sample showing the new direction, so dates are accurate to one
    step. The first usable sample only seeds the motion state. Events
    strictly alternate per planet.
    """

    start = require_aware(start, label="start")
    if years <= 0:
        return []
    end = horizon_end(start, years)
    targets = [PlanetId.parse(p) for p in (planets if planets is not None else STATION_PLANETS)]

    events: list[AstroEvent] = []
    with HORIZON_SEARCH_DURATION.labels(search="stations").time():
        for planet in targets:
            step = fast_step_days if planet in FAST_PLANETS else slow_step_days
            found = _stations_for(provider, planet, start, end, step)
            LOG.debug("Found %d stations for %s", len(found), planet.value)
            events.extend(found)
    count_events(events)
    return events
