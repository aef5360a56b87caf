from __future__ import annotations

from datetime import datetime

import pytest

from siderum.config import default_settings
from siderum.core.bodies import PlanetId
from siderum.detectors.common import horizon_end
from siderum.ephemeris.provider import EclipseInfo
from siderum.events import AstroEvent, EventType
from siderum.horizon import compute_event_horizon, next_major_event, search_events

from tests.fixtures_ephemeris import EPOCH, FakeEphemeris, at_day, linear, retrograde_cycle


def _busy_provider() -> FakeEphemeris:
    return FakeEphemeris(
        {
            PlanetId.MERCURY: retrograde_cycle(),
            PlanetId.VENUS: linear(0.0, 1.2),
            PlanetId.JUPITER: linear(30.0, 0.2),
        },
        solar=[EclipseInfo(peak=at_day(100), kind="total", obscuration=1.0)],
        lunar=[EclipseInfo(peak=at_day(15), kind="total", obscuration=1.0)],
    )


def test_horizon_merges_all_searches_in_date_order():
    events = compute_event_horizon(EPOCH, None, 0.5, provider=_busy_provider())
    dates = [event.date for event in events]
    assert dates == sorted(dates)
    types = {event.type for event in events}
    assert {
        EventType.SOLAR_ECLIPSE,
        EventType.LUNAR_ECLIPSE,
        EventType.RETROGRADE_START,
        EventType.RETROGRADE_END,
        EventType.CONJUNCTION,
    } <= types
    assert events[0].type is EventType.LUNAR_ECLIPSE


def test_parallel_merge_matches_serial():
    settings = default_settings()
    serial = compute_event_horizon(EPOCH, None, 0.5, provider=_busy_provider(), settings=settings)
    settings.event_horizon.parallel = True
    parallel = compute_event_horizon(
        EPOCH, None, 0.5, provider=_busy_provider(), settings=settings
    )
    assert [e.id for e in parallel] == [e.id for e in serial]


def test_years_default_from_settings_and_non_positive():
    provider = _busy_provider()
    assert compute_event_horizon(EPOCH, None, 0, provider=provider) == []
    assert compute_event_horizon(EPOCH, None, -2, provider=provider) == []
    settings = default_settings()
    settings.event_horizon.years = 0.5
    assert compute_event_horizon(EPOCH, provider=provider, settings=settings)


def test_horizon_rejects_naive_start():
    with pytest.raises(ValueError):
        compute_event_horizon(datetime(2024, 1, 1), None, 1, provider=_busy_provider())


def _event(day: float, title: str, kind: EventType, planet: PlanetId | None = None) -> AstroEvent:
    return AstroEvent(
        id=f"{kind.value}_{day}",
        type=kind,
        title=title,
        description=f"{title} description",
        date=at_day(day),
        planet=planet,
    )


EVENTS = [
    _event(5, "Mercury Retrograde", EventType.RETROGRADE_START, PlanetId.MERCURY),
    _event(10, "Total Solar Eclipse", EventType.SOLAR_ECLIPSE, PlanetId.SUN),
    _event(20, "Mars Direct", EventType.RETROGRADE_END, PlanetId.MARS),
]


def test_search_matches_title_planet_and_type():
    assert [e.title for e in search_events(EVENTS, "  ECLIPSE ")] == ["Total Solar Eclipse"]
    assert [e.title for e in search_events(EVENTS, "mars")] == ["Mars Direct"]
    assert [e.title for e in search_events(EVENTS, "retrograde end")] == ["Mars Direct"]
    assert [e.title for e in search_events(EVENTS, "sun")] == ["Total Solar Eclipse"]


def test_blank_query_returns_everything():
    assert search_events(EVENTS, "") == EVENTS
    assert search_events(EVENTS, "   ") == EVENTS
    assert search_events(EVENTS, None) == EVENTS


def test_next_major_event_is_strictly_after():
    assert next_major_event(EVENTS, at_day(5)).title == "Total Solar Eclipse"
    assert next_major_event(EVENTS, at_day(4)).title == "Mercury Retrograde"
    assert next_major_event(EVENTS, at_day(20)) is None
    assert next_major_event([], EPOCH) is None


@pytest.mark.parametrize("years", [0.25, 0.5, 1.0])
def test_event_dates_stay_inside_window(years):
    provider = FakeEphemeris(
        {
            PlanetId.MERCURY: retrograde_cycle(),
            PlanetId.VENUS: linear(0.0, 1.2),
            PlanetId.JUPITER: linear(30.0, 0.2),
        },
        solar=[
            EclipseInfo(peak=at_day(day), kind="partial", obscuration=0.3)
            for day in (-5, 60, 170, 400)
        ],
        lunar=[
            EclipseInfo(peak=at_day(day), kind="total", obscuration=1.0)
            for day in (15, 91, 300)
        ],
    )
    end = horizon_end(EPOCH, years)
    events = compute_event_horizon(EPOCH, None, years, provider=provider)
    assert events
    assert all(EPOCH <= event.date <= end for event in events)
