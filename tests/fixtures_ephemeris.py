"""Deterministic in-memory ephemeris provider for tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta

from siderum.core.bodies import PlanetId
from siderum.ephemeris.provider import EclipseInfo, EclipticPosition, HorizontalPosition
from siderum.errors import EphemerisUnavailable

EPOCH = datetime(2024, 1, 1, tzinfo=UTC)

Track = Callable[[float], float]


def days_since_epoch(instant: datetime) -> float:
    return (instant - EPOCH).total_seconds() / 86400.0


def at_day(days: float) -> datetime:
    return EPOCH + timedelta(days=days)


def linear(start: float, rate: float = 0.0) -> Track:
    return lambda days: start + rate * days


def retrograde_cycle(start: float = 100.0) -> Track:
    """Direct at +1°/day, retrograde at -0.5°/day for days 40-60 of every 100."""

    def track(days: float) -> float:
        periods, rest = divmod(days, 100.0)
        if rest < 40.0:
            offset = rest
        elif rest < 60.0:
            offset = 40.0 - 0.5 * (rest - 40.0)
        else:
            offset = 30.0 + (rest - 60.0)
        return start + 70.0 * periods + offset

    return track


DEFAULT_LONGITUDES: dict[PlanetId, float] = {
    PlanetId.SUN: 0.5,
    PlanetId.MOON: 90.5,
    PlanetId.MERCURY: 10.0,
    PlanetId.VENUS: 5.0,
    PlanetId.MARS: 200.0,
    PlanetId.JUPITER: 150.0,
    PlanetId.SATURN: 333.0,
    PlanetId.URANUS: 52.0,
    PlanetId.NEPTUNE: 357.0,
    PlanetId.PLUTO: 301.0,
    PlanetId.NORTH_NODE: 15.0,
    PlanetId.SOUTH_NODE: 195.0,
    PlanetId.LILITH: 170.0,
}


class FakeEphemeris:
    """Provider whose bodies follow simple longitude tracks.

    ``fail`` is a predicate ``(body, instant) -> bool`` marking samples the
    provider cannot resolve. ``altitudes`` of ``None`` makes every
    ``topocentric`` call fail.
    """

    def __init__(
        self,
        tracks: dict[PlanetId, Track] | None = None,
        *,
        altitudes: dict[PlanetId, float] | None = None,
        supply_speed: bool = True,
        fail: Callable[[PlanetId, datetime], bool] | None = None,
        solar: Iterable[EclipseInfo] = (),
        lunar: Iterable[EclipseInfo] = (),
        eclipse_error_after: int | None = None,
        ascendant: float | None = None,
        polar: bool = False,
    ) -> None:
        self.tracks = {body: linear(lon) for body, lon in DEFAULT_LONGITUDES.items()}
        self.tracks.update(tracks or {})
        self.altitudes = altitudes
        self.supply_speed = supply_speed
        self.fail = fail or (lambda body, instant: False)
        self.solar = sorted(solar, key=lambda info: info.peak)
        self.lunar = sorted(lunar, key=lambda info: info.peak)
        self.eclipse_error_after = eclipse_error_after
        self.eclipse_calls = 0
        self.asc = ascendant
        self.polar = polar
        self.position_calls = 0

    def position(self, body, instant: datetime) -> EclipticPosition:
        body = PlanetId.parse(body)
        self.position_calls += 1
        if self.fail(body, instant):
            raise EphemerisUnavailable("scripted failure", body=body.value, instant=instant)
        track = self.tracks[body]
        days = days_since_epoch(instant)
        speed = None
        if self.supply_speed:
            speed = (track(days + 0.01) - track(days - 0.01)) / 0.02
        return EclipticPosition(longitude=track(days) % 360.0, latitude=0.0, speed=speed)

    def topocentric(self, body, instant, latitude, longitude) -> HorizontalPosition:
        body = PlanetId.parse(body)
        if self.altitudes is None:
            raise EphemerisUnavailable("no horizon data", body=body.value, instant=instant)
        return HorizontalPosition(azimuth=180.0, altitude=self.altitudes.get(body, -5.0))

    def _next(self, infos: list[EclipseInfo], after: datetime) -> EclipseInfo | None:
        self.eclipse_calls += 1
        if self.eclipse_error_after is not None and self.eclipse_calls > self.eclipse_error_after:
            raise EphemerisUnavailable("eclipse search failed", instant=after)
        for info in infos:
            if info.peak >= after:
                return info
        return None

    def next_solar_eclipse(self, after: datetime) -> EclipseInfo | None:
        return self._next(self.solar, after)

    def next_lunar_eclipse(self, after: datetime) -> EclipseInfo | None:
        return self._next(self.lunar, after)

    def ascendant(self, instant, latitude, longitude) -> float:
        if self.asc is None:
            raise EphemerisUnavailable("no houses", instant=instant)
        return self.asc

    def local_sidereal_time(self, instant, longitude) -> float:
        return 6.0

    def sunrise_sunset(self, instant, latitude, longitude):
        if self.polar:
            raise EphemerisUnavailable(
                "polar day", body="Sun", instant=instant, error_code="CIRCUMPOLAR_SUN"
            )
        sunrise = instant.replace(hour=6, minute=0, second=0, microsecond=0)
        if sunrise < instant:
            sunrise += timedelta(days=1)
        return sunrise, sunrise + timedelta(hours=12)


