"""Provider protocol consumed by the chart assembler and event horizon."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from ..core.bodies import PlanetId

__all__ = [
    "EclipticPosition",
    "HorizontalPosition",
    "EclipseInfo",
    "SOLAR_ECLIPSE_KINDS",
    "LUNAR_ECLIPSE_KINDS",
    "EphemerisProvider",
]


SOLAR_ECLIPSE_KINDS: frozenset[str] = frozenset({"total", "annular", "partial", "hybrid"})
LUNAR_ECLIPSE_KINDS: frozenset[str] = frozenset({"total", "partial", "penumbral"})


@dataclass(frozen=True)
class EclipticPosition:
    """Geocentric ecliptic coordinates of a body at one instant."""

    longitude: float
    latitude: float
    distance_au: float = 1.0
    speed: float | None = None


@dataclass(frozen=True)
class HorizontalPosition:
    """Observer-relative coordinates; azimuth measured from north through east."""

    azimuth: float
    altitude: float


@dataclass(frozen=True)
class EclipseInfo:
    """Global circumstances of an eclipse at greatest eclipse.

    ``obscuration`` is the covered fraction of the solar disc for solar
    eclipses and the umbral magnitude clamped to ``[0, 1]`` for lunar ones
    (``0`` for penumbral eclipses).
    """

    peak: datetime
    kind: str
    obscuration: float


@runtime_checkable
class EphemerisProvider(Protocol):
    """Minimal surface every ephemeris backend must offer.

    Implementations raise :class:`siderum.errors.EphemerisUnavailable` when a
    body or instant cannot be resolved.
    """

    def position(self, body: PlanetId, instant: datetime) -> EclipticPosition: ...

    def topocentric(
        self, body: PlanetId, instant: datetime, latitude: float, longitude: float
    ) -> HorizontalPosition: ...

    def next_solar_eclipse(self, after: datetime) -> EclipseInfo | None: ...

    def next_lunar_eclipse(self, after: datetime) -> EclipseInfo | None: ...

    def ascendant(self, instant: datetime, latitude: float, longitude: float) -> float: ...

    def local_sidereal_time(self, instant: datetime, longitude: float) -> float: ...

    def sunrise_sunset(
        self, instant: datetime, latitude: float, longitude: float
    ) -> tuple[datetime, datetime]: ...
