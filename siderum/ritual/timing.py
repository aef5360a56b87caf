"""Planetary days, planetary hours and lunar phase."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Dict, Tuple

from ..chart.models import ChartLocation
from ..core.bodies import PlanetId
from ..core.time import require_aware
from ..errors import EphemerisUnavailable
from ..ephemeris.provider import EphemerisProvider
from ..utils.angles import norm360

__all__ = [
    "CHALDEAN_ORDER",
    "PLANETARY_DAYS",
    "PLANETARY_HOUR_TABLE",
    "MoonPhase",
    "PlanetaryDay",
    "PlanetaryHour",
    "PlanetaryHourInfo",
    "moon_phase",
    "planetary_hours",
    "ruler_of_day",
]

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanetaryDay:
    """Planetary day ruler and its correspondences."""

    weekday: str
    ruler: PlanetId
    element: str
    metal: str
    themes: Tuple[str, ...]


@dataclass(frozen=True)
class PlanetaryHour:
    planet: PlanetId
    start: datetime
    end: datetime
    hour_number: int
    is_day_hour: bool

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end


@dataclass(frozen=True)
class PlanetaryHourInfo:
    """The 24 hours of one planetary day and the hour holding the query moment.

    ``approximate`` is set when the Sun does not rise or set at the location
    and the day was split at local mean 06:00 and 18:00 instead.
    """

    current_hour: PlanetaryHour
    day_ruler: PlanetId
    hours: Tuple[PlanetaryHour, ...]
    approximate: bool = False


@dataclass(frozen=True)
class MoonPhase:
    angle: float
    phase: float
    name: str
    illumination: float


CHALDEAN_ORDER: Tuple[PlanetId, ...] = (
    PlanetId.SATURN,
    PlanetId.JUPITER,
    PlanetId.MARS,
    PlanetId.SUN,
    PlanetId.VENUS,
    PlanetId.MERCURY,
    PlanetId.MOON,
)


def _build_hour_sequence(day_ruler: PlanetId) -> Tuple[PlanetId, ...]:
    if day_ruler not in CHALDEAN_ORDER:
        raise ValueError(f"Unknown day ruler: {day_ruler}")
    start = CHALDEAN_ORDER.index(day_ruler)
    return tuple(CHALDEAN_ORDER[(start + hour) % len(CHALDEAN_ORDER)] for hour in range(24))


# Sunday first, matching the classical week.
PLANETARY_DAYS: Tuple[PlanetaryDay, ...] = (
    PlanetaryDay("Sunday", PlanetId.SUN, "Fire", "Gold", ("vitality", "authority", "success")),
    PlanetaryDay("Monday", PlanetId.MOON, "Water", "Silver", ("intuition", "dreams", "emotions")),
    PlanetaryDay("Tuesday", PlanetId.MARS, "Fire", "Iron", ("courage", "strength", "will")),
    PlanetaryDay(
        "Wednesday", PlanetId.MERCURY, "Air", "Quicksilver", ("communication", "study", "travel")
    ),
    PlanetaryDay("Thursday", PlanetId.JUPITER, "Fire", "Tin", ("expansion", "abundance", "wisdom")),
    PlanetaryDay("Friday", PlanetId.VENUS, "Earth", "Copper", ("love", "beauty", "harmony")),
    PlanetaryDay(
        "Saturday", PlanetId.SATURN, "Earth", "Lead", ("discipline", "structure", "endings")
    ),
)


PLANETARY_HOUR_TABLE: Dict[str, Tuple[PlanetId, ...]] = {
    day.weekday: _build_hour_sequence(day.ruler) for day in PLANETARY_DAYS
}


def _day_for(moment: datetime) -> PlanetaryDay:
    # datetime.weekday() counts from Monday.
    return PLANETARY_DAYS[(moment.weekday() + 1) % 7]


def ruler_of_day(moment: datetime) -> PlanetaryDay:
    """Return the planetary day for the civil weekday of ``moment``.

    The weekday is read in ``moment``'s own timezone.
    """

    return _day_for(moment)


def _local_midnight(moment: datetime, longitude: float) -> datetime:
    """UTC instant of local mean midnight starting the local mean day of ``moment``."""

    offset = timedelta(hours=longitude / 15.0)
    local = moment.astimezone(UTC) + offset
    midnight = datetime(local.year, local.month, local.day, tzinfo=UTC)
    return midnight - offset


def _sun_frame(
    provider: EphemerisProvider, midnight: datetime, location: ChartLocation
) -> tuple[datetime, datetime, datetime, bool]:
    try:
        sunrise, sunset = provider.sunrise_sunset(midnight, location.latitude, location.longitude)
        next_sunrise, _ = provider.sunrise_sunset(sunset, location.latitude, location.longitude)
        return sunrise, sunset, next_sunrise, False
    except EphemerisUnavailable as exc:
        if exc.error_code != "CIRCUMPOLAR_SUN":
            raise
        LOG.warning(
            "No sunrise at latitude %.2f on %s; using 06:00/18:00 local mean time",
            location.latitude,
            midnight.date().isoformat(),
            extra={"err_code": exc.error_code},
        )
        return (
            midnight + timedelta(hours=6),
            midnight + timedelta(hours=18),
            midnight + timedelta(hours=30),
            True,
        )


def planetary_hours(
    moment: datetime, location: ChartLocation, *, provider: EphemerisProvider
) -> PlanetaryHourInfo:
    """Return the unequal planetary hours of the planetary day containing ``moment``.

    A planetary day runs from sunrise to the next sunrise: twelve day hours
    split sunrise..sunset and twelve night hours split sunset..next sunrise.
    The first hour belongs to the day ruler and the rest follow the
    Chaldean order. Before sunrise the moment belongs to the previous day.
    """

    moment = require_aware(moment, label="moment")
    midnight = _local_midnight(moment, location.longitude)
    sunrise, sunset, next_sunrise, approximate = _sun_frame(provider, midnight, location)
    if moment < sunrise:
        midnight -= timedelta(days=1)
        sunrise, sunset, next_sunrise, approximate = _sun_frame(provider, midnight, location)
    elif moment >= next_sunrise:
        midnight += timedelta(days=1)
        sunrise, sunset, next_sunrise, approximate = _sun_frame(provider, midnight, location)

    local_sunrise = sunrise + timedelta(hours=location.longitude / 15.0)
    day = _day_for(local_sunrise)
    sequence = _build_hour_sequence(day.ruler)

    day_hour = (sunset - sunrise) / 12
    night_hour = (next_sunrise - sunset) / 12
    hours = []
    for index in range(24):
        is_day = index < 12
        base, length = (sunrise, day_hour) if is_day else (sunset, night_hour)
        start = base + length * (index % 12)
        hours.append(
            PlanetaryHour(
                planet=sequence[index],
                start=start,
                end=start + length,
                hour_number=index + 1,
                is_day_hour=is_day,
            )
        )

    current = next((hour for hour in hours if hour.contains(moment)), hours[0])
    return PlanetaryHourInfo(
        current_hour=current,
        day_ruler=day.ruler,
        hours=tuple(hours),
        approximate=approximate,
    )


_PHASE_NAMES: Tuple[str, ...] = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
)


def moon_phase(sun_longitude: float, moon_longitude: float) -> MoonPhase:
    """Describe the lunar phase from the Sun-Moon elongation.

    ``phase`` runs 0..1 through the synodic cycle (0.5 at full);
    ``illumination`` is the lit fraction of the disc, 0..1.
    """

    angle = norm360(moon_longitude - sun_longitude)
    index = int(norm360(angle + 22.5) // 45.0) % 8
    return MoonPhase(
        angle=angle,
        phase=angle / 360.0,
        name=_PHASE_NAMES[index],
        illumination=(1.0 - math.cos(math.radians(angle))) / 2.0,
    )
