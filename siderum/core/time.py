"""Time conversion helpers used across Siderum.

Every public entry point accepts timezone-aware :class:`datetime` values.
Naive values are rejected. Julian days are always UT.
"""

from __future__ import annotations

import datetime as _dt
from typing import Final

__all__ = [
    "SECONDS_PER_DAY",
    "UNIX_EPOCH_JD",
    "ensure_utc",
    "require_aware",
    "julian_day",
    "from_julian_day",
    "epoch_millis",
]


SECONDS_PER_DAY: Final[float] = 86_400.0
UNIX_EPOCH_JD: Final[float] = 2440587.5  # JD at 1970-01-01T00:00:00Z


def require_aware(moment: _dt.datetime, *, label: str = "moment") -> _dt.datetime:
    """Return ``moment`` in UTC, raising when it carries no timezone."""

    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        raise ValueError(f"{label} must be timezone-aware")
    return moment.astimezone(_dt.UTC)


def ensure_utc(moment: _dt.datetime) -> _dt.datetime:
    """Return ``moment`` converted to UTC, treating naive values as UTC."""

    tzinfo = moment.tzinfo
    if tzinfo is None:
        return moment.replace(tzinfo=_dt.UTC)
    return moment.astimezone(_dt.UTC)


def julian_day(moment: _dt.datetime) -> float:
    """Return the Julian day for a UTC ``moment``."""

    moment = ensure_utc(moment)
    year = moment.year
    month = moment.month
    day = moment.day
    frac = (
        moment.hour + moment.minute / 60.0 + (moment.second + moment.microsecond / 1e6) / 3600.0
    ) / 24.0

    if month <= 2:
        year -= 1
        month += 12

    a = year // 100
    b = 2 - a + (a // 4)
    jd = int(365.25 * (year + 4716)) + int(30.6001 * (month + 1)) + day + b - 1524.5
    return jd + frac


def from_julian_day(jd_ut: float) -> _dt.datetime:
    """Convert a Julian day (UT) back to an aware UTC datetime."""

    seconds = (jd_ut - UNIX_EPOCH_JD) * SECONDS_PER_DAY
    return _dt.datetime(1970, 1, 1, tzinfo=_dt.UTC) + _dt.timedelta(seconds=seconds)


def epoch_millis(moment: _dt.datetime) -> int:
    """Milliseconds since the Unix epoch, used for stable event identifiers."""

    return int(round(ensure_utc(moment).timestamp() * 1000.0))
