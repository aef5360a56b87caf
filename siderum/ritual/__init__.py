"""Ritual timing overlays (planetary days, hours and lunar phase)."""

from __future__ import annotations

from .timing import (
    CHALDEAN_ORDER,
    PLANETARY_DAYS,
    PLANETARY_HOUR_TABLE,
    MoonPhase,
    PlanetaryDay,
    PlanetaryHour,
    PlanetaryHourInfo,
    moon_phase,
    planetary_hours,
    ruler_of_day,
)

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
