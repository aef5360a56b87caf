"""Core catalogue and time primitives."""

from __future__ import annotations

from .bodies import (
    CLASSICAL_PLANETS,
    POINTS,
    TRACKED_BODIES,
    Element,
    PlanetId,
    SignPosition,
    ZodiacSign,
    sign_position,
)
from .time import ensure_utc, from_julian_day, julian_day, require_aware

__all__ = [
    "CLASSICAL_PLANETS",
    "POINTS",
    "TRACKED_BODIES",
    "Element",
    "PlanetId",
    "SignPosition",
    "ZodiacSign",
    "sign_position",
    "ensure_utc",
    "from_julian_day",
    "julian_day",
    "require_aware",
]
