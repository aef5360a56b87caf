"""Angle utilities shared across Siderum modules."""

from __future__ import annotations

import math

__all__ = [
    "norm360",
    "delta_deg",
    "separation",
]


def norm360(x: float) -> float:
    """Normalize angle to [0, 360)."""

    y = math.fmod(x, 360.0)
    y = y + 360.0 if y < 0 else y
    # fmod of a tiny negative value rounds back up to exactly 360.0
    return 0.0 if y >= 360.0 else y


def delta_deg(a: float, b: float) -> float:
    """Smallest signed angular difference ``a - b`` in degrees in [-180, +180]."""

    d = norm360(a) - norm360(b)
    if d > 180.0:
        d -= 360.0
    elif d < -180.0:
        d += 360.0
    return d


def separation(a: float, b: float) -> float:
    """Unsigned angular distance between two longitudes in [0, 180]."""

    return abs(delta_deg(a, b))
