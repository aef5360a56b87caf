"""Sect classification helpers."""

from __future__ import annotations

from ...errors import EphemerisUnavailable
from ...utils.angles import norm360
from .models import Sect, SectInfo

__all__ = ["equal_house_of", "resolve_sect"]


def equal_house_of(longitude: float, ascendant: float) -> int:
    """Return the equal-house (1..12) holding ``longitude`` counted from the Ascendant."""

    return min(int(norm360(longitude - ascendant) // 30.0), 11) + 1


def resolve_sect(
    sun_altitude: float | None = None,
    *,
    sun_longitude: float | None = None,
    ascendant: float | None = None,
) -> SectInfo:
    """Return sect metadata from the Sun's altitude, or the house proxy.

    A chart is diurnal when the Sun is above the horizon. Without an
    altitude the Sun's equal house from the Ascendant decides: houses 7-12
    lie above the Ascendant-Descendant axis.
    """

    if sun_altitude is not None:
        return SectInfo(
            sect=Sect.DAY if sun_altitude > 0.0 else Sect.NIGHT,
            method="altitude",
            sun_altitude=float(sun_altitude),
        )
    if sun_longitude is not None and ascendant is not None:
        house = equal_house_of(sun_longitude, ascendant)
        return SectInfo(
            sect=Sect.DAY if house >= 7 else Sect.NIGHT,
            method="houses",
            sun_house=house,
        )
    raise EphemerisUnavailable(
        "sect requires the Sun's altitude or the Ascendant", body="Sun"
    )
