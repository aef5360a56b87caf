"""Event detectors sampled across the event horizon window."""

from __future__ import annotations

from .conjunctions import CONJUNCTION_PAIRS, find_conjunctions
from .eclipses import find_lunar_eclipses, find_solar_eclipses
from .stations import STATION_PLANETS, find_stations

__all__ = [
    "CONJUNCTION_PAIRS",
    "STATION_PLANETS",
    "find_conjunctions",
    "find_lunar_eclipses",
    "find_solar_eclipses",
    "find_stations",
]
