"""Siderum: classical chart snapshots and multi-year event horizons."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

from .aspects import Aspect, AspectType, compute_aspects, exact_aspects, major_aspects
from .chart import ChartLocation, ChartSnapshot, PlanetPosition, compute_chart
from .core.bodies import PlanetId, ZodiacSign
from .engine.traditional import (
    EssentialDignity,
    PlanetCondition,
    Sect,
    SectInfo,
    evaluate_condition,
    evaluate_dignity,
    resolve_sect,
)
from .errors import EphemerisUnavailable, SiderumError, UnmappedDignityTable
from .events import AstroEvent, EventType
from .horizon import compute_event_horizon, next_major_event, search_events
from .ritual import moon_phase, planetary_hours, ruler_of_day

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("siderum")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"


__all__ = [
    "__version__",
    "Aspect",
    "AspectType",
    "AstroEvent",
    "ChartLocation",
    "ChartSnapshot",
    "EphemerisUnavailable",
    "EssentialDignity",
    "EventType",
    "PlanetCondition",
    "PlanetId",
    "PlanetPosition",
    "Sect",
    "SectInfo",
    "SiderumError",
    "UnmappedDignityTable",
    "ZodiacSign",
    "compute_aspects",
    "compute_chart",
    "compute_event_horizon",
    "evaluate_condition",
    "evaluate_dignity",
    "exact_aspects",
    "major_aspects",
    "moon_phase",
    "next_major_event",
    "planetary_hours",
    "resolve_sect",
    "ruler_of_day",
    "search_events",
]
