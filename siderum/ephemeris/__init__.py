"""Ephemeris provider interface and the Swiss Ephemeris backend."""

from __future__ import annotations

from .provider import (
    LUNAR_ECLIPSE_KINDS,
    SOLAR_ECLIPSE_KINDS,
    EclipseInfo,
    EclipticPosition,
    EphemerisProvider,
    HorizontalPosition,
)
from .swe import has_swe, reset_swe, use_ephemeris_path
from .swiss import SwissEphemerisProvider
from .utils import get_se_ephe_path

__all__ = [
    "LUNAR_ECLIPSE_KINDS",
    "SOLAR_ECLIPSE_KINDS",
    "EclipseInfo",
    "EclipticPosition",
    "EphemerisProvider",
    "HorizontalPosition",
    "SwissEphemerisProvider",
    "default_provider",
    "get_se_ephe_path",
    "has_swe",
    "reset_swe",
    "use_ephemeris_path",
]


def default_provider(settings=None) -> SwissEphemerisProvider:
    """Build the Swiss provider configured by ``settings`` (or the loaded ones)."""

    if settings is None:
        from ..config import get_settings

        settings = get_settings()
    return SwissEphemerisProvider.from_settings(settings)
