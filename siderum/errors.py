"""Exception hierarchy raised by Siderum computations."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

__all__ = [
    "SiderumError",
    "EphemerisUnavailable",
    "UnmappedDignityTable",
    "SearchExhausted",
]


class SiderumError(Exception):
    """Base class for all errors raised by this package."""


class EphemerisUnavailable(SiderumError, RuntimeError):
    """The ephemeris provider could not resolve a body at an instant."""

    def __init__(
        self,
        message: str,
        *,
        body: str | None = None,
        instant: datetime | None = None,
        error_code: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.body = body
        self.instant = instant
        self.error_code = error_code or "EPHEMERIS_UNAVAILABLE"
        self.context = dict(context or {})


class UnmappedDignityTable(SiderumError, LookupError):
    """A rulership table is missing a row for a sign or planet."""


class SearchExhausted(SiderumError):
    """An event sub-search has no further results before its horizon."""
