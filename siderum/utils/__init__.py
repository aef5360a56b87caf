"""Utility helpers shared across Siderum."""

from __future__ import annotations

from .angles import delta_deg, norm360, separation

__all__ = ["delta_deg", "norm360", "separation"]
