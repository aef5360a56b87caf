"""Chart snapshot assembly."""

from __future__ import annotations

from .assembler import compute_chart
from .models import ChartLocation, ChartSnapshot, PlanetPosition

__all__ = ["ChartLocation", "ChartSnapshot", "PlanetPosition", "compute_chart"]
