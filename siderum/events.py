"""Event records produced by the event horizon engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .core.bodies import PlanetId

__all__ = ["AstroEvent", "EventType"]


class EventType(str, Enum):
    SOLAR_ECLIPSE = "solar_eclipse"
    LUNAR_ECLIPSE = "lunar_eclipse"
    RETROGRADE_START = "retrograde_start"
    RETROGRADE_END = "retrograde_end"
    CONJUNCTION = "conjunction"
    OPPOSITION = "opposition"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class AstroEvent:
    """A dated astronomical event.

    ``date`` is timezone-aware UTC. ``magnitude`` is the obscuration (solar
    eclipses), umbral magnitude (lunar eclipses) or separation in degrees
    (conjunctions).
    """

    id: str
    type: EventType
    title: str
    description: str
    date: datetime
    planet: PlanetId | None = None
    planet2: PlanetId | None = None
    magnitude: float | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "planet": self.planet.value if self.planet else None,
            "planet2": self.planet2.value if self.planet2 else None,
            "magnitude": self.magnitude,
        }
