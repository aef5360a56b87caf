"""Dataclasses shared across the traditional evaluators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from ...core.bodies import PlanetId

__all__ = [
    "EssentialDignity",
    "PlanetCondition",
    "Sect",
    "SectInfo",
]


class Sect(str, Enum):
    DAY = "Day"
    NIGHT = "Night"


@dataclass(frozen=True)
class EssentialDignity:
    """Essential dignity flags for one planet in one sign and degree."""

    domicile: bool = False
    exaltation: bool = False
    triplicity: bool = False
    term: bool = False
    face: bool = False
    detriment: bool = False
    fall: bool = False
    peregrine: bool = True
    score: int = 0

    def flags(self) -> tuple[str, ...]:
        names = (
            "domicile",
            "exaltation",
            "triplicity",
            "term",
            "face",
            "detriment",
            "fall",
            "peregrine",
        )
        return tuple(name for name in names if getattr(self, name))


@dataclass(frozen=True)
class PlanetCondition:
    """Motion and solar-proximity flags for a body."""

    is_retrograde: bool = False
    is_combust: bool = False
    is_cazimi: bool = False
    is_under_beams: bool = False


@dataclass(frozen=True)
class SectInfo:
    """Sect classification metadata for a chart."""

    sect: Sect
    method: Literal["altitude", "houses"]
    sun_altitude: float | None = None
    sun_house: int | None = None

    @property
    def is_day(self) -> bool:
        return self.sect is Sect.DAY

    @property
    def luminary_of_sect(self) -> PlanetId:
        return PlanetId.SUN if self.is_day else PlanetId.MOON

    @property
    def benefic_of_sect(self) -> PlanetId:
        return PlanetId.JUPITER if self.is_day else PlanetId.VENUS

    @property
    def malefic_of_sect(self) -> PlanetId:
        return PlanetId.SATURN if self.is_day else PlanetId.MARS
