"""Immutable records describing a computed chart."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..aspects import Aspect
from ..core.bodies import PlanetId, ZodiacSign
from ..engine.traditional.models import EssentialDignity, PlanetCondition, Sect, SectInfo

__all__ = ["ChartLocation", "PlanetPosition", "ChartSnapshot"]


@dataclass(frozen=True)
class ChartLocation:
    """Observer location in decimal degrees (east and north positive)."""

    latitude: float
    longitude: float
    elevation_m: float = 0.0

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class PlanetPosition:
    planet: PlanetId
    longitude: float
    latitude: float
    speed: float
    sign: ZodiacSign
    sign_degree: int
    sign_minute: int
    sign_second: float
    azimuth: float | None = None
    altitude: float | None = None

    @property
    def is_retrograde(self) -> bool:
        return self.speed < 0.0

    @property
    def degree_in_sign(self) -> float:
        return self.sign_degree + self.sign_minute / 60.0 + self.sign_second / 3600.0


@dataclass(frozen=True)
class ChartSnapshot:
    """Planet positions with dignities, conditions, sect and aspects.

    ``dignities`` and ``conditions`` are read-only mappings keyed by
    :class:`PlanetId`. ``local_sidereal_time`` is in hours.
    """

    timestamp: datetime
    julian_day: float
    local_sidereal_time: float | None
    latitude: float
    longitude: float
    planets: tuple[PlanetPosition, ...]
    dignities: Mapping[PlanetId, EssentialDignity]
    conditions: Mapping[PlanetId, PlanetCondition]
    sect: Sect
    sect_info: SectInfo
    aspects: tuple[Aspect, ...]

    def position(self, planet: PlanetId | str) -> PlanetPosition:
        key = PlanetId.parse(planet)
        for pos in self.planets:
            if pos.planet is key:
                return pos
        raise KeyError(key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "julian_day": self.julian_day,
            "local_sidereal_time": self.local_sidereal_time,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "sect": self.sect.value,
            "sect_method": self.sect_info.method,
            "planets": [
                {
                    "planet": pos.planet.value,
                    "longitude": pos.longitude,
                    "latitude": pos.latitude,
                    "speed": pos.speed,
                    "sign": pos.sign.value,
                    "sign_degree": pos.sign_degree,
                    "sign_minute": pos.sign_minute,
                    "sign_second": pos.sign_second,
                    "azimuth": pos.azimuth,
                    "altitude": pos.altitude,
                    "retrograde": pos.is_retrograde,
                    "dignity": {
                        "flags": list(self.dignities[pos.planet].flags()),
                        "score": self.dignities[pos.planet].score,
                    },
                    "condition": {
                        "retrograde": self.conditions[pos.planet].is_retrograde,
                        "cazimi": self.conditions[pos.planet].is_cazimi,
                        "combust": self.conditions[pos.planet].is_combust,
                        "under_beams": self.conditions[pos.planet].is_under_beams,
                    },
                }
                for pos in self.planets
            ],
            "aspects": [
                {
                    "planet1": aspect.planet1.value,
                    "planet2": aspect.planet2.value,
                    "type": aspect.type.value,
                    "symbol": aspect.symbol,
                    "orb": aspect.orb,
                    "separation": aspect.separation,
                    "exact": aspect.is_exact,
                }
                for aspect in self.aspects
            ],
        }
