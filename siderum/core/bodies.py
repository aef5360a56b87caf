"""Body and zodiac catalogue for chart and event computations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from ..utils.angles import norm360

__all__ = [
    "Element",
    "PlanetId",
    "ZodiacSign",
    "SignPosition",
    "CLASSICAL_PLANETS",
    "POINTS",
    "TRACKED_BODIES",
    "sign_position",
]


class Element(str, Enum):
    FIRE = "Fire"
    EARTH = "Earth"
    AIR = "Air"
    WATER = "Water"


class PlanetId(str, Enum):
    """Bodies and chart points tracked by the chart assembler."""

    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"
    NORTH_NODE = "NorthNode"
    SOUTH_NODE = "SouthNode"
    LILITH = "Lilith"

    @property
    def order(self) -> int:
        return _PLANET_ORDER[self]

    @property
    def is_point(self) -> bool:
        return self in POINTS

    @property
    def is_classical(self) -> bool:
        return self in CLASSICAL_PLANETS

    @classmethod
    def parse(cls, value: str | PlanetId) -> PlanetId:
        """Resolve ``value`` case-insensitively by value or member name."""

        if isinstance(value, PlanetId):
            return value
        key = str(value).strip().lower().replace("_", "").replace(" ", "")
        for member in cls:
            if key in (member.value.lower(), member.name.lower().replace("_", "")):
                return member
        raise ValueError(f"unknown planet: {value!r}")


_PLANET_ORDER = {planet: index for index, planet in enumerate(PlanetId)}


class ZodiacSign(str, Enum):
    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"

    @property
    def index(self) -> int:
        return _SIGN_INDEX[self]

    @property
    def element(self) -> Element:
        return _ELEMENT_CYCLE[self.index % 4]

    @property
    def start_longitude(self) -> float:
        return self.index * 30.0

    @classmethod
    def from_index(cls, index: int) -> ZodiacSign:
        return _SIGNS[index % 12]

    @classmethod
    def from_longitude(cls, longitude: float) -> ZodiacSign:
        return _SIGNS[min(int(norm360(longitude) // 30.0), 11)]


_SIGNS: tuple[ZodiacSign, ...] = tuple(ZodiacSign)
_SIGN_INDEX = {sign: index for index, sign in enumerate(_SIGNS)}
_ELEMENT_CYCLE = (Element.FIRE, Element.EARTH, Element.AIR, Element.WATER)

CLASSICAL_PLANETS: frozenset[PlanetId] = frozenset(
    {
        PlanetId.SUN,
        PlanetId.MOON,
        PlanetId.MERCURY,
        PlanetId.VENUS,
        PlanetId.MARS,
        PlanetId.JUPITER,
        PlanetId.SATURN,
    }
)

POINTS: frozenset[PlanetId] = frozenset(
    {PlanetId.NORTH_NODE, PlanetId.SOUTH_NODE, PlanetId.LILITH}
)

TRACKED_BODIES: tuple[PlanetId, ...] = tuple(PlanetId)


@dataclass(frozen=True)
class SignPosition:
    """Zodiacal decomposition of an ecliptic longitude.

    ``degree`` and ``minute`` are whole numbers; ``second`` keeps its
    fractional part so that :meth:`to_longitude` reproduces the source value.
    """

    sign: ZodiacSign
    degree: int
    minute: int
    second: float

    @property
    def degree_in_sign(self) -> float:
        return self.degree + self.minute / 60.0 + self.second / 3600.0

    def to_longitude(self) -> float:
        return self.sign.start_longitude + self.degree_in_sign

    def __str__(self) -> str:
        return f"{self.degree:02d}°{self.minute:02d}'{int(self.second):02d}\" {self.sign.value}"


def sign_position(longitude: float) -> SignPosition:
    """Split ``longitude`` into sign, degree, minute and second."""

    lon = norm360(longitude)
    index = min(int(lon // 30.0), 11)
    in_sign = lon - index * 30.0
    degree = min(int(math.floor(in_sign)), 29)
    minutes_total = (in_sign - degree) * 60.0
    minute = min(int(math.floor(minutes_total)), 59)
    second = max((minutes_total - minute) * 60.0, 0.0)
    return SignPosition(
        sign=ZodiacSign.from_index(index),
        degree=degree,
        minute=minute,
        second=second,
    )
