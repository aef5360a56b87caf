"""Major-aspect scanner over a set of body longitudes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .config.settings import Settings, get_settings
from .core.bodies import PlanetId
from .utils.angles import norm360, separation

__all__ = [
    "Aspect",
    "AspectType",
    "DEFAULT_ORB_CAPS",
    "compute_aspects",
    "exact_aspects",
    "major_aspects",
]


class AspectType(str, Enum):
    CONJUNCTION = "Conjunction"
    SEXTILE = "Sextile"
    SQUARE = "Square"
    TRINE = "Trine"
    OPPOSITION = "Opposition"

    @property
    def angle(self) -> float:
        return _ASPECT_ANGLES[self]

    @property
    def symbol(self) -> str:
        return _ASPECT_SYMBOLS[self]

    @property
    def is_major(self) -> bool:
        return self is not AspectType.SEXTILE


_ASPECT_ANGLES = {
    AspectType.CONJUNCTION: 0.0,
    AspectType.SEXTILE: 60.0,
    AspectType.SQUARE: 90.0,
    AspectType.TRINE: 120.0,
    AspectType.OPPOSITION: 180.0,
}

_ASPECT_SYMBOLS = {
    AspectType.CONJUNCTION: "☌",
    AspectType.SEXTILE: "⚹",
    AspectType.SQUARE: "□",
    AspectType.TRINE: "△",
    AspectType.OPPOSITION: "☍",
}

DEFAULT_ORB_CAPS: Mapping[str, float] = {
    "conjunction": 8.0,
    "sextile": 4.0,
    "square": 6.0,
    "trine": 6.0,
    "opposition": 8.0,
}


@dataclass(frozen=True)
class Aspect:
    """An aspect between two bodies; ``planet1`` precedes ``planet2``."""

    planet1: PlanetId
    planet2: PlanetId
    type: AspectType
    orb: float
    separation: float
    is_exact: bool

    @property
    def exact_angle(self) -> float:
        return self.type.angle

    @property
    def symbol(self) -> str:
        return self.type.symbol


def _longitudes(positions: Iterable[Any] | Mapping[Any, float]) -> dict[PlanetId, float]:
    items: Iterable[tuple[Any, float]]
    if isinstance(positions, Mapping):
        items = positions.items()
    else:
        items = ((pos.planet, pos.longitude) for pos in positions)
    resolved: dict[PlanetId, float] = {}
    for planet, longitude in items:
        key = PlanetId.parse(planet)
        resolved.setdefault(key, norm360(float(longitude)))
    return resolved


def _best_match(
    sep: float, max_orb: float, caps: Mapping[str, float], allowed: Iterable[AspectType]
) -> tuple[AspectType, float] | None:
    best: tuple[AspectType, float] | None = None
    for aspect_type in allowed:
        limit = min(max_orb, caps.get(aspect_type.name.lower(), max_orb))
        orb = abs(sep - aspect_type.angle)
        if orb <= limit and (best is None or orb < best[1]):
            best = (aspect_type, orb)
    return best


def compute_aspects(
    positions: Iterable[Any] | Mapping[Any, float],
    max_orb: float = 8.0,
    *,
    exact_orb: float = 1.0,
    orbs_by_aspect: Mapping[str, float] | None = None,
    include_points: bool = False,
    aspect_types: Iterable[AspectType] | None = None,
) -> list[Aspect]:
    """Return the aspects formed between every pair of ``positions``.

    ``positions`` is either a sequence of objects exposing ``planet`` and
    ``longitude`` or a mapping of planet to longitude. Each pair yields at
    most one aspect, the one with the tightest orb inside
    ``min(max_orb, cap)`` where the cap comes from ``orbs_by_aspect``.
    The result is ordered by orb, then by body order.
    """

    longitudes = _longitudes(positions)
    caps = {**DEFAULT_ORB_CAPS, **{k.lower(): float(v) for k, v in (orbs_by_aspect or {}).items()}}
    allowed = tuple(aspect_types) if aspect_types is not None else tuple(AspectType)
    bodies = sorted(
        (planet for planet in longitudes if include_points or not planet.is_point),
        key=lambda planet: planet.order,
    )

    aspects: list[Aspect] = []
    for i, first in enumerate(bodies):
        for second in bodies[i + 1 :]:
            sep = separation(longitudes[first], longitudes[second])
            match = _best_match(sep, max_orb, caps, allowed)
            if match is None:
                continue
            aspect_type, orb = match
            aspects.append(
                Aspect(
                    planet1=first,
                    planet2=second,
                    type=aspect_type,
                    orb=orb,
                    separation=sep,
                    is_exact=orb <= exact_orb,
                )
            )
    aspects.sort(key=lambda a: (a.orb, a.planet1.order, a.planet2.order))
    return aspects


def major_aspects(
    positions: Iterable[Any] | Mapping[Any, float],
    max_orb: float | None = None,
    *,
    settings: Settings | None = None,
) -> list[Aspect]:
    """Conjunctions, squares, trines and oppositions within ``max_orb``.

    ``max_orb`` defaults to ``settings.aspects.major_orb``.
    """

    cfg = (settings or get_settings()).aspects
    return compute_aspects(
        positions,
        cfg.major_orb if max_orb is None else max_orb,
        exact_orb=cfg.exact_orb,
        orbs_by_aspect=cfg.orbs_by_aspect,
        aspect_types=[t for t in AspectType if t.is_major],
    )


def exact_aspects(
    positions: Iterable[Any] | Mapping[Any, float],
    exact_orb: float | None = None,
    *,
    settings: Settings | None = None,
) -> list[Aspect]:
    """Aspects from a ``default_orb`` scan whose orb is within ``exact_orb``."""

    cfg = (settings or get_settings()).aspects
    limit = cfg.exact_orb if exact_orb is None else exact_orb
    found = compute_aspects(
        positions,
        cfg.default_orb,
        exact_orb=limit,
        orbs_by_aspect=cfg.orbs_by_aspect,
    )
    return [a for a in found if a.is_exact]
