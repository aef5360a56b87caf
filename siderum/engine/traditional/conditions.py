"""Planetary condition flags relative to the Sun."""

from __future__ import annotations

from typing import Any

from ...config.settings import CAZIMI_DEG, COMBUST_DEG, UNDER_BEAMS_DEG
from ...core.bodies import PlanetId
from ...utils.angles import separation
from .models import PlanetCondition

__all__ = ["evaluate_condition", "solar_band"]


def _limits(thresholds: Any) -> tuple[float, float, float]:
    if thresholds is None:
        return CAZIMI_DEG, COMBUST_DEG, UNDER_BEAMS_DEG
    return (
        float(thresholds.cazimi_deg),
        float(thresholds.combust_deg),
        float(thresholds.under_beams_deg),
    )


def solar_band(sep: float, thresholds: Any = None) -> str | None:
    """Return ``"cazimi"``, ``"combust"``, ``"under_beams"`` or ``None`` for ``sep``."""

    cazimi, combust, beams = _limits(thresholds)
    if sep <= cazimi:
        return "cazimi"
    if sep <= combust:
        return "combust"
    if sep <= beams:
        return "under_beams"
    return None


def evaluate_condition(
    planet: PlanetId | str,
    longitude: float,
    speed: float,
    sun_longitude: float,
    thresholds: Any = None,
) -> PlanetCondition:
    """Classify retrogradation and solar proximity for ``planet``.

    ``thresholds`` is an optional :class:`~siderum.config.ConditionsCfg`.
    The three bands are mutually exclusive; the Sun never carries them.
    """

    planet = PlanetId.parse(planet)
    retrograde = speed < 0.0
    if planet is PlanetId.SUN:
        return PlanetCondition(is_retrograde=retrograde)

    band = solar_band(separation(longitude, sun_longitude), thresholds)
    return PlanetCondition(
        is_retrograde=retrograde,
        is_cazimi=band == "cazimi",
        is_combust=band == "combust",
        is_under_beams=band == "under_beams",
    )
