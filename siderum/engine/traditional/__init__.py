"""Traditional evaluators: essential dignities, conditions and sect."""

from __future__ import annotations

from .conditions import evaluate_condition, solar_band
from .dignities import (
    domicile_ruler,
    evaluate_dignity,
    face_ruler,
    term_ruler,
    triplicity_ruler,
)
from .models import EssentialDignity, PlanetCondition, Sect, SectInfo
from .sect import equal_house_of, resolve_sect

__all__ = [
    "EssentialDignity",
    "PlanetCondition",
    "Sect",
    "SectInfo",
    "domicile_ruler",
    "equal_house_of",
    "evaluate_condition",
    "evaluate_dignity",
    "face_ruler",
    "resolve_sect",
    "solar_band",
    "term_ruler",
    "triplicity_ruler",
]
