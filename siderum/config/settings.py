"""Configuration models and helpers for Siderum settings."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

CURRENT_SETTINGS_SCHEMA_VERSION = 1

# Classical limits for the solar bands.
CAZIMI_DEG = 17.0 / 60.0
COMBUST_DEG = 8.0
UNDER_BEAMS_DEG = 17.0

# -------------------- Settings Schema --------------------


class DignitiesCfg(BaseModel):
    """Essential dignity scoring options."""

    class Weights(BaseModel):
        domicile: int = 5
        exaltation: int = 4
        triplicity: int = 3
        term: int = 2
        face: int = 1
        detriment: int = -5
        fall: int = -4
        peregrine: int = 0

        @field_validator("*", mode="before")
        @classmethod
        def _cap_weights(cls, value: int) -> int:
            return max(-10, min(10, int(value)))

    weights: Weights = Field(default_factory=Weights)


class ConditionsCfg(BaseModel):
    """Angular limits for cazimi, combustion and under-the-beams."""

    cazimi_deg: float = CAZIMI_DEG
    combust_deg: float = COMBUST_DEG
    under_beams_deg: float = UNDER_BEAMS_DEG

    @model_validator(mode="after")
    def _check_ordering(self) -> "ConditionsCfg":
        if not 0.0 <= self.cazimi_deg < self.combust_deg < self.under_beams_deg <= 180.0:
            raise ValueError(
                "condition limits must satisfy 0 <= cazimi < combust < under_beams <= 180"
            )
        return self


class AspectsCfg(BaseModel):
    """Aspect detection and orb configuration."""

    default_orb: float = 8.0
    major_orb: float = 3.0
    exact_orb: float = 1.0
    orbs_by_aspect: Dict[str, float] = Field(
        default_factory=lambda: {
            "conjunction": 8.0,
            "sextile": 4.0,
            "square": 6.0,
            "trine": 6.0,
            "opposition": 8.0,
        }
    )

    @field_validator("orbs_by_aspect", mode="before")
    @classmethod
    def _cap_orbs_by_aspect(cls, data: Dict[str, float] | object) -> Dict[str, float] | object:
        if not isinstance(data, dict):
            return data
        return {
            str(key).lower(): max(0.0, min(15.0, float(value)))
            for key, value in data.items()
        }

    @field_validator("default_orb", "major_orb", "exact_orb", mode="before")
    @classmethod
    def _cap_orb(cls, value: float) -> float:
        return max(0.0, min(15.0, float(value)))


class EventHorizonCfg(BaseModel):
    """Sampling parameters for the multi-year event search."""

    years: float = 5.0
    fast_step_days: float = 5.0
    slow_step_days: float = 10.0
    conjunction_step_days: float = 7.0
    conjunction_gate_deg: float = 5.0
    eclipse_skip_days: float = 30.0
    eclipse_iterations_per_year: int = 3
    conjunction_pairs: List[Tuple[str, str]] = Field(
        default_factory=lambda: [
            ("Jupiter", "Saturn"),
            ("Mars", "Jupiter"),
            ("Venus", "Jupiter"),
            ("Venus", "Mars"),
            ("Mercury", "Venus"),
        ]
    )
    parallel: bool = False

    @field_validator(
        "fast_step_days",
        "slow_step_days",
        "conjunction_step_days",
        "eclipse_skip_days",
        mode="before",
    )
    @classmethod
    def _positive_step(cls, value: float) -> float:
        numeric = float(value)
        if numeric <= 0.0:
            raise ValueError("step sizes must be positive")
        return numeric


class EphemerisCfg(BaseModel):
    """Swiss ephemeris data location."""

    path: Optional[str] = None
    prefer_moshier: bool = False


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    dignities: DignitiesCfg = Field(default_factory=DignitiesCfg)
    conditions: ConditionsCfg = Field(default_factory=ConditionsCfg)
    aspects: AspectsCfg = Field(default_factory=AspectsCfg)
    event_horizon: EventHorizonCfg = Field(default_factory=EventHorizonCfg)
    ephemeris: EphemerisCfg = Field(default_factory=EphemerisCfg)


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("SIDERUM_HOME", str(Path.home() / ".siderum")))


def config_path() -> Path:
    """Return the full path to the configuration file."""

    return get_config_home() / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump(mode="json")
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, falling back to defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        return default_settings()
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    return Settings(**raw)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once from disk."""

    return load_settings()


def reset_settings_cache() -> None:
    """For tests: force the next :func:`get_settings` call to reload."""

    get_settings.cache_clear()
