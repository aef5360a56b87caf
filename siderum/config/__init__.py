"""Configuration surface for Siderum."""

from __future__ import annotations

from .settings import (
    CAZIMI_DEG,
    COMBUST_DEG,
    UNDER_BEAMS_DEG,
    AspectsCfg,
    ConditionsCfg,
    DignitiesCfg,
    EphemerisCfg,
    EventHorizonCfg,
    Settings,
    config_path,
    default_settings,
    get_config_home,
    get_settings,
    load_settings,
    reset_settings_cache,
    save_settings,
)

__all__ = [
    "CAZIMI_DEG",
    "COMBUST_DEG",
    "UNDER_BEAMS_DEG",
    "AspectsCfg",
    "ConditionsCfg",
    "DignitiesCfg",
    "EphemerisCfg",
    "EventHorizonCfg",
    "Settings",
    "config_path",
    "default_settings",
    "get_config_home",
    "get_settings",
    "load_settings",
    "reset_settings_cache",
    "save_settings",
]
