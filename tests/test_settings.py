from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError

from siderum.config import (
    CAZIMI_DEG,
    AspectsCfg,
    ConditionsCfg,
    DignitiesCfg,
    EventHorizonCfg,
    config_path,
    default_settings,
    get_config_home,
    get_settings,
    load_settings,
    reset_settings_cache,
    save_settings,
)


def test_defaults():
    settings = default_settings()
    assert settings.schema_version == 1
    assert settings.conditions.cazimi_deg == pytest.approx(CAZIMI_DEG)
    assert settings.dignities.weights.domicile == 5
    assert settings.dignities.weights.peregrine == 0
    assert settings.aspects.default_orb == 8.0
    assert settings.event_horizon.years == 5.0
    assert ("Venus", "Jupiter") in settings.event_horizon.conjunction_pairs


def test_config_home_honours_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("SIDERUM_HOME", str(tmp_path / "custom"))
    assert get_config_home() == tmp_path / "custom"
    assert config_path() == tmp_path / "custom" / "config.yaml"


def test_missing_file_yields_defaults():
    assert load_settings() == default_settings()


def test_save_then_load(tmp_path):
    settings = default_settings()
    settings.aspects.default_orb = 5.0
    settings.event_horizon.parallel = True
    target = save_settings(settings)
    assert target == config_path()
    assert yaml.safe_load(target.read_text(encoding="utf-8"))["aspects"]["default_orb"] == 5.0
    assert load_settings() == settings


def test_get_settings_is_cached_until_reset():
    first = get_settings()
    assert get_settings() is first

    changed = default_settings()
    changed.event_horizon.years = 2.0
    save_settings(changed)
    assert get_settings().event_horizon.years == 5.0

    reset_settings_cache()
    assert get_settings().event_horizon.years == 2.0


def test_empty_yaml_is_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == default_settings()


def test_weights_and_orbs_are_capped():
    weights = DignitiesCfg.Weights(domicile=40, fall=-25)
    assert weights.domicile == 10
    assert weights.fall == -10

    aspects = AspectsCfg(default_orb=30, orbs_by_aspect={"Square": 20, "Trine": -1})
    assert aspects.default_orb == 15.0
    assert aspects.orbs_by_aspect == {"square": 15.0, "trine": 0.0}


def test_condition_limits_must_be_ordered():
    with pytest.raises(ValidationError):
        ConditionsCfg(cazimi_deg=9.0, combust_deg=8.0)
    with pytest.raises(ValidationError):
        ConditionsCfg(under_beams_deg=200.0)


def test_step_sizes_must_be_positive():
    with pytest.raises(ValidationError):
        EventHorizonCfg(fast_step_days=0)
