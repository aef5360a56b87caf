"""Pytest configuration for Siderum."""

from __future__ import annotations

import pytest

from siderum.config import reset_settings_cache
from siderum.core.bodies import PlanetId

from tests.fixtures_ephemeris import FakeEphemeris


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("SIDERUM_HOME", str(tmp_path / "home"))
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def fake_provider() -> FakeEphemeris:
    return FakeEphemeris(altitudes={PlanetId.SUN: 20.0})
