from __future__ import annotations

import importlib

import pytest

from siderum.ephemeris.utils import DEFAULT_ENV_KEYS, get_se_ephe_path, iter_candidate_paths

swe_module = importlib.import_module("siderum.ephemeris.swe")


@pytest.fixture
def clean_env(monkeypatch):
    for key in DEFAULT_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_explicit_path_wins(tmp_path, clean_env):
    explicit = tmp_path / "explicit"
    from_env = tmp_path / "env"
    explicit.mkdir()
    from_env.mkdir()
    clean_env.setenv("SE_EPHE_PATH", str(from_env))
    assert get_se_ephe_path(explicit) == str(explicit)
    assert list(iter_candidate_paths(explicit))[:2] == [str(explicit), str(from_env)]


def test_environment_used_when_no_explicit_path(tmp_path, clean_env):
    clean_env.setenv("SIDERUM_EPHE_PATH", str(tmp_path))
    assert get_se_ephe_path() == str(tmp_path)


def test_missing_directories_are_ignored(tmp_path, clean_env):
    clean_env.setenv("SWE_EPH_PATH", str(tmp_path / "nope"))
    assert str(tmp_path / "nope") not in list(iter_candidate_paths(tmp_path / "absent"))


def test_path_is_remembered_until_module_loads(monkeypatch):
    monkeypatch.setattr(swe_module, "_module", None)
    monkeypatch.setattr(swe_module, "_ephe_path", None)
    swe_module.use_ephemeris_path("/data/ephe")
    assert swe_module._ephe_path == "/data/ephe"
    swe_module.use_ephemeris_path(None)
    assert swe_module._ephe_path == "/data/ephe"
    swe_module.reset_swe()
    assert swe_module._module is None
