"""Deferred access to the ``swisseph`` extension module.

Importing :mod:`siderum` never touches ``pyswisseph``; the module is loaded
on first attribute access so pure computations (dignities, aspects, the
fake providers used in tests) run without it. The most recently requested
ephemeris path is re-applied whenever the module is (re)loaded.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
from typing import Any

__all__ = ["swe", "reset_swe", "has_swe", "use_ephemeris_path"]

LOG = logging.getLogger(__name__)

_module: Any | None = None
_ephe_path: str | None = None


def _load() -> Any:
    global _module
    if _module is None:
        try:
            module = importlib.import_module("swisseph")
        except ImportError as exc:  # pragma: no cover - depends on environment
            raise RuntimeError(
                "pyswisseph is required for SwissEphemerisProvider; "
                "install it and point SE_EPHE_PATH at the ephemeris files."
            ) from exc
        if _ephe_path is not None:
            module.set_ephe_path(_ephe_path)
        _module = module
    return _module


class _SwissModule:
    """Attribute proxy resolving ``swisseph`` on first use."""

    def __call__(self) -> Any:
        return _load()

    def __getattr__(self, item: str) -> Any:
        return getattr(_load(), item)


swe = _SwissModule()


def use_ephemeris_path(path: str | None) -> None:
    """Point Swiss Ephemeris at ``path`` (``None`` keeps the current setting)."""

    global _ephe_path
    if path is None:
        return
    if path != _ephe_path:
        LOG.debug("Using Swiss ephemeris files from %s", path)
    _ephe_path = path
    if _module is not None:
        _module.set_ephe_path(path)


def reset_swe() -> None:
    """Drop the loaded module so the next access imports it again."""

    global _module
    _module = None


def has_swe() -> bool:
    """Return ``True`` when ``pyswisseph`` can be imported."""

    return _module is not None or importlib.util.find_spec("swisseph") is not None
