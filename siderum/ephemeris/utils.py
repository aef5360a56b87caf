"""Swiss ephemeris path discovery helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator

__all__ = [
    "DEFAULT_ENV_KEYS",
    "iter_candidate_paths",
    "get_se_ephe_path",
]

DEFAULT_ENV_KEYS: tuple[str, ...] = (
    "SE_EPHE_PATH",
    "SWE_EPH_PATH",
    "SIDERUM_EPHE_PATH",
)
"""Environment variables checked (in order) for Swiss ephemeris paths."""

_DEFAULT_HINTS: tuple[Path, ...] = (
    Path.home() / ".sweph",
    Path("/usr/share/sweph"),
    Path("/usr/share/libswisseph"),
)


def _first_env(keys: Iterable[str]) -> str | None:
    for key in keys:
        value = os.environ.get(key)
        if value:
            return value
    return None


def _ensure_dir(path: os.PathLike[str] | str | None) -> str | None:
    """Expand ``path`` to an absolute directory string when it exists."""

    if not path:
        return None
    candidate = Path(path).expanduser()
    if candidate.is_dir():
        return str(candidate)
    return None


def iter_candidate_paths(
    preferred: str | os.PathLike[str] | None = None,
) -> Iterator[str]:
    """Yield existing ephemeris directories in priority order.

    An explicit ``preferred`` path comes first, then the environment
    variables in :data:`DEFAULT_ENV_KEYS`, then the common install locations.
    """

    seen: set[str] = set()
    for raw in (preferred, _first_env(DEFAULT_ENV_KEYS), *_DEFAULT_HINTS):
        candidate = _ensure_dir(raw)
        if candidate and candidate not in seen:
            seen.add(candidate)
            yield candidate


def get_se_ephe_path(preferred: str | os.PathLike[str] | None = None) -> str | None:
    """Return the Swiss ephemeris path or ``None`` when unavailable."""

    return next(iter_candidate_paths(preferred), None)
