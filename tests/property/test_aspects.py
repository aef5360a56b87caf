from __future__ import annotations

import pytest

from siderum.aspects import DEFAULT_ORB_CAPS, compute_aspects
from siderum.core.bodies import CLASSICAL_PLANETS, PlanetId

hypothesis = pytest.importorskip("hypothesis")
given = hypothesis.given
settings = hypothesis.settings
st = hypothesis.strategies

LONGITUDE = st.floats(
    min_value=0.0,
    max_value=360.0,
    allow_nan=False,
    allow_infinity=False,
    exclude_max=True,
)
POSITIONS = st.fixed_dictionaries({planet: LONGITUDE for planet in PlanetId})
ORB = st.floats(min_value=0.0, max_value=10.0, allow_nan=False, allow_infinity=False)


@settings(deadline=None, max_examples=50)
@given(positions=POSITIONS, max_orb=ORB)
def test_orbs_respect_caps_and_ordering(positions, max_orb: float) -> None:
    aspects = compute_aspects(positions, max_orb)
    seen = set()
    for aspect in aspects:
        assert aspect.planet1.order < aspect.planet2.order
        assert not aspect.planet1.is_point and not aspect.planet2.is_point
        assert aspect.orb <= min(max_orb, DEFAULT_ORB_CAPS[aspect.type.name.lower()]) + 1e-9
        assert aspect.is_exact == (aspect.orb <= 1.0)
        pair = (aspect.planet1, aspect.planet2)
        assert pair not in seen
        seen.add(pair)
    keys = [(a.orb, a.planet1.order, a.planet2.order) for a in aspects]
    assert keys == sorted(keys)


@settings(deadline=None, max_examples=50)
@given(positions=POSITIONS)
def test_classical_subset_is_subset(positions) -> None:
    subset = {planet: lon for planet, lon in positions.items() if planet in CLASSICAL_PLANETS}
    full = {(a.planet1, a.planet2, a.type) for a in compute_aspects(positions)}
    partial = {(a.planet1, a.planet2, a.type) for a in compute_aspects(subset)}
    assert partial <= full
