from __future__ import annotations

from types import SimpleNamespace

import pytest

from siderum.aspects import AspectType, compute_aspects, exact_aspects, major_aspects
from siderum.config import default_settings, reset_settings_cache, save_settings
from siderum.core.bodies import PlanetId


def test_sun_moon_square_is_exact():
    aspects = compute_aspects({PlanetId.SUN: 0.0, PlanetId.MOON: 90.0})
    assert len(aspects) == 1
    aspect = aspects[0]
    assert aspect.type is AspectType.SQUARE
    assert aspect.orb == pytest.approx(0.0)
    assert aspect.separation == pytest.approx(90.0)
    assert aspect.is_exact


def test_pair_order_is_canonical():
    forward = compute_aspects({"Moon": 10.0, "Sun": 130.0})
    backward = compute_aspects({"Sun": 130.0, "Moon": 10.0})
    assert forward == backward
    assert forward[0].planet1 is PlanetId.SUN
    assert forward[0].planet2 is PlanetId.MOON
    assert forward[0].type is AspectType.TRINE


def test_per_aspect_cap_limits_sextile():
    assert compute_aspects({"Mars": 0.0, "Venus": 64.5}) == []
    tight = compute_aspects({"Mars": 0.0, "Venus": 63.5})
    assert tight[0].type is AspectType.SEXTILE
    assert not tight[0].is_exact


def test_max_orb_narrows_caps():
    positions = {"Mars": 0.0, "Jupiter": 185.0}
    assert compute_aspects(positions, 8.0)[0].type is AspectType.OPPOSITION
    assert compute_aspects(positions, 4.0) == []


def test_points_excluded_unless_requested():
    positions = {"Sun": 0.0, "NorthNode": 0.5, "Mars": 180.0}
    default = compute_aspects(positions)
    assert {(a.planet1, a.planet2) for a in default} == {(PlanetId.SUN, PlanetId.MARS)}
    with_points = compute_aspects(positions, include_points=True)
    assert len(with_points) == 3


def test_sorted_by_orb_then_planet_order():
    positions = {"Sun": 0.0, "Moon": 122.0, "Mercury": 1.0, "Saturn": 240.5}
    aspects = compute_aspects(positions)
    orbs = [a.orb for a in aspects]
    assert orbs == sorted(orbs)
    assert aspects[0].planet1 is PlanetId.SUN and aspects[0].planet2 is PlanetId.SATURN


def test_major_aspects_skip_sextiles_and_use_tight_orb():
    positions = {"Sun": 0.0, "Moon": 60.0, "Mars": 92.0, "Jupiter": 184.0}
    found = major_aspects(positions)
    assert all(a.type is not AspectType.SEXTILE for a in found)
    assert all(a.orb <= 3.0 for a in found)
    assert any(a.type is AspectType.SQUARE and a.planet2 is PlanetId.MARS for a in found)


def test_exact_aspects_filter():
    positions = {"Sun": 0.0, "Moon": 90.5, "Mars": 125.0}
    found = exact_aspects(positions)
    assert [(a.planet1, a.planet2) for a in found] == [(PlanetId.SUN, PlanetId.MOON)]


def test_accepts_position_objects():
    positions = [
        SimpleNamespace(planet=PlanetId.SUN, longitude=10.0),
        SimpleNamespace(planet=PlanetId.VENUS, longitude=10.5),
    ]
    aspects = compute_aspects(positions)
    assert aspects[0].type is AspectType.CONJUNCTION
    assert aspects[0].is_exact


def test_nearest_angle_wins():
    found = compute_aspects({"Sun": 0.0, "Mars": 58.0}, 5.0)
    assert len(found) == 1
    assert found[0].type is AspectType.SEXTILE
    assert found[0].orb == pytest.approx(2.0)


@pytest.mark.parametrize(
    "sep, expected, orb",
    [(72.0, AspectType.SEXTILE, 12.0), (80.0, AspectType.SQUARE, 10.0)],
)
def test_overlapping_caps_pick_smallest_orb(sep, expected, orb):
    found = compute_aspects(
        {"Venus": 10.0, "Saturn": 10.0 + sep},
        20.0,
        orbs_by_aspect={"sextile": 20.0, "square": 20.0},
    )
    assert len(found) == 1
    assert found[0].type is expected
    assert found[0].orb == pytest.approx(orb)


def test_aspect_symbol_and_exact_angle():
    aspect = compute_aspects({"Sun": 0.0, "Moon": 181.0})[0]
    assert aspect.type is AspectType.OPPOSITION
    assert aspect.exact_angle == 180.0
    assert aspect.symbol == "☍"
    assert {t.symbol for t in AspectType} == {"☌", "⚹", "□", "△", "☍"}


def test_major_orb_comes_from_settings():
    positions = {"Sun": 0.0, "Mars": 92.5}
    assert major_aspects(positions)[0].type is AspectType.SQUARE

    settings = default_settings()
    settings.aspects.major_orb = 2.0
    assert major_aspects(positions, settings=settings) == []
    assert major_aspects(positions, 3.0, settings=settings)


def test_major_orb_read_from_config_file():
    settings = default_settings()
    settings.aspects.major_orb = 2.0
    save_settings(settings)
    reset_settings_cache()
    assert major_aspects({"Sun": 0.0, "Mars": 92.5}) == []


def test_exact_orb_and_scan_orb_come_from_settings():
    positions = {"Sun": 0.0, "Moon": 90.5}
    settings = default_settings()
    settings.aspects.exact_orb = 0.25
    assert exact_aspects(positions, settings=settings) == []
    assert exact_aspects(positions, 0.6, settings=settings)

    narrow = default_settings()
    narrow.aspects.default_orb = 0.3
    assert exact_aspects(positions, settings=narrow) == []
