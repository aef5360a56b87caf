from __future__ import annotations

import pytest

from siderum.config import ConditionsCfg
from siderum.core.bodies import PlanetId
from siderum.engine.traditional import evaluate_condition, resolve_sect
from siderum.engine.traditional.models import Sect
from siderum.errors import EphemerisUnavailable


@pytest.mark.parametrize(
    "sep, expected",
    [
        (0.2, "cazimi"),
        (17.0 / 60.0, "cazimi"),
        (0.3, "combust"),
        (8.0, "combust"),
        (8.01, "under_beams"),
        (17.0, "under_beams"),
        (17.01, None),
    ],
)
def test_solar_bands_are_exclusive(sep, expected):
    cond = evaluate_condition(PlanetId.MARS, 100.0 + sep, 0.5, 100.0)
    flags = {
        "cazimi": cond.is_cazimi,
        "combust": cond.is_combust,
        "under_beams": cond.is_under_beams,
    }
    assert sum(flags.values()) == (0 if expected is None else 1)
    if expected is not None:
        assert flags[expected]


def test_band_uses_shortest_arc():
    cond = evaluate_condition(PlanetId.VENUS, 355.0, 1.0, 3.0)
    assert cond.is_under_beams is False
    assert cond.is_combust is True


def test_sun_never_gets_solar_flags():
    cond = evaluate_condition(PlanetId.SUN, 10.0, -0.1, 10.0)
    assert cond.is_retrograde
    assert not (cond.is_cazimi or cond.is_combust or cond.is_under_beams)


def test_retrograde_follows_speed_sign():
    assert evaluate_condition(PlanetId.NORTH_NODE, 50.0, -0.05, 200.0).is_retrograde
    assert not evaluate_condition(PlanetId.JUPITER, 50.0, 0.0, 200.0).is_retrograde


def test_thresholds_can_be_overridden():
    wide = ConditionsCfg(cazimi_deg=1.0, combust_deg=10.0, under_beams_deg=20.0)
    cond = evaluate_condition(PlanetId.MERCURY, 10.8, 1.0, 10.0, wide)
    assert cond.is_cazimi


def test_condition_limits_must_be_ordered():
    with pytest.raises(ValueError):
        ConditionsCfg(cazimi_deg=9.0, combust_deg=8.0, under_beams_deg=17.0)


def test_sect_from_altitude():
    assert resolve_sect(0.1).sect is Sect.DAY
    night = resolve_sect(0.0)
    assert night.sect is Sect.NIGHT
    assert night.method == "altitude"
    assert night.luminary_of_sect is PlanetId.MOON
    assert night.malefic_of_sect is PlanetId.MARS


@pytest.mark.parametrize(
    "sun, asc, house, sect",
    [
        (200.0, 0.0, 7, Sect.DAY),
        (359.0, 0.0, 12, Sect.DAY),
        (10.0, 0.0, 1, Sect.NIGHT),
        (5.0, 350.0, 1, Sect.NIGHT),
        (150.0, 0.0, 6, Sect.NIGHT),
    ],
)
def test_sect_from_house_proxy(sun, asc, house, sect):
    info = resolve_sect(sun_longitude=sun, ascendant=asc)
    assert info.method == "houses"
    assert info.sun_house == house
    assert info.sect is sect


def test_sect_requires_some_input():
    with pytest.raises(EphemerisUnavailable):
        resolve_sect(sun_longitude=10.0)


@pytest.mark.parametrize("planet", [PlanetId.MOON, PlanetId.MERCURY, PlanetId.SATURN])
def test_exact_conjunction_with_sun_is_cazimi_only(planet):
    cond = evaluate_condition(planet, 123.0, 1.0, 123.0)
    assert cond.is_cazimi
    assert not cond.is_combust
    assert not cond.is_under_beams


def test_sun_on_horizon_is_night():
    info = resolve_sect(0.0)
    assert info.sect is Sect.NIGHT
    assert not info.is_day


def test_sect_favourites():
    day = resolve_sect(12.0)
    assert day.is_day
    assert day.luminary_of_sect is PlanetId.SUN
    assert day.benefic_of_sect is PlanetId.JUPITER
    assert day.malefic_of_sect is PlanetId.SATURN
    night = resolve_sect(-12.0)
    assert night.benefic_of_sect is PlanetId.VENUS
