"""Essential dignity tables and the dignity evaluator.

Domicile, exaltation, detriment and fall follow Ptolemy; triplicities use
the Dorothean day/night rulers; terms are the Egyptian bounds; faces run
through the Chaldean order starting with Mars at 0° Aries.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ...core.bodies import Element, PlanetId, ZodiacSign
from ...errors import UnmappedDignityTable
from .models import EssentialDignity, Sect

__all__ = [
    "DOMICILE",
    "EXALTATION",
    "DETRIMENT",
    "FALL",
    "TRIPLICITY",
    "TERMS",
    "FACE_ORDER",
    "TermSpan",
    "domicile_ruler",
    "triplicity_ruler",
    "term_ruler",
    "face_ruler",
    "evaluate_dignity",
    "validate_tables",
]

_S = ZodiacSign
_P = PlanetId


@dataclass(frozen=True)
class TermSpan:
    ruler: PlanetId
    start_deg: float
    end_deg: float

    def contains(self, degree: float) -> bool:
        return self.start_deg <= degree < self.end_deg


DOMICILE: Mapping[ZodiacSign, PlanetId] = MappingProxyType(
    {
        _S.ARIES: _P.MARS,
        _S.TAURUS: _P.VENUS,
        _S.GEMINI: _P.MERCURY,
        _S.CANCER: _P.MOON,
        _S.LEO: _P.SUN,
        _S.VIRGO: _P.MERCURY,
        _S.LIBRA: _P.VENUS,
        _S.SCORPIO: _P.MARS,
        _S.SAGITTARIUS: _P.JUPITER,
        _S.CAPRICORN: _P.SATURN,
        _S.AQUARIUS: _P.SATURN,
        _S.PISCES: _P.JUPITER,
    }
)

EXALTATION: Mapping[ZodiacSign, PlanetId | None] = MappingProxyType(
    {
        _S.ARIES: _P.SUN,
        _S.TAURUS: _P.MOON,
        _S.GEMINI: None,
        _S.CANCER: _P.JUPITER,
        _S.LEO: None,
        _S.VIRGO: _P.MERCURY,
        _S.LIBRA: _P.SATURN,
        _S.SCORPIO: None,
        _S.SAGITTARIUS: None,
        _S.CAPRICORN: _P.MARS,
        _S.AQUARIUS: None,
        _S.PISCES: _P.VENUS,
    }
)

DETRIMENT: Mapping[ZodiacSign, PlanetId] = MappingProxyType(
    {
        _S.ARIES: _P.VENUS,
        _S.TAURUS: _P.MARS,
        _S.GEMINI: _P.JUPITER,
        _S.CANCER: _P.SATURN,
        _S.LEO: _P.SATURN,
        _S.VIRGO: _P.JUPITER,
        _S.LIBRA: _P.MARS,
        _S.SCORPIO: _P.VENUS,
        _S.SAGITTARIUS: _P.MERCURY,
        _S.CAPRICORN: _P.MOON,
        _S.AQUARIUS: _P.SUN,
        _S.PISCES: _P.MERCURY,
    }
)

FALL: Mapping[ZodiacSign, PlanetId | None] = MappingProxyType(
    {
        _S.ARIES: _P.SATURN,
        _S.TAURUS: None,
        _S.GEMINI: None,
        _S.CANCER: _P.MARS,
        _S.LEO: None,
        _S.VIRGO: _P.VENUS,
        _S.LIBRA: _P.SUN,
        _S.SCORPIO: _P.MOON,
        _S.SAGITTARIUS: None,
        _S.CAPRICORN: _P.JUPITER,
        _S.AQUARIUS: None,
        _S.PISCES: _P.MERCURY,
    }
)

# element -> (day ruler, night ruler)
TRIPLICITY: Mapping[Element, tuple[PlanetId, PlanetId]] = MappingProxyType(
    {
        Element.FIRE: (_P.SUN, _P.JUPITER),
        Element.EARTH: (_P.VENUS, _P.MOON),
        Element.AIR: (_P.SATURN, _P.MERCURY),
        Element.WATER: (_P.VENUS, _P.MARS),
    }
)


def _spans(*rows: tuple[PlanetId, float, float]) -> tuple[TermSpan, ...]:
    return tuple(TermSpan(ruler, start, end) for ruler, start, end in rows)


TERMS: Mapping[ZodiacSign, tuple[TermSpan, ...]] = MappingProxyType(
    {
        _S.ARIES: _spans(
            (_P.JUPITER, 0, 6), (_P.VENUS, 6, 12), (_P.MERCURY, 12, 20),
            (_P.MARS, 20, 25), (_P.SATURN, 25, 30),
        ),
        _S.TAURUS: _spans(
            (_P.VENUS, 0, 8), (_P.MERCURY, 8, 14), (_P.JUPITER, 14, 22),
            (_P.SATURN, 22, 27), (_P.MARS, 27, 30),
        ),
        _S.GEMINI: _spans(
            (_P.MERCURY, 0, 6), (_P.JUPITER, 6, 12), (_P.VENUS, 12, 17),
            (_P.MARS, 17, 24), (_P.SATURN, 24, 30),
        ),
        _S.CANCER: _spans(
            (_P.MARS, 0, 7), (_P.VENUS, 7, 13), (_P.MERCURY, 13, 19),
            (_P.JUPITER, 19, 26), (_P.SATURN, 26, 30),
        ),
        _S.LEO: _spans(
            (_P.JUPITER, 0, 6), (_P.VENUS, 6, 11), (_P.SATURN, 11, 18),
            (_P.MERCURY, 18, 24), (_P.MARS, 24, 30),
        ),
        _S.VIRGO: _spans(
            (_P.MERCURY, 0, 7), (_P.VENUS, 7, 17), (_P.JUPITER, 17, 21),
            (_P.MARS, 21, 28), (_P.SATURN, 28, 30),
        ),
        _S.LIBRA: _spans(
            (_P.SATURN, 0, 6), (_P.MERCURY, 6, 14), (_P.JUPITER, 14, 21),
            (_P.VENUS, 21, 28), (_P.MARS, 28, 30),
        ),
        _S.SCORPIO: _spans(
            (_P.MARS, 0, 7), (_P.VENUS, 7, 11), (_P.MERCURY, 11, 19),
            (_P.JUPITER, 19, 24), (_P.SATURN, 24, 30),
        ),
        _S.SAGITTARIUS: _spans(
            (_P.JUPITER, 0, 12), (_P.VENUS, 12, 17), (_P.MERCURY, 17, 21),
            (_P.SATURN, 21, 26), (_P.MARS, 26, 30),
        ),
        _S.CAPRICORN: _spans(
            (_P.MERCURY, 0, 7), (_P.JUPITER, 7, 14), (_P.VENUS, 14, 22),
            (_P.SATURN, 22, 26), (_P.MARS, 26, 30),
        ),
        _S.AQUARIUS: _spans(
            (_P.MERCURY, 0, 7), (_P.VENUS, 7, 13), (_P.JUPITER, 13, 20),
            (_P.MARS, 20, 25), (_P.SATURN, 25, 30),
        ),
        _S.PISCES: _spans(
            (_P.VENUS, 0, 12), (_P.JUPITER, 12, 16), (_P.MERCURY, 16, 19),
            (_P.MARS, 19, 28), (_P.SATURN, 28, 30),
        ),
    }
)

FACE_ORDER: tuple[PlanetId, ...] = (
    _P.MARS,
    _P.SUN,
    _P.VENUS,
    _P.MERCURY,
    _P.MOON,
    _P.SATURN,
    _P.JUPITER,
)


def validate_tables() -> None:
    """Raise :class:`UnmappedDignityTable` if any rulership row is missing."""

    for table_name, table in (
        ("domicile", DOMICILE),
        ("exaltation", EXALTATION),
        ("detriment", DETRIMENT),
        ("fall", FALL),
        ("terms", TERMS),
    ):
        missing = [sign.value for sign in ZodiacSign if sign not in table]
        if missing:
            raise UnmappedDignityTable(f"{table_name} table has no row for {', '.join(missing)}")
    for element in Element:
        if element not in TRIPLICITY:
            raise UnmappedDignityTable(f"triplicity table has no row for {element.value}")
    for sign, spans in TERMS.items():
        cursor = 0.0
        for span in spans:
            if span.start_deg != cursor or span.end_deg <= span.start_deg:
                raise UnmappedDignityTable(f"terms for {sign.value} do not tile 0-30°")
            cursor = span.end_deg
        if cursor != 30.0:
            raise UnmappedDignityTable(f"terms for {sign.value} do not tile 0-30°")


validate_tables()


def _check_degree(degree: float) -> float:
    value = float(degree)
    if not 0.0 <= value < 30.0:
        raise ValueError(f"degree within sign must lie in [0, 30): {degree!r}")
    return value


def domicile_ruler(sign: ZodiacSign) -> PlanetId:
    try:
        return DOMICILE[ZodiacSign(sign)]
    except KeyError as exc:  # pragma: no cover - guarded by validate_tables
        raise UnmappedDignityTable(f"no domicile ruler for {sign}") from exc


def triplicity_ruler(sign: ZodiacSign, sect: Sect = Sect.DAY) -> PlanetId:
    day, night = TRIPLICITY[ZodiacSign(sign).element]
    return day if Sect(sect) is Sect.DAY else night


def term_ruler(sign: ZodiacSign, degree: float) -> PlanetId:
    value = _check_degree(degree)
    for span in TERMS[ZodiacSign(sign)]:
        if span.contains(value):
            return span.ruler
    raise UnmappedDignityTable(f"no term covers {value}° {sign}")  # pragma: no cover


def face_ruler(sign: ZodiacSign, degree: float) -> PlanetId:
    value = _check_degree(degree)
    decan = min(int(value // 10.0), 2)
    return FACE_ORDER[(ZodiacSign(sign).index * 3 + decan) % len(FACE_ORDER)]


def _weight(weights: Any, name: str, default: int) -> int:
    if weights is None:
        return default
    if isinstance(weights, Mapping):
        return int(weights.get(name, default))
    return int(getattr(weights, name, default))


_DEFAULT_WEIGHTS = {
    "domicile": 5,
    "exaltation": 4,
    "triplicity": 3,
    "term": 2,
    "face": 1,
    "detriment": -5,
    "fall": -4,
    "peregrine": 0,
}


def evaluate_dignity(
    planet: PlanetId | str,
    sign: ZodiacSign | str,
    degree: float,
    sect: Sect | str = Sect.DAY,
    weights: Any = None,
) -> EssentialDignity:
    """Return the essential dignity of ``planet`` at ``degree`` of ``sign``.

    ``weights`` may be a :class:`~siderum.config.DignitiesCfg.Weights`
    instance or a mapping of flag name to integer weight; missing entries
    fall back to the traditional +5/+4/+3/+2/+1/−5/−4 scale.
    Nodes and Lilith carry no dignity and always score zero.
    """

    planet = PlanetId.parse(planet)
    sign = ZodiacSign(sign)
    value = _check_degree(degree)
    if planet.is_point:
        return EssentialDignity()

    flags = {
        "domicile": DOMICILE[sign] is planet,
        "exaltation": EXALTATION[sign] is planet,
        "triplicity": triplicity_ruler(sign, sect) is planet,
        "term": term_ruler(sign, value) is planet,
        "face": face_ruler(sign, value) is planet,
        "detriment": DETRIMENT[sign] is planet,
        "fall": FALL[sign] is planet,
    }
    peregrine = not any(
        flags[name] for name in ("domicile", "exaltation", "triplicity", "term", "face")
    )
    score = sum(
        _weight(weights, name, _DEFAULT_WEIGHTS[name]) for name, hit in flags.items() if hit
    )
    if peregrine:
        score += _weight(weights, "peregrine", _DEFAULT_WEIGHTS["peregrine"])
    return EssentialDignity(peregrine=peregrine, score=score, **flags)
