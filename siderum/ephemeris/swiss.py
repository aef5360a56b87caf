"""Swiss Ephemeris implementation of :class:`EphemerisProvider`."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any

from ..core.bodies import PlanetId
from ..core.time import from_julian_day, julian_day, require_aware
from ..errors import EphemerisUnavailable
from ..observability import record_error
from ..utils.angles import norm360
from .provider import EclipseInfo, EclipticPosition, HorizontalPosition
from .swe import swe, use_ephemeris_path
from .utils import get_se_ephe_path

__all__ = ["SwissEphemerisProvider", "BODY_CODES"]

LOG = logging.getLogger(__name__)

# pyswisseph body indices; the South Node is derived from the North Node.
BODY_CODES: dict[PlanetId, int] = {
    PlanetId.SUN: 0,
    PlanetId.MOON: 1,
    PlanetId.MERCURY: 2,
    PlanetId.VENUS: 3,
    PlanetId.MARS: 4,
    PlanetId.JUPITER: 5,
    PlanetId.SATURN: 6,
    PlanetId.URANUS: 7,
    PlanetId.NEPTUNE: 8,
    PlanetId.PLUTO: 9,
    PlanetId.NORTH_NODE: 10,  # MEAN_NODE
    PlanetId.SOUTH_NODE: 10,
    PlanetId.LILITH: 12,  # MEAN_APOG
}


def _swe_errors() -> tuple[type[BaseException], ...]:
    error_cls = getattr(swe(), "Error", None)
    if isinstance(error_cls, type) and issubclass(error_cls, BaseException):
        return (error_cls, RuntimeError)
    return (RuntimeError,)


class SwissEphemerisProvider:
    """Ephemeris provider backed by ``pyswisseph``.

    Ephemeris files are located through ``ephemeris_path`` or the
    ``SE_EPHE_PATH`` / ``SWE_EPH_PATH`` / ``SIDERUM_EPHE_PATH`` environment
    variables. When no data directory is found (or ``prefer_moshier`` is set)
    the built-in Moshier theory is used.
    """

    def __init__(
        self,
        ephemeris_path: str | os.PathLike[str] | None = None,
        *,
        prefer_moshier: bool = False,
    ) -> None:
        self.ephemeris_path = self._configure_ephemeris_path(ephemeris_path)
        use_moshier = prefer_moshier or self.ephemeris_path is None
        base = swe.FLG_MOSEPH if use_moshier else swe.FLG_SWIEPH
        self._calc_flags = base | swe.FLG_SPEED
        self._eph_flags = base

    @classmethod
    def from_settings(cls, settings: Any) -> SwissEphemerisProvider:
        eph = settings.ephemeris
        return cls(eph.path, prefer_moshier=eph.prefer_moshier)

    def _configure_ephemeris_path(
        self, ephemeris_path: str | os.PathLike[str] | None
    ) -> str | None:
        resolved = get_se_ephe_path(ephemeris_path)
        if ephemeris_path is not None and resolved is None:
            LOG.warning(
                "Ephemeris path %s is not a directory; using Moshier",
                ephemeris_path,
                extra={"err_code": "EPHE_PATH_MISSING"},
            )
        if resolved is not None:
            use_ephemeris_path(resolved)
        return resolved

    # ------------------------------------------------------------------
    # Body positions
    # ------------------------------------------------------------------
    def position(self, body: PlanetId, instant: datetime) -> EclipticPosition:
        body = PlanetId.parse(body)
        moment = require_aware(instant, label="instant")
        jd_ut = julian_day(moment)
        try:
            xx, _ = swe.calc_ut(jd_ut, BODY_CODES[body], self._calc_flags)
        except _swe_errors() as exc:
            record_error("ephemeris_position", exc)
            raise EphemerisUnavailable(
                f"Swiss Ephemeris failed for {body.value}: {exc}",
                body=body.value,
                instant=moment,
            ) from exc

        lon, lat, dist, speed_lon = xx[0], xx[1], xx[2], xx[3]
        if body is PlanetId.SOUTH_NODE:
            lon += 180.0
            lat = -lat
        return EclipticPosition(
            longitude=norm360(lon),
            latitude=lat,
            distance_au=dist,
            speed=speed_lon,
        )

    def topocentric(
        self, body: PlanetId, instant: datetime, latitude: float, longitude: float
    ) -> HorizontalPosition:
        body = PlanetId.parse(body)
        ecl = self.position(body, instant)
        jd_ut = julian_day(require_aware(instant, label="instant"))
        geopos = (float(longitude), float(latitude), 0.0)
        try:
            az, true_alt, _apparent = swe.azalt(
                jd_ut,
                swe.ECL2HOR,
                geopos,
                0.0,
                0.0,
                (ecl.longitude, ecl.latitude, ecl.distance_au),
            )
        except _swe_errors() as exc:
            record_error("ephemeris_topocentric", exc)
            raise EphemerisUnavailable(
                f"horizontal coordinates failed for {body.value}: {exc}",
                body=body.value,
                instant=instant,
            ) from exc
        # Swiss azimuth is counted from south; convert to north-based.
        return HorizontalPosition(azimuth=norm360(az + 180.0), altitude=true_alt)

    # ------------------------------------------------------------------
    # Eclipses
    # ------------------------------------------------------------------
    def next_solar_eclipse(self, after: datetime) -> EclipseInfo | None:
        moment = require_aware(after, label="after")
        try:
            retflag, tret = swe.sol_eclipse_when_glob(julian_day(moment), self._eph_flags)
            if not tret or tret[0] <= 0.0:
                return None
            peak_jd = tret[0]
            _, _, attr = swe.sol_eclipse_where(peak_jd, self._eph_flags)
        except _swe_errors() as exc:
            record_error("ephemeris_solar_eclipse", exc)
            raise EphemerisUnavailable(
                f"solar eclipse search failed: {exc}", body="Sun", instant=moment
            ) from exc

        if retflag & swe.ECL_ANNULAR_TOTAL:
            kind = "hybrid"
        elif retflag & swe.ECL_TOTAL:
            kind = "total"
        elif retflag & swe.ECL_ANNULAR:
            kind = "annular"
        else:
            kind = "partial"
        obscuration = min(max(float(attr[2]), 0.0), 1.0)
        return EclipseInfo(peak=from_julian_day(peak_jd), kind=kind, obscuration=obscuration)

    def next_lunar_eclipse(self, after: datetime) -> EclipseInfo | None:
        moment = require_aware(after, label="after")
        try:
            retflag, tret = swe.lun_eclipse_when(julian_day(moment), self._eph_flags)
            if not tret or tret[0] <= 0.0:
                return None
            peak_jd = tret[0]
            _, attr = swe.lun_eclipse_how(peak_jd, (0.0, 0.0, 0.0), self._eph_flags)
        except _swe_errors() as exc:
            record_error("ephemeris_lunar_eclipse", exc)
            raise EphemerisUnavailable(
                f"lunar eclipse search failed: {exc}", body="Moon", instant=moment
            ) from exc

        if retflag & swe.ECL_TOTAL:
            kind = "total"
        elif retflag & swe.ECL_PARTIAL:
            kind = "partial"
        else:
            kind = "penumbral"
        umbral = 0.0 if kind == "penumbral" else float(attr[0])
        return EclipseInfo(
            peak=from_julian_day(peak_jd),
            kind=kind,
            obscuration=min(max(umbral, 0.0), 1.0),
        )

    # ------------------------------------------------------------------
    # Observer frame
    # ------------------------------------------------------------------
    def ascendant(self, instant: datetime, latitude: float, longitude: float) -> float:
        moment = require_aware(instant, label="instant")
        try:
            _cusps, ascmc = swe.houses_ex(julian_day(moment), float(latitude), float(longitude), b"W")
        except _swe_errors() as exc:
            record_error("ephemeris_ascendant", exc)
            raise EphemerisUnavailable(
                f"ascendant failed: {exc}", instant=moment
            ) from exc
        return norm360(ascmc[0])

    def local_sidereal_time(self, instant: datetime, longitude: float) -> float:
        moment = require_aware(instant, label="instant")
        gmst = swe.sidtime(julian_day(moment))
        return (gmst + float(longitude) / 15.0) % 24.0

    def sunrise_sunset(
        self, instant: datetime, latitude: float, longitude: float
    ) -> tuple[datetime, datetime]:
        """Return the first sunrise after ``instant`` and the sunset that follows it."""

        moment = require_aware(instant, label="instant")
        geopos = (float(longitude), float(latitude), 0.0)
        rise_jd = self._rise_trans(julian_day(moment), swe.CALC_RISE, geopos, moment)
        set_jd = self._rise_trans(rise_jd, swe.CALC_SET, geopos, moment)
        return from_julian_day(rise_jd), from_julian_day(set_jd)

    def _rise_trans(
        self, jd_ut: float, rsmi: int, geopos: tuple[float, float, float], moment: datetime
    ) -> float:
        try:
            status, tret = swe.rise_trans(
                jd_ut, BODY_CODES[PlanetId.SUN], rsmi, geopos, 0.0, 0.0, self._eph_flags
            )
        except _swe_errors() as exc:
            record_error("ephemeris_rise_set", exc)
            raise EphemerisUnavailable(
                f"sunrise/sunset failed: {exc}", body="Sun", instant=moment
            ) from exc
        if status != 0 or not tret or tret[0] <= 0.0:
            raise EphemerisUnavailable(
                "Sun does not rise or set at this latitude on this date",
                body="Sun",
                instant=moment,
                error_code="CIRCUMPOLAR_SUN",
            )
        return float(tret[0])
