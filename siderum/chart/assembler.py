"""Assemble a chart snapshot from one round of provider queries."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from types import MappingProxyType

from ..aspects import compute_aspects
from ..config.settings import Settings, get_settings
from ..core.bodies import TRACKED_BODIES, PlanetId, sign_position
from ..core.time import julian_day, require_aware
from ..engine.traditional import evaluate_condition, evaluate_dignity, resolve_sect
from ..engine.traditional.models import SectInfo
from ..errors import EphemerisUnavailable
from ..ephemeris.provider import EclipticPosition, EphemerisProvider, HorizontalPosition
from ..observability import CHART_COMPUTE_DURATION, record_error
from ..utils.angles import delta_deg, norm360
from .models import ChartLocation, ChartSnapshot, PlanetPosition

__all__ = ["compute_chart"]

LOG = logging.getLogger(__name__)

_SPEED_STEP = timedelta(hours=1)


def _speed(
    provider: EphemerisProvider, body: PlanetId, moment: datetime, ecl: EclipticPosition
) -> float:
    if ecl.speed is not None:
        return float(ecl.speed)
    later = provider.position(body, moment + _SPEED_STEP)
    return delta_deg(later.longitude, ecl.longitude) * 24.0


def _horizontal(
    provider: EphemerisProvider, body: PlanetId, moment: datetime, location: ChartLocation
) -> HorizontalPosition | None:
    try:
        return provider.topocentric(body, moment, location.latitude, location.longitude)
    except EphemerisUnavailable as exc:
        LOG.debug(
            "No horizontal coordinates for %s: %s",
            body.value,
            exc,
            extra={"err_code": exc.error_code},
        )
        return None


def _planet_position(
    provider: EphemerisProvider, body: PlanetId, moment: datetime, location: ChartLocation
) -> PlanetPosition:
    ecl = provider.position(body, moment)
    longitude = norm360(ecl.longitude)
    speed = _speed(provider, body, moment, ecl)
    horizontal = _horizontal(provider, body, moment, location)
    split = sign_position(longitude)
    return PlanetPosition(
        planet=body,
        longitude=longitude,
        latitude=float(ecl.latitude),
        speed=speed,
        sign=split.sign,
        sign_degree=split.degree,
        sign_minute=split.minute,
        sign_second=split.second,
        azimuth=horizontal.azimuth if horizontal else None,
        altitude=horizontal.altitude if horizontal else None,
    )


def _sect(
    provider: EphemerisProvider, moment: datetime, location: ChartLocation, sun: PlanetPosition
) -> SectInfo:
    if sun.altitude is not None:
        return resolve_sect(sun.altitude)
    ascendant = provider.ascendant(moment, location.latitude, location.longitude)
    return resolve_sect(sun_longitude=sun.longitude, ascendant=ascendant)


def _local_sidereal_time(
    provider: EphemerisProvider, moment: datetime, location: ChartLocation
) -> float | None:
    try:
        return provider.local_sidereal_time(moment, location.longitude)
    except EphemerisUnavailable:
        return None


def compute_chart(
    moment: datetime,
    location: ChartLocation,
    *,
    provider: EphemerisProvider | None = None,
    settings: Settings | None = None,
    include_aspects: bool = True,
    aspect_orb: float | None = None,
) -> ChartSnapshot:
    """Compute a full chart snapshot for ``moment`` at ``location``.

    The snapshot is all-or-nothing: if any tracked body cannot be resolved
    :class:`~siderum.errors.EphemerisUnavailable` is raised. Horizontal
    coordinates are optional per body; without the Sun's altitude the sect
    falls back to the Ascendant house proxy.
    """

    moment = require_aware(moment, label="moment")
    settings = settings or get_settings()
    if provider is None:
        from ..ephemeris import default_provider

        provider = default_provider(settings)

    with CHART_COMPUTE_DURATION.time():
        try:
            planets = tuple(
                _planet_position(provider, body, moment, location) for body in TRACKED_BODIES
            )
            by_planet = {pos.planet: pos for pos in planets}
            sun = by_planet[PlanetId.SUN]
            sect_info = _sect(provider, moment, location, sun)
        except EphemerisUnavailable as exc:
            record_error("chart", exc)
            LOG.error(
                "Chart computation failed at %s: %s",
                moment.isoformat(),
                exc,
                extra={"err_code": exc.error_code},
            )
            raise

        weights = settings.dignities.weights
        dignities = {
            pos.planet: evaluate_dignity(
                pos.planet, pos.sign, pos.degree_in_sign, sect_info.sect, weights
            )
            for pos in planets
        }
        conditions = {
            pos.planet: evaluate_condition(
                pos.planet, pos.longitude, pos.speed, sun.longitude, settings.conditions
            )
            for pos in planets
        }

        aspects = ()
        if include_aspects:
            aspect_cfg = settings.aspects
            aspects = tuple(
                compute_aspects(
                    planets,
                    aspect_cfg.default_orb if aspect_orb is None else aspect_orb,
                    exact_orb=aspect_cfg.exact_orb,
                    orbs_by_aspect=aspect_cfg.orbs_by_aspect,
                )
            )

        return ChartSnapshot(
            timestamp=moment,
            julian_day=julian_day(moment),
            local_sidereal_time=_local_sidereal_time(provider, moment, location),
            latitude=location.latitude,
            longitude=location.longitude,
            planets=planets,
            dignities=MappingProxyType(dignities),
            conditions=MappingProxyType(conditions),
            sect=sect_info.sect,
            sect_info=sect_info,
            aspects=aspects,
        )
