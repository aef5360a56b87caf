"""Command line interface for Siderum."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .chart import ChartLocation, compute_chart
from .config import Settings, get_settings, load_settings
from .core.bodies import PlanetId
from .ephemeris.provider import EphemerisProvider
from .errors import SiderumError
from .horizon import compute_event_horizon, next_major_event, search_events
from .ritual import moon_phase, planetary_hours

__all__ = ["build_parser", "main"]

LOG = logging.getLogger(__name__)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _parse_iso_datetime(value: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO timestamp: {value!r}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _add_location_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, required=True, help="Latitude in degrees (north positive)")
    p.add_argument("--lon", type=float, required=True, help="Longitude in degrees (east positive)")


def _location(args: argparse.Namespace) -> ChartLocation:
    return ChartLocation(latitude=args.lat, longitude=args.lon)


def _settings(args: argparse.Namespace) -> Settings:
    if getattr(args, "config", None):
        return load_settings(Path(args.config))
    return get_settings()


def _provider(args: argparse.Namespace, settings: Settings) -> EphemerisProvider:
    provider = getattr(args, "provider", None)
    if provider is not None:
        return provider
    from .ephemeris import default_provider

    return default_provider(settings)


def cmd_chart(args: argparse.Namespace) -> int:
    settings = _settings(args)
    snapshot = compute_chart(
        args.when,
        _location(args),
        provider=_provider(args, settings),
        settings=settings,
        include_aspects=not args.no_aspects,
        aspect_orb=args.orb,
    )
    _print_json(snapshot.to_dict())
    return 0


def cmd_events(args: argparse.Namespace) -> int:
    settings = _settings(args)
    events = compute_event_horizon(
        args.start,
        _location(args),
        args.years,
        provider=_provider(args, settings),
        settings=settings,
    )
    events = search_events(events, args.query)
    if args.next:
        upcoming = next_major_event(events, args.start)
        _print_json(upcoming.to_dict() if upcoming else None)
        return 0
    _print_json([event.to_dict() for event in events])
    return 0


def cmd_hours(args: argparse.Namespace) -> int:
    settings = _settings(args)
    provider = _provider(args, settings)
    info = planetary_hours(args.when, _location(args), provider=provider)
    sun = provider.position(PlanetId.SUN, args.when)
    moon = provider.position(PlanetId.MOON, args.when)
    phase = moon_phase(sun.longitude, moon.longitude)
    _print_json(
        {
            "day_ruler": info.day_ruler.value,
            "approximate": info.approximate,
            "current_hour": {
                "planet": info.current_hour.planet.value,
                "number": info.current_hour.hour_number,
                "start": info.current_hour.start.isoformat(),
                "end": info.current_hour.end.isoformat(),
            },
            "hours": [
                {
                    "number": hour.hour_number,
                    "planet": hour.planet.value,
                    "start": hour.start.isoformat(),
                    "end": hour.end.isoformat(),
                    "day": hour.is_day_hour,
                }
                for hour in info.hours
            ],
            "moon_phase": {
                "name": phase.name,
                "angle": phase.angle,
                "illumination": phase.illumination,
            },
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="siderum",
        description="Classical chart snapshots and multi-year event horizons.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument("--config", help="Path to a settings YAML file")
    subparsers = parser.add_subparsers(dest="command")

    chart = subparsers.add_parser("chart", help="Compute a chart snapshot")
    chart.add_argument(
        "--when",
        type=_parse_iso_datetime,
        default=None,
        help="ISO-8601 timestamp (default: now, naive values are UTC)",
    )
    _add_location_args(chart)
    chart.add_argument("--orb", type=float, default=None, help="Maximum aspect orb in degrees")
    chart.add_argument("--no-aspects", action="store_true", help="Skip the aspect scan")
    chart.set_defaults(func=cmd_chart)

    events = subparsers.add_parser("events", help="List upcoming eclipses, stations and conjunctions")
    events.add_argument("--start", type=_parse_iso_datetime, default=None, help="ISO-8601 start")
    _add_location_args(events)
    events.add_argument("--years", type=float, default=None, help="Years to search (default: settings)")
    events.add_argument("--query", default=None, help="Case-insensitive filter")
    events.add_argument("--next", action="store_true", help="Only print the next event after start")
    events.set_defaults(func=cmd_events)

    hours = subparsers.add_parser("hours", help="Planetary hours and Moon phase")
    hours.add_argument("--when", type=_parse_iso_datetime, default=None, help="ISO-8601 timestamp")
    _add_location_args(hours)
    hours.set_defaults(func=cmd_hours)
    return parser


def main(argv: Iterable[str] | None = None, *, provider: EphemerisProvider | None = None) -> int:
    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=getattr(logging, namespace.log_level), stream=sys.stderr)

    func = getattr(namespace, "func", None)
    if func is None:
        parser.print_help()
        return 0

    now = datetime.now(UTC)
    for name in ("when", "start"):
        if hasattr(namespace, name) and getattr(namespace, name) is None:
            setattr(namespace, name, now)
    namespace.provider = provider

    try:
        return func(namespace)
    except (SiderumError, ValueError) as exc:
        LOG.debug("Command %s failed", namespace.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
