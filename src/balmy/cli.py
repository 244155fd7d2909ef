"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta

from balmy import __version__
from balmy.config import get_settings
from balmy.datasources.nws import WeatherReport, report_to_json, summarize_current
from balmy.errors import BalmyError
from balmy.flows.fetch import fetch_report
from balmy.scheduler import RefreshScheduler


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="balmy",
        description="Current conditions and forecasts from the National Weather Service",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    report_parser = subparsers.add_parser("report", help="Fetch and print a weather report")
    report_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    report_parser.add_argument("--lon", type=float, default=None, help="Longitude")
    report_parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a short text summary instead of JSON",
    )

    watch_parser = subparsers.add_parser("watch", help="Refresh the report periodically")
    watch_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    watch_parser.add_argument("--lon", type=float, default=None, help="Longitude")
    watch_parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between refresh checks (default: refresh_interval_seconds from settings)",
    )

    return parser


def configure_logging(debug: bool = False) -> None:
    """Set up root logging from settings (``--debug`` forces DEBUG)."""
    level = "DEBUG" if debug else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_summary(report: WeatherReport) -> str:
    """Short human-readable rendering of a report."""
    current = summarize_current(report.current_conditions)
    station = report.station_info
    lines = [f"{station.name or station.id} ({station.distance / 1000:.1f} km away)"]

    if current.temperature_f is not None:
        line = f"  Now: {current.temperature_f}°F"
        if current.feels_like_f is not None:
            line += f", feels like {current.feels_like_f}°F"
        lines.append(line)
    if current.wind_mph is not None:
        line = f"  Wind: {current.wind_mph} mph {current.wind_cardinal or ''}".rstrip()
        if current.wind_gust_mph is not None:
            line += f", gusting {current.wind_gust_mph} mph"
        lines.append(line)

    for day in report.daily_forecast:
        low = f" / {day.night.temperature}°" if day.night else ""
        precip = f" ({day.precip}%)" if day.precip is not None else ""
        lines.append(f"  {day.name}: {day.temperature}°{low} {day.short_forecast}{precip}")
    return "\n".join(lines)


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Location: ({settings.lat}, {settings.lon})")
    print(f"API: {settings.api_base_url}")
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Handle the 'report' command: fetch once and print."""
    try:
        report = fetch_report(lat=args.lat, lon=args.lon)
    except BalmyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(format_summary(report) if args.summary else report_to_json(report))
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    """Handle the 'watch' command: refresh on a timer until interrupted."""
    settings = get_settings()
    interval = args.interval if args.interval is not None else settings.refresh_interval_seconds
    scheduler = RefreshScheduler(
        lambda: fetch_report(lat=args.lat, lon=args.lon),
        threshold=timedelta(minutes=settings.refresh_threshold_minutes),
    )

    print(
        f"Watching (check every {interval:g}s, refresh after "
        f"{settings.refresh_threshold_minutes:g} min). Ctrl+C to stop."
    )
    try:
        scheduler.run_forever(interval, on_refresh=lambda r: print(format_summary(r)))
    except KeyboardInterrupt:
        print("\nStopped.")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)

    commands = {
        "info": cmd_info,
        "report": cmd_report,
        "watch": cmd_watch,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
