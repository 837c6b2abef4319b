"""
Command-line interface for the exporter.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import signal
import sys
from typing import Any

from weather_exporter import __version__
from weather_exporter.config import get_settings
from weather_exporter.datasources.locations import (
    LocationSourceError,
    location_source_from_settings,
)
from weather_exporter.flows.poll import poll_once
from weather_exporter.log import configure_logging
from weather_exporter.metrics import MetricsSink
from weather_exporter.poller import PollingWorkflow


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-exporter",
        description="Export Open-Meteo current weather as Prometheus gauges",
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

    # 'run' command - metrics server + polling loop
    run_parser = subparsers.add_parser("run", help="Serve /metrics and poll until stopped")
    run_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for /metrics (default: metrics_port from settings)",
    )

    # 'once' command - single cycle via Prefect
    subparsers.add_parser("once", help="Run a single poll cycle and print the summary")

    # 'locations' command
    subparsers.add_parser("locations", help="List the locations that would be polled")

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the 'run' command."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.metrics_port

    sink = MetricsSink()
    sink.serve(port)
    print(f"Metrics available at http://localhost:{port}/metrics")

    workflow = PollingWorkflow.from_settings(settings, sink)

    def _handle_sigterm(_signum: int, _frame: Any) -> None:
        workflow.stop()

    signal.signal(signal.SIGTERM, _handle_sigterm)

    thread = workflow.start()
    try:
        while thread.is_alive():
            thread.join(0.5)
    except KeyboardInterrupt:
        print("\nStopping...")
        workflow.stop(timeout=settings.request_timeout)

    return 0


def cmd_once(_args: argparse.Namespace) -> int:
    """Handle the 'once' command."""
    summary = poll_once()
    if summary["skipped"]:
        print("Error: location source unavailable", file=sys.stderr)
        return 1

    for name in summary["succeeded"]:
        print(f"  ok      {name}")
    for name in summary["failed"]:
        print(f"  failed  {name}")
    return 0


def cmd_locations(_args: argparse.Namespace) -> int:
    """Handle the 'locations' command."""
    source = location_source_from_settings(get_settings())
    try:
        locations = source.get_all_locations()
    except LocationSourceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for loc in locations:
        print(f"{loc.id}\t{loc.name}\t{loc.latitude:.4f}\t{loc.longitude:.4f}")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"API: {settings.api_base_url}")
    print(f"Interval: {settings.poll_interval}s")
    print(f"Metrics port: {settings.metrics_port}")
    print(f"Location source: {'postgres' if settings.database_url else 'static'}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    debug = getattr(args, "debug", False) or settings.debug
    configure_logging("DEBUG" if debug else settings.log_level)

    commands = {
        "run": cmd_run,
        "once": cmd_once,
        "locations": cmd_locations,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
