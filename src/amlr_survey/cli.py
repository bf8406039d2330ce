"""
Command-line interface for the report build.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import sys
from pathlib import Path

from amlr_survey import __version__
from amlr_survey.config import get_settings
from amlr_survey.flows import build as build_flow
from amlr_survey.flows.build import build_all
from amlr_survey.flows.ingest import ingest_all


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="amlr-survey",
        description="Maps, tables and summary statistics for AMLR winter surveys",
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
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'ingest' command - validate CSV exports into the table store
    ingest_parser = subparsers.add_parser("ingest", help="Ingest CSV exports")
    ingest_parser.add_argument(
        "--raw-dir",
        type=Path,
        default=None,
        help="Directory holding the CSV exports (default: settings raw_dir or data_dir/raw)",
    )
    ingest_parser.add_argument(
        "--force",
        action="store_true",
        help="Re-ingest tables even if they are still fresh",
    )

    subparsers.add_parser("build", help="Build the report from ingested tables")

    # 'refresh' command - ingest then build
    refresh_parser = subparsers.add_parser("refresh", help="Ingest tables and build report")
    refresh_parser.add_argument("--raw-dir", type=Path, default=None)
    refresh_parser.add_argument("--force", action="store_true")

    # 'serve' command - serve built report locally
    serve_parser = subparsers.add_parser("serve", help="Serve report locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def cmd_info(args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug or args.debug}")
    print(f"Data directory: {settings.data_dir}")
    print(f"Raw directory: {settings.raw_path}")
    print(f"Projection: {settings.projection}")
    print(f"Grid resolution: {settings.grid_resolution_m:g} m")
    print(f"Neighborhood radius: {settings.neighborhood_radius_km:g} km")
    return 0


def cmd_ingest(args: argparse.Namespace) -> int:
    """Handle the 'ingest' command."""
    settings = get_settings()
    raw_dir = args.raw_dir if args.raw_dir is not None else settings.raw_path
    if not raw_dir.exists():
        print(f"Raw directory not found: {raw_dir}", file=sys.stderr)
        return 1
    if args.debug:
        print(f"Debug mode enabled. Settings: {settings}")

    results = ingest_all(raw_dir=raw_dir, ttl_hours=settings.table_ttl_hours, force=args.force)
    print(f"Ingested: {results}")
    return 0


def cmd_build(_args: argparse.Namespace) -> int:
    """Handle the 'build' command."""
    result = build_all(get_settings())
    if "error" in result:
        print(f"Error: {result['error']}", file=sys.stderr)
        return 1
    print(f"Report: {result['output']}")
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: ingest tables then build report."""
    print("Ingesting tables...")
    status = cmd_ingest(args)
    if status != 0:
        return status

    print("Building report...")
    status = cmd_build(args)

    print("Done.")
    return status


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built report locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port

    report_dir = build_flow.report_dir()
    if not report_dir.exists():
        print("No report directory found. Run 'amlr-survey refresh' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(report_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving report on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "ingest": cmd_ingest,
        "build": cmd_build,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
