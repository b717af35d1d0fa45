"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys

from weather_cli import __version__
from weather_cli.config import configure_logging, get_settings
from weather_cli.dispatcher import get_weather
from weather_cli.errors import WeatherError
from weather_cli.providers.registry import describe, parse_provider_name
from weather_cli.renderers.providers import build_provider_list
from weather_cli.renderers.report import build_report_json, build_report_table
from weather_cli.schemas import WeatherQuery
from weather_cli.services.http import create_session
from weather_cli.store import ConfigStore

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather",
        description="A quick and easy CLI tool for fetching weather data from various providers",
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
        help="Enable debug logging on stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("provider-list", help="Get a full list of supported providers")

    configure_parser = subparsers.add_parser(
        "configure", help="Configure a provider with the given credentials"
    )
    configure_parser.add_argument("provider", help="The provider to be configured")
    configure_parser.add_argument("api_key", help="API key issued by the provider")
    configure_parser.add_argument(
        "-u",
        "--url",
        type=str,
        default=None,
        help="Base URL of the provider API (default: the provider's public endpoint)",
    )

    select_parser = subparsers.add_parser("select-provider", help="Select an available provider")
    select_parser.add_argument("provider", help="The provider to be selected")

    get_parser = subparsers.add_parser("get", help="Get weather information")
    get_parser.add_argument("address", help="The address for which weather is requested")
    get_parser.add_argument(
        "-d",
        "--date",
        type=str,
        default=None,
        help="Date for historical weather (e.g. 2023-10-11)",
    )
    get_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of a table",
    )
    get_parser.add_argument(
        "-p",
        "--provider",
        type=str,
        default=None,
        help="Provider to use instead of the selected one",
    )

    return parser


def get_store() -> ConfigStore:
    """Config store at the configured directory."""
    return ConfigStore(get_settings().config_dir)


def cmd_provider_list(_args: argparse.Namespace) -> int:
    """Handle the 'provider-list' command."""
    store = get_store()
    print(build_provider_list(store.read_selected(), store.configured()))
    return 0


def cmd_configure(args: argparse.Namespace) -> int:
    """Handle the 'configure' command."""
    provider = parse_provider_name(args.provider)
    store = get_store()
    config = store.configure(provider, args.api_key, url=args.url)
    name = describe(provider).cli_name
    print(f"Provider '{name}' was successfully configured ({config.url})")
    return 0


def cmd_select_provider(args: argparse.Namespace) -> int:
    """Handle the 'select-provider' command."""
    provider = parse_provider_name(args.provider)
    get_store().select(provider)
    print(f"Provider '{describe(provider).cli_name}' was successfully selected")
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Handle the 'get' command: fetch, normalize and print one report."""
    settings = get_settings()
    query = WeatherQuery.from_cli(args.address, args.date)
    override = parse_provider_name(args.provider) if args.provider else None

    report = get_weather(
        query,
        override,
        store=get_store(),
        http=create_session(timeout=settings.http_timeout),
    )

    if args.json:
        print(build_report_json(report))
    else:
        print(build_report_table(report))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    try:
        settings = get_settings()
    except WeatherError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    configure_logging(debug=args.debug or settings.debug)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "provider-list": cmd_provider_list,
        "configure": cmd_configure,
        "select-provider": cmd_select_provider,
        "get": cmd_get,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except WeatherError as exc:
        logger.debug("Command %s failed: %s", args.command, type(exc).__name__)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
