"""Command-line interface for railgun-client."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional

from . import constants
from .adapters import SessionRequestExecutor
from .client import RailgunClient
from .config import ClientConfig, load_config
from .errors import RailgunError
from .logging import configure_logging
from .models import Organization, RailgunListOptions

LOGGER = logging.getLogger(__name__)

CommandHandler = Callable[[RailgunClient, argparse.Namespace], Awaitable[object]]

_COMMANDS: Dict[str, CommandHandler] = {
    "list": lambda client, args: client.list_railguns(
        RailgunListOptions(direction=args.direction)
    ),
    "create": lambda client, args: client.create_railgun(args.name),
    "details": lambda client, args: client.railgun_details(args.railgun_id),
    "zones": lambda client, args: client.railgun_zones(args.railgun_id),
    "enable": lambda client, args: client.enable_railgun(args.railgun_id),
    "disable": lambda client, args: client.disable_railgun(args.railgun_id),
    "delete": lambda client, args: client.delete_railgun(args.railgun_id),
    "zone-list": lambda client, args: client.zone_railguns(args.zone_id),
    "zone-details": lambda client, args: client.zone_railgun_details(
        args.zone_id, args.railgun_id
    ),
    "diagnose": lambda client, args: client.test_railgun_connection(
        args.zone_id, args.railgun_id
    ),
    "connect": lambda client, args: client.connect_zone_railgun(
        args.zone_id, args.railgun_id
    ),
    "disconnect": lambda client, args: client.disconnect_zone_railgun(
        args.zone_id, args.railgun_id
    ),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=constants.APP_NAME, description="Manage Cloudflare Railguns"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=constants.DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {constants.DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--org",
        default=None,
        help="Organization id for organization-scoped commands (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List Railguns")
    list_parser.add_argument(
        "--direction", default="", help="Sort direction (asc or desc)"
    )

    create_parser = subparsers.add_parser("create", help="Create a Railgun")
    create_parser.add_argument("name")

    for name, help_text in (
        ("details", "Show a Railgun"),
        ("zones", "List zones using a Railgun"),
        ("enable", "Enable a Railgun"),
        ("disable", "Disable a Railgun"),
        ("delete", "Disable and delete a Railgun"),
    ):
        command_parser = subparsers.add_parser(name, help=help_text)
        command_parser.add_argument("railgun_id")

    zone_list_parser = subparsers.add_parser(
        "zone-list", help="List Railguns available to a zone"
    )
    zone_list_parser.add_argument("zone_id")

    for name, help_text in (
        ("zone-details", "Show a Railgun's status on a zone"),
        ("diagnose", "Test a zone's Railgun connection"),
        ("connect", "Connect a Railgun to a zone"),
        ("disconnect", "Disconnect a Railgun from a zone"),
    ):
        command_parser = subparsers.add_parser(name, help=help_text)
        command_parser.add_argument("zone_id")
        command_parser.add_argument("railgun_id")

    subparsers.add_parser(
        "show-config", help="Print the resolved configuration and exit"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except RailgunError as exc:
        LOGGER.error("Failed to load configuration: %s", exc)
        return 1

    configure_logging(
        config.logging.level,
        log_path=config.logging.path,
        log_network=config.logging.log_network,
    )

    if args.command == "show-config":
        print(f"Configuration loaded from {config.path!s}\n")
        for section in config.raw.sections():
            print(f"[{section}]")
            for key, value in config.raw[section].items():
                if key in {"api_token", "api_key"} and value:
                    value = "********"
                print(f"{key} = {value}")
            print()
        return 0

    if args.command not in _COMMANDS:
        LOGGER.error("Unknown command: %s", args.command)
        return 1

    try:
        result = asyncio.run(run_command(config, args))
    except RailgunError as exc:
        LOGGER.error("Command %s failed: %s", args.command, exc)
        return 1

    if result is None:
        LOGGER.info("Command %s completed", args.command)
        return 0

    print(json.dumps(_as_jsonable(result), indent=2))
    return 0


async def run_command(config: ClientConfig, args: argparse.Namespace) -> object:
    """Run a single subcommand against the configured API."""

    organization = Organization(id=args.org) if args.org else config.api.organization

    async with SessionRequestExecutor.from_config(config.api) as executor:
        client = RailgunClient(executor, organization=organization)
        return await _COMMANDS[args.command](client, args)


def _as_jsonable(result: object) -> object:
    if isinstance(result, list):
        return [_as_jsonable(item) for item in result]
    as_dict = getattr(result, "as_dict", None)
    if callable(as_dict):
        return as_dict()
    return result


if __name__ == "__main__":
    sys.exit(main())
