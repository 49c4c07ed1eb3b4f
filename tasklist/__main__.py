#!/usr/bin/env python3
"""
tasklist - main entry point.

Builds the argparse front end from the registered Command subclasses and
runs the selected one inside its init()/cleanup() lifecycle.
"""
import argparse
import logging
import sys
from typing import Dict, Optional

from tasklist.config import get_settings
from tasklist.logging_setup import setup_logging

logger = logging.getLogger(__name__)


_COMMANDS: Dict[str, type] = {}


def register_command(command_class: type) -> None:
    """Register a command class."""
    _COMMANDS[command_class.get_name()] = command_class


def get_command(name: str) -> Optional[type]:
    """Get a registered command class by name."""
    return _COMMANDS.get(name)


def list_commands() -> Dict[str, type]:
    """List all registered commands."""
    return _COMMANDS.copy()


def _register_builtin_commands() -> None:
    from tasklist.commands.server import ServerCommand
    from tasklist.commands.initialize import InitializeCommand
    from tasklist.commands.cli import CLICommand

    for command_class in (ServerCommand, InitializeCommand, CLICommand):
        register_command(command_class)


def build_parser() -> argparse.ArgumentParser:
    _register_builtin_commands()

    parser = argparse.ArgumentParser(
        prog="tasklist",
        description="tasklist - minimal task management service",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to run",
        metavar="COMMAND"
    )
    for name, cmd_class in _COMMANDS.items():
        subparser = subparsers.add_parser(
            name,
            help=cmd_class.get_description(),
            description=cmd_class.get_description()
        )
        cmd_class.add_arguments(subparser)
    return parser


def main(argv=None) -> int:
    """Main entry point for the tasklist package."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(getattr(args, "log_level", None) or settings.log_level, settings.log_format)

    if not args.command:
        parser.print_help()
        return 1

    cmd_class = get_command(args.command)
    if not cmd_class:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    try:
        with cmd_class(args) as cmd:
            return cmd.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
