"""
CLI command - Run the click-based task client.
"""
import argparse
import logging

from tasklist.commands.base import Command

logger = logging.getLogger(__name__)


class CLICommand(Command):
    """Run the command-line task client."""

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument(
            "cli_args",
            nargs=argparse.REMAINDER,
            help="Arguments to pass to the client"
        )

    def run(self) -> int:
        from tasklist.cli import cli

        try:
            cli.main(args=list(self.args.cli_args or []), prog_name="tasklist cli")
            return 0
        except SystemExit as e:
            return e.code if e.code is not None else 0
