"""
Server command - Run the web server.
"""
import logging

import uvicorn

from tasklist.commands.base import Command
from tasklist.config import get_settings

logger = logging.getLogger(__name__)


class ServerCommand(Command):
    """Run the tasklist API server."""

    @classmethod
    def add_arguments(cls, parser):
        settings = get_settings()
        parser.add_argument(
            "--host",
            default=settings.host,
            help=f"Host to bind to (default: {settings.host} or HOST env var)"
        )
        parser.add_argument(
            "--port",
            type=int,
            default=settings.port,
            help=f"Port to bind to (default: {settings.port} or PORT env var)"
        )
        parser.add_argument(
            "--log-level",
            default=settings.log_level.lower(),
            type=str.lower,
            choices=["debug", "info", "warning", "error", "critical"],
            help="Log level (default: INFO or LOG_LEVEL env var)"
        )
        parser.add_argument(
            "--reload",
            action="store_true",
            help="Enable auto-reload (development mode)"
        )
        parser.add_argument(
            "--init-only",
            action="store_true",
            help="Initialize the database, then exit without starting the server"
        )

    def run(self) -> int:
        if self.args.init_only:
            from argparse import Namespace
            from tasklist.commands.initialize import InitializeCommand

            with InitializeCommand(Namespace(database_path=None, validate_only=False)) as init_cmd:
                return init_cmd.run()

        # An import string is required for --reload; the factory builds the
        # app from settings in the worker process.
        try:
            logger.info(f"Starting server on http://{self.args.host}:{self.args.port}")
            uvicorn.run(
                "tasklist.app:create_app",
                factory=True,
                host=self.args.host,
                port=self.args.port,
                log_level=self.args.log_level,
                access_log=False,
                reload=self.args.reload,
                timeout_graceful_shutdown=30,
            )
            return 0
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt, shutting down...")
            return 130

    def cleanup(self):
        super().cleanup()
        logger.info("Server stopped")
