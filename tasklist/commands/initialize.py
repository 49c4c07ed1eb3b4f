"""
Initialize command - create or migrate the database without starting the server.
"""
import logging
import os

from tasklist.commands.base import Command
from tasklist.config import get_database_path
from tasklist.database import TaskDatabase, open_database
from tasklist.exceptions import StoreError

logger = logging.getLogger(__name__)


class InitializeCommand(Command):
    """Initialize the database and validate its schema (does not start the server)."""

    @classmethod
    def get_name(cls) -> str:
        return "init"

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument(
            "--database-path",
            type=str,
            default=None,
            help="Path to database file (overrides TASKLIST_DB_PATH and config defaults)"
        )
        parser.add_argument(
            "--validate-only",
            action="store_true",
            help="Only validate an existing database, don't create or migrate it"
        )

    def init(self):
        super().init()
        if self.args.database_path:
            self.db_path = os.path.abspath(self.args.database_path)
        else:
            self.db_path = get_database_path()
        self.db = None
        logger.info(f"Database path: {self.db_path}")

    def run(self) -> int:
        if self.args.validate_only:
            if not os.path.exists(self.db_path):
                logger.error(f"Database does not exist: {self.db_path}")
                return 1
            self.db = TaskDatabase(self.db_path)
            return self._validate_schema()

        try:
            self.db = open_database(self.db_path)
        except StoreError as e:
            logger.error(f"{e.message}: {e.details}")
            return 1

        result = self._validate_schema()
        if result == 0:
            logger.info("Database initialization complete")
        return result

    def _validate_schema(self) -> int:
        try:
            missing = self.db.schema.missing_columns()
        except Exception as e:
            logger.exception(f"Schema validation failed: {e}")
            return 1

        if missing:
            logger.error(f"Missing required columns in tasks table: {', '.join(missing)}")
            return 1
        logger.info("Schema validation passed")
        return 0

    def cleanup(self):
        if getattr(self, "db", None) is not None:
            self.db.close()
        super().cleanup()
