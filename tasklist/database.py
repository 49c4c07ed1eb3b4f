"""
Process-wide database handle.

TaskDatabase owns the connection settings for the SQLite file. Connections
are opened per operation and closed afterwards; the handle itself is created
once at startup by open_database(), which authenticates and syncs the schema
before returning it.
"""
import logging
import sqlite3
from typing import Any, Optional, Tuple

from tasklist.config import ensure_database_directory, get_settings
from tasklist.db_adapter import BaseDatabaseAdapter, get_database_adapter
from tasklist.exceptions import StoreError
from tasklist.storage.schema import SchemaManager

logger = logging.getLogger(__name__)


class TaskDatabase:
    """Handle to the task store."""

    def __init__(
        self,
        db_path: str,
        *,
        sql_echo: bool = False,
        adapter: Optional[BaseDatabaseAdapter] = None
    ):
        """
        Args:
            db_path: Path to the SQLite database file
            sql_echo: Log every statement at DEBUG level
            adapter: Database adapter (defaults to SQLite for db_path)
        """
        self.db_path = db_path
        self.sql_echo = sql_echo
        self.adapter = adapter or get_database_adapter(db_path)
        self._closed = False
        self.schema = SchemaManager(
            adapter=self.adapter,
            get_connection=self._get_connection,
            execute_with_logging=self._execute_with_logging,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def _get_connection(self):
        if self._closed:
            raise StoreError("Database handle is closed", operation="connect")
        return self.adapter.connect()

    def _execute_with_logging(self, cursor, query: str, params: Optional[Tuple] = None) -> Any:
        if self.sql_echo:
            logger.debug(f"SQL: {' '.join(query.split())} params={params}")
        return self.adapter.execute(cursor, query, params)

    def authenticate(self) -> None:
        """Verify the database file can be opened and queried."""
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                self._execute_with_logging(cursor, "SELECT 1")
                cursor.fetchone()
            finally:
                self.adapter.close(conn)
        except sqlite3.Error as e:
            raise StoreError(
                f"Unable to connect to database at {self.db_path}",
                original_error=e,
                operation="authenticate",
            ) from e
        logger.info(f"Connection to SQLite established ({self.db_path})")

    def sync(self) -> None:
        """Create or migrate the schema without touching existing rows."""
        try:
            self.schema.initialize_schema()
        except sqlite3.Error as e:
            raise StoreError(
                "Schema synchronization failed",
                original_error=e,
                operation="sync",
            ) from e

    def close(self) -> None:
        """Mark the handle closed; later operations raise StoreError."""
        if not self._closed:
            self._closed = True
            logger.info("Database handle closed")


def open_database(db_path: Optional[str] = None, *, sql_echo: Optional[bool] = None) -> TaskDatabase:
    """
    Startup routine: build the handle, authenticate, then sync the schema.

    Args:
        db_path: Path to the database file. If None, uses settings.
        sql_echo: Override the SQL_ECHO setting.

    Returns:
        A ready TaskDatabase

    Raises:
        StoreError: If the database cannot be opened or migrated
    """
    settings = get_settings()
    if db_path is None:
        db_path = settings.database_path
    if sql_echo is None:
        sql_echo = settings.sql_echo

    ensure_database_directory(db_path)
    db = TaskDatabase(db_path, sql_echo=sql_echo)
    db.authenticate()
    db.sync()
    return db
