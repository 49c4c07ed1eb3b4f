"""
Schema management for database initialization.

Schema sync is non-destructive: tables and indexes are created only when
missing, and columns missing from an older database file are added in place.
Existing rows are never dropped.
"""
import logging
import re
from datetime import datetime, UTC
from typing import Any, Callable, Dict, List

from tasklist.db_adapter import BaseDatabaseAdapter

logger = logging.getLogger(__name__)

TASKS_TABLE = "tasks"

# Column name -> definition used when the column has to be added to an
# existing table. ALTER TABLE cannot add NOT NULL columns without a constant
# default, so timestamps are added nullable and backfilled.
TASK_COLUMNS: Dict[str, str] = {
    "id": "INTEGER PRIMARY KEY AUTOINCREMENT",
    "title": "TEXT NOT NULL",
    "completed": "INTEGER NOT NULL DEFAULT 0",
    "created_at": "TIMESTAMP",
    "updated_at": "TIMESTAMP",
}

TASK_INDEXES: Dict[str, str] = {
    "idx_tasks_created_at": "created_at",
    "idx_tasks_completed": "completed",
}


def normalize_timestamp(value: Any) -> str:
    """
    Rewrite a stored timestamp as ISO-8601 with an explicit offset.

    Accepts the space-separated form older databases hold, e.g.
    '2024-01-01 12:00:00.000 +00:00'. Naive values are taken as UTC.

    Raises:
        ValueError: If the value is not a recognizable timestamp
    """
    text = re.sub(r"\s+([+-]\d{2}:?\d{2})$", r"\1", str(value).strip())
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.isoformat()


class SchemaManager:
    """Manages database schema initialization and creation."""

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        get_connection: Callable[[], Any],
        execute_with_logging: Callable[..., Any]
    ):
        """
        Initialize SchemaManager.

        Args:
            adapter: Database adapter instance
            get_connection: Function to get database connection
            execute_with_logging: Function to execute queries with logging
        """
        self.adapter = adapter
        self._get_connection = get_connection
        self._execute_with_logging = execute_with_logging

    def initialize_schema(self):
        """
        Create or migrate the tasks schema.

        Runs in a single transaction: table, missing columns, timestamp
        backfill, then indexes.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            self._create_tasks_schema(cursor)
            self._add_missing_columns(cursor)
            self._backfill_timestamps(cursor)
            self._normalize_timestamps(cursor)
            self._create_indexes(cursor)
            conn.commit()
            logger.info("Database schema synchronized")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to initialize schema: {e}")
            raise
        finally:
            self.adapter.close(conn)

    def missing_columns(self) -> List[str]:
        """Return required task columns absent from the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            columns = self.adapter.list_columns(cursor, TASKS_TABLE)
            return [name for name in TASK_COLUMNS if name not in columns]
        finally:
            self.adapter.close(conn)

    def _create_tasks_schema(self, cursor):
        """Create tasks table."""
        query = """
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL CHECK(length(trim(title)) > 0),
                completed INTEGER NOT NULL DEFAULT 0 CHECK(completed IN (0, 1)),
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL
            )
        """
        self._execute_with_logging(cursor, query)

    def _add_missing_columns(self, cursor):
        columns = self.adapter.list_columns(cursor, TASKS_TABLE)
        for name, definition in TASK_COLUMNS.items():
            if name in columns:
                continue
            if "PRIMARY KEY" in definition:
                raise RuntimeError(f"Table {TASKS_TABLE} has no {name} column and cannot be migrated")
            logger.info(f"Adding missing column {TASKS_TABLE}.{name}")
            self._execute_with_logging(
                cursor, f"ALTER TABLE {TASKS_TABLE} ADD COLUMN {name} {definition}"
            )

    def _backfill_timestamps(self, cursor):
        now = datetime.now(UTC).isoformat()
        self._execute_with_logging(
            cursor,
            "UPDATE tasks SET created_at = ? WHERE created_at IS NULL",
            (now,)
        )
        self._execute_with_logging(
            cursor,
            "UPDATE tasks SET updated_at = created_at WHERE updated_at IS NULL"
        )

    def _create_indexes(self, cursor):
        for index_name, column in TASK_INDEXES.items():
            self._execute_with_logging(
                cursor,
                f"CREATE INDEX IF NOT EXISTS {index_name} ON {TASKS_TABLE}({column})"
            )

    def _normalize_timestamps(self, cursor):
        self._execute_with_logging(
            cursor,
            "SELECT id, created_at, updated_at FROM tasks "
            "WHERE created_at NOT LIKE '____-__-__T%' OR updated_at NOT LIKE '____-__-__T%'"
        )
        for row in cursor.fetchall():
            try:
                created_at = normalize_timestamp(row["created_at"])
                updated_at = normalize_timestamp(row["updated_at"])
            except ValueError:
                logger.warning(f"Task {row['id']} has unreadable timestamps, leaving them unchanged")
                continue
            self._execute_with_logging(
                cursor,
                "UPDATE tasks SET created_at = ?, updated_at = ? WHERE id = ?",
                (created_at, updated_at, row["id"])
            )
            logger.info(f"Normalized timestamps of task {row['id']}")
