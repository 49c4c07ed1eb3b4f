"""
Database adapter abstraction layer.

Only SQLite is supported; the adapter keeps driver-specific details
(connection flags, pragmas, last-insert-id lookup) out of the repositories.
"""
import logging
import sqlite3
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)


class BaseDatabaseAdapter(ABC):
    """Abstract base class for database adapters."""

    def __init__(self, connection_string: str):
        """
        Initialize database adapter.

        Args:
            connection_string: Database connection string (file path for SQLite)
        """
        self.connection_string = connection_string

    @abstractmethod
    def connect(self):
        """Get a database connection."""
        pass

    @abstractmethod
    def close(self, conn):
        """Close a database connection."""
        pass

    @abstractmethod
    def execute(self, cursor, query: str, params: Optional[Tuple] = None):
        """Execute a query with parameters."""
        pass

    @abstractmethod
    def get_last_insert_id(self, cursor) -> int:
        """Get the last inserted row ID."""
        pass

    @abstractmethod
    def list_columns(self, cursor, table_name: str) -> dict[str, Any]:
        """Return the columns of a table keyed by name."""
        pass


class SQLiteAdapter(BaseDatabaseAdapter):
    """SQLite database adapter."""

    def connect(self):
        conn = sqlite3.connect(self.connection_string)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        # Title search uses LIKE and must match case exactly
        conn.execute("PRAGMA case_sensitive_like = ON")
        return conn

    def close(self, conn):
        conn.close()

    def execute(self, cursor, query: str, params: Optional[Tuple] = None):
        if params:
            return cursor.execute(query, params)
        else:
            return cursor.execute(query)

    def get_last_insert_id(self, cursor) -> int:
        return cursor.lastrowid

    def list_columns(self, cursor, table_name: str) -> dict[str, Any]:
        cursor.execute(f"PRAGMA table_info({table_name})")
        return {row[1]: row for row in cursor.fetchall()}


def get_database_adapter(connection_string: Optional[str] = None) -> BaseDatabaseAdapter:
    """
    Factory function to get the database adapter.

    Args:
        connection_string: Path to the SQLite file. If None, uses settings.

    Returns:
        Database adapter instance
    """
    if connection_string is None:
        from tasklist.config import get_database_path
        connection_string = get_database_path()
    return SQLiteAdapter(connection_string)
