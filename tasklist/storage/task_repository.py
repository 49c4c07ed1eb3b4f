"""
Repository for task persistence.

All reads and writes of the tasks table go through TaskRepository. Each
operation opens its own connection from the TaskDatabase handle and closes
it before returning. There is no locking: concurrent updates to the same
row are last-write-wins.
"""
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, UTC
from typing import TYPE_CHECKING, Any, Iterator, List, Optional

from tasklist.exceptions import StoreError, TaskNotFoundError, ValidationError
from tasklist.models.task_models import Task, TaskFilter, TaskUpdate

if TYPE_CHECKING:
    from tasklist.database import TaskDatabase

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(UTC).isoformat()


def validate_title(title: Any) -> str:
    """Titles must be text and not blank."""
    if not isinstance(title, str):
        raise ValidationError("Title is required and must be text", field="title", value=title)
    if not title.strip():
        raise ValidationError("Title must not be empty", field="title", value=title)
    return title


def validate_completed(completed: Any) -> bool:
    if not isinstance(completed, bool):
        raise ValidationError("Completed must be a boolean", field="completed", value=completed)
    return completed


# SQLite INTEGER is a signed 64-bit value
MIN_TASK_ID = -2 ** 63
MAX_TASK_ID = 2 ** 63 - 1


def check_task_id(task_id: int) -> int:
    """Ids outside the SQLite INTEGER range cannot exist in the store."""
    if not MIN_TASK_ID <= task_id <= MAX_TASK_ID:
        raise TaskNotFoundError(task_id)
    return task_id


class TaskRepository:
    """Repository for task CRUD operations."""

    def __init__(self, db: "TaskDatabase", *, refresh_updated_at: bool = True):
        """
        Initialize TaskRepository.

        Args:
            db: Ready database handle (see open_database)
            refresh_updated_at: Rewrite updated_at on every update. When
                False, updated_at keeps its creation value.
        """
        self.db = db
        self.refresh_updated_at = refresh_updated_at

    @contextmanager
    def _connection(self, operation: str) -> Iterator[Any]:
        """Yield a connection, translating driver errors into StoreError."""
        try:
            conn = self.db._get_connection()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to {operation} task", original_error=e, operation=operation) from e
        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error during {operation}: {e}", exc_info=True)
            raise StoreError(f"Failed to {operation} task", original_error=e, operation=operation) from e
        finally:
            self.db.adapter.close(conn)

    def _fetch(self, cursor, task_id: int) -> Optional[Task]:
        self.db._execute_with_logging(cursor, "SELECT * FROM tasks WHERE id = ?", (task_id,))
        row = cursor.fetchone()
        return Task.from_row(row) if row else None

    def insert(self, title: Any, completed: Any = False) -> Task:
        """
        Create a task.

        Args:
            title: Task title; must be non-blank text
            completed: Initial completion flag

        Returns:
            The stored task with its assigned id and timestamps

        Raises:
            ValidationError: If title or completed is invalid
            StoreError: If the insert fails
        """
        validate_title(title)
        validate_completed(completed)

        now = _now()
        with self._connection("insert") as conn:
            cursor = conn.cursor()
            self.db._execute_with_logging(
                cursor,
                "INSERT INTO tasks (title, completed, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (title, int(completed), now, now)
            )
            task_id = self.db.adapter.get_last_insert_id(cursor)
            conn.commit()
            task = self._fetch(cursor, task_id)

        logger.debug(f"Inserted task {task_id}")
        return task

    def get_by_id(self, task_id: int) -> Task:
        """
        Get a task by ID.

        Raises:
            TaskNotFoundError: If no task has this ID
        """
        check_task_id(task_id)
        with self._connection("get") as conn:
            task = self._fetch(conn.cursor(), task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def list(self, task_filter: Optional[TaskFilter] = None) -> List[Task]:
        """
        List tasks, newest first.

        Args:
            task_filter: Optional conjunction of a completed flag and a
                case-sensitive title substring (SQL LIKE wildcards apply)

        Returns:
            Matching tasks ordered by created_at DESC
        """
        conditions = []
        params: List[Any] = []

        if task_filter is not None:
            if task_filter.completed is not None:
                conditions.append("completed = ?")
                params.append(int(task_filter.completed))
            if task_filter.q:
                conditions.append("title LIKE ?")
                params.append(f"%{task_filter.q}%")

        query = "SELECT * FROM tasks"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY created_at DESC, id DESC"

        with self._connection("list") as conn:
            cursor = conn.cursor()
            self.db._execute_with_logging(cursor, query, tuple(params))
            return [Task.from_row(row) for row in cursor.fetchall()]

    def update(self, task_id: int, changes: TaskUpdate) -> Task:
        """
        Apply a partial update.

        Only fields present in ``changes`` are written. An empty change set
        returns the task as stored.

        Raises:
            ValidationError: If a provided field has the wrong type or a blank title
            TaskNotFoundError: If no task has this ID
            StoreError: If the update fails
        """
        fields = changes.changes()
        if "title" in fields:
            validate_title(fields["title"])
        if "completed" in fields:
            fields["completed"] = int(validate_completed(fields["completed"]))

        check_task_id(task_id)
        with self._connection("update") as conn:
            cursor = conn.cursor()
            if self._fetch(cursor, task_id) is None:
                raise TaskNotFoundError(task_id)

            if fields:
                if self.refresh_updated_at:
                    fields["updated_at"] = _now()
                assignments = ", ".join(f"{name} = ?" for name in fields)
                self.db._execute_with_logging(
                    cursor,
                    f"UPDATE tasks SET {assignments} WHERE id = ?",
                    (*fields.values(), task_id)
                )
                conn.commit()
                logger.debug(f"Updated task {task_id}: {sorted(changes.changes())}")

            return self._fetch(cursor, task_id)

    def delete(self, task_id: int) -> None:
        """
        Permanently remove a task.

        Raises:
            TaskNotFoundError: If no task has this ID
        """
        check_task_id(task_id)
        with self._connection("delete") as conn:
            cursor = conn.cursor()
            self.db._execute_with_logging(cursor, "DELETE FROM tasks WHERE id = ?", (task_id,))
            if cursor.rowcount == 0:
                raise TaskNotFoundError(task_id)
            conn.commit()
        logger.debug(f"Deleted task {task_id}")

    def count(self) -> int:
        with self._connection("count") as conn:
            cursor = conn.cursor()
            self.db._execute_with_logging(cursor, "SELECT COUNT(*) FROM tasks")
            return cursor.fetchone()[0]
