"""
Task service - business logic for task operations.
This layer contains no HTTP framework dependencies.
"""
import logging
from typing import List, Optional

from tasklist.models.task_models import Task, TaskCreate, TaskFilter, TaskUpdate
from tasklist.storage import TaskRepository

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Task deleted successfully"


def parse_completed_flag(value: Optional[str]) -> Optional[bool]:
    """
    Interpret the ``completed`` query string.

    Only the exact string "true" means completed; any other provided value
    (including "1" or "True") means not completed. None means no filter.
    """
    if value is None:
        return None
    return value == "true"


class TaskService:
    """Service for task business logic."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def list_tasks(self, completed: Optional[str] = None, q: Optional[str] = None) -> List[Task]:
        """
        List tasks with optional filters.

        Args:
            completed: Raw ``completed`` query value
            q: Title substring; empty string means no title filter

        Returns:
            Tasks ordered newest first
        """
        task_filter = TaskFilter(completed=parse_completed_flag(completed), q=q or None)
        return self.task_repository.list(task_filter)

    def get_task(self, task_id: int) -> Task:
        return self.task_repository.get_by_id(task_id)

    def create_task(self, task_data: TaskCreate) -> Task:
        """Create a task; a missing or null completed flag defaults to False."""
        task = self.task_repository.insert(
            title=task_data.title,
            completed=task_data.completed or False,
        )
        logger.info(f"Created task {task.id}")
        return task

    def update_task(self, task_id: int, changes: TaskUpdate) -> Task:
        task = self.task_repository.update(task_id, changes)
        logger.info(f"Updated task {task_id} ({', '.join(sorted(changes.changes())) or 'no changes'})")
        return task

    def delete_task(self, task_id: int) -> str:
        """Delete a task and return the confirmation message."""
        self.task_repository.delete(task_id)
        logger.info(f"Deleted task {task_id}")
        return DELETED_MESSAGE

    def count_tasks(self) -> int:
        return self.task_repository.count()
