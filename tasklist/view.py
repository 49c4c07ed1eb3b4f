"""
Task list view controller.

TaskListView holds what a task list screen shows: the active filter, the
tasks last loaded from the API, and transient alerts. It keeps no cache;
every successful mutation reloads the list from the server.

Titles are checked client-side for a minimum length of 3 characters. The
API itself only rejects blank titles, so both checks exist independently.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from tasklist.client import ClientError, TaskClient
from tasklist.models.task_models import Task

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3
ALERT_DISMISS_SECONDS = 3.0

# UI filter name -> completed query value
FILTERS: Dict[str, Optional[bool]] = {
    "all": None,
    "active": False,
    "completed": True,
}

NO_TASKS = "No tasks available"


@dataclass
class Alert:
    message: str
    level: str  # "success" or "error"
    expires_at: float


class TaskListView:
    """Client-side state and actions for the task list."""

    def __init__(
        self,
        client: TaskClient,
        *,
        clock: Callable[[], float] = time.monotonic,
        alert_delay: float = ALERT_DISMISS_SECONDS
    ):
        self.client = client
        self.clock = clock
        self.alert_delay = alert_delay
        self.current_filter = "all"
        self.search: Optional[str] = None
        self.tasks: List[Task] = []
        self.loading = False
        self._alerts: List[Alert] = []

    # -- alerts -------------------------------------------------------------

    def show_alert(self, message: str, level: str) -> None:
        self._alerts.append(Alert(message, level, self.clock() + self.alert_delay))

    @property
    def alerts(self) -> List[Alert]:
        """Alerts that have not yet auto-dismissed."""
        now = self.clock()
        self._alerts = [alert for alert in self._alerts if alert.expires_at > now]
        return list(self._alerts)

    def has_errors(self) -> bool:
        return any(alert.level == "error" for alert in self.alerts)

    # -- loading ------------------------------------------------------------

    def set_filter(self, name: str) -> bool:
        if name not in FILTERS:
            raise ValueError(f"Unknown filter: {name}")
        self.current_filter = name
        return self.load_tasks()

    def load_tasks(self) -> bool:
        """Replace the displayed tasks with a fresh list from the API."""
        self.loading = True
        try:
            self.tasks = self.client.list_tasks(completed=FILTERS[self.current_filter], q=self.search)
            return True
        except ClientError as e:
            logger.error(f"Error loading tasks: {e}")
            self.show_alert("Error loading tasks", "error")
            return False
        finally:
            self.loading = False

    # -- mutations ----------------------------------------------------------

    def _title_too_short(self, title: str) -> bool:
        if len(title) < MIN_TITLE_LENGTH:
            self.show_alert(f"Task must be at least {MIN_TITLE_LENGTH} characters", "error")
            return True
        return False

    def _mutate(self, action: Callable[[], object], success: Optional[str], failure: str) -> bool:
        self.loading = True
        try:
            action()
        except ClientError as e:
            logger.error(f"{failure}: {e}")
            self.show_alert(failure, "error")
            return False
        finally:
            self.loading = False
        if success:
            self.show_alert(success, "success")
        self.load_tasks()
        return True

    def add_task(self, title: Optional[str]) -> bool:
        if not title or not isinstance(title, str):
            self.show_alert("Please enter a valid task", "error")
            return False
        title = title.strip()
        if self._title_too_short(title):
            return False
        return self._mutate(
            lambda: self.client.create_task(title, completed=False),
            "Task added successfully",
            "Error adding task",
        )

    def toggle_task(self, task_id: int, completed: bool) -> bool:
        return self._mutate(
            lambda: self.client.update_task(task_id, completed=completed),
            None,
            "Error updating task",
        )

    def edit_task(self, task_id: int, new_title: Optional[str]) -> bool:
        """Rename a task. None or a blank title cancels the edit."""
        if new_title is None or not new_title.strip():
            return False
        new_title = new_title.strip()
        if self._title_too_short(new_title):
            return False
        return self._mutate(
            lambda: self.client.update_task(task_id, title=new_title),
            "Task updated successfully",
            "Error editing task",
        )

    def delete_task(self, task_id: int, confirmed: bool) -> bool:
        if not confirmed:
            return False
        return self._mutate(
            lambda: self.client.delete_task(task_id),
            "Task deleted successfully",
            "Error deleting task",
        )

    # -- rendering ----------------------------------------------------------

    def find(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def render(self) -> List[str]:
        if not self.tasks:
            return [NO_TASKS]
        return [f"[{'x' if task.completed else ' '}] {task.id:>4}  {task.title}" for task in self.tasks]
