"""
Data models shared by the store, the API and the client.
"""
from tasklist.models.task_models import (
    Task,
    TaskCreate,
    TaskUpdate,
    TaskFilter,
    DeleteResponse,
)

__all__ = ["Task", "TaskCreate", "TaskUpdate", "TaskFilter", "DeleteResponse"]
