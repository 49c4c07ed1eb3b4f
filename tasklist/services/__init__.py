"""
Service layer for business logic.
Services contain pure business logic without HTTP framework dependencies.
"""

from tasklist.services.task_service import TaskService

__all__ = ["TaskService"]
