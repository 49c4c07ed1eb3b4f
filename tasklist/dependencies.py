"""
FastAPI dependencies that hand route handlers their services.

The database handle and settings are attached to app.state by the
application lifespan; a fresh repository/service pair is built per request.
"""
from fastapi import Request

from tasklist.services import TaskService
from tasklist.storage import TaskRepository


def get_task_service(request: Request) -> TaskService:
    state = request.app.state
    repository = TaskRepository(state.db, refresh_updated_at=state.settings.refresh_updated_at)
    return TaskService(repository)
