"""
Task routes, mounted under /api/tasks.

Handlers only translate between HTTP and TaskService. Errors raised by the
service (ValidationError, TaskNotFoundError, StoreError) are turned into
responses by the handlers in tasklist.exceptions.handlers.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from tasklist.dependencies import get_task_service
from tasklist.models.task_models import DeleteResponse, Task, TaskCreate, TaskUpdate
from tasklist.services import TaskService

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=List[Task], summary="List tasks")
def list_tasks(
    completed: Optional[str] = Query(None, description="Filter by completion state ('true' or 'false')"),
    q: Optional[str] = Query(None, description="Case-sensitive title substring"),
    service: TaskService = Depends(get_task_service),
):
    return service.list_tasks(completed=completed, q=q)


@router.get("/{task_id}", response_model=Task, summary="Get a task by ID")
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    return service.get_task(task_id)


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED, summary="Create a task")
def create_task(task_data: TaskCreate, service: TaskService = Depends(get_task_service)):
    return service.create_task(task_data)


@router.patch("/{task_id}", response_model=Task, summary="Update a task")
def update_task(task_id: int, changes: TaskUpdate, service: TaskService = Depends(get_task_service)):
    return service.update_task(task_id, changes)


@router.delete("/{task_id}", response_model=DeleteResponse, summary="Delete a task")
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    return DeleteResponse(message=service.delete_task(task_id))
