"""
Liveness endpoint.
"""
from fastapi import APIRouter, Depends

from tasklist.dependencies import get_task_service
from tasklist.services import TaskService

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(service: TaskService = Depends(get_task_service)):
    return {"status": "ok", "tasks": service.count_tasks()}
