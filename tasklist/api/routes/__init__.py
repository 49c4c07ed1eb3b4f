"""
HTTP route modules.
"""
from tasklist.api.routes.health import router as health_router
from tasklist.api.routes.tasks import router as tasks_router

__all__ = ["health_router", "tasks_router"]
