"""
Application factory.

The lifespan runs the database startup routine (authenticate, then
non-destructive schema sync), keeps the handle on app.state for the
request dependencies, and closes it on shutdown.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasklist import __version__
from tasklist.api.routes import health_router, tasks_router
from tasklist.config import Settings, get_settings
from tasklist.database import open_database
from tasklist.exceptions.handlers import setup_exception_handlers
from tasklist.monitoring import RequestContextMiddleware

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to get_settings()

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.db = open_database(settings.database_path, sql_echo=settings.sql_echo)
        logger.info("Endpoints available under /api/tasks")
        try:
            yield
        finally:
            app.state.db.close()

    app = FastAPI(
        title="tasklist",
        description="Minimal task management API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    setup_exception_handlers(app)

    app.include_router(tasks_router)
    app.include_router(health_router)
    return app
