"""
Pytest configuration and shared fixtures.

Every test gets its own temporary SQLite file. API tests run the real
application (lifespan included) through FastAPI's TestClient.
"""
import os
import shutil
import tempfile

import pytest
from fastapi.testclient import TestClient

from tasklist.adapters import HttpxClientAdapter
from tasklist.app import create_app
from tasklist.client import TaskClient
from tasklist.config import Settings, get_settings
from tasklist.database import open_database
from tasklist.storage import TaskRepository

API_URL = "http://testserver/api/tasks"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables and cached settings out of the tests."""
    for name in ("TASKLIST_DB_PATH", "DATABASE_PATH", "PORT", "TASKLIST_API_URL", "REFRESH_UPDATED_AT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_db_dir():
    """Create a temporary directory for the test database."""
    temp_dir = tempfile.mkdtemp(prefix="tasklist_test_")
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def temp_db_path(temp_db_dir):
    return os.path.join(temp_db_dir, "test_tasks.sqlite")


@pytest.fixture
def db(temp_db_path):
    """Ready database handle."""
    handle = open_database(temp_db_path)
    yield handle
    handle.close()


@pytest.fixture
def repository(db):
    return TaskRepository(db)


@pytest.fixture
def settings(temp_db_path):
    return Settings(database_path=temp_db_path, _env_file=None)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api(client):
    """TaskClient talking to the in-process application."""
    return TaskClient(base_url=API_URL, http_client=HttpxClientAdapter(client=client))


@pytest.fixture
def make_task(client):
    """Create tasks through the API; returns the created task JSON."""
    def _make_task(title="Buy milk", **fields):
        response = client.post("/api/tasks", json={"title": title, **fields})
        assert response.status_code == 201, response.text
        return response.json()
    return _make_task
