"""
HTTP client for the task API.

TaskClient wraps the five /api/tasks endpoints. Any non-2xx response or
transport failure is raised as ClientError; there are no retries.
"""
import logging
from typing import Any, List, Optional

from tasklist.adapters import HTTPClientAdapter, HTTPClientAdapterFactory, HTTPError, HTTPResponse
from tasklist.config import get_settings
from tasklist.models.task_models import Task

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """Raised when a request to the task API fails.

    Attributes:
        message: Error message from the server, or the transport error text
        status_code: HTTP status code, None for transport failures
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class TaskClient:
    """Client for the task API."""

    def __init__(self, base_url: Optional[str] = None, http_client: Optional[HTTPClientAdapter] = None):
        """
        Args:
            base_url: URL of the tasks collection, e.g. http://localhost:8000/api/tasks
            http_client: HTTP adapter; created from settings when omitted
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.http = http_client or HTTPClientAdapterFactory.create_client(timeout=settings.client_timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.http.close()

    def _url(self, task_id: Optional[int] = None) -> str:
        if task_id is None:
            return self.base_url
        return f"{self.base_url}/{task_id}"

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response: HTTPResponse = getattr(self.http, method)(url, **kwargs)
        except HTTPError as e:
            logger.error(f"{method.upper()} {url} failed: {e}")
            raise ClientError(str(e)) from e

        if not response.is_success:
            raise ClientError(self._error_message(response), status_code=response.status_code)
        return response.json()

    @staticmethod
    def _error_message(response: HTTPResponse) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP error {response.status_code}"
        if isinstance(body, dict) and body.get("error"):
            return body["error"]
        return f"HTTP error {response.status_code}"

    def list_tasks(self, completed: Optional[bool] = None, q: Optional[str] = None) -> List[Task]:
        params = {}
        if completed is not None:
            params["completed"] = "true" if completed else "false"
        if q:
            params["q"] = q
        data = self._request("get", self._url(), params=params)
        return [Task.model_validate(item) for item in data]

    def get_task(self, task_id: int) -> Task:
        return Task.model_validate(self._request("get", self._url(task_id)))

    def create_task(self, title: str, completed: bool = False) -> Task:
        data = self._request("post", self._url(), json={"title": title, "completed": completed})
        return Task.model_validate(data)

    def update_task(self, task_id: int, **changes: Any) -> Task:
        """Send a partial update containing only the given fields."""
        data = self._request("patch", self._url(task_id), json=changes)
        return Task.model_validate(data)

    def delete_task(self, task_id: int) -> str:
        return self._request("delete", self._url(task_id))["message"]
