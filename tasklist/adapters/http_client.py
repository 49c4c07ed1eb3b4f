"""
Adapter for HTTP client library (httpx).
Isolates httpx-specific imports to make library replacement easier.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

HTTPError = httpx.HTTPError


class HTTPResponse:
    """Abstracted HTTP response interface."""

    def __init__(self, response):
        """Initialize with underlying response object."""
        self._response = response

    @property
    def status_code(self) -> int:
        """Get HTTP status code."""
        return self._response.status_code

    @property
    def is_success(self) -> bool:
        return 200 <= self._response.status_code < 300

    def json(self) -> Any:
        """Parse response as JSON."""
        return self._response.json()

    @property
    def text(self) -> str:
        """Get response content as text."""
        return self._response.text


class HTTPClientAdapter(ABC):
    """Abstract adapter for HTTP client operations."""

    @abstractmethod
    def get(self, url: str, **kwargs) -> HTTPResponse:
        """Make GET request."""
        pass

    @abstractmethod
    def post(self, url: str, **kwargs) -> HTTPResponse:
        """Make POST request."""
        pass

    @abstractmethod
    def patch(self, url: str, **kwargs) -> HTTPResponse:
        """Make PATCH request."""
        pass

    @abstractmethod
    def delete(self, url: str, **kwargs) -> HTTPResponse:
        """Make DELETE request."""
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class HttpxClientAdapter(HTTPClientAdapter):
    """httpx implementation of HTTPClientAdapter."""

    def __init__(self, timeout: Optional[float] = None, client: Optional[httpx.Client] = None, **kwargs):
        """
        Args:
            timeout: Request timeout in seconds
            client: Existing httpx client to wrap; it is not closed by close()
        """
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout, **kwargs)

    def get(self, url: str, **kwargs) -> HTTPResponse:
        return HTTPResponse(self._client.get(url, **kwargs))

    def post(self, url: str, **kwargs) -> HTTPResponse:
        return HTTPResponse(self._client.post(url, **kwargs))

    def patch(self, url: str, **kwargs) -> HTTPResponse:
        return HTTPResponse(self._client.patch(url, **kwargs))

    def delete(self, url: str, **kwargs) -> HTTPResponse:
        return HTTPResponse(self._client.delete(url, **kwargs))

    def close(self):
        """Close the client if this adapter created it."""
        if self._owns_client:
            self._client.close()


class HTTPClientAdapterFactory:
    """Factory for creating HTTP client adapters."""

    @staticmethod
    def create_client(timeout: Optional[float] = None, **kwargs) -> HTTPClientAdapter:
        """Create synchronous HTTP client adapter."""
        return HttpxClientAdapter(timeout=timeout, **kwargs)
