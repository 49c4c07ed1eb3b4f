"""
Adapters for third-party libraries.
"""
from tasklist.adapters.http_client import (
    HTTPClientAdapter,
    HTTPClientAdapterFactory,
    HttpxClientAdapter,
    HTTPResponse,
    HTTPError,
)

__all__ = [
    "HTTPClientAdapter",
    "HTTPClientAdapterFactory",
    "HttpxClientAdapter",
    "HTTPResponse",
    "HTTPError",
]
