"""
Exception handlers and standard exceptions for the application.
"""
from tasklist.exceptions.errors import (
    ServiceError,
    ValidationError,
    NotFoundError,
    StoreError,
    TaskNotFoundError,
    to_http_status,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
    "TaskNotFoundError",
    "to_http_status",
]
