"""
Exception hierarchy for the tasklist service.

Every error raised by the store or the service layer inherits from
ServiceError, so the HTTP layer can translate it with a single handler:

- ValidationError -> 400
- NotFoundError   -> 404
- StoreError      -> 500
"""
from typing import Any


# ============================================================================
# Base Exception Class
# ============================================================================

class ServiceError(Exception):
    """Base exception for all tasklist errors.

    Attributes:
        message: Human-readable error message
        request_id: Optional request ID for tracing
        context: Dictionary of additional context
        original_error: Optional original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        *,
        request_id: str | None = None,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id
        self.context = context or {}
        self.original_error = original_error

    @property
    def details(self) -> str | None:
        """Text of the underlying error, if any."""
        if self.original_error is None:
            return None
        return str(self.original_error)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization.

        Returns:
            Dictionary with ``error`` and ``error_type`` keys, plus
            ``details``, ``context`` and ``request_id`` when present.
        """
        result = {
            "error": self.message,
            "error_type": self.__class__.__name__,
        }
        if self.details:
            result["details"] = self.details
        if self.context:
            result["context"] = self.context
        if self.request_id:
            result["request_id"] = self.request_id
        return result


# ============================================================================
# Common Exception Types
# ============================================================================

class ValidationError(ServiceError):
    """Raised when input validation fails.

    Attributes:
        field: Optional field name that failed validation
        value: Optional value that failed validation
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        request_id: str | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, request_id=request_id, context=context)
        self.field = field
        self.value = value
        if field is not None:
            self.context.setdefault("field", field)
        if value is not None:
            self.context.setdefault("value", repr(value))


class NotFoundError(ServiceError):
    """Raised when a requested resource is not found.

    Attributes:
        resource_type: Type of resource (e.g., "Task")
        resource_id: ID of the resource that was not found
    """

    def __init__(
        self,
        resource_type: str,
        resource_id: str | int,
        *,
        message: str | None = None,
        request_id: str | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            message = f"{resource_type} with ID '{resource_id}' not found"

        super().__init__(message, request_id=request_id, context=context)
        self.resource_type = resource_type
        self.resource_id = str(resource_id)
        self.context.setdefault("resource_type", resource_type)
        self.context.setdefault("resource_id", str(resource_id))


class StoreError(ServiceError):
    """Raised when a persistence operation fails unexpectedly.

    Attributes:
        operation: Optional store operation that failed (e.g., "insert", "list")
    """

    def __init__(
        self,
        message: str,
        *,
        original_error: Exception | None = None,
        operation: str | None = None,
        request_id: str | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, request_id=request_id, context=context, original_error=original_error)
        self.operation = operation
        if operation is not None:
            self.context.setdefault("operation", operation)


class TaskNotFoundError(NotFoundError):
    """Raised when a task is not found."""

    def __init__(self, task_id: str | int, **kwargs):
        super().__init__("Task", task_id, **kwargs)
        self.task_id = task_id


# ============================================================================
# Helper Functions for HTTP Integration
# ============================================================================

_STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    NotFoundError: 404,
    StoreError: 500,
}


def to_http_status(exc: ServiceError, *, default_status_code: int = 500) -> int:
    """Map a ServiceError to an HTTP status code.

    Subclasses resolve through their MRO, so TaskNotFoundError maps to 404.
    """
    for klass in type(exc).__mro__:
        if klass in _STATUS_CODES:
            return _STATUS_CODES[klass]
    return default_status_code


__all__ = [
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
    "TaskNotFoundError",
    "to_http_status",
]
