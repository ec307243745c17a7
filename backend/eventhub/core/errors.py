"""
Domain errors raised by the event and registration services.

Services never build HTTP responses. Each error carries a stable code plus
structured detail, and the API layer decides how to present it
(see eventhub.api.errors).
"""

from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncIterator, Sequence

from sqlalchemy.exc import SQLAlchemyError

from eventhub.core.logging import get_logger
from eventhub.core.metrics import record_storage_error

logger = get_logger(__name__)


class ErrorCode(Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    STORAGE_ERROR = "STORAGE_ERROR"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> dict[str, Any]:
        """Structured context for callers, beyond the message."""
        return {}

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Required field missing or malformed."""

    code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields = list(fields)

    @property
    def detail(self) -> dict[str, Any]:
        return {"fields": self.fields} if self.fields else {}


class EventNotFoundError(DomainError):
    code = ErrorCode.EVENT_NOT_FOUND

    def __init__(self, event_id: int) -> None:
        super().__init__("Event not found")
        self.event_id = event_id


class CapacityExceededError(DomainError):
    """Raised when a registration asks for more tickets than are left."""

    code = ErrorCode.CAPACITY_EXCEEDED

    def __init__(self, event_id: int, requested: int, remaining: int) -> None:
        super().__init__(f"Only {remaining} tickets available for this event")
        self.event_id = event_id
        self.requested = requested
        self.remaining = remaining

    @property
    def detail(self) -> dict[str, Any]:
        return {"remaining": self.remaining, "requested": self.requested}


class StorageError(DomainError):
    """Any failure reported by the persistence layer. Never retried."""

    code = ErrorCode.STORAGE_ERROR

    def __init__(self, operation: str) -> None:
        super().__init__(f"Storage failure during {operation}")
        self.operation = operation


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise SQLAlchemy failures inside the block as StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        record_storage_error(operation)
        logger.error("storage_error", operation=operation, error=str(exc))
        raise StorageError(operation) from exc
