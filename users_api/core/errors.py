"""Error Hierarchy — typed, categorized exceptions for every pipeline failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Four categories only: validation, resource_not_found, storage, internal
    - Validation and not-found errors are recoverable by the caller; storage errors are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UsersApiError base: one FastAPI handler catches all
    - ConflictError and StorageTimeoutError subclass StorageError: callers that only
      know the four categories still classify them correctly
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Status classification consumed by the transport adapter."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    operation: str | None = None
    request_id: str | None = None


class UsersApiError(Exception):
    """Base exception for all users API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "status": "error",
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "operation": self.context.operation,
                    "request_id": self.context.request_id,
                },
            },
        }


# ─── Validation Errors (400) ────────────────────────────────────

class ValidationError(UsersApiError):
    """Request input failed validation."""
    def __init__(
        self, message: str, field: str, context: ErrorContext | None = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class FirstNameRequiredError(ValidationError):
    """first_name was empty."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "first name is required", "first_name", context,
            code="FIRST_NAME_REQUIRED",
        )


class LastNameRequiredError(ValidationError):
    """last_name was empty."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "last name is required", "last_name", context,
            code="LAST_NAME_REQUIRED",
        )


class PaginationError(ValidationError):
    """page/limit could not be normalized."""
    def __init__(
        self, message: str, field: str, context: ErrorContext | None = None,
    ):
        super().__init__(message, field, context, code="INVALID_PAGINATION")


# ─── Not Found (404) ────────────────────────────────────────────

class ResourceNotFoundError(UsersApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' doesn't exist",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_id = resource_id


class UserNotFoundError(ResourceNotFoundError):
    """No user row matches the id."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__("user", user_id, ctx)


# ─── Storage Errors (5xx / 409) ─────────────────────────────────

class StorageError(UsersApiError):
    """Database operation failed."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
        code: str = "STORAGE_ERROR", http_status: int = 503,
    ):
        super().__init__(
            f"Database {operation} failed: {message}",
            code, ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, http_status,
        )
        self.operation = operation


class ConflictError(StorageError):
    """Constraint violation (duplicate id, NOT NULL, ...)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, context, code="CONFLICT", http_status=409,
        )


class StorageTimeoutError(StorageError):
    """Caller deadline expired before the repository call returned."""
    def __init__(self, operation: str, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"timed out after {timeout_seconds}s", operation, context,
            code="STORAGE_TIMEOUT", http_status=504,
        )
        self.timeout_seconds = timeout_seconds


# ─── Internal (500) ─────────────────────────────────────────────

class InternalError(UsersApiError):
    """Anything that does not fit another category. Opaque to the caller."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context, 500,
        )
