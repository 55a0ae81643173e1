"""Error Mapping — classify any exception into the four-category taxonomy.

Invariants:
    - Classification never inspects error text, only types
    - Cancellation and timeouts are storage failures
    - Anything unrecognized is INTERNAL
"""

import asyncio

from users_api.core.errors import (
    ErrorCategory, InternalError, StorageError, UsersApiError,
)


def classify_error(exc: BaseException) -> ErrorCategory:
    """Map an exception to its ErrorCategory."""
    if isinstance(exc, UsersApiError):
        return exc.category
    if isinstance(exc, (asyncio.CancelledError, asyncio.TimeoutError, TimeoutError)):
        return ErrorCategory.STORAGE
    return ErrorCategory.INTERNAL


def to_api_error(exc: BaseException) -> UsersApiError:
    """Wrap a foreign exception so the boundary always has a typed error."""
    if isinstance(exc, UsersApiError):
        return exc
    if classify_error(exc) is ErrorCategory.STORAGE:
        return StorageError("request cancelled", "request")
    return InternalError()
