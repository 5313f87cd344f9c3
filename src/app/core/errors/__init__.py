"""Error handling module with RFC 7807 Problem Details."""

from app.core.errors.exceptions import (
    AppException,
    NotFoundError,
    OutOfRangeError,
    ValidationError,
)
from app.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    # Handlers
    "FieldError",
    "NotFoundError",
    "OutOfRangeError",
    "ProblemDetail",
    "ValidationError",
    "register_exception_handlers",
]
