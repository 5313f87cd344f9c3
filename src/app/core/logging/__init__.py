"""Logging module with structured logging and request tracking."""

from app.core.logging.config import configure_logging
from app.core.logging.middleware import RequestIdMiddleware, RequestLoggingMiddleware


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "configure_logging",
]
