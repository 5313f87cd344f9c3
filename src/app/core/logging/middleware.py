"""Request logging middleware.

This module provides middleware for tagging each HTTP request with an ID
and logging requests and responses with structured logging via structlog.
"""

import time
import uuid
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request.

    The request ID is taken from the X-Request-ID header when present
    and generated otherwise. It is added to:
    - request.state.request_id
    - Response header X-Request-ID
    - Structlog context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process the request and add request ID.

        Args:
            request: The incoming request
            call_next: The next middleware/handler

        Returns:
            The response with X-Request-ID header
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs one start and one completion event per request.

    The request ID bound by RequestIdMiddleware reaches these events
    through structlog's contextvars. Completion is logged at ``error``
    for 5xx responses, ``warning`` for 4xx and ``info`` otherwise.
    Health check and documentation paths are not logged.
    """

    QUIET_PATHS: tuple[str, ...] = (
        "/health/",
        "/docs",
        "/redoc",
        "/openapi.json",
    )

    def __init__(self, app: Any, quiet_paths: tuple[str, ...] | None = None) -> None:
        super().__init__(app)
        self.quiet_paths = self.QUIET_PATHS if quiet_paths is None else quiet_paths

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log the request around the downstream handler."""
        path = request.url.path
        if path.startswith(self.quiet_paths):
            return await call_next(request)

        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(
            method=request.method, path=path
        ):
            logger.info(
                "request_started",
                query=request.url.query or None,
                client_ip=get_client_ip(request),
            )
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("request_failed", duration_ms=_elapsed_ms(started))
                raise

            _completion_logger(response.status_code)(
                "request_completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _completion_logger(status_code: int) -> Any:
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    return logger.info


def get_client_ip(request: Request) -> str | None:
    """Best guess at the originating client address.

    Prefers the first hop of X-Forwarded-For, then X-Real-IP, then the
    socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded.split(",", 1)[0].strip()
    if first_hop:
        return first_hop
    return request.headers.get("X-Real-IP") or (
        request.client.host if request.client else None
    )
