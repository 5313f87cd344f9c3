"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import get_api_router
from app.config import settings
from app.core.database import Base, async_engine, async_session_factory
from app.core.errors import register_exception_handlers
from app.core.logging import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)
from app.modules.logs.models import ChangeLogEntry  # noqa: F401
from app.modules.users.seed import seed_users


configure_logging(settings)

logger = structlog.get_logger()


async def init_database() -> None:
    """Create missing tables and seed demo users when enabled."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not settings.seed_on_startup:
        return

    async with async_session_factory() as session:
        inserted = await seed_users(session)
        await session.commit()

    if inserted:
        logger.info("demo_users_seeded", count=inserted)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Handles startup and shutdown events.
    """
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
    )

    await init_database()

    yield

    logger.info("application_shutdown")
    await async_engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app_name,
        description="User administration with a paginated change log",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
        # Disable docs in production
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    cors_origins = settings.cors_origins
    if settings.is_development and not cors_origins:
        cors_origins = ["http://localhost:3000", "http://localhost:5173"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    # Added last so it runs first and the logger sees the request ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    # Register exception handlers for RFC 7807 error responses
    register_exception_handlers(app)

    app.include_router(get_api_router())

    return app


def run() -> None:
    """Serve the application with uvicorn using the configured address."""
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.is_development and settings.debug,
        # Requests are logged by RequestLoggingMiddleware
        access_log=False,
    )


if __name__ == "__main__":
    run()
