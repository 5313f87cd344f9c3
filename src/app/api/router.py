"""Root API router: health checks, application info and feature modules."""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import func, select, text

from app.api.dependencies import DBSession
from app.config import settings
from app.modules import discover_modules, module_info
from app.modules.users.models import User


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str


class ReadinessResponse(BaseModel):
    """Readiness response with one result per check."""

    status: str
    checks: dict[str, str]


MODULES = discover_modules()

api_router = APIRouter()

# Health checks and info live outside /api/v1
health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns 200 while the process is running.",
)
async def liveness() -> HealthResponse:
    """Liveness probe endpoint."""
    return HealthResponse(status="alive")


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Checks the database connection and that the schema exists.",
)
async def readiness(db: DBSession) -> JSONResponse:
    """Readiness probe endpoint."""
    checks: dict[str, str] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = str(e)

    if checks["database"] == "ok":
        try:
            await db.execute(select(func.count()).select_from(User))
            checks["schema"] = "ok"
        except Exception as e:
            checks["schema"] = str(e)

    ready = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if ready else "degraded",
            "checks": checks,
        },
    )


@health_router.get(
    "/info",
    summary="Application info",
    description="Returns application metadata and the mounted feature modules.",
)
async def info() -> dict[str, Any]:
    """Application info endpoint."""
    return {
        "app": settings.app_name,
        "environment": settings.environment,
        "debug": settings.debug,
        "log_page_size": settings.log_page_size,
        "modules": [module_info(m) for m in MODULES],
    }


v1_router = APIRouter(prefix="/api/v1")
for module in MODULES:
    v1_router.include_router(module.router)

api_router.include_router(health_router)
api_router.include_router(v1_router)
