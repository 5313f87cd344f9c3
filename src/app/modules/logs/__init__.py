"""Logs module exposing the user change log."""

from fastapi import APIRouter


router = APIRouter(prefix="/logs", tags=["logs"])

# Import routes to register them (must be after router is defined)
from app.modules.logs import routes  # noqa: F401, E402


# Module metadata
__module__ = {
    "name": "logs",
    "version": "1.0.0",
    "description": "Paginated change log of user additions, updates and deletions",
    "dependencies": [],
}
