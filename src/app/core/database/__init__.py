"""Database layer - session management, base models, and data access."""

from app.core.database.base import Base, IntegerIDMixin, UTCDateTime
from app.core.database.context import DataContext, DataCtx
from app.core.database.session import (
    async_engine,
    async_session_factory,
    enable_sqlite_savepoints,
    get_db,
)


__all__ = [
    "Base",
    "DataContext",
    "DataCtx",
    "IntegerIDMixin",
    "UTCDateTime",
    "async_engine",
    "async_session_factory",
    "enable_sqlite_savepoints",
    "get_db",
]
