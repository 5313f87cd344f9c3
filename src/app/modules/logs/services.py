"""Change log service for recording and querying user changes."""

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Annotated, Any

import structlog
from fastapi import Depends
from sqlalchemy import Select

from app.core.constants import CHANGE_DATE_FORMAT
from app.core.database import DataCtx
from app.core.pagination import Page, apply_paging, validate_paging
from app.modules.logs.models import ChangeAction, ChangeLogEntry


if TYPE_CHECKING:
    from app.modules.users.models import User


log = structlog.get_logger()


# (attribute, display name) pairs, in the order changes are reported
TRACKED_FIELDS: tuple[tuple[str, str], ...] = (
    ("forename", "Forename"),
    ("surname", "Surname"),
    ("email", "Email"),
    ("is_active", "IsActive"),
    ("date_of_birth", "DateOfBirth"),
)


def _format_value(value: Any) -> str:
    if isinstance(value, date):
        return value.strftime(CHANGE_DATE_FORMAT)
    return str(value)


def describe_changes(before: "User", after: "User") -> list[str]:
    """Describe each tracked field that differs between two user states.

    Args:
        before: User state prior to the change
        after: User state after the change

    Returns:
        One sentence per changed field, e.g.
        ``"Forename changed from Original to Updated"``. Empty if
        nothing tracked differs.
    """
    changes: list[str] = []
    for attr, label in TRACKED_FIELDS:
        old_value = getattr(before, attr)
        new_value = getattr(after, attr)
        if old_value != new_value:
            changes.append(
                f"{label} changed from {_format_value(old_value)} "
                f"to {_format_value(new_value)}"
            )
    return changes


class ChangeLogService:
    """Service for the user change log.

    Turns user additions, updates and deletions into change log entries
    and serves paged queries over them. Recording is best-effort: a
    failed write is logged and never raised, so the user operation that
    triggered it is unaffected.
    """

    def __init__(self, context: DataCtx) -> None:
        self.context = context

    async def log_add(self, user: "User") -> None:
        """Record that a user was added."""
        await self._record(user.id, ChangeAction.ADD, [None])

    async def log_delete(self, user: "User") -> None:
        """Record that a user was deleted."""
        await self._record(user.id, ChangeAction.DELETE, [None])

    async def log_update(self, before: "User", after: "User") -> None:
        """Record one entry per tracked field that changed.

        Args:
            before: Snapshot of the user prior to the update
            after: The user as written by the update
        """
        changes = describe_changes(before, after)
        if not changes:
            return
        await self._record(after.id, ChangeAction.UPDATE, changes)

    async def _record(
        self,
        user_id: int,
        action: ChangeAction,
        descriptions: list[str | None],
    ) -> None:
        # Each write gets its own savepoint; the first failure stops the batch.
        for written, description in enumerate(descriptions):
            entry = ChangeLogEntry(
                user_id=user_id,
                timestamp=datetime.now(UTC),
                action=action,
                description=description,
            )
            try:
                async with self.context.savepoint():
                    await self.context.create(entry)
            except Exception:
                log.exception(
                    "changelog_write_failed",
                    user_id=user_id,
                    action=action.value,
                    written=written,
                    pending=len(descriptions) - written,
                )
                return

        log.debug(
            "changelog_recorded",
            user_id=user_id,
            action=action.value,
            entries=len(descriptions),
        )

    async def get_all(self, page_number: int, page_size: int) -> Page[ChangeLogEntry]:
        """Get a page of all change log entries, most recent first.

        Args:
            page_number: 1-based page number
            page_size: Entries per page

        Returns:
            The requested page and the total number of entries

        Raises:
            OutOfRangeError: If page_number < 1 or page_size <= 0
        """
        validate_paging(page_number, page_size)
        stmt = self.context.get_all(ChangeLogEntry)
        return await self._page(stmt, page_number, page_size)

    async def get_by_user(
        self, user_id: int, page_number: int, page_size: int
    ) -> Page[ChangeLogEntry]:
        """Get a page of one user's change log entries, most recent first.

        Args:
            user_id: The user's ID
            page_number: 1-based page number
            page_size: Entries per page

        Returns:
            The requested page and the user's total number of entries

        Raises:
            OutOfRangeError: If page_number < 1 or page_size <= 0
        """
        validate_paging(page_number, page_size)
        stmt = self.context.get_all(ChangeLogEntry).where(
            ChangeLogEntry.user_id == user_id
        )
        return await self._page(stmt, page_number, page_size)

    async def get_by_id(self, entry_id: int) -> ChangeLogEntry | None:
        """Get a change log entry by ID, or None if it doesn't exist."""
        return await self.context.get_by_id(ChangeLogEntry, entry_id)

    async def _page(
        self,
        stmt: Select[tuple[ChangeLogEntry]],
        page_number: int,
        page_size: int,
    ) -> Page[ChangeLogEntry]:
        total_count = await self.context.count(stmt)
        # ID breaks ties between entries written within the same instant
        ordered = stmt.order_by(
            ChangeLogEntry.timestamp.desc(),
            ChangeLogEntry.id.desc(),
        )
        items = await self.context.fetch(apply_paging(ordered, page_number, page_size))
        return Page(items, total_count)


# Type alias for dependency injection
ChangeLogSvc = Annotated[ChangeLogService, Depends(ChangeLogService)]
