"""Change log database models."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IntegerIDMixin, UTCDateTime


class ChangeAction(str, Enum):
    """Kind of user mutation a change log entry records."""

    ADD = "Add"
    UPDATE = "Update"
    DELETE = "Delete"


class ChangeLogEntry(Base, IntegerIDMixin):
    """One audit fact about a change to a user.

    Entries are append-only. ``user_id`` deliberately carries no foreign
    key so the history of a user survives the user's deletion.

    Attributes:
        user_id: ID of the user the change applies to
        timestamp: When the change was recorded (UTC)
        action: Add, Update or Delete
        description: What changed, for Update entries; None otherwise
    """

    __tablename__ = "change_logs"

    user_id: Mapped[int] = mapped_column(
        nullable=False,
        index=True,
    )
    timestamp: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        index=True,
    )
    action: Mapped[ChangeAction] = mapped_column(
        SAEnum(ChangeAction, name="change_action", native_enum=False),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<ChangeLogEntry(id={self.id}, user_id={self.user_id}, "
            f"action={self.action})>"
        )
