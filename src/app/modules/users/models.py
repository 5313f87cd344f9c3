"""User database models."""

from datetime import date

from sqlalchemy import Boolean, Date, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from app.core.database import Base, IntegerIDMixin


class User(Base, IntegerIDMixin):
    """User model representing a managed person record.

    Changes to users are recorded in the change log by UserService;
    change log entries reference users by ID only.

    Attributes:
        forename: Given name
        surname: Family name
        email: Contact email address
        date_of_birth: Date of birth
        is_active: Whether the user is active
    """

    __tablename__ = "users"

    forename: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    surname: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        index=True,
    )
    date_of_birth: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, is_active={self.is_active})>"
