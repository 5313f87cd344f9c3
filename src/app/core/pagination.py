"""Paged query helpers."""

from typing import Any, Generic, NamedTuple, TypeVar

from sqlalchemy import Select

from app.core.errors import OutOfRangeError


T = TypeVar("T")


class Page(NamedTuple, Generic[T]):
    """One slice of an ordered result set.

    Attributes:
        items: Entries on the requested page
        total_count: Number of matching entries across all pages
    """

    items: list[T]
    total_count: int


def validate_paging(page_number: int, page_size: int) -> None:
    """Check 1-based paging arguments.

    Raises:
        OutOfRangeError: Naming ``page_number`` if it is below 1, or
            ``page_size`` if it is not positive
    """
    if page_number < 1:
        raise OutOfRangeError(
            "page_number", page_number, "Page number must be greater than 0"
        )
    if page_size <= 0:
        raise OutOfRangeError("page_size", page_size, "Page size must be greater than 0")


def apply_paging(stmt: Select[Any], page_number: int, page_size: int) -> Select[Any]:
    """Restrict an ordered query to a single page."""
    return stmt.offset((page_number - 1) * page_size).limit(page_size)
