"""Pydantic schemas for change log responses."""

from datetime import datetime
from math import ceil

from pydantic import BaseModel, ConfigDict, computed_field

from app.modules.logs.models import ChangeAction


class LogListItem(BaseModel):
    """Schema for a change log entry in a list."""

    id: int
    user_id: int
    action: ChangeAction
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class LogDetailResponse(LogListItem):
    """Schema for a single change log entry.

    ``return_to`` echoes the caller-supplied location to navigate back to.
    """

    description: str | None = None
    return_to: str | None = None


class LogListResponse(BaseModel):
    """Schema for one page of change log entries."""

    items: list[LogListItem]
    page_number: int
    page_size: int
    total_count: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        """Number of pages needed to show every entry."""
        return ceil(self.total_count / self.page_size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous_page(self) -> bool:
        """Whether a page precedes this one."""
        return self.page_number > 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        """Whether a page follows this one."""
        return self.page_number < self.total_pages
