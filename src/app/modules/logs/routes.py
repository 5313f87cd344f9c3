"""Change log API routes."""

from fastapi import Query

from app.config import settings
from app.core.errors import NotFoundError
from app.modules.logs import router
from app.modules.logs.schemas import LogDetailResponse, LogListItem, LogListResponse
from app.modules.logs.services import ChangeLogSvc


@router.get(
    "",
    response_model=LogListResponse,
    summary="List change log",
    description="List change log entries for all users, most recent first.",
)
async def list_logs(
    service: ChangeLogSvc,
    page: int = Query(1, description="Page number"),
) -> LogListResponse:
    """List change log entries."""
    entries, total = await service.get_all(page, settings.log_page_size)
    return LogListResponse(
        items=[LogListItem.model_validate(e) for e in entries],
        page_number=page,
        page_size=settings.log_page_size,
        total_count=total,
    )


@router.get(
    "/{log_id}",
    response_model=LogDetailResponse,
    summary="Get change log entry",
    description="Get a single change log entry including its description.",
)
async def get_log(
    log_id: int,
    service: ChangeLogSvc,
    return_to: str | None = Query(None, description="Where the caller came from"),
) -> LogDetailResponse:
    """Get change log entry by ID."""
    entry = await service.get_by_id(log_id)
    if entry is None:
        raise NotFoundError(
            "Change log entry not found",
            resource="change_log",
            resource_id=str(log_id),
        )
    response = LogDetailResponse.model_validate(entry)
    response.return_to = return_to
    return response
