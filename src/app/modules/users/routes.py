"""User API routes."""

from fastapi import Query, Response, status

from app.config import settings
from app.core.errors import NotFoundError
from app.modules.logs.schemas import LogListItem, LogListResponse
from app.modules.logs.services import ChangeLogSvc
from app.modules.users import router
from app.modules.users.models import User
from app.modules.users.schemas import (
    UserCreate,
    UserDetailsResponse,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from app.modules.users.services import UserService, UserSvc


async def _get_user_or_404(service: UserService, user_id: int) -> User:
    user = await service.get_by_id(user_id)
    if user is None:
        raise NotFoundError(
            "User not found",
            resource="user",
            resource_id=str(user_id),
        )
    return user


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    description="List all users, optionally filtered by active status.",
)
async def list_users(
    service: UserSvc,
    is_active: bool | None = Query(None, description="Filter by active status"),
) -> UserListResponse:
    """List users."""
    if is_active is None:
        users = await service.get_all()
    else:
        users = await service.filter_by_active(is_active)
    return UserListResponse(items=[UserResponse.model_validate(u) for u in users])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create a user and record the addition in the change log.",
)
async def create_user(data: UserCreate, service: UserSvc) -> UserResponse:
    """Create a user."""
    user = await service.create(User(**data.model_dump()))
    return UserResponse.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserDetailsResponse,
    summary="Get user by ID",
    description="Get a user together with a page of their change log.",
)
async def get_user(
    user_id: int,
    service: UserSvc,
    change_log: ChangeLogSvc,
    page: int = Query(1, description="Change log page number"),
) -> UserDetailsResponse:
    """Get user details and change history."""
    user = await _get_user_or_404(service, user_id)
    entries, total = await change_log.get_by_user(user_id, page, settings.log_page_size)
    return UserDetailsResponse(
        user=UserResponse.model_validate(user),
        logs=LogListResponse(
            items=[LogListItem.model_validate(e) for e in entries],
            page_number=page,
            page_size=settings.log_page_size,
            total_count=total,
        ),
    )


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="Replace a user's data and record each changed field.",
)
async def update_user(
    user_id: int,
    data: UserUpdate,
    service: UserSvc,
) -> UserResponse:
    """Update user by ID."""
    await _get_user_or_404(service, user_id)
    user = await service.update(User(id=user_id, **data.model_dump()))
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="Delete a user. Their change log is kept.",
)
async def delete_user(user_id: int, service: UserSvc) -> Response:
    """Delete user by ID."""
    user = await _get_user_or_404(service, user_id)
    await service.delete(user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
