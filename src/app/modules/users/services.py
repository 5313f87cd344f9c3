"""User service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from app.core.database import DataCtx
from app.modules.logs.services import ChangeLogSvc
from app.modules.users.models import User


log = structlog.get_logger()


class UserService:
    """Service for user management operations.

    Coordinates user persistence with the change log. Persistence
    failures propagate to the caller; change log failures are handled
    inside ChangeLogService and never reach it.
    """

    def __init__(self, context: DataCtx, change_log: ChangeLogSvc) -> None:
        self.context = context
        self.change_log = change_log

    async def get_all(self) -> list[User]:
        """Get every user."""
        return await self.context.fetch(
            self.context.get_all(User).order_by(User.id)
        )

    async def filter_by_active(self, is_active: bool) -> list[User]:
        """Get users whose active flag matches.

        Args:
            is_active: Active flag to filter on

        Returns:
            Matching users ordered by ID
        """
        stmt = (
            self.context.get_all(User)
            .where(User.is_active == is_active)
            .order_by(User.id)
        )
        return await self.context.fetch(stmt)

    async def get_by_id(self, user_id: int) -> User | None:
        """Get a user by ID, or None if it doesn't exist."""
        return await self.context.get_by_id(User, user_id)

    async def create(self, user: User) -> User:
        """Create a user and record the addition.

        Args:
            user: User to create; its ID is assigned on insert

        Returns:
            The created user
        """
        user = await self.context.create(user)
        log.info("user_created", user_id=user.id)
        await self.change_log.log_add(user)
        return user

    async def update(self, user: User) -> User:
        """Overwrite a user and record each changed field.

        The stored state is read as an untracked snapshot before the
        write, so the change log compares against what was stored
        rather than against the incoming object. If no stored user has
        this ID the write fails and nothing is recorded.

        Args:
            user: Complete new state of the user, including its ID

        Returns:
            The updated user

        Raises:
            StaleDataError: If no user is stored under this ID
        """
        existing = await self.context.get_by_id_untracked(User, user.id)

        updated = await self.context.update(user)
        log.info("user_updated", user_id=user.id)

        if existing is not None:
            await self.change_log.log_update(existing, user)

        return updated

    async def delete(self, user: User) -> None:
        """Record the deletion of a user, then delete it.

        The change log entry is written first, while the user still
        exists.

        Args:
            user: User to delete
        """
        await self.change_log.log_delete(user)
        await self.context.delete(user)
        log.info("user_deleted", user_id=user.id)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
