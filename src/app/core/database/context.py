"""Generic async data access over the request's database session."""

from typing import Annotated, Any, TypeVar

from fastapi import Depends
from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction
from sqlalchemy.orm.exc import StaleDataError

from app.core.database.base import Base
from app.core.database.session import get_db


ModelT = TypeVar("ModelT", bound=Base)


class DataContext:
    """Persistence façade shared by the feature services.

    Wraps an AsyncSession with entity-agnostic create/read/update/delete
    operations. Every write is flushed immediately so database-assigned
    values (such as integer IDs) are available to the caller; committing
    is left to the session owner.
    """

    def __init__(self, session: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.session = session

    async def create(self, entity: ModelT) -> ModelT:
        """Persist a new entity.

        Args:
            entity: Transient model instance

        Returns:
            The same instance with its identifier populated
        """
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    def get_all(self, model: type[ModelT]) -> Select[tuple[ModelT]]:
        """Build a query over every row of a model.

        The returned statement can be filtered, ordered and paged before
        being passed to ``fetch`` or ``count``.
        """
        return select(model)

    async def fetch(self, stmt: Select[tuple[ModelT]]) -> list[ModelT]:
        """Execute a query and return the matching entities."""
        result = await self.session.scalars(stmt)
        return list(result.all())

    async def count(self, stmt: Select[Any]) -> int:
        """Count the rows a query would return, ignoring its ordering."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        result = await self.session.execute(count_stmt)
        return result.scalar_one()

    async def get_by_id(self, model: type[ModelT], entity_id: int) -> ModelT | None:
        """Get an entity by primary key.

        Returns:
            The tracked entity if found, None otherwise
        """
        return await self.session.get(model, entity_id)

    async def get_by_id_untracked(
        self, model: type[ModelT], entity_id: int
    ) -> ModelT | None:
        """Read an entity's current column values without tracking it.

        Only column values are selected, so the session's identity map is
        neither consulted nor populated. The returned instance is transient:
        later writes through the session never change it, which makes it
        safe to use as a before-image.

        Args:
            model: Mapped model class
            entity_id: Primary key value

        Returns:
            A detached snapshot if the row exists, None otherwise
        """
        mapper = inspect(model)
        attrs = list(mapper.column_attrs)
        stmt = select(*(getattr(model, attr.key) for attr in attrs)).where(
            mapper.primary_key[0] == entity_id
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return model(**{attr.key: value for attr, value in zip(attrs, row)})

    async def update(self, entity: ModelT) -> ModelT:
        """Write the full state of an entity over its stored row.

        Accepts either a tracked instance or a detached one carrying the
        identifier of an existing row; the last write wins. Never inserts.

        Returns:
            The tracked instance holding the written state

        Raises:
            StaleDataError: If no row is stored under the entity's identifier
        """
        await self._require_stored(entity)
        merged = await self.session.merge(entity)
        await self.session.flush()
        return merged

    async def delete(self, entity: ModelT) -> None:
        """Delete an entity, tracked or detached.

        Raises:
            StaleDataError: If no row is stored under the entity's identifier
        """
        await self._require_stored(entity)
        persistent = await self.session.merge(entity)
        await self.session.delete(persistent)
        await self.session.flush()

    async def _require_stored(self, entity: ModelT) -> None:
        # merge() would otherwise turn an unknown identifier into an INSERT
        model = type(entity)
        identity = tuple(inspect(model).primary_key_from_instance(entity))
        if None in identity or await self.session.get(model, identity) is None:
            raise StaleDataError(
                f"{model.__name__} {identity} has no stored row to write"
            )

    def savepoint(self) -> AsyncSessionTransaction:
        """Open a nested transaction.

        Use as ``async with context.savepoint():`` to make a group of
        writes roll back on their own without aborting the enclosing
        transaction.
        """
        return self.session.begin_nested()


# Type alias for dependency injection
DataCtx = Annotated[DataContext, Depends(DataContext)]
