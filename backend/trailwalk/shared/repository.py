"""
Base repository with common CRUD operations.

Feature repositories (ledger entries, trail runs, earned badges) inherit
from it. Uses SQLAlchemy async session; callers own commit/rollback.

Usage:
    class TrailRunRepository(BaseRepository[TrailRunRecord]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, TrailRunRecord)

        async def get_for_trail(self, user_id: str, trail_id: str) -> TrailRunRecord | None:
            return await self.get_by(user_id=user_id, trail_id=trail_id)
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for per-user records.

    All methods are async for use with AsyncSession.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _filtered(self, query, filters: dict[str, Any]):
        for key, value in filters.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    async def get_by(self, **kwargs) -> T | None:
        """
        Get single entity by field values.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            Matching entity or None
        """
        result = await self.db.execute(self._filtered(select(self.model), kwargs))
        return result.scalar_one_or_none()

    async def get_all(self, order_by: str | None = None, **kwargs) -> list[T]:
        """
        Get all entities matching criteria.

        Args:
            order_by: Optional column name to sort ascending by
            **kwargs: Field name-value pairs to filter by
        """
        query = self._filtered(select(self.model), kwargs)
        if order_by:
            query = query.order_by(getattr(self.model, order_by))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, **kwargs) -> T:
        """Create and flush a new entity."""
        entity = self.model(**kwargs)
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def update(self, entity: T, **kwargs) -> T:
        """Set fields on an existing entity and flush."""
        for key, value in kwargs.items():
            setattr(entity, key, value)
        await self.db.flush()
        return entity

    async def delete(self, entity: T) -> None:
        """Delete an entity and flush."""
        await self.db.delete(entity)
        await self.db.flush()
