"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions.
"""

from typing import Generic, TypeVar, Type, Optional, List, Any, Sequence, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get(self, id: UUID) -> Optional[ModelType]:
        """
        Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance or None
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def count(self, *conditions: Any) -> int:
        """Count records matching all conditions."""
        query = select(func.count()).select_from(self.model)
        if conditions:
            query = query.where(*conditions)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def find_page(
        self,
        conditions: Sequence[Any],
        order_by: Sequence[Any],
        skip: int = 0,
        limit: int = 10,
        options: Sequence[Any] = (),
    ) -> Tuple[List[ModelType], int]:
        """
        Fetch one page of records plus the total number of matches.

        Args:
            conditions: WHERE clauses, combined with AND
            order_by: ORDER BY clauses
            skip: Number of records to skip
            limit: Maximum number of records to return
            options: Loader options (eager loading)

        Returns:
            (records, total)
        """
        query = select(self.model).options(*options)
        if conditions:
            query = query.where(*conditions)
        query = query.order_by(*order_by).offset(skip).limit(limit)
        result = await self.session.execute(query)
        items = list(result.scalars().unique().all())

        total = await self.count(*conditions)
        return items, total

    async def update(self, id: UUID, **kwargs) -> Optional[ModelType]:
        """
        Update a record.

        Args:
            id: Record ID
            **kwargs: Attributes to update

        Returns:
            Updated model instance or None
        """
        instance = await self.get(id)
        if instance is None:
            return None
        for key, value in kwargs.items():
            setattr(instance, key, value)
        await self.session.flush()
        return instance

    async def delete(self, id: UUID) -> bool:
        """
        Delete a record.

        Args:
            id: Record ID

        Returns:
            True if deleted, False if not found
        """
        result = await self.session.execute(
            delete(self.model).where(self.model.id == id)
        )
        await self.session.flush()
        return result.rowcount > 0
