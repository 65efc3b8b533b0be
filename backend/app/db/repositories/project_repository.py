"""
Project repository for database operations.
"""

from typing import Optional, List, Any, Tuple
from uuid import UUID
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.project import Project, ProjectStatus, OPEN_PROJECT_STATUSES


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations."""

    SORT_FIELDS = {
        "title": Project.title,
        "status": Project.status,
        "startDate": Project.start_date,
        "endDate": Project.end_date,
        "budget": Project.budget,
        "createdAt": Project.created_at,
        "updatedAt": Project.updated_at,
    }

    def __init__(self, session: AsyncSession):
        super().__init__(Project, session)

    @staticmethod
    def _load_references():
        """Eager loading of the client and creator relationships."""
        return [selectinload(Project.client), selectinload(Project.creator)]

    async def get(self, id: UUID) -> Optional[Project]:
        """Get project by ID with client and creator loaded."""
        result = await self.session.execute(
            select(Project).options(*self._load_references()).where(Project.id == id)
        )
        return result.scalar_one_or_none()

    def build_conditions(
        self,
        search: Optional[str] = None,
        status: Optional[ProjectStatus] = None,
        client_id: Optional[UUID] = None,
        start_date_from: Optional[date] = None,
        start_date_to: Optional[date] = None,
        end_date_from: Optional[date] = None,
        end_date_to: Optional[date] = None,
        budget_min: Optional[float] = None,
        budget_max: Optional[float] = None,
    ) -> List[Any]:
        """
        Build the WHERE clauses for a project listing.

        Categories are ANDed together; the text search is the only OR group
        (title or description, case-insensitive substring). All ranges are
        inclusive and each bound is optional.
        """
        conditions: List[Any] = []
        if search:
            conditions.append(
                or_(
                    Project.title.icontains(search, autoescape=True),
                    Project.description.icontains(search, autoescape=True),
                )
            )
        if status is not None:
            conditions.append(Project.status == status)
        if client_id is not None:
            conditions.append(Project.client_id == client_id)
        if start_date_from is not None:
            conditions.append(Project.start_date >= start_date_from)
        if start_date_to is not None:
            conditions.append(Project.start_date <= start_date_to)
        if end_date_from is not None:
            conditions.append(Project.end_date >= end_date_from)
        if end_date_to is not None:
            conditions.append(Project.end_date <= end_date_to)
        if budget_min is not None:
            conditions.append(Project.budget >= budget_min)
        if budget_max is not None:
            conditions.append(Project.budget <= budget_max)
        return conditions

    async def search(
        self,
        conditions: List[Any],
        sort_by: str = "createdAt",
        descending: bool = True,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Project], int]:
        """Filtered, sorted page of projects with references loaded, plus the total."""
        column = self.SORT_FIELDS[sort_by]
        order = column.desc() if descending else column.asc()
        return await self.find_page(
            conditions,
            [order, Project.id],
            skip,
            limit,
            options=self._load_references(),
        )

    async def list_by_client(self, client_id: UUID) -> List[Project]:
        """All projects of a client, newest first."""
        result = await self.session.execute(
            select(Project)
            .options(*self._load_references())
            .where(Project.client_id == client_id)
            .order_by(Project.created_at.desc(), Project.id)
        )
        return list(result.scalars().all())

    async def count_open_for_client(self, client_id: UUID) -> int:
        """Projects of a client that are still pending or in progress."""
        return await self.count(
            Project.client_id == client_id,
            Project.status.in_(OPEN_PROJECT_STATUSES),
        )

    async def stats_by_status(self) -> List[Tuple[ProjectStatus, int, float, float]]:
        """(status, count, budget sum, budget average) per status present."""
        result = await self.session.execute(
            select(
                Project.status,
                func.count(Project.id),
                func.coalesce(func.sum(Project.budget), 0.0),
                func.coalesce(func.avg(Project.budget), 0.0),
            )
            .group_by(Project.status)
        )
        return [tuple(row) for row in result.all()]
