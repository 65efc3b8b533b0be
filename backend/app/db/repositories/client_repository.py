"""
Client repository for database operations.
"""

from typing import Optional, List, Dict, Any, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_

from app.db.repositories.base_repository import BaseRepository
from app.models.client import Client, ClientStatus
from app.models.project import Project


class ClientRepository(BaseRepository[Client]):
    """Repository for client operations."""

    SORT_FIELDS = {
        "name": Client.name,
        "company": Client.company,
        "createdAt": Client.created_at,
        "updatedAt": Client.updated_at,
    }

    def __init__(self, session: AsyncSession):
        super().__init__(Client, session)

    async def get_by_email(self, email: str, exclude_id: Optional[UUID] = None) -> Optional[Client]:
        """Get client by (normalized) email, optionally ignoring one client."""
        query = select(Client).where(Client.email == email.lower())
        if exclude_id is not None:
            query = query.where(Client.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalars().first()

    def build_conditions(
        self,
        search: Optional[str] = None,
        status: Optional[ClientStatus] = None,
    ) -> List[Any]:
        """Text search matches name, company or email; status is exact."""
        conditions: List[Any] = []
        if search:
            conditions.append(
                or_(
                    Client.name.icontains(search, autoescape=True),
                    Client.company.icontains(search, autoescape=True),
                    Client.email.icontains(search, autoescape=True),
                )
            )
        if status is not None:
            conditions.append(Client.status == status)
        return conditions

    async def search(
        self,
        conditions: List[Any],
        sort_by: str = "createdAt",
        descending: bool = True,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Client], int]:
        """Filtered, sorted page of clients plus the total match count."""
        column = self.SORT_FIELDS[sort_by]
        order = column.desc() if descending else column.asc()
        return await self.find_page(conditions, [order, Client.id], skip, limit)

    async def project_counts(self, client_ids: List[UUID]) -> Dict[UUID, int]:
        """Number of projects per client."""
        if not client_ids:
            return {}
        result = await self.session.execute(
            select(Project.client_id, func.count(Project.id))
            .where(Project.client_id.in_(client_ids))
            .group_by(Project.client_id)
        )
        return {client_id: count for client_id, count in result.all()}
