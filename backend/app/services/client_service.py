"""
Client service with business logic.
Owns email uniqueness and safe deactivation of clients.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.project_repository import ProjectRepository
from app.models.client import Client, ClientStatus
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientQuery,
    ClientResponse,
    ClientDetailResponse,
    ClientProjectBrief,
    ClientListData,
)
from app.schemas.common import Pagination

logger = get_logger(__name__)


class ClientService:
    """Service for client operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.client_repo = ClientRepository(session)
        self.project_repo = ProjectRepository(session)

    async def _get_or_404(self, client_id: UUID) -> Client:
        client = await self.client_repo.get(client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def _ensure_email_available(self, email: str, exclude_id: UUID = None) -> None:
        existing = await self.client_repo.get_by_email(email, exclude_id=exclude_id)
        if existing:
            if exclude_id is None:
                raise ConflictError("Client with this email already exists")
            raise ConflictError("Another client with this email already exists")

    async def _ensure_no_open_projects(self, client_id: UUID) -> None:
        open_projects = await self.project_repo.count_open_for_client(client_id)
        if open_projects > 0:
            raise ConflictError(
                f"Cannot delete client with {open_projects} active project(s). "
                "Please complete or cancel projects first.",
                details={"activeProjects": open_projects},
            )

    async def create_client(self, client_data: ClientCreate) -> ClientResponse:
        """Create a new client."""
        await self._ensure_email_available(client_data.email)

        client_dict = client_data.model_dump(exclude_unset=True)
        client = await self.client_repo.create(**client_dict)
        await self.session.commit()

        logger.info("Client created", extra={"client_id": str(client.id)})
        return ClientResponse.model_validate(client)

    async def get_client(self, client_id: UUID) -> ClientDetailResponse:
        """Get client by ID together with its projects, newest first."""
        client = await self._get_or_404(client_id)
        projects = await self.project_repo.list_by_client(client_id)

        response = ClientResponse.model_validate(client)
        return ClientDetailResponse(
            **response.model_dump(),
            projects=[ClientProjectBrief.model_validate(p) for p in projects],
        )

    async def list_clients(self, query: ClientQuery) -> ClientListData:
        """List clients matching the query, one page at a time."""
        conditions = self.client_repo.build_conditions(
            search=query.search,
            status=query.status,
        )
        clients, total = await self.client_repo.search(
            conditions,
            sort_by=query.sort_by,
            descending=query.descending,
            skip=query.skip,
            limit=query.limit,
        )
        counts = await self.client_repo.project_counts([c.id for c in clients])

        items = []
        for client in clients:
            item = ClientResponse.model_validate(client)
            item.project_count = counts.get(client.id, 0)
            items.append(item)

        return ClientListData(
            clients=items,
            pagination=Pagination.build(query.page, query.limit, total),
        )

    async def update_client(
        self,
        client_id: UUID,
        client_data: ClientUpdate,
    ) -> ClientResponse:
        """Update a client."""
        client = await self._get_or_404(client_id)

        update_dict = client_data.model_dump(exclude_unset=True)
        if "email" in update_dict:
            await self._ensure_email_available(update_dict["email"], exclude_id=client_id)
        if (
            update_dict.get("status") == ClientStatus.INACTIVE
            and client.status != ClientStatus.INACTIVE
        ):
            await self._ensure_no_open_projects(client_id)

        updated = await self.client_repo.update(client_id, **update_dict)
        await self.session.commit()

        logger.info(
            "Client updated",
            extra={"client_id": str(client_id), "fields": sorted(update_dict)},
        )
        return ClientResponse.model_validate(updated)

    async def deactivate_client(self, client_id: UUID) -> ClientResponse:
        """
        Soft-delete a client by marking it inactive.

        Refused while the client still has pending or in-progress projects.
        Neither the client nor its projects are removed.
        """
        await self._get_or_404(client_id)
        await self._ensure_no_open_projects(client_id)

        updated = await self.client_repo.update(client_id, status=ClientStatus.INACTIVE)
        await self.session.commit()

        logger.info("Client deactivated", extra={"client_id": str(client_id)})
        return ClientResponse.model_validate(updated)
