"""
Client controller.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.client_service import ClientService
from app.services.project_service import ProjectService
from app.schemas.common import ApiResponse
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientQuery,
    ClientData,
    ClientDetailData,
    ClientListData,
)
from app.schemas.project import ClientProjectsData


class ClientController:
    """Controller for client operations."""

    def __init__(self, session: AsyncSession):
        self.client_service = ClientService(session)
        self.project_service = ProjectService(session)

    async def create_client(self, client_data: ClientCreate) -> ApiResponse[ClientData]:
        """Create a new client."""
        client = await self.client_service.create_client(client_data)
        return ApiResponse(
            message="Client created successfully",
            data=ClientData(client=client),
        )

    async def get_client(self, client_id: UUID) -> ApiResponse[ClientDetailData]:
        """Get client by ID with its projects."""
        client = await self.client_service.get_client(client_id)
        return ApiResponse(data=ClientDetailData(client=client))

    async def list_clients(self, query: ClientQuery) -> ApiResponse[ClientListData]:
        """List clients with optional filters."""
        return ApiResponse(data=await self.client_service.list_clients(query))

    async def list_client_projects(self, client_id: UUID) -> ApiResponse[ClientProjectsData]:
        """List the projects of a client."""
        return ApiResponse(data=await self.project_service.list_client_projects(client_id))

    async def update_client(
        self,
        client_id: UUID,
        client_data: ClientUpdate,
    ) -> ApiResponse[ClientData]:
        """Update a client."""
        client = await self.client_service.update_client(client_id, client_data)
        return ApiResponse(
            message="Client updated successfully",
            data=ClientData(client=client),
        )

    async def deactivate_client(self, client_id: UUID) -> ApiResponse[ClientData]:
        """Deactivate (soft-delete) a client."""
        client = await self.client_service.deactivate_client(client_id)
        return ApiResponse(
            message="Client deactivated successfully",
            data=ClientData(client=client),
        )
