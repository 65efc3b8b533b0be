"""
Project controller.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.project_service import ProjectService
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectQuery,
    ProjectData,
    ProjectListData,
    ClientProjectsData,
    ProjectStats,
)


class ProjectController:
    """Controller for project operations."""

    def __init__(self, session: AsyncSession):
        self.project_service = ProjectService(session)

    async def create_project(self, project_data: ProjectCreate, actor: User) -> ApiResponse[ProjectData]:
        """Create a new project."""
        project = await self.project_service.create_project(project_data, actor)
        return ApiResponse(
            message="Project created successfully",
            data=ProjectData(project=project),
        )

    async def get_project(self, project_id: UUID) -> ApiResponse[ProjectData]:
        """Get project by ID."""
        project = await self.project_service.get_project(project_id)
        return ApiResponse(data=ProjectData(project=project))

    async def list_projects(self, query: ProjectQuery) -> ApiResponse[ProjectListData]:
        """List projects with optional filters."""
        return ApiResponse(data=await self.project_service.list_projects(query))

    async def list_client_projects(self, client_id: UUID) -> ApiResponse[ClientProjectsData]:
        """List the projects of a client."""
        return ApiResponse(data=await self.project_service.list_client_projects(client_id))

    async def get_stats_overview(self) -> ApiResponse[ProjectStats]:
        """Project statistics."""
        return ApiResponse(data=await self.project_service.get_stats_overview())

    async def update_project(
        self,
        project_id: UUID,
        project_data: ProjectUpdate,
    ) -> ApiResponse[ProjectData]:
        """Update a project."""
        project = await self.project_service.update_project(project_id, project_data)
        return ApiResponse(
            message="Project updated successfully",
            data=ProjectData(project=project),
        )

    async def delete_project(self, project_id: UUID, actor: User) -> MessageResponse:
        """Delete a project."""
        await self.project_service.delete_project(project_id, actor)
        return MessageResponse(message="Project deleted successfully")
