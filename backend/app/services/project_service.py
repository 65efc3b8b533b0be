"""
Project service with business logic.
Enforces the client reference rules, date ordering and deletion rights,
and assembles filtered, paginated listings.
"""

from uuid import UUID
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.access_control import can_delete_project
from app.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from app.core.logging import get_logger
from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.project_repository import ProjectRepository
from app.models.client import Client, ClientStatus
from app.models.project import Project
from app.models.user import User
from app.schemas.client import ClientSummary, ClientReference
from app.schemas.common import Pagination
from app.schemas.project import (
    END_BEFORE_START_MESSAGE,
    ProjectCreate,
    ProjectUpdate,
    ProjectQuery,
    ProjectResponse,
    ProjectListData,
    ClientProjectsData,
    ProjectStats,
    StatusBreakdown,
)
from app.schemas.user import UserSummary
from app.utils.project_metrics import duration_days, progress_percentage, round_half_up

logger = get_logger(__name__)


def validate_date_order(start_date: date, end_date: date) -> list:
    """Field errors for an invalid start/end pair (empty when valid)."""
    if end_date <= start_date:
        return [{"field": "endDate", "message": END_BEFORE_START_MESSAGE}]
    return []


class ProjectService:
    """Service for project operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_repo = ProjectRepository(session)
        self.client_repo = ClientRepository(session)

    async def _get_or_404(self, project_id: UUID) -> Project:
        project = await self.project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project

    async def _get_assignable_client(self, client_id: UUID, action: str = "create") -> Client:
        """Resolve a client a project may point at: it must exist and be active."""
        client = await self.client_repo.get(client_id)
        if not client:
            raise NotFoundError("Client not found")
        if client.status == ClientStatus.INACTIVE:
            raise ConflictError(f"Cannot {action} project for inactive client")
        return client

    async def _load_references(self, project: Project) -> Project:
        """Resolve client and creator after a write."""
        await self.session.refresh(project, attribute_names=["client", "creator"])
        return project

    async def create_project(self, project_data: ProjectCreate, actor: User) -> ProjectResponse:
        """Create a new project on behalf of the authenticated user."""
        await self._get_assignable_client(project_data.client_id)

        project_dict = project_data.model_dump(exclude_unset=True)
        project = await self.project_repo.create(**project_dict, created_by=actor.id)
        await self.session.commit()
        project = await self._load_references(project)

        logger.info(
            "Project created",
            extra={
                "project_id": str(project.id),
                "client_id": str(project.client_id),
                "created_by": str(actor.id),
            },
        )
        return self._to_response(project)

    async def get_project(self, project_id: UUID) -> ProjectResponse:
        """Get project by ID."""
        project = await self._get_or_404(project_id)
        return self._to_response(project)

    async def list_projects(self, query: ProjectQuery) -> ProjectListData:
        """List projects matching the query, one page at a time."""
        conditions = self.project_repo.build_conditions(
            search=query.search,
            status=query.status,
            client_id=query.client_id,
            start_date_from=query.start_date_from,
            start_date_to=query.start_date_to,
            end_date_from=query.end_date_from,
            end_date_to=query.end_date_to,
            budget_min=query.budget_min,
            budget_max=query.budget_max,
        )
        projects, total = await self.project_repo.search(
            conditions,
            sort_by=query.sort_by,
            descending=query.descending,
            skip=query.skip,
            limit=query.limit,
        )
        return ProjectListData(
            projects=[self._to_response(p) for p in projects],
            pagination=Pagination.build(query.page, query.limit, total),
        )

    async def list_client_projects(self, client_id: UUID) -> ClientProjectsData:
        """All projects of one client, newest first."""
        client = await self.client_repo.get(client_id)
        if not client:
            raise NotFoundError("Client not found")

        projects = await self.project_repo.list_by_client(client_id)
        return ClientProjectsData(
            client=ClientReference.model_validate(client),
            projects=[self._to_response(p) for p in projects],
        )

    async def update_project(
        self,
        project_id: UUID,
        project_data: ProjectUpdate,
    ) -> ProjectResponse:
        """
        Update a project.

        Date ordering is checked against the effective values: a date absent
        from the patch keeps its stored value.
        """
        project = await self._get_or_404(project_id)

        update_dict = project_data.model_dump(exclude_unset=True)
        if "client_id" in update_dict:
            await self._get_assignable_client(update_dict["client_id"], action="assign")

        if "start_date" in update_dict or "end_date" in update_dict:
            errors = validate_date_order(
                update_dict.get("start_date", project.start_date),
                update_dict.get("end_date", project.end_date),
            )
            if errors:
                raise ValidationFailedError(details=errors)

        updated = await self.project_repo.update(project_id, **update_dict)
        await self.session.commit()
        updated = await self._load_references(updated)

        logger.info(
            "Project updated",
            extra={"project_id": str(project_id), "fields": sorted(update_dict)},
        )
        return self._to_response(updated)

    async def delete_project(self, project_id: UUID, actor: User) -> None:
        """Delete a project. Only its creator or an admin may do so."""
        project = await self._get_or_404(project_id)
        if not can_delete_project(actor, project):
            raise ForbiddenError("Not authorized to delete this project")

        await self.project_repo.delete(project_id)
        await self.session.commit()

        logger.info(
            "Project deleted",
            extra={"project_id": str(project_id), "deleted_by": str(actor.id)},
        )

    async def get_stats_overview(self) -> ProjectStats:
        """Count and budget aggregates per status, plus overall totals."""
        rows = await self.project_repo.stats_by_status()

        breakdown = [
            StatusBreakdown(
                status=status,
                count=count,
                total_budget=float(total_budget),
                avg_budget=round_half_up(float(avg_budget)),
            )
            for status, count, total_budget, avg_budget in rows
        ]
        breakdown.sort(key=lambda row: row.status.value)

        return ProjectStats(
            total_projects=sum(row.count for row in breakdown),
            total_budget=sum(row.total_budget for row in breakdown),
            status_breakdown=breakdown,
        )

    def _to_response(self, project: Project) -> ProjectResponse:
        """Convert project model to response schema with resolved references."""
        project_dict = {
            "id": project.id,
            "title": project.title,
            "description": project.description,
            "client_id": ClientSummary.model_validate(project.client),
            "status": project.status,
            "start_date": project.start_date,
            "end_date": project.end_date,
            "budget": project.budget,
            "created_by": UserSummary.model_validate(project.creator),
            "created_at": project.created_at,
            "updated_at": project.updated_at,
            "duration_days": duration_days(project.start_date, project.end_date),
            "progress_percentage": progress_percentage(
                project.status, project.start_date, project.end_date
            ),
        }
        return ProjectResponse.model_validate(project_dict)
