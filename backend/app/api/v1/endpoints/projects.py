"""
Project API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID
from datetime import date

from app.api.v1.middleware import require_authentication
from app.db.session import get_db
from app.controllers.project_controller import ProjectController
from app.models.project import ProjectStatus
from app.models.user import User
from app.schemas.common import (
    ApiResponse,
    MessageResponse,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    SortOrder,
)
from app.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectQuery,
    ProjectSortField,
    ProjectData,
    ProjectListData,
    ClientProjectsData,
    ProjectStats,
)

router = APIRouter()


@router.get("", response_model=ApiResponse[ProjectListData])
async def list_projects(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    search: Optional[str] = Query(None),
    project_status: Optional[ProjectStatus] = Query(None, alias="status"),
    client_id: Optional[UUID] = Query(None, alias="clientId"),
    sort_by: ProjectSortField = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    start_date_from: Optional[date] = Query(None, alias="startDateFrom"),
    start_date_to: Optional[date] = Query(None, alias="startDateTo"),
    end_date_from: Optional[date] = Query(None, alias="endDateFrom"),
    end_date_to: Optional[date] = Query(None, alias="endDateTo"),
    budget_min: Optional[float] = Query(None, ge=0, allow_inf_nan=False, alias="budgetMin"),
    budget_max: Optional[float] = Query(None, ge=0, allow_inf_nan=False, alias="budgetMax"),
    db: AsyncSession = Depends(get_db),
):
    """List projects with search, filters, sorting and pagination."""
    query = ProjectQuery(
        page=page,
        limit=limit,
        search=search,
        status=project_status,
        client_id=client_id,
        sort_by=sort_by,
        sort_order=sort_order,
        start_date_from=start_date_from,
        start_date_to=start_date_to,
        end_date_from=end_date_from,
        end_date_to=end_date_to,
        budget_min=budget_min,
        budget_max=budget_max,
    )
    controller = ProjectController(db)
    return await controller.list_projects(query)


@router.get("/stats/overview", response_model=ApiResponse[ProjectStats])
async def get_stats_overview(
    db: AsyncSession = Depends(get_db),
):
    """Counts and budget totals per status."""
    controller = ProjectController(db)
    return await controller.get_stats_overview()


@router.get("/client/{client_id}", response_model=ApiResponse[ClientProjectsData])
async def list_client_projects(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """All projects for a client, newest first."""
    controller = ProjectController(db)
    return await controller.list_client_projects(client_id)


@router.post("", response_model=ApiResponse[ProjectData], status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
):
    """Create a new project owned by the current user."""
    controller = ProjectController(db)
    return await controller.create_project(project_data, current_user)


@router.get("/{project_id}", response_model=ApiResponse[ProjectData])
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get project by ID."""
    controller = ProjectController(db)
    return await controller.get_project(project_id)


@router.put("/{project_id}", response_model=ApiResponse[ProjectData])
async def update_project(
    project_id: UUID,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a project. Any authenticated user may update."""
    controller = ProjectController(db)
    return await controller.update_project(project_id, project_data)


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
):
    """Delete a project (creator or admin)."""
    controller = ProjectController(db)
    return await controller.delete_project(project_id, current_user)
