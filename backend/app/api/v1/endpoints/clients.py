"""
Client API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api.v1.middleware import require_admin
from app.db.session import get_db
from app.controllers.client_controller import ClientController
from app.models.client import ClientStatus
from app.schemas.common import ApiResponse, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, SortOrder
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientQuery,
    ClientSortField,
    ClientData,
    ClientDetailData,
    ClientListData,
)
from app.schemas.project import ClientProjectsData

router = APIRouter()


@router.get("", response_model=ApiResponse[ClientListData])
async def list_clients(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    search: Optional[str] = Query(None),
    client_status: Optional[ClientStatus] = Query(None, alias="status"),
    sort_by: ClientSortField = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    db: AsyncSession = Depends(get_db),
):
    """List clients with search, status filter, sorting and pagination."""
    query = ClientQuery(
        page=page,
        limit=limit,
        search=search,
        status=client_status,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    controller = ClientController(db)
    return await controller.list_clients(query)


@router.post(
    "",
    response_model=ApiResponse[ClientData],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_client(
    client_data: ClientCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new client (admin only)."""
    controller = ClientController(db)
    return await controller.create_client(client_data)


@router.get("/{client_id}", response_model=ApiResponse[ClientDetailData])
async def get_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get client by ID with its projects."""
    controller = ClientController(db)
    return await controller.get_client(client_id)


@router.get("/{client_id}/projects", response_model=ApiResponse[ClientProjectsData])
async def list_client_projects(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """All projects for a client, newest first."""
    controller = ClientController(db)
    return await controller.list_client_projects(client_id)


@router.put(
    "/{client_id}",
    response_model=ApiResponse[ClientData],
    dependencies=[Depends(require_admin)],
)
async def update_client(
    client_id: UUID,
    client_data: ClientUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a client (admin only)."""
    controller = ClientController(db)
    return await controller.update_client(client_id, client_data)


@router.delete(
    "/{client_id}",
    response_model=ApiResponse[ClientData],
    dependencies=[Depends(require_admin)],
)
async def deactivate_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Deactivate a client (admin only). The record and its projects are kept."""
    controller = ClientController(db)
    return await controller.deactivate_client(client_id)
