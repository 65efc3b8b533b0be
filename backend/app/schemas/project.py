"""
Project Pydantic schemas for request/response validation.
"""

from pydantic import Field, ValidationInfo, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import date, datetime
from uuid import UUID

from app.models.project import ProjectStatus
from app.schemas.common import CamelModel, PageQuery, Pagination
from app.schemas.client import ClientSummary, ClientReference
from app.schemas.user import UserSummary

ProjectSortField = Literal[
    "title", "status", "startDate", "endDate", "budget", "createdAt", "updatedAt"
]

END_BEFORE_START_MESSAGE = "End date must be after start date"


class ProjectCreate(CamelModel):
    """Schema for creating a project."""
    title: str = Field(..., min_length=2, max_length=200)
    description: str = Field(..., min_length=10, max_length=2000)
    client_id: UUID
    status: ProjectStatus = ProjectStatus.PENDING
    start_date: date
    end_date: date
    budget: float = Field(..., ge=0, allow_inf_nan=False)

    class Config:
        extra = "forbid"

    @field_validator("end_date")
    @classmethod
    def validate_dates(cls, value: date, info: ValidationInfo) -> date:
        """Validate that end_date is after start_date."""
        start_date = info.data.get("start_date")
        if start_date is not None and value <= start_date:
            raise ValueError(END_BEFORE_START_MESSAGE)
        return value


class ProjectUpdate(CamelModel):
    """Schema for updating a project (all fields optional, at least one required)."""
    title: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, min_length=10, max_length=2000)
    client_id: Optional[UUID] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

    class Config:
        extra = "forbid"

    @field_validator(
        "title", "description", "client_id", "status", "start_date", "end_date", "budget",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("end_date")
    @classmethod
    def validate_dates(cls, value: date, info: ValidationInfo) -> date:
        """When both dates are in the patch, end_date must be after start_date."""
        start_date = info.data.get("start_date")
        if start_date is not None and value <= start_date:
            raise ValueError(END_BEFORE_START_MESSAGE)
        return value

    @model_validator(mode="after")
    def require_one_field(self) -> "ProjectUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class ProjectResponse(CamelModel):
    """Project with its client and creator resolved to summaries."""
    id: UUID
    title: str
    description: str
    client_id: ClientSummary
    status: ProjectStatus
    start_date: date
    end_date: date
    budget: float
    created_by: UserSummary
    created_at: datetime
    updated_at: datetime
    duration_days: int
    progress_percentage: int


class ProjectQuery(PageQuery):
    """Filters, sorting and paging for the project list."""
    status: Optional[ProjectStatus] = None
    client_id: Optional[UUID] = None
    sort_by: ProjectSortField = "createdAt"
    start_date_from: Optional[date] = None
    start_date_to: Optional[date] = None
    end_date_from: Optional[date] = None
    end_date_to: Optional[date] = None
    budget_min: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    budget_max: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class ProjectData(CamelModel):
    project: ProjectResponse


class ProjectListData(CamelModel):
    projects: List[ProjectResponse]
    pagination: Pagination


class ClientProjectsData(CamelModel):
    client: ClientReference
    projects: List[ProjectResponse]


class StatusBreakdown(CamelModel):
    status: ProjectStatus
    count: int
    total_budget: float
    avg_budget: int


class ProjectStats(CamelModel):
    total_projects: int
    total_budget: float
    status_breakdown: List[StatusBreakdown]
