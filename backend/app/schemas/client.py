"""
Client Pydantic schemas for request/response validation.
"""

from pydantic import EmailStr, Field, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import date, datetime
from uuid import UUID

from app.models.client import ClientStatus
from app.models.project import ProjectStatus
from app.schemas.common import CamelModel, PageQuery, Pagination

ClientSortField = Literal["name", "company", "createdAt", "updatedAt"]


class ClientBase(CamelModel):
    """Base client schema with common fields."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=20)
    company: str = Field(..., min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=200)
    status: ClientStatus = ClientStatus.ACTIVE

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class ClientCreate(ClientBase):
    """Schema for creating a client."""

    class Config:
        extra = "forbid"


class ClientUpdate(CamelModel):
    """Schema for updating a client (all fields optional, at least one required)."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=10, max_length=20)
    company: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=200)
    status: Optional[ClientStatus] = None

    class Config:
        extra = "forbid"

    @field_validator("name", "email", "phone", "company", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value else value

    @model_validator(mode="after")
    def require_one_field(self) -> "ClientUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class ClientProjectBrief(CamelModel):
    """Project fields embedded in a client detail response."""
    id: UUID
    title: str
    status: ProjectStatus
    start_date: date
    end_date: date
    budget: float


class ClientResponse(ClientBase):
    """Schema for client response."""
    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime
    project_count: Optional[int] = None


class ClientDetailResponse(ClientResponse):
    """Client with its projects, newest first."""
    projects: List[ClientProjectBrief] = []


class ClientSummary(CamelModel):
    """Client as shown inside a project."""
    id: UUID
    name: str
    company: str
    email: str


class ClientReference(CamelModel):
    id: UUID
    name: str
    company: str


class ClientQuery(PageQuery):
    """Filters, sorting and paging for the client list."""
    status: Optional[ClientStatus] = None
    sort_by: ClientSortField = "createdAt"


class ClientData(CamelModel):
    client: ClientResponse


class ClientDetailData(CamelModel):
    client: ClientDetailResponse


class ClientListData(CamelModel):
    clients: List[ClientResponse]
    pagination: Pagination
