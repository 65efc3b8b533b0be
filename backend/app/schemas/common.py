"""
Shared schema building blocks: camelCase wire format, response envelope, pagination.
"""

import math
from typing import Generic, Optional, TypeVar, Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

SortOrder = Literal["asc", "desc"]

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        str_strip_whitespace = True


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope shared by all endpoints."""
    status: Literal["success"] = "success"
    message: Optional[str] = None
    data: Optional[DataT] = None


class MessageResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str


class Pagination(CamelModel):
    """Pagination metadata for list endpoints."""
    current_page: int
    total_pages: int
    total_records: int
    has_next_page: bool
    has_prev_page: bool
    limit: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_records=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
            limit=limit,
        )


class PageQuery(CamelModel):
    """Common list query parameters."""
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    search: Optional[str] = None
    sort_order: SortOrder = "desc"

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"
