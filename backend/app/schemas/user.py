"""
User and authentication schemas.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.models.user import UserRole
from app.schemas.common import CamelModel


class SignupRequest(CamelModel):
    """Registration payload."""
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.USER

    class Config:
        str_strip_whitespace = False

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not (
            any(c.islower() for c in value)
            and any(c.isupper() for c in value)
            and any(c.isdigit() for c in value)
        ):
            raise ValueError(
                "Password must contain at least one uppercase letter, one lowercase letter, and one number"
            )
        return value


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    class Config:
        str_strip_whitespace = False

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserInfo(CamelModel):
    """Public user fields."""
    id: UUID
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserSummary(CamelModel):
    """User as shown inside a project."""
    id: UUID
    name: str
    email: str


class UserData(CamelModel):
    user: UserInfo


class AuthData(CamelModel):
    """Login/signup payload: the user and a bearer token."""
    user: UserInfo
    token: str
