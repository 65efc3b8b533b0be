"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from app.models.user import User, UserRole
from app.models.client import Client, ClientStatus
from app.models.project import Project, ProjectStatus

__all__ = [
    "User",
    "UserRole",
    "Client",
    "ClientStatus",
    "Project",
    "ProjectStatus",
]
