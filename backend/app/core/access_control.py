"""
Access control policy.

Roles gate the administrative client operations; project deletion is
additionally open to the project's creator.
"""

from typing import Iterable

from app.core.exceptions import ForbiddenError
from app.models.project import Project
from app.models.user import User, UserRole


def ensure_role(user: User, allowed: Iterable[UserRole]) -> None:
    """Raise ForbiddenError unless the user holds one of the allowed roles."""
    if user.role not in set(allowed):
        raise ForbiddenError(
            f"User role {user.role.value} is not authorized to access this route"
        )


def is_admin(user: User) -> bool:
    return user.role == UserRole.ADMIN


def can_delete_project(user: User, project: Project) -> bool:
    """Creator or admin."""
    return is_admin(user) or project.created_by == user.id
