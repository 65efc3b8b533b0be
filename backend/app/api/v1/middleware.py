"""
API middleware for authentication and authorization.
Centralized authentication enforcement for all protected routes.
"""

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.access_control import ensure_role
from app.db.session import get_db
from app.models.user import User, UserRole
from app.services.auth_service import AuthService

security = HTTPBearer(auto_error=False)


async def require_authentication(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Centralized authentication dependency.
    This should be used as a dependency on all protected routes.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(
            current_user: User = Depends(require_authentication)
        ):
            ...

    Raises:
        UnauthenticatedError: If the bearer token is missing or invalid
    """
    token = credentials.credentials if credentials else None
    return await AuthService(db).authenticate(token)


def require_roles(*roles: UserRole) -> Callable:
    """
    Build a dependency that only lets the given roles through.

    Usage:
        @router.post("", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """
    async def dependency(current_user: User = Depends(require_authentication)) -> User:
        ensure_role(current_user, roles)
        return current_user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
