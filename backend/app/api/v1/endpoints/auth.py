"""
Authentication API endpoints: signup, login and current user.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.middleware import require_authentication
from app.controllers.auth_controller import AuthController
from app.core.config import settings
from app.core.rate_limit import limiter
from app.db.session import get_db
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.user import AuthData, LoginRequest, SignupRequest, UserData

router = APIRouter()


@router.post("/signup", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def signup(
    request: Request,
    signup_data: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """Register a user and return an access token."""
    controller = AuthController(db)
    return await controller.signup(signup_data)


@router.post("/login", response_model=ApiResponse[AuthData])
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Exchange email and password for an access token."""
    controller = AuthController(db)
    return await controller.login(login_data)


@router.get("/me", response_model=ApiResponse[UserData])
async def me(
    current_user: User = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Return the authenticated user."""
    controller = AuthController(db)
    return controller.me(current_user)
