"""
Authentication service.
Registers users, checks credentials and issues access tokens.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, ForbiddenError, UnauthenticatedError
from app.core.logging import get_logger
from app.core.security import (
    decode_access_token,
    hash_password,
    issue_token,
    verify_password,
)
from app.db.repositories.user_repository import UserRepository
from app.models.user import User, UserRole
from app.schemas.user import AuthData, SignupRequest, LoginRequest, UserInfo

logger = get_logger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def signup(self, signup_data: SignupRequest) -> AuthData:
        """
        Register a new user and log them in.

        Raises:
            ConflictError: If the email is already registered
            ForbiddenError: If an admin role is requested while admin signup is disabled
        """
        if signup_data.role == UserRole.ADMIN and not settings.ALLOW_ADMIN_SIGNUP:
            raise ForbiddenError("Admin accounts cannot be created through signup")

        if await self.user_repo.get_by_email(signup_data.email):
            raise ConflictError("User already exists with this email")

        user = await self.user_repo.create(
            name=signup_data.name,
            email=signup_data.email,
            password_hash=hash_password(signup_data.password),
            role=signup_data.role,
        )
        await self.session.commit()

        logger.info("User registered", extra={"user_id": str(user.id), "role": user.role.value})
        return self._auth_data(user)

    async def login(self, login_data: LoginRequest) -> AuthData:
        """
        Check email and password and issue a token.

        Raises:
            UnauthenticatedError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.get_by_email(login_data.email)
        if not user or not verify_password(login_data.password, user.password_hash):
            raise UnauthenticatedError("Invalid credentials")

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return self._auth_data(user)

    async def authenticate(self, token: Optional[str]) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            UnauthenticatedError: If the token is missing, invalid or its user no longer exists
        """
        if not token:
            raise UnauthenticatedError("Not authorized, no token")

        payload = decode_access_token(token)
        if not payload or not payload.get("sub"):
            raise UnauthenticatedError("Not authorized, token failed")

        try:
            user_id = UUID(str(payload["sub"]))
        except ValueError:
            raise UnauthenticatedError("Not authorized, token failed")

        user = await self.user_repo.get(user_id)
        if not user:
            raise UnauthenticatedError("Not authorized, user not found")
        return user

    async def ensure_admin(self, email: str, password: str, name: str) -> Optional[User]:
        """Create the bootstrap admin unless that email is already registered."""
        if await self.user_repo.get_by_email(email):
            return None

        user = await self.user_repo.create(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password),
            role=UserRole.ADMIN,
        )
        await self.session.commit()
        logger.info("Bootstrap admin created", extra={"user_id": str(user.id)})
        return user

    def _auth_data(self, user: User) -> AuthData:
        return AuthData(
            user=UserInfo.model_validate(user),
            token=issue_token(str(user.id)),
        )
