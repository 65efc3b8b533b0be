"""
Authentication controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.auth_service import AuthService
from app.schemas.common import ApiResponse
from app.schemas.user import AuthData, LoginRequest, SignupRequest, UserData, UserInfo


class AuthController:
    """Controller for signup, login and the current user."""

    def __init__(self, session: AsyncSession):
        self.auth_service = AuthService(session)

    async def signup(self, signup_data: SignupRequest) -> ApiResponse[AuthData]:
        data = await self.auth_service.signup(signup_data)
        return ApiResponse(message="User registered successfully", data=data)

    async def login(self, login_data: LoginRequest) -> ApiResponse[AuthData]:
        data = await self.auth_service.login(login_data)
        return ApiResponse(message="Login successful", data=data)

    def me(self, user: User) -> ApiResponse[UserData]:
        return ApiResponse(data=UserData(user=UserInfo.model_validate(user)))
