"""
Authentication endpoint tests: signup, login, current user and token handling.
"""

import uuid

import pytest

from app.core.config import settings
from app.core.rate_limit import limiter
from app.core.security import issue_token
from app.models.user import UserRole
from app.services.auth_service import AuthService
from conftest import DEFAULT_PASSWORD


SIGNUP_BODY = {
    "name": "Jane Doe",
    "email": "Jane.Doe@Example.com",
    "password": "Passw0rd",
}


@pytest.mark.asyncio
async def test_signup_returns_user_and_token(test_client):
    response = await test_client.post("/api/auth/signup", json=SIGNUP_BODY)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "User registered successfully"

    user = body["data"]["user"]
    assert user["email"] == "jane.doe@example.com"
    assert user["role"] == "user"
    assert "createdAt" in user
    assert "password" not in user
    assert "passwordHash" not in user
    assert body["data"]["token"]


@pytest.mark.asyncio
async def test_signup_duplicate_email_conflicts(test_client):
    await test_client.post("/api/auth/signup", json=SIGNUP_BODY)
    response = await test_client.post(
        "/api/auth/signup", json={**SIGNUP_BODY, "email": "jane.doe@example.com"}
    )

    assert response.status_code == 409
    assert response.json() == {
        "status": "error",
        "message": "User already exists with this email",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["short", "alllowercase1", "ALLUPPER1", "NoDigitsHere"])
async def test_signup_rejects_weak_password(test_client, password):
    response = await test_client.post(
        "/api/auth/signup", json={**SIGNUP_BODY, "password": password}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation error"
    assert any(error["field"] == "password" for error in body["details"])


@pytest.mark.asyncio
async def test_signup_reports_every_invalid_field(test_client):
    response = await test_client.post(
        "/api/auth/signup", json={"name": "J", "email": "not-an-email", "password": "x"}
    )

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["details"]}
    assert {"name", "email", "password"} <= fields


@pytest.mark.asyncio
async def test_signup_as_admin_is_forbidden_by_default(test_client):
    assert settings.ALLOW_ADMIN_SIGNUP is False
    response = await test_client.post(
        "/api/auth/signup", json={**SIGNUP_BODY, "role": "admin"}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_login_with_valid_credentials(test_client, regular_user):
    response = await test_client.post(
        "/api/auth/login",
        json={"email": "USER@example.com", "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["data"]["user"]["id"] == str(regular_user.id)
    assert body["data"]["token"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password",
    [("user@example.com", "WrongPass1"), ("nobody@example.com", DEFAULT_PASSWORD)],
)
async def test_login_with_bad_credentials(test_client, regular_user, email, password):
    response = await test_client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_me_returns_current_user(test_client, regular_user, user_headers):
    response = await test_client.get("/api/auth/me", headers=user_headers)

    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["id"] == str(regular_user.id)
    assert user["name"] == "Uma User"


@pytest.mark.asyncio
async def test_token_from_signup_authenticates(test_client):
    signup = await test_client.post("/api/auth/signup", json=SIGNUP_BODY)
    token = signup.json()["data"]["token"]

    response = await test_client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["user"]["email"] == "jane.doe@example.com"


@pytest.mark.asyncio
async def test_missing_token(test_client, database):
    response = await test_client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["message"] == "Not authorized, no token"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_invalid_token(test_client, database):
    response = await test_client.get(
        "/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Not authorized, token failed"


@pytest.mark.asyncio
async def test_token_for_unknown_user(test_client, database):
    token = issue_token(str(uuid.uuid4()))
    response = await test_client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Not authorized, user not found"


@pytest.mark.asyncio
async def test_login_is_rate_limited(test_client, regular_user):
    limiter.enabled = True
    limiter.reset()
    try:
        body = {"email": "user@example.com", "password": "WrongPass1"}
        statuses = [
            (await test_client.post("/api/auth/login", json=body)).status_code
            for _ in range(6)
        ]
    finally:
        limiter.reset()
        limiter.enabled = False

    assert statuses[:5] == [401] * 5
    assert statuses[5] == 429


@pytest.mark.asyncio
async def test_ensure_admin_is_idempotent(database):
    async with database.session_maker() as session:
        service = AuthService(session)
        first = await service.ensure_admin("root@example.com", "Secret123", "Root")
        second = await service.ensure_admin("ROOT@example.com", "Secret123", "Root")

    assert first.role == UserRole.ADMIN
    assert second is None


@pytest.mark.asyncio
async def test_seeded_admin_can_log_in(test_client, database):
    async with database.session_maker() as session:
        await AuthService(session).ensure_admin("root@example.com", "Secret123", "Root")

    response = await test_client.post(
        "/api/auth/login", json={"email": "root@example.com", "password": "Secret123"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["user"]["role"] == "admin"
