"""
Pytest configuration and fixtures.
Provides the test app client on an in-memory SQLite database, seeded users and record factories.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import uuid

import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.core.security import hash_password, issue_token
from app.db.repositories.user_repository import UserRepository
from app.db.session import Database
from app.deps.di_container import Container
from app.models.user import UserRole


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "Secret123"


@pytest.fixture(scope="function")
async def database():
    """
    Create a fresh in-memory database and attach it to the app.
    """
    test_database = Database(TEST_DATABASE_URL)
    await test_database.create_tables()

    container = Container()
    container.database.override(providers.Object(test_database))

    app.state.database = test_database
    app.state.container = container

    yield test_database

    await test_database.drop_tables()
    await test_database.dispose()


@pytest.fixture(scope="function")
async def test_client(database):
    """
    Create a test HTTP client.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _make_user(database: Database, name: str, email: str, role: UserRole):
    async with database.session_maker() as session:
        user = await UserRepository(session).create(
            name=name,
            email=email,
            password_hash=hash_password(DEFAULT_PASSWORD),
            role=role,
        )
        await session.commit()
        return user


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {issue_token(str(user.id))}"}


@pytest.fixture
async def admin_user(database):
    return await _make_user(database, "Alice Admin", "admin@example.com", UserRole.ADMIN)


@pytest.fixture
async def regular_user(database):
    return await _make_user(database, "Uma User", "user@example.com", UserRole.USER)


@pytest.fixture
async def other_user(database):
    return await _make_user(database, "Oscar Other", "other@example.com", UserRole.USER)


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def user_headers(regular_user):
    return auth_headers(regular_user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture
def client_payload():
    """Build a valid client body with a unique email."""
    def _payload(**overrides):
        payload = {
            "name": "Acme Corp",
            "email": f"contact-{uuid.uuid4().hex[:8]}@acme.com",
            "phone": "+1-555-0100",
            "company": "Acme Corporation",
            "address": "1 Main Street",
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def create_client_record(test_client, admin_headers, client_payload):
    """Create a client through the API as admin and return its JSON."""
    async def _create(**overrides):
        response = await test_client.post(
            "/api/clients", json=client_payload(**overrides), headers=admin_headers
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["client"]
    return _create


@pytest.fixture
def project_payload():
    """Build a valid project body for the given client."""
    def _payload(client_id: str, **overrides):
        payload = {
            "title": "Website Redesign",
            "description": "Redesign the public marketing website",
            "clientId": client_id,
            "startDate": "2024-01-01",
            "endDate": "2024-01-31",
            "budget": 5000,
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def create_project_record(test_client, user_headers, project_payload):
    """Create a project through the API (as the regular user by default) and return its JSON."""
    async def _create(client_id: str, headers: dict = None, **overrides):
        response = await test_client.post(
            "/api/projects",
            json=project_payload(client_id, **overrides),
            headers=headers or user_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["project"]
    return _create
