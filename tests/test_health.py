"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import time

import pytest
from dependency_injector import providers

from app.core.config import settings
from app.db.session import Database
from app.deps.di_container import Container
from app.services.health_service import HealthService


@pytest.mark.asyncio
async def test_health_endpoint(test_client):
    """Test the health check endpoint returns expected structure."""
    response = await test_client.get("/api/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["uptime"].startswith("PT")
    assert data["checks"] == {"database": "ok"}


@pytest.mark.asyncio
async def test_root_health_endpoint(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "ok"


@pytest.mark.asyncio
async def test_health_does_not_require_authentication(test_client):
    response = await test_client.get("/api/health", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_health_reports_version_and_latency(test_client):
    response = await test_client.get("/api/health")

    data = response.json()
    assert data["version"] == settings.VERSION
    assert data["environment"] == settings.ENVIRONMENT
    assert data["database_latency_ms"] >= 0


@pytest.mark.asyncio
async def test_health_degraded_when_database_unreachable():
    database = Database("sqlite+aiosqlite:////nonexistent-dir/health.db")
    try:
        report = await HealthService(database).get_health()
    finally:
        await database.dispose()

    assert report.status == "degraded"
    assert report.checks == {"database": "error"}
    assert report.database_latency_ms is None


def test_uptime_counts_from_process_start():
    service = HealthService(Database("sqlite+aiosqlite:///:memory:"), started_at=time.monotonic() - 90)
    assert service.uptime() == "PT90S"


def test_container_passes_start_time_to_health_service():
    container = Container()
    container.database.override(providers.Object(Database("sqlite+aiosqlite:///:memory:")))
    container.config.from_dict({"started_at": 123.0})

    assert container.health_service().started_at == 123.0
