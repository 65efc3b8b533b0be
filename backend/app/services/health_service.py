"""
Health service.
Reports uptime and whether the database answers.
"""

import time
from typing import Optional

from app.core.config import settings
from app.db.repositories.health_repository import HealthRepository
from app.db.session import Database
from app.schemas.health import HealthResponse


class HealthService:
    """Liveness for the process, readiness for the database."""

    def __init__(self, database: Database, started_at: Optional[float] = None):
        self.database = database
        # monotonic clock reading taken when the process started
        self.started_at = started_at if started_at is not None else time.monotonic()

    def uptime(self) -> str:
        """Seconds since the service started, as an ISO 8601 duration."""
        return f"PT{int(time.monotonic() - self.started_at)}S"

    async def get_health(self) -> HealthResponse:
        async with self.database.session_maker() as session:
            latency = await HealthRepository(session).ping()

        checks = {"database": "ok" if latency is not None else "error"}
        return HealthResponse(
            status="ok" if latency is not None else "degraded",
            version=settings.VERSION,
            environment=settings.ENVIRONMENT,
            uptime=self.uptime(),
            checks=checks,
            database_latency_ms=latency,
        )
