"""
Health controller.
"""

from fastapi import status
from fastapi.responses import JSONResponse

from app.services.health_service import HealthService


class HealthController:
    """Maps the health report onto an HTTP response; degraded answers 503."""

    def __init__(self, health_service: HealthService):
        self.health_service = health_service

    async def get_health(self) -> JSONResponse:
        report = await self.health_service.get_health()
        code = status.HTTP_200_OK if report.status == "ok" else status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(status_code=code, content=report.model_dump(mode="json"))
