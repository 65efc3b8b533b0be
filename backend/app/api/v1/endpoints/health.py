"""
Public health endpoint.
"""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Database unreachable"}},
)
async def get_health(request: Request):
    """Service status, uptime and dependency checks. 503 when degraded."""
    controller = request.app.state.container.health_controller()
    return await controller.get_health()
