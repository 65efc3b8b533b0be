"""
API router that aggregates all endpoint routers.
All routes require authentication except health and auth endpoints.
"""

from fastapi import APIRouter, Depends
from app.api.v1.middleware import require_authentication

from app.api.v1.endpoints import (
    health,
    auth,
    clients,
    projects,
)

api_router = APIRouter()

# Public routes (no authentication required)
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])

# Protected routes (authentication required for all endpoints)
api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["clients"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    projects.router,
    prefix="/projects",
    tags=["projects"],
    dependencies=[Depends(require_authentication)],
)
