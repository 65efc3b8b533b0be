"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1.router import api_router
from app.api.v1.endpoints.health import get_health
from app.core.config import settings
from app.core.exceptions import setup_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.core.rate_limit import limiter
from app.db.init_db import create_tables, seed_initial_data
from app.deps.di_container import Container

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Opens the database, builds the DI container and seeds initial data.
    """
    # Startup
    started_at = time.monotonic()
    setup_logging()

    container = Container()
    container.config.from_dict({
        "database_url": settings.DATABASE_URL,
        "db_echo": settings.DB_ECHO,
        "started_at": started_at,
    })
    database = container.database()
    container.health_service()

    # Store handles in app state for access in routes
    app.state.container = container
    app.state.database = database

    await create_tables(database)
    await seed_initial_data(database)
    logger.info(
        "Application started",
        extra={"environment": settings.ENVIRONMENT, "version": settings.VERSION},
    )

    yield

    # Shutdown
    await database.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Client and project management API",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health", response_model=None, include_in_schema=False)
    async def root_health(request: Request):
        """Root-level health check endpoint."""
        return await get_health(request)

    setup_exception_handlers(app)

    return app


app = create_app()
