"""
Database session management with async SQLAlchemy 2.0.
The Database handle owns the engine and session factory; the application
opens it at startup, keeps it on app.state and disposes it at shutdown.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from fastapi import Request
from typing import AsyncGenerator

from app.core.logging import get_logger
from app.db.base import Base

logger = get_logger(__name__)


class Database:
    """Engine plus sessionmaker for one database URL."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = self._create_engine(url, echo)
        self.session_maker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _create_engine(url: str, echo: bool) -> AsyncEngine:
        """Create async SQLAlchemy engine with connection pooling."""
        if url.startswith("sqlite"):
            # In-memory SQLite must share a single connection
            return create_async_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )

        pool_size = 5
        max_overflow = 10
        engine = create_async_engine(
            url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,  # Verify connections before using
        )
        logger.info(
            "Database engine created",
            extra={
                "pool_size": pool_size,
                "max_overflow": max_overflow,
            },
        )
        return engine

    async def create_tables(self) -> None:
        """Create all tables registered on Base."""
        import app.models  # noqa: F401  (registers models)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session and ensure it's closed after use.
        Commits on success, rolls back on error.
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close database connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting a database session from the application's Database.
    """
    database: Database = request.app.state.database
    async for session in database.session():
        yield session
