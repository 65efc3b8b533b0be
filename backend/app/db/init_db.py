"""
Database initialization and bootstrapping.
Table creation and initial data seeding, run from the application lifespan.
"""

from app.core.config import settings
from app.core.logging import get_logger
from app.db.session import Database
from app.services.auth_service import AuthService

logger = get_logger(__name__)


async def create_tables(database: Database) -> None:
    """
    Create all database tables when DB_CREATE_TABLES is enabled.
    """
    if not settings.DB_CREATE_TABLES:
        logger.info("Tables creation skipped (DB_CREATE_TABLES disabled)")
        return
    await database.create_tables()


async def seed_initial_data(database: Database) -> None:
    """
    Seed the bootstrap admin account if one is configured.
    """
    if not (settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD):
        logger.info("Initial data seeding skipped")
        return

    async with database.session_maker() as session:
        await AuthService(session).ensure_admin(
            email=settings.FIRST_ADMIN_EMAIL,
            password=settings.FIRST_ADMIN_PASSWORD,
            name=settings.FIRST_ADMIN_NAME,
        )
