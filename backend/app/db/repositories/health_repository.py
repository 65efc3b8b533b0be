"""
Database connectivity probe.
"""

import time
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger

logger = get_logger(__name__)


class HealthRepository:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def ping(self) -> Optional[float]:
        """
        Round-trip a trivial query.

        Returns:
            Latency in milliseconds, or None when the database is unreachable
        """
        started = time.perf_counter()
        try:
            await self.session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed", extra={"error": str(e)})
            return None
        return round((time.perf_counter() - started) * 1000, 2)
