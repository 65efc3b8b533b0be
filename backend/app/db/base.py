"""
SQLAlchemy declarative base for models.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware DateTime; values read back without an offset are UTC (SQLite)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class TimestampMixin:
    """created_at / updated_at columns maintained by the application."""

    created_at = Column(UTCDateTime, nullable=False, default=utc_now, index=True)
    updated_at = Column(UTCDateTime, nullable=False, default=utc_now, onupdate=utc_now)
