"""
Client model for customer management.
"""

from sqlalchemy import Column, String, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, TimestampMixin


class ClientStatus(str, enum.Enum):
    """Client status enumeration."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class Client(TimestampMixin, Base):
    """Client model for customer management. Clients are deactivated, never deleted."""

    __tablename__ = "clients"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=False)
    company = Column(String(100), nullable=False, index=True)
    address = Column(String(200), nullable=True)
    status = Column(SQLEnum(ClientStatus), nullable=False, default=ClientStatus.ACTIVE, index=True)

    # Relationships
    projects = relationship("Project", back_populates="client")
