"""
Project model. Each project belongs to one client and records its creator.
"""

from sqlalchemy import Column, String, Text, Float, Date, ForeignKey, Index, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, TimestampMixin


class ProjectStatus(str, enum.Enum):
    """Project status enumeration."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# Statuses that still count as work in flight for the owning client
OPEN_PROJECT_STATUSES = (ProjectStatus.PENDING, ProjectStatus.IN_PROGRESS)


class Project(TimestampMixin, Base):
    """Project model."""

    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_client_id_status", "client_id", "status"),
        Index("ix_projects_status_start_date", "status", "start_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=False)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id"), nullable=False, index=True)
    status = Column(SQLEnum(ProjectStatus), nullable=False, default=ProjectStatus.PENDING, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    budget = Column(Float, nullable=False)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    client = relationship("Client", back_populates="projects")
    creator = relationship("User", back_populates="projects")
