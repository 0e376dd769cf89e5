"""Application database model.

One row per (student, project) pair; the unique constraint is what stops two
concurrent applies from both succeeding.
"""

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class ApplicationModel(Base):
    """Student application to a project."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("student_id", "project_id", name="uq_application_student_project"),
    )

    application_id = Column(String, primary_key=True, index=True)
    student_id = Column(
        String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False
    )
    project_id = Column(
        String, ForeignKey("projects.project_id", ondelete="CASCADE"), index=True, nullable=False
    )
    status = Column(String, nullable=False, default="pending")  # pending/accepted/rejected
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    project = relationship("ProjectModel", back_populates="applications")
