from sqlalchemy import JSON, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class ProjectModel(Base):
    __tablename__ = "projects"

    project_id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    required_skills = Column(JSON, nullable=False, default=list)
    created_by = Column(
        String, ForeignKey("users.user_id"), index=True, nullable=False
    )
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    applications = relationship(
        "ApplicationModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
