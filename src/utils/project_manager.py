"""Project management utilities."""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from core.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from models.application import ApplicationModel
from models.project import ProjectModel
from models.user import UserModel
from schemas.project import AcceptedProjectInfo, ProjectInfo
from schemas.user import User
from utils.skill_matcher import match_skills, normalize_skills

logger = logging.getLogger(__name__)


def _build_project_info(
    model: ProjectModel, creator_name: Optional[str] = None
) -> ProjectInfo:
    return ProjectInfo(
        project_id=model.project_id,
        title=model.title,
        description=model.description,
        required_skills=list(model.required_skills or []),
        created_by=model.created_by,
        creator_name=creator_name,
        created_at=model.created_at,
    )


class ProjectManager:
    """Manages project creation, listing and cascading deletion."""

    def __init__(self, db: Session):
        self.db = db

    def create_project(
        self,
        owner: User,
        title: str,
        description: str,
        required_skills: Optional[List[str]] = None,
    ) -> ProjectInfo:
        """Create a project owned by an admin.

        Raises:
            ForbiddenError: If the owner is not an admin.
            InvalidInputError: If title or description is blank.
        """
        if owner.role != "admin":
            raise ForbiddenError("Only admins can create projects")
        title = (title or "").strip()
        description = (description or "").strip()
        if not title or not description:
            raise InvalidInputError("Title and description required")

        now = datetime.now(pytz.utc).isoformat()
        model = ProjectModel(
            project_id=str(uuid.uuid4()),
            title=title,
            description=description,
            required_skills=normalize_skills(required_skills or []),
            created_by=owner.user_id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created project %s by %s", model.project_id, owner.user_id)
        return _build_project_info(model, creator_name=owner.name)

    def get_project(self, project_id: str) -> ProjectModel:
        model = (
            self.db.query(ProjectModel)
            .filter(ProjectModel.project_id == project_id)
            .first()
        )
        if not model:
            raise NotFoundError("Project", project_id)
        return model

    def list_projects(
        self,
        viewer: User,
        search: Optional[str] = None,
        skill: Optional[str] = None,
    ) -> List[ProjectInfo]:
        """List projects, newest first, with optional filters.

        Student viewers get each project annotated with their skill match.

        Args:
            viewer: The acting user.
            search: Case-insensitive substring of the title.
            skill: Case-insensitive substring of any required skill.

        Returns:
            List of ProjectInfo.
        """
        query = (
            self.db.query(ProjectModel, UserModel.name)
            .outerjoin(UserModel, UserModel.user_id == ProjectModel.created_by)
        )
        if search and search.strip():
            query = query.filter(ProjectModel.title.ilike(f"%{search.strip()}%"))
        rows = query.order_by(
            ProjectModel.created_at.desc(), ProjectModel.project_id.desc()
        ).all()

        needle = skill.strip().lower() if skill and skill.strip() else None
        results = []
        for model, creator_name in rows:
            required = list(model.required_skills or [])
            if needle and not any(needle in s.lower() for s in required):
                continue
            info = _build_project_info(model, creator_name=creator_name)
            if viewer.role == "student":
                match = match_skills(viewer.skills, required)
                info.matched_skills = match.matched_skills
                info.match_percentage = match.match_percentage
            results.append(info)
        return results

    def delete_project(self, project_id: str, acting_admin_id: str) -> None:
        """Delete a project and all of its applications.

        Both deletes share one transaction, so readers never see the project
        gone while its applications remain (or the reverse).

        Raises:
            NotFoundError: If the project does not exist.
            ForbiddenError: If the acting user did not create it.
        """
        model = self.get_project(project_id)
        if model.created_by != acting_admin_id:
            raise ForbiddenError("You can only delete your own projects")

        try:
            deleted = (
                self.db.query(ApplicationModel)
                .filter(ApplicationModel.project_id == project_id)
                .delete(synchronize_session=False)
            )
            self.db.delete(model)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(
            "Deleted project %s and %d application(s)", project_id, deleted
        )

    def list_accepted_projects(self, student_id: str) -> List[AcceptedProjectInfo]:
        """Projects where the student's application was accepted."""
        rows = (
            self.db.query(ApplicationModel, ProjectModel, UserModel.name)
            .join(ProjectModel, ProjectModel.project_id == ApplicationModel.project_id)
            .outerjoin(UserModel, UserModel.user_id == ProjectModel.created_by)
            .filter(
                ApplicationModel.student_id == student_id,
                ApplicationModel.status == "accepted",
            )
            .order_by(
                ApplicationModel.created_at.desc(), ApplicationModel.application_id.desc()
            )
            .all()
        )
        return [
            AcceptedProjectInfo(
                application_id=application.application_id,
                status=application.status,
                project=_build_project_info(project, creator_name=creator_name),
            )
            for application, project, creator_name in rows
        ]
