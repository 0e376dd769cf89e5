"""Application lifecycle management.

Applications move from ``pending`` to ``accepted`` or ``rejected``. Deciding
again overwrites the previous outcome; only the project owner may decide.
"""

import logging
import uuid
from datetime import datetime
from typing import List

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from models.application import ApplicationModel
from models.project import ProjectModel
from models.user import UserModel
from schemas.application import (
    ApplicantInfo,
    Application,
    ProjectApplication,
    StudentApplication,
)
from utils.converters import model_to_application
from utils.skill_matcher import match_skills

logger = logging.getLogger(__name__)

APPLICATION_PENDING = "pending"
APPLICATION_OUTCOMES = ("accepted", "rejected")


class ApplicationManager:
    """Manages student applications to projects."""

    def __init__(self, db: Session):
        self.db = db

    def _get_project(self, project_id: str) -> ProjectModel:
        model = (
            self.db.query(ProjectModel)
            .filter(ProjectModel.project_id == project_id)
            .first()
        )
        if not model:
            raise NotFoundError("Project", project_id)
        return model

    def apply(self, student_id: str, project_id: str) -> Application:
        """Create a pending application for (student, project).

        Args:
            student_id: Applying student.
            project_id: Target project.

        Returns:
            The new Application.

        Raises:
            NotFoundError: If the project does not exist.
            ConflictError: If the student already applied (any status).
        """
        self._get_project(project_id)

        existing = (
            self.db.query(ApplicationModel)
            .filter(
                ApplicationModel.student_id == student_id,
                ApplicationModel.project_id == project_id,
            )
            .first()
        )
        if existing:
            raise ConflictError("Already applied")

        now = datetime.now(pytz.utc).isoformat()
        model = ApplicationModel(
            application_id=str(uuid.uuid4()),
            student_id=student_id,
            project_id=project_id,
            status=APPLICATION_PENDING,
            created_at=now,
            updated_at=now,
        )
        # The unique constraint settles concurrent applies that both passed
        # the check above.
        try:
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Already applied") from e
        self.db.refresh(model)

        logger.info(
            "Student %s applied to project %s (%s)",
            student_id,
            project_id,
            model.application_id,
        )
        return model_to_application(model)

    def decide(
        self, application_id: str, acting_admin_id: str, outcome: str
    ) -> Application:
        """Accept or reject an application.

        The status is overwritten unconditionally, so a decided application
        can be flipped by its project owner.

        Raises:
            InvalidInputError: If outcome is not accepted/rejected.
            NotFoundError: If the application (or its project) is missing.
            ForbiddenError: If the acting admin does not own the project.
        """
        if outcome not in APPLICATION_OUTCOMES:
            raise InvalidInputError(f"Invalid outcome: {outcome}")

        model = (
            self.db.query(ApplicationModel)
            .filter(ApplicationModel.application_id == application_id)
            .first()
        )
        if not model:
            raise NotFoundError("Application", application_id)

        project = (
            self.db.query(ProjectModel)
            .filter(ProjectModel.project_id == model.project_id)
            .first()
        )
        if not project:
            raise NotFoundError("Application", application_id)
        if project.created_by != acting_admin_id:
            raise ForbiddenError("Not your project")

        previous = model.status
        model.status = outcome
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        self.db.refresh(model)
        logger.info(
            "Application %s: %s -> %s by %s",
            application_id,
            previous,
            outcome,
            acting_admin_id,
        )
        return model_to_application(model)

    def list_for_student(self, student_id: str) -> List[StudentApplication]:
        """List a student's applications, newest first.

        The inner join drops applications whose project no longer exists.
        """
        rows = (
            self.db.query(ApplicationModel, ProjectModel)
            .join(ProjectModel, ProjectModel.project_id == ApplicationModel.project_id)
            .filter(ApplicationModel.student_id == student_id)
            .order_by(
                ApplicationModel.created_at.desc(), ApplicationModel.application_id.desc()
            )
            .all()
        )
        return [
            StudentApplication(
                application_id=application.application_id,
                status=application.status,
                created_at=application.created_at,
                project_id=project.project_id,
                title=project.title,
                description=project.description,
                required_skills=list(project.required_skills or []),
            )
            for application, project in rows
        ]

    def list_for_project(
        self, project_id: str, acting_admin_id: str
    ) -> List[ProjectApplication]:
        """List a project's applications with each applicant's skill match.

        Raises:
            NotFoundError: If the project does not exist.
            ForbiddenError: If the acting admin does not own the project.
        """
        project = self._get_project(project_id)
        if project.created_by != acting_admin_id:
            raise ForbiddenError("Not your project")

        required = list(project.required_skills or [])
        rows = (
            self.db.query(ApplicationModel, UserModel)
            .join(UserModel, UserModel.user_id == ApplicationModel.student_id)
            .filter(ApplicationModel.project_id == project_id)
            .order_by(
                ApplicationModel.created_at.asc(), ApplicationModel.application_id.asc()
            )
            .all()
        )
        results = []
        for application, student in rows:
            match = match_skills(student.skills or [], required)
            results.append(
                ProjectApplication(
                    application_id=application.application_id,
                    status=application.status,
                    created_at=application.created_at,
                    student=ApplicantInfo(
                        user_id=student.user_id,
                        name=student.name,
                        skills=list(student.skills or []),
                        availability=student.availability or "",
                    ),
                    matched_skills=match.matched_skills,
                    match_percentage=match.match_percentage,
                )
            )
        return results
