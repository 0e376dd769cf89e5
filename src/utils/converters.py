"""Conversions between ORM models and pydantic schemas."""

from models.application import ApplicationModel
from models.invite import InviteModel
from models.user import UserModel
from schemas.application import Application
from schemas.invite import Invite
from schemas.user import User


def user_to_model(user: User) -> UserModel:
    return UserModel(**user.model_dump())


def model_to_user(model: UserModel) -> User:
    return User(
        user_id=model.user_id,
        name=model.name,
        email=model.email,
        password_hash=model.password_hash,
        role=model.role,
        skills=list(model.skills or []),
        availability=model.availability or "",
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def model_to_application(model: ApplicationModel) -> Application:
    return Application(
        application_id=model.application_id,
        student_id=model.student_id,
        project_id=model.project_id,
        status=model.status,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def model_to_invite(model: InviteModel) -> Invite:
    return Invite(
        invite_id=model.invite_id,
        from_id=model.from_id,
        to_id=model.to_id,
        message=model.message,
        goal=model.goal,
        role=model.role,
        status=model.status,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
