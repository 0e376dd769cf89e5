"""Profile and student directory routes."""

from typing import List

from fastapi import APIRouter, Depends

from api.errors import to_http_exception
from api.routes.auth import get_current_user
from core.dependencies import UserManagerDep
from core.exceptions import TeamBuilderError
from schemas.user import PublicUser, UpdateProfileRequest, User

router = APIRouter(prefix="/api", tags=["Profile"])


@router.get("/profile", response_model=PublicUser, summary="Get own profile")
def get_profile(current_user: User = Depends(get_current_user)) -> PublicUser:
    return PublicUser.from_user(current_user)


@router.put("/profile", response_model=PublicUser, summary="Update own profile")
def update_profile(
    req: UpdateProfileRequest,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> PublicUser:
    """Update the caller's skills and/or availability.

    Only the fields present in the request are changed.
    """
    try:
        user = user_manager.update_profile(
            current_user.user_id,
            skills=req.skills,
            availability=req.availability,
        )
    except TeamBuilderError as exc:
        raise to_http_exception(exc)
    return PublicUser.from_user(user)


@router.get("/students", response_model=List[PublicUser], summary="List students")
def list_students(
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[PublicUser]:
    students = user_manager.list_students(exclude_user_id=current_user.user_id)
    return [PublicUser.from_user(s) for s in students]
