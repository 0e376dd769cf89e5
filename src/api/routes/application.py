"""Application routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.errors import to_http_exception
from api.routes.auth import get_current_user
from core.dependencies import ApplicationManagerDep
from core.exceptions import TeamBuilderError
from schemas.application import Application, ApplyRequest, StudentApplication
from schemas.user import User

router = APIRouter(prefix="/api/applications", tags=["Application"])


def _decide(
    application_id: str,
    outcome: str,
    application_manager,
    current_user: User,
) -> Application:
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can decide applications.",
        )
    try:
        return application_manager.decide(application_id, current_user.user_id, outcome)
    except TeamBuilderError as exc:
        raise to_http_exception(exc)


@router.post("", response_model=Application, summary="Apply to a project")
def apply(
    req: ApplyRequest,
    application_manager: ApplicationManagerDep,
    current_user: User = Depends(get_current_user),
) -> Application:
    if current_user.role != "student":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only students can apply.",
        )
    try:
        return application_manager.apply(current_user.user_id, req.project_id)
    except TeamBuilderError as exc:
        raise to_http_exception(exc)


@router.get("/mine", response_model=List[StudentApplication], summary="My applications")
def list_my_applications(
    application_manager: ApplicationManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[StudentApplication]:
    return application_manager.list_for_student(current_user.user_id)


@router.post(
    "/{application_id}/accept", response_model=Application, summary="Accept an applicant"
)
def accept_application(
    application_id: str,
    application_manager: ApplicationManagerDep,
    current_user: User = Depends(get_current_user),
) -> Application:
    return _decide(application_id, "accepted", application_manager, current_user)


@router.post(
    "/{application_id}/reject", response_model=Application, summary="Reject an applicant"
)
def reject_application(
    application_id: str,
    application_manager: ApplicationManagerDep,
    current_user: User = Depends(get_current_user),
) -> Application:
    return _decide(application_id, "rejected", application_manager, current_user)
