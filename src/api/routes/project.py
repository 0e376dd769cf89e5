"""Project routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.errors import to_http_exception
from api.routes.auth import get_current_user
from core.dependencies import ApplicationManagerDep, ProjectManagerDep
from core.exceptions import TeamBuilderError
from schemas.application import ProjectApplication
from schemas.project import AcceptedProjectInfo, CreateProjectRequest, ProjectInfo
from schemas.user import User

router = APIRouter(prefix="/api/projects", tags=["Project"])


@router.post("", response_model=ProjectInfo, summary="Create a project")
def create_project(
    req: CreateProjectRequest,
    project_manager: ProjectManagerDep,
    current_user: User = Depends(get_current_user),
) -> ProjectInfo:
    try:
        return project_manager.create_project(
            current_user,
            title=req.title,
            description=req.description,
            required_skills=req.required_skills,
        )
    except TeamBuilderError as exc:
        raise to_http_exception(exc)


@router.get("", response_model=List[ProjectInfo], summary="List projects")
def list_projects(
    project_manager: ProjectManagerDep,
    search: Optional[str] = None,
    skill: Optional[str] = None,
    current_user: User = Depends(get_current_user),
) -> List[ProjectInfo]:
    """List projects, filtered by title search and/or required skill.

    Students see their match percentage on every project.
    """
    return project_manager.list_projects(current_user, search=search, skill=skill)


@router.get(
    "/accepted",
    response_model=List[AcceptedProjectInfo],
    summary="Projects the caller was accepted into",
)
def list_accepted_projects(
    project_manager: ProjectManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[AcceptedProjectInfo]:
    return project_manager.list_accepted_projects(current_user.user_id)


@router.delete("/{project_id}", summary="Delete a project")
def delete_project(
    project_id: str,
    project_manager: ProjectManagerDep,
    current_user: User = Depends(get_current_user),
) -> dict:
    """Delete a project and every application to it.

    Only the admin who created the project can delete it.
    """
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can delete projects.",
        )
    try:
        project_manager.delete_project(project_id, current_user.user_id)
    except TeamBuilderError as exc:
        raise to_http_exception(exc)
    return {"success": True, "message": "Project deleted"}


@router.get(
    "/{project_id}/applications",
    response_model=List[ProjectApplication],
    summary="List applications to a project",
)
def list_project_applications(
    project_id: str,
    application_manager: ApplicationManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[ProjectApplication]:
    """List applicants with their skill match against the project."""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can view project applications.",
        )
    try:
        return application_manager.list_for_project(project_id, current_user.user_id)
    except TeamBuilderError as exc:
        raise to_http_exception(exc)
