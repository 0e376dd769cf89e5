"""Project schema definitions."""

from typing import List, Optional

from pydantic import BaseModel, Field


class CreateProjectRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    required_skills: List[str] = Field(default_factory=list)


class ProjectInfo(BaseModel):
    """A project as listed to users.

    ``matched_skills`` and ``match_percentage`` are only filled in for
    student callers.
    """

    project_id: str
    title: str
    description: str
    required_skills: List[str] = Field(default_factory=list)
    created_by: str
    creator_name: Optional[str] = None
    created_at: str
    matched_skills: Optional[List[str]] = None
    match_percentage: Optional[int] = None


class AcceptedProjectInfo(BaseModel):
    application_id: str
    status: str
    project: ProjectInfo
