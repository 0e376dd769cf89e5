"""Application schema definitions.

Denormalised read views: the joins are done by the managers so routes never
hand out live ORM references.
"""

from typing import List

from pydantic import BaseModel, Field


class ApplyRequest(BaseModel):
    project_id: str = Field(min_length=1)


class Application(BaseModel):
    application_id: str
    student_id: str
    project_id: str
    status: str
    created_at: str
    updated_at: str


class ApplicantInfo(BaseModel):
    user_id: str
    name: str
    skills: List[str] = Field(default_factory=list)
    availability: str = ""


class ProjectApplication(BaseModel):
    """An application seen by the project owner, with the skill match."""

    application_id: str
    status: str
    created_at: str
    student: ApplicantInfo
    matched_skills: List[str] = Field(default_factory=list)
    match_percentage: int = 0


class StudentApplication(BaseModel):
    """An application seen by the applicant; no match score."""

    application_id: str
    status: str
    created_at: str
    project_id: str
    title: str
    description: str
    required_skills: List[str] = Field(default_factory=list)
