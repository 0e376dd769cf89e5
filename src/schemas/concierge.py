"""Concierge schema definitions.

Field names follow the JSON the text-generation provider is asked to
produce, so the same models validate provider output and API responses.
"""

from typing import List, Literal

from pydantic import BaseModel, Field


class ConciergeRequest(BaseModel):
    goal: str = Field(description="Free-text description of what the team should build.")


class CandidateProfile(BaseModel):
    """Roster entry handed to the provider."""

    id: str
    name: str
    skills: List[str] = Field(default_factory=list)
    availability: str = "Not specified"


class ConciergeMatch(BaseModel):
    studentId: str = Field(description="Exact id from the supplied roster.")
    studentName: str = Field(description="Exact name from the supplied roster.")
    role: str = Field(description="Suggested role title.")
    matchReason: str = Field(description="1-2 sentences on why they fit.")
    introMessage: str = Field(description="Friendly message to send them.")
    matchScore: int = Field(ge=0, le=100)
    matchedHeuristically: bool = Field(
        default=False,
        description="True when the match came from the local ranking.",
    )


class RoleAssignment(BaseModel):
    role: str
    person: str
    responsibility: str


class ConciergePlan(BaseModel):
    """Structured concierge output."""

    summary: str = Field(description="One sentence summary of the goal.")
    reasoning: str = Field(description="The overall matching approach.")
    matches: List[ConciergeMatch] = Field(default_factory=list)
    roleBreakdown: List[RoleAssignment] = Field(default_factory=list)
    nextSteps: List[str] = Field(default_factory=list)


class ConciergeResponse(ConciergePlan):
    source: Literal["ai", "fallback"] = "fallback"
