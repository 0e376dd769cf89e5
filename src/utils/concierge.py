"""Concierge candidate ranking.

This module turns a free-text goal and the student roster into a drafted
team plan. The text-generation provider writes the narrative; everything it
returns is checked against the roster it was given. When the provider is
missing, slow, or failing, a deterministic local plan is produced instead so
the concierge never blocks on it.

Nothing here sends invites: the plan is a draft for a human to act on.
"""

import json
import logging
import re
from typing import Iterable, List, Optional

from pydantic import ValidationError

from config import CONCIERGE_FALLBACK_SIZE, CONCIERGE_MIN_GOAL_LENGTH
from core.exceptions import (
    InvalidInputError,
    UpstreamFormatError,
    UpstreamUnavailableError,
)
from generators.ConciergeGenerator import ConciergeGenerator
from schemas.concierge import (
    CandidateProfile,
    ConciergeMatch,
    ConciergePlan,
    ConciergeResponse,
    RoleAssignment,
)
from schemas.user import User
from utils.skill_matcher import match_skills

logger = logging.getLogger(__name__)

FALLBACK_ROLES = ["Frontend Developer", "Backend Developer", "ML Engineer"]
FALLBACK_RESPONSIBILITIES = [
    "UI and user experience",
    "APIs and database",
    "AI/ML components",
]
FALLBACK_NEXT_STEPS = [
    "Send invite messages to matched students",
    "Schedule a 30-min kickoff call",
    "Set up a shared GitHub repo and assign tasks",
]
EMPTY_ROSTER_REASONING = (
    "No students are currently registered on the platform. Once students sign "
    "up and add their skills, the AI will be able to match them to your goal."
)
EMPTY_ROSTER_NEXT_STEPS = [
    "Share the platform link so students can register",
    "Ask potential teammates to sign up and add their skills",
    "Try again once students have created their profiles",
]

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def validate_goal(goal: Optional[str]) -> str:
    """Return the trimmed goal or raise InvalidInputError if too short."""
    cleaned = (goal or "").strip()
    if len(cleaned) < CONCIERGE_MIN_GOAL_LENGTH:
        raise InvalidInputError("Please provide a more detailed goal")
    return cleaned


def goal_skills(goal: str, candidates: Iterable[User]) -> List[str]:
    """Distinct roster skills mentioned as whole words in the goal."""
    lowered = goal.lower()
    seen = set()
    mentioned = []
    for candidate in candidates:
        for skill in candidate.skills:
            key = skill.lower()
            if key in seen:
                continue
            seen.add(key)
            if re.search(r"(?<!\w)" + re.escape(key) + r"(?!\w)", lowered):
                mentioned.append(skill)
    return mentioned


def prioritize_candidates(goal: str, candidates: List[User]) -> List[User]:
    """Order candidates by how many goal-mentioned skills they cover.

    The sort is stable, so candidates with equal coverage keep their
    supplied order. A goal that names no roster skill leaves the order as is.
    """
    wanted = goal_skills(goal, candidates)
    if not wanted:
        return list(candidates)
    return sorted(
        candidates,
        key=lambda c: match_skills(c.skills, wanted).match_percentage,
        reverse=True,
    )


def to_candidate_profiles(candidates: Iterable[User]) -> List[CandidateProfile]:
    """Reduce users to exactly what the provider may see."""
    return [
        CandidateProfile(
            id=c.user_id,
            name=c.name,
            skills=list(c.skills),
            availability=c.availability or "Not specified",
        )
        for c in candidates
    ]


def parse_concierge_response(text: str, roster_ids: Iterable[str]) -> ConciergePlan:
    """Parse provider text into a plan limited to the supplied roster.

    Markdown code fences around the JSON are tolerated.

    Raises:
        UpstreamFormatError: If the text is not valid plan JSON or names a
            student outside the roster.
    """
    if text is not None and not isinstance(text, str):
        raise UpstreamFormatError(
            f"Concierge output is not text: {type(text).__name__}"
        )
    cleaned = _FENCE_RE.sub("", text or "").strip()
    try:
        plan = ConciergePlan.model_validate(json.loads(cleaned))
    except (ValueError, ValidationError) as exc:
        raise UpstreamFormatError(f"Unparsable concierge output: {exc}") from exc

    allowed = set(roster_ids)
    unknown = [m.studentId for m in plan.matches if m.studentId not in allowed]
    if unknown:
        raise UpstreamFormatError(
            f"Concierge output references unknown students: {unknown}"
        )
    for match in plan.matches:
        match.matchedHeuristically = False
    return plan


def build_fallback_plan(goal: str, roster: List[CandidateProfile]) -> ConciergePlan:
    """Deterministic plan from the first few candidates in roster order."""
    picked = roster[:CONCIERGE_FALLBACK_SIZE]
    matches = []
    breakdown = []
    for i, candidate in enumerate(picked):
        role = FALLBACK_ROLES[i % len(FALLBACK_ROLES)]
        skills_text = ", ".join(candidate.skills) or "general development"
        top_skills = " and ".join(candidate.skills[:2]) or "development"
        matches.append(
            ConciergeMatch(
                studentId=candidate.id,
                studentName=candidate.name,
                role=role,
                matchReason=(
                    f"{candidate.name} has skills in {skills_text} "
                    "that align with this goal."
                ),
                introMessage=(
                    f"Hi {candidate.name}! I'm assembling a team for: {goal}. "
                    f"Your skills in {top_skills} would be a great fit. Interested?"
                ),
                matchScore=max(0, 90 - i * 10),
                matchedHeuristically=True,
            )
        )
        breakdown.append(
            RoleAssignment(
                role=role,
                person=candidate.name,
                responsibility=FALLBACK_RESPONSIBILITIES[i % len(FALLBACK_RESPONSIBILITIES)],
            )
        )
    return ConciergePlan(
        summary=f"Building a team for: {goal}",
        reasoning=(
            "Matched students based on their listed skills to best fit the "
            "goal requirements."
        ),
        matches=matches,
        roleBreakdown=breakdown,
        nextSteps=list(FALLBACK_NEXT_STEPS),
    )


class ConciergeRanker:
    """Ranks roster candidates for a goal and drafts the team plan."""

    def __init__(self, generator: ConciergeGenerator):
        self.generator = generator

    async def rank(
        self,
        goal: str,
        candidates: List[User],
        exclude_user_id: Optional[str] = None,
    ) -> ConciergeResponse:
        """Build a concierge plan for the goal.

        Args:
            goal: Free-text goal; at least five characters once trimmed.
            candidates: Roster in the order the local ranking should use.
            exclude_user_id: User left out of the roster (the caller).

        Returns:
            ConciergeResponse tagged with its source.

        Raises:
            InvalidInputError: If the goal is too short.
            UpstreamFormatError: If the provider answered with unusable
                content.
        """
        goal = validate_goal(goal)
        pool = [c for c in candidates if c.user_id != exclude_user_id]

        if not pool:
            return ConciergeResponse(
                summary=goal,
                reasoning=EMPTY_ROSTER_REASONING,
                nextSteps=list(EMPTY_ROSTER_NEXT_STEPS),
                source="fallback",
            )

        roster = to_candidate_profiles(pool)
        try:
            text = await self.generator.generate(goal, roster)
        except UpstreamUnavailableError as exc:
            logger.warning("Concierge provider unavailable, using local ranking: %s", exc)
            plan = build_fallback_plan(goal, roster)
            return ConciergeResponse(**plan.model_dump(), source="fallback")

        plan = parse_concierge_response(text, [c.id for c in roster])
        logger.info("Concierge plan from provider with %d match(es)", len(plan.matches))
        return ConciergeResponse(**plan.model_dump(), source="ai")
