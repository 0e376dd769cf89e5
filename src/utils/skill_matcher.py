"""Skill matching utilities.

This module provides the deterministic skill matcher used to score a
candidate's skills against a project's required skills, plus the
normalisation applied to skill lists before they are stored.
"""

from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass
class SkillMatch:
    """Result of matching a candidate against required skills.

    Attributes:
        matched_skills: Required skills the candidate has, in required-list
            order and with the required-list casing.
        match_percentage: Integer 0-100; 0 when nothing is required.
    """

    matched_skills: List[str] = field(default_factory=list)
    match_percentage: int = 0


def match_skills(
    candidate_skills: Iterable[str], required_skills: Iterable[str]
) -> SkillMatch:
    """Match candidate skills against required skills, case-insensitively.

    The percentage is round-half-up of 100 * matched / required. An empty
    required list scores 0, not 100.

    Args:
        candidate_skills: Skills the candidate lists (any order).
        required_skills: Skills the project requires (order is kept).

    Returns:
        SkillMatch with matched skills and integer percentage.
    """
    required = list(required_skills or [])
    if not required:
        return SkillMatch()

    owned = {skill.lower() for skill in candidate_skills or []}
    matched = [skill for skill in required if skill.lower() in owned]

    # Integer round-half-up; round() would use banker's rounding
    percentage = (200 * len(matched) + len(required)) // (2 * len(required))
    return SkillMatch(matched_skills=matched, match_percentage=percentage)


def normalize_skills(skills: Iterable[str]) -> List[str]:
    """Trim skills, drop blanks and case-insensitive duplicates.

    The first spelling of a duplicated skill wins.
    """
    seen = set()
    result = []
    for skill in skills or []:
        cleaned = str(skill).strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result
