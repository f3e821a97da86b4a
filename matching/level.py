"""
Seniority and location compatibility checks.

Both checks are deterministic and never raise: missing inputs fall back to
defaults (entry level, unknown location).
"""

import logging
from typing import Optional

from matching.config import (
    LEVEL_HIERARCHY, DEFAULT_LEVEL, EXPERIENCE_LEVEL_THRESHOLDS, LEVEL_TOLERANCE,
    MAJOR_CITIES, REMOTE_KEYWORDS,
)
from schemas import LevelMatch, LocationMatch

logger = logging.getLogger(__name__)

RECOMMENDATIONS = {
    "aligned": "Your experience level aligns well with this position requirements.",
    "underqualified": "This position requires more experience than you currently have. "
                      "Consider gaining additional experience or skills.",
    "overqualified": "You may be overqualified for this position. "
                     "Consider if this role aligns with your career goals.",
    "borderline": "Your profile shows potential for this role with some additional preparation.",
}


def level_ordinal(level: Optional[str]) -> int:
    """Ordinal for a seniority level; unknown or missing levels count as entry."""
    if not level:
        return LEVEL_HIERARCHY[DEFAULT_LEVEL]
    return LEVEL_HIERARCHY.get(level.lower(), LEVEL_HIERARCHY[DEFAULT_LEVEL])


def experience_ordinal(years_of_experience: Optional[float]) -> int:
    """Level implied by years of experience alone."""
    if years_of_experience:
        for min_years, ordinal in EXPERIENCE_LEVEL_THRESHOLDS:
            if years_of_experience >= min_years:
                return ordinal
    return LEVEL_HIERARCHY[DEFAULT_LEVEL]


def analyze_level_match(
    resume_level: Optional[str],
    job_level: Optional[str],
    years_of_experience: Optional[float],
) -> LevelMatch:
    """
    Compare resume and job seniority, cross-checked against years of experience.

    A match needs both the stated level and the experience-based level to be
    within one ordinal of the job level.
    """
    resume_rank = level_ordinal(resume_level)
    job_rank = level_ordinal(job_level)
    experience_rank = experience_ordinal(years_of_experience)

    is_match = (
        abs(resume_rank - job_rank) <= LEVEL_TOLERANCE and
        abs(experience_rank - job_rank) <= LEVEL_TOLERANCE
    )

    if is_match:
        verdict, risk_level = "aligned", "low"
    elif resume_rank < job_rank and experience_rank < job_rank:
        verdict, risk_level = "underqualified", "high"
    elif resume_rank > job_rank and experience_rank > job_rank:
        verdict, risk_level = "overqualified", "medium"
    else:
        verdict, risk_level = "borderline", "medium"

    logger.debug(f"Level: resume={resume_rank} job={job_rank} experience={experience_rank} -> {verdict}")

    return LevelMatch(
        resume_level=resume_level or DEFAULT_LEVEL,
        job_level=job_level or DEFAULT_LEVEL,
        is_match=is_match,
        recommendation=RECOMMENDATIONS[verdict],
        risk_level=risk_level,
        experience_gap=abs(experience_rank - job_rank),
    )


def in_major_city(location: str) -> bool:
    return any(city in location for city in MAJOR_CITIES)


def analyze_location_match(resume_location: Optional[str], job_location: Optional[str]) -> LocationMatch:
    if not resume_location or not job_location:
        return LocationMatch(is_match=True, type="unknown", recommendation="Location information incomplete")

    resume_loc = resume_location.lower()
    job_loc = job_location.lower()

    if any(keyword in job_loc for keyword in REMOTE_KEYWORDS):
        return LocationMatch(is_match=True, type="remote", recommendation="Remote position - location flexible")

    if resume_loc == job_loc or job_loc in resume_loc or resume_loc in job_loc:
        return LocationMatch(is_match=True, type="exact", recommendation="Perfect location match")

    # Same region (simplified to the major-city list)
    if in_major_city(resume_loc) and in_major_city(job_loc):
        return LocationMatch(
            is_match=True,
            type="regional",
            recommendation="Same region - manageable commute or relocation",
        )

    return LocationMatch(
        is_match=False,
        type="different",
        recommendation="Different location - consider relocation or remote work options",
    )
