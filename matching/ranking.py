"""
Quick compatibility score used to rank many jobs for one resume.

Lighter than the full analysis: no suggestions, and the location and level
checks award fixed points instead of weighted sub-scores.
"""

import re
import logging
from typing import List

from matching.config import (
    COMPATIBILITY_WEIGHTS, COMPATIBILITY_LEVEL_POINTS, COMPATIBILITY_LOCATION_POINTS,
    DOMAIN_TITLE_POINTS, DOMAIN_TECH_POINTS, TECH_KEYWORDS, MATCH_REASON_TIERS,
)
from matching.level import analyze_location_match, level_ordinal
from matching.scorer import round_half_up
from matching.skills import is_direct_match

logger = logging.getLogger(__name__)

TITLE_SPLIT = re.compile(r"[\s,-]+")
MIN_KEYWORD_LENGTH = 3


def matching_skills(resume_skills: List[str], job_skills: List[str]) -> List[str]:
    resume_lower = [s.lower() for s in resume_skills if s]
    return [
        skill for skill in (s.lower() for s in job_skills if s)
        if any(is_direct_match(r, skill) for r in resume_lower)
    ]


def skill_points(resume, job) -> float:
    matched = matching_skills(resume.skills, job.required_skills)
    return len(matched) / max(len(job.required_skills), 1) * COMPATIBILITY_WEIGHTS["skills"]


def level_points(resume_level, job_level) -> int:
    distance = abs(level_ordinal(resume_level) - level_ordinal(job_level))
    return COMPATIBILITY_LEVEL_POINTS.get(distance, COMPATIBILITY_LEVEL_POINTS["other"])


def location_points(resume_location, job_location) -> int:
    match = analyze_location_match(resume_location, job_location)
    return COMPATIBILITY_LOCATION_POINTS[match.type]


def _resume_domain_text(resume) -> str:
    parts = list(resume.skills)
    parts.extend(exp.title for exp in resume.experience)
    parts.extend(exp.description for exp in resume.experience)
    return " ".join(parts).lower()


def _first_tech_keyword(text: str):
    return next((keyword for keyword in TECH_KEYWORDS if keyword in text), None)


def domain_points(resume, job) -> float:
    """Job-title words found in the resume, plus a bonus for the same tech area."""
    title = job.title.lower()
    title_keywords = TITLE_SPLIT.split(title)
    resume_text = _resume_domain_text(resume)

    matched = [kw for kw in title_keywords if len(kw) >= MIN_KEYWORD_LENGTH and kw in resume_text]
    points = len(matched) / max(len(title_keywords), 1) * DOMAIN_TITLE_POINTS

    job_tech = _first_tech_keyword(title)
    resume_tech = _first_tech_keyword(resume_text)
    if job_tech and job_tech == resume_tech:
        points += DOMAIN_TECH_POINTS

    return min(points, COMPATIBILITY_WEIGHTS["domain"])


def calculate_compatibility(resume, job) -> int:
    score = (
        skill_points(resume, job) +
        level_points(resume.job_level, job.experience_level) +
        location_points(resume.contact_info.location, job.location) +
        domain_points(resume, job)
    )
    return round_half_up(score)


def generate_match_reasons(resume, job, score: int) -> List[str]:
    reasons = [next(text for threshold, text in MATCH_REASON_TIERS if score >= threshold)]

    matched = matching_skills(resume.skills, job.required_skills)
    if matched:
        reasons.append(f"💡 You have {len(matched)} matching skills: {', '.join(matched[:3])}")

    if (resume.job_level or "") == job.experience_level:
        reasons.append("🎯 Perfect experience level match")

    if "remote" in (job.location or "").lower():
        reasons.append("🌍 Remote-friendly position")

    return reasons
