import logging
from typing import List

from matching.config import SKILL_WEIGHTS
from matching.scorer import round_half_up
from schemas import SkillAnalysis

logger = logging.getLogger(__name__)


def _strip_plural(skill: str) -> str:
    return skill[:-1] if skill.endswith("s") else skill


def is_direct_match(resume_skill: str, job_skill: str) -> bool:
    """Exact, substring or superstring match."""
    return resume_skill == job_skill or job_skill in resume_skill or resume_skill in job_skill


def is_plural_match(resume_skill: str, job_skill: str) -> bool:
    return _strip_plural(job_skill) in resume_skill or _strip_plural(resume_skill) in job_skill


def analyze_skills(resume_skills: List[str], job_skills: List[str]) -> SkillAnalysis:
    """
    Classify each required job skill as essential, nice-to-have or missing.

    Essential: a resume skill matches it directly (exact/substring/superstring).
    Nice-to-have: no direct match, but one after dropping a trailing "s".
    Missing: neither.

    Score = 100 * (0.7 * essential/N + 0.3 * nice/N), N = number of job skills (min 1).
    """
    resume_lower = [s.lower().strip() for s in resume_skills if s and s.strip()]
    job_lower = [s.lower().strip() for s in job_skills if s and s.strip()]

    essential, nice_to_have, missing = [], [], []
    for skill in job_lower:
        if any(is_direct_match(r, skill) for r in resume_lower):
            essential.append(skill)
        elif any(is_plural_match(r, skill) for r in resume_lower):
            nice_to_have.append(skill)
        else:
            missing.append(skill)

    total = max(len(job_lower), 1)
    raw_score = (
        SKILL_WEIGHTS["essential"] * len(essential) / total +
        SKILL_WEIGHTS["nice_to_have"] * len(nice_to_have) / total
    ) * 100

    logger.debug(f"Skills: {len(essential)} essential, {len(nice_to_have)} nice-to-have, "
                 f"{len(missing)} missing of {len(job_lower)}")

    return SkillAnalysis(
        matching_skills=essential,
        nice_to_have_skills=nice_to_have,
        missing_skills=missing,
        skill_score=round_half_up(raw_score),
        essential_skills_match=len(essential),
        total_required_skills=len(job_lower),
    )
