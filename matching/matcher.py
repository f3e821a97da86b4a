"""
Main Matcher Module

Orchestrates the resume/job analysis:
1. Compare skills, seniority and location
2. Combine them into a weighted match score
3. Attach suggestions and a strengths/weaknesses review
"""

import logging
from datetime import date
from typing import List, Optional

from matching.level import analyze_level_match, analyze_location_match
from matching.ranking import calculate_compatibility, generate_match_reasons
from matching.scorer import calculate_match_score
from matching.skills import analyze_skills
from matching.suggestions import analyze_strengths_weaknesses, generate_suggestions
from schemas import AnalysisResult, RankedJob

logger = logging.getLogger(__name__)


def match_resume_to_job(resume, job, today: Optional[date] = None) -> AnalysisResult:
    """
    Analyze how well a resume fits a job posting.

    Args:
        resume: Resume record (skills, experience, contact info, level, years)
        job: Job posting (required skills, experience level, location, title)
        today: Reference date for the recent-experience check (defaults to today)

    Returns:
        AnalysisResult with the 0-100 match score, skill lists, suggestions,
        strengths/weaknesses and the level verdict. The score depends only on
        the two records.

    Example:
        >>> result = match_resume_to_job(resume, job)
        >>> print(f"Match: {result.match_score}%")
    """
    skill_analysis = analyze_skills(resume.skills, job.required_skills)
    level_match = analyze_level_match(resume.job_level, job.experience_level, resume.years_of_experience)
    location_match = analyze_location_match(resume.contact_info.location, job.location)

    match_score = calculate_match_score(
        skill_analysis, level_match, location_match, resume.years_of_experience
    )

    suggestions = generate_suggestions(resume, job, skill_analysis, level_match, location_match)
    strengths_weaknesses = analyze_strengths_weaknesses(resume, job, skill_analysis, today=today)

    logger.info(f"Analysis for '{job.title}': score={match_score}, "
                f"{len(skill_analysis.matching_skills)} matching / "
                f"{len(skill_analysis.missing_skills)} missing skills, level={level_match.risk_level}")

    return AnalysisResult(
        match_score=match_score,
        matching_skills=skill_analysis.matching_skills,
        missing_skills=skill_analysis.missing_skills,
        suggestions=suggestions,
        strengths_weaknesses=strengths_weaknesses,
        level_match=level_match,
    )


def rank_jobs_for_resume(resume, jobs, limit: Optional[int] = None) -> List[RankedJob]:
    """
    Score every job against a resume and sort by compatibility (highest first).

    Jobs with equal scores keep their input order.
    """
    logger.info(f"Ranking {len(jobs)} jobs for resume")

    ranked = []
    for job in jobs:
        score = calculate_compatibility(resume, job)
        ranked.append(RankedJob(
            job=job,
            compatibility_score=score,
            match_reasons=generate_match_reasons(resume, job, score),
        ))

    ranked.sort(key=lambda r: r.compatibility_score, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]

    if ranked:
        logger.info(f"Top match: {ranked[0].job.title} ({ranked[0].compatibility_score})")
    return ranked
