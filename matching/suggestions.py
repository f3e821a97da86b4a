"""
Template-based advice for a resume against a job.

Rules run in a fixed order and append human-readable strings; nothing here
feeds back into the match score.
"""

import re
from datetime import date
from typing import List, Optional

from matching.config import (
    STRENGTH_THRESHOLDS, FRONTEND_SKILLS, BACKEND_SKILLS, CLOUD_SKILLS, COURSE_SKILLS,
)
from schemas import LevelMatch, LocationMatch, SkillAnalysis, StrengthsWeaknesses

YEAR_PATTERN = re.compile(r"20\d{2}")
DIGIT_PATTERN = re.compile(r"\d+")
ACHIEVEMENT_PATTERN = re.compile(r"(increased|improved|reduced|saved|grew|boosted)", re.IGNORECASE)

STRUCTURE_TIPS = [
    "📄 Resume Structure Tips:",
    "   • Add a compelling summary statement tailored to this role",
    "   • Place most relevant skills at the top of your skills section",
    "   • Include keywords from the job description",
    "   • Keep it concise: 1-2 pages for most roles",
]

FRONTEND_TIPS = [
    "🚀 Frontend Development Tips:",
    "   • Showcase responsive design projects",
    "   • Include links to live demos or GitHub",
    "   • Mention performance optimization experience",
]

BACKEND_TIPS = [
    "🔧 Backend Development Tips:",
    "   • Highlight API development experience",
    "   • Mention database design and optimization",
    "   • Include system architecture knowledge",
]

BUILD_EXPERIENCE_TIPS = [
    "🏗️ Build your experience through:",
    "   • Personal projects (GitHub portfolio)",
    "   • Freelance work on platforms like Upwork",
    "   • Open source contributions",
    "   • Internships or volunteer work",
]

POLISH_EXPERIENCE_TIPS = [
    "✨ Optimize your experience section:",
    "   • Use action verbs: Developed, Implemented, Led, Improved",
    "   • Quantify achievements: 'Increased efficiency by 30%'",
    "   • Focus on results and impact, not just responsibilities",
]


def _lower(skills: List[str]) -> List[str]:
    return [s.lower() for s in skills]


def _any_in(skills: List[str], group) -> bool:
    return any(skill in group for skill in skills)


def generate_suggestions(
    resume,
    job,
    skill_analysis: SkillAnalysis,
    level_match: LevelMatch,
    location_match: LocationMatch,
) -> List[str]:
    suggestions = []

    if skill_analysis.missing_skills:
        priority_skills = skill_analysis.missing_skills[:3]
        suggestions.append(f"🎯 **Priority**: Learn these high-demand skills: {', '.join(priority_skills)}")
        for skill in skill_analysis.missing_skills:
            if skill in COURSE_SKILLS:
                suggestions.append(
                    f"📚 Consider online courses on {skill} - platforms like Coursera, Udemy, or freeCodeCamp"
                )

    if not level_match.is_match:
        suggestions.append(f"⚠️ {level_match.recommendation}")
        if level_match.risk_level == "high":
            suggestions.append("💡 Consider applying for entry-level positions first to build experience")
            suggestions.append("🎓 Look for certification programs or bootcamps to bridge the skill gap")
        elif level_match.risk_level == "medium":
            suggestions.append("📈 Highlight transferable skills and relevant projects in your application")

    if not location_match.is_match and location_match.type == "different":
        suggestions.append(f"🌍 {location_match.recommendation}")
        suggestions.append("💼 Consider mentioning your willingness to relocate in your cover letter")

    if resume.experience:
        suggestions.extend(POLISH_EXPERIENCE_TIPS)
    else:
        suggestions.extend(BUILD_EXPERIENCE_TIPS)

    if skill_analysis.matching_skills:
        top_skill = skill_analysis.matching_skills[0]
        suggestions.append(f"🌟 Highlight your {top_skill} expertise by:")
        suggestions.append(f"   • Adding specific projects using {top_skill}")
        suggestions.append(f"   • Mentioning certifications or courses in {top_skill}")
        suggestions.append(f"   • Including metrics: 'Built 5 projects using {top_skill}'")

    suggestions.extend(STRUCTURE_TIPS)

    job_skills = _lower(job.required_skills)
    if _any_in(job_skills, FRONTEND_SKILLS):
        suggestions.extend(FRONTEND_TIPS)
    if _any_in(job_skills, BACKEND_SKILLS):
        suggestions.extend(BACKEND_TIPS)

    return suggestions


def has_recent_experience(experience, today: date) -> bool:
    cutoff = today.year - STRENGTH_THRESHOLDS["recent_experience_years"]
    for exp in experience:
        match = YEAR_PATTERN.search(exp.duration or "")
        if match and int(match.group(0)) >= cutoff:
            return True
    return False


def has_quantified_achievements(experience) -> bool:
    for exp in experience:
        if not exp.description:
            continue
        text = exp.model_dump_json()
        if DIGIT_PATTERN.search(text) and ACHIEVEMENT_PATTERN.search(text):
            return True
    return False


def analyze_strengths_weaknesses(
    resume,
    job,
    skill_analysis: SkillAnalysis,
    today: Optional[date] = None,
) -> StrengthsWeaknesses:
    today = today or date.today()
    strengths, weaknesses = [], []

    essential = skill_analysis.essential_skills_match
    total = skill_analysis.total_required_skills
    if essential >= total * STRENGTH_THRESHOLDS["excellent_skill_ratio"]:
        strengths.append("🎯 Excellent skill match - you meet most essential requirements")
    elif essential >= total * STRENGTH_THRESHOLDS["good_skill_ratio"]:
        strengths.append("✅ Good skill foundation with room for growth")
    else:
        weaknesses.append("📚 Skill gap identified - focus on learning key technologies")

    matching_count = len(skill_analysis.matching_skills)
    if matching_count >= STRENGTH_THRESHOLDS["diverse_skill_count"]:
        strengths.append("🌟 Diverse technical skill set")
    elif matching_count >= STRENGTH_THRESHOLDS["solid_skill_count"]:
        strengths.append("🔧 Solid technical foundation")
    else:
        weaknesses.append("⚙️ Limited technical skills listed")

    if resume.experience:
        if has_recent_experience(resume.experience, today):
            strengths.append("💼 Recent and relevant work experience")
        else:
            strengths.append("💼 Relevant work experience")
    else:
        weaknesses.append("🏗️ Limited professional experience - consider internships or projects")

    education = resume.education
    if education.degree and education.degree != "Unknown":
        strengths.append("🎓 Strong educational background")
        if education.gpa and education.gpa >= STRENGTH_THRESHOLDS["excellent_gpa"]:
            strengths.append("📊 Excellent academic performance")
    else:
        weaknesses.append("🎓 Educational details could be more specific")

    contact = resume.contact_info
    if contact.email and contact.phone:
        strengths.append("📞 Complete contact information")
    else:
        weaknesses.append("📋 Missing contact details - add email and phone number")

    if contact.linkedin or contact.github or contact.website:
        strengths.append("🌐 Professional online presence")
    else:
        weaknesses.append("🌐 Consider adding LinkedIn or GitHub profile")

    if resume.job_level:
        strengths.append(f"🎯 Clear career positioning: {resume.job_level} level")
    else:
        weaknesses.append("🎯 Career level not clearly defined - add summary statement")

    years = resume.years_of_experience
    if years and years > 0:
        if years >= STRENGTH_THRESHOLDS["valuable_experience_years"]:
            strengths.append(f"🏆 {years:g} years of valuable experience")
        else:
            strengths.append(f"📈 {years:g} years of experience")

    job_skills = _lower(job.required_skills)
    resume_skills = _lower(resume.skills)
    if _any_in(job_skills, FRONTEND_SKILLS) and _any_in(resume_skills, ("responsive", "mobile", "ui", "ux")):
        strengths.append("🎨 Frontend development with design awareness")
    if _any_in(job_skills, BACKEND_SKILLS) and _any_in(resume_skills, ("api", "database", "server")):
        strengths.append("🔧 Backend development capabilities")
    if _any_in(job_skills, CLOUD_SKILLS) and _any_in(resume_skills, ("deployment", "ci/cd", "devops")):
        strengths.append("☁️ Cloud and deployment experience")

    if has_quantified_achievements(resume.experience):
        strengths.append("📊 Results-oriented with quantified achievements")
    else:
        weaknesses.append("📈 Add quantified achievements to demonstrate impact")

    return StrengthsWeaknesses(strengths=strengths, weaknesses=weaknesses)
