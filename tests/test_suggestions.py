"""
Tests for suggestions and the strengths/weaknesses review.
"""

import unittest
from datetime import date

from matching.level import analyze_level_match, analyze_location_match
from matching.skills import analyze_skills
from matching.suggestions import (
    BUILD_EXPERIENCE_TIPS, FRONTEND_TIPS, POLISH_EXPERIENCE_TIPS,
    analyze_strengths_weaknesses, generate_suggestions, has_recent_experience,
)
from schemas import ContactInfo, Education, ExperienceEntry, JobIn, ResumeData


FRONTEND_JOB = JobIn(
    title="Frontend Developer",
    company="TechCorp",
    description="We are looking for a skilled Frontend Developer to join our team.",
    required_skills=["React", "JavaScript", "TypeScript"],
    location="Mumbai",
    experience_level="entry",
)

EXPERIENCED_RESUME = ResumeData(
    skills=["react", "javascript", "html", "css", "git"],
    education=Education(degree="B.Tech", institution="IIT Delhi", graduation_year=2019, gpa=3.8),
    contact_info=ContactInfo(email="dev@example.com", phone="+91 98765 43210", github="github.com/dev"),
    experience=[
        ExperienceEntry(
            title="Frontend Developer",
            company="Acme",
            duration="2023 - Present",
            description="Improved page load time by 40%",
        ),
    ],
    job_level="mid",
    years_of_experience=4,
)


def suggestions_for(resume, job):
    skill_analysis = analyze_skills(resume.skills, job.required_skills)
    level_match = analyze_level_match(resume.job_level, job.experience_level, resume.years_of_experience)
    location_match = analyze_location_match(resume.contact_info.location, job.location)
    return generate_suggestions(resume, job, skill_analysis, level_match, location_match)


class TestSuggestions(unittest.TestCase):

    def test_missing_skills_first(self):
        resume = ResumeData(skills=["react"], contact_info=ContactInfo(location="Mumbai"), job_level="entry")
        suggestions = suggestions_for(resume, FRONTEND_JOB)
        self.assertEqual(suggestions[0], "🎯 **Priority**: Learn these high-demand skills: javascript, typescript")
        self.assertIn(
            "📚 Consider online courses on javascript - platforms like Coursera, Udemy, or freeCodeCamp",
            suggestions,
        )
        self.assertIn("🌟 Highlight your react expertise by:", suggestions)

    def test_experience_tips(self):
        without = suggestions_for(ResumeData(skills=["react"]), FRONTEND_JOB)
        self.assertIn(BUILD_EXPERIENCE_TIPS[0], without)
        with_experience = suggestions_for(EXPERIENCED_RESUME, FRONTEND_JOB)
        self.assertIn(POLISH_EXPERIENCE_TIPS[0], with_experience)
        self.assertNotIn(BUILD_EXPERIENCE_TIPS[0], with_experience)

    def test_stack_tips(self):
        suggestions = suggestions_for(EXPERIENCED_RESUME, FRONTEND_JOB)
        self.assertIn(FRONTEND_TIPS[0], suggestions)

    def test_level_and_location_warnings(self):
        job = FRONTEND_JOB.model_copy(update={"experience_level": "senior", "location": "Berlin"})
        resume = ResumeData(skills=["react"], contact_info=ContactInfo(location="Pune"), job_level="entry")
        suggestions = suggestions_for(resume, job)
        self.assertIn("💡 Consider applying for entry-level positions first to build experience", suggestions)
        self.assertIn("💼 Consider mentioning your willingness to relocate in your cover letter", suggestions)


class TestStrengthsWeaknesses(unittest.TestCase):

    def test_experienced_resume(self):
        skill_analysis = analyze_skills(EXPERIENCED_RESUME.skills, FRONTEND_JOB.required_skills)
        review = analyze_strengths_weaknesses(EXPERIENCED_RESUME, FRONTEND_JOB, skill_analysis, today=date(2024, 6, 1))

        for strength in (
            "✅ Good skill foundation with room for growth",
            "💼 Recent and relevant work experience",
            "🎓 Strong educational background",
            "📊 Excellent academic performance",
            "📞 Complete contact information",
            "🌐 Professional online presence",
            "🎯 Clear career positioning: mid level",
            "📈 4 years of experience",
            "📊 Results-oriented with quantified achievements",
        ):
            self.assertIn(strength, review.strengths)
        self.assertIn("⚙️ Limited technical skills listed", review.weaknesses)

    def test_empty_resume(self):
        resume = ResumeData()
        skill_analysis = analyze_skills(resume.skills, FRONTEND_JOB.required_skills)
        review = analyze_strengths_weaknesses(resume, FRONTEND_JOB, skill_analysis, today=date(2024, 6, 1))
        self.assertIn("📚 Skill gap identified - focus on learning key technologies", review.weaknesses)
        self.assertIn("🏗️ Limited professional experience - consider internships or projects", review.weaknesses)
        self.assertIn("📋 Missing contact details - add email and phone number", review.weaknesses)
        self.assertIn("🎯 Career level not clearly defined - add summary statement", review.weaknesses)

    def test_recent_experience_cutoff(self):
        old = [ExperienceEntry(title="Developer", company="A", duration="2015 - 2018")]
        self.assertFalse(has_recent_experience(old, date(2024, 6, 1)))
        self.assertTrue(has_recent_experience(old, date(2017, 1, 1)))


if __name__ == "__main__":
    unittest.main()
