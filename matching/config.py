"""
Configuration for the resume/job matching heuristics.
Adjust weights and lookup tables here, not in the scoring functions.
"""

# Component weights for the analysis score (must sum to 1.0)
WEIGHTS = {
    "skills": 0.50,
    "level": 0.25,
    "location": 0.15,
    "experience": 0.10,
}

# Skill score split between direct matches and plural-normalized matches
SKILL_WEIGHTS = {
    "essential": 0.70,
    "nice_to_have": 0.30,
}

# Seniority ordinal hierarchy
LEVEL_HIERARCHY = {
    "entry": 1,
    "mid": 2,
    "senior": 3,
    "executive": 4,
}

DEFAULT_LEVEL = "entry"

# Years of experience needed for an experience-based level (checked top-down)
EXPERIENCE_LEVEL_THRESHOLDS = (
    (7, LEVEL_HIERARCHY["senior"]),
    (3, LEVEL_HIERARCHY["mid"]),
)

# Max ordinal distance still counted as a level match
LEVEL_TOLERANCE = 1

# Points lost per ordinal of experience gap when the level does not match
LEVEL_GAP_PENALTY = 25

LOCATION_SCORES = {
    "match": 100,
    "mismatch": 50,
}

# Experience bonus: points per year, capped
EXPERIENCE_POINTS_PER_YEAR = 5
EXPERIENCE_BONUS_CAP = 100

MAJOR_CITIES = ("mumbai", "delhi", "bangalore", "hyderabad", "chennai", "pune", "kolkata")

REMOTE_KEYWORDS = ("remote", "work from home")

# Job ranking (compatibility) weights, in points out of 100
COMPATIBILITY_WEIGHTS = {
    "skills": 40,
    "level": 25,
    "location": 20,
    "domain": 15,
}

# Level points by ordinal distance; anything further gets "other"
COMPATIBILITY_LEVEL_POINTS = {
    0: 25,
    1: 20,
    2: 10,
    "other": 5,
}

COMPATIBILITY_LOCATION_POINTS = {
    "unknown": 10,
    "remote": 20,
    "exact": 20,
    "regional": 15,
    "different": 5,
}

DOMAIN_TITLE_POINTS = 10
DOMAIN_TECH_POINTS = 5

TECH_KEYWORDS = (
    "frontend", "backend", "fullstack", "mobile", "devops", "data", "ai", "machine learning",
)

# Match-reason headline tiers, checked top-down
MATCH_REASON_TIERS = (
    (80, "🎯 Excellent match - your skills align perfectly with this role"),
    (60, "✅ Strong match - good alignment with job requirements"),
    (40, "🔍 Moderate match - some relevant skills and experience"),
    (0, "📈 Learning opportunity - room to grow into this role"),
)

# Strengths analysis thresholds
STRENGTH_THRESHOLDS = {
    "excellent_skill_ratio": 0.7,
    "good_skill_ratio": 0.5,
    "diverse_skill_count": 8,
    "solid_skill_count": 5,
    "recent_experience_years": 2,
    "excellent_gpa": 3.5,
    "valuable_experience_years": 5,
}

# Skills that trigger stack-specific suggestions and strengths
FRONTEND_SKILLS = ("react", "angular", "vue")
BACKEND_SKILLS = ("python", "java", "nodejs")
CLOUD_SKILLS = ("aws", "azure", "docker")
COURSE_SKILLS = ("javascript", "python", "react", "nodejs")
