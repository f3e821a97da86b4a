import re
from typing import Dict, List

# Skill vocabulary by category
SKILL_DATABASE = {
    "programming": (
        "javascript", "typescript", "python", "java", "cpp", "csharp", "go", "rust",
        "kotlin", "swift", "php", "ruby", "scala", "perl", "r", "matlab",
    ),
    "web": (
        "react", "vue", "angular", "svelte", "nextjs", "nuxt", "gatsby",
        "html", "css", "sass", "less", "tailwind", "bootstrap", "nodejs", "express", "koa",
    ),
    "databases": (
        "mysql", "postgresql", "mongodb", "redis", "cassandra", "dynamodb",
        "sqlite", "oracle", "elasticsearch", "neo4j", "influxdb",
    ),
    "cloud": (
        "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "ansible",
        "jenkins", "github actions", "gitlab ci", "circleci", "travis ci",
    ),
    "mobile": (
        "react native", "flutter", "ionic", "cordova", "phonegap", "xamarin",
    ),
    "data": (
        "pandas", "numpy", "scikit-learn", "tensorflow", "pytorch", "keras",
        "matplotlib", "seaborn", "plotly", "tableau", "power bi",
    ),
    "devops": (
        "git", "svn", "mercurial", "nginx", "apache", "linux", "unix", "bash",
        "powershell", "cmd", "ssh", "ftp", "sftp",
    ),
    "soft": (
        "leadership", "communication", "teamwork", "problem solving", "critical thinking",
        "project management", "agile", "scrum", "kanban", "time management",
    ),
}

# Flattened, de-duplicated vocabulary in category order
ALL_SKILLS = tuple(dict.fromkeys(skill for skills in SKILL_DATABASE.values() for skill in skills))

_SKILL_PATTERNS = tuple(
    (skill, re.compile(r"\b" + re.escape(skill) + r"\b", re.IGNORECASE))
    for skill in ALL_SKILLS
)

_SKILL_CATEGORY = {
    skill: category
    for category, skills in SKILL_DATABASE.items()
    for skill in skills
}


def extract_skills(text: str) -> List[str]:
    """Return the vocabulary skills that occur in ``text`` as whole words."""
    if not text:
        return []
    return [skill for skill, pattern in _SKILL_PATTERNS if pattern.search(text)]


def categorize_skills(skills: List[str]) -> Dict[str, List[str]]:
    """Group skills by vocabulary category; unknown skills go under "other"."""
    categorized: Dict[str, List[str]] = {}
    for skill in dict.fromkeys(s.lower() for s in skills):
        category = _SKILL_CATEGORY.get(skill, "other")
        categorized.setdefault(category, []).append(skill)
    return categorized
