"""
LinkedIn profile import.

`ProfileImporter` is the seam between the matcher and wherever profile data
comes from. The default importer serves a fixed demo profile; the HTML
importer regex-parses a downloaded public profile page and is only as good as
the markup it assumes.
"""

import os
import re
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import requests

from parsers.extract import (
    DEFAULT_ENTRY_YEARS, extract_stated_years, infer_job_level,
)
from schemas import Education, ContactInfo, ExperienceEntry, LinkedInProfile, ParsedResume, ProfileEducation

logger = logging.getLogger(__name__)

PROFILE_URL_PATTERN = re.compile(r"^https?://(www\.)?linkedin\.com/in/([a-zA-Z0-9-]+)/?$")
USERNAME_PATTERN = re.compile(r"linkedin\.com/in/([a-zA-Z0-9-]+)/?")

MAX_PROFILE_EXPERIENCE = 5
MAX_PROFILE_SKILLS = 15

COMMON_SKILLS = [
    "JavaScript", "Python", "Java", "React", "Node.js", "SQL", "HTML", "CSS",
    "Machine Learning", "Data Analysis", "Project Management", "Communication",
    "Leadership", "Teamwork", "Problem Solving", "Git", "Docker", "AWS",
    "MongoDB", "PostgreSQL", "Express", "Angular", "Vue", "TypeScript",
    "C++", "C#", "PHP", "Ruby", "Go", "Rust", "Kotlin", "Swift",
]


class ProfileUrlError(ValueError):
    """Raised for URLs that are not LinkedIn public profile URLs."""


def is_profile_url(url: str) -> bool:
    return bool(PROFILE_URL_PATTERN.match((url or "").strip()))


def validate_profile_url(url: str) -> str:
    url = (url or "").strip()
    if not PROFILE_URL_PATTERN.match(url):
        raise ProfileUrlError("Invalid LinkedIn URL format")
    return url


def extract_username(url: str) -> Optional[str]:
    match = USERNAME_PATTERN.search(url or "")
    return match.group(1) if match else None


class ProfileImporter(ABC):
    """Fetches a profile for a validated LinkedIn URL."""

    @abstractmethod
    def fetch_profile(self, url: str) -> LinkedInProfile:
        ...

    def import_profile(self, url: str) -> LinkedInProfile:
        url = validate_profile_url(url)
        logger.info(f"Importing LinkedIn profile: {extract_username(url)}")
        return self.fetch_profile(url)


class MockProfileImporter(ProfileImporter):
    """Returns the same demo profile for every URL."""

    def fetch_profile(self, url: str) -> LinkedInProfile:
        return LinkedInProfile(
            name="John Doe",
            headline="Software Engineer | React | Node.js | AI Enthusiast",
            location="San Francisco, CA",
            experience=[
                ExperienceEntry(
                    title="Software Engineer",
                    company="Tech Corp",
                    duration="2022 - Present",
                    description="Developed web applications using React and Node.js",
                ),
                ExperienceEntry(
                    title="Junior Developer",
                    company="Startup Inc",
                    duration="2020 - 2022",
                    description="Built frontend features and maintained codebase",
                ),
            ],
            education=[
                ProfileEducation(
                    degree="Bachelor of Technology in Computer Science",
                    institution="University of Technology",
                    graduation_year="2020",
                ),
            ],
            skills=["React", "JavaScript", "Node.js", "Python", "Machine Learning", "SQL", "Git"],
        )


class HtmlProfileImporter(ProfileImporter):
    """Downloads the public profile page and parses it with `parse_profile_html`."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.session = session or requests.Session()
        self.timeout = timeout or float(os.getenv("PROFILE_FETCH_TIMEOUT", "15"))

    def fetch_profile(self, url: str) -> LinkedInProfile:
        response = self.session.get(url, timeout=self.timeout, headers={"User-Agent": "Mozilla/5.0"})
        response.raise_for_status()
        return parse_profile_html(response.text)


def get_profile_importer(kind: Optional[str] = None) -> ProfileImporter:
    kind = (kind or os.getenv("PROFILE_IMPORTER", "mock")).lower()
    if kind == "html":
        return HtmlProfileImporter()
    if kind == "mock":
        return MockProfileImporter()
    raise ValueError(f"Unknown profile importer: {kind}")


# -------------------------------------------------------------------
# HTML parsing
# -------------------------------------------------------------------
NAME_PATTERNS = (
    re.compile(r"<title>([^|<]+?)\s*-\s*LinkedIn</title>", re.IGNORECASE),
    re.compile(r'<h1[^>]*class="[^"]*pv-top-card__name[^"]*"[^>]*>([^<]+)</h1>', re.IGNORECASE),
    re.compile(r'<span[^>]*class="[^"]*text-heading-xlarge[^"]*"[^>]*>([^<]+)</span>', re.IGNORECASE),
)

HEADLINE_PATTERNS = (
    re.compile(r'<h2[^>]*class="[^"]*pv-top-card__summary-title[^"]*"[^>]*>([^<]+)</h2>', re.IGNORECASE),
    re.compile(r'<div[^>]*class="[^"]*text-body-medium[^"]*"[^>]*>([^<]+)</div>', re.IGNORECASE),
)

LOCATION_PATTERNS = (
    re.compile(r'<span[^>]*class="[^"]*pv-top-card__location[^"]*"[^>]*>([^<]+)</span>', re.IGNORECASE),
    re.compile(r'<span[^>]*class="[^"]*text-body-small[^"]*"[^>]*>([^<]+)</span>', re.IGNORECASE),
)

EXPERIENCE_SECTION = re.compile(r'<section[^>]*id="experience-section"[^>]*>(.*?)</section>', re.IGNORECASE | re.DOTALL)
EXPERIENCE_ENTRY = re.compile(r'<div[^>]*class="[^"]*pv-position-entity[^"]*"[^>]*>(.*?)</div>', re.IGNORECASE | re.DOTALL)
EDUCATION_SECTION = re.compile(r'<section[^>]*id="education-section"[^>]*>(.*?)</section>', re.IGNORECASE | re.DOTALL)
EDUCATION_ENTRY = re.compile(r'<div[^>]*class="[^"]*pv-education-entity[^"]*"[^>]*>(.*?)</div>', re.IGNORECASE | re.DOTALL)
SKILLS_SECTION = re.compile(r'<section[^>]*id="skills-section"[^>]*>(.*?)</section>', re.IGNORECASE | re.DOTALL)
SKILL_NAME = re.compile(r'<span[^>]*class="[^"]*pv-skill-category-entity__name-text[^"]*"[^>]*>([^<]+)</span>', re.IGNORECASE)

ENTRY_HEADING = re.compile(r"<h3[^>]*>([^<]+)</h3>", re.IGNORECASE)
ENTRY_SECONDARY = re.compile(r'<p[^>]*class="[^"]*pv-entity__secondary-title[^"]*"[^>]*>([^<]+)</p>', re.IGNORECASE)
ENTRY_DURATION = re.compile(r'<span[^>]*class="[^"]*pv-entity__bullet-item-v2[^"]*"[^>]*>([^<]+)</span>', re.IGNORECASE)
ENTRY_DATES = re.compile(r'<span[^>]*class="[^"]*pv-entity__dates[^"]*"[^>]*>([^<]+)</span>', re.IGNORECASE)


def _first_group(patterns, html: str, default: str = "") -> str:
    for pattern in patterns:
        match = pattern.search(html)
        if match:
            return match.group(1).strip()
    return default


def _group_or_empty(pattern: re.Pattern, html: str) -> str:
    match = pattern.search(html)
    return match.group(1).strip() if match else ""


def _parse_experience(html: str) -> List[ExperienceEntry]:
    section = EXPERIENCE_SECTION.search(html)
    if not section:
        return []

    experience = []
    for entry in EXPERIENCE_ENTRY.finditer(section.group(1)):
        entry_html = entry.group(1)
        title = _group_or_empty(ENTRY_HEADING, entry_html)
        company = _group_or_empty(ENTRY_SECONDARY, entry_html)
        if title and company:
            experience.append(ExperienceEntry(
                title=title,
                company=company,
                duration=_group_or_empty(ENTRY_DURATION, entry_html),
            ))
    return experience[:MAX_PROFILE_EXPERIENCE]


def _parse_education(html: str) -> List[ProfileEducation]:
    section = EDUCATION_SECTION.search(html)
    if not section:
        return []

    education = []
    for entry in EDUCATION_ENTRY.finditer(section.group(1)):
        entry_html = entry.group(1)
        degree = _group_or_empty(ENTRY_HEADING, entry_html)
        institution = _group_or_empty(ENTRY_SECONDARY, entry_html)
        if degree and institution:
            education.append(ProfileEducation(
                degree=degree,
                institution=institution,
                graduation_year=_group_or_empty(ENTRY_DATES, entry_html),
            ))
    return education


def _parse_skills(html: str) -> List[str]:
    skills = []
    section = SKILLS_SECTION.search(html)
    if section:
        skills = [m.group(1).strip() for m in SKILL_NAME.finditer(section.group(1))]

    # No skills section: fall back to scanning the page for common skills
    if not skills:
        html_lower = html.lower()
        return [skill for skill in COMMON_SKILLS if skill.lower() in html_lower]

    return skills[:MAX_PROFILE_SKILLS]


def parse_profile_html(html: str) -> LinkedInProfile:
    return LinkedInProfile(
        name=_first_group(NAME_PATTERNS, html, default="Unknown Name"),
        headline=_first_group(HEADLINE_PATTERNS, html),
        location=_first_group(LOCATION_PATTERNS, html),
        experience=_parse_experience(html),
        education=_parse_education(html),
        skills=_parse_skills(html),
    )


# -------------------------------------------------------------------
# Profile -> resume
# -------------------------------------------------------------------
def render_profile_text(profile: LinkedInProfile) -> str:
    lines = [profile.name, profile.headline, profile.location, "", "EXPERIENCE:"]
    for exp in profile.experience:
        lines.extend(["", exp.title, f"{exp.company} | {exp.duration}", exp.description])
    lines.extend(["", "EDUCATION:"])
    for edu in profile.education:
        lines.extend(["", edu.degree, f"{edu.institution} | {edu.graduation_year}"])
    lines.extend(["", f"SKILLS: {', '.join(profile.skills)}"])
    return "\n".join(lines).strip()


def _graduation_year(value: str) -> Optional[int]:
    years = re.findall(r"\b(?:19|20)\d{2}\b", value or "")
    return int(years[-1]) if years else None


def profile_to_resume(profile: LinkedInProfile) -> Tuple[str, ParsedResume]:
    """Render the profile as resume text and build its parsed resume data."""
    text = render_profile_text(profile)
    first_education = profile.education[0] if profile.education else None

    stated_years = extract_stated_years(text)
    if stated_years is not None:
        years = float(stated_years)
    else:
        # Profile durations are free text; estimate per listed position
        years = len(profile.experience) * DEFAULT_ENTRY_YEARS

    parsed = ParsedResume(
        skills=profile.skills,
        education=Education(
            degree=first_education.degree if first_education else None,
            institution=first_education.institution if first_education else None,
            graduation_year=_graduation_year(first_education.graduation_year) if first_education else None,
        ),
        contact_info=ContactInfo(location=profile.location or None),
        experience=profile.experience,
        job_level=infer_job_level(text.lower(), profile.experience),
        years_of_experience=years,
    )
    return text, parsed
