import re
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from matching.config import MAJOR_CITIES
from parsers.skills import categorize_skills, extract_skills
from schemas import ContactInfo, Education, ExperienceEntry, ParsedResume

logger = logging.getLogger(__name__)

# Degree patterns, first match wins
DEGREE_PATTERNS = (
    re.compile(r"bachelor.*?(?:computer science|engineering|technology)", re.IGNORECASE),
    re.compile(r"master.*?(?:computer science|engineering|technology)", re.IGNORECASE),
    re.compile(r"\bb\.?\s?tech\b", re.IGNORECASE),
    re.compile(r"\bm\.?\s?tech\b", re.IGNORECASE),
    re.compile(r"\bbca\b", re.IGNORECASE),
    re.compile(r"\bmca\b", re.IGNORECASE),
    re.compile(r"\bph\.?\s?d\b", re.IGNORECASE),
)

INSTITUTION_PATTERNS = (
    re.compile(r"university", re.IGNORECASE),
    re.compile(r"college", re.IGNORECASE),
    re.compile(r"institute", re.IGNORECASE),
    re.compile(r"\biit\b", re.IGNORECASE),
    re.compile(r"\bnit\b", re.IGNORECASE),
)

YEAR_PATTERN = re.compile(r"\b20\d{2}\b")
MIN_GRADUATION_YEAR = 2000
MAX_GRADUATION_YEAR = 2030

GPA_PATTERN = re.compile(r"\b(?:CGPA|GPA)\s*[:\-]?\s*(\d+(?:\.\d+)?)", re.IGNORECASE)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"\+?\(?\d[\d \-().]{8,18}\d")
PHONE_DIGITS = (10, 15)
# Runs made only of years ("2018 2019 2020") are not phone numbers
YEARS_ONLY_PATTERN = re.compile(r"(?:(?:19|20)\d{2}[\s\-–.]*)+")

LINKEDIN_PATTERN = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w-]+/?", re.IGNORECASE)
GITHUB_PATTERN = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[\w-]+/?", re.IGNORECASE)
URL_PATTERN = re.compile(r"https?://[^\s|,;]+", re.IGNORECASE)

EXPERIENCE_KEYWORDS = ("intern", "developer", "engineer")
MAX_EXPERIENCE_ENTRIES = 3
UNKNOWN_COMPANY = "Unknown Company"
NO_DESCRIPTION = "No description available"

DURATION_PATTERNS = (
    re.compile(r"\b(?:19|20)\d{2}\s*(?:-|–|—|to)\s*(?:(?:19|20)\d{2}|present|current)\b", re.IGNORECASE),
    re.compile(r"\b\d+(?:\.\d+)?\s*(?:years?|yrs?)\b", re.IGNORECASE),
)

# Level keywords in priority order
LEVEL_KEYWORDS = (
    ("senior", ("senior", "lead", "principal", "staff")),
    ("entry", ("junior", "entry", "fresher", "intern", "interns", "internship", "internships", "interned")),
    ("mid", ("mid", "intermediate", "associate")),
    ("executive", ("executive", "director", "manager", "head")),
)

LEVEL_PATTERNS = tuple(
    (level, re.compile(r"\b(?:" + "|".join(keywords) + r")\b", re.IGNORECASE))
    for level, keywords in LEVEL_KEYWORDS
)

DURATION_YEARS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:years?|yrs?)", re.IGNORECASE)
DEFAULT_ENTRY_YEARS = 1.5
CURRENT_ROLE_YEARS = 1.0

STATED_YEARS_PATTERN = re.compile(r"(\d+)\s*\+?\s*(?:years?|yrs?)\s*(?:of\s*)?(?:experience|exp)\b", re.IGNORECASE)

TEXT_EXTENSIONS = {"", ".txt", ".text", ".md"}
TEXT_ENCODINGS = ("utf-8", "cp1252", "latin-1")


def extract_degree(text: str) -> Optional[str]:
    for pattern in DEGREE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()
    return None


def extract_institution(text: str) -> Optional[str]:
    for line in text.splitlines():
        if any(pattern.search(line) for pattern in INSTITUTION_PATTERNS):
            return line.strip()
    return None


def extract_graduation_year(text: str) -> Optional[int]:
    years = [
        int(y) for y in YEAR_PATTERN.findall(text)
        if MIN_GRADUATION_YEAR <= int(y) <= MAX_GRADUATION_YEAR
    ]
    return max(years) if years else None


def extract_gpa(text: str) -> Optional[float]:
    match = GPA_PATTERN.search(text)
    return float(match.group(1)) if match else None


def extract_education(text: str) -> Education:
    return Education(
        degree=extract_degree(text),
        institution=extract_institution(text),
        graduation_year=extract_graduation_year(text),
        gpa=extract_gpa(text),
    )


def extract_email(text: str) -> Optional[str]:
    match = EMAIL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_phone(text: str) -> Optional[str]:
    """First phone-like run; runs of bare years and short numbers are skipped."""
    low, high = PHONE_DIGITS
    for match in PHONE_PATTERN.finditer(text):
        candidate = match.group(0).strip()
        digits = sum(ch.isdigit() for ch in candidate)
        if YEARS_ONLY_PATTERN.fullmatch(candidate):
            continue
        if low <= digits <= high:
            return candidate
    return None


def extract_location(text: str) -> Optional[str]:
    text_lower = text.lower()
    for city in MAJOR_CITIES:
        if city in text_lower:
            return city.capitalize()
    return None


def extract_website(text: str) -> Optional[str]:
    for match in URL_PATTERN.finditer(text):
        url = match.group(0).rstrip(".)")
        if "linkedin.com" not in url.lower() and "github.com" not in url.lower():
            return url
    return None


def _first(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(0) if match else None


def extract_contact_info(text: str) -> ContactInfo:
    return ContactInfo(
        email=extract_email(text),
        phone=extract_phone(text),
        location=extract_location(text),
        linkedin=_first(LINKEDIN_PATTERN, text),
        github=_first(GITHUB_PATTERN, text),
        website=extract_website(text),
    )


def _find_duration(lines: List[str]) -> str:
    for line in lines:
        for pattern in DURATION_PATTERNS:
            match = pattern.search(line)
            if match:
                return match.group(0)
    return ""


def extract_experience(text: str) -> List[ExperienceEntry]:
    """
    Naive line scan: any line mentioning intern/developer/engineer starts an entry,
    the next line is taken as the company and the one after as the description.

    Entry boundaries are not validated. Duration is whatever year range or
    "N years" phrase appears in the entry's three lines, empty when there is none.
    """
    lines = text.splitlines()
    experience = []

    for i, line in enumerate(lines):
        if not any(keyword in line.lower() for keyword in EXPERIENCE_KEYWORDS):
            continue
        company = lines[i + 1].strip() if i + 1 < len(lines) else ""
        description = lines[i + 2].strip() if i + 2 < len(lines) else ""
        experience.append(ExperienceEntry(
            title=line.strip(),
            company=company or UNKNOWN_COMPANY,
            duration=_find_duration(lines[i:i + 3]),
            description=description or NO_DESCRIPTION,
        ))
        if len(experience) == MAX_EXPERIENCE_ENTRIES:
            break

    return experience


def infer_job_level(text: str, experience: List[ExperienceEntry]) -> str:
    """Seniority from explicit keywords, else from the number and titles of entries."""
    for level, pattern in LEVEL_PATTERNS:
        if pattern.search(text):
            return level

    if not experience:
        return "entry"
    if len(experience) <= 2:
        has_senior_title = any(
            "senior" in exp.title.lower() or "lead" in exp.title.lower()
            for exp in experience
        )
        return "senior" if has_senior_title else "mid"
    return "senior"


def _entry_years(duration: str) -> float:
    duration = duration.lower()
    match = DURATION_YEARS_PATTERN.search(duration)
    if match:
        return float(match.group(1))
    if "present" in duration or "current" in duration:
        return CURRENT_ROLE_YEARS
    years = YEAR_PATTERN.findall(duration)
    if len(years) >= 2:
        return float(max(1, int(years[1]) - int(years[0])))
    return DEFAULT_ENTRY_YEARS


def calculate_years_of_experience(experience: List[ExperienceEntry]) -> float:
    if not experience:
        return 0.0
    total = sum(_entry_years(exp.duration) for exp in experience)
    return round(total, 1)


def extract_stated_years(text: str) -> Optional[int]:
    """Largest "N years of experience" statement in the text."""
    years = [int(n) for n in STATED_YEARS_PATTERN.findall(text)]
    return max(years) if years else None


def parse_text(text: str) -> ParsedResume:
    """Extract every structured attribute from a resume's plain text."""
    text_lower = text.lower()
    experience = extract_experience(text)
    skills = extract_skills(text_lower)

    parsed = ParsedResume(
        skills=skills,
        skills_categorized=categorize_skills(skills),
        education=extract_education(text),
        contact_info=extract_contact_info(text),
        experience=experience,
        job_level=infer_job_level(text_lower, experience),
        years_of_experience=calculate_years_of_experience(experience),
    )
    logger.info(f"Parsed resume: {len(parsed.skills)} skills, {len(parsed.experience)} experience entries, "
                f"level={parsed.job_level}, years={parsed.years_of_experience}")
    return parsed


class ResumeParser:
    """Turns uploaded plain-text resumes into parsed resume data"""

    def decode(self, data: bytes) -> str:
        """Decode file bytes, trying the supported encodings in order"""
        for encoding in TEXT_ENCODINGS:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                continue
        raise ValueError("Unable to decode file with supported encodings")

    def extract_text(self, file_name: str, data: bytes) -> str:
        extension = Path(file_name or "").suffix.lower()
        if extension not in TEXT_EXTENSIONS:
            raise ValueError(f"Unsupported file format: {extension}")
        return self.decode(data)

    def parse_upload(self, file_name: str, data: bytes) -> Tuple[str, ParsedResume]:
        """
        Parse an uploaded resume file.

        Args:
            file_name: Original file name, used to check the format
            data: Raw file content

        Returns:
            The decoded text and the parsed resume data
        """
        logger.info(f"Starting parse of: {file_name}")
        text = self.extract_text(file_name, data)
        if not text.strip():
            raise ValueError("No text could be extracted from the file")
        return text, parse_text(text)
