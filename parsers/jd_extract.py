import re
from typing import Optional

from matching.config import DEFAULT_LEVEL, EXPERIENCE_LEVEL_THRESHOLDS, LEVEL_HIERARCHY, REMOTE_KEYWORDS
from parsers.extract import LEVEL_PATTERNS, extract_location
from parsers.skills import extract_skills

EXPERIENCE_RANGE_PATTERN = re.compile(r"(\d+)\s*(?:\+|-\s*\d+)?\s*(?:years?|yrs?)", re.IGNORECASE)


def detect_level(title: str, text: str = "") -> Optional[str]:
    """
    Seniority for a posting: explicit level words in the title first, then the
    minimum years asked for in the text (>=7 senior, >=3 mid, else entry).
    """
    for level, pattern in LEVEL_PATTERNS:
        if pattern.search(title or ""):
            return level

    match = EXPERIENCE_RANGE_PATTERN.search(text or "")
    if not match:
        return None
    years = int(match.group(1))
    levels_by_ordinal = {ordinal: level for level, ordinal in LEVEL_HIERARCHY.items()}
    for min_years, ordinal in EXPERIENCE_LEVEL_THRESHOLDS:
        if years >= min_years:
            return levels_by_ordinal[ordinal]
    return DEFAULT_LEVEL


def detect_location(text: str) -> Optional[str]:
    text_lower = (text or "").lower()
    if any(keyword in text_lower for keyword in REMOTE_KEYWORDS):
        return "Remote"
    return extract_location(text or "")


def extract_jd_details(text: str, title: str = "") -> dict:
    """
    Pull matchable details out of a free-text job description.
    Extracts: required skills (vocabulary terms), seniority level and location.
    """
    text = re.sub(r"\s+", " ", text or "").strip()
    return {
        "required_skills": extract_skills(text.lower()),
        "experience_level": detect_level(title, text),
        "location": detect_location(text),
    }
