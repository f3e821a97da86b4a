import math
import logging
from typing import Dict, Optional

from matching.config import (
    WEIGHTS, LEVEL_GAP_PENALTY, LOCATION_SCORES,
    EXPERIENCE_POINTS_PER_YEAR, EXPERIENCE_BONUS_CAP,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def score_breakdown(skill_analysis, level_match, location_match,
                    years_of_experience: Optional[float]) -> Dict[str, float]:
    """Sub-scores (each 0-100) that feed the weighted match score."""
    if level_match.is_match:
        level_score = 100
    else:
        level_score = max(0, 100 - level_match.experience_gap * LEVEL_GAP_PENALTY)

    location_score = LOCATION_SCORES["match"] if location_match.is_match else LOCATION_SCORES["mismatch"]

    # Experience only counts when known and positive
    experience_score = 0
    if years_of_experience and years_of_experience > 0:
        experience_score = min(years_of_experience * EXPERIENCE_POINTS_PER_YEAR, EXPERIENCE_BONUS_CAP)

    return {
        "skills": clamp(skill_analysis.skill_score),
        "level": level_score,
        "location": location_score,
        "experience": experience_score,
    }


def calculate_match_score(skill_analysis, level_match, location_match,
                          years_of_experience: Optional[float]) -> int:
    """Weighted sum of the sub-scores, rounded and clamped to 0-100."""
    components = score_breakdown(skill_analysis, level_match, location_match, years_of_experience)
    final = sum(WEIGHTS[name] * value for name, value in components.items())
    score = int(clamp(round_half_up(final)))

    logger.info(f"Match score: {score} (" +
                ", ".join(f"{k}={v:.1f}" for k, v in components.items()) + ")")
    return score
