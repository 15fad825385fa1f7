"""Confidence Classifier - Phase 3 of the scoring pipeline.

Labels how clearly the top of the ranking stands out. The gaps between
ranks 1-2, 2-3 and 3-4 are averaged: a large average means the profile
code is well separated from the remaining dimensions.
"""

from typing import Optional

from .config import CertaintyThresholdsConfig, get_config
from .schema import CertaintyLevel, RankingEntry

GAP_DEPTH = 3  # gaps 1-2, 2-3, 3-4

CERTAINTY_MESSAGES = {
    CertaintyLevel.HIGH: (
        "Your profile shows a clear, well-defined vocational orientation. "
        "The main dimensions stand out significantly."
    ),
    CertaintyLevel.MEDIUM: (
        "Your profile shows clear tendencies, although some dimensions have "
        "similar scores. This is normal and reflects versatility."
    ),
    CertaintyLevel.EXPLORATORY: (
        "Your profile shows varied interests without a single dominant "
        "orientation. This suggests flexibility and several vocational options."
    ),
}


def average_top_gap(ranking: list[RankingEntry]) -> Optional[float]:
    """Mean score gap across the top four ranks, or None with fewer than four."""
    if len(ranking) < GAP_DEPTH + 1:
        return None
    gaps = [ranking[i].score - ranking[i + 1].score for i in range(GAP_DEPTH)]
    return sum(gaps) / GAP_DEPTH


def classify_certainty(
    ranking: list[RankingEntry],
    thresholds: Optional[CertaintyThresholdsConfig] = None,
) -> CertaintyLevel:
    """Classify a final ranking as High, Medium or Exploratory."""
    cfg = thresholds or get_config().certainty_thresholds

    average_gap = average_top_gap(ranking)
    if average_gap is None:
        return CertaintyLevel.EXPLORATORY

    if average_gap >= cfg.high_average_gap:
        return CertaintyLevel.HIGH
    if average_gap >= cfg.medium_average_gap:
        return CertaintyLevel.MEDIUM
    return CertaintyLevel.EXPLORATORY


def certainty_message(level: CertaintyLevel) -> str:
    return CERTAINTY_MESSAGES.get(level, CERTAINTY_MESSAGES[CertaintyLevel.MEDIUM])
