"""Compatibility Scorer.

Scores how well two three-letter Holland codes line up:

- +40 / +25 / +15 when the first / second / third letters match
- +10 for each user letter found in the career code at a different position
- clamped to 100

A code compared with itself scores 80, not 100: every letter is already
rewarded positionally, so no shared-letter points apply. The ceiling is
part of the metric and is kept as is.
"""

from typing import Any, Optional

from career_catalog.schema import is_valid_holland_code

from .config import CompatibilityLevelsConfig, CompatibilityWeightsConfig, get_config
from .exceptions import InvalidProfileCodeError
from .schema import (
    DIMENSION_NAMES,
    CodeDifferences,
    Dimension,
    DimensionMatch,
    MatchType,
)


def normalize_code(code: Any) -> str:
    """Upper-case and validate a Holland code.

    Raises:
        InvalidProfileCodeError: if the code is not three RIASEC letters.
    """
    if not is_valid_holland_code(code):
        raise InvalidProfileCodeError(code)
    return code.strip().upper()


def _position_points(weights: CompatibilityWeightsConfig) -> tuple[int, int, int]:
    return (weights.first_position, weights.second_position, weights.third_position)


def compatibility_score(
    user_code: str,
    career_code: str,
    weights: Optional[CompatibilityWeightsConfig] = None,
) -> int:
    """Compute the 0-100 compatibility between a user code and a career code."""
    cfg = weights or get_config().compatibility_weights
    user = normalize_code(user_code)
    career = normalize_code(career_code)

    score = 0
    for position, points in enumerate(_position_points(cfg)):
        if user[position] == career[position]:
            score += points

    for letter in user:
        if letter in career and user.index(letter) != career.index(letter):
            score += cfg.shared_letter

    return max(0, min(score, cfg.max_score))


def analyze_matches(user_code: str, career_code: str) -> list[DimensionMatch]:
    """List the user letters that appear in the career code, in user order."""
    user = normalize_code(user_code)
    career = normalize_code(career_code)

    matches = []
    for position, letter in enumerate(user):
        dimension = Dimension(letter)
        if career[position] == letter:
            matches.append(DimensionMatch(
                dimension=dimension,
                name=DIMENSION_NAMES[dimension],
                match_type=MatchType.EXACT,
                user_position=position + 1,
                career_position=position + 1,
            ))
        elif letter in career and user.index(letter) != career.index(letter):
            matches.append(DimensionMatch(
                dimension=dimension,
                name=DIMENSION_NAMES[dimension],
                match_type=MatchType.SHARED,
                user_position=position + 1,
                career_position=career.index(letter) + 1,
            ))
    return matches


def analyze_differences(user_code: str, career_code: str) -> CodeDifferences:
    """Letters present in only one of the two codes."""
    user = normalize_code(user_code)
    career = normalize_code(career_code)

    return CodeDifferences(
        user_only=[Dimension(letter) for letter in user if letter not in career],
        career_only=[Dimension(letter) for letter in career if letter not in user],
    )


def compatibility_level(
    score: int,
    levels: Optional[CompatibilityLevelsConfig] = None,
) -> str:
    """Label a compatibility score."""
    cfg = levels or get_config().compatibility_levels
    if score >= cfg.excellent:
        return "Excellent"
    if score >= cfg.very_good:
        return "Very good"
    if score >= cfg.good:
        return "Good"
    return "Moderate"
