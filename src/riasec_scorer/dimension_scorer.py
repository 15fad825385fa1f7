"""Dimension Scorer - Phase 1 of the scoring pipeline.

Aggregates the 36 item answers into six dimension totals, plus the
per-dimension intensity and rejection counts used to break ranking ties.

The public functions validate their input. ``tally_dimensions`` works on a
response set already passed through ``normalize_responses`` and computes
all three tallies in one pass.
"""

from collections.abc import Mapping

from .questionnaire import ITEM_DIMENSIONS, normalize_responses
from .schema import Dimension

INTENSITY_MIN_ANSWER = 4  # "Agree" or stronger
REJECTION_MAX_ANSWER = 2  # "Disagree" or weaker

Tally = dict[Dimension, int]


def _empty_tally() -> Tally:
    return {dimension: 0 for dimension in Dimension}


def tally_dimensions(normalized: Mapping[int, int]) -> tuple[Tally, Tally, Tally]:
    """Return (scores, intensity, rejection) for a normalized response set."""
    totals = _empty_tally()
    intensity = _empty_tally()
    rejection = _empty_tally()

    for item_id, answer in normalized.items():
        dimension = ITEM_DIMENSIONS[item_id]
        totals[dimension] += answer
        if answer >= INTENSITY_MIN_ANSWER:
            intensity[dimension] += 1
        if answer <= REJECTION_MAX_ANSWER:
            rejection[dimension] += 1

    return totals, intensity, rejection


def score_dimensions(responses: Mapping) -> Tally:
    """Sum the answers of each dimension's six items.

    Each total lies in [6, 30]. Raises IncompleteResponsesError for an
    invalid response set.
    """
    return tally_dimensions(normalize_responses(responses))[0]


def count_intensity(responses: Mapping) -> Tally:
    """Count answers of 4 or 5 per dimension."""
    return tally_dimensions(normalize_responses(responses))[1]


def count_rejection(responses: Mapping) -> Tally:
    """Count answers of 1 or 2 per dimension."""
    return tally_dimensions(normalize_responses(responses))[2]
