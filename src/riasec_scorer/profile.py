"""Profile Assembler - Phase 4 of the scoring pipeline.

Packages the ranking into a ProfileResult with its Holland code, and
produces the human-readable interpretation of a profile.
"""

from collections.abc import Mapping

from .certainty import certainty_message, classify_certainty
from .dimension_scorer import tally_dimensions
from .questionnaire import ITEMS_PER_DIMENSION, MAX_ANSWER, normalize_responses, percentage
from .ranker import rank_dimensions
from .schema import (
    DIMENSION_NAMES,
    Dimension,
    DimensionSummary,
    ProfileInterpretation,
    ProfileResult,
    ProfileStatistics,
    RankingEntry,
)

CODE_LENGTH = 3
MAX_DIMENSION_SCORE = ITEMS_PER_DIMENSION * MAX_ANSWER


def assemble_profile(
    scores: Mapping[Dimension, int],
    ranking: list[RankingEntry],
    intensity: Mapping[Dimension, int],
    rejection: Mapping[Dimension, int],
) -> ProfileResult:
    """Build the ProfileResult for a final ranking.

    The Holland code is the letters of ranks 1-3 in rank order.
    """
    holland_code = "".join(entry.dimension.value for entry in ranking[:CODE_LENGTH])
    top, bottom = ranking[0], ranking[-1]

    return ProfileResult(
        holland_code=holland_code,
        certainty=classify_certainty(ranking),
        scores={d: scores[d] for d in Dimension},
        ranking=list(ranking),
        statistics=ProfileStatistics(
            intensity={d: intensity.get(d, 0) for d in Dimension},
            rejection={d: rejection.get(d, 0) for d in Dimension},
            dominant_dimension=top.dimension,
            max_score=top.score,
            min_score=bottom.score,
            score_range=top.score - bottom.score,
        ),
    )


def score_responses(responses: Mapping) -> ProfileResult:
    """Run the full scoring pipeline on a complete response set.

    Raises:
        IncompleteResponsesError: if any item is unanswered or out of range.
    """
    scores, intensity, rejection = tally_dimensions(normalize_responses(responses))
    ranking = rank_dimensions(scores, intensity, rejection)
    return assemble_profile(scores, ranking, intensity, rejection)


def interpret_profile(result: ProfileResult) -> ProfileInterpretation:
    """Describe a profile in words: label, top dimensions, strengths."""
    top = result.ranking[:CODE_LENGTH]

    main_dimensions = [
        DimensionSummary(
            dimension=entry.dimension,
            name=DIMENSION_NAMES[entry.dimension],
            score=entry.score,
            percentage=percentage(entry.score, MAX_DIMENSION_SCORE),
        )
        for entry in top
    ]

    return ProfileInterpretation(
        holland_code=result.holland_code,
        certainty=result.certainty,
        profile_label="-".join(DIMENSION_NAMES[e.dimension] for e in top),
        main_dimensions=main_dimensions,
        certainty_message=certainty_message(result.certainty),
        strengths=[DIMENSION_NAMES[e.dimension] for e in top[:2]],
        secondary_dimensions=[
            DIMENSION_NAMES[e.dimension] for e in result.ranking[CODE_LENGTH:]
        ],
    )
