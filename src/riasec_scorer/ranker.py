"""Tie-Break Ranker - Phase 2 of the scoring pipeline.

Orders the six dimensions into a strict ranking. Ties are resolved by a
cascade of criteria, each consulted only when the previous ones are equal:

1. Total score (higher first)
2. Intensity - answers of 4-5 (higher first)
3. Rejection - answers of 1-2 (lower first)
4. Dimension letter (alphabetical)

The letter is unique per dimension, so the cascade is a total order and
the same input always produces the same ranking.
"""

from collections.abc import Mapping

from .schema import Dimension, RankingEntry


def ranking_key(
    dimension: Dimension,
    scores: Mapping[Dimension, int],
    intensity: Mapping[Dimension, int],
    rejection: Mapping[Dimension, int],
) -> tuple[int, int, int, str]:
    """Composite sort key; ascending order of this key is the final ranking."""
    return (
        -scores[dimension],
        -intensity.get(dimension, 0),
        rejection.get(dimension, 0),
        dimension.value,
    )


def rank_dimensions(
    scores: Mapping[Dimension, int],
    intensity: Mapping[Dimension, int],
    rejection: Mapping[Dimension, int],
) -> list[RankingEntry]:
    """Rank all six dimensions.

    Args:
        scores: Dimension totals (all six dimensions required)
        intensity: Per-dimension count of answers >= 4
        rejection: Per-dimension count of answers <= 2

    Returns:
        Six RankingEntry objects, best first
    """
    missing = [d.value for d in Dimension if d not in scores]
    if missing:
        raise ValueError(f"Scores missing for dimensions: {', '.join(missing)}")

    ordered = sorted(
        Dimension,
        key=lambda d: ranking_key(d, scores, intensity, rejection),
    )

    return [
        RankingEntry(
            dimension=d,
            score=scores[d],
            intensity=intensity.get(d, 0),
            rejection=rejection.get(d, 0),
        )
        for d in ordered
    ]


def tied_groups(ranking: list[RankingEntry]) -> list[list[Dimension]]:
    """Return runs of equal score that needed the tie-break cascade."""
    groups: list[list[Dimension]] = []
    i = 0
    while i < len(ranking):
        j = i + 1
        while j < len(ranking) and ranking[j].score == ranking[i].score:
            j += 1
        if j - i > 1:
            groups.append([entry.dimension for entry in ranking[i:j]])
        i = j
    return groups
