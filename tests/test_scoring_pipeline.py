"""Tests for dimension scoring, tie-break ranking, certainty and profiles."""

from unittest.mock import patch

import pytest

from riasec_scorer import ScoringEngine, questionnaire, score
from riasec_scorer.certainty import average_top_gap, certainty_message, classify_certainty
from riasec_scorer.config import CertaintyThresholdsConfig
from riasec_scorer.dimension_scorer import (
    count_intensity,
    count_rejection,
    score_dimensions,
    tally_dimensions,
)
from riasec_scorer.exceptions import IncompleteResponsesError
from riasec_scorer.profile import interpret_profile
from riasec_scorer.ranker import rank_dimensions, tied_groups
from riasec_scorer.schema import CertaintyLevel, Dimension, RankingEntry


def _ranking(*scores: int) -> list[RankingEntry]:
    """Ranking entries with the given scores, in RIASEC order."""
    return [
        RankingEntry(dimension=d, score=s)
        for d, s in zip(Dimension, scores)
    ]


class TestDimensionScorer:
    """Per-dimension totals and intensity/rejection counts."""

    def test_totals_per_dimension(self, make_responses):
        responses = make_responses(R=1, I=5, S=[1, 2, 3, 4, 5, 5])
        scores = score_dimensions(responses)

        assert scores[Dimension.REALISTIC] == 6
        assert scores[Dimension.INVESTIGATIVE] == 30
        assert scores[Dimension.SOCIAL] == 20
        assert scores[Dimension.ARTISTIC] == 18

    def test_total_equals_sum_of_answers(self, make_responses):
        responses = make_responses(R=[1, 2, 3, 4, 5, 1], E=[5, 5, 4, 2, 2, 1], C=2)
        assert sum(score_dimensions(responses).values()) == sum(responses.values())

    def test_intensity_and_rejection_counts(self, make_responses):
        responses = make_responses(A=[5, 4, 3, 2, 1, 4])
        assert count_intensity(responses)[Dimension.ARTISTIC] == 3
        assert count_rejection(responses)[Dimension.ARTISTIC] == 2
        assert count_intensity(responses)[Dimension.REALISTIC] == 0

    def test_tally_matches_public_functions(self, make_responses):
        responses = make_responses(A=[5, 4, 3, 2, 1, 4], C=1)
        scores, intensity, rejection = tally_dimensions(questionnaire.normalize_responses(responses))

        assert scores == score_dimensions(responses)
        assert intensity == count_intensity(responses)
        assert rejection == count_rejection(responses)

    def test_response_set_validated_once_per_score(self, make_responses):
        with patch(
            "riasec_scorer.questionnaire.validate_responses",
            wraps=questionnaire.validate_responses,
        ) as validate:
            score(make_responses(I=5))

        validate.assert_called_once()

    def test_incomplete_set_raises(self, make_responses):
        responses = make_responses()
        del responses[20]
        with pytest.raises(IncompleteResponsesError):
            score_dimensions(responses)


class TestTieBreakRanker:
    """Ranking order and the tie-break cascade."""

    def test_all_neutral_ranks_alphabetically(self, make_responses):
        result = score(make_responses())

        assert [e.dimension.value for e in result.ranking] == ["A", "C", "E", "I", "R", "S"]
        assert result.holland_code == "ACE"

    def test_single_leader_then_alphabetical(self, make_responses):
        result = score(make_responses(I=5))

        assert [e.dimension.value for e in result.ranking] == ["I", "A", "C", "E", "R", "S"]
        assert result.holland_code == "IAC"

    def test_single_strong_dimension_over_strong_rejection(self, make_responses):
        result = score(make_responses(default=1, I=5))

        assert result.scores[Dimension.INVESTIGATIVE] == 30
        assert all(
            total == 6 for dimension, total in result.scores.items()
            if dimension != Dimension.INVESTIGATIVE
        )
        assert "".join(e.dimension.value for e in result.ranking) == "IACERS"
        assert result.holland_code == "IAC"

    def test_intensity_breaks_score_tie(self, make_responses):
        # S totals 18 like the rest but has three strong answers
        result = score(make_responses(S=[4, 4, 4, 2, 2, 2]))

        assert result.scores[Dimension.SOCIAL] == 18
        assert result.ranking[0].dimension == Dimension.SOCIAL
        assert result.holland_code == "SAC"

    def test_rejection_breaks_intensity_tie(self, make_responses):
        responses = make_responses(
            R=[5, 1, 3, 3, 3, 3],
            C=[5, 2, 2, 3, 3, 3],
        )
        result = score(responses)

        assert [e.dimension.value for e in result.ranking[:2]] == ["R", "C"]
        assert result.holland_code == "RCA"

    def test_ranking_is_a_permutation(self, make_responses):
        result = score(make_responses(R=[1, 5, 2, 4, 3, 3], E=4))
        assert sorted(e.dimension.value for e in result.ranking) == sorted("RIASEC")

    def test_ranking_is_deterministic(self, make_responses):
        responses = make_responses(A=[4, 4, 2, 2, 3, 3], C=[5, 1, 3, 3, 3, 3])
        assert score(responses) == score(dict(reversed(list(responses.items()))))

    def test_missing_dimension_raises(self):
        scores = {d: 18 for d in Dimension if d != Dimension.CONVENTIONAL}
        with pytest.raises(ValueError):
            rank_dimensions(scores, {}, {})

    def test_tied_groups(self, make_responses):
        result = score(make_responses(I=5))
        assert tied_groups(result.ranking) == [[
            Dimension.ARTISTIC,
            Dimension.CONVENTIONAL,
            Dimension.ENTERPRISING,
            Dimension.REALISTIC,
            Dimension.SOCIAL,
        ]]

    def test_no_tied_groups_for_distinct_scores(self):
        assert tied_groups(_ranking(30, 25, 20, 15, 10, 6)) == []


class TestCertaintyClassifier:
    """Average-gap certainty labels."""

    def test_high(self):
        assert classify_certainty(_ranking(30, 26, 22, 18, 10, 6)) == CertaintyLevel.HIGH

    def test_medium_at_lower_boundary(self):
        ranking = _ranking(20, 18, 16, 14, 10, 6)
        assert average_top_gap(ranking) == 2
        assert classify_certainty(ranking) == CertaintyLevel.MEDIUM

    def test_exploratory(self):
        assert classify_certainty(_ranking(20, 19, 18, 17, 16, 15)) == CertaintyLevel.EXPLORATORY

    def test_only_top_four_ranks_matter(self):
        assert classify_certainty(_ranking(30, 26, 22, 18, 18, 18)) == CertaintyLevel.HIGH

    def test_short_ranking_is_exploratory(self):
        ranking = _ranking(30, 20, 10)
        assert average_top_gap(ranking) is None
        assert classify_certainty(ranking) == CertaintyLevel.EXPLORATORY

    def test_custom_thresholds(self):
        thresholds = CertaintyThresholdsConfig(high_average_gap=10, medium_average_gap=5)
        assert classify_certainty(_ranking(30, 26, 22, 18, 10, 6), thresholds) == CertaintyLevel.EXPLORATORY

    def test_messages_exist_for_every_level(self):
        for level in CertaintyLevel:
            assert certainty_message(level)


class TestProfileAssembly:
    """End-to-end profile results."""

    def test_clear_profile(self, make_responses):
        result = score(make_responses(I=5, S=4, A=3, R=1, E=1, C=1))

        assert result.holland_code == "ISA"
        assert result.certainty == CertaintyLevel.HIGH
        assert result.statistics.dominant_dimension == Dimension.INVESTIGATIVE
        assert result.statistics.max_score == 30
        assert result.statistics.min_score == 6
        assert result.statistics.score_range == 24

    def test_medium_profile(self, make_responses):
        responses = make_responses(
            I=5,
            S=[5, 5, 5, 4, 4, 4],
            A=4,
            R=[4, 4, 4, 3, 3, 3],
        )
        result = score(responses)

        assert result.holland_code == "ISA"
        assert result.certainty == CertaintyLevel.MEDIUM

    def test_all_neutral_is_exploratory(self, make_responses):
        assert score(make_responses()).certainty == CertaintyLevel.EXPLORATORY

    def test_scores_within_bounds(self, make_responses):
        for answer in range(1, 6):
            result = score(make_responses(default=answer))
            assert all(6 <= s <= 30 for s in result.scores.values())

    def test_code_matches_top_of_ranking(self, make_responses):
        result = score(make_responses(E=[5, 5, 4, 4, 3, 3], C=4))
        assert result.holland_code == "".join(e.dimension.value for e in result.ranking[:3])

    def test_incomplete_set_raises(self, make_responses):
        responses = make_responses()
        del responses[36]
        with pytest.raises(IncompleteResponsesError, match="1 question left to answer"):
            score(responses)


class TestProfileInterpretation:
    """Readable summary of a profile."""

    def test_interpretation(self, make_responses):
        result = score(make_responses(I=5, S=4, A=3, R=1, E=1, C=1))
        interpretation = interpret_profile(result)

        assert interpretation.profile_label == "Investigative-Social-Artistic"
        assert [m.percentage for m in interpretation.main_dimensions] == [100, 80, 60]
        assert interpretation.strengths == ["Investigative", "Social"]
        assert interpretation.secondary_dimensions == ["Conventional", "Enterprising", "Realistic"]
        assert interpretation.certainty_message == certainty_message(CertaintyLevel.HIGH)


class TestScoringEngine:
    """ScoringEngine convenience wrappers."""

    def test_score_from_file(self, responses_path):
        result = ScoringEngine().score(responses_path)

        assert result.holland_code == "ISA"
        assert result.certainty == CertaintyLevel.HIGH

    def test_validate(self, make_responses):
        engine = ScoringEngine()
        assert engine.validate(make_responses()).valid
        assert not engine.validate({1: 3}).valid
