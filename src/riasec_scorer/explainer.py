"""Explainer - final phase of the Recommendation Engine.

Turns letter-level match analysis into readable rationale, summarizes a
recommendation list, and builds detailed compatibility reports.
"""

from typing import Optional

from career_catalog.schema import EMPLOYABILITY_ORDER

from .compatibility import (
    analyze_differences,
    analyze_matches,
    compatibility_level,
    compatibility_score,
    normalize_code,
)
from .questionnaire import round_half_up
from .schema import (
    CareerEntry,
    CareerRecommendation,
    CompatibilityReport,
    DimensionMatch,
    EmployabilityTier,
    ExcludedCareer,
    MatchType,
    RecommendationStatistics,
)

POSITION_PHRASES = {
    1: "Both lead with {name}",
    2: "Same second place: {name}",
    3: "Same third place: {name}",
}

SHARED_PHRASE = "Shared interest in {name}"

NO_MATCH_RATIONALE = (
    "Complementary profiles that can offer a diverse vocational experience."
)


def build_rationale(matches: list[DimensionMatch]) -> str:
    """Describe positional matches first, then letters shared out of place."""
    exact = sorted(
        (m for m in matches if m.match_type == MatchType.EXACT),
        key=lambda m: m.user_position,
    )
    shared = [m for m in matches if m.match_type == MatchType.SHARED]

    phrases = [POSITION_PHRASES[m.user_position].format(name=m.name) for m in exact]
    phrases.extend(SHARED_PHRASE.format(name=m.name) for m in shared)

    if not phrases:
        return NO_MATCH_RATIONALE
    return ". ".join(phrases)


def build_compatibility_report(user_code: str, career: CareerEntry) -> CompatibilityReport:
    """Detailed comparison of a user code against one career.

    Raises:
        InvalidProfileCodeError: if either code is not a valid Holland code.
    """
    score = compatibility_score(user_code, career.holland_code)
    matches = analyze_matches(user_code, career.holland_code)

    return CompatibilityReport(
        career=career,
        user_code=normalize_code(user_code),
        career_code=career.holland_code,
        score=score,
        level=compatibility_level(score),
        rationale=build_rationale(matches),
        matches=matches,
        differences=analyze_differences(user_code, career.holland_code),
    )


class RecommendationExplainer:
    """Generates explanations and summaries for recommendation results."""

    def explain(self, user_code: str, career_code: str) -> tuple[str, list[DimensionMatch]]:
        """Return (rationale, matches) for one user/career pair."""
        matches = analyze_matches(user_code, career_code)
        return build_rationale(matches), matches

    def generate_statistics(
        self,
        recommendations: list[CareerRecommendation],
    ) -> Optional[RecommendationStatistics]:
        """Summarize a recommendation list. Returns None for an empty list."""
        if not recommendations:
            return None

        best = recommendations[0]
        areas: list[str] = []
        for rec in recommendations:
            if rec.career.area and rec.career.area not in areas:
                areas.append(rec.career.area)

        scores = [r.compatibility_score for r in recommendations]
        salaries = [
            r.career.average_salary
            for r in recommendations
            if r.career.average_salary is not None
        ]

        return RecommendationStatistics(
            total_careers=len(recommendations),
            areas_represented=areas,
            average_score=round_half_up(sum(scores) / len(scores)),
            best_match_name=best.career.name,
            best_match_score=best.compatibility_score,
            average_employability=self._average_employability(recommendations),
            average_salary=round_half_up(sum(salaries) / len(salaries)) if salaries else None,
        )

    def _average_employability(
        self,
        recommendations: list[CareerRecommendation],
    ) -> Optional[EmployabilityTier]:
        """Mean tier on a 1-4 scale; careers without a tier count as 0."""
        tiers = [r.career.employability for r in recommendations]
        if all(t is None for t in tiers):
            return None

        total = sum((t.rank + 1) if t is not None else 0 for t in tiers)
        index = round_half_up(total / len(tiers)) - 1
        return EMPLOYABILITY_ORDER[max(0, min(len(EMPLOYABILITY_ORDER) - 1, index))]

    def build_report(self, user_code: str, career: CareerEntry) -> CompatibilityReport:
        return build_compatibility_report(user_code, career)

    def format_exclusion_summary(self, excluded: list[ExcludedCareer]) -> str:
        """Format a human-readable summary of exclusions."""
        if not excluded:
            return "No careers were excluded."

        lines = [f"Excluded {len(excluded)} careers:"]

        reason_counts: dict[str, int] = {}
        for ex in excluded:
            reason_counts[ex.reason_type] = reason_counts.get(ex.reason_type, 0) + 1

        for reason_type, count in sorted(reason_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  - {reason_type}: {count} careers")

        return "\n".join(lines)
