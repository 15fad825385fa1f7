"""Recommendation Engine.

Matches a user's Holland code against a career catalog:

1. Skip malformed catalog entries (logged, never fatal)
2. Filter by the request constraints
3. Score each remaining career and attach a rationale
4. Drop careers below the minimum score
5. Sort by score, highest first; equal scores keep catalog order
6. Keep the top N
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional, Union

from pydantic import ValidationError

from career_catalog.schema import CareerCatalog

from .compatibility import compatibility_score, normalize_code
from .eligibility_filter import EligibilityFilter
from .explainer import RecommendationExplainer
from .schema import (
    CareerEntry,
    CareerRecommendation,
    RecommendationConstraints,
    RecommendationResult,
)

logger = logging.getLogger(__name__)

CatalogInput = Union[CareerCatalog, Iterable[Union[CareerEntry, dict[str, Any]]]]


class CareerRecommender:
    """Scores and ranks catalog careers against a user profile code."""

    def __init__(self, constraints: Optional[RecommendationConstraints] = None):
        self.constraints = constraints or RecommendationConstraints()
        self.eligibility_filter = EligibilityFilter(self.constraints)
        self.explainer = RecommendationExplainer()

    def run(self, profile_code: str, catalog: CatalogInput) -> RecommendationResult:
        """Produce recommendations together with exclusions and statistics.

        Raises:
            InvalidProfileCodeError: if profile_code is not a valid Holland code.
        """
        user_code = normalize_code(profile_code)

        careers, warnings = self._usable_entries(catalog)
        eligible, excluded = self.eligibility_filter.filter(careers)

        recommendations = self.score(user_code, eligible)

        return RecommendationResult(
            profile_code=user_code,
            catalog_count=len(careers) + len(warnings),
            recommendations=recommendations,
            excluded=excluded,
            statistics=self.explainer.generate_statistics(recommendations),
            eligible_count=len(eligible),
            excluded_count=len(excluded),
            processing_warnings=warnings,
        )

    def score(self, user_code: str, careers: list[CareerEntry]) -> list[CareerRecommendation]:
        """Score eligible careers and return the sorted, truncated list.

        Args:
            user_code: Validated user Holland code
            careers: Careers that passed the eligibility filter

        Returns:
            At most top_n recommendations, highest score first
        """
        recommendations = []

        for career in careers:
            score = compatibility_score(user_code, career.holland_code)
            if score < self.constraints.min_score:
                continue

            rationale, matches = self.explainer.explain(user_code, career.holland_code)
            recommendations.append(CareerRecommendation(
                career=career,
                compatibility_score=score,
                rationale=rationale,
                matches=matches,
            ))

        # sort() is stable, so ties keep catalog order
        recommendations.sort(key=lambda r: r.compatibility_score, reverse=True)

        return recommendations[:self.constraints.top_n]

    def _usable_entries(self, catalog: CatalogInput) -> tuple[list[CareerEntry], list[str]]:
        """Validate catalog entries, skipping the ones that cannot be scored."""
        items = catalog.careers if isinstance(catalog, CareerCatalog) else list(catalog)

        careers = []
        warnings = []
        for index, item in enumerate(items):
            if isinstance(item, CareerEntry):
                entry = item
            else:
                try:
                    entry = CareerEntry.model_validate(item)
                except ValidationError as e:
                    message = f"Skipped catalog entry #{index}: invalid career record"
                    logger.warning("%s: %s", message, e)
                    warnings.append(message)
                    continue

            if not entry.has_valid_code():
                message = (
                    f"Skipped career {entry.id} ({entry.name}): "
                    f"invalid Holland code '{entry.holland_code}'"
                )
                logger.warning(message)
                warnings.append(message)
                continue

            careers.append(entry)

        return careers, warnings


def recommend(
    profile_code: str,
    catalog: CatalogInput,
    constraints: Optional[RecommendationConstraints] = None,
) -> list[CareerRecommendation]:
    """Return the ranked recommendation list for a profile code."""
    return CareerRecommender(constraints).run(profile_code, catalog).recommendations
