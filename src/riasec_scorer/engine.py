"""Scoring Engine - public entry points.

Ties the pipeline together:

    responses -> dimension scores -> ranking -> certainty + profile
    profile code + catalog -> filter -> compatibility -> ranked recommendations

The module-level functions are pure and work on in-memory data. The
ScoringEngine class adds catalog and response-file loading for the CLI.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from career_catalog.catalog import CatalogLoadError, get_career, load_catalog
from career_catalog.schema import CareerCatalog

from .compatibility import compatibility_score
from .explainer import RecommendationExplainer
from .profile import interpret_profile, score_responses
from .questionnaire import validate_responses
from .recommender import CareerRecommender, recommend  # noqa: F401 (public re-export)
from .schema import (
    CompatibilityReport,
    ProfileInterpretation,
    ProfileResult,
    RecommendationConstraints,
    RecommendationResult,
    ValidationResult,
)


class ResponsesLoadError(Exception):
    """Raised when a responses file cannot be read."""


def score(responses: Mapping) -> ProfileResult:
    """Score a complete response set.

    Raises:
        IncompleteResponsesError: if validate_responses would fail.
    """
    return score_responses(responses)


def compatibility(code_a: str, code_b: str) -> int:
    """Compatibility (0-100) of a user code with a career code."""
    return compatibility_score(code_a, code_b)


def load_responses(path: Union[str, Path]) -> dict[str, Any]:
    """Read a responses JSON file.

    Accepts either ``{"1": 4, "2": 5, ...}`` or ``{"responses": {...}}``.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ResponsesLoadError(f"Responses file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ResponsesLoadError(f"Responses file is not valid JSON: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("responses"), dict):
        data = data["responses"]
    if not isinstance(data, dict):
        raise ResponsesLoadError("Responses must be a JSON object of item id -> answer")
    return data


def validate_responses_file(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a responses file.

    Returns:
        Tuple of (is_valid, issues)
    """
    try:
        responses = load_responses(path)
    except ResponsesLoadError as e:
        return False, [str(e)]

    result = validate_responses(responses)
    if result.valid:
        return True, []

    issues = [f"{result.error} ({result.progress}% complete)"]
    if result.missing_items:
        issues.append("Missing items: " + ", ".join(str(i) for i in result.missing_items))
    return False, issues


class ScoringEngine:
    """Main entry point for scoring questionnaires and recommending careers."""

    def __init__(self):
        self.catalog: Optional[CareerCatalog] = None
        self.explainer = RecommendationExplainer()

    def load_catalog(self, path: Union[str, Path]) -> CareerCatalog:
        self.catalog = load_catalog(path)
        return self.catalog

    def _require_catalog(self) -> CareerCatalog:
        if self.catalog is None:
            raise CatalogLoadError("No catalog loaded; call load_catalog() first")
        return self.catalog

    def validate(self, responses: Any) -> ValidationResult:
        return validate_responses(responses)

    def score(self, responses: Union[Mapping, str, Path]) -> ProfileResult:
        """Score a response mapping or a path to a responses JSON file."""
        if isinstance(responses, (str, Path)):
            responses = load_responses(responses)
        return score_responses(responses)

    def interpret(self, result: ProfileResult) -> ProfileInterpretation:
        return interpret_profile(result)

    def compatibility(self, code_a: str, code_b: str) -> int:
        return compatibility_score(code_a, code_b)

    def recommend(
        self,
        profile_code: str,
        constraints: Optional[RecommendationConstraints] = None,
    ) -> RecommendationResult:
        """Recommend careers from the loaded catalog."""
        catalog = self._require_catalog()
        return CareerRecommender(constraints).run(profile_code, catalog)

    def report(self, profile_code: str, career_id: int) -> Optional[CompatibilityReport]:
        """Detailed compatibility report for one career, or None if it is not in the catalog."""
        career = get_career(self._require_catalog(), career_id)
        if career is None:
            return None
        return self.explainer.build_report(profile_code, career)
