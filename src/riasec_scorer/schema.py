"""Pydantic models for the RIASEC scoring engine.

Input schemas for questionnaire responses and constraints, output schemas
for profiles, compatibility reports and recommendations.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Re-export catalog types for convenience
from career_catalog.schema import (
    DIMENSION_NAMES,
    CareerEntry,
    Dimension,
    EmployabilityTier,
)

from .config import get_config


# =============================================================================
# Questionnaire
# =============================================================================


class QuestionnaireItem(BaseModel):
    """A single statement of the 36-item inventory."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, le=36)
    dimension: Dimension
    text: str
    category: str


class ValidationResult(BaseModel):
    """Outcome of checking a response set for completeness."""
    valid: bool
    error: Optional[str] = None
    progress: Optional[int] = Field(None, ge=0, le=100, description="Percent of items answered")
    missing_items: list[int] = Field(default_factory=list)
    unknown_items: list[str] = Field(default_factory=list)


# =============================================================================
# Profile
# =============================================================================


class CertaintyLevel(str, Enum):
    """How sharply the top dimensions stand out from the rest."""
    HIGH = "High"
    MEDIUM = "Medium"
    EXPLORATORY = "Exploratory"


class RankingEntry(BaseModel):
    """One dimension's position in the final ranking."""
    dimension: Dimension
    score: int = Field(..., ge=6, le=30)
    intensity: int = Field(0, ge=0, le=6, description="Answers rated 4 or 5")
    rejection: int = Field(0, ge=0, le=6, description="Answers rated 1 or 2")


class ProfileStatistics(BaseModel):
    """Summary statistics of a scored profile."""
    intensity: dict[Dimension, int]
    rejection: dict[Dimension, int]
    dominant_dimension: Dimension
    max_score: int
    min_score: int
    score_range: int


class ProfileResult(BaseModel):
    """Complete result of scoring a response set."""
    holland_code: str = Field(..., min_length=3, max_length=3)
    certainty: CertaintyLevel
    scores: dict[Dimension, int]
    ranking: list[RankingEntry]
    statistics: ProfileStatistics


class DimensionSummary(BaseModel):
    """A top dimension as shown in a profile interpretation."""
    dimension: Dimension
    name: str
    score: int
    percentage: int = Field(..., ge=0, le=100)


class ProfileInterpretation(BaseModel):
    """Human-readable reading of a ProfileResult."""
    holland_code: str
    certainty: CertaintyLevel
    profile_label: str
    main_dimensions: list[DimensionSummary]
    certainty_message: str
    strengths: list[str]
    secondary_dimensions: list[str]


# =============================================================================
# Compatibility
# =============================================================================


class MatchType(str, Enum):
    """How a user letter relates to a career code."""
    EXACT = "exact"  # Same letter at the same position
    SHARED = "shared"  # Letter present at a different position


class DimensionMatch(BaseModel):
    """A letter the user code shares with a career code."""
    dimension: Dimension
    name: str
    match_type: MatchType
    user_position: int = Field(..., ge=1, le=3)
    career_position: int = Field(..., ge=1, le=3)


class CodeDifferences(BaseModel):
    """Letters that appear in only one of the two codes."""
    user_only: list[Dimension] = Field(default_factory=list)
    career_only: list[Dimension] = Field(default_factory=list)


class CompatibilityReport(BaseModel):
    """Detailed comparison between a user profile and one career."""
    career: CareerEntry
    user_code: str
    career_code: str
    score: int = Field(..., ge=0, le=100)
    level: str
    rationale: str
    matches: list[DimensionMatch] = Field(default_factory=list)
    differences: CodeDifferences = Field(default_factory=CodeDifferences)


# =============================================================================
# Recommendations
# =============================================================================


def _default_top_n() -> int:
    return get_config().recommendation_defaults.top_n


def _default_min_score() -> int:
    return get_config().recommendation_defaults.min_score


class RecommendationConstraints(BaseModel):
    """Optional filters for a recommendation request.

    Unset bounds are unbounded. An empty ``areas`` set behaves like no
    area filter.
    """
    top_n: int = Field(default_factory=_default_top_n, ge=0)
    min_score: int = Field(default_factory=_default_min_score, ge=0, le=100)
    areas: Optional[set[str]] = Field(None, description="Allowed area labels")
    max_duration: Optional[float] = Field(None, ge=0, description="Maximum program duration in years")
    min_employability: Optional[EmployabilityTier] = None
    min_salary: Optional[float] = Field(None, ge=0)

    @field_validator("min_employability", mode="before")
    @classmethod
    def parse_employability(cls, value: Any) -> Any:
        if value is None or isinstance(value, EmployabilityTier):
            return value
        tier = EmployabilityTier.from_string(str(value))
        if tier is None:
            raise ValueError(f"Unknown employability tier: {value}")
        return tier


class CareerRecommendation(BaseModel):
    """A career scored against a user profile."""
    career: CareerEntry
    compatibility_score: int = Field(..., ge=0, le=100)
    rationale: str
    matches: list[DimensionMatch] = Field(default_factory=list)


class ExcludedCareer(BaseModel):
    """A career removed by a recommendation constraint."""
    career_id: int
    name: str
    reason_type: str
    description: str


class RecommendationStatistics(BaseModel):
    """Aggregate view of a recommendation list."""
    total_careers: int
    areas_represented: list[str]
    average_score: int
    best_match_name: str
    best_match_score: int
    average_employability: Optional[EmployabilityTier] = None
    average_salary: Optional[int] = None


class RecommendationResult(BaseModel):
    """Complete output of a recommendation pass."""
    profile_code: str
    catalog_count: int
    recommendations: list[CareerRecommendation] = Field(default_factory=list)
    excluded: list[ExcludedCareer] = Field(default_factory=list)
    statistics: Optional[RecommendationStatistics] = None
    eligible_count: int = 0
    excluded_count: int = 0
    processing_warnings: list[str] = Field(default_factory=list)


__all__ = [
    "DIMENSION_NAMES",
    "CareerEntry",
    "CareerRecommendation",
    "CertaintyLevel",
    "CodeDifferences",
    "CompatibilityReport",
    "Dimension",
    "DimensionMatch",
    "DimensionSummary",
    "EmployabilityTier",
    "ExcludedCareer",
    "MatchType",
    "ProfileInterpretation",
    "ProfileResult",
    "ProfileStatistics",
    "QuestionnaireItem",
    "RankingEntry",
    "RecommendationConstraints",
    "RecommendationResult",
    "RecommendationStatistics",
    "ValidationResult",
]
