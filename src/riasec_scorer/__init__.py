"""Holland RIASEC questionnaire scoring and career recommendation engine."""

from .engine import ScoringEngine, compatibility, recommend, score
from .questionnaire import validate_responses

__all__ = [
    "ScoringEngine",
    "compatibility",
    "recommend",
    "score",
    "validate_responses",
]
