"""Exceptions raised for input-contract violations."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .schema import ValidationResult


class RiasecScorerError(ValueError):
    """Base exception for the scoring engine."""
    pass


class IncompleteResponsesError(RiasecScorerError):
    """Raised when a response set is missing answers or has out-of-range values."""

    def __init__(self, validation: "ValidationResult"):
        self.validation = validation
        self.message = validation.error or "Invalid response set"
        super().__init__(self.message)


class InvalidProfileCodeError(RiasecScorerError):
    """Raised when a Holland code is not three letters from RIASEC."""

    def __init__(self, code: Any):
        self.code = code
        self.message = (
            f"Invalid Holland code {code!r}: expected 3 letters from R, I, A, S, E, C"
        )
        super().__init__(self.message)
