"""Shared fixtures for the RIASEC scorer tests."""

from pathlib import Path

import pytest

from riasec_scorer.config import reset_config
from riasec_scorer.schema import Dimension

DATA_DIR = Path(__file__).parent.parent / "data"


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the built-in configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_responses():
    """Build a complete response set from per-dimension answers.

    Each keyword is a dimension letter mapped to either a single answer
    used for all six items or a list of six answers. Dimensions not given
    default to all 3s.

        make_responses(I=5, S=[4, 4, 4, 2, 2, 2])
    """
    def _make(default: int = 3, **answers) -> dict[int, int]:
        responses = {}
        for offset, dimension in enumerate(Dimension):
            value = answers.get(dimension.value, default)
            values = value if isinstance(value, list) else [value] * 6
            assert len(values) == 6
            for i, answer in enumerate(values):
                responses[offset * 6 + i + 1] = answer
        return responses

    return _make


@pytest.fixture
def catalog_path() -> Path:
    return DATA_DIR / "career-catalog.json"


@pytest.fixture
def responses_path() -> Path:
    return DATA_DIR / "sample-responses.json"
