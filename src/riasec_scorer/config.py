"""Centralized configuration management for the RIASEC scorer."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class CertaintyThresholdsConfig(BaseModel):
    """Average score-gap thresholds for the certainty label.

    The gaps between ranks 1-2, 2-3 and 3-4 are averaged and compared
    against these values.
    """
    high_average_gap: float = Field(
        4.0,
        description="Minimum average gap for High certainty"
    )
    medium_average_gap: float = Field(
        2.0,
        description="Minimum average gap for Medium certainty"
    )


class CompatibilityWeightsConfig(BaseModel):
    """Points awarded when comparing two Holland codes.

    Identical codes score first + second + third position (80 by default)
    because no letter is shared at a different position.
    """
    first_position: int = Field(40, description="Points for matching first letters")
    second_position: int = Field(25, description="Points for matching second letters")
    third_position: int = Field(15, description="Points for matching third letters")
    shared_letter: int = Field(
        10,
        description="Points per user letter present in the career code at a different position"
    )
    max_score: int = Field(100, description="Upper clamp for the total")


class CompatibilityLevelsConfig(BaseModel):
    """Score thresholds for the compatibility level label."""
    excellent: int = Field(75, description="Minimum score for 'Excellent'")
    very_good: int = Field(60, description="Minimum score for 'Very good'")
    good: int = Field(40, description="Minimum score for 'Good'")


class RecommendationDefaultsConfig(BaseModel):
    """Defaults applied when a request does not set them."""
    top_n: int = Field(6, ge=0, description="Number of recommendations to return")
    min_score: int = Field(0, ge=0, le=100, description="Minimum compatibility score")


class ScorerConfig(BaseModel):
    """Complete configuration for the RIASEC scorer."""
    certainty_thresholds: CertaintyThresholdsConfig = Field(default_factory=CertaintyThresholdsConfig)
    compatibility_weights: CompatibilityWeightsConfig = Field(default_factory=CompatibilityWeightsConfig)
    compatibility_levels: CompatibilityLevelsConfig = Field(default_factory=CompatibilityLevelsConfig)
    recommendation_defaults: RecommendationDefaultsConfig = Field(default_factory=RecommendationDefaultsConfig)


# Global config instance
_config: Optional[ScorerConfig] = None


def get_config() -> ScorerConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = ScorerConfig()
    return _config


def load_config(path: Path) -> ScorerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded ScorerConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = ScorerConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = ScorerConfig()


def find_config_file() -> Optional[Path]:
    """Find a scorer configuration file.

    Looks in (order of priority):
    1. RIASEC_SCORER_CONFIG environment variable
    2. ./scorer-config.yaml
    3. ./scorer-config.yml
    4. ~/.config/riasec-scorer/config.yaml
    """
    env_path = os.environ.get("RIASEC_SCORER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["scorer-config.yaml", "scorer-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "riasec-scorer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    config = ScorerConfig()
    data = config.model_dump()

    yaml_content = """# RIASEC Scorer Configuration
# ===========================
#
# This file configures certainty thresholds, the compatibility metric
# and recommendation defaults.
#
# Copy this file to one of these locations:
#   - ./scorer-config.yaml (current directory)
#   - ~/.config/riasec-scorer/config.yaml (user config)
#
# Or set the RIASEC_SCORER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
