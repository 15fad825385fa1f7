"""Pydantic models for the career catalog schema."""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class Dimension(str, Enum):
    """Holland RIASEC personality-interest dimension."""
    REALISTIC = "R"
    INVESTIGATIVE = "I"
    ARTISTIC = "A"
    SOCIAL = "S"
    ENTERPRISING = "E"
    CONVENTIONAL = "C"

    @property
    def label(self) -> str:
        """Human-readable dimension name."""
        return DIMENSION_NAMES[self]


DIMENSION_NAMES = {
    Dimension.REALISTIC: "Realistic",
    Dimension.INVESTIGATIVE: "Investigative",
    Dimension.ARTISTIC: "Artistic",
    Dimension.SOCIAL: "Social",
    Dimension.ENTERPRISING: "Enterprising",
    Dimension.CONVENTIONAL: "Conventional",
}

VALID_SYMBOLS = frozenset(d.value for d in Dimension)

HOLLAND_CODE_LENGTH = 3


def is_valid_holland_code(code: Any) -> bool:
    """Check that a code is three letters drawn from the RIASEC alphabet."""
    if not isinstance(code, str):
        return False
    normalized = code.strip().upper()
    return len(normalized) == HOLLAND_CODE_LENGTH and all(
        ch in VALID_SYMBOLS for ch in normalized
    )


class EmployabilityTier(str, Enum):
    """Employability outlook for a career, ordered Low < Very High."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["EmployabilityTier"]:
        """Parse a tier label (English or Spanish). Unknown labels return None."""
        if not value:
            return None
        mapping = {
            "low": cls.LOW,
            "baja": cls.LOW,
            "medium": cls.MEDIUM,
            "media": cls.MEDIUM,
            "high": cls.HIGH,
            "alta": cls.HIGH,
            "veryhigh": cls.VERY_HIGH,
            "muyalta": cls.VERY_HIGH,
        }
        key = value.lower().replace("_", "").replace(" ", "").replace("-", "")
        return mapping.get(key)

    @property
    def rank(self) -> int:
        """Ordinal position on the four-level scale (0 = Low)."""
        return EMPLOYABILITY_ORDER.index(self)


EMPLOYABILITY_ORDER = [
    EmployabilityTier.LOW,
    EmployabilityTier.MEDIUM,
    EmployabilityTier.HIGH,
    EmployabilityTier.VERY_HIGH,
]


class CareerEntry(BaseModel):
    """A single career in the catalog.

    Field aliases accept the Spanish keys used by the catalog exports
    (``nombre``, ``codigo_holland``, ``duracion_anos``...).
    """
    model_config = ConfigDict(populate_by_name=True)

    # Identity
    id: int = Field(..., description="Unique career identifier")
    name: str = Field(
        ...,
        validation_alias=AliasChoices("name", "nombre"),
        description="Career name",
    )
    holland_code: str = Field(
        ...,
        validation_alias=AliasChoices("holland_code", "codigo_holland"),
        description="Three-letter RIASEC code of the career",
    )
    area: str = Field(
        default="",
        validation_alias=AliasChoices("area", "area_conocimiento"),
        description="Knowledge area label (e.g. Tecnología, Salud)",
    )
    description: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("description", "descripcion"),
    )

    # Numeric attributes used by recommendation filters
    duration_years: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("duration_years", "duracion_anos"),
        description="Program duration in years",
    )
    average_salary: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("average_salary", "salario_promedio_chile_clp"),
        description="Average monthly salary (CLP)",
    )
    employability: Optional[EmployabilityTier] = Field(
        None,
        validation_alias=AliasChoices("employability", "empleabilidad"),
        description="Employability tier",
    )

    @field_validator("holland_code", mode="before")
    @classmethod
    def normalize_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("employability", mode="before")
    @classmethod
    def parse_employability(cls, value: Any) -> Any:
        if isinstance(value, EmployabilityTier) or value is None:
            return value
        tier = EmployabilityTier.from_string(str(value))
        if tier is None and str(value).strip():
            logger.warning("Unknown employability label %r, treating as unknown", value)
        return tier

    def has_valid_code(self) -> bool:
        return is_valid_holland_code(self.holland_code)


class CareerCatalog(BaseModel):
    """Complete career catalog."""
    version: str = Field(default="1.0.0", description="Catalog schema version")
    generated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Generation timestamp"
    )
    source: Optional[str] = Field(None, description="Where the catalog data came from")
    areas: list[str] = Field(
        default_factory=list,
        description="Declared knowledge areas"
    )
    total_careers: int = Field(default=0, description="Total number of careers")
    careers: list[CareerEntry] = Field(
        default_factory=list,
        description="Career entries"
    )
    load_warnings: list[str] = Field(
        default_factory=list,
        description="Entries skipped while loading"
    )

    def model_post_init(self, __context) -> None:
        """Update total count after initialization."""
        self.total_careers = len(self.careers)
