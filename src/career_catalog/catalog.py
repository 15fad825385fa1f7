"""Career catalog loading, validation and lookup.

Catalogs are JSON documents in one of these shapes:

1. ``{"version": ..., "areas": [...], "careers": [...]}``
2. ``{"metadata": {"areas": [...]}, "carreras": [...]}`` (Spanish export format)
3. A bare list of career objects

Entries that fail validation are skipped with a warning rather than
failing the whole load, since the catalog is maintained outside this
project.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from .schema import CareerCatalog, CareerEntry, is_valid_holland_code

logger = logging.getLogger(__name__)

MAX_SEARCH_RESULTS = 10


class CatalogLoadError(Exception):
    """Raised when a catalog file cannot be read or has the wrong shape."""


def load_catalog(path: Union[str, Path]) -> CareerCatalog:
    """Load a career catalog from a JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Catalog is not valid JSON: {e}") from e

    catalog = load_catalog_data(data)
    if catalog.source is None:
        catalog.source = str(path)
    logger.info("Loaded %d careers from %s", catalog.total_careers, path)
    return catalog


def load_catalog_data(data: Any) -> CareerCatalog:
    """Build a catalog from already-parsed JSON data."""
    if isinstance(data, list):
        raw_entries = data
        header: dict[str, Any] = {}
    elif isinstance(data, dict):
        raw_entries = data.get("careers", data.get("carreras"))
        if raw_entries is None:
            raise CatalogLoadError("Catalog must contain a 'careers' list")
        header = data
    else:
        raise CatalogLoadError(
            f"Catalog must be a JSON object or array, got {type(data).__name__}"
        )

    if not isinstance(raw_entries, list):
        raise CatalogLoadError("Catalog 'careers' must be a list")

    careers: list[CareerEntry] = []
    warnings: list[str] = []
    for index, raw in enumerate(raw_entries):
        try:
            careers.append(CareerEntry.model_validate(raw))
        except ValidationError as e:
            message = f"Skipped catalog entry #{index}: {e.error_count()} validation error(s)"
            logger.warning("%s\n%s", message, e)
            warnings.append(message)

    metadata = header.get("metadata") or {}
    areas = header.get("areas") or metadata.get("areas") or []

    catalog_fields: dict[str, Any] = {
        "areas": list(areas),
        "careers": careers,
        "load_warnings": warnings,
    }
    for key in ("version", "generated_at", "source"):
        if header.get(key) is not None:
            catalog_fields[key] = header[key]

    try:
        return CareerCatalog(**catalog_fields)
    except ValidationError as e:
        raise CatalogLoadError(f"Invalid catalog header: {e}") from e


def save_catalog(catalog: CareerCatalog, output_path: Union[str, Path]) -> None:
    """Save the catalog to a JSON file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    catalog_dict = catalog.model_dump(mode="json", exclude={"load_warnings"})
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(catalog_dict, f, indent=2, ensure_ascii=False, default=str)


def validate_catalog(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a catalog file.

    Returns:
        Tuple of (is_valid, issues)
    """
    try:
        catalog = load_catalog(path)
    except CatalogLoadError as e:
        return False, [str(e)]

    issues = list(catalog.load_warnings)

    seen_ids: set[int] = set()
    for career in catalog.careers:
        if career.id in seen_ids:
            issues.append(f"Duplicate career id: {career.id}")
        seen_ids.add(career.id)

        if not is_valid_holland_code(career.holland_code):
            issues.append(
                f"Career {career.id} ({career.name}) has invalid Holland code "
                f"'{career.holland_code}'"
            )

    if not catalog.careers:
        issues.append("Catalog contains no careers")

    return len(issues) == 0, issues


def catalog_areas(catalog: CareerCatalog) -> list[str]:
    """Return the catalog's areas, declared first, then any only seen on careers."""
    areas = list(catalog.areas)
    for career in catalog.careers:
        if career.area and career.area not in areas:
            areas.append(career.area)
    return areas


def careers_by_area(catalog: CareerCatalog, area: str) -> list[CareerEntry]:
    return [c for c in catalog.careers if c.area == area]


def search_careers(catalog: CareerCatalog, query: str) -> list[CareerEntry]:
    """Case-insensitive name search, limited to the first few hits."""
    query_lower = query.lower()
    matches = [c for c in catalog.careers if query_lower in c.name.lower()]
    return matches[:MAX_SEARCH_RESULTS]


def get_career(catalog: CareerCatalog, career_id: int) -> Optional[CareerEntry]:
    return next((c for c in catalog.careers if c.id == career_id), None)
