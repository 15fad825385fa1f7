"""Tests for career catalog loading, validation and lookup."""

import json
import logging

import pytest

from career_catalog.catalog import (
    MAX_SEARCH_RESULTS,
    CatalogLoadError,
    catalog_areas,
    careers_by_area,
    get_career,
    load_catalog,
    load_catalog_data,
    save_catalog,
    search_careers,
    validate_catalog,
)
from career_catalog.schema import (
    CareerEntry,
    EmployabilityTier,
    is_valid_holland_code,
)


def _make_catalog(career_count: int = 3, **overrides) -> dict:
    """Build a minimal catalog dict in the export format."""
    base = {
        "metadata": {"areas": ["Tecnología", "Salud"]},
        "carreras": [
            {
                "id": i,
                "nombre": f"Carrera {i}",
                "codigo_holland": "ISA",
                "area": "Tecnología" if i % 2 else "Salud",
                "duracion_anos": 5,
                "salario_promedio_chile_clp": 1000000 + i,
                "empleabilidad": "Alta",
            }
            for i in range(1, career_count + 1)
        ],
    }
    base.update(overrides)
    return base


def _write(tmp_path, data, name="catalog.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


class TestCareerEntry:
    """Field aliases and normalization."""

    def test_spanish_keys(self):
        career = CareerEntry.model_validate({
            "id": 1,
            "nombre": "Medicina",
            "codigo_holland": "isr",
            "area": "Salud",
            "duracion_anos": 7,
            "salario_promedio_chile_clp": 3200000,
            "empleabilidad": "Muy Alta",
        })

        assert career.name == "Medicina"
        assert career.holland_code == "ISR"
        assert career.duration_years == 7
        assert career.average_salary == 3200000
        assert career.employability == EmployabilityTier.VERY_HIGH

    def test_english_keys(self):
        career = CareerEntry(id=2, name="Nursing", holland_code="SIR", employability="High")
        assert career.employability == EmployabilityTier.HIGH
        assert career.area == ""

    def test_unknown_employability_is_none(self):
        career = CareerEntry(id=3, name="X", holland_code="RIA", employability="stellar")
        assert career.employability is None

    def test_unknown_employability_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="career_catalog.schema"):
            CareerEntry(id=3, name="X", holland_code="RIA", employability="stellar")

        assert "stellar" in caplog.text

    def test_blank_employability_not_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="career_catalog.schema"):
            career = CareerEntry(id=3, name="X", holland_code="RIA", employability="  ")

        assert career.employability is None
        assert caplog.records == []

    def test_fractional_salary_kept(self):
        catalog = load_catalog_data({"careers": [
            {"id": 1, "name": "A", "holland_code": "RIA", "salario_promedio_chile_clp": 1234.5},
        ]})

        assert catalog.load_warnings == []
        assert catalog.careers[0].average_salary == 1234.5

    def test_has_valid_code(self):
        assert CareerEntry(id=1, name="A", holland_code="ria").has_valid_code()
        assert not CareerEntry(id=1, name="A", holland_code="RIAS").has_valid_code()


class TestEmployabilityTier:
    """Tier parsing and ordering."""

    @pytest.mark.parametrize("label,tier", [
        ("Baja", EmployabilityTier.LOW),
        ("media", EmployabilityTier.MEDIUM),
        ("ALTA", EmployabilityTier.HIGH),
        ("Muy Alta", EmployabilityTier.VERY_HIGH),
        ("very_high", EmployabilityTier.VERY_HIGH),
        ("Very High", EmployabilityTier.VERY_HIGH),
    ])
    def test_from_string(self, label, tier):
        assert EmployabilityTier.from_string(label) == tier

    def test_from_string_unknown(self):
        assert EmployabilityTier.from_string("") is None
        assert EmployabilityTier.from_string("great") is None

    def test_rank_order(self):
        assert EmployabilityTier.LOW.rank < EmployabilityTier.MEDIUM.rank
        assert EmployabilityTier.HIGH.rank < EmployabilityTier.VERY_HIGH.rank


class TestHollandCodeValidation:
    """Three letters from the RIASEC alphabet."""

    @pytest.mark.parametrize("code", ["RIA", "sec", " ISA ", "AAA"])
    def test_valid(self, code):
        assert is_valid_holland_code(code)

    @pytest.mark.parametrize("code", ["", "RI", "RIAS", "XYZ", "R1A", None, 7])
    def test_invalid(self, code):
        assert not is_valid_holland_code(code)


class TestLoadCatalog:
    """Reading catalogs from disk and from parsed JSON."""

    def test_export_format(self):
        catalog = load_catalog_data(_make_catalog())

        assert catalog.total_careers == 3
        assert catalog.areas == ["Tecnología", "Salud"]
        assert catalog.load_warnings == []

    def test_careers_key(self):
        catalog = load_catalog_data({
            "version": "2.0.0",
            "areas": ["Salud"],
            "careers": [{"id": 1, "name": "Medicina", "holland_code": "ISR"}],
        })
        assert catalog.version == "2.0.0"
        assert catalog.careers[0].name == "Medicina"

    def test_bare_list(self):
        catalog = load_catalog_data(_make_catalog()["carreras"])
        assert catalog.total_careers == 3
        assert catalog.areas == []

    def test_invalid_entries_skipped_with_warning(self, caplog):
        data = _make_catalog()
        data["carreras"].append({"id": "not-a-number", "nombre": "Bad"})

        with caplog.at_level(logging.WARNING, logger="career_catalog.catalog"):
            catalog = load_catalog_data(data)

        assert catalog.total_careers == 3
        assert len(catalog.load_warnings) == 1
        assert "#3" in catalog.load_warnings[0]
        assert "Skipped catalog entry" in caplog.text

    def test_missing_career_list(self):
        with pytest.raises(CatalogLoadError, match="careers"):
            load_catalog_data({"metadata": {}})

    def test_career_list_wrong_type(self):
        with pytest.raises(CatalogLoadError):
            load_catalog_data({"careers": {"id": 1}})

    def test_wrong_top_level_type(self):
        with pytest.raises(CatalogLoadError):
            load_catalog_data("careers")

    def test_file_not_found(self, tmp_path):
        with pytest.raises(CatalogLoadError, match="not found"):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogLoadError, match="not valid JSON"):
            load_catalog(path)

    def test_source_defaults_to_path(self, tmp_path):
        path = _write(tmp_path, _make_catalog())
        assert load_catalog(path).source == str(path)

    def test_save_and_reload(self, tmp_path):
        catalog = load_catalog_data(_make_catalog())
        out = tmp_path / "nested" / "saved.json"

        save_catalog(catalog, out)
        reloaded = load_catalog(out)

        assert [c.name for c in reloaded.careers] == [c.name for c in catalog.careers]
        assert reloaded.careers[0].employability == EmployabilityTier.HIGH
        assert reloaded.areas == catalog.areas


class TestValidateCatalog:
    """validate_catalog issue reporting."""

    def test_valid(self, tmp_path):
        is_valid, issues = validate_catalog(_write(tmp_path, _make_catalog()))
        assert is_valid
        assert issues == []

    def test_shipped_catalog_is_valid(self, catalog_path):
        is_valid, issues = validate_catalog(catalog_path)
        assert is_valid, issues

    def test_duplicate_ids(self, tmp_path):
        data = _make_catalog()
        data["carreras"][1]["id"] = 1

        is_valid, issues = validate_catalog(_write(tmp_path, data))

        assert not is_valid
        assert "Duplicate career id: 1" in issues

    def test_invalid_code(self, tmp_path):
        data = _make_catalog()
        data["carreras"][0]["codigo_holland"] = "XYZ"

        is_valid, issues = validate_catalog(_write(tmp_path, data))

        assert not is_valid
        assert any("XYZ" in issue for issue in issues)

    def test_empty_catalog(self, tmp_path):
        is_valid, issues = validate_catalog(_write(tmp_path, {"careers": []}))
        assert not is_valid
        assert "Catalog contains no careers" in issues

    def test_unreadable_file(self, tmp_path):
        is_valid, issues = validate_catalog(tmp_path / "missing.json")
        assert not is_valid
        assert len(issues) == 1


class TestCatalogLookup:
    """Search, lookup by id and area helpers."""

    def test_search_case_insensitive(self):
        catalog = load_catalog_data(_make_catalog())
        assert [c.id for c in search_careers(catalog, "carrera 2")] == [2]

    def test_search_limited(self):
        catalog = load_catalog_data(_make_catalog(career_count=15))
        assert len(search_careers(catalog, "carrera")) == MAX_SEARCH_RESULTS

    def test_search_no_match(self):
        catalog = load_catalog_data(_make_catalog())
        assert search_careers(catalog, "astronaut") == []

    def test_get_career(self):
        catalog = load_catalog_data(_make_catalog())
        assert get_career(catalog, 3).name == "Carrera 3"
        assert get_career(catalog, 42) is None

    def test_areas_include_undeclared(self):
        data = _make_catalog()
        data["carreras"][0]["area"] = "Arte"
        catalog = load_catalog_data(data)
        assert catalog_areas(catalog) == ["Tecnología", "Salud", "Arte"]

    def test_careers_by_area(self):
        catalog = load_catalog_data(_make_catalog(career_count=4))
        assert [c.id for c in careers_by_area(catalog, "Salud")] == [2, 4]
