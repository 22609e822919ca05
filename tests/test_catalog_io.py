from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.catalog.samples import sample_scholarships
from src.io.catalog import load_catalog_records, load_profile, write_catalog_parquet, write_json_atomic
from src.normalize.schema import Constrained, Scholarship


def test_load_catalog_records_accepts_list_and_wrapped_json(tmp_path: Path) -> None:
    records = [{"id": "a", "title": "A", "eligibilityCriteria": {}}]
    list_path = tmp_path / "list.json"
    wrapped_path = tmp_path / "wrapped.json"
    list_path.write_text(json.dumps(records), encoding="utf-8")
    wrapped_path.write_text(json.dumps({"scholarships": records}), encoding="utf-8")

    assert load_catalog_records(list_path) == records
    assert load_catalog_records(wrapped_path) == records


def test_load_catalog_records_rejects_missing_and_unsupported_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_catalog_records(tmp_path / "missing.json")

    csv_path = tmp_path / "catalog.csv"
    csv_path.write_text("id,title\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog_records(csv_path)

    scalar_path = tmp_path / "scalar.json"
    scalar_path.write_text("42", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog_records(scalar_path)


def test_parquet_catalog_loads_into_scholarships(tmp_path: Path) -> None:
    catalog_path = tmp_path / "scholarships.parquet"
    write_catalog_parquet(sample_scholarships(), catalog_path)

    records = load_catalog_records(catalog_path)
    scholarships = [Scholarship.from_mapping(record) for record in records]

    assert [scholarship.scholarship_id for scholarship in scholarships] == [
        "merit-engineering",
        "women-in-stem",
        "need-based-general",
        "pg-research",
    ]
    merit = scholarships[0]
    assert merit.eligibility_criteria.required_fields == Constrained(("Engineering", "Technology"))
    assert merit.eligibility_criteria.min_cgpa == 8.5
    assert merit.eligibility_criteria.max_age == 25
    assert scholarships[2].eligibility_criteria.required_fields.to_list() == []
    assert merit.contact_info is not None
    assert merit.contact_info.email == "scholarships@techfoundation.org"


def test_load_profile_merges_nested_user_document(tmp_path: Path) -> None:
    profile_path = tmp_path / "user.json"
    profile_path.write_text(
        json.dumps(
            {
                "name": "Ravi Kumar",
                "email": "ravi@example.org",
                "profile": {"cgpa": "8.2", "familyIncome": "4 lakh", "isProfileComplete": True},
            }
        ),
        encoding="utf-8",
    )

    profile = load_profile(profile_path)

    assert profile.display_name == "Ravi Kumar"
    assert profile.cgpa_raw == "8.2"
    assert profile.is_profile_complete


def test_write_json_atomic_keeps_currency_symbols(tmp_path: Path) -> None:
    output_path = tmp_path / "out" / "results.json"

    write_json_atomic({"income": "₹450,000"}, output_path)

    assert "₹450,000" in output_path.read_text(encoding="utf-8")
    assert list(output_path.parent.glob("*.tmp")) == []
