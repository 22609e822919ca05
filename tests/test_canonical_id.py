from __future__ import annotations

from datetime import date, datetime

from src.normalize.canonical_id import generate_scholarship_id


def _base() -> dict:
    return {
        "title": "Merit-Based Engineering Scholarship",
        "provider": "Tech Foundation India",
        "amount": "₹50,000 per year",
        "deadline": date(2024, 12, 31),
    }


def test_generate_scholarship_id_is_stable_for_same_input() -> None:
    assert generate_scholarship_id(**_base()) == generate_scholarship_id(**_base())


def test_generate_scholarship_id_ignores_case_and_whitespace() -> None:
    original = generate_scholarship_id(**_base())
    noisy = generate_scholarship_id(
        **{**_base(), "title": "  merit-based   ENGINEERING scholarship "}
    )

    assert original == noisy


def test_generate_scholarship_id_treats_equivalent_deadlines_alike() -> None:
    original = generate_scholarship_id(**_base())

    assert original == generate_scholarship_id(**{**_base(), "deadline": datetime(2024, 12, 31, 0, 0)})
    assert original == generate_scholarship_id(**{**_base(), "deadline": "2024-12-31T00:00:00Z"})


def test_generate_scholarship_id_changes_when_deadline_changes() -> None:
    original = generate_scholarship_id(**_base())
    changed = generate_scholarship_id(**{**_base(), "deadline": date(2025, 1, 31)})

    assert original != changed
