from __future__ import annotations

from datetime import datetime

from src.normalize.profile import NormalizedProfile
from src.normalize.schema import Scholarship
from src.rank.eligibility import (
    DEADLINE_ACTIVE,
    DEADLINE_EXPIRED,
    EligibilityCheck,
    compute_match_percentage,
    evaluate_scholarship,
)

NOW = datetime(2026, 10, 19, 12, 0)


def _profile(**overrides) -> NormalizedProfile:  # noqa: ANN003
    values = {
        "name": "Priya",
        "cgpa": 9.0,
        "age": 20,
        "income": 450000.0,
        "current_education": "Undergraduate",
        "field_of_study": "Engineering",
        "gender": "Female",
        "category": "OBC",
    }
    values.update(overrides)
    return NormalizedProfile(**values)


def _scholarship(criteria: dict, **fields) -> Scholarship:  # noqa: ANN003
    payload = {"id": "s-1", "title": "Test Scholarship", "eligibilityCriteria": criteria}
    payload.update(fields)
    return Scholarship.from_mapping(payload)


def test_all_gender_wildcard_omits_gender_check() -> None:
    scholarship = _scholarship({"minCgpa": 8.5, "maxCgpa": 10, "allowedGenders": ["All"]})

    result = evaluate_scholarship(_profile(cgpa=9.0, gender="Female"), scholarship, NOW)

    criteria = [check.criterion for check in result.checks]
    assert criteria == ["CGPA", "Family Income", "Age"]
    assert result.checks[0] == EligibilityCheck(
        criterion="CGPA", required="8.5 - 10", user_value=9.0, passed=True
    )
    assert result.is_eligible
    assert result.match_percentage == 100


def test_checks_follow_fixed_order_when_every_criterion_is_constrained() -> None:
    scholarship = _scholarship(
        {
            "minCgpa": 7,
            "requiredEducation": ["Undergraduate"],
            "requiredFields": ["Engineering"],
            "maxFamilyIncome": 800000,
            "allowedGenders": ["Female"],
            "allowedCategories": ["OBC", "SC"],
            "minAge": 17,
            "maxAge": 25,
        }
    )

    result = evaluate_scholarship(_profile(), scholarship, NOW)

    assert [check.to_dict() for check in result.checks] == [
        {"criterion": "CGPA", "required": "7 - 10", "userValue": 9.0, "passed": True},
        {"criterion": "Education Level", "required": "Undergraduate", "userValue": "Undergraduate", "passed": True},
        {"criterion": "Field of Study", "required": "Engineering", "userValue": "Engineering", "passed": True},
        {
            "criterion": "Family Income",
            "required": "₹0 - ₹800,000",
            "userValue": "₹450,000",
            "passed": True,
        },
        {"criterion": "Gender", "required": "Female", "userValue": "Female", "passed": True},
        {"criterion": "Category", "required": "OBC, SC", "userValue": "OBC", "passed": True},
        {"criterion": "Age", "required": "17 - 25 years", "userValue": "20 years", "passed": True},
    ]
    assert result.is_eligible
    assert result.deadline_status == DEADLINE_ACTIVE


def test_unconstrained_education_never_appears_in_trace() -> None:
    scholarship = _scholarship({"requiredEducation": [], "requiredFields": ["Medicine"]})

    result = evaluate_scholarship(_profile(current_education=None), scholarship, NOW)

    assert "Education Level" not in [check.criterion for check in result.checks]
    assert [check.criterion for check in result.checks] == ["CGPA", "Field of Study", "Family Income", "Age"]


def test_failures_do_not_short_circuit_remaining_checks() -> None:
    scholarship = _scholarship(
        {
            "minCgpa": 9.5,
            "requiredFields": ["Medicine"],
            "maxFamilyIncome": 300000,
            "allowedCategories": ["SC", "ST"],
            "minAge": 21,
        }
    )

    result = evaluate_scholarship(_profile(), scholarship, NOW)

    assert [(check.criterion, check.passed) for check in result.checks] == [
        ("CGPA", False),
        ("Field of Study", False),
        ("Family Income", False),
        ("Category", False),
        ("Age", False),
    ]
    assert not result.is_eligible
    assert result.match_percentage == 0
    assert result.failed_criteria == ["CGPA", "Field of Study", "Family Income", "Category", "Age"]


def test_range_bounds_are_inclusive() -> None:
    scholarship = _scholarship(
        {"minCgpa": 9.0, "maxCgpa": 9.0, "minFamilyIncome": 450000, "maxFamilyIncome": 450000, "minAge": 20, "maxAge": 20}
    )

    result = evaluate_scholarship(_profile(), scholarship, NOW)

    assert all(check.passed for check in result.checks)


def test_unset_profile_value_fails_constrained_membership() -> None:
    scholarship = _scholarship({"allowedCategories": ["General"]})

    result = evaluate_scholarship(_profile(category=None), scholarship, NOW)

    category_check = next(check for check in result.checks if check.criterion == "Category")
    assert category_check.user_value is None
    assert not category_check.passed
    assert result.match_percentage == 75


def test_membership_is_case_sensitive() -> None:
    scholarship = _scholarship({"allowedGenders": ["female"]})

    result = evaluate_scholarship(_profile(gender="Female"), scholarship, NOW)

    assert not result.is_eligible


def test_expired_deadline_forces_ineligible_even_when_all_checks_pass() -> None:
    scholarship = _scholarship({}, applicationDeadline="2026-10-01")

    result = evaluate_scholarship(_profile(), scholarship, NOW)

    assert all(check.passed for check in result.checks)
    assert result.match_percentage == 100
    assert result.deadline_status == DEADLINE_EXPIRED
    assert not result.is_eligible


def test_deadline_comparison_is_strict() -> None:
    scholarship = _scholarship({}, applicationDeadline="2026-10-19")

    at_midnight = evaluate_scholarship(_profile(), scholarship, datetime(2026, 10, 19, 0, 0))
    later_that_day = evaluate_scholarship(_profile(), scholarship, datetime(2026, 10, 19, 9, 30))

    assert at_midnight.deadline_status == DEADLINE_ACTIVE
    assert at_midnight.is_eligible
    assert later_that_day.deadline_status == DEADLINE_EXPIRED


def test_missing_deadline_is_active() -> None:
    result = evaluate_scholarship(_profile(), _scholarship({}), NOW)

    assert result.deadline_status == DEADLINE_ACTIVE


def test_match_percentage_rounds_half_up_and_defaults_to_full_match() -> None:
    passed = EligibilityCheck(criterion="x", required="", user_value=None, passed=True)
    failed = EligibilityCheck(criterion="y", required="", user_value=None, passed=False)

    assert compute_match_percentage([]) == 100
    assert compute_match_percentage([passed, failed, failed]) == 33
    assert compute_match_percentage([passed, passed, failed]) == 67
    assert compute_match_percentage([passed] + [failed] * 7) == 13
    assert compute_match_percentage([passed] * 5 + [failed] * 2) == 71


def test_evaluation_is_deterministic_for_frozen_inputs() -> None:
    scholarship = _scholarship(
        {"minCgpa": 8, "requiredFields": ["Science"], "allowedGenders": ["Female"]},
        applicationDeadline="2026-12-31",
    )
    profile = _profile()

    first = evaluate_scholarship(profile, scholarship, NOW)
    second = evaluate_scholarship(profile, scholarship, NOW)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_result_serializes_scholarship_summary() -> None:
    scholarship = _scholarship(
        {},
        provider="Tech Foundation India",
        amount="₹50,000 per year",
        applicationDeadline="2026-12-31",
        documentsRequired=["Marksheet"],
        contactInfo={"email": "apply@example.org"},
    )

    payload = evaluate_scholarship(_profile(), scholarship, NOW).to_dict()

    assert payload["scholarship"] == {
        "id": "s-1",
        "title": "Test Scholarship",
        "description": None,
        "provider": "Tech Foundation India",
        "amount": "₹50,000 per year",
        "applicationDeadline": "2026-12-31T00:00:00",
        "documentsRequired": ["Marksheet"],
        "contactInfo": {"email": "apply@example.org", "phone": None, "website": None},
    }
    assert payload["isEligible"] is True
    assert payload["deadlineStatus"] == "Active"
    assert payload["matchPercentage"] == 100
