from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any, Sequence

from src.normalize.income import format_grouped, format_income
from src.normalize.profile import NormalizedProfile
from src.normalize.schema import Constrained, MembershipRule, Scholarship, coerce_timestamp
from src.rank.settings import MatchingSettings

DEADLINE_ACTIVE = "Active"
DEADLINE_EXPIRED = "Expired"

CRITERION_CGPA = "CGPA"
CRITERION_EDUCATION = "Education Level"
CRITERION_FIELD = "Field of Study"
CRITERION_INCOME = "Family Income"
CRITERION_GENDER = "Gender"
CRITERION_CATEGORY = "Category"
CRITERION_AGE = "Age"


@dataclass(frozen=True, slots=True)
class EligibilityCheck:
    criterion: str
    required: str
    user_value: Any
    passed: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "criterion": self.criterion,
            "required": self.required,
            "userValue": self.user_value,
            "passed": self.passed,
        }


@dataclass(frozen=True, slots=True)
class EligibilityResult:
    scholarship: Scholarship
    is_eligible: bool
    deadline_status: str
    checks: tuple[EligibilityCheck, ...]
    match_percentage: int

    @property
    def failed_criteria(self) -> list[str]:
        return [check.criterion for check in self.checks if not check.passed]

    def to_dict(self) -> dict[str, Any]:
        return {
            "scholarship": self.scholarship.summary(),
            "isEligible": self.is_eligible,
            "deadlineStatus": self.deadline_status,
            "eligibilityChecks": [check.to_dict() for check in self.checks],
            "matchPercentage": self.match_percentage,
        }


def resolve_now(now: datetime | date | None) -> datetime:
    """Return ``now`` as a naive UTC datetime, defaulting to the system clock."""

    if now is None:
        return datetime.now(tz=UTC).replace(tzinfo=None)
    resolved = coerce_timestamp(now, field_name="now")
    if resolved is None:
        raise ValueError(f"Cannot resolve evaluation time from {now!r}.")
    return resolved


def _plain_number(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _range_check(
    criterion: str,
    value: float,
    lower: float,
    upper: float,
    *,
    required: str,
    user_value: Any,
) -> EligibilityCheck:
    return EligibilityCheck(
        criterion=criterion,
        required=required,
        user_value=user_value,
        passed=lower <= value <= upper,
    )


def _membership_check(
    criterion: str, rule: MembershipRule, value: str | None
) -> EligibilityCheck | None:
    if not isinstance(rule, Constrained):
        return None
    return EligibilityCheck(
        criterion=criterion,
        required=rule.describe(),
        user_value=value,
        passed=rule.admits(value),
    )


def compute_match_percentage(checks: Sequence[EligibilityCheck]) -> int:
    # No emitted checks counts as a full match.
    if not checks:
        return 100
    passed = sum(1 for check in checks if check.passed)
    return int(math.floor(100.0 * passed / len(checks) + 0.5))


def is_deadline_expired(deadline: datetime | None, now: datetime) -> bool:
    return deadline is not None and deadline < now


def evaluate_scholarship(
    profile: NormalizedProfile,
    scholarship: Scholarship,
    now: datetime | date | None = None,
    *,
    settings: MatchingSettings | None = None,
) -> EligibilityResult:
    """Run every criterion of ``scholarship`` against ``profile`` and report each outcome.

    All checks run even after a failure so the trace is complete. Set-valued
    criteria that are unconstrained are omitted from the trace and from the
    match percentage. An expired deadline forces ``is_eligible`` to False
    without adding a check.
    """

    effective_now = resolve_now(now)
    symbol = (settings or MatchingSettings.baseline()).currency_symbol
    criteria = scholarship.eligibility_criteria

    candidates = [
        _range_check(
            CRITERION_CGPA,
            profile.cgpa,
            criteria.min_cgpa,
            criteria.max_cgpa,
            required=f"{_plain_number(criteria.min_cgpa)} - {_plain_number(criteria.max_cgpa)}",
            user_value=profile.cgpa,
        ),
        _membership_check(CRITERION_EDUCATION, criteria.required_education, profile.current_education),
        _membership_check(CRITERION_FIELD, criteria.required_fields, profile.field_of_study),
        _range_check(
            CRITERION_INCOME,
            profile.income,
            criteria.min_family_income,
            criteria.max_family_income,
            required=(
                f"{symbol}{format_grouped(criteria.min_family_income)} - "
                f"{symbol}{format_grouped(criteria.max_family_income)}"
            ),
            user_value=format_income(profile.income, symbol),
        ),
        _membership_check(CRITERION_GENDER, criteria.allowed_genders, profile.gender),
        _membership_check(CRITERION_CATEGORY, criteria.allowed_categories, profile.category),
        _range_check(
            CRITERION_AGE,
            profile.age,
            criteria.min_age,
            criteria.max_age,
            required=f"{criteria.min_age} - {criteria.max_age} years",
            user_value=f"{profile.age} years",
        ),
    ]
    checks = tuple(check for check in candidates if check is not None)

    deadline = coerce_timestamp(scholarship.application_deadline, field_name="applicationDeadline")
    expired = is_deadline_expired(deadline, effective_now)
    is_eligible = all(check.passed for check in checks) and not expired

    return EligibilityResult(
        scholarship=scholarship,
        is_eligible=is_eligible,
        deadline_status=DEADLINE_EXPIRED if expired else DEADLINE_ACTIVE,
        checks=checks,
        match_percentage=compute_match_percentage(checks),
    )
