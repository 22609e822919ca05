from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any, Optional

from src.normalize.income import format_income, normalize_income, parse_leading_number
from src.normalize.schema import UserProfile


@dataclass(frozen=True, slots=True)
class NormalizedProfile:
    """UserProfile with income, CGPA and age resolved to comparable numbers."""

    name: Optional[str]
    cgpa: float
    age: int
    income: float
    current_education: Optional[str]
    field_of_study: Optional[str]
    gender: Optional[str]
    category: Optional[str]

    def to_snapshot(self, currency_symbol: str = "₹") -> dict[str, Any]:
        return {
            "name": self.name,
            "cgpa": self.cgpa,
            "education": self.current_education,
            "field": self.field_of_study,
            "income": format_income(self.income, currency_symbol),
            "age": self.age,
            "gender": self.gender,
            "category": self.category,
        }


def calculate_age(date_of_birth: date | None, today: date | None = None) -> int:
    if date_of_birth is None:
        return 0
    effective_today = today or datetime.now(tz=UTC).date()
    if isinstance(effective_today, datetime):
        effective_today = effective_today.date()
    if isinstance(date_of_birth, datetime):
        date_of_birth = date_of_birth.date()

    age = effective_today.year - date_of_birth.year
    if (effective_today.month, effective_today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def parse_cgpa(value: Any) -> float:
    parsed = parse_leading_number(value)
    return parsed if parsed is not None else 0.0


def normalize_profile(profile: UserProfile, today: date | None = None) -> NormalizedProfile:
    return NormalizedProfile(
        name=profile.display_name,
        cgpa=parse_cgpa(profile.cgpa_raw),
        age=calculate_age(profile.date_of_birth, today),
        income=normalize_income(profile.family_income_raw),
        current_education=profile.current_education,
        field_of_study=profile.field_of_study,
        gender=profile.gender,
        category=profile.category,
    )
