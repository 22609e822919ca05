from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Union

import pandas as pd

from src.normalize.canonical_id import generate_scholarship_id
from src.rank.settings import MatchingSettings


class ScholarshipRecordError(ValueError):
    """Raised when a raw scholarship record does not have the expected shape."""


class ProfileRecordError(ValueError):
    """Raised when a raw user profile record does not have the expected shape."""


@dataclass(frozen=True, slots=True)
class Unconstrained:
    """A criterion that accepts every value; it is left out of the check trace."""

    def to_list(self) -> list[str]:
        return []


@dataclass(frozen=True, slots=True)
class Constrained:
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("A constrained criterion needs at least one allowed value.")

    def admits(self, value: Any) -> bool:
        return value in self.values

    def describe(self) -> str:
        return ", ".join(self.values)

    def to_list(self) -> list[str]:
        return list(self.values)


MembershipRule = Union[Unconstrained, Constrained]
UNCONSTRAINED = Unconstrained()


def membership_rule(values: Iterable[str], *, wildcard: str | None = None) -> MembershipRule:
    allowed = tuple(values)
    if not allowed:
        return UNCONSTRAINED
    if wildcard is not None and wildcard in allowed:
        return UNCONSTRAINED
    return Constrained(allowed)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _coerce_text(value: Any) -> str | None:
    if _is_missing(value):
        return None
    if isinstance(value, str):
        return value.strip() or None
    return str(value).strip() or None


def _coerce_list(value: Any, *, field_name: str) -> tuple[str, ...]:
    if _is_missing(value):
        return ()
    if isinstance(value, str):
        cleaned = value.strip()
        return (cleaned,) if cleaned else ()
    if isinstance(value, Mapping) or not isinstance(value, Iterable):
        raise ValueError(f"Field '{field_name}' must be a list of strings.")
    items: list[str] = []
    for item in value:
        text = _coerce_text(item)
        if text:
            items.append(text)
    return tuple(items)


def _coerce_number(value: Any, default: float, *, field_name: str) -> float:
    if _is_missing(value):
        return float(default)
    if isinstance(value, bool):
        raise ValueError(f"Field '{field_name}' must be numeric.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Field '{field_name}' must be numeric (received {value!r}).") from exc
    if not math.isfinite(number):
        raise ValueError(f"Field '{field_name}' must be finite (received {value!r}).")
    return number


def _coerce_int(value: Any, default: int, *, field_name: str) -> int:
    number = _coerce_number(value, default, field_name=field_name)
    if not number.is_integer():
        raise ValueError(f"Field '{field_name}' must be a whole number (received {value!r}).")
    return int(number)


def _coerce_bool(value: Any, default: bool, *, field_name: str) -> bool:
    if _is_missing(value):
        return default
    if isinstance(value, bool):
        return value
    raise ValueError(f"Field '{field_name}' must be a boolean (received {value!r}).")


def coerce_timestamp(value: Any, *, field_name: str) -> datetime | None:
    """Coerce dates, datetimes and ISO strings to naive UTC datetimes.

    Date-only values resolve to midnight of that day.
    """

    if _is_missing(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        stamp = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Field '{field_name}' is not a valid date (received {value!r}).") from exc
    if pd.isna(stamp):
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert("UTC").tz_localize(None)
    return stamp.to_pydatetime()


def _display_amount(value: Any) -> str | None:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return _coerce_text(value)


@dataclass(frozen=True, slots=True)
class ContactInfo:
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def from_mapping(cls, payload: Any) -> ContactInfo | None:
        if _is_missing(payload):
            return None
        if not isinstance(payload, Mapping):
            raise ValueError("Field 'contactInfo' must be an object.")
        return cls(
            email=_coerce_text(payload.get("email")),
            phone=_coerce_text(payload.get("phone")),
            website=_coerce_text(payload.get("website")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"email": self.email, "phone": self.phone, "website": self.website}


@dataclass(frozen=True, slots=True)
class EligibilityCriteria:
    min_cgpa: float = 0.0
    max_cgpa: float = 10.0
    required_education: MembershipRule = UNCONSTRAINED
    required_fields: MembershipRule = UNCONSTRAINED
    min_family_income: float = 0.0
    max_family_income: float = 999_999_999.0
    allowed_genders: MembershipRule = UNCONSTRAINED
    allowed_categories: MembershipRule = UNCONSTRAINED
    min_age: int = 0
    max_age: int = 100
    # Carried for catalog fidelity; no check reads them yet.
    allowed_states: MembershipRule = UNCONSTRAINED
    allowed_cities: MembershipRule = UNCONSTRAINED

    @classmethod
    def from_mapping(
        cls, payload: Mapping[str, Any], settings: MatchingSettings | None = None
    ) -> EligibilityCriteria:
        defaults = settings or MatchingSettings.baseline()

        def _rule(key: str, wildcard: str | None = None) -> MembershipRule:
            return membership_rule(_coerce_list(payload.get(key), field_name=key), wildcard=wildcard)

        criteria = cls(
            min_cgpa=_coerce_number(payload.get("minCgpa"), defaults.min_cgpa, field_name="minCgpa"),
            max_cgpa=_coerce_number(payload.get("maxCgpa"), defaults.max_cgpa, field_name="maxCgpa"),
            required_education=_rule("requiredEducation"),
            required_fields=_rule("requiredFields"),
            min_family_income=_coerce_number(
                payload.get("minFamilyIncome"), defaults.min_family_income, field_name="minFamilyIncome"
            ),
            max_family_income=_coerce_number(
                payload.get("maxFamilyIncome"), defaults.max_family_income, field_name="maxFamilyIncome"
            ),
            allowed_genders=_rule("allowedGenders", wildcard=defaults.gender_wildcard),
            allowed_categories=_rule("allowedCategories"),
            min_age=_coerce_int(payload.get("minAge"), defaults.min_age, field_name="minAge"),
            max_age=_coerce_int(payload.get("maxAge"), defaults.max_age, field_name="maxAge"),
            allowed_states=_rule("allowedStates"),
            allowed_cities=_rule("allowedCities"),
        )
        for low_key, low, high_key, high in (
            ("minCgpa", criteria.min_cgpa, "maxCgpa", criteria.max_cgpa),
            ("minFamilyIncome", criteria.min_family_income, "maxFamilyIncome", criteria.max_family_income),
            ("minAge", criteria.min_age, "maxAge", criteria.max_age),
        ):
            if low > high:
                raise ValueError(f"Field '{low_key}' ({low}) exceeds '{high_key}' ({high}).")
        return criteria

    def to_dict(self) -> dict[str, Any]:
        return {
            "minCgpa": self.min_cgpa,
            "maxCgpa": self.max_cgpa,
            "requiredEducation": self.required_education.to_list(),
            "requiredFields": self.required_fields.to_list(),
            "minFamilyIncome": self.min_family_income,
            "maxFamilyIncome": self.max_family_income,
            "allowedGenders": self.allowed_genders.to_list(),
            "allowedCategories": self.allowed_categories.to_list(),
            "minAge": self.min_age,
            "maxAge": self.max_age,
            "allowedStates": self.allowed_states.to_list(),
            "allowedCities": self.allowed_cities.to_list(),
        }


@dataclass(frozen=True, slots=True)
class Scholarship:
    scholarship_id: str
    title: str
    provider: Optional[str]
    amount: Optional[str]
    eligibility_criteria: EligibilityCriteria
    description: Optional[str] = None
    application_deadline: Optional[datetime] = None
    documents_required: tuple[str, ...] = ()
    contact_info: Optional[ContactInfo] = None
    is_active: bool = True

    @classmethod
    def from_mapping(
        cls, payload: Mapping[str, Any], settings: MatchingSettings | None = None
    ) -> Scholarship:
        """Coerce a catalog record (camelCase keys) into a Scholarship.

        Raises ScholarshipRecordError when the record is missing its title or
        eligibilityCriteria, or when a field has the wrong type.
        """

        if not isinstance(payload, Mapping):
            raise ScholarshipRecordError("Scholarship record must be an object.")

        title = _coerce_text(payload.get("title"))
        if title is None:
            raise ScholarshipRecordError("Scholarship record is missing 'title'.")

        criteria_payload = payload.get("eligibilityCriteria")
        if _is_missing(criteria_payload):
            raise ScholarshipRecordError(f"Scholarship '{title}' is missing 'eligibilityCriteria'.")
        if not isinstance(criteria_payload, Mapping):
            raise ScholarshipRecordError(f"Scholarship '{title}' has a non-object 'eligibilityCriteria'.")

        try:
            criteria = EligibilityCriteria.from_mapping(criteria_payload, settings)
            deadline = coerce_timestamp(payload.get("applicationDeadline"), field_name="applicationDeadline")
            documents = _coerce_list(payload.get("documentsRequired"), field_name="documentsRequired")
            contact_info = ContactInfo.from_mapping(payload.get("contactInfo"))
            is_active = _coerce_bool(payload.get("isActive"), True, field_name="isActive")
        except ValueError as exc:
            raise ScholarshipRecordError(f"Scholarship '{title}': {exc}") from exc

        provider = _coerce_text(payload.get("provider"))
        amount = _display_amount(payload.get("amount"))
        scholarship_id = _coerce_text(payload.get("id")) or _coerce_text(payload.get("_id"))
        if scholarship_id is None:
            scholarship_id = generate_scholarship_id(
                title=title,
                provider=provider,
                amount=amount,
                deadline=deadline,
            )

        return cls(
            scholarship_id=scholarship_id,
            title=title,
            provider=provider,
            amount=amount,
            eligibility_criteria=criteria,
            description=_coerce_text(payload.get("description")),
            application_deadline=deadline,
            documents_required=documents,
            contact_info=contact_info,
            is_active=is_active,
        )

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.scholarship_id,
            "title": self.title,
            "description": self.description,
            "provider": self.provider,
            "amount": self.amount,
            "applicationDeadline": (
                self.application_deadline.isoformat() if self.application_deadline else None
            ),
            "documentsRequired": list(self.documents_required),
            "contactInfo": self.contact_info.to_dict() if self.contact_info else None,
        }

    def to_dict(self) -> dict[str, Any]:
        payload = self.summary()
        payload["isActive"] = self.is_active
        payload["eligibilityCriteria"] = self.eligibility_criteria.to_dict()
        return payload


@dataclass(frozen=True, slots=True)
class UserProfile:
    full_name: Optional[str] = None
    account_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    family_income_raw: Optional[str] = None
    cgpa_raw: Optional[str] = None
    current_education: Optional[str] = None
    field_of_study: Optional[str] = None
    gender: Optional[str] = None
    category: Optional[str] = None
    is_profile_complete: bool = False

    @property
    def display_name(self) -> str | None:
        return self.full_name or self.account_name

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> UserProfile:
        """Build a profile from stored fields; accepts both the raw and the stored key names."""

        if not isinstance(payload, Mapping):
            raise ProfileRecordError("Profile record must be an object.")

        def _first(*keys: str) -> Any:
            for key in keys:
                if not _is_missing(payload.get(key)):
                    return payload.get(key)
            return None

        try:
            birth = coerce_timestamp(payload.get("dateOfBirth"), field_name="dateOfBirth")
            is_complete = _coerce_bool(
                payload.get("isProfileComplete"), False, field_name="isProfileComplete"
            )
        except ValueError as exc:
            raise ProfileRecordError(str(exc)) from exc

        return cls(
            full_name=_coerce_text(payload.get("fullName")),
            account_name=_coerce_text(payload.get("name")),
            date_of_birth=birth.date() if birth is not None else None,
            family_income_raw=_coerce_text(_first("familyIncomeRaw", "familyIncome")),
            cgpa_raw=_coerce_text(_first("cgpaRaw", "cgpa")),
            current_education=_coerce_text(payload.get("currentEducation")),
            field_of_study=_coerce_text(payload.get("fieldOfStudy")),
            gender=_coerce_text(payload.get("gender")),
            category=_coerce_text(payload.get("category")),
            is_profile_complete=is_complete,
        )
