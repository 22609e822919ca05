from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

INCOMPLETE_PROFILE_MESSAGE = "Please complete your profile to check eligibility"

_BOUND_PAIRS = (
    ("min_cgpa", "max_cgpa"),
    ("min_family_income", "max_family_income"),
    ("min_age", "max_age"),
)


def _whole_number(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Setting '{name}' must be a whole number (received {value!r}).")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Setting '{name}' must be a whole number (received {value!r}).") from exc
    if not number.is_integer():
        raise ValueError(f"Setting '{name}' must be a whole number (received {value!r}).")
    return int(number)


@dataclass(frozen=True, slots=True)
class MatchingSettings:
    """Defaults applied to absent criteria bounds plus display knobs for traces."""

    min_cgpa: float = 0.0
    max_cgpa: float = 10.0
    min_family_income: float = 0.0
    max_family_income: float = 999_999_999.0
    min_age: int = 0
    max_age: int = 100
    gender_wildcard: str = "All"
    currency_symbol: str = "₹"
    incomplete_profile_message: str = INCOMPLETE_PROFILE_MESSAGE

    def __post_init__(self) -> None:
        for lower_name, upper_name in _BOUND_PAIRS:
            lower = float(getattr(self, lower_name))
            upper = float(getattr(self, upper_name))
            for field_name, value in ((lower_name, lower), (upper_name, upper)):
                if not math.isfinite(value):
                    raise ValueError(f"Setting '{field_name}' must be finite.")
            if lower > upper:
                raise ValueError(
                    f"Setting '{lower_name}' ({lower:g}) must not exceed '{upper_name}' ({upper:g})."
                )
        if not self.gender_wildcard.strip():
            raise ValueError("Setting 'gender_wildcard' must be a non-empty string.")

    @classmethod
    def baseline(cls) -> MatchingSettings:
        return cls()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> MatchingSettings:
        values = payload or {}
        baseline = cls.baseline()
        return cls(
            min_cgpa=float(values.get("min_cgpa", baseline.min_cgpa)),
            max_cgpa=float(values.get("max_cgpa", baseline.max_cgpa)),
            min_family_income=float(values.get("min_family_income", baseline.min_family_income)),
            max_family_income=float(values.get("max_family_income", baseline.max_family_income)),
            min_age=_whole_number(values.get("min_age", baseline.min_age), "min_age"),
            max_age=_whole_number(values.get("max_age", baseline.max_age), "max_age"),
            gender_wildcard=str(values.get("gender_wildcard", baseline.gender_wildcard)),
            currency_symbol=str(values.get("currency_symbol", baseline.currency_symbol)),
            incomplete_profile_message=str(
                values.get("incomplete_profile_message", baseline.incomplete_profile_message)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_cgpa": self.min_cgpa,
            "max_cgpa": self.max_cgpa,
            "min_family_income": self.min_family_income,
            "max_family_income": self.max_family_income,
            "min_age": self.min_age,
            "max_age": self.max_age,
            "gender_wildcard": self.gender_wildcard,
            "currency_symbol": self.currency_symbol,
            "incomplete_profile_message": self.incomplete_profile_message,
        }


def load_matching_settings(path: Path | None) -> MatchingSettings:
    if path is None:
        return MatchingSettings.baseline()
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Settings file '{path}' must contain a JSON object.")
    return MatchingSettings.from_mapping(payload)
