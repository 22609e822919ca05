from __future__ import annotations

import hashlib
from datetime import date, datetime
from typing import Any, Optional


def _normalize_text(value: Optional[Any]) -> str:
    if value is None:
        return ""
    return " ".join(str(value).strip().lower().split())


def _normalize_deadline(value: Optional[date | datetime | str]) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    cleaned = value.strip()
    if not cleaned:
        return ""

    # Prefer normalized ISO date strings when possible.
    candidate = cleaned.replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(candidate).date().isoformat()
    except ValueError:
        return cleaned.lower()


def generate_scholarship_id(
    *,
    title: str,
    provider: Optional[str],
    amount: Optional[Any],
    deadline: Optional[date | datetime | str],
) -> str:
    """Build a deterministic id for catalog records that arrive without one."""

    payload = "|".join(
        [
            _normalize_text(title),
            _normalize_text(provider),
            _normalize_text(amount),
            _normalize_deadline(deadline),
        ]
    )
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()
