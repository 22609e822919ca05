from __future__ import annotations

import math
import re
from typing import Any

LAKH = 100_000.0
CRORE = 10_000_000.0

_CURRENCY_WORD_PATTERN = re.compile(r"\b(?:rs\.?|inr)(?![a-z])", re.IGNORECASE)
_STRIP_PATTERN = re.compile(r"[₹$€£,\s]")
_NON_NUMERIC_PATTERN = re.compile(r"[^\d.]")
_LEADING_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Checked in order; "lakh" wins when both words appear.
_UNIT_MULTIPLIERS = (("lakh", LAKH), ("crore", CRORE))


class IncomeFormatError(ValueError):
    """Raised for income ranges that are not a well-formed "A-B" expression."""


def parse_leading_number(text: Any) -> float | None:
    """Parse the numeric prefix of ``text`` ("8.5/10" -> 8.5), or None when there is none."""

    if text is None:
        return None
    match = _LEADING_NUMBER_PATTERN.match(str(text).strip())
    if not match:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def _range_midpoint(cleaned: str, raw: Any) -> float:
    parts = cleaned.split("-")
    if len(parts) != 2:
        raise IncomeFormatError(f"Income range must look like 'A-B' (received {raw!r}).")

    lower = parse_leading_number(parts[0])
    upper = parse_leading_number(parts[1])
    if lower is None or upper is None:
        raise IncomeFormatError(f"Income range must look like 'A-B' (received {raw!r}).")
    return (lower + upper) / 2.0


def normalize_income(text: Any) -> float:
    """Convert a free-text family income ("₹3,00,000", "5 lakh", "2-4") into a number.

    Ranges take the mean of both sides and ignore unit words, so "5-10 lakh" is 7.5.
    Empty or unparsable text normalizes to 0.
    """

    if text is None:
        return 0.0
    cleaned = _STRIP_PATTERN.sub("", _CURRENCY_WORD_PATTERN.sub("", str(text)))
    if not cleaned:
        return 0.0

    if "-" in cleaned:
        return _range_midpoint(cleaned, text)

    lowered = cleaned.lower()
    for unit, multiplier in _UNIT_MULTIPLIERS:
        if unit in lowered:
            value = parse_leading_number(_NON_NUMERIC_PATTERN.sub("", cleaned))
            return value * multiplier if value is not None else 0.0

    value = parse_leading_number(cleaned)
    return value if value is not None else 0.0


def format_grouped(value: float) -> str:
    text = f"{float(value):,.3f}".rstrip("0").rstrip(".")
    return "0" if text in {"-0", ""} else text


def format_income(value: float, currency_symbol: str = "₹") -> str:
    return f"{currency_symbol}{format_grouped(value)}"
