from __future__ import annotations

from datetime import datetime
from typing import Any

import pandas as pd


def format_deadline(value: Any) -> str:
    if value is None:
        return "No deadline"
    try:
        if pd.isna(value):
            return "No deadline"
    except (TypeError, ValueError):
        pass
    if isinstance(value, datetime):
        return value.date().isoformat()
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def reasons_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value if str(item).strip())
    return str(value)


def checks_to_frame(checks: list[dict[str, Any]]) -> pd.DataFrame:
    rows = [
        {
            "criterion": check.get("criterion"),
            "required": check.get("required"),
            "your value": "" if check.get("userValue") is None else str(check.get("userValue")),
            "status": "Pass" if check.get("passed") else "Fail",
        }
        for check in checks
    ]
    return pd.DataFrame(rows, columns=["criterion", "required", "your value", "status"])


def explain_result(result: dict[str, Any]) -> str:
    failed = [check["criterion"] for check in result.get("eligibilityChecks", []) if not check.get("passed")]
    if result.get("deadlineStatus") == "Expired":
        failed.append("Deadline")
    if not failed:
        return "You meet every listed criterion"
    return f"Not met: {reasons_to_text(failed)}"
