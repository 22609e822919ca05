from __future__ import annotations

from datetime import datetime

from app.helpers import checks_to_frame, explain_result, format_deadline, reasons_to_text


def test_format_deadline_handles_missing_and_datetime_values() -> None:
    assert format_deadline(None) == "No deadline"
    assert format_deadline(float("nan")) == "No deadline"
    assert format_deadline(datetime(2024, 12, 31, 0, 0)) == "2024-12-31"
    assert format_deadline("2024-12-31T00:00:00") == "2024-12-31T00:00:00"


def test_checks_to_frame_marks_pass_and_fail() -> None:
    frame = checks_to_frame(
        [
            {"criterion": "CGPA", "required": "8.5 - 10", "userValue": 9.0, "passed": True},
            {"criterion": "Category", "required": "SC, ST", "userValue": None, "passed": False},
        ]
    )

    assert frame["status"].tolist() == ["Pass", "Fail"]
    assert frame["your value"].tolist() == ["9.0", ""]


def test_explain_result_lists_failed_criteria_and_expired_deadline() -> None:
    result = {
        "deadlineStatus": "Expired",
        "eligibilityChecks": [
            {"criterion": "CGPA", "passed": True},
            {"criterion": "Family Income", "passed": False},
        ],
    }

    assert explain_result(result) == "Not met: Family Income, Deadline"
    assert explain_result({"deadlineStatus": "Active", "eligibilityChecks": []}) == (
        "You meet every listed criterion"
    )
    assert reasons_to_text(["CGPA", " ", "Age"]) == "CGPA, Age"
