from __future__ import annotations

import json
import sys
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pandas as pd
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.helpers import checks_to_frame, explain_result, format_deadline, reasons_to_text
from src.catalog.samples import sample_scholarships
from src.io.catalog import load_catalog_records
from src.rank.pipeline import rank_scholarships, results_frame
from src.rank.settings import load_matching_settings

DATA_DIR = ROOT_DIR / "data"
PROFILE_PATH = DATA_DIR / "user_profile.json"
CATALOG_PATH = DATA_DIR / "catalog" / "scholarships.json"
SETTINGS_PATH = DATA_DIR / "matching_settings.json"

EDUCATION_OPTIONS = ("", "Undergraduate", "Postgraduate", "PhD")
GENDER_OPTIONS = ("", "Male", "Female", "Other", "Prefer not to say")
CATEGORY_OPTIONS = ("", "General", "OBC", "SC", "ST", "EWS")


def _default_profile() -> dict[str, Any]:
    return {
        "fullName": "",
        "dateOfBirth": None,
        "familyIncome": "",
        "cgpa": "",
        "currentEducation": "",
        "fieldOfStudy": "",
        "gender": "",
        "category": "",
        "isProfileComplete": True,
    }


def _load_profile_from_disk() -> dict[str, Any]:
    defaults = _default_profile()
    if PROFILE_PATH.exists():
        defaults.update(json.loads(PROFILE_PATH.read_text(encoding="utf-8")))
    return defaults


def _save_profile_to_disk(profile: dict[str, Any]) -> None:
    PROFILE_PATH.parent.mkdir(parents=True, exist_ok=True)
    PROFILE_PATH.write_text(json.dumps(profile, indent=2, sort_keys=True), encoding="utf-8")


@st.cache_data(show_spinner=False)
def _load_catalog_cached(path_text: str | None) -> list[dict[str, Any]]:
    if path_text is None:
        return sample_scholarships()
    return load_catalog_records(Path(path_text))


def _select_index(options: tuple[str, ...], value: Any) -> int:
    return options.index(value) if value in options else 0


def _profile_form(stored: dict[str, Any]) -> dict[str, Any]:
    st.header("Profile")
    birth_value = stored.get("dateOfBirth")
    birth_default = date.fromisoformat(birth_value[:10]) if birth_value else None
    full_name = st.text_input("Full name", value=str(stored.get("fullName") or ""))
    date_of_birth = st.date_input(
        "Date of birth",
        value=birth_default,
        min_value=date(1950, 1, 1),
        max_value=date.today(),
    )
    family_income = st.text_input(
        "Family income (e.g. 4,50,000 / 5 lakh / 3-5 lakh)",
        value=str(stored.get("familyIncome") or ""),
    )
    cgpa = st.text_input("CGPA (0-10)", value=str(stored.get("cgpa") or ""))
    education = st.selectbox(
        "Current education",
        EDUCATION_OPTIONS,
        index=_select_index(EDUCATION_OPTIONS, stored.get("currentEducation")),
    )
    field_of_study = st.text_input("Field of study", value=str(stored.get("fieldOfStudy") or ""))
    gender = st.selectbox("Gender", GENDER_OPTIONS, index=_select_index(GENDER_OPTIONS, stored.get("gender")))
    category = st.selectbox(
        "Category", CATEGORY_OPTIONS, index=_select_index(CATEGORY_OPTIONS, stored.get("category"))
    )
    is_complete = st.checkbox("Profile complete", value=bool(stored.get("isProfileComplete", True)))

    return {
        "fullName": full_name,
        "dateOfBirth": date_of_birth.isoformat() if date_of_birth else None,
        "familyIncome": family_income,
        "cgpa": cgpa,
        "currentEducation": education,
        "fieldOfStudy": field_of_study,
        "gender": gender,
        "category": category,
        "isProfileComplete": is_complete,
    }


def main() -> None:
    st.set_page_config(page_title="Scholarship Eligibility", layout="wide")
    st.title("Scholarship Eligibility")
    st.caption("Profile -> normalize -> per-criterion checks -> eligible-first ranking")

    with st.sidebar:
        profile = _profile_form(_load_profile_from_disk())
        if st.button("Save Profile", use_container_width=True):
            _save_profile_to_disk(profile)
            st.success(f"Saved to {PROFILE_PATH}")

        st.divider()
        st.header("Evaluation date")
        use_override = st.checkbox("Override today", value=False)
        today_override = st.date_input("Evaluate as of", value=date.today())

    try:
        settings = load_matching_settings(SETTINGS_PATH if SETTINGS_PATH.exists() else None)
    except ValueError as exc:
        st.error(f"Could not load {SETTINGS_PATH.name}: {exc}")
        return

    catalog_path_text = str(CATALOG_PATH.resolve()) if CATALOG_PATH.exists() else None
    if catalog_path_text is None:
        st.info(f"No catalog at {CATALOG_PATH}; using the bundled sample catalog.")
    records = _load_catalog_cached(catalog_path_text)

    now = datetime.combine(today_override, time.min) if use_override else None
    try:
        ranked = rank_scholarships(profile, records, now, settings=settings)
    except ValueError as exc:
        st.error(f"Could not evaluate profile: {exc}")
        return

    if ranked.incomplete_profile:
        st.warning(ranked.message)
        return

    payload = ranked.to_dict()
    summary_col, eligible_col, skipped_col = st.columns(3)
    summary_col.metric("Scholarships", payload["totalScholarships"])
    eligible_col.metric("Eligible", payload["eligibleScholarships"])
    skipped_col.metric("Skipped records", len(payload["skippedScholarships"]))

    st.subheader("Your normalized profile")
    st.json(payload["userProfile"])

    frame = results_frame(ranked.results)
    frame["application_deadline"] = frame["application_deadline"].apply(format_deadline)
    frame["failed_criteria"] = frame["failed_criteria"].apply(reasons_to_text)
    st.subheader("Ranked scholarships")
    st.dataframe(frame, use_container_width=True)

    st.subheader("Eligibility detail")
    for result in payload["results"]:
        scholarship = result["scholarship"]
        label = f"{scholarship['title']} ({result['matchPercentage']}%)"
        with st.expander(label):
            st.write(
                {
                    "provider": scholarship.get("provider") or "",
                    "amount": scholarship.get("amount") or "",
                    "deadline": format_deadline(scholarship.get("applicationDeadline")),
                    "deadline status": result["deadlineStatus"],
                }
            )
            st.write(explain_result(result))
            st.dataframe(checks_to_frame(result["eligibilityChecks"]), use_container_width=True)

    if payload["skippedScholarships"]:
        st.subheader("Skipped catalog records")
        st.dataframe(pd.DataFrame(payload["skippedScholarships"]), use_container_width=True)


if __name__ == "__main__":
    main()
