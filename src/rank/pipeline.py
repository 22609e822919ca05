from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Sequence, Union

import pandas as pd

from src.normalize.profile import NormalizedProfile, normalize_profile
from src.normalize.schema import Scholarship, ScholarshipRecordError, UserProfile
from src.rank.eligibility import EligibilityResult, evaluate_scholarship, resolve_now
from src.rank.settings import MatchingSettings

logger = logging.getLogger(__name__)

ScholarshipInput = Union[Scholarship, Mapping[str, Any]]

RESULT_FRAME_COLUMNS = [
    "scholarship_id",
    "title",
    "provider",
    "amount",
    "application_deadline",
    "deadline_status",
    "is_eligible",
    "match_percentage",
    "failed_criteria",
]


@dataclass(frozen=True, slots=True)
class SkippedRecord:
    index: int
    scholarship_id: str | None
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "id": self.scholarship_id, "reason": self.reason}


@dataclass(frozen=True, slots=True)
class RankedResults:
    total_scholarships: int
    eligible_scholarships: int
    results: tuple[EligibilityResult, ...]
    profile: NormalizedProfile
    skipped: tuple[SkippedRecord, ...] = ()
    currency_symbol: str = "₹"

    incomplete_profile = False

    @property
    def user_profile(self) -> dict[str, Any]:
        return self.profile.to_snapshot(self.currency_symbol)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalScholarships": self.total_scholarships,
            "eligibleScholarships": self.eligible_scholarships,
            "results": [result.to_dict() for result in self.results],
            "userProfile": self.user_profile,
            "skippedScholarships": [record.to_dict() for record in self.skipped],
        }


@dataclass(frozen=True, slots=True)
class IncompleteProfileResult:
    message: str

    incomplete_profile = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "eligibleScholarships": [],
            "incompleteProfile": True,
        }


def _record_id(record: Any) -> str | None:
    if not isinstance(record, Mapping):
        return None
    for key in ("id", "_id"):
        value = record.get(key)
        if value is not None:
            return str(value)
    return None


def _collect_candidates(
    scholarships: Sequence[ScholarshipInput],
    settings: MatchingSettings,
) -> tuple[list[Scholarship], list[SkippedRecord], int]:
    candidates: list[Scholarship] = []
    skipped: list[SkippedRecord] = []
    inactive_count = 0

    for index, record in enumerate(scholarships):
        if isinstance(record, Scholarship):
            scholarship = record
        else:
            try:
                scholarship = Scholarship.from_mapping(record, settings)
            except ScholarshipRecordError as exc:
                logger.warning("Skipping scholarship record %d (%s): %s", index, _record_id(record), exc)
                skipped.append(SkippedRecord(index=index, scholarship_id=_record_id(record), reason=str(exc)))
                continue

        if not scholarship.is_active:
            logger.debug("Dropping inactive scholarship %s", scholarship.scholarship_id)
            inactive_count += 1
            continue
        candidates.append(scholarship)

    return candidates, skipped, inactive_count


def sort_results(results: Sequence[EligibilityResult]) -> list[EligibilityResult]:
    """Eligible first, then by descending match percentage; equal keys keep input order."""

    if not results:
        return []
    order_df = pd.DataFrame(
        {
            "position": range(len(results)),
            "rank_key": [
                -(1000 * int(result.is_eligible) + result.match_percentage) for result in results
            ],
        }
    )
    order_df = order_df.sort_values(by="rank_key", ascending=True, kind="mergesort")
    return [results[position] for position in order_df["position"].tolist()]


def rank_scholarships(
    profile: UserProfile | Mapping[str, Any],
    scholarships: Sequence[ScholarshipInput],
    now: datetime | date | None = None,
    *,
    settings: MatchingSettings | None = None,
) -> RankedResults | IncompleteProfileResult:
    """Evaluate one profile against every active scholarship and rank the outcomes.

    Incomplete profiles get an IncompleteProfileResult and nothing is
    evaluated. Malformed scholarship records are skipped and listed in
    ``RankedResults.skipped`` instead of failing the run.
    """

    active_settings = settings or MatchingSettings.baseline()
    user_profile = profile if isinstance(profile, UserProfile) else UserProfile.from_mapping(profile)

    if not user_profile.is_profile_complete:
        logger.info("Profile for %s is incomplete; skipping eligibility run.", user_profile.display_name)
        return IncompleteProfileResult(message=active_settings.incomplete_profile_message)

    effective_now = resolve_now(now)
    normalized = normalize_profile(user_profile, today=effective_now.date())

    candidates, skipped, inactive_count = _collect_candidates(scholarships, active_settings)
    results = [
        evaluate_scholarship(normalized, scholarship, effective_now, settings=active_settings)
        for scholarship in candidates
    ]
    ranked = sort_results(results)
    eligible_count = sum(1 for result in ranked if result.is_eligible)

    logger.info(
        "Ranked %d scholarships for %s: eligible=%d skipped=%d inactive=%d",
        len(ranked),
        normalized.name,
        eligible_count,
        len(skipped),
        inactive_count,
    )

    return RankedResults(
        total_scholarships=len(scholarships) - inactive_count,
        eligible_scholarships=eligible_count,
        results=tuple(ranked),
        profile=normalized,
        skipped=tuple(skipped),
        currency_symbol=active_settings.currency_symbol,
    )


def results_frame(results: Sequence[EligibilityResult]) -> pd.DataFrame:
    rows = [
        {
            "scholarship_id": result.scholarship.scholarship_id,
            "title": result.scholarship.title,
            "provider": result.scholarship.provider,
            "amount": result.scholarship.amount,
            "application_deadline": result.scholarship.application_deadline,
            "deadline_status": result.deadline_status,
            "is_eligible": result.is_eligible,
            "match_percentage": result.match_percentage,
            "failed_criteria": result.failed_criteria,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=RESULT_FRAME_COLUMNS)
