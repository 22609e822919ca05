from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.catalog.samples import sample_scholarships
from src.io.catalog import load_catalog_records, load_profile, write_json_atomic
from src.rank.eligibility import resolve_now
from src.rank.pipeline import rank_scholarships
from src.rank.settings import load_matching_settings

logger = logging.getLogger("check_eligibility")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank a catalog of scholarships for one user profile.")
    parser.add_argument("--profile", type=Path, required=True, help="User profile JSON file.")
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Scholarship catalog (.json or .parquet). Defaults to the bundled sample catalog.",
    )
    parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="Evaluation time as an ISO date or datetime. Defaults to the current UTC time.",
    )
    parser.add_argument("--settings", type=Path, default=None, help="Matching settings JSON file.")
    parser.add_argument("--output", type=Path, default=None, help="Write results JSON here instead of stdout.")
    parser.add_argument(
        "--eligible-only",
        action="store_true",
        help="Only keep eligible scholarships in the results list.",
    )
    return parser.parse_args(argv)


def run_check(
    *,
    profile_path: Path,
    catalog_path: Path | None = None,
    now: str | None = None,
    settings_path: Path | None = None,
    eligible_only: bool = False,
) -> dict[str, Any]:
    settings = load_matching_settings(settings_path)
    profile = load_profile(profile_path)
    records = load_catalog_records(catalog_path) if catalog_path is not None else sample_scholarships()
    logger.info("Loaded %d catalog records from %s", len(records), catalog_path or "sample catalog")

    ranked = rank_scholarships(profile, records, resolve_now(now), settings=settings)
    payload = ranked.to_dict()
    if eligible_only and not ranked.incomplete_profile:
        payload["results"] = [result for result in payload["results"] if result["isEligible"]]
    return payload


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    payload = run_check(
        profile_path=args.profile,
        catalog_path=args.catalog,
        now=args.now,
        settings_path=args.settings,
        eligible_only=args.eligible_only,
    )

    if args.output is not None:
        write_json_atomic(payload, args.output)
        logger.info("Wrote results: %s", args.output)
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
