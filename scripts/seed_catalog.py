from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.catalog.samples import sample_scholarships
from src.io.catalog import write_catalog_parquet, write_json_atomic


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write the sample scholarship catalog.")
    parser.add_argument(
        "--output",
        type=Path,
        default=ROOT_DIR / "data" / "catalog" / "scholarships.json",
        help="Output catalog path (.json or .parquet).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    records = sample_scholarships()
    if args.output.suffix.lower() == ".parquet":
        write_catalog_parquet(records, args.output)
    elif args.output.suffix.lower() == ".json":
        write_json_atomic(records, args.output)
    else:
        raise ValueError("Unsupported output format. Use .parquet or .json")

    print(f"Wrote {len(records)} sample scholarships: {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
