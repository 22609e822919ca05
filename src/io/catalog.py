from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

import pandas as pd

from src.normalize.schema import UserProfile

SUPPORTED_CATALOG_SUFFIXES = (".json", ".parquet")


def _jsonable(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if hasattr(value, "tolist") and not pd.api.types.is_scalar(value):
        return [_jsonable(item) for item in value.tolist()]
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        if value.tzinfo is not None:
            return value.tz_convert("UTC").isoformat()
        return value.isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if hasattr(value, "item"):
        return value.item()
    return value


def _read_json_records(path: Path) -> list[dict[str, Any]]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict) and "scholarships" in payload:
        payload = payload["scholarships"]
    if not isinstance(payload, list):
        raise ValueError(
            f"Catalog '{path}' must hold a JSON list or an object with a 'scholarships' list."
        )
    return payload


def load_catalog_records(path: Path) -> list[dict[str, Any]]:
    """Read raw scholarship records from a .json or .parquet catalog file.

    Records are returned unvalidated; malformed entries are reported later by
    the ranking pipeline.
    """

    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        return _read_json_records(path)
    if suffix == ".parquet":
        df = pd.read_parquet(path, engine="pyarrow")
        return [_jsonable(record) for record in df.to_dict(orient="records")]

    raise ValueError(f"Unsupported catalog format '{suffix}'. Use one of {SUPPORTED_CATALOG_SUFFIXES}.")


def write_catalog_parquet(records: list[dict[str, Any]], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        pd.DataFrame(records).to_parquet(temp_path, index=False, engine="pyarrow")
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def load_profile(path: Path) -> UserProfile:
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict) and isinstance(payload.get("profile"), dict):
        # Stored user documents nest the profile and keep the account name outside it.
        merged = {"name": payload.get("name"), **payload["profile"]}
        return UserProfile.from_mapping(merged)
    return UserProfile.from_mapping(payload)


def write_json_atomic(payload: Any, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        temp_path.write_text(
            json.dumps(_jsonable(payload), indent=2, sort_keys=True, ensure_ascii=False),
            encoding="utf-8",
        )
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
