"""Catalog and profile loading plus atomic result writes."""

from src.io.catalog import load_catalog_records, load_profile, write_json_atomic

__all__ = ["load_catalog_records", "load_profile", "write_json_atomic"]
