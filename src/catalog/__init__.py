"""Bundled scholarship catalog fixtures."""

from src.catalog.samples import sample_scholarships

__all__ = ["sample_scholarships"]
