"""Deterministic benchmark scoring and comparison for resumes and profiles."""

__version__ = "1.0.0"
