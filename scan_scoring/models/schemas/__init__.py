"""Pydantic contracts between the scoring stages."""

from scan_scoring.models.schemas.benchmark import BenchmarkJudgment, BenchmarkResult
from scan_scoring.models.schemas.profile import ResolvedProfile, RoleProfile
from scan_scoring.models.schemas.catalog import CatalogConfig, SectionDefinition
from scan_scoring.models.schemas.breakdown import ScoreAdjustment, ScoreBreakdown, SectionScore
from scan_scoring.models.schemas.comparison import ComparisonResult, ScoredDocument

__all__ = [
    "BenchmarkJudgment",
    "BenchmarkResult",
    "ResolvedProfile",
    "RoleProfile",
    "CatalogConfig",
    "SectionDefinition",
    "ScoreAdjustment",
    "ScoreBreakdown",
    "SectionScore",
    "ComparisonResult",
    "ScoredDocument",
]
