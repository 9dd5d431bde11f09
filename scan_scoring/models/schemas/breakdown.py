"""Single-document scoring output."""

from typing import Literal

from pydantic import BaseModel

from scan_scoring.models.schemas.benchmark import BenchmarkResult
from scan_scoring.models.schemas.profile import ResolvedProfile


class SectionScore(BaseModel):
    section: str
    score: int = 5  # 0-10
    importance: float = 0.0  # share of the overall score, 0-1
    priority: Literal["high", "medium", "low"] = "medium"
    detected: bool = False  # heading found in the document
    benchmarks: dict[str, BenchmarkResult] = {}  # member results, for detail views


class ScoreAdjustment(BaseModel):
    """One heuristic multiplier applied on top of the weighted section average."""
    name: str
    factor: float


class ScoreBreakdown(BaseModel):
    domain: str = ""
    catalog_version: str = ""
    profile: ResolvedProfile = ResolvedProfile()
    section_scores: list[SectionScore] = []
    overall_score: int = 0  # 0-100
    improvement_potential: int = 100
    weighted_base: float = 0.0  # 0-100, before adjustments
    adjustments: list[ScoreAdjustment] = []

    def section_score(self, name: str) -> int | None:
        for entry in self.section_scores:
            if entry.section == name:
                return entry.score
        return None
