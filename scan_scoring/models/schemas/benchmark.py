"""Benchmark judgments as they arrive from the text-analysis stage."""

from pydantic import AliasChoices, BaseModel, Field


class BenchmarkResult(BaseModel):
    """One judged benchmark, normalized into the domain's score range."""
    model_config = {"frozen": True}

    passed: bool = False
    score: float = 0.0  # resume 1-10, profile 0-10


class BenchmarkJudgment(BaseModel):
    """Raw judgment shape accepted at the boundary.

    Resume judgments carry a score directly. Profile judgments may carry only
    a 0-100 match percentage, converted by the catalog's judgment rule.
    """
    passed: bool = False
    score: float | None = None
    match_percentage: float | None = Field(
        None, validation_alias=AliasChoices("match_percentage", "matchPercentage")
    )  # 0-100
