"""Shape of a curated scoring catalog (one YAML file per domain).

These models only check types and per-field bounds. Cross-references between
tables (bucket coverage, importance sums, unknown ids) are verified by the
catalog loader, which raises CatalogError.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from scan_scoring.models.schemas.profile import ExperienceLevel

_FROZEN = {"frozen": True}


class BenchmarkEntry(BaseModel):
    model_config = _FROZEN

    label: str = ""  # human wording used in comparison text


class SynergyRule(BaseModel):
    """Both benchmarks at or above `threshold` -> section score * factor."""
    model_config = _FROZEN

    kind: Literal["synergy"] = "synergy"
    benchmarks: tuple[str, str]
    threshold: float = 8
    factor: float = Field(1.05, gt=1.0, le=1.1)


class GapRule(BaseModel):
    """`benchmark` below `below` while `correlated` reaches `at_least` -> score * factor."""
    model_config = _FROZEN

    kind: Literal["gap"] = "gap"
    benchmark: str
    below: float = 5
    correlated: str
    at_least: float = 7
    factor: float = Field(0.9, ge=0.85, lt=1.0)


SectionRule = Annotated[Union[SynergyRule, GapRule], Field(discriminator="kind")]


class SectionDefinition(BaseModel):
    model_config = _FROZEN

    name: str
    benchmarks: tuple[str, ...] = ()
    detectable: bool = True  # False for document-wide groups with no heading
    rules: tuple[SectionRule, ...] = ()
    importance: float = 0.0  # default-bucket importance, filled by the loader

    @property
    def member_benchmarks(self) -> frozenset[str]:
        return frozenset(self.benchmarks)


class RoleBucketMatcher(BaseModel):
    """Bucket matches when every keyword of any one group is in the title."""
    model_config = _FROZEN

    bucket: str
    match_any: tuple[tuple[str, ...], ...] = ()


class IndustryModifier(BaseModel):
    model_config = _FROZEN

    keywords: tuple[str, ...]
    multipliers: dict[str, float] = {}


class ComboRule(BaseModel):
    model_config = _FROZEN

    sections: dict[str, float]  # section name -> minimum section score
    factor: float = Field(1.05, gt=1.0, le=1.08)


class IndustryCombo(BaseModel):
    model_config = _FROZEN

    keywords: tuple[str, ...]
    rules: tuple[ComboRule, ...] = ()


class JudgmentConversion(BaseModel):
    """Score from pass/fail plus match percentage (profile judgments)."""
    model_config = _FROZEN

    passed_base: float = 6
    failed_base: float = 2
    match_bonus: float = 4  # awarded in full at 100% match


class ComparisonConstants(BaseModel):
    """Thresholds for the two-document comparison.

    The tie threshold and dead zones match previously stored comparisons.
    """
    model_config = _FROZEN

    tie_threshold: float = 2
    benchmark_dead_zone: float = 1
    section_dead_zone: float = 0.5
    advantage_difference: float = 2
    section_advantage_difference: float = 1
    competitive_difference: float = 3
    strong_score: float = 8
    weak_score: float = 4
    improvement_score: float = 80
    improvement_message: str = "could benefit from overall content enhancement"
    general_advice: tuple[str, ...] = ()

    advantage_limit: int = 5
    weakness_limit: int = 3
    opportunity_limit: int = 3
    recommendation_limit: int = 5
    insight_limit: int = 3

    high_importance_weight: int = 8
    low_importance_weight: int = 4
    default_importance_weight: int = 5


class CatalogConfig(BaseModel):
    model_config = _FROZEN

    domain: str
    version: str
    document_noun: str = "Document"
    score_range: tuple[float, float] = (0, 10)
    judgment_conversion: JudgmentConversion | None = None

    benchmarks: dict[str, BenchmarkEntry]
    sections: tuple[SectionDefinition, ...]
    role_buckets: tuple[RoleBucketMatcher, ...] = ()
    weights: dict[str, dict[str, int]]
    experience_modifiers: dict[ExperienceLevel, dict[str, float]] = {}
    industry_modifiers: tuple[IndustryModifier, ...] = ()
    section_importance: dict[str, dict[str, float]]
    level_importance: dict[ExperienceLevel, dict[str, float]] = {}
    critical_benchmarks: tuple[str, ...] = ()
    industry_combos: tuple[IndustryCombo, ...] = ()
    comparison: ComparisonConstants = ComparisonConstants()
