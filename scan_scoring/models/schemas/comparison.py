"""Two-document comparison contracts."""

from typing import Literal

from pydantic import BaseModel

from scan_scoring.models.schemas.benchmark import BenchmarkResult
from scan_scoring.models.schemas.breakdown import ScoreBreakdown

Status = Literal["better", "worse", "equal"]
Importance = Literal["high", "medium", "low"]
WinnerSide = Literal["document_a", "document_b", "tie"]


class ScoredDocument(BaseModel):
    """A fully scored document as handed to the comparison engine."""
    name: str = ""
    breakdown: ScoreBreakdown = ScoreBreakdown()
    benchmark_results: dict[str, BenchmarkResult] = {}
    detected_sections: list[str] = []
    section_issues: dict[str, int] = {}  # section -> number of issues reported


class Winner(BaseModel):
    side: WinnerSide = "tie"
    label: str = ""  # winning document name, or a tie message
    score_difference: float = 0


class SideScore(BaseModel):
    name: str = ""
    overall_score: int = 0
    rank: int = 1


class ComparisonScores(BaseModel):
    document_a: SideScore = SideScore()
    document_b: SideScore = SideScore()


class BenchmarkSide(BaseModel):
    score: float = 0
    passed: bool = False
    status: Status = "equal"


class BenchmarkComparison(BaseModel):
    benchmark: str
    label: str = ""
    document_a: BenchmarkSide = BenchmarkSide()
    document_b: BenchmarkSide = BenchmarkSide()
    difference: float = 0  # absolute
    importance: Importance = "medium"


class SectionSide(BaseModel):
    score: int = 5
    has_section: bool = False
    status: Status = "equal"


class SectionComparison(BaseModel):
    section_name: str
    document_a: SectionSide = SectionSide()
    document_b: SectionSide = SectionSide()
    difference: float = 0  # absolute
    key_differences: list[str] = []


class KeyDifferences(BaseModel):
    document_a_advantages: list[str] = []
    document_b_advantages: list[str] = []
    common_weaknesses: list[str] = []
    improvement_opportunities: list[str] = []


class Recommendations(BaseModel):
    for_document_a: list[str] = []
    for_document_b: list[str] = []
    general_advice: list[str] = []


class SidePair(BaseModel):
    document_a: list[str] = []
    document_b: list[str] = []


class DetailedInsights(BaseModel):
    strongest_areas: SidePair = SidePair()
    weakest_areas: SidePair = SidePair()
    competitive_advantages: SidePair = SidePair()


class ComparisonResult(BaseModel):
    domain: str = ""
    winner: Winner = Winner()
    scores: ComparisonScores = ComparisonScores()
    key_differences: KeyDifferences = KeyDifferences()
    benchmark_comparison: list[BenchmarkComparison] = []
    section_comparison: list[SectionComparison] = []
    recommendations: Recommendations = Recommendations()
    detailed_insights: DetailedInsights = DetailedInsights()
