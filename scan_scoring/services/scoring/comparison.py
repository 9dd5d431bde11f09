"""Side-by-side comparison of two scored documents of the same domain.

Template engine only: every message is built from catalog labels and the
comparison constants. The result is symmetric, so swapping the inputs swaps
every per-side field and nothing else.
"""

import logging
from collections.abc import Mapping

from scan_scoring.models.schemas.benchmark import BenchmarkResult
from scan_scoring.models.schemas.comparison import (
    BenchmarkComparison,
    BenchmarkSide,
    ComparisonResult,
    ComparisonScores,
    DetailedInsights,
    Importance,
    KeyDifferences,
    Recommendations,
    ScoredDocument,
    SectionComparison,
    SectionSide,
    SidePair,
    SideScore,
    Status,
    Winner,
)
from scan_scoring.models.schemas.profile import ResolvedProfile, RoleProfile
from scan_scoring.services.scoring.catalog import BenchmarkCatalog
from scan_scoring.services.scoring.role_weights import RoleWeightResolver
from scan_scoring.services.scoring.section_scorer import SectionScorer, heading_detected

logger = logging.getLogger(__name__)

_MISSING = BenchmarkResult(passed=False, score=0.0)


def _status(mine: float, theirs: float, dead_zone: float) -> Status:
    if mine > theirs + dead_zone:
        return "better"
    if mine < theirs - dead_zone:
        return "worse"
    return "equal"


class ComparisonEngine:
    def __init__(
        self,
        catalog: BenchmarkCatalog,
        resolver: RoleWeightResolver,
        section_scorer: SectionScorer,
    ) -> None:
        self._catalog = catalog
        self._resolver = resolver
        self._section_scorer = section_scorer

    def compare(
        self,
        doc_a: ScoredDocument,
        doc_b: ScoredDocument,
        preferences: RoleProfile | ResolvedProfile | None = None,
    ) -> ComparisonResult:
        catalog = self._catalog
        profile = self._resolver.profile_from(preferences)
        weights = self._resolver.weights_for(profile)

        name_a = doc_a.name or f"{catalog.document_noun} 1"
        name_b = doc_b.name or f"{catalog.document_noun} 2"
        score_a = doc_a.breakdown.overall_score
        score_b = doc_b.breakdown.overall_score

        benchmarks = _build_benchmark_comparison(catalog, doc_a, doc_b, weights)
        sections = _build_section_comparison(catalog, self._section_scorer, doc_a, doc_b, weights)

        result = ComparisonResult(
            domain=catalog.domain,
            winner=_build_winner(catalog, name_a, name_b, score_a, score_b),
            scores=ComparisonScores(
                document_a=SideScore(name=name_a, overall_score=score_a, rank=1 if score_a >= score_b else 2),
                document_b=SideScore(name=name_b, overall_score=score_b, rank=1 if score_b >= score_a else 2),
            ),
            key_differences=_build_key_differences(catalog, benchmarks, sections, score_a, score_b),
            benchmark_comparison=benchmarks,
            section_comparison=sections,
            recommendations=_build_recommendations(catalog, benchmarks, sections),
            detailed_insights=_build_insights(catalog, benchmarks),
        )
        logger.debug(
            "Compared %s documents: %d vs %d -> %s",
            catalog.domain, score_a, score_b, result.winner.side,
        )
        return result


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _importance(weight: int | None, catalog: BenchmarkCatalog) -> Importance:
    constants = catalog.comparison
    if weight is None:
        weight = constants.default_importance_weight
    if weight >= constants.high_importance_weight:
        return "high"
    if weight <= constants.low_importance_weight:
        return "low"
    return "medium"


def _build_winner(
    catalog: BenchmarkCatalog, name_a: str, name_b: str, score_a: int, score_b: int
) -> Winner:
    difference = abs(score_a - score_b)
    if difference < catalog.comparison.tie_threshold:
        return Winner(
            side="tie",
            label=f"Both {catalog.document_noun.lower()}s are equally strong",
            score_difference=difference,
        )
    if score_a > score_b:
        return Winner(side="document_a", label=name_a, score_difference=difference)
    return Winner(side="document_b", label=name_b, score_difference=difference)


def _build_benchmark_comparison(
    catalog: BenchmarkCatalog,
    doc_a: ScoredDocument,
    doc_b: ScoredDocument,
    weights: Mapping[str, int],
) -> list[BenchmarkComparison]:
    """Every catalog benchmark judged on at least one side, in catalog order."""
    dead_zone = catalog.comparison.benchmark_dead_zone
    comparisons = []
    for benchmark in catalog.benchmark_ids:
        if benchmark not in doc_a.benchmark_results and benchmark not in doc_b.benchmark_results:
            continue
        a = doc_a.benchmark_results.get(benchmark, _MISSING)
        b = doc_b.benchmark_results.get(benchmark, _MISSING)
        comparisons.append(
            BenchmarkComparison(
                benchmark=benchmark,
                label=catalog.label(benchmark),
                document_a=BenchmarkSide(score=a.score, passed=a.passed, status=_status(a.score, b.score, dead_zone)),
                document_b=BenchmarkSide(score=b.score, passed=b.passed, status=_status(b.score, a.score, dead_zone)),
                difference=abs(a.score - b.score),
                importance=_importance(weights.get(benchmark), catalog),
            )
        )
    return comparisons


def _section_key_differences(
    noun: str, name: str, has_a: bool, has_b: bool, doc_a: ScoredDocument, doc_b: ScoredDocument
) -> list[str]:
    notes = []
    if has_a and not has_b:
        notes.append(f"{noun} 1 includes {name} section, {noun} 2 missing")
    elif has_b and not has_a:
        notes.append(f"{noun} 2 includes {name} section, {noun} 1 missing")

    issues_a = doc_a.section_issues.get(name, 0)
    issues_b = doc_b.section_issues.get(name, 0)
    if issues_a < issues_b:
        notes.append(f"{noun} 1 has fewer issues in {name}")
    elif issues_b < issues_a:
        notes.append(f"{noun} 2 has fewer issues in {name}")
    return notes


def _build_section_comparison(
    catalog: BenchmarkCatalog,
    scorer: SectionScorer,
    doc_a: ScoredDocument,
    doc_b: ScoredDocument,
    weights: Mapping[str, int],
) -> list[SectionComparison]:
    dead_zone = catalog.comparison.section_dead_zone
    comparisons = []
    for section in catalog.sections:
        score_a = scorer.score(section, doc_a.benchmark_results, weights)
        score_b = scorer.score(section, doc_b.benchmark_results, weights)
        # Document-wide groups have no heading and always count as present
        has_a = not section.detectable or heading_detected(section.name, doc_a.detected_sections)
        has_b = not section.detectable or heading_detected(section.name, doc_b.detected_sections)
        comparisons.append(
            SectionComparison(
                section_name=section.name,
                document_a=SectionSide(score=score_a, has_section=has_a, status=_status(score_a, score_b, dead_zone)),
                document_b=SectionSide(score=score_b, has_section=has_b, status=_status(score_b, score_a, dead_zone)),
                difference=abs(score_a - score_b),
                key_differences=_section_key_differences(
                    catalog.document_noun, section.name, has_a, has_b, doc_a, doc_b
                ),
            )
        )
    return comparisons


def _build_key_differences(
    catalog: BenchmarkCatalog,
    benchmarks: list[BenchmarkComparison],
    sections: list[SectionComparison],
    score_a: int,
    score_b: int,
) -> KeyDifferences:
    constants = catalog.comparison
    noun = catalog.document_noun
    advantages_a: list[str] = []
    advantages_b: list[str] = []
    common: list[str] = []

    for comp in benchmarks:
        if comp.difference >= constants.advantage_difference and comp.importance == "high":
            if comp.document_a.status == "better":
                advantages_a.append(f"Stronger {comp.label}")
            elif comp.document_b.status == "better":
                advantages_b.append(f"Stronger {comp.label}")
        if not comp.document_a.passed and not comp.document_b.passed and comp.importance == "high":
            common.append(f"Both {noun.lower()}s need improvement in {comp.label}")

    for comp in sections:
        if comp.document_a.has_section and not comp.document_b.has_section:
            advantages_a.append(f"Includes {comp.section_name} section")
        elif comp.document_b.has_section and not comp.document_a.has_section:
            advantages_b.append(f"Includes {comp.section_name} section")
        if comp.difference >= constants.section_advantage_difference:
            if comp.document_a.status == "better":
                advantages_a.append(f"Better {comp.section_name} section")
            elif comp.document_b.status == "better":
                advantages_b.append(f"Better {comp.section_name} section")

    opportunities = []
    if score_a < constants.improvement_score:
        opportunities.append(f"{noun} 1 {constants.improvement_message}")
    if score_b < constants.improvement_score:
        opportunities.append(f"{noun} 2 {constants.improvement_message}")

    return KeyDifferences(
        document_a_advantages=advantages_a[: constants.advantage_limit],
        document_b_advantages=advantages_b[: constants.advantage_limit],
        common_weaknesses=common[: constants.weakness_limit],
        improvement_opportunities=opportunities[: constants.opportunity_limit],
    )


def _build_recommendations(
    catalog: BenchmarkCatalog,
    benchmarks: list[BenchmarkComparison],
    sections: list[SectionComparison],
) -> Recommendations:
    constants = catalog.comparison
    for_a: list[str] = []
    for_b: list[str] = []

    for comp in benchmarks:
        if comp.difference >= constants.advantage_difference:
            if comp.document_a.status == "worse":
                for_a.append(f"Improve {comp.label}")
            elif comp.document_b.status == "worse":
                for_b.append(f"Improve {comp.label}")

    for comp in sections:
        if not comp.document_a.has_section:
            for_a.append(f"Add {comp.section_name} section")
        if not comp.document_b.has_section:
            for_b.append(f"Add {comp.section_name} section")

    return Recommendations(
        for_document_a=for_a[: constants.recommendation_limit],
        for_document_b=for_b[: constants.recommendation_limit],
        general_advice=list(constants.general_advice),
    )


def _build_insights(catalog: BenchmarkCatalog, benchmarks: list[BenchmarkComparison]) -> DetailedInsights:
    constants = catalog.comparison
    limit = constants.insight_limit

    def areas(side: str) -> tuple[list[str], list[str], list[str]]:
        strongest, weakest, competitive = [], [], []
        for comp in benchmarks:
            mine: BenchmarkSide = getattr(comp, side)
            if mine.score >= constants.strong_score:
                strongest.append(comp.label)
            if mine.score <= constants.weak_score:
                weakest.append(comp.label)
            if mine.status == "better" and comp.difference >= constants.competitive_difference:
                competitive.append(comp.label)
        return strongest[:limit], weakest[:limit], competitive[:limit]

    strong_a, weak_a, edge_a = areas("document_a")
    strong_b, weak_b, edge_b = areas("document_b")
    return DetailedInsights(
        strongest_areas=SidePair(document_a=strong_a, document_b=strong_b),
        weakest_areas=SidePair(document_a=weak_a, document_b=weak_b),
        competitive_advantages=SidePair(document_a=edge_a, document_b=edge_b),
    )
