"""ScoringEngine: one domain's catalog wired to the four scoring stages.

    results -> SectionScorer (per section) -> OverallScorer -> ScoreBreakdown
    two ScoredDocuments -> ComparisonEngine -> ComparisonResult

The engine loads its catalog once and never mutates it afterwards, so a single
instance serves concurrent requests.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from scan_scoring.models.schemas.benchmark import BenchmarkResult
from scan_scoring.models.schemas.breakdown import ScoreBreakdown, SectionScore
from scan_scoring.models.schemas.comparison import ComparisonResult, ScoredDocument
from scan_scoring.models.schemas.profile import ResolvedProfile, RoleProfile
from scan_scoring.services.scoring.catalog import BenchmarkCatalog, load_catalog
from scan_scoring.services.scoring.comparison import ComparisonEngine
from scan_scoring.services.scoring.overall_scorer import OverallScorer
from scan_scoring.services.scoring.results import normalize_results
from scan_scoring.services.scoring.role_weights import RoleWeightResolver
from scan_scoring.services.scoring.section_scorer import SectionScorer, heading_detected

logger = logging.getLogger(__name__)

HIGH_PRIORITY_IMPORTANCE = 0.2
LOW_PRIORITY_IMPORTANCE = 0.08


def _priority(importance: float) -> str:
    if importance >= HIGH_PRIORITY_IMPORTANCE:
        return "high"
    if importance <= LOW_PRIORITY_IMPORTANCE:
        return "low"
    return "medium"


class ScoringEngine:
    """Scoring for a single document domain (`resume`, `profile`, ...)."""

    def __init__(self, domain: str, catalog_dir: str | Path | None = None) -> None:
        self.domain = domain
        self._catalog_dir = catalog_dir
        self._loaded = False
        self.catalog: BenchmarkCatalog | None = None

    def load(self) -> None:
        self.catalog = load_catalog(self.domain, self._catalog_dir)
        self.resolver = RoleWeightResolver(self.catalog)
        self.section_scorer = SectionScorer()
        self.overall_scorer = OverallScorer(self.catalog)
        self.comparison_engine = ComparisonEngine(self.catalog, self.resolver, self.section_scorer)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        if not self._loaded:
            logger.info("Loading scoring engine: %s", self.domain)
            self.load()
            self._loaded = True

    @property
    def version(self) -> str:
        self.ensure_loaded()
        return self.catalog.version

    # -- Role weights --------------------------------------------------------

    def resolve_profile(
        self,
        job_title: str | None = None,
        experience_level: str | None = None,
        industry: str | None = None,
    ) -> ResolvedProfile:
        self.ensure_loaded()
        return self.resolver.resolve_profile(job_title, experience_level, industry)

    def resolve_weights(
        self,
        job_title: str | None = None,
        experience_level: str | None = None,
        industry: str | None = None,
    ) -> Mapping[str, int]:
        self.ensure_loaded()
        return self.resolver.resolve(job_title, experience_level, industry)

    # -- Single document -----------------------------------------------------

    def score_document(
        self,
        benchmark_results: object,
        detected_sections: Iterable[str] = (),
        job_title: str | None = None,
        experience_level: str | None = None,
        industry: str | None = None,
    ) -> ScoreBreakdown:
        """Score one document's benchmark judgments against a target profile.

        Args:
            benchmark_results: mapping of benchmark id to a judgment (dict,
                BenchmarkResult or BenchmarkJudgment). Unknown ids are ignored.
            detected_sections: section headings found in the document.
            job_title, experience_level, industry: optional targeting.

        Raises:
            InvalidBenchmarkResults: `benchmark_results` is not a mapping.
        """
        self.ensure_loaded()
        results = normalize_results(benchmark_results, self.catalog)
        profile = self.resolver.resolve_profile(job_title, experience_level, industry)
        return self._breakdown(results, detected_sections, profile)

    def _breakdown(
        self,
        results: Mapping[str, BenchmarkResult],
        detected_sections: Iterable[str],
        profile: ResolvedProfile,
    ) -> ScoreBreakdown:
        weights = self.resolver.weights_for(profile)
        importance = self.catalog.importance_for(profile.bucket, profile.experience_level)
        detected_sections = list(detected_sections or ())

        section_scores = []
        for section in self.catalog.sections:
            weight = importance.get(section.name, 0.0)
            section_scores.append(
                SectionScore(
                    section=section.name,
                    score=self.section_scorer.score(section, results, weights),
                    importance=weight,
                    priority=_priority(weight),
                    detected=heading_detected(section.name, detected_sections),
                    benchmarks={b: results[b] for b in section.benchmarks if b in results},
                )
            )

        evaluation = self.overall_scorer.evaluate(section_scores, results, profile)
        return ScoreBreakdown(
            domain=self.domain,
            catalog_version=self.catalog.version,
            profile=profile,
            section_scores=section_scores,
            overall_score=evaluation.score,
            improvement_potential=max(0, 100 - evaluation.score),
            weighted_base=evaluation.weighted_base,
            adjustments=evaluation.adjustments,
        )

    def scored_document(
        self,
        benchmark_results: object,
        name: str = "",
        detected_sections: Iterable[str] = (),
        section_issues: Mapping[str, int] | None = None,
        preferences: RoleProfile | None = None,
    ) -> ScoredDocument:
        """Score a document and package it for `compare`."""
        self.ensure_loaded()
        results = normalize_results(benchmark_results, self.catalog)
        profile = self.resolver.profile_from(preferences)
        detected_sections = list(detected_sections or ())
        return ScoredDocument(
            name=name,
            breakdown=self._breakdown(results, detected_sections, profile),
            benchmark_results=results,
            detected_sections=detected_sections,
            section_issues=dict(section_issues or {}),
        )

    # -- Comparison ----------------------------------------------------------

    def compare(
        self,
        doc_a: ScoredDocument,
        doc_b: ScoredDocument,
        preferences: RoleProfile | ResolvedProfile | None = None,
    ) -> ComparisonResult:
        self.ensure_loaded()
        return self.comparison_engine.compare(doc_a, doc_b, preferences)
