"""Overall 0-100 score from section scores.

The weighted section average is scaled to 0-100, then adjusted in a fixed
order, each step acting on the running value:

  consistency     spread of section scores (population stdev)
  critical        0.9 per critical benchmark absent or below 5
  excellence      three or more sections at 9+
  industry combo  first satisfied rule of each matching industry group

The result is rounded half-up and clamped.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from scan_scoring.models.schemas.benchmark import BenchmarkResult
from scan_scoring.models.schemas.breakdown import ScoreAdjustment, SectionScore
from scan_scoring.models.schemas.profile import ResolvedProfile
from scan_scoring.services.scoring.catalog import BenchmarkCatalog
from scan_scoring.services.scoring.numeric import clamp, population_stdev, round_half_up
from scan_scoring.services.scoring.results import require_mapping
from scan_scoring.services.scoring.role_weights import matching_groups

logger = logging.getLogger(__name__)

NEUTRAL_BASE = 50.0

LOW_SPREAD = 1.5
HIGH_SPREAD = 3.0
CONSISTENCY_BONUS = 1.05
INCONSISTENCY_PENALTY = 0.95

CRITICAL_MIN_SCORE = 5
CRITICAL_PENALTY = 0.9

EXCELLENT_SECTION_SCORE = 9
EXCELLENT_SECTIONS_NEEDED = 3
EXCELLENCE_BONUS = 1.1


@dataclass
class OverallEvaluation:
    score: int
    weighted_base: float
    adjustments: list[ScoreAdjustment] = field(default_factory=list)


def _as_score_map(section_scores: Mapping[str, float] | Iterable[SectionScore]) -> dict[str, float]:
    if isinstance(section_scores, Mapping):
        return dict(section_scores)
    return {entry.section: entry.score for entry in section_scores}


class OverallScorer:
    def __init__(self, catalog: BenchmarkCatalog) -> None:
        self._catalog = catalog

    def score(
        self,
        section_scores: Mapping[str, float] | Iterable[SectionScore],
        results: Mapping[str, BenchmarkResult],
        profile: ResolvedProfile | None = None,
    ) -> int:
        return self.evaluate(section_scores, results, profile).score

    def evaluate(
        self,
        section_scores: Mapping[str, float] | Iterable[SectionScore],
        results: Mapping[str, BenchmarkResult],
        profile: ResolvedProfile | None = None,
    ) -> OverallEvaluation:
        results = require_mapping(results)
        profile = profile or ResolvedProfile()
        scores = _as_score_map(section_scores)
        importance = self._catalog.importance_for(profile.bucket, profile.experience_level)

        contributing = [
            (scores[name], weight)
            for name, weight in importance.items()
            if name in scores and weight > 0
        ]
        total_importance = sum(weight for _, weight in contributing)
        if total_importance > 0:
            base = sum(score * weight for score, weight in contributing) / total_importance * 10
        else:
            base = NEUTRAL_BASE
        weighted_base = base
        values = [score for score, _ in contributing]
        adjustments: list[ScoreAdjustment] = []

        def apply(name: str, factor: float) -> None:
            nonlocal base
            base *= factor
            adjustments.append(ScoreAdjustment(name=name, factor=factor))

        if values:
            spread = population_stdev(values)
            if spread < LOW_SPREAD:
                apply("consistency_bonus", CONSISTENCY_BONUS)
            elif spread > HIGH_SPREAD:
                apply("inconsistency_penalty", INCONSISTENCY_PENALTY)

        failures = sum(
            1
            for benchmark in self._catalog.critical_benchmarks
            if benchmark not in results or results[benchmark].score < CRITICAL_MIN_SCORE
        )
        if failures:
            apply("critical_failures", CRITICAL_PENALTY ** failures)

        excellent = sum(1 for value in values if value >= EXCELLENT_SECTION_SCORE)
        if excellent >= EXCELLENT_SECTIONS_NEEDED:
            apply("excellence_bonus", EXCELLENCE_BONUS)

        combos = self._catalog.industry_combos
        for index in matching_groups(profile.industry, [c.keywords for c in combos]):
            combo = combos[index]
            for rule in combo.rules:
                if all(
                    name in scores and scores[name] >= minimum
                    for name, minimum in rule.sections.items()
                ):
                    apply(f"industry_combo:{combo.keywords[0]}", rule.factor)
                    break

        final = int(clamp(round_half_up(base), 0, 100))
        logger.debug(
            "Overall %s score %d (base %.2f, %d adjustments)",
            self._catalog.domain, final, weighted_base, len(adjustments),
        )
        return OverallEvaluation(score=final, weighted_base=weighted_base, adjustments=adjustments)
