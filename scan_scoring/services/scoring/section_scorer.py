"""Section score: weighted mean of member benchmarks, then section rules."""

from collections.abc import Iterable, Mapping

from scan_scoring.models.schemas.benchmark import BenchmarkResult
from scan_scoring.models.schemas.catalog import GapRule, SectionDefinition, SectionRule, SynergyRule
from scan_scoring.services.scoring.numeric import clamp, round_half_up
from scan_scoring.services.scoring.results import require_mapping

NEUTRAL_SECTION_SCORE = 5
MIN_SECTION_SCORE = 0
MAX_SECTION_SCORE = 10


def _bounded(value: float) -> int:
    return int(clamp(round_half_up(value), MIN_SECTION_SCORE, MAX_SECTION_SCORE))


def rule_applies(rule: SectionRule, results: Mapping[str, BenchmarkResult]) -> bool:
    """A rule only fires when every benchmark it names has a result."""
    if isinstance(rule, SynergyRule):
        first, second = rule.benchmarks
        if first not in results or second not in results:
            return False
        return results[first].score >= rule.threshold and results[second].score >= rule.threshold
    if isinstance(rule, GapRule):
        if rule.benchmark not in results or rule.correlated not in results:
            return False
        return results[rule.benchmark].score < rule.below and results[rule.correlated].score >= rule.at_least
    return False


def heading_detected(name: str, detected_sections: Iterable[object]) -> bool:
    """Case- and whitespace-insensitive heading match; non-string entries never match."""
    wanted = name.strip().lower()
    return any(isinstance(s, str) and s.strip().lower() == wanted for s in detected_sections)


class SectionScorer:
    """Stateless; one instance is shared by the engine and the comparison."""

    def score(
        self,
        section: SectionDefinition,
        results: Mapping[str, BenchmarkResult],
        weights: Mapping[str, int],
    ) -> int:
        results = require_mapping(results)

        weighted_sum = 0.0
        total_weight = 0
        for benchmark in section.benchmarks:
            result = results.get(benchmark)
            if result is None:
                continue
            weight = weights.get(benchmark) or 1
            weighted_sum += result.score * weight
            total_weight += weight

        if total_weight == 0:
            return NEUTRAL_SECTION_SCORE

        score = _bounded(weighted_sum / total_weight)

        # Each rule is checked once, in declared order
        adjusted = float(score)
        for rule in section.rules:
            if rule_applies(rule, results):
                adjusted *= rule.factor
        return _bounded(adjusted)
