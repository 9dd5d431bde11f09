"""Normalize raw benchmark judgments into BenchmarkResult objects.

The text-analysis stage is loosely typed: entries may be BenchmarkResult
instances, plain dicts, or profile judgments that only carry a match
percentage. Everything downstream sees `dict[str, BenchmarkResult]` with
scores inside the catalog's range.
"""

import logging
import math
from collections.abc import Mapping

from pydantic import ValidationError

from scan_scoring.errors import InvalidBenchmarkResults
from scan_scoring.models.schemas.benchmark import BenchmarkJudgment, BenchmarkResult
from scan_scoring.models.schemas.catalog import JudgmentConversion
from scan_scoring.services.scoring.catalog import BenchmarkCatalog
from scan_scoring.services.scoring.numeric import clamp, round_half_up

logger = logging.getLogger(__name__)


def require_mapping(results: object) -> Mapping:
    if not isinstance(results, Mapping):
        raise InvalidBenchmarkResults(
            f"Benchmark results must be a mapping of benchmark id to result, "
            f"got {type(results).__name__}"
        )
    return results


def judgment_score(passed: bool, match_percentage: float, conversion: JudgmentConversion) -> int:
    """Score a pass/fail judgment: base by outcome plus a share of the match bonus."""
    base = conversion.passed_base if passed else conversion.failed_base
    bonus = round_half_up(match_percentage / 100 * conversion.match_bonus)
    return int(clamp(base + bonus, 0, 10))


def _to_judgment(entry: object) -> BenchmarkJudgment | None:
    if isinstance(entry, BenchmarkJudgment):
        return entry
    if isinstance(entry, BenchmarkResult):
        return BenchmarkJudgment(passed=entry.passed, score=entry.score)
    if isinstance(entry, Mapping):
        try:
            return BenchmarkJudgment.model_validate(entry)
        except ValidationError:
            return None
    return None


def normalize_result(entry: object, catalog: BenchmarkCatalog) -> BenchmarkResult | None:
    """One entry -> BenchmarkResult, or None when it cannot be scored."""
    judgment = _to_judgment(entry)
    if judgment is None:
        return None

    score = judgment.score
    if score is None and catalog.judgment_conversion:
        # A missing or unusable percentage earns no bonus
        match = judgment.match_percentage
        if match is None or not math.isfinite(match):
            match = 0.0
        score = judgment_score(judgment.passed, match, catalog.judgment_conversion)
    if score is None or not math.isfinite(score):
        return None

    low, high = catalog.score_range
    return BenchmarkResult(passed=judgment.passed, score=clamp(score, low, high))


def normalize_results(raw: object, catalog: BenchmarkCatalog) -> dict[str, BenchmarkResult]:
    """Normalize a whole result set.

    Unknown benchmark ids are dropped; malformed entries are skipped with a
    warning so the rest of the document still scores. A result set that is
    not a mapping at all raises InvalidBenchmarkResults.
    """
    raw = require_mapping(raw)

    results: dict[str, BenchmarkResult] = {}
    for benchmark, entry in raw.items():
        if not catalog.has_benchmark(benchmark):
            logger.debug("Ignoring unknown %s benchmark: %s", catalog.domain, benchmark)
            continue
        result = normalize_result(entry, catalog)
        if result is None:
            logger.warning("Skipping malformed %s result for %s: %r", catalog.domain, benchmark, entry)
            continue
        results[benchmark] = result
    return results
