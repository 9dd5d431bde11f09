"""Tests for SectionScorer."""

import pytest

from scan_scoring.errors import InvalidBenchmarkResults
from scan_scoring.models.schemas.benchmark import BenchmarkResult
from scan_scoring.models.schemas.catalog import GapRule, SectionDefinition, SynergyRule
from scan_scoring.services.scoring.section_scorer import (
    NEUTRAL_SECTION_SCORE,
    SectionScorer,
    heading_detected,
)


def _results(**scores):
    return {name: BenchmarkResult(passed=score >= 5, score=score) for name, score in scores.items()}


PAIR = SectionDefinition(name="Pair", benchmarks=("a", "b"))


class TestSectionScorer:
    def setup_method(self):
        self.scorer = SectionScorer()

    def test_weighted_average_rounds_half_up(self):
        # (10*8 + 4*2) / 10 = 8.8
        assert self.scorer.score(PAIR, _results(a=10, b=4), {"a": 8, "b": 2}) == 9

    def test_exact_half_rounds_up(self):
        # (9 + 8) / 2 = 8.5; banker's rounding would give 8
        assert self.scorer.score(PAIR, _results(a=9, b=8), {"a": 1, "b": 1}) == 9

    def test_empty_results_are_neutral(self):
        assert self.scorer.score(PAIR, {}, {"a": 8, "b": 2}) == NEUTRAL_SECTION_SCORE == 5

    def test_non_member_results_are_ignored(self):
        assert self.scorer.score(PAIR, _results(z=10), {"a": 8}) == 5

    def test_missing_weight_defaults_to_one(self):
        # a weighted 3, b falls back to 1: (10*3 + 2*1) / 4 = 8
        assert self.scorer.score(PAIR, _results(a=10, b=2), {"a": 3}) == 8

    def test_zero_weight_treated_as_one(self):
        assert self.scorer.score(PAIR, _results(a=10, b=2), {"a": 0, "b": 0}) == 6

    def test_absent_benchmark_does_not_count(self):
        assert self.scorer.score(PAIR, _results(b=3), {"a": 8, "b": 2}) == 3

    def test_rejects_non_mapping(self):
        with pytest.raises(InvalidBenchmarkResults):
            self.scorer.score(PAIR, [("a", 1)], {})

    def test_range_with_extreme_inputs(self):
        assert self.scorer.score(PAIR, _results(a=50, b=50), {}) == 10
        assert self.scorer.score(PAIR, _results(a=-5, b=-5), {}) == 0


class TestSectionRules:
    def setup_method(self):
        self.scorer = SectionScorer()

    def test_synergy_bonus(self):
        section = SectionDefinition(
            name="S", benchmarks=("a", "b"),
            rules=(SynergyRule(benchmarks=("a", "b"), threshold=8, factor=1.1),),
        )
        # 8 * 1.1 = 8.8
        assert self.scorer.score(section, _results(a=8, b=8), {}) == 9

    def test_synergy_needs_both(self):
        section = SectionDefinition(
            name="S", benchmarks=("a", "b"),
            rules=(SynergyRule(benchmarks=("a", "b"), threshold=8, factor=1.1),),
        )
        assert self.scorer.score(section, _results(a=9, b=7), {}) == 8

    def test_synergy_is_clamped(self):
        section = SectionDefinition(
            name="S", benchmarks=("a", "b"),
            rules=(SynergyRule(benchmarks=("a", "b"), threshold=8, factor=1.1),),
        )
        assert self.scorer.score(section, _results(a=10, b=10), {}) == 10

    def test_gap_penalty(self):
        section = SectionDefinition(
            name="S", benchmarks=("a", "b"),
            rules=(GapRule(benchmark="a", below=5, correlated="b", at_least=7, factor=0.85),),
        )
        # (4 + 10) / 2 = 7; 7 * 0.85 = 5.95
        assert self.scorer.score(section, _results(a=4, b=10), {}) == 6

    def test_gap_ignores_absent_benchmark(self):
        section = SectionDefinition(
            name="S", benchmarks=("a", "b"),
            rules=(GapRule(benchmark="a", below=5, correlated="b", at_least=7, factor=0.85),),
        )
        assert self.scorer.score(section, _results(b=10), {}) == 10

    def test_rules_apply_in_order_once(self):
        section = SectionDefinition(
            name="S", benchmarks=("a", "b", "c"),
            rules=(
                SynergyRule(benchmarks=("a", "b"), threshold=8, factor=1.05),
                GapRule(benchmark="c", below=5, correlated="a", at_least=7, factor=0.9),
            ),
        )
        # (9 + 9 + 3) / 3 = 7; 7 * 1.05 * 0.9 = 6.615
        assert self.scorer.score(section, _results(a=9, b=9, c=3), {}) == 7

    def test_resume_work_experience_rules(self, resume_catalog):
        section = resume_catalog.section("Work Experience")
        weights = resume_catalog.base_weights["default"]
        strong = _results(
            quantifiedAchievements=9, actionVerbUsage=9, relevantExperience=9,
            chronologicalOrder=9, leadershipExamples=9, teamworkHighlighted=9,
            problemSolvingExamples=9,
        )
        # 9 * 1.1 = 9.9
        assert self.scorer.score(section, strong, weights) == 10


class TestHeadingDetected:
    @pytest.mark.parametrize("detected,expected", [
        (["Skills"], True),
        ([" SKILLS "], True),
        (["Work Experience"], False),
        (["Skill"], False),
        ([], False),
        ([None, 3, "skills"], True),
        ([None, 3], False),
    ])
    def test_match(self, detected, expected):
        assert heading_detected("Skills", detected) is expected
