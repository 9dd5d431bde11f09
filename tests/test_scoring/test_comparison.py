"""Tests for ComparisonEngine."""

import pytest

from scan_scoring.models.schemas.benchmark import BenchmarkResult
from scan_scoring.models.schemas.breakdown import ScoreBreakdown
from scan_scoring.models.schemas.comparison import ScoredDocument
from scan_scoring.models.schemas.profile import RoleProfile
from scan_scoring.services.scoring.comparison import ComparisonEngine
from scan_scoring.services.scoring.role_weights import RoleWeightResolver
from scan_scoring.services.scoring.section_scorer import SectionScorer


def _doc(overall=70, name="", detected=(), issues=None, **scores):
    return ScoredDocument(
        name=name,
        breakdown=ScoreBreakdown(overall_score=overall),
        benchmark_results={
            b: BenchmarkResult(passed=s >= 5, score=s) for b, s in scores.items()
        },
        detected_sections=list(detected),
        section_issues=issues or {},
    )


def _benchmark(result, name):
    return next(c for c in result.benchmark_comparison if c.benchmark == name)


def _section(result, name):
    return next(c for c in result.section_comparison if c.section_name == name)


class TestComparisonEngine:
    @pytest.fixture(autouse=True)
    def _engine(self, resume_catalog):
        self.catalog = resume_catalog
        self.engine = ComparisonEngine(resume_catalog, RoleWeightResolver(resume_catalog), SectionScorer())

    # -- winner ---------------------------------------------------------------

    def test_difference_of_two_is_not_a_tie(self):
        result = self.engine.compare(_doc(81, name="alice.pdf"), _doc(79, name="bob.pdf"))
        assert result.winner.side == "document_a"
        assert result.winner.label == "alice.pdf"
        assert result.winner.score_difference == 2

    def test_winner_is_symmetric(self):
        a, b = _doc(81), _doc(79)
        forward = self.engine.compare(a, b)
        backward = self.engine.compare(b, a)
        assert backward.winner.side == "document_b"
        assert backward.winner.score_difference == forward.winner.score_difference

    def test_tie_is_order_independent(self):
        a, b = _doc(80), _doc(79)
        forward = self.engine.compare(a, b)
        backward = self.engine.compare(b, a)
        assert forward.winner == backward.winner
        assert forward.winner.side == "tie"
        assert forward.winner.label == "Both resumes are equally strong"

    def test_default_names_and_ranks(self):
        result = self.engine.compare(_doc(60), _doc(75))
        assert result.scores.document_a.name == "Resume 1"
        assert result.scores.document_b.name == "Resume 2"
        assert (result.scores.document_a.rank, result.scores.document_b.rank) == (2, 1)
        assert result.winner.label == "Resume 2"

    def test_equal_scores_share_rank(self):
        result = self.engine.compare(_doc(70), _doc(70))
        assert result.scores.document_a.rank == result.scores.document_b.rank == 1

    # -- per benchmark --------------------------------------------------------

    def test_benchmark_dead_zone(self):
        result = self.engine.compare(_doc(roleClarity=7), _doc(roleClarity=8))
        comp = _benchmark(result, "roleClarity")
        assert comp.document_a.status == comp.document_b.status == "equal"
        assert comp.difference == 1

    def test_benchmark_status_outside_dead_zone(self):
        result = self.engine.compare(_doc(roleClarity=7), _doc(roleClarity=8.5))
        comp = _benchmark(result, "roleClarity")
        assert comp.document_a.status == "worse"
        assert comp.document_b.status == "better"

    def test_missing_benchmark_compares_as_zero(self):
        result = self.engine.compare(_doc(skillsRelevance=9), _doc())
        comp = _benchmark(result, "skillsRelevance")
        assert comp.document_b.score == 0
        assert comp.document_b.passed is False
        assert comp.difference == 9

    def test_only_judged_benchmarks_in_catalog_order(self):
        result = self.engine.compare(_doc(noTables=5, roleClarity=5), _doc(contactInfoComplete=5))
        assert [c.benchmark for c in result.benchmark_comparison] == [
            b for b in self.catalog.benchmark_ids if b in {"noTables", "roleClarity", "contactInfoComplete"}
        ]

    def test_importance_tiers_follow_weights(self):
        result = self.engine.compare(
            _doc(contactInfoComplete=5, actionVerbUsage=5, buzzwordPresence=5), _doc()
        )
        assert _benchmark(result, "contactInfoComplete").importance == "high"  # 9
        assert _benchmark(result, "actionVerbUsage").importance == "medium"  # 6
        assert _benchmark(result, "buzzwordPresence").importance == "low"  # 2

    def test_importance_uses_shared_preferences(self):
        a, b = _doc(skillsRelevance=9), _doc(skillsRelevance=5)
        plain = self.engine.compare(a, b)
        targeted = self.engine.compare(a, b, RoleProfile(job_title="Software Engineer"))
        assert _benchmark(plain, "skillsRelevance").importance == "medium"  # 7
        assert _benchmark(targeted, "skillsRelevance").importance == "high"  # 10

    # -- key differences ------------------------------------------------------

    def test_high_importance_advantage(self):
        result = self.engine.compare(
            _doc(relevantExperience=9, quantifiedAchievements=9),
            _doc(relevantExperience=6, quantifiedAchievements=6),
        )
        advantages = result.key_differences.document_a_advantages
        assert "Stronger relevant experience" in advantages
        # weight 7 is not high importance
        assert "Stronger quantified achievements" not in advantages

    def test_common_weakness(self):
        result = self.engine.compare(_doc(roleClarity=3), _doc(roleClarity=4))
        assert "Both resumes need improvement in role clarity" in result.key_differences.common_weaknesses

    def test_structural_and_section_advantages(self):
        result = self.engine.compare(
            _doc(detected=["Skills"], skillsRelevance=9, industryKeywords=9),
            _doc(skillsRelevance=5, industryKeywords=5),
        )
        advantages = result.key_differences.document_a_advantages
        assert "Includes Skills section" in advantages
        assert "Better Skills section" in advantages

    def test_improvement_opportunities_below_80(self):
        result = self.engine.compare(_doc(79), _doc(80))
        assert result.key_differences.improvement_opportunities == [
            "Resume 1 could benefit from overall content enhancement"
        ]

    def test_advantage_list_is_truncated(self):
        strong = {b: 10 for b in self.catalog.benchmark_ids}
        weak = {b: 1 for b in self.catalog.benchmark_ids}
        result = self.engine.compare(
            _doc(detected=self.catalog.section_names, **strong), _doc(**weak)
        )
        assert len(result.key_differences.document_a_advantages) == 5
        assert result.key_differences.document_b_advantages == []

    # -- sections -------------------------------------------------------------

    def test_section_key_differences(self):
        result = self.engine.compare(
            _doc(detected=["Education"], issues={"Education": 1}),
            _doc(issues={"Education": 3}),
        )
        comp = _section(result, "Education")
        assert comp.document_a.has_section is True
        assert comp.document_b.has_section is False
        assert comp.key_differences == [
            "Resume 1 includes Education section, Resume 2 missing",
            "Resume 1 has fewer issues in Education",
        ]

    def test_heading_match_is_case_insensitive(self):
        result = self.engine.compare(_doc(detected=["work experience"]), _doc())
        assert _section(result, "Work Experience").document_a.has_section is True

    def test_document_wide_group_always_present(self):
        result = self.engine.compare(_doc(), _doc())
        comp = _section(result, "Formatting & Readability")
        assert comp.document_a.has_section and comp.document_b.has_section
        assert "Add Formatting & Readability section" not in result.recommendations.for_document_a

    def test_section_scores_recomputed(self):
        result = self.engine.compare(_doc(educationRelevance=9), _doc())
        comp = _section(result, "Education")
        assert comp.document_a.score == 9
        assert comp.document_b.score == 5  # neutral
        assert comp.document_a.status == "better"

    # -- recommendations and insights -----------------------------------------

    def test_recommendations(self):
        result = self.engine.compare(
            _doc(detected=self.catalog.section_names, roleClarity=9),
            _doc(detected=["Skills"], roleClarity=5),
        )
        assert result.recommendations.for_document_a == []
        assert result.recommendations.for_document_b[0] == "Improve role clarity"
        assert "Add Education section" in result.recommendations.for_document_b
        assert len(result.recommendations.for_document_b) <= 5

    def test_general_advice_verbatim(self):
        result = self.engine.compare(_doc(), _doc())
        assert result.recommendations.general_advice == [
            "Focus on quantified achievements to demonstrate impact",
            "Ensure ATS compliance with proper formatting",
            "Tailor content to target role and industry",
        ]

    def test_detailed_insights(self):
        result = self.engine.compare(
            _doc(roleClarity=9, noTables=2, grammarCheck=9),
            _doc(roleClarity=5, noTables=6, grammarCheck=8),
        )
        insights = result.detailed_insights
        assert insights.strongest_areas.document_a == ["role clarity", "grammar check"]
        assert insights.weakest_areas.document_a == ["no tables"]
        assert insights.competitive_advantages.document_a == ["role clarity"]
        assert insights.competitive_advantages.document_b == ["no tables"]

    def test_swapping_inputs_swaps_sides(self):
        a = _doc(75, detected=["Skills"], roleClarity=9, skillsRelevance=4)
        b = _doc(60, roleClarity=5, skillsRelevance=8)
        forward = self.engine.compare(a, b)
        backward = self.engine.compare(b, a)
        for f, r in zip(forward.benchmark_comparison, backward.benchmark_comparison):
            assert f.document_a == r.document_b
            assert f.document_b == r.document_a
        assert forward.recommendations.for_document_a == backward.recommendations.for_document_b
        assert (
            forward.detailed_insights.strongest_areas.document_a
            == backward.detailed_insights.strongest_areas.document_b
        )
