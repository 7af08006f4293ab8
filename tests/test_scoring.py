"""Tests for score aggregation, grading, benchmarks and scoring configuration."""

import pytest

from seo_audit.config import (
    DEFAULT_CATEGORY_WEIGHTS,
    DEFAULT_SCORING,
    Benchmark,
    GradeBand,
    RunnerSettings,
    ScoringConfig,
)
from seo_audit.models import Category, CheckStatus, Severity
from seo_audit.runner import AuditRunner
from seo_audit.scoring import (
    benchmark_compare,
    build_category_result,
    calculate_category_score,
    calculate_overall_score,
    calculate_weighted_score,
    category_score,
    fix_impact,
    format_score,
    grade_for,
    improvement_potential,
    normalize_score,
    round_half_up,
    score_breakdown,
    score_color,
)

from conftest import audit_result


def categories_of(checks):
    return {category: build_category_result(category, checks) for category in Category}


def results_of(checks, scoring=DEFAULT_SCORING):
    runner = AuditRunner(registry=(), scoring=scoring, settings=RunnerSettings())
    return runner.aggregate("https://a.example", checks, 0.0)


class TestCategoryScore:

    def test_weighted_pass_rate(self):
        checks = [
            audit_result("a", passed=True, weight=10),
            audit_result("b", passed=False, weight=5),
        ]
        assert calculate_category_score(checks) == 67

    def test_skipped_checks_ignored(self):
        checks = [
            audit_result("a", passed=True, weight=10),
            audit_result("b", passed=False, weight=5),
            audit_result("c", passed=True, status=CheckStatus.SKIPPED, weight=10),
        ]
        assert calculate_category_score(checks) == 67

    def test_nothing_applicable_scores_100(self):
        assert calculate_category_score([]) == 100
        skipped_only = [audit_result("a", passed=True, status=CheckStatus.SKIPPED)]
        assert calculate_category_score(skipped_only) == 100

    def test_warning_and_info_count_as_not_passed(self):
        checks = [
            audit_result("a", passed=True, weight=5),
            audit_result("b", passed=False, status=CheckStatus.WARNING, weight=3),
            audit_result("c", passed=False, status=CheckStatus.INFO, weight=2),
        ]
        assert calculate_category_score(checks) == 50

    def test_category_counts(self):
        checks = [
            audit_result("a", passed=True),
            audit_result("b", passed=False),
            audit_result("c", passed=False, status=CheckStatus.WARNING),
            audit_result("d", passed=True, status=CheckStatus.SKIPPED),
            audit_result("e", passed=True, category=Category.CONTENT),
        ]
        result = build_category_result(Category.TECHNICAL, checks)
        assert (result.passed, result.failed, result.warnings, result.skipped) == (2, 1, 1, 1)
        assert len(result.applicable) == 3


class TestOverallScore:

    def test_weights_renormalised_over_categories_that_ran(self):
        checks = [
            audit_result("t", passed=True, category=Category.TECHNICAL),
            audit_result("c1", passed=True, category=Category.CONTENT),
            audit_result("c2", passed=False, category=Category.CONTENT),
        ]
        categories = categories_of(checks)
        assert categories[Category.TECHNICAL].score == 100
        assert categories[Category.CONTENT].score == 50
        assert calculate_overall_score(categories) == 78

    def test_no_applicable_category_scores_100(self):
        assert calculate_overall_score(categories_of([])) == 100

    def test_alternate_weights(self):
        weights = {category: 0.0 for category in Category}
        weights[Category.CONTENT] = 1.0
        config = ScoringConfig(category_weights=weights)

        checks = [
            audit_result("t", passed=True, category=Category.TECHNICAL),
            audit_result("c1", passed=True, category=Category.CONTENT),
            audit_result("c2", passed=False, category=Category.CONTENT),
        ]
        assert calculate_overall_score(categories_of(checks), config) == 50

    def test_round_half_up(self):
        assert round_half_up(66.5) == 67
        assert round_half_up(77.78) == 78
        assert round_half_up(0.49) == 0


class TestGrades:

    @pytest.mark.parametrize("score,grade", [
        (100, "A+"), (95, "A+"), (94, "A"), (85, "A"), (84, "B"), (70, "B"),
        (69, "C"), (50, "C"), (49, "D"), (30, "D"), (29, "F"), (0, "F"),
    ])
    def test_grade_boundaries(self, score, grade):
        assert grade_for(score).grade == grade

    def test_interpretation_fields(self):
        interpretation = grade_for(72)
        assert interpretation.label == "Good"
        assert interpretation.color == "#84CC16"
        assert interpretation.score == 72

    def test_category_score(self):
        result = build_category_result(Category.SCHEMA, [
            audit_result("a", passed=True, category=Category.SCHEMA, weight=6),
            audit_result("b", passed=False, category=Category.SCHEMA, weight=4),
        ])
        scored = category_score(result)
        assert scored.category_name == "Structured Data"
        assert scored.score == 60
        assert scored.grade == "C"
        assert scored.total == 2
        assert scored.improvement_potential == 40


class TestBenchmarks:

    def test_within_band_is_average(self):
        comparison = benchmark_compare(70, "technology")
        assert comparison.vs_industry == "average"
        assert comparison.industry_average == 70
        assert comparison.top_performers == 92
        assert comparison.percentile == 65

    def test_above_and_below(self):
        assert benchmark_compare(90).vs_industry == "above"
        assert benchmark_compare(20, "legal").vs_industry == "below"

    def test_percentile_clamped(self):
        assert benchmark_compare(100).percentile == 100
        assert benchmark_compare(10).percentile == 0

    def test_unknown_industry_uses_default(self):
        assert benchmark_compare(60, "aerospace") == benchmark_compare(60)


class TestBreakdown:

    def test_priorities_worst_first(self):
        checks = [
            audit_result("t1", passed=True, category=Category.TECHNICAL, weight=4),
            audit_result("t2", passed=False, category=Category.TECHNICAL, weight=6),
            audit_result("c1", passed=True, category=Category.CONTENT, weight=6),
            audit_result("c2", passed=False, category=Category.CONTENT, weight=4),
            audit_result("s1", passed=True, category=Category.SCHEMA),
        ]
        breakdown = score_breakdown(results_of(checks))

        assert breakdown.priorities == [
            "Critical: Improve Technical SEO (currently D)",
            "Improve Content Quality from C to B",
        ]
        assert [c.score for c in breakdown.categories] == sorted(c.score for c in breakdown.categories)

    def test_at_most_three_priorities(self):
        checks = []
        for category in Category:
            checks.append(audit_result(f"{category.value}-ok", passed=True, category=category, weight=1))
            checks.append(audit_result(f"{category.value}-bad", passed=False, category=category, weight=9))
        assert len(score_breakdown(results_of(checks)).priorities) == 3


class TestImprovementPotential:

    def test_fix_impact_by_severity(self):
        assert fix_impact(audit_result("a", passed=False, weight=10, severity=Severity.CRITICAL)) == 15
        assert fix_impact(audit_result("b", passed=False, weight=6, severity=Severity.WARNING)) == 6
        assert fix_impact(audit_result("c", passed=False, weight=5, severity=Severity.INFO)) == 3

    def test_potential_sums_issue_impacts(self):
        checks = [
            audit_result("ok", passed=True, weight=10),
            audit_result("crit", passed=False, weight=4, severity=Severity.CRITICAL),
            audit_result("warn", passed=False, weight=2, severity=Severity.WARNING),
            audit_result("skip", passed=True, status=CheckStatus.SKIPPED, weight=9),
        ]
        results = results_of(checks)
        potential = improvement_potential(results)

        assert results.score == 63
        assert [f.check_id for f in potential.top_fixes] == ["crit", "warn"]
        assert potential.max_score == 63 + 6 + 2
        assert potential.improvement == 8

    def test_potential_capped_at_100(self):
        checks = [audit_result(f"ok-{i}", passed=True, weight=10) for i in range(10)]
        checks.append(audit_result("crit", passed=False, weight=10, severity=Severity.CRITICAL))
        results = results_of(checks)
        potential = improvement_potential(results)
        assert results.score == 91
        assert potential.max_score == 100
        assert potential.improvement == 9


class TestScoringConfig:

    def test_weights_must_sum_to_one(self):
        weights = dict(DEFAULT_CATEGORY_WEIGHTS)
        weights[Category.TECHNICAL] = 0.5
        with pytest.raises(ValueError, match="sum to 1.0"):
            ScoringConfig(category_weights=weights)

    def test_every_category_needs_a_weight(self):
        weights = dict(DEFAULT_CATEGORY_WEIGHTS)
        del weights[Category.LOCAL]
        with pytest.raises(ValueError, match="local"):
            ScoringConfig(category_weights=weights)

    def test_negative_weight_rejected(self):
        weights = {category: 0.25 for category in Category}
        weights[Category.LOCAL] = -0.25
        with pytest.raises(ValueError, match="non-negative"):
            ScoringConfig(category_weights=weights)

    def test_default_benchmark_required(self):
        with pytest.raises(ValueError, match="default"):
            ScoringConfig(benchmarks={"legal": Benchmark(58, 85)})

    def test_bands_sorted_highest_first(self):
        config = ScoringConfig(grade_bands=(
            GradeBand(0, "Fail", "Fail", "#000", ""),
            GradeBand(50, "Pass", "Pass", "#fff", ""),
        ))
        assert grade_for(49, config).grade == "Fail"
        assert grade_for(50, config).grade == "Pass"


class TestDisplayHelpers:

    def test_score_color(self):
        assert score_color(95) == "#10B981"
        assert score_color(70) == "#22C55E"
        assert score_color(10) == "#EF4444"

    def test_format_score(self):
        assert format_score(66.6) == "67%"

    def test_weighted_score(self):
        assert calculate_weighted_score([(100, 1), (50, 1)]) == 75
        assert calculate_weighted_score([]) == 0

    def test_normalize_score(self):
        assert normalize_score(5, 0, 10) == 50
        assert normalize_score(20, 0, 10) == 100
        assert normalize_score(5, 5, 5) == 100
