"""Score aggregation, grades, benchmarks and improvement estimates.

Everything here is a pure function of its arguments. Category weights and the
grade ladder come from a ``ScoringConfig`` so callers can substitute their own.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from .config import DEFAULT_SCORING, ScoringConfig
from .models import (
    AuditCheckResult,
    AuditResults,
    Category,
    CategoryResult,
    CheckStatus,
    OverallStatus,
    Severity,
)

PASSING_SCORE = 70
PRIORITY_THRESHOLD = 80
CRITICAL_THRESHOLD = 50
BENCHMARK_BAND = 5
PERCENTILE_FLOOR = 30


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (round() would go to even)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ScoreInterpretation:
    score: int
    grade: str
    label: str
    color: str
    description: str


@dataclass(frozen=True)
class CategoryScore(ScoreInterpretation):
    category: Category
    category_name: str
    passed: int
    total: int
    improvement_potential: int


@dataclass(frozen=True)
class BenchmarkComparison:
    industry_average: int
    vs_industry: str  # "above" | "below" | "average"
    percentile: int
    top_performers: int


@dataclass(frozen=True)
class ScoreBreakdown:
    overall: ScoreInterpretation
    categories: list[CategoryScore]
    benchmarks: BenchmarkComparison
    priorities: list[str]


@dataclass(frozen=True)
class Fix:
    check_id: str
    name: str
    impact: int


@dataclass(frozen=True)
class ImprovementPotential:
    max_score: int
    improvement: int
    top_fixes: list[Fix] = field(default_factory=list)


# Aggregation

def calculate_category_score(results: Iterable[AuditCheckResult]) -> int:
    """Weighted pass rate over non-skipped results; 100 when nothing applies."""
    applicable = [r for r in results if not r.skipped]
    total_weight = sum(r.weight for r in applicable)
    if total_weight <= 0:
        return 100
    passed_weight = sum(r.weight for r in applicable if r.passed)
    return round_half_up(passed_weight / total_weight * 100)


def build_category_result(category: Category, results: Iterable[AuditCheckResult]) -> CategoryResult:
    mine = tuple(r for r in results if r.category is category)
    return CategoryResult(
        category=category,
        results=mine,
        score=calculate_category_score(mine),
        passed=sum(1 for r in mine if r.passed),
        failed=sum(1 for r in mine if not r.passed and r.status is CheckStatus.FAILED),
        warnings=sum(1 for r in mine if r.status is CheckStatus.WARNING),
        skipped=sum(1 for r in mine if r.skipped),
    )


def calculate_overall_score(
    categories: Mapping[Category, CategoryResult],
    config: ScoringConfig = DEFAULT_SCORING,
) -> int:
    """Weighted mean of category scores, renormalised over categories that ran.

    A category takes part only if at least one of its checks was not skipped.
    With no such category the score is 100.
    """
    total_weight = 0.0
    weighted = 0.0
    for category, weight in config.category_weights.items():
        result = categories.get(category)
        if result is None or not result.applicable:
            continue
        total_weight += weight
        weighted += result.score * weight

    if total_weight <= 0:
        return 100
    return round_half_up(weighted / total_weight)


def critical_failures(checks: Iterable[AuditCheckResult]) -> int:
    return sum(1 for c in checks if c.severity is Severity.CRITICAL and c.is_issue)


def overall_status(checks: Iterable[AuditCheckResult], score: int) -> OverallStatus:
    """Any failing critical check fails the run regardless of score."""
    if critical_failures(checks) > 0:
        return OverallStatus.FAIL
    return OverallStatus.PASS if score >= PASSING_SCORE else OverallStatus.WARNING


# Interpretation

def grade_for(score: float, config: ScoringConfig = DEFAULT_SCORING) -> ScoreInterpretation:
    band = config.band_for(score)
    return ScoreInterpretation(
        score=score,
        grade=band.grade,
        label=band.label,
        color=band.color,
        description=band.description,
    )


def category_score(
    category_result: CategoryResult, config: ScoringConfig = DEFAULT_SCORING
) -> CategoryScore:
    interpretation = grade_for(category_result.score, config)
    return CategoryScore(
        score=interpretation.score,
        grade=interpretation.grade,
        label=interpretation.label,
        color=interpretation.color,
        description=interpretation.description,
        category=category_result.category,
        category_name=config.category_name(category_result.category),
        passed=category_result.passed,
        total=len(category_result.applicable),
        improvement_potential=100 - category_result.score,
    )


def benchmark_compare(
    score: float, industry: Optional[str] = None, config: ScoringConfig = DEFAULT_SCORING
) -> BenchmarkComparison:
    """Place a score against the industry average and estimate a percentile.

    Percentile maps [30, top performers] linearly onto [0, 100].
    """
    benchmark = config.benchmark_for(industry)

    vs_industry = "average"
    if score > benchmark.average + BENCHMARK_BAND:
        vs_industry = "above"
    elif score < benchmark.average - BENCHMARK_BAND:
        vs_industry = "below"

    span = benchmark.top_performers - PERCENTILE_FLOOR
    if span <= 0:
        position = 100.0 if score >= benchmark.top_performers else 0.0
    else:
        position = max(0.0, min(100.0, (score - PERCENTILE_FLOOR) / span * 100))

    return BenchmarkComparison(
        industry_average=benchmark.average,
        vs_industry=vs_industry,
        percentile=round_half_up(position),
        top_performers=benchmark.top_performers,
    )


def score_breakdown(
    results: AuditResults, industry: Optional[str] = None, config: ScoringConfig = DEFAULT_SCORING
) -> ScoreBreakdown:
    categories = sorted(
        (category_score(result, config) for result in results.categories.values()),
        key=lambda c: c.score,
    )

    priorities = []
    for cat in categories:
        if cat.total == 0 or cat.score >= PRIORITY_THRESHOLD:
            continue
        if cat.score < CRITICAL_THRESHOLD:
            priorities.append(f"Critical: Improve {cat.category_name} (currently {cat.grade})")
        else:
            target = grade_for(min(100, cat.score + 20), config).grade
            priorities.append(f"Improve {cat.category_name} from {cat.grade} to {target}")
        if len(priorities) == 3:
            break

    return ScoreBreakdown(
        overall=grade_for(results.score, config),
        categories=categories,
        benchmarks=benchmark_compare(results.score, industry, config),
        priorities=priorities,
    )


def fix_impact(check: AuditCheckResult) -> int:
    """Estimated score gain from fixing one failing check."""
    impact = float(check.weight)
    if check.severity is Severity.CRITICAL:
        impact *= 1.5
    elif check.severity is Severity.INFO:
        impact *= 0.5
    return round_half_up(impact)


def improvement_potential(results: AuditResults) -> ImprovementPotential:
    """How far the score could rise if every applicable failing check were fixed."""
    fixes = [
        Fix(check_id=c.check_id, name=c.check_name, impact=fix_impact(c))
        for c in results.checks
        if c.is_issue
    ]
    fixes.sort(key=lambda f: f.impact, reverse=True)

    max_score = min(100, results.score + sum(f.impact for f in fixes))
    return ImprovementPotential(
        max_score=max_score,
        improvement=max_score - results.score,
        top_fixes=fixes[:5],
    )


# Display helpers

def score_color(score: float) -> str:
    if score >= 90:
        return "#10B981"
    if score >= 70:
        return "#22C55E"
    if score >= 50:
        return "#EAB308"
    if score >= 30:
        return "#F97316"
    return "#EF4444"


def format_score(score: float) -> str:
    return f"{round_half_up(score)}%"


def calculate_weighted_score(scores: Iterable[tuple[float, float]]) -> int:
    """Weighted mean of ``(score, weight)`` pairs; 0 when all weights are 0."""
    pairs = list(scores)
    total_weight = sum(weight for _, weight in pairs)
    if total_weight == 0:
        return 0
    return round_half_up(sum(score * weight for score, weight in pairs) / total_weight)


def normalize_score(value: float, minimum: float, maximum: float) -> int:
    if maximum == minimum:
        return 100
    return round_half_up(max(0.0, min(100.0, (value - minimum) / (maximum - minimum) * 100)))
