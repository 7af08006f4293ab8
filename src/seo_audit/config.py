"""Scoring tables and runner settings."""

import math
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .models import Category


@dataclass(frozen=True)
class GradeBand:
    """One rung of the grade ladder. ``min_score`` is inclusive."""
    min_score: int
    grade: str
    label: str
    color: str
    description: str


@dataclass(frozen=True)
class Benchmark:
    average: int
    top_performers: int


DEFAULT_CATEGORY_WEIGHTS: dict[Category, float] = {
    Category.TECHNICAL: 0.25,
    Category.CONTENT: 0.20,
    Category.LOCAL: 0.15,
    Category.SCHEMA: 0.15,
    Category.EEAT: 0.15,
    Category.AI_SEARCH: 0.10,
}

DEFAULT_GRADE_BANDS: tuple[GradeBand, ...] = (
    GradeBand(95, "A+", "Excellent", "#10B981", "Outstanding SEO implementation"),
    GradeBand(85, "A", "Great", "#22C55E", "Strong SEO with minor improvements possible"),
    GradeBand(70, "B", "Good", "#84CC16", "Solid foundation with room for improvement"),
    GradeBand(50, "C", "Fair", "#EAB308", "Basic SEO in place, significant improvements needed"),
    GradeBand(30, "D", "Poor", "#F97316", "Major SEO issues affecting visibility"),
    GradeBand(0, "F", "Critical", "#EF4444", "Critical SEO problems requiring immediate attention"),
)

DEFAULT_BENCHMARKS: dict[str, Benchmark] = {
    "healthcare": Benchmark(62, 88),
    "legal": Benchmark(58, 85),
    "ecommerce": Benchmark(65, 90),
    "financial": Benchmark(60, 87),
    "technology": Benchmark(70, 92),
    "real_estate": Benchmark(55, 82),
    "default": Benchmark(60, 85),
}

CATEGORY_NAMES: dict[Category, str] = {
    Category.TECHNICAL: "Technical SEO",
    Category.CONTENT: "Content Quality",
    Category.LOCAL: "Local SEO",
    Category.SCHEMA: "Structured Data",
    Category.EEAT: "E-E-A-T Signals",
    Category.AI_SEARCH: "AI Search",
}


@dataclass(frozen=True)
class ScoringConfig:
    """Everything the scorer needs besides the results themselves.

    Pass an alternate instance to re-weight categories or change the grade
    ladder; the defaults reproduce the standard report.
    """
    category_weights: Mapping[Category, float] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_WEIGHTS)
    )
    grade_bands: tuple[GradeBand, ...] = DEFAULT_GRADE_BANDS
    benchmarks: Mapping[str, Benchmark] = field(default_factory=lambda: dict(DEFAULT_BENCHMARKS))
    category_names: Mapping[Category, str] = field(default_factory=lambda: dict(CATEGORY_NAMES))

    def __post_init__(self) -> None:
        missing = set(Category) - set(self.category_weights)
        if missing:
            names = ", ".join(sorted(c.value for c in missing))
            raise ValueError(f"category weights missing for: {names}")
        if any(w < 0 for w in self.category_weights.values()):
            raise ValueError("category weights must be non-negative")
        total = sum(self.category_weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"category weights must sum to 1.0, got {total:.4f}")
        if not self.grade_bands:
            raise ValueError("grade ladder must have at least one band")
        if "default" not in self.benchmarks:
            raise ValueError("benchmark table needs a 'default' entry")
        # Highest band first so the first match wins.
        ordered = tuple(sorted(self.grade_bands, key=lambda b: b.min_score, reverse=True))
        object.__setattr__(self, "grade_bands", ordered)

    def band_for(self, score: float) -> GradeBand:
        for band in self.grade_bands:
            if score >= band.min_score:
                return band
        return self.grade_bands[-1]

    def benchmark_for(self, industry: Optional[str]) -> Benchmark:
        return self.benchmarks.get(industry or "default") or self.benchmarks["default"]

    def category_name(self, category: Category) -> str:
        return self.category_names.get(category, category.value)


DEFAULT_SCORING = ScoringConfig()


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class RunnerSettings:
    """Execution knobs that do not change results."""
    check_timeout_ms: int = 5000
    max_workers: int = 8

    @classmethod
    def from_env(cls) -> "RunnerSettings":
        """Read SEO_AUDIT_CHECK_TIMEOUT_MS and SEO_AUDIT_MAX_WORKERS."""
        return cls(
            check_timeout_ms=_env_int("SEO_AUDIT_CHECK_TIMEOUT_MS", cls.check_timeout_ms),
            max_workers=_env_int("SEO_AUDIT_MAX_WORKERS", cls.max_workers),
        )
