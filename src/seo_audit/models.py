"""Data models for SEO audit results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class Category(Enum):
    """Closed set of check categories."""
    TECHNICAL = "technical"
    CONTENT = "content"
    LOCAL = "local"
    SCHEMA = "schema"
    EEAT = "eeat"
    AI_SEARCH = "ai-search"

    @classmethod
    def parse(cls, value: Union["Category", str]) -> Optional["Category"]:
        """Return the matching category, or None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Severity(Enum):
    """How much a failing check matters."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class CheckStatus(Enum):
    """Outcome of a single check, richer than passed/failed."""
    PASSED = "passed"
    FAILED = "failed"
    WARNING = "warning"
    SKIPPED = "skipped"
    INFO = "info"


class OverallStatus(Enum):
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


Value = Union[str, int, float, None]


@dataclass(frozen=True)
class CheckResult:
    """What a check returns."""
    passed: bool
    status: CheckStatus
    details: Optional[str] = None
    value: Value = None
    expected: Value = None

    @property
    def skipped(self) -> bool:
        return self.status is CheckStatus.SKIPPED


@dataclass(frozen=True)
class AuditCheckResult:
    """A check result stamped with the check's static metadata."""
    check_id: str
    check_name: str
    category: Category
    weight: int
    severity: Severity
    passed: bool
    status: CheckStatus
    details: Optional[str] = None
    value: Value = None
    expected: Value = None
    fix_hint: Optional[str] = None
    execution_time_ms: float = 0.0

    @property
    def skipped(self) -> bool:
        return self.status is CheckStatus.SKIPPED

    @property
    def is_issue(self) -> bool:
        """Failing and applicable: the input to scoring penalties and recommendations."""
        return not self.passed and not self.skipped

    def to_dict(self) -> dict[str, Any]:
        return {
            "checkId": self.check_id,
            "checkName": self.check_name,
            "category": self.category.value,
            "weight": self.weight,
            "severity": self.severity.value,
            "passed": self.passed,
            "status": self.status.value,
            "details": self.details,
            "value": self.value,
            "expected": self.expected,
            "fix": self.fix_hint,
            "executionTimeMs": round(self.execution_time_ms, 3),
        }


@dataclass(frozen=True)
class CategoryResult:
    """All results of one category plus its weighted score."""
    category: Category
    results: tuple[AuditCheckResult, ...]
    score: int
    passed: int = 0
    failed: int = 0
    warnings: int = 0
    skipped: int = 0

    @property
    def applicable(self) -> tuple[AuditCheckResult, ...]:
        return tuple(r for r in self.results if not r.skipped)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "score": self.score,
            "passed": self.passed,
            "failed": self.failed,
            "warnings": self.warnings,
            "skipped": self.skipped,
            "results": [r.check_id for r in self.results],
        }


@dataclass(frozen=True)
class AuditSummary:
    total: int = 0
    passed: int = 0
    failed: int = 0
    warnings: int = 0
    skipped: int = 0
    critical: int = 0


@dataclass(frozen=True)
class RunMeta:
    total_execution_time_ms: float = 0.0
    checks_run: int = 0
    checks_skipped: int = 0


@dataclass(frozen=True)
class AuditResults:
    """Complete, immutable output of one audit run."""
    url: str
    timestamp: str
    score: int
    status: OverallStatus
    categories: dict[Category, CategoryResult] = field(default_factory=dict)
    checks: tuple[AuditCheckResult, ...] = ()
    summary: AuditSummary = field(default_factory=AuditSummary)
    meta: RunMeta = field(default_factory=RunMeta)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-serializable view."""
        return {
            "url": self.url,
            "timestamp": self.timestamp,
            "score": self.score,
            "status": self.status.value,
            "categories": {
                cat.value: result.to_dict() for cat, result in self.categories.items()
            },
            "checks": [c.to_dict() for c in self.checks],
            "summary": {
                "total": self.summary.total,
                "passed": self.summary.passed,
                "failed": self.summary.failed,
                "warnings": self.summary.warnings,
                "skipped": self.summary.skipped,
                "critical": self.summary.critical,
            },
            "meta": {
                "totalExecutionTimeMs": round(self.meta.total_execution_time_ms, 3),
                "checksRun": self.meta.checks_run,
                "checksSkipped": self.meta.checks_skipped,
            },
        }
