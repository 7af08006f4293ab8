"""SEO audit engine: weighted checks, scoring and recommendations."""

__version__ = "0.1.0"

from .checks import (  # noqa: E402
    ALL_CHECKS,
    Check,
    get_check_by_id,
    get_check_categories,
    get_checks_by_category,
    get_checks_by_ids,
    search_checks,
)
from .config import DEFAULT_SCORING, RunnerSettings, ScoringConfig  # noqa: E402
from .context import (  # noqa: E402
    AuditContext,
    AuditOptions,
    BusinessInfo,
    PageMeta,
    PerformanceMetrics,
    build_context,
)
from .models import (  # noqa: E402
    AuditCheckResult,
    AuditResults,
    Category,
    CategoryResult,
    CheckResult,
    CheckStatus,
    OverallStatus,
    Severity,
)
from .recommendations import (  # noqa: E402
    Priority,
    Recommendation,
    RecommendationReport,
    format_recommendations_json,
    format_recommendations_markdown,
    generate_recommendations,
)
from .runner import (  # noqa: E402
    AuditRunner,
    RunnerOptions,
    run_category_audit,
    run_full_audit,
    run_healthcare_audit,
    run_local_business_audit,
    run_quick_audit,
)
from .scoring import (  # noqa: E402
    benchmark_compare,
    category_score,
    grade_for,
    improvement_potential,
    score_breakdown,
)
