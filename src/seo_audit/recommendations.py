"""Turn failing checks into a ranked, grouped improvement plan."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

from .config import DEFAULT_SCORING, ScoringConfig
from .models import AuditCheckResult, AuditResults, Category, Severity
from .scoring import grade_for, improvement_potential

QUICK_WIN_MIN_IMPACT = 7
QUICK_WIN_MAX_EFFORT = 4
MAX_QUICK_WINS = 5
MAX_TOP_PRIORITIES = 5


class Priority(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_ORDER.index(self)


_PRIORITY_ORDER = [Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW]


@dataclass(frozen=True)
class Resource:
    title: str
    url: str


@dataclass(frozen=True)
class RecommendationTemplate:
    title: str
    description: str
    steps: tuple[str, ...]
    resources: tuple[Resource, ...] = ()
    code_example: Optional[str] = None


@dataclass(frozen=True)
class Recommendation:
    id: str
    title: str
    description: str
    priority: Priority
    category: Category
    impact: int
    effort: int
    steps: tuple[str, ...]
    related_checks: tuple[str, ...] = ()
    resources: tuple[Resource, ...] = ()
    code_example: Optional[str] = None


@dataclass(frozen=True)
class RecommendationGroup:
    category: Category
    category_name: str
    recommendations: tuple[Recommendation, ...]
    score: int


@dataclass(frozen=True)
class RecommendationSummary:
    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


@dataclass(frozen=True)
class Potential:
    current_score: int = 0
    potential_score: int = 0
    improvement: int = 0


@dataclass(frozen=True)
class RecommendationReport:
    summary: RecommendationSummary = field(default_factory=RecommendationSummary)
    quick_wins: tuple[Recommendation, ...] = ()
    groups: tuple[RecommendationGroup, ...] = ()
    top_priorities: tuple[Recommendation, ...] = ()
    potential: Potential = field(default_factory=Potential)


RECOMMENDATION_TEMPLATES: dict[str, RecommendationTemplate] = {
    "meta-title": RecommendationTemplate(
        title="Optimize Page Title",
        description="Add a descriptive, keyword-rich title between 50-60 characters.",
        steps=(
            "Identify the primary keyword for this page",
            "Create a compelling title that includes the keyword naturally",
            "Keep the title between 50-60 characters",
            "Make each page title unique",
        ),
        resources=(Resource("Title Tag Best Practices", "https://moz.com/learn/seo/title-tag"),),
        code_example="<title>Your Primary Keyword - Brand Name</title>",
    ),
    "meta-description": RecommendationTemplate(
        title="Add Meta Description",
        description="Write a compelling meta description between 150-160 characters.",
        steps=(
            "Write a clear summary of the page content",
            "Include primary and secondary keywords naturally",
            "Add a call-to-action when appropriate",
            "Keep between 150-160 characters",
        ),
        code_example='<meta name="description" content="Your compelling description here...">',
    ),
    "canonical-url": RecommendationTemplate(
        title="Add Canonical URL",
        description="Specify the canonical URL to prevent duplicate content issues.",
        steps=(
            "Determine the preferred URL for this content",
            "Add the canonical link tag to the head section",
            "Ensure it points to the absolute URL",
        ),
        code_example='<link rel="canonical" href="https://example.com/page">',
    ),
    "heading-h1": RecommendationTemplate(
        title="Add/Fix H1 Heading",
        description="Each page should have exactly one H1 heading.",
        steps=(
            "Identify the main topic of the page",
            "Create a single H1 heading that summarizes the content",
            "Include the primary keyword naturally",
            "Move additional H1s to H2 or lower",
        ),
    ),
    "image-alt": RecommendationTemplate(
        title="Add Image Alt Text",
        description="All images should have descriptive alt text for accessibility and SEO.",
        steps=(
            "Review all images on the page",
            "Add descriptive alt text that explains the image",
            "Include keywords naturally where appropriate",
            'Use alt="" for purely decorative images',
        ),
        code_example='<img src="doctor.jpg" alt="Dr. Smith consulting with patient">',
    ),
    "content-length": RecommendationTemplate(
        title="Expand Content",
        description="Add more comprehensive content to improve relevance signals.",
        steps=(
            "Research what topics competitors cover",
            "Identify gaps in your current content",
            "Add sections addressing user questions",
            "Aim for at least 500 words of valuable content",
        ),
    ),
    "internal-links": RecommendationTemplate(
        title="Add Internal Links",
        description="Link to other relevant pages on your site to improve navigation and SEO.",
        steps=(
            "Identify related content on your site",
            "Add contextual links within the content",
            "Use descriptive anchor text",
            "Aim for 3-5 internal links per page",
        ),
    ),
    "nap-present": RecommendationTemplate(
        title="Add NAP Information",
        description="Display Name, Address, and Phone number prominently.",
        steps=(
            "Add business name in a consistent format",
            "Display full street address",
            "Show phone number in clickable format",
            "Place in header, footer, or contact section",
        ),
        code_example=(
            "<address>\n"
            "  Business Name<br>\n"
            "  123 Main St, Suite 100<br>\n"
            "  City, ST 12345<br>\n"
            '  <a href="tel:+15551234567">(555) 123-4567</a>\n'
            "</address>"
        ),
    ),
    "local-schema": RecommendationTemplate(
        title="Add LocalBusiness Schema",
        description="Add structured data to help search engines understand your business.",
        steps=(
            "Create LocalBusiness JSON-LD markup",
            "Include name, address, phone, hours",
            "Add to the page head or body",
            "Validate using Google's Rich Results Test",
        ),
        resources=(Resource("LocalBusiness Schema", "https://schema.org/LocalBusiness"),),
    ),
    "schema-present": RecommendationTemplate(
        title="Add Schema.org Markup",
        description="Implement structured data to enhance search appearance.",
        steps=(
            "Identify the type of content (Article, Product, etc.)",
            "Create JSON-LD structured data",
            "Include all required and recommended properties",
            "Test with Google Rich Results Test",
        ),
        resources=(
            Resource("Schema.org", "https://schema.org"),
            Resource("Rich Results Test", "https://search.google.com/test/rich-results"),
        ),
    ),
    "author-info": RecommendationTemplate(
        title="Add Author Information",
        description="Display author credentials to establish expertise and trust.",
        steps=(
            "Add author name and photo to content",
            "Include author credentials and qualifications",
            "Link to author bio page",
            "Add Person schema for the author",
        ),
    ),
    "publish-date": RecommendationTemplate(
        title="Display Publication Date",
        description="Show when content was published and last updated.",
        steps=(
            "Add visible publication date",
            "Show last updated date if content was revised",
            "Use datePublished and dateModified in schema",
        ),
    ),
    "medical-review": RecommendationTemplate(
        title="Add Medical Reviewer",
        description="Healthcare content should be reviewed by a qualified professional.",
        steps=(
            "Have content reviewed by a licensed healthcare professional",
            "Display reviewer name with credentials (MD, DO, NP, etc.)",
            "Show date of medical review",
            "Add reviewer information to schema",
        ),
    ),
    "structured-content": RecommendationTemplate(
        title="Improve Content Structure",
        description="Use headers, lists, and structured formatting for AI comprehension.",
        steps=(
            "Break content into logical sections with H2/H3 headers",
            "Use bulleted or numbered lists for key points",
            "Add tables for comparative information",
            "Include FAQ sections for common questions",
        ),
    ),
}


def priority_for(severity: Severity, weight: int) -> Priority:
    if severity is Severity.CRITICAL or weight >= 9:
        return Priority.CRITICAL
    if severity is Severity.WARNING or weight >= 7:
        return Priority.HIGH
    if weight <= 4:
        return Priority.LOW
    return Priority.MEDIUM


def effort_for(weight: int) -> int:
    """Heavier checks tend to be the common, well-understood fixes."""
    return max(1, min(10, 11 - weight))


def generate_recommendation(
    check: AuditCheckResult,
    templates: Mapping[str, RecommendationTemplate] = RECOMMENDATION_TEMPLATES,
) -> Recommendation:
    template = templates.get(check.check_id)
    if template is not None:
        title = template.title
        description = template.description
        steps = template.steps
        resources = template.resources
        code_example = template.code_example
    else:
        title = f"Fix: {check.check_name}"
        description = check.fix_hint or check.details or ""
        steps = (check.fix_hint,) if check.fix_hint else ("Review and fix the issue",)
        resources = ()
        code_example = None

    return Recommendation(
        id=check.check_id,
        title=title,
        description=description,
        priority=priority_for(check.severity, check.weight),
        category=check.category,
        impact=check.weight,
        effort=effort_for(check.weight),
        steps=tuple(steps),
        related_checks=(check.check_id,),
        resources=tuple(resources),
        code_example=code_example,
    )


def _coerce_priority(value: Union[Priority, str, None]) -> Optional[Priority]:
    if value is None or isinstance(value, Priority):
        return value
    return Priority(value)


def generate_recommendations(
    results: Optional[AuditResults],
    limit: Optional[int] = None,
    min_priority: Union[Priority, str, None] = None,
    config: ScoringConfig = DEFAULT_SCORING,
    templates: Mapping[str, RecommendationTemplate] = RECOMMENDATION_TEMPLATES,
) -> RecommendationReport:
    """Build the recommendation report for a completed audit.

    Only applicable failing checks produce recommendations, one per check id.
    Order is priority (critical first) then impact, highest first. Quick wins
    are the high-impact, low-effort subset of that list.
    """
    if results is None:
        return RecommendationReport()

    recommendations: list[Recommendation] = []
    seen: set[str] = set()
    for check in results.checks:
        if not check.is_issue or check.check_id in seen:
            continue
        seen.add(check.check_id)
        recommendations.append(generate_recommendation(check, templates))

    threshold = _coerce_priority(min_priority)
    if threshold is not None:
        recommendations = [r for r in recommendations if r.priority.rank <= threshold.rank]

    recommendations.sort(key=lambda r: (r.priority.rank, -r.impact))

    if limit:
        recommendations = recommendations[:limit]

    groups = []
    for category in Category:
        members = tuple(r for r in recommendations if r.category is category)
        if not members:
            continue
        category_result = results.categories.get(category)
        groups.append(RecommendationGroup(
            category=category,
            category_name=config.category_name(category),
            recommendations=members,
            score=category_result.score if category_result else 100,
        ))
    groups.sort(key=lambda g: g.score)

    quick_wins = [
        r for r in recommendations
        if r.impact >= QUICK_WIN_MIN_IMPACT and r.effort <= QUICK_WIN_MAX_EFFORT
    ][:MAX_QUICK_WINS]

    summary = RecommendationSummary(
        total=len(recommendations),
        critical=sum(1 for r in recommendations if r.priority is Priority.CRITICAL),
        high=sum(1 for r in recommendations if r.priority is Priority.HIGH),
        medium=sum(1 for r in recommendations if r.priority is Priority.MEDIUM),
        low=sum(1 for r in recommendations if r.priority is Priority.LOW),
    )

    potential = improvement_potential(results)

    return RecommendationReport(
        summary=summary,
        quick_wins=tuple(quick_wins),
        groups=tuple(groups),
        top_priorities=tuple(recommendations[:MAX_TOP_PRIORITIES]),
        potential=Potential(
            current_score=results.score,
            potential_score=potential.max_score,
            improvement=potential.improvement,
        ),
    )


def get_category_recommendations(
    results: AuditResults, category: Union[Category, str]
) -> list[Recommendation]:
    wanted = Category.parse(category)
    report = generate_recommendations(results)
    for group in report.groups:
        if group.category is wanted:
            return list(group.recommendations)
    return []


def get_top_recommendation(results: AuditResults) -> Optional[Recommendation]:
    report = generate_recommendations(results, limit=1)
    return report.top_priorities[0] if report.top_priorities else None


# Views

PRIORITY_MARKERS = {
    Priority.CRITICAL: "[CRITICAL]",
    Priority.HIGH: "[HIGH]",
    Priority.MEDIUM: "[MEDIUM]",
    Priority.LOW: "[LOW]",
}


def format_recommendations_markdown(
    report: RecommendationReport, config: ScoringConfig = DEFAULT_SCORING
) -> str:
    potential = report.potential
    lines = [
        "# SEO Audit Recommendations",
        "",
        f"Current Score: **{potential.current_score}** "
        f"({grade_for(potential.current_score, config).grade})",
        f"Potential Score: **{potential.potential_score}** (+{potential.improvement} points)",
        "",
        "## Summary",
        f"- Critical Issues: {report.summary.critical}",
        f"- High Priority: {report.summary.high}",
        f"- Medium Priority: {report.summary.medium}",
        f"- Low Priority: {report.summary.low}",
        "",
    ]

    if report.quick_wins:
        lines += ["## Quick Wins", "High impact improvements that are easy to implement:", ""]
        for rec in report.quick_wins:
            lines += [f"### {rec.title}", rec.description, "", "**Steps:**"]
            lines += [f"{i}. {step}" for i, step in enumerate(rec.steps, 1)]
            if rec.code_example:
                lines += ["", "```html", rec.code_example, "```"]
            lines.append("")

    lines.append("## All Recommendations")
    for group in report.groups:
        lines += [f"### {group.category_name} (Score: {group.score}%)", ""]
        for rec in group.recommendations:
            lines += [f"#### {PRIORITY_MARKERS[rec.priority]} {rec.title}", rec.description, ""]

    return "\n".join(lines)


def format_recommendations_json(report: RecommendationReport) -> dict[str, Any]:
    """Compact API view: internal-only fields dropped, groups flattened."""
    return {
        "summary": _summary_to_dict(report.summary),
        "potential": _potential_to_dict(report.potential),
        "quickWins": [
            {
                "id": r.id,
                "title": r.title,
                "description": r.description,
                "priority": r.priority.value,
                "impact": r.impact,
                "effort": r.effort,
            }
            for r in report.quick_wins
        ],
        "topPriorities": [
            {
                "id": r.id,
                "title": r.title,
                "description": r.description,
                "priority": r.priority.value,
                "category": r.category.value,
                "steps": list(r.steps),
            }
            for r in report.top_priorities
        ],
        "byCategory": [
            {
                "category": g.category.value,
                "name": g.category_name,
                "score": g.score,
                "recommendationCount": len(g.recommendations),
            }
            for g in report.groups
        ],
    }


# Lossless round trip

def _summary_to_dict(summary: RecommendationSummary) -> dict[str, int]:
    return {
        "total": summary.total,
        "critical": summary.critical,
        "high": summary.high,
        "medium": summary.medium,
        "low": summary.low,
    }


def _potential_to_dict(potential: Potential) -> dict[str, int]:
    return {
        "currentScore": potential.current_score,
        "potentialScore": potential.potential_score,
        "improvement": potential.improvement,
    }


def recommendation_to_dict(rec: Recommendation) -> dict[str, Any]:
    return {
        "id": rec.id,
        "title": rec.title,
        "description": rec.description,
        "priority": rec.priority.value,
        "category": rec.category.value,
        "relatedChecks": list(rec.related_checks),
        "impact": rec.impact,
        "effort": rec.effort,
        "steps": list(rec.steps),
        "resources": [{"title": r.title, "url": r.url} for r in rec.resources],
        "codeExample": rec.code_example,
    }


def recommendation_from_dict(data: Mapping[str, Any]) -> Recommendation:
    return Recommendation(
        id=data["id"],
        title=data["title"],
        description=data.get("description", ""),
        priority=Priority(data["priority"]),
        category=Category(data["category"]),
        impact=int(data["impact"]),
        effort=int(data["effort"]),
        steps=tuple(data.get("steps") or ()),
        related_checks=tuple(data.get("relatedChecks") or ()),
        resources=tuple(Resource(r["title"], r["url"]) for r in data.get("resources") or ()),
        code_example=data.get("codeExample"),
    )


def report_to_dict(report: RecommendationReport) -> dict[str, Any]:
    return {
        "summary": _summary_to_dict(report.summary),
        "quickWins": [recommendation_to_dict(r) for r in report.quick_wins],
        "groups": [
            {
                "category": g.category.value,
                "categoryName": g.category_name,
                "score": g.score,
                "recommendations": [recommendation_to_dict(r) for r in g.recommendations],
            }
            for g in report.groups
        ],
        "topPriorities": [recommendation_to_dict(r) for r in report.top_priorities],
        "potential": _potential_to_dict(report.potential),
    }


def report_from_dict(data: Mapping[str, Any]) -> RecommendationReport:
    summary = data.get("summary") or {}
    potential = data.get("potential") or {}
    return RecommendationReport(
        summary=RecommendationSummary(**{k: int(summary.get(k, 0)) for k in
                                         ("total", "critical", "high", "medium", "low")}),
        quick_wins=tuple(recommendation_from_dict(r) for r in data.get("quickWins") or ()),
        groups=tuple(
            RecommendationGroup(
                category=Category(g["category"]),
                category_name=g["categoryName"],
                score=int(g["score"]),
                recommendations=tuple(recommendation_from_dict(r) for r in g.get("recommendations") or ()),
            )
            for g in data.get("groups") or ()
        ),
        top_priorities=tuple(recommendation_from_dict(r) for r in data.get("topPriorities") or ()),
        potential=Potential(
            current_score=int(potential.get("currentScore", 0)),
            potential_score=int(potential.get("potentialScore", 0)),
            improvement=int(potential.get("improvement", 0)),
        ),
    )
