"""Schema.org structured data checks."""

import re

from ..context import AuditContext
from ..models import Category, CheckResult, Severity
from .base import Check, extract_json_ld, failed, noted, passed, schema_types, skipped, warned

ARTICLE_TYPES = {"Article", "BlogPosting", "NewsArticle"}
FAQ_CONTENT_RE = re.compile(r"faq|frequently asked|questions", re.I)
ARTICLE_HINT_RE = re.compile(r"published|posted|author", re.I)


def check_schema_present(ctx: AuditContext) -> CheckResult:
    has_json_ld = ctx.soup.find("script", type="application/ld+json") is not None
    has_microdata = any(
        "schema.org" in tag["itemtype"] for tag in ctx.soup.find_all(itemtype=True)
    )

    if not has_json_ld and not has_microdata:
        return failed("No Schema.org markup found")
    if has_json_ld:
        blocks = len(extract_json_ld(ctx.soup))
        return passed("JSON-LD schema present", value=blocks)
    return passed("Microdata schema present")


def check_organization(ctx: AuditContext) -> CheckResult:
    if "Organization" not in schema_types(ctx.soup):
        return noted("No Organization schema found")
    return passed("Organization schema present")


def check_breadcrumb(ctx: AuditContext) -> CheckResult:
    if "BreadcrumbList" not in schema_types(ctx.soup):
        return noted("No breadcrumb schema found")
    return passed("Breadcrumb schema present")


def check_faq_schema(ctx: AuditContext) -> CheckResult:
    has_faq_content = bool(FAQ_CONTENT_RE.search(ctx.html))
    has_faq_schema = "FAQPage" in schema_types(ctx.soup)

    if has_faq_content and not has_faq_schema:
        return warned("FAQ content found but no FAQPage schema")
    if has_faq_schema:
        return passed("FAQPage schema present")
    return skipped("No FAQ content detected")


def check_article_schema(ctx: AuditContext) -> CheckResult:
    has_article_schema = bool(ARTICLE_TYPES & schema_types(ctx.soup))
    looks_like_article = ctx.soup.find("article") is not None or bool(ARTICLE_HINT_RE.search(ctx.html))

    if looks_like_article and not has_article_schema:
        return warned("Article content found but no Article schema")
    if has_article_schema:
        return passed("Article schema present")
    return skipped("Not an article page")


SCHEMA_CHECKS = [
    Check(
        id="schema-present",
        name="Schema.org Markup",
        description="Page has Schema.org structured data",
        category=Category.SCHEMA,
        weight=8,
        severity=Severity.WARNING,
        evaluate=check_schema_present,
        fix_hint="Add Schema.org structured data in JSON-LD format",
        docs_url="https://schema.org",
        tags=("schema", "json-ld", "structured-data"),
    ),
    Check(
        id="schema-organization",
        name="Organization Schema",
        description="Organization structured data present",
        category=Category.SCHEMA,
        weight=7,
        severity=Severity.INFO,
        evaluate=check_organization,
        fix_hint="Add Organization Schema.org for your business",
        tags=("schema", "organization"),
    ),
    Check(
        id="schema-breadcrumb",
        name="Breadcrumb Schema",
        description="BreadcrumbList structured data present",
        category=Category.SCHEMA,
        weight=5,
        severity=Severity.INFO,
        evaluate=check_breadcrumb,
        fix_hint="Add BreadcrumbList Schema.org for navigation path",
        tags=("schema", "breadcrumb"),
    ),
    Check(
        id="schema-faq",
        name="FAQ Schema",
        description="FAQPage structured data for FAQ content",
        category=Category.SCHEMA,
        weight=6,
        severity=Severity.INFO,
        evaluate=check_faq_schema,
        fix_hint="Add FAQPage Schema.org for FAQ sections",
        tags=("schema", "faq"),
    ),
    Check(
        id="schema-article",
        name="Article Schema",
        description="Article/BlogPosting structured data for content",
        category=Category.SCHEMA,
        weight=6,
        severity=Severity.INFO,
        evaluate=check_article_schema,
        fix_hint="Add Article or BlogPosting Schema.org for article pages",
        tags=("schema", "article"),
    ),
]
