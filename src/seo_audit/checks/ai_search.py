"""Checks for how well AI search engines can extract and quote the page."""

import re

from ..context import AuditContext
from ..models import Category, CheckResult, Severity
from .base import Check, noted, passed, visible_text, warned

DIRECT_ANSWER_RE = re.compile(r"\b(is|are|means|refers to|defined as)\b", re.I)
FAQ_RE = re.compile(r"faq|frequently asked|common questions", re.I)
STATS_RE = re.compile(r"\d+%|\d+\s*(million|billion|thousand)", re.I)
STAT_SOURCE_RE = re.compile(r"source|according to|study|research|report", re.I)


def check_direct_answer(ctx: AuditContext) -> CheckResult:
    # Only the opening of the visible text counts.
    opening = visible_text(ctx.html)[:2000]
    if DIRECT_ANSWER_RE.search(opening):
        return passed("Content uses direct answer format")
    return noted("Consider starting with direct answer")


def check_structured_content(ctx: AuditContext) -> CheckResult:
    has_headers = ctx.soup.find(["h2", "h3", "h4"]) is not None
    has_lists = ctx.soup.find(["ul", "ol"]) is not None
    has_tables = ctx.soup.find("table") is not None

    structure_count = sum([has_headers, has_lists, has_tables])
    if structure_count == 0:
        return warned("No structured content elements found")
    return passed(f"{structure_count} structure types used", value=structure_count)


def check_faq_format(ctx: AuditContext) -> CheckResult:
    has_faq = bool(FAQ_RE.search(ctx.html))
    question_headings = [
        h for h in ctx.soup.find_all(["h2", "h3", "h4"])
        if h.get_text(strip=True).endswith("?")
    ]

    if not has_faq and not question_headings:
        return noted("No FAQ format detected")
    return passed("FAQ format present")


def check_stat_claims(ctx: AuditContext) -> CheckResult:
    has_stats = bool(STATS_RE.search(ctx.html))
    has_sources = bool(STAT_SOURCE_RE.search(ctx.html))

    if has_stats and not has_sources:
        return warned("Statistics found without source attribution")
    return passed("Statistics with sources" if has_stats else "No statistics detected")


def check_semantic_html(ctx: AuditContext) -> CheckResult:
    semantic_count = sum(
        1 for tag in ("article", "section", "main", "nav") if ctx.soup.find(tag) is not None
    )
    if semantic_count < 2:
        return noted(f"Only {semantic_count} semantic elements used", value=semantic_count)
    return passed(f"{semantic_count} semantic elements used", value=semantic_count)


AI_SEARCH_CHECKS = [
    Check(
        id="direct-answer",
        name="Direct Answer Format",
        description="Content starts with direct answer to likely queries",
        category=Category.AI_SEARCH,
        weight=7,
        severity=Severity.INFO,
        evaluate=check_direct_answer,
        fix_hint="Start content with direct answer to the main question",
        tags=("ai", "answers", "snippets"),
    ),
    Check(
        id="structured-content",
        name="Structured Content",
        description="Content uses headers, lists, and structured formatting",
        category=Category.AI_SEARCH,
        weight=6,
        severity=Severity.INFO,
        evaluate=check_structured_content,
        fix_hint="Add headers, lists, and structured formatting for AI comprehension",
        tags=("ai", "structure", "lists", "tables"),
    ),
    Check(
        id="faq-format",
        name="FAQ Format",
        description="Content includes FAQ section for AI snippets",
        category=Category.AI_SEARCH,
        weight=5,
        severity=Severity.INFO,
        evaluate=check_faq_format,
        fix_hint="Add FAQ section with question-answer pairs",
        tags=("ai", "faq"),
    ),
    Check(
        id="stat-claims",
        name="Statistics with Sources",
        description="Statistics and claims include sources",
        category=Category.AI_SEARCH,
        weight=6,
        severity=Severity.INFO,
        evaluate=check_stat_claims,
        fix_hint="Add source attribution for all statistics and claims",
        tags=("ai", "statistics", "citations"),
    ),
    Check(
        id="semantic-html",
        name="Semantic HTML",
        description="Uses semantic HTML elements (article, section, nav, etc.)",
        category=Category.AI_SEARCH,
        weight=5,
        severity=Severity.INFO,
        evaluate=check_semantic_html,
        fix_hint="Use semantic HTML elements (article, section, main, nav)",
        tags=("ai", "html", "semantic"),
    ),
]
