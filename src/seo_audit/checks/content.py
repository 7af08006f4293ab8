"""Content quality checks."""

import re
from urllib.parse import urlparse

from ..context import AuditContext
from ..models import Category, CheckResult, Severity
from .base import Check, failed, link_hrefs, noted, passed, skipped, visible_text, warned


def _hostname(url: str) -> str:
    return urlparse(url).hostname or ""


def check_content_length(ctx: AuditContext) -> CheckResult:
    word_count = len(visible_text(ctx.html).split())

    if word_count < 300:
        return failed(f"Thin content ({word_count} words)", value=word_count, expected="500+")
    if word_count < 500:
        return warned(
            f"Content could be more comprehensive ({word_count} words)",
            value=word_count,
            expected="500+",
        )
    return passed(f"Word count: {word_count}", value=word_count)


def check_keyword_in_title(ctx: AuditContext) -> CheckResult:
    # Needs a target keyword, which the context does not carry.
    return skipped("Keyword analysis requires target keyword input")


def check_internal_links(ctx: AuditContext) -> CheckResult:
    domain = _hostname(ctx.url)
    internal = [
        href for href in link_hrefs(ctx.soup)
        if (href.startswith("/") and not href.startswith("//")) or (domain and domain in href)
    ]

    if len(internal) < 3:
        return warned(f"Only {len(internal)} internal links", value=len(internal), expected="3+")
    return passed(f"{len(internal)} internal links", value=len(internal))


def check_external_links(ctx: AuditContext) -> CheckResult:
    domain = _hostname(ctx.url)
    external = [
        href for href in link_hrefs(ctx.soup)
        if re.match(r"^https?://", href, re.I) and not (domain and domain in href)
    ]
    return passed(f"{len(external)} external links", value=len(external))


def check_readable_url(ctx: AuditContext) -> CheckResult:
    path = urlparse(ctx.url).path

    long_numbers = re.search(r"\d{5,}", path)
    special_chars = re.search(r"[%&=?]", path)

    if long_numbers or special_chars:
        return warned("URL contains complex patterns", value=path)
    if "_" in path:
        return noted("URL uses underscores (prefer hyphens)", value=path)
    return passed("URL is clean and readable", value=path)


CONTENT_CHECKS = [
    Check(
        id="content-length",
        name="Content Length",
        description="Page has sufficient content (500+ words)",
        category=Category.CONTENT,
        weight=8,
        severity=Severity.WARNING,
        evaluate=check_content_length,
        fix_hint="Add more comprehensive, valuable content to the page",
        tags=("content", "word-count", "thin-content"),
    ),
    Check(
        id="keyword-in-title",
        name="Primary Keyword in Title",
        description="Main keyword appears in title tag",
        category=Category.CONTENT,
        weight=7,
        severity=Severity.WARNING,
        evaluate=check_keyword_in_title,
        fix_hint="Include your primary keyword naturally in the title tag",
        tags=("keywords", "title"),
    ),
    Check(
        id="internal-links",
        name="Internal Links",
        description="Page has internal links to other pages",
        category=Category.CONTENT,
        weight=6,
        severity=Severity.INFO,
        evaluate=check_internal_links,
        fix_hint="Add relevant internal links to improve site navigation and link equity",
        tags=("links", "navigation"),
    ),
    Check(
        id="external-links",
        name="External Links",
        description="Page has relevant external links (authority signals)",
        category=Category.CONTENT,
        weight=4,
        severity=Severity.INFO,
        evaluate=check_external_links,
        tags=("links", "authority"),
    ),
    Check(
        id="readable-urls",
        name="Readable URLs",
        description="URL is human-readable and descriptive",
        category=Category.CONTENT,
        weight=5,
        severity=Severity.INFO,
        evaluate=check_readable_url,
        fix_hint="Use clean, readable URLs with hyphens instead of underscores",
        tags=("url", "slug"),
    ),
]
