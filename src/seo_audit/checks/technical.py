"""Technical SEO checks."""

import re

from ..context import AuditContext
from ..models import Category, CheckResult, Severity
from .base import (
    Check,
    canonical_href,
    count_headings,
    failed,
    meta_content,
    page_title,
    passed,
    warned,
)


def check_meta_title(ctx: AuditContext) -> CheckResult:
    title = page_title(ctx.soup) or (ctx.meta.title if ctx.meta else None)
    if not title:
        return failed("No title tag found")

    length = len(title)
    if length < 30:
        return warned(f"Title too short ({length} chars)", value=length, expected="50-60")
    if length > 70:
        return warned(f"Title too long ({length} chars)", value=length, expected="50-60")
    return passed(f"Title length: {length} characters", value=length)


def check_meta_description(ctx: AuditContext) -> CheckResult:
    description = meta_content(ctx.soup, "description") or (ctx.meta.description if ctx.meta else None)
    if not description:
        return failed("No meta description found")

    length = len(description)
    if length < 120:
        return warned(f"Description too short ({length} chars)", value=length, expected="150-160")
    if length > 170:
        return warned(f"Description too long ({length} chars)", value=length, expected="150-160")
    return passed(f"Description length: {length} characters", value=length)


def check_canonical(ctx: AuditContext) -> CheckResult:
    canonical = canonical_href(ctx.soup) or (ctx.meta.canonical if ctx.meta else None)
    if not canonical:
        return failed("No canonical URL found")
    return passed(f"Canonical: {canonical}", value=canonical)


def check_h1(ctx: AuditContext) -> CheckResult:
    h1_count = count_headings(ctx.soup, 1)
    if h1_count == 0:
        return failed("No H1 heading found", value=h1_count, expected=1)
    if h1_count > 1:
        return warned(f"Multiple H1 headings ({h1_count})", value=h1_count, expected=1)
    return passed("Single H1 heading present", value=h1_count)


def check_heading_hierarchy(ctx: AuditContext) -> CheckResult:
    h1, h2, h3 = (count_headings(ctx.soup, level) for level in (1, 2, 3))
    if h1 == 0:
        return failed("No H1 heading found")
    if h3 > 0 and h2 == 0:
        return warned("H3 present without H2 - broken hierarchy")
    return passed(f"Heading structure: H1({h1}), H2({h2}), H3({h3})")


def check_image_alt(ctx: AuditContext) -> CheckResult:
    images = ctx.soup.find_all("img")
    if not images:
        return passed("No images found")

    missing = sum(1 for img in images if not img.has_attr("alt"))
    if missing:
        return failed(f"{missing}/{len(images)} images missing alt text", value=missing, expected=0)
    return passed(f"All {len(images)} images have alt text")


def check_viewport(ctx: AuditContext) -> CheckResult:
    viewport = ctx.soup.find("meta", attrs={"name": re.compile(r"^viewport$", re.I)})
    if not viewport:
        return failed("No viewport meta tag found")
    return passed("Viewport meta tag present")


LANG_RE = re.compile(r"^[a-z]{2,}(-[a-z0-9]+)*$", re.I)


def check_lang(ctx: AuditContext) -> CheckResult:
    html_tag = ctx.soup.find("html")
    lang = (html_tag.get("lang") or "").strip() if html_tag else ""
    if not LANG_RE.match(lang):
        return failed("No lang attribute on <html>")
    return passed(f"Language: {lang}", value=lang)


def check_robots_meta(ctx: AuditContext) -> CheckResult:
    robots = meta_content(ctx.soup, "robots")
    if not robots:
        return passed("No robots meta (default: index, follow)")

    lowered = robots.lower()
    if "noindex" in lowered or "nofollow" in lowered:
        return warned(f"Robots directive: {robots}", value=robots)
    return passed(f"Robots: {robots}", value=robots)


def check_https(ctx: AuditContext) -> CheckResult:
    if not ctx.url.lower().startswith("https://"):
        return failed("Page not using HTTPS")
    return passed("HTTPS enabled")


TECHNICAL_CHECKS = [
    Check(
        id="meta-title",
        name="Meta Title",
        description="Page has a meta title between 50-60 characters",
        category=Category.TECHNICAL,
        weight=10,
        severity=Severity.CRITICAL,
        evaluate=check_meta_title,
        fix_hint="Add a unique, descriptive title tag between 50-60 characters",
        tags=("meta", "title"),
    ),
    Check(
        id="meta-description",
        name="Meta Description",
        description="Page has a meta description between 150-160 characters",
        category=Category.TECHNICAL,
        weight=9,
        severity=Severity.CRITICAL,
        evaluate=check_meta_description,
        fix_hint="Add a compelling meta description between 150-160 characters",
        tags=("meta", "description"),
    ),
    Check(
        id="canonical-url",
        name="Canonical URL",
        description="Page has a canonical URL specified",
        category=Category.TECHNICAL,
        weight=8,
        severity=Severity.WARNING,
        evaluate=check_canonical,
        fix_hint='Add <link rel="canonical" href="..."> to specify the preferred URL',
        tags=("canonical", "duplicate"),
    ),
    Check(
        id="heading-h1",
        name="H1 Heading",
        description="Page has exactly one H1 heading",
        category=Category.TECHNICAL,
        weight=8,
        severity=Severity.CRITICAL,
        evaluate=check_h1,
        fix_hint="Use exactly one H1 heading per page for the main title",
        tags=("headings", "h1"),
    ),
    Check(
        id="heading-hierarchy",
        name="Heading Hierarchy",
        description="Headings follow proper hierarchy (H1 > H2 > H3)",
        category=Category.TECHNICAL,
        weight=6,
        severity=Severity.WARNING,
        evaluate=check_heading_hierarchy,
        fix_hint="Use headings in proper order: H1 first, then H2, then H3",
        tags=("headings", "structure"),
    ),
    Check(
        id="image-alt",
        name="Image Alt Text",
        description="All images have alt attributes",
        category=Category.TECHNICAL,
        weight=7,
        severity=Severity.WARNING,
        evaluate=check_image_alt,
        fix_hint='Add descriptive alt text to all images (use alt="" for decorative images)',
        tags=("images", "alt", "accessibility"),
    ),
    Check(
        id="viewport-meta",
        name="Viewport Meta Tag",
        description="Page has responsive viewport meta tag",
        category=Category.TECHNICAL,
        weight=8,
        severity=Severity.CRITICAL,
        evaluate=check_viewport,
        fix_hint='Add <meta name="viewport" content="width=device-width, initial-scale=1">',
        tags=("mobile", "viewport"),
    ),
    Check(
        id="lang-attribute",
        name="Language Attribute",
        description="HTML element has lang attribute",
        category=Category.TECHNICAL,
        weight=6,
        severity=Severity.WARNING,
        evaluate=check_lang,
        fix_hint='Add lang attribute to <html> element (e.g., lang="en")',
        tags=("language", "i18n"),
    ),
    Check(
        id="robots-meta",
        name="Robots Meta Tag",
        description="No blocking robots directives",
        category=Category.TECHNICAL,
        weight=9,
        severity=Severity.CRITICAL,
        evaluate=check_robots_meta,
        fix_hint="Remove noindex/nofollow if page should be indexed",
        tags=("robots", "crawling", "indexing"),
    ),
    Check(
        id="https",
        name="HTTPS",
        description="Page uses HTTPS",
        category=Category.TECHNICAL,
        weight=10,
        severity=Severity.CRITICAL,
        evaluate=check_https,
        fix_hint="Migrate to HTTPS and set up proper redirects",
        tags=("security", "https"),
    ),
]
