"""E-E-A-T (experience, expertise, authoritativeness, trust) checks."""

import re

from ..context import AuditContext
from ..models import Category, CheckResult, Severity
from .base import EMAIL_RE, PHONE_RE, Check, noted, passed, schema_types, skipped, warned

AUTHOR_RE = re.compile(r"author|written by|by\s+[A-Z][a-z]+\s+[A-Z]", re.I)
DATE_RE = re.compile(r"published|posted|updated|date", re.I)
DATE_SCHEMA_RE = re.compile(r"datePublished|dateModified")
CITATION_RE = re.compile(r"source|citation|reference|according to|study|research", re.I)
EXTERNAL_LINK_RE = re.compile(
    r"<a[^>]*href=[\"']https?://(?!.*(?:facebook|twitter|linkedin))", re.I
)
REVIEW_RE = re.compile(r"reviewed by|medical review|verified by|fact.?check", re.I)
CREDENTIALS_RE = re.compile(r"\b(MD|DO|NP|RN|PA|PharmD|PhD)\b")


def _href_contains(word: str) -> re.Pattern:
    return re.compile(rf"href=[\"'][^\"']*{word}", re.I)


ABOUT_LINK_RE = _href_contains("about")
CONTACT_LINK_RE = _href_contains("contact")
PRIVACY_LINK_RE = _href_contains("privacy")

DISABLED = "E-E-A-T check disabled"


def check_author(ctx: AuditContext) -> CheckResult:
    if not ctx.options.check_eeat:
        return skipped(DISABLED)

    has_author = bool(AUTHOR_RE.search(ctx.html))
    has_author_schema = "Person" in schema_types(ctx.soup)

    if not has_author and not has_author_schema:
        return warned("No author attribution found")
    return passed("Author information present")


def check_publish_date(ctx: AuditContext) -> CheckResult:
    if not ctx.options.check_eeat:
        return skipped(DISABLED)

    if not DATE_RE.search(ctx.html) and not DATE_SCHEMA_RE.search(ctx.html):
        return warned("No publication date found")
    return passed("Publication date present")


def check_citations(ctx: AuditContext) -> CheckResult:
    if not ctx.options.check_eeat:
        return skipped(DISABLED)

    if not CITATION_RE.search(ctx.html) and not EXTERNAL_LINK_RE.search(ctx.html):
        return noted("No source citations detected")
    return passed("Sources/citations found")


def check_about_link(ctx: AuditContext) -> CheckResult:
    if not ABOUT_LINK_RE.search(ctx.html):
        return noted("No About page link found")
    return passed("About page link present")


def check_contact(ctx: AuditContext) -> CheckResult:
    has_contact = (
        CONTACT_LINK_RE.search(ctx.html)
        or PHONE_RE.search(ctx.html)
        or EMAIL_RE.search(ctx.html)
    )
    if not has_contact:
        return warned("No contact information found")
    return passed("Contact information present")


def check_privacy_policy(ctx: AuditContext) -> CheckResult:
    if not PRIVACY_LINK_RE.search(ctx.html):
        return warned("No privacy policy link found")
    return passed("Privacy policy link present")


def check_medical_review(ctx: AuditContext) -> CheckResult:
    if ctx.options.industry != "healthcare":
        return skipped("Not healthcare content")

    if not REVIEW_RE.search(ctx.html):
        return warned("No medical review indication found")
    if not CREDENTIALS_RE.search(ctx.html):
        return warned("Reviewer credentials not displayed")
    return passed("Medical review with credentials present")


EEAT_CHECKS = [
    Check(
        id="author-info",
        name="Author Information",
        description="Content has author attribution with credentials",
        category=Category.EEAT,
        weight=9,
        severity=Severity.WARNING,
        evaluate=check_author,
        fix_hint="Add author name and credentials to content",
        tags=("author", "eeat"),
    ),
    Check(
        id="publish-date",
        name="Publication Date",
        description="Content has visible publication date",
        category=Category.EEAT,
        weight=7,
        severity=Severity.WARNING,
        evaluate=check_publish_date,
        fix_hint="Display publication and last updated dates",
        tags=("freshness", "dates", "eeat"),
    ),
    Check(
        id="sources-citations",
        name="Sources & Citations",
        description="Content cites authoritative sources (YMYL content)",
        category=Category.EEAT,
        weight=8,
        severity=Severity.WARNING,
        evaluate=check_citations,
        fix_hint="Add citations to authoritative sources for factual claims",
        tags=("citations", "sources", "eeat"),
    ),
    Check(
        id="about-page-link",
        name="About Page Link",
        description="Link to About page visible",
        category=Category.EEAT,
        weight=6,
        severity=Severity.INFO,
        evaluate=check_about_link,
        fix_hint="Add visible link to About page in navigation or footer",
        tags=("about", "trust", "eeat"),
    ),
    Check(
        id="contact-info",
        name="Contact Information",
        description="Contact information or page link visible",
        category=Category.EEAT,
        weight=7,
        severity=Severity.WARNING,
        evaluate=check_contact,
        fix_hint="Add contact page link, phone, or email to footer",
        tags=("contact", "trust", "eeat"),
    ),
    Check(
        id="privacy-policy",
        name="Privacy Policy Link",
        description="Link to privacy policy visible",
        category=Category.EEAT,
        weight=6,
        severity=Severity.WARNING,
        evaluate=check_privacy_policy,
        fix_hint="Add link to privacy policy in footer",
        tags=("privacy", "compliance", "eeat"),
    ),
    Check(
        id="medical-review",
        name="Medical Review (Healthcare)",
        description="Medical content reviewed by healthcare professional",
        category=Category.EEAT,
        weight=10,
        severity=Severity.CRITICAL,
        evaluate=check_medical_review,
        fix_hint="Add medical reviewer with credentials (MD, DO, NP, etc.)",
        tags=("reviewer", "medical", "healthcare", "eeat"),
    ),
]
