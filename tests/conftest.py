"""Shared pytest fixtures for seo-audit tests."""

from typing import Optional

import pytest

from seo_audit.checks import Check
from seo_audit.context import AuditContext, AuditOptions, build_context
from seo_audit.models import (
    AuditCheckResult,
    Category,
    CheckResult,
    CheckStatus,
    Severity,
)


GOOD_PAGE = """<!DOCTYPE html>
<html lang="en-US">
<head>
  <title>Family Dental Care in Springfield - Smile Bright Clinic</title>
  <meta name="description" content="Smile Bright Clinic offers family dental care in Springfield: cleanings, fillings, implants and emergency visits. Book online today with our friendly team.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="canonical" href="https://smilebright.example/family-dentistry">
  <script type="application/ld+json">
  {"@context": "https://schema.org", "@graph": [
    {"@type": "Organization", "name": "Smile Bright Clinic"},
    {"@type": "BreadcrumbList", "itemListElement": []},
    {"@type": "Article", "headline": "Family dentistry", "datePublished": "2024-01-10"},
    {"@type": "FAQPage", "mainEntity": []},
    {"@type": "Person", "name": "Dr. Jane Doe"}
  ]}
  </script>
</head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About us</a> <a href="/contact">Contact</a> <a href="/privacy">Privacy</a></nav>
  <main>
    <article>
      <h1>Family Dentistry</h1>
      <p>Family dentistry is dental care for patients of every age. Written by Jane Doe, published March 2024.</p>
      <section>
        <h2>What does a family dentist do?</h2>
        <ul><li>Cleanings</li><li>Fillings</li></ul>
        <p>According to a national study, 42% of adults skip checkups.</p>
        <img src="office.jpg" alt="Our Springfield office">
      </section>
      <section>
        <h2>Frequently asked questions</h2>
        <p>{filler}</p>
      </section>
    </article>
  </main>
  <footer>Call (555) 123-4567 or email hello@smilebright.example</footer>
</body>
</html>
""".replace("{filler}", " ".join(["Regular visits keep teeth healthy and catch problems early."] * 60))

BARE_PAGE = "<html><body><p>Hello</p></body></html>"


@pytest.fixture()
def good_html():
    return GOOD_PAGE


@pytest.fixture()
def bare_html():
    return BARE_PAGE


@pytest.fixture()
def make_context():
    """Build an AuditContext from markup, optionally with explicit options."""
    def _make(html: str = GOOD_PAGE, url: str = "https://smilebright.example/family-dentistry", **options):
        return build_context(url, html, options=AuditOptions(**options) if options else None)
    return _make


@pytest.fixture()
def good_context(make_context) -> AuditContext:
    return make_context(GOOD_PAGE, check_local=True, check_eeat=True)


@pytest.fixture()
def bare_context(make_context) -> AuditContext:
    return make_context(BARE_PAGE, url="http://bare.example/")


def stub_check(
    check_id: str,
    result=None,
    *,
    category: Category = Category.TECHNICAL,
    weight: int = 5,
    severity: Severity = Severity.WARNING,
    evaluate=None,
    fix_hint: Optional[str] = "Fix it",
) -> Check:
    """A registry entry whose evaluate returns ``result`` (or runs ``evaluate``)."""
    if evaluate is None:
        outcome = result or CheckResult(passed=True, status=CheckStatus.PASSED)

        def evaluate(ctx):
            return outcome

    return Check(
        id=check_id,
        name=check_id.replace("-", " ").title(),
        description=f"Stub check {check_id}",
        category=category,
        weight=weight,
        severity=severity,
        evaluate=evaluate,
        fix_hint=fix_hint,
    )


def audit_result(
    check_id: str,
    *,
    passed: bool,
    status: Optional[CheckStatus] = None,
    category: Category = Category.TECHNICAL,
    weight: int = 5,
    severity: Severity = Severity.WARNING,
    fix_hint: Optional[str] = None,
    details: Optional[str] = None,
) -> AuditCheckResult:
    """A finished check result, for feeding the scorer directly."""
    if status is None:
        status = CheckStatus.PASSED if passed else CheckStatus.FAILED
    return AuditCheckResult(
        check_id=check_id,
        check_name=check_id.replace("-", " ").title(),
        category=category,
        weight=weight,
        severity=severity,
        passed=passed,
        status=status,
        details=details,
        fix_hint=fix_hint,
    )
