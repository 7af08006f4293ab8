"""Check definition and the markup helpers checks share."""

import json
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from bs4 import BeautifulSoup

from ..context import AuditContext
from ..models import Category, CheckResult, CheckStatus, Severity, Value


Evaluate = Callable[[AuditContext], Union[CheckResult, Awaitable[CheckResult]]]


@dataclass(frozen=True)
class Check:
    """A single registered audit check.

    ``evaluate`` may be a plain function or a coroutine function. It must not
    mutate the context.
    """
    id: str
    name: str
    description: str
    category: Category
    weight: int
    severity: Severity
    evaluate: Evaluate
    fix_hint: Optional[str] = None
    docs_url: Optional[str] = None
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.weight <= 10:
            raise ValueError(f"check {self.id!r}: weight must be 1-10, got {self.weight}")

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over name, description and tags."""
        needle = query.lower()
        return (
            needle in self.name.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


# Result constructors

def passed(details: Optional[str] = None, value: Value = None, expected: Value = None) -> CheckResult:
    return CheckResult(True, CheckStatus.PASSED, details, value, expected)


def failed(details: Optional[str] = None, value: Value = None, expected: Value = None) -> CheckResult:
    return CheckResult(False, CheckStatus.FAILED, details, value, expected)


def warned(details: Optional[str] = None, value: Value = None, expected: Value = None) -> CheckResult:
    return CheckResult(False, CheckStatus.WARNING, details, value, expected)


def noted(details: Optional[str] = None, value: Value = None, expected: Value = None) -> CheckResult:
    """Failing, but only informational."""
    return CheckResult(False, CheckStatus.INFO, details, value, expected)


def skipped(details: str) -> CheckResult:
    return CheckResult(True, CheckStatus.SKIPPED, details)


# Markup helpers

PHONE_RE = re.compile(r"(\(\d{3}\)\s*\d{3}[-.\s]?\d{4}|\d{3}[-.\s]\d{3}[-.\s]\d{4})")
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def _attr_pattern(name: str) -> re.Pattern:
    return re.compile(rf"^{re.escape(name)}$", re.I)


def meta_content(soup: BeautifulSoup, name: str) -> Optional[str]:
    """Content of <meta name=...> or <meta property=...>; None when absent or empty."""
    pattern = _attr_pattern(name)
    tag = soup.find("meta", attrs={"name": pattern}) or soup.find("meta", attrs={"property": pattern})
    if not tag:
        return None
    return tag.get("content") or None


def page_title(soup: BeautifulSoup) -> Optional[str]:
    title_tag = soup.find("title")
    if not title_tag:
        return None
    return title_tag.get_text(strip=True) or None


def canonical_href(soup: BeautifulSoup) -> Optional[str]:
    for link in soup.find_all("link", href=True):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if any(r.lower() == "canonical" for r in rel):
            return link["href"] or None
    return None


def count_headings(soup: BeautifulSoup, level: int) -> int:
    return len(soup.find_all(f"h{level}"))


def visible_text(html: str) -> str:
    """Page text with scripts and styles removed.

    Works on a private parse so the shared context soup is never modified.
    """
    content_soup = BeautifulSoup(html, "lxml")
    for tag in content_soup.find_all(["script", "style", "noscript", "template"]):
        tag.decompose()
    return re.sub(r"\s+", " ", content_soup.get_text(" ")).strip()


def link_hrefs(soup: BeautifulSoup) -> list[str]:
    return [a["href"] for a in soup.find_all("a", href=True)]


def extract_json_ld(soup: BeautifulSoup) -> list[dict[str, Any]]:
    """Extract all JSON-LD objects from the page, skipping invalid blocks."""
    results: list[dict[str, Any]] = []

    for script in soup.find_all("script", type="application/ld+json"):
        content = script.string
        if not content:
            continue
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            continue
        items = data if isinstance(data, list) else [data]
        results.extend(item for item in items if isinstance(item, dict))

    return results


def get_schema_types(data: dict[str, Any]) -> set[str]:
    """Extract @type values from JSON-LD, following @graph."""
    types: set[str] = set()

    type_val = data.get("@type")
    if isinstance(type_val, list):
        types.update(t for t in type_val if isinstance(t, str))
    elif isinstance(type_val, str):
        types.add(type_val)

    for item in data.get("@graph") or []:
        if isinstance(item, dict):
            types.update(get_schema_types(item))

    return types


def schema_types(soup: BeautifulSoup) -> set[str]:
    """Schema.org types declared on the page, via JSON-LD or microdata."""
    types: set[str] = set()
    for block in extract_json_ld(soup):
        types.update(get_schema_types(block))

    for tag in soup.find_all(itemtype=True):
        for itemtype in tag["itemtype"].split():
            if "schema.org" in itemtype:
                types.add(itemtype.rstrip("/").rsplit("/", 1)[-1])

    return types
