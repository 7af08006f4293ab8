"""Read-only input bundle handed to every check."""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

from bs4 import BeautifulSoup


@dataclass(frozen=True)
class BusinessInfo:
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None


@dataclass(frozen=True)
class PageMeta:
    title: Optional[str] = None
    description: Optional[str] = None
    canonical: Optional[str] = None


@dataclass(frozen=True)
class PerformanceMetrics:
    """Core Web Vitals, as reported by Lighthouse/CrUX."""
    lcp: Optional[float] = None
    fid: Optional[float] = None
    cls: Optional[float] = None
    inp: Optional[float] = None
    ttfb: Optional[float] = None


@dataclass(frozen=True)
class AuditOptions:
    """Flags checks use to skip themselves.

    None means "not set": the runner fills unset flags from its own defaults.
    """
    check_local: Optional[bool] = None
    check_eeat: Optional[bool] = None
    industry: Optional[str] = None

    def merged_over(self, defaults: "AuditOptions") -> "AuditOptions":
        """Return options where every flag set here wins over ``defaults``."""
        return AuditOptions(
            check_local=self.check_local if self.check_local is not None else defaults.check_local,
            check_eeat=self.check_eeat if self.check_eeat is not None else defaults.check_eeat,
            industry=self.industry if self.industry is not None else defaults.industry,
        )


@dataclass(frozen=True)
class AuditContext:
    """Page under audit. Checks must treat it as read-only."""
    url: str
    html: str
    headers: dict[str, str] = field(default_factory=dict)
    business: Optional[BusinessInfo] = None
    meta: Optional[PageMeta] = None
    performance: Optional[PerformanceMetrics] = None
    options: AuditOptions = field(default_factory=AuditOptions)

    @cached_property
    def soup(self) -> BeautifulSoup:
        """Parsed markup, shared by all checks of a run. Do not mutate."""
        return BeautifulSoup(self.html, "lxml")


def extract_page_meta(soup: BeautifulSoup) -> PageMeta:
    """Pull title, description and canonical out of already-fetched markup."""
    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else None

    desc_tag = soup.find("meta", attrs={"name": "description"})
    description = desc_tag.get("content") if desc_tag else None

    canonical_tag = soup.find("link", rel="canonical")
    canonical = canonical_tag.get("href") if canonical_tag else None

    return PageMeta(
        title=title or None,
        description=description or None,
        canonical=canonical or None,
    )


def build_context(
    url: str,
    html: str,
    headers: Optional[dict[str, str]] = None,
    business: Optional[BusinessInfo] = None,
    performance: Optional[PerformanceMetrics] = None,
    options: Optional[AuditOptions] = None,
) -> AuditContext:
    """Assemble an AuditContext from markup the caller already has.

    No network access happens here; ``meta`` is derived from the markup.
    """
    return AuditContext(
        url=url,
        html=html,
        headers=dict(headers or {}),
        business=business,
        meta=extract_page_meta(BeautifulSoup(html, "lxml")),
        performance=performance,
        options=options or AuditOptions(),
    )
