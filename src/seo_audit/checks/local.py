"""Local SEO checks. All of them skip unless ``options.check_local`` is set."""

import re

from ..context import AuditContext
from ..models import Category, CheckResult, Severity
from .base import PHONE_RE, Check, failed, noted, passed, skipped, warned

ADDRESS_RE = re.compile(r"\b(street|ave|avenue|blvd|road|rd|suite|ste|floor)\b", re.I)
LOCAL_SCHEMA_RE = re.compile(r"LocalBusiness|Organization")
MAPS_RE = re.compile(r"maps\.google\.com|google\.com/maps|goo\.gl/maps")
SERVICE_AREA_RE = re.compile(r"serving|service area|located in|based in|\b(city|county|region|area)\b", re.I)

DISABLED = "Local SEO check disabled"


def check_nap(ctx: AuditContext) -> CheckResult:
    if not ctx.options.check_local:
        return skipped(DISABLED)

    has_phone = bool(PHONE_RE.search(ctx.html))
    has_address = bool(ADDRESS_RE.search(ctx.html))

    if not has_phone and not has_address:
        return failed("No contact information found")
    if not has_phone:
        return warned("Phone number not found")
    if not has_address:
        return warned("Address not found")
    return passed("NAP information present")


def check_local_schema(ctx: AuditContext) -> CheckResult:
    if not ctx.options.check_local:
        return skipped(DISABLED)

    if not LOCAL_SCHEMA_RE.search(ctx.html):
        return failed("No LocalBusiness schema found")
    return passed("LocalBusiness schema present")


def check_google_maps(ctx: AuditContext) -> CheckResult:
    if not ctx.options.check_local:
        return skipped(DISABLED)

    if not MAPS_RE.search(ctx.html):
        return noted("No Google Maps embed found")
    return passed("Google Maps present")


def check_service_areas(ctx: AuditContext) -> CheckResult:
    if not ctx.options.check_local:
        return skipped(DISABLED)

    if SERVICE_AREA_RE.search(ctx.html):
        return passed("Service area content found")
    return noted("No service area mentions")


LOCAL_CHECKS = [
    Check(
        id="nap-present",
        name="NAP Information",
        description="Name, Address, Phone visible on page",
        category=Category.LOCAL,
        weight=10,
        severity=Severity.CRITICAL,
        evaluate=check_nap,
        fix_hint="Display business name, address, and phone number prominently",
        tags=("nap", "consistency", "local"),
    ),
    Check(
        id="local-schema",
        name="LocalBusiness Schema",
        description="LocalBusiness structured data present",
        category=Category.LOCAL,
        weight=9,
        severity=Severity.WARNING,
        evaluate=check_local_schema,
        fix_hint="Add LocalBusiness Schema.org structured data",
        tags=("schema", "local-business", "local"),
    ),
    Check(
        id="google-maps",
        name="Google Maps Embed",
        description="Google Maps embed or link present",
        category=Category.LOCAL,
        weight=5,
        severity=Severity.INFO,
        evaluate=check_google_maps,
        fix_hint="Embed Google Maps or link to Google Maps location",
        tags=("maps", "local"),
    ),
    Check(
        id="service-areas",
        name="Service Area Mentions",
        description="Geographic service areas mentioned",
        category=Category.LOCAL,
        weight=6,
        severity=Severity.INFO,
        evaluate=check_service_areas,
        fix_hint="Mention service areas and geographic locations you serve",
        tags=("service-area", "local"),
    ),
]
