"""Registry of audit checks.

The registry is built once at import time and never changes afterwards.
Adding a check means appending it to one of the category lists below; the
runner and scorer read category and weight off the check itself.
"""

from typing import Iterable, Optional, Sequence, Union

from ..models import Category
from .base import Check
from .technical import TECHNICAL_CHECKS
from .content import CONTENT_CHECKS
from .local import LOCAL_CHECKS
from .structured_data import SCHEMA_CHECKS
from .eeat import EEAT_CHECKS
from .ai_search import AI_SEARCH_CHECKS


def build_registry(*groups: Iterable[Check]) -> tuple[Check, ...]:
    """Concatenate check groups, rejecting duplicate ids."""
    registry: list[Check] = []
    seen: set[str] = set()
    for group in groups:
        for check in group:
            if check.id in seen:
                raise ValueError(f"duplicate check id: {check.id!r}")
            seen.add(check.id)
            registry.append(check)
    return tuple(registry)


ALL_CHECKS: tuple[Check, ...] = build_registry(
    TECHNICAL_CHECKS,
    CONTENT_CHECKS,
    LOCAL_CHECKS,
    SCHEMA_CHECKS,
    EEAT_CHECKS,
    AI_SEARCH_CHECKS,
)

_BY_ID = {check.id: check for check in ALL_CHECKS}


def all_checks() -> tuple[Check, ...]:
    return ALL_CHECKS


def get_check_categories() -> list[Category]:
    return list(Category)


def get_checks_by_category(
    category: Union[Category, str], registry: Sequence[Check] = ALL_CHECKS
) -> list[Check]:
    """Checks in one category; an unknown category yields an empty list."""
    wanted = Category.parse(category)
    return [check for check in registry if check.category is wanted]


def get_check_by_id(check_id: str) -> Optional[Check]:
    return _BY_ID.get(check_id)


def get_checks_by_ids(check_ids: Iterable[str], registry: Sequence[Check] = ALL_CHECKS) -> list[Check]:
    """Checks matching ``check_ids`` in registry order. Unknown ids are ignored."""
    wanted = set(check_ids)
    return [check for check in registry if check.id in wanted]


def search_checks(query: str, registry: Sequence[Check] = ALL_CHECKS) -> list[Check]:
    return [check for check in registry if check.matches(query)]


__all__ = [
    "ALL_CHECKS",
    "Check",
    "all_checks",
    "build_registry",
    "get_check_by_id",
    "get_check_categories",
    "get_checks_by_category",
    "get_checks_by_ids",
    "search_checks",
]
