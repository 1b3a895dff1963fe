"""Normalize page/limit request parameters into bounded limit/offset values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from gallery.core.config import settings
from gallery.core.errors import ValidationError

# Largest offset a signed 64-bit SQL integer can carry.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True, slots=True)
class PageWindow:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return self.page * self.limit


def non_negative_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a non-negative integer.")
    if isinstance(value, str):
        stripped = value.strip()
        if not (stripped.isascii() and stripped.isdigit()):
            raise ValidationError(f"{name} must be a non-negative integer.")
        return int(stripped)
    if not isinstance(value, int) or value < 0:
        raise ValidationError(f"{name} must be a non-negative integer.")
    return value


def check_offset(offset: int) -> int:
    """Reject offsets the database cannot represent."""
    if offset > MAX_OFFSET:
        raise ValidationError(f"page is too large; the row offset must not exceed {MAX_OFFSET}.")
    return offset


def paginate(page: Any = None, limit: Any = None, *, max_limit: int | None = None) -> PageWindow:
    """Compute the page window, applying the configured defaults when absent."""
    resolved_page = 0 if page is None else non_negative_int("page", page)
    resolved_limit = settings.default_page_limit if limit is None else non_negative_int("limit", limit)
    ceiling = settings.max_page_limit if max_limit is None else max_limit
    if resolved_limit > ceiling:
        raise ValidationError(f"limit must not exceed {ceiling}.")
    check_offset(resolved_page * resolved_limit)
    return PageWindow(page=resolved_page, limit=resolved_limit)


def page_count(total: int, limit: int) -> int:
    """Return how many pages of `limit` rows hold `total` rows."""
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
