"""List request and response envelope schemas."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from gallery.query.sorting import SortDirection
from gallery.schema.base import CamelModel

RowT = TypeVar("RowT")


class ListRequest(BaseModel):
    """Normalized inbound list request: paging, sort, and sparse filters."""
    page: int | None = None
    limit: int | None = None
    sort_field: str | None = None
    sort_direction: str | None = None
    filters: dict[str, Any] = Field(default_factory=dict)

    @property
    def sort(self) -> tuple[str | None, str | None] | None:
        if self.sort_field is None and self.sort_direction is None:
            return None
        return (self.sort_field, self.sort_direction)


class SortMeta(CamelModel):
    """Sort actually applied to a list query."""
    sort_field: str
    sort_direction: SortDirection


class ListEnvelope(CamelModel, Generic[RowT]):
    """Uniform list response wrapper."""
    limit: int
    page: int
    total_items: int
    page_count: int
    rows: list[RowT]
    # Not serialized: the list body is exactly the five fields above.
    sort: SortMeta | None = Field(default=None, exclude=True)
