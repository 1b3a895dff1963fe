"""Filter, sort, and pagination building blocks for entity list queries."""

from gallery.query.filters import build_filter, sparse_filter
from gallery.query.pagination import PageWindow, page_count, paginate
from gallery.query.sorting import SortDirection, SortKey, resolve_sort

__all__ = [
    "PageWindow",
    "SortDirection",
    "SortKey",
    "build_filter",
    "page_count",
    "paginate",
    "resolve_sort",
    "sparse_filter",
]
