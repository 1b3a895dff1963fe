"""Turn sparse field/value mappings into SQL predicates."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from sqlalchemy import ColumnElement

LIKE_ESCAPE = "\\"


def sparse_filter(recognized: Iterable[str], values: Mapping[str, Any] | None) -> dict[str, Any]:
    """Keep only recognized fields whose value is not None."""
    if not values:
        return {}
    allowed = set(recognized)
    return {name: value for name, value in values.items() if name in allowed and value is not None}


def _like_pattern(value: Any) -> str:
    text = str(value)
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return f"%{text}%"


def build_filter(
    columns: Mapping[str, ColumnElement[Any]],
    values: Mapping[str, Any] | None,
    pattern_fields: Iterable[str] = (),
) -> list[ColumnElement[bool]]:
    """Build WHERE clauses for the non-null recognized fields in `values`.

    `columns` maps each recognized field name to the column it filters on.
    Fields named in `pattern_fields` match case-insensitively on a substring;
    everything else is an equality test. An empty result means no WHERE.
    """
    patterns = set(pattern_fields)
    clauses: list[ColumnElement[bool]] = []
    for name, value in sparse_filter(columns.keys(), values).items():
        column = columns[name]
        if name in patterns:
            clauses.append(column.ilike(_like_pattern(value), escape=LIKE_ESCAPE))
        else:
            clauses.append(column == value)
    return clauses
