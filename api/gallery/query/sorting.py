"""Resolve requested sort keys into a deterministic two-key ordering.

Invariants:
- A resolved ordering always has exactly two keys.
- The second key never repeats the first; `id` replaces the tiebreak when they collide.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable

from gallery.core.errors import ValidationError

FALLBACK_TIEBREAK = "id"


class SortDirection(str, enum.Enum):
    """Supported ordering directions."""
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: "SortDirection | str") -> "SortDirection":
        """Parse a direction case-insensitively, rejecting anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValidationError(f"Invalid sort direction: {value!r}. Expected ASC or DESC.")


@dataclass(frozen=True, slots=True)
class SortKey:
    """A single `(field, direction)` ordering key."""
    field: str
    direction: SortDirection = SortDirection.ASC

    def to_meta(self) -> dict[str, Any]:
        return {"sortField": self.field, "sortDirection": self.direction.value}


def resolve_sort(
    field: str | None,
    direction: SortDirection | str | None,
    *,
    default: SortKey,
    sortable: Iterable[str],
    tiebreak: str = "title",
) -> tuple[SortKey, SortKey]:
    """Return the primary key (requested or default) followed by the tiebreak key."""
    allowed = set(sortable)
    if field is not None and field not in allowed:
        raise ValidationError(f"Invalid sort field: {field!r}.")
    if direction is not None:
        resolved_direction = SortDirection.parse(direction)
    elif field is None:
        resolved_direction = default.direction
    else:
        resolved_direction = SortDirection.ASC
    primary = SortKey(field=field if field is not None else default.field, direction=resolved_direction)
    secondary_field = tiebreak if primary.field != tiebreak else FALLBACK_TIEBREAK
    return primary, SortKey(secondary_field, SortDirection.ASC)
