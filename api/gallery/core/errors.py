"""Typed error taxonomy shared by the query engine, controllers, and routes.

Invariants:
- Every error carries a kind, an HTTP status code, and a user-facing message.
- Internal errors never expose storage detail in their message.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

INTERNAL_ERROR_MESSAGE = "Internal server error."


def describe_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Flatten pydantic error entries into one `loc: msg; ...` line."""
    problems = []
    for error in errors:
        location = ".".join(str(part) for part in error["loc"]) or "body"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


class GalleryError(Exception):
    """Base class for errors surfaced to API callers."""

    kind: str = "error"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        """Render the error as the `{status, message}` response body."""
        return {"status": self.status_code, "message": self.message}


class ValidationError(GalleryError):
    """Raised for malformed input detected before any storage call."""

    kind = "validation"
    status_code = 400


class NotFoundError(GalleryError):
    """Raised when a requested id or relation does not exist."""

    kind = "not_found"
    status_code = 404

    @classmethod
    def for_entity(cls, label: str, entity_id: Any) -> "NotFoundError":
        return cls(f"{label}, {entity_id}, deleted or does not exist.")


class InternalError(GalleryError):
    """Raised when the storage layer fails unexpectedly."""

    kind = "internal"
    status_code = 500

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)
