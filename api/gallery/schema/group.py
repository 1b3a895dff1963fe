"""Group request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from gallery.models.image import DESCRIPTION_MAX_LENGTH
from gallery.schema.base import CamelModel, HttpUrlStr, Timestamped, reject_nulls

REQUIRED_GROUP_FIELDS = ("thumbnail_url", "image_url", "title")


class GroupCreate(CamelModel):
    """Payload for creating a new group."""
    thumbnail_url: HttpUrlStr
    image_url: HttpUrlStr
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class GroupUpdate(CamelModel):
    """Partial group update."""
    thumbnail_url: HttpUrlStr | None = None
    image_url: HttpUrlStr | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @model_validator(mode="before")
    @classmethod
    def _required_fields_not_null(cls, values: Any) -> Any:
        return reject_nulls(values, REQUIRED_GROUP_FIELDS)


class GroupRead(Timestamped):
    """Group representation returned by the API."""
    thumbnail_url: str
    image_url: str
    title: str
    description: str | None = None
