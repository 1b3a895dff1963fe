"""Image request/response schemas."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import Field, model_validator

from gallery.models.image import DESCRIPTION_MAX_LENGTH
from gallery.schema.base import CamelModel, HttpUrlStr, Timestamped, reject_nulls

REQUIRED_IMAGE_FIELDS = ("thumbnail_url", "image_url", "title", "width", "height", "capture_date")


class ImageCreate(CamelModel):
    """Payload for creating a new image."""
    thumbnail_url: HttpUrlStr
    image_url: HttpUrlStr
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    location: str | None = Field(default=None, max_length=255)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    capture_date: date


class ImageUpdate(CamelModel):
    """Partial image update; only fields present in the body are replaced."""
    thumbnail_url: HttpUrlStr | None = None
    image_url: HttpUrlStr | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    location: str | None = Field(default=None, max_length=255)
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)
    capture_date: date | None = None

    @model_validator(mode="before")
    @classmethod
    def _required_fields_not_null(cls, values: Any) -> Any:
        return reject_nulls(values, REQUIRED_IMAGE_FIELDS)


class ImageRead(Timestamped):
    """Image representation returned by the API."""
    thumbnail_url: str
    image_url: str
    title: str
    description: str | None = None
    location: str | None = None
    width: int
    height: int
    capture_date: date
