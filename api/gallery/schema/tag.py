"""Tag request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from gallery.schema.base import CamelModel, Timestamped, reject_nulls


class TagCreate(CamelModel):
    """Payload for creating a new tag."""
    name: str = Field(min_length=1, max_length=64)
    description: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("Tag name cannot be blank")
        return name


class TagUpdate(CamelModel):
    """Partial tag update."""
    name: str | None = Field(default=None, min_length=1, max_length=64)
    description: str | None = Field(default=None, max_length=255)

    @model_validator(mode="before")
    @classmethod
    def _name_not_null(cls, values: Any) -> Any:
        return reject_nulls(values, ("name",))


class TagRead(Timestamped):
    """Tag representation returned by the API."""
    name: str
    description: str | None = None
