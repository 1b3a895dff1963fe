"""Association (join-table) request/response schemas."""

from __future__ import annotations

from uuid import UUID

from gallery.schema.base import CamelModel, ORMModel


class ImageGroupCreate(CamelModel):
    """Payload for adding an image to a group."""
    image_id: UUID
    group_id: UUID


class ImageGroupRead(ORMModel):
    id: UUID
    image_id: UUID
    group_id: UUID


class ImageTagCreate(CamelModel):
    """Payload for tagging an image."""
    image_id: UUID
    tag_id: UUID


class ImageTagRead(ORMModel):
    id: UUID
    image_id: UUID
    tag_id: UUID


class GroupTagCreate(CamelModel):
    """Payload for tagging a group."""
    group_id: UUID
    tag_id: UUID


class GroupTagRead(ORMModel):
    id: UUID
    group_id: UUID
    tag_id: UUID
