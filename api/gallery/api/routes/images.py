"""Image endpoints: listing, lookup, CRUD, and the image's groups and tags."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_db, group_list_request, image_list_request, require_token, tag_list_request
from gallery.schema.group import GroupRead
from gallery.schema.image import ImageCreate, ImageRead, ImageUpdate
from gallery.schema.pagination import ListEnvelope, ListRequest
from gallery.schema.tag import TagRead
from gallery.services.engines import group_controller, image_controller, tag_controller

router = APIRouter()


@router.get("/images", response_model=ListEnvelope[ImageRead])
async def list_images(
    request: ListRequest = Depends(image_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[ImageRead]:
    """List images matching the query, paginated and sorted."""
    return await image_controller.list(session, request)


@router.post("/images", response_model=ImageRead, status_code=status.HTTP_201_CREATED)
async def create_image(
    payload: ImageCreate,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> ImageRead:
    return await image_controller.create(session, payload)


@router.get("/images/{image_id}", response_model=ImageRead)
async def get_image(image_id: uuid.UUID, session: AsyncSession = Depends(get_db)) -> ImageRead:
    return await image_controller.get(session, image_id)


@router.put("/images/{image_id}", response_model=ImageRead)
async def update_image(
    image_id: uuid.UUID,
    payload: ImageUpdate,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> ImageRead:
    return await image_controller.update(session, image_id, payload)


@router.delete(
    "/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    response_model=None,
)
async def delete_image(
    image_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> None:
    await image_controller.delete(session, image_id)


@router.get("/images/{image_id}/groups", response_model=ListEnvelope[GroupRead])
async def list_image_groups(
    image_id: uuid.UUID,
    request: ListRequest = Depends(group_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[GroupRead]:
    """List the groups an image belongs to."""
    await image_controller.get(session, image_id)
    return await group_controller.list_related(session, image_id, "images", request)


@router.get("/images/{image_id}/tags", response_model=ListEnvelope[TagRead])
async def list_image_tags(
    image_id: uuid.UUID,
    request: ListRequest = Depends(tag_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[TagRead]:
    await image_controller.get(session, image_id)
    return await tag_controller.list_related(session, image_id, "images", request)
