"""Group endpoints, including the images inside and outside a group."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_db, group_list_request, image_list_request, require_token, tag_list_request
from gallery.schema.group import GroupCreate, GroupRead, GroupUpdate
from gallery.schema.image import ImageRead
from gallery.schema.pagination import ListEnvelope, ListRequest
from gallery.schema.tag import TagRead
from gallery.services.engines import group_controller, image_controller, tag_controller

router = APIRouter()


@router.get("/groups", response_model=ListEnvelope[GroupRead])
async def list_groups(
    request: ListRequest = Depends(group_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[GroupRead]:
    """List groups matching the query, paginated and sorted."""
    return await group_controller.list(session, request)


@router.post("/groups", response_model=GroupRead, status_code=status.HTTP_201_CREATED)
async def create_group(
    payload: GroupCreate,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> GroupRead:
    return await group_controller.create(session, payload)


@router.get("/groups/{group_id}", response_model=GroupRead)
async def get_group(group_id: uuid.UUID, session: AsyncSession = Depends(get_db)) -> GroupRead:
    return await group_controller.get(session, group_id)


@router.put("/groups/{group_id}", response_model=GroupRead)
async def update_group(
    group_id: uuid.UUID,
    payload: GroupUpdate,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> GroupRead:
    return await group_controller.update(session, group_id, payload)


@router.delete(
    "/groups/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    response_model=None,
)
async def delete_group(
    group_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> None:
    await group_controller.delete(session, group_id)


@router.get("/groups/{group_id}/images", response_model=ListEnvelope[ImageRead])
async def list_group_images(
    group_id: uuid.UUID,
    request: ListRequest = Depends(image_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[ImageRead]:
    """List the images inside a group."""
    await group_controller.get(session, group_id)
    return await image_controller.list_related(session, group_id, "groups", request)


@router.get("/groups/{group_id}/images/excluded", response_model=ListEnvelope[ImageRead])
async def list_images_not_in_group(
    group_id: uuid.UUID,
    request: ListRequest = Depends(image_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[ImageRead]:
    """List the images that are not in a group, e.g. candidates to add to it."""
    await group_controller.get(session, group_id)
    return await image_controller.list_excluding(session, group_id, "groups", request)


@router.get("/groups/{group_id}/images/{image_id}", response_model=ImageRead)
async def get_group_image(
    group_id: uuid.UUID,
    image_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
) -> ImageRead:
    """Return an image only if it belongs to the group."""
    return await image_controller.get_related(session, group_id, image_id, "groups")


@router.get("/groups/{group_id}/tags", response_model=ListEnvelope[TagRead])
async def list_group_tags(
    group_id: uuid.UUID,
    request: ListRequest = Depends(tag_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[TagRead]:
    await group_controller.get(session, group_id)
    return await tag_controller.list_related(session, group_id, "groups", request)
