from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_db, group_list_request, image_list_request, require_token, tag_list_request
from gallery.schema.group import GroupRead
from gallery.schema.image import ImageRead
from gallery.schema.pagination import ListEnvelope, ListRequest
from gallery.schema.tag import TagCreate, TagRead, TagUpdate
from gallery.services.engines import group_controller, image_controller, tag_controller

router = APIRouter()


@router.get("/tags", response_model=ListEnvelope[TagRead])
async def list_tags(
    request: ListRequest = Depends(tag_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[TagRead]:
    return await tag_controller.list(session, request)


@router.post("/tags", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> TagRead:
    return await tag_controller.create(session, payload)


@router.get("/tags/{tag_id}", response_model=TagRead)
async def get_tag(tag_id: uuid.UUID, session: AsyncSession = Depends(get_db)) -> TagRead:
    return await tag_controller.get(session, tag_id)


@router.put("/tags/{tag_id}", response_model=TagRead)
async def update_tag(
    tag_id: uuid.UUID,
    payload: TagUpdate,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> TagRead:
    return await tag_controller.update(session, tag_id, payload)


@router.delete(
    "/tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    response_model=None,
)
async def delete_tag(
    tag_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(require_token),
) -> None:
    await tag_controller.delete(session, tag_id)


@router.get("/tags/{tag_id}/images", response_model=ListEnvelope[ImageRead])
async def list_tagged_images(
    tag_id: uuid.UUID,
    request: ListRequest = Depends(image_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[ImageRead]:
    await tag_controller.get(session, tag_id)
    return await image_controller.list_related(session, tag_id, "tags", request)


@router.get("/tags/{tag_id}/groups", response_model=ListEnvelope[GroupRead])
async def list_tagged_groups(
    tag_id: uuid.UUID,
    request: ListRequest = Depends(group_list_request),
    session: AsyncSession = Depends(get_db),
) -> ListEnvelope[GroupRead]:
    await tag_controller.get(session, tag_id)
    return await group_controller.list_related(session, tag_id, "tags", request)
