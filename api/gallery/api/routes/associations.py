"""Endpoints for the image-group, image-tag, and group-tag join tables."""

import uuid
from typing import Any, Callable

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_db, join_list_request, require_token
from gallery.schema.association import (
    GroupTagCreate,
    GroupTagRead,
    ImageGroupCreate,
    ImageGroupRead,
    ImageTagCreate,
    ImageTagRead,
)
from gallery.schema.pagination import ListEnvelope, ListRequest
from gallery.services.crud_controller import CrudController
from gallery.services.engines import group_tag_controller, image_group_controller, image_tag_controller


def build_join_router(
    controller: CrudController,
    create_schema: type[BaseModel],
    read_schema: type[BaseModel],
    list_request: Callable[..., ListRequest],
) -> APIRouter:
    """Build list/get/create/delete routes for one association table."""
    router = APIRouter()

    @router.get("", response_model=ListEnvelope[read_schema])
    async def list_links(
        request: ListRequest = Depends(list_request),
        session: AsyncSession = Depends(get_db),
    ) -> Any:
        return await controller.list(session, request)

    @router.post("", response_model=read_schema, status_code=status.HTTP_201_CREATED)
    async def create_link(
        payload: create_schema,  # type: ignore[valid-type]
        session: AsyncSession = Depends(get_db),
        _: str = Depends(require_token),
    ) -> Any:
        return await controller.create(session, payload)

    @router.get("/{link_id}", response_model=read_schema)
    async def get_link(link_id: uuid.UUID, session: AsyncSession = Depends(get_db)) -> Any:
        return await controller.get(session, link_id)

    @router.delete(
        "/{link_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        response_model=None,
    )
    async def delete_link(
        link_id: uuid.UUID,
        session: AsyncSession = Depends(get_db),
        _: str = Depends(require_token),
    ) -> None:
        await controller.delete(session, link_id)

    return router


image_groups_router = build_join_router(
    image_group_controller, ImageGroupCreate, ImageGroupRead, join_list_request("imageId", "groupId")
)
image_tags_router = build_join_router(
    image_tag_controller, ImageTagCreate, ImageTagRead, join_list_request("imageId", "tagId")
)
group_tags_router = build_join_router(
    group_tag_controller, GroupTagCreate, GroupTagRead, join_list_request("groupId", "tagId")
)
