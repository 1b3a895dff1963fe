"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import associations, groups, images, tags

api_router = APIRouter()
api_router.include_router(images.router, tags=["images"])
api_router.include_router(groups.router, tags=["groups"])
api_router.include_router(tags.router, tags=["tags"])
api_router.include_router(associations.image_groups_router, prefix="/image-groups", tags=["image-groups"])
api_router.include_router(associations.image_tags_router, prefix="/image-tags", tags=["image-tags"])
api_router.include_router(associations.group_tags_router, prefix="/group-tags", tags=["group-tags"])
