"""Seed script for demo gallery data in local/dev environments."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.db.session import async_session, create_tables
from gallery.models import Group, Image, ImageGroup
from gallery.schema.association import ImageGroupCreate
from gallery.schema.group import GroupCreate
from gallery.schema.image import ImageCreate
from gallery.schema.tag import TagCreate
from gallery.services.engines import (
    group_controller,
    group_engine,
    image_controller,
    image_engine,
    image_group_controller,
    tag_controller,
    tag_engine,
)

TAG_COUNT = 10
GROUP_COUNT = 4
IMAGE_COUNT = 100
PHOTO_HOST = "https://picsum.photos/seed"
FIRST_CAPTURE_DATE = date(2019, 1, 1)
LOCATIONS = ("Lisbon", "Kyoto", "Reykjavik", "Oaxaca", None)

logger = logging.getLogger("gallery.scripts.seed")


def tag_name(index: int) -> str:
    return f"demo-tag-{index:02d}"


def group_title(index: int) -> str:
    return f"Demo Group {index + 1}"


def image_title(index: int) -> str:
    return f"Demo Image {index + 1:03d}"


def _photo_urls(key: str, width: int, height: int) -> tuple[str, str]:
    return f"{PHOTO_HOST}/{key}/200/200", f"{PHOTO_HOST}/{key}/{width}/{height}"


async def seed(session: AsyncSession | None = None) -> dict[str, int]:
    """Seed demo data into the database and return how many rows were created."""
    if session is None:
        async with async_session() as managed_session:
            return await _seed_session(managed_session)
    return await _seed_session(session)


async def _seed_session(session: AsyncSession) -> dict[str, int]:
    created = {
        "tags": await _ensure_tags(session),
        "groups": await _ensure_groups(session),
        "images": await _ensure_images(session),
    }
    created["imageGroups"] = await _ensure_image_groups(session)
    logger.info("Seed complete", extra=created)
    return created


async def _ensure_tags(session: AsyncSession) -> int:
    created = 0
    for index in range(TAG_COUNT):
        existing = await tag_engine.list(session, limit=1, filters={"name": tag_name(index)})
        if existing.total_count:
            continue
        await tag_controller.create(
            session, TagCreate(name=tag_name(index), description=f"Demo tag number {index + 1}")
        )
        created += 1
    return created


async def _ensure_groups(session: AsyncSession) -> int:
    created = 0
    for index in range(GROUP_COUNT):
        title = group_title(index)
        existing = await group_engine.list(session, limit=1, filters={"title": title})
        if existing.total_count:
            continue
        thumbnail_url, image_url = _photo_urls(f"group-{index}", 1600, 900)
        await group_controller.create(
            session,
            GroupCreate(
                thumbnail_url=thumbnail_url,
                image_url=image_url,
                title=title,
                description=f"A demo album holding every {GROUP_COUNT}th image.",
            ),
        )
        created += 1
    return created


async def _ensure_images(session: AsyncSession) -> int:
    created = 0
    for index in range(IMAGE_COUNT):
        title = image_title(index)
        existing = await image_engine.list(session, limit=1, filters={"title": title})
        if existing.total_count:
            continue
        width, height = (1600, 1067) if index % 3 else (1067, 1600)
        thumbnail_url, image_url = _photo_urls(f"image-{index}", width, height)
        await image_controller.create(
            session,
            ImageCreate(
                thumbnail_url=thumbnail_url,
                image_url=image_url,
                title=title,
                description=f"Demo photo {index + 1} of {IMAGE_COUNT}.",
                location=LOCATIONS[index % len(LOCATIONS)],
                width=width,
                height=height,
                capture_date=FIRST_CAPTURE_DATE + timedelta(days=index * 7),
            ),
        )
        created += 1
    return created


async def _ensure_image_groups(session: AsyncSession) -> int:
    """Place each demo image in one demo group, round robin."""
    groups = (
        await session.execute(
            select(Group).where(Group.title.in_([group_title(i) for i in range(GROUP_COUNT)])).order_by(Group.title)
        )
    ).scalars().all()
    if not groups:
        return 0
    images = (
        await session.execute(
            select(Image).where(Image.title.in_([image_title(i) for i in range(IMAGE_COUNT)])).order_by(Image.title)
        )
    ).scalars().all()
    linked = set(
        (await session.execute(select(ImageGroup.image_id).where(ImageGroup.group_id.in_([g.id for g in groups]))))
        .scalars()
        .all()
    )
    created = 0
    for index, image in enumerate(images):
        if image.id in linked:
            continue
        group = groups[index % len(groups)]
        await image_group_controller.create(session, ImageGroupCreate(image_id=image.id, group_id=group.id))
        created += 1
    return created


def main() -> None:
    """Create missing tables and seed demo data."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s [%(levelname)s] %(message)s")

    async def _run() -> None:
        await create_tables()
        await seed()

    asyncio.run(_run())


if __name__ == "__main__":
    main()
