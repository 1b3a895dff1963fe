"""Shared helpers for API and engine tests."""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gallery.models import Group, Image, ImageGroup, Tag


def image_payload(title: str, **overrides: Any) -> dict[str, Any]:
    """Return a camelCase image body accepted by POST /api/images."""
    payload = {
        "thumbnailUrl": f"https://cdn.example.com/thumbs/{title}.jpg",
        "imageUrl": f"https://cdn.example.com/full/{title}.jpg",
        "title": title,
        "description": f"{title} description",
        "location": "Lisbon",
        "width": 1600,
        "height": 1067,
        "captureDate": "2021-05-04",
    }
    payload.update(overrides)
    return payload


async def add_image(session: AsyncSession, title: str, capture_date: date = date(2021, 5, 4), **values: Any) -> Image:
    image = Image(
        thumbnail_url=f"https://cdn.example.com/thumbs/{title}.jpg",
        image_url=f"https://cdn.example.com/full/{title}.jpg",
        title=title,
        width=values.pop("width", 800),
        height=values.pop("height", 600),
        capture_date=capture_date,
        **values,
    )
    session.add(image)
    await session.commit()
    return image


async def add_group(session: AsyncSession, title: str, **values: Any) -> Group:
    group = Group(
        thumbnail_url=f"https://cdn.example.com/groups/{title}.jpg",
        image_url=f"https://cdn.example.com/groups/{title}-full.jpg",
        title=title,
        **values,
    )
    session.add(group)
    await session.commit()
    return group


async def add_tag(session: AsyncSession, name: str, **values: Any) -> Tag:
    tag = Tag(name=name, **values)
    session.add(tag)
    await session.commit()
    return tag


async def link_image(session: AsyncSession, image: Image, group: Group) -> ImageGroup:
    link = ImageGroup(image_id=image.id, group_id=group.id)
    session.add(link)
    await session.commit()
    return link
