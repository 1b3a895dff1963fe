from __future__ import annotations

import pytest
from sqlalchemy import func, select

from gallery.models import Group, Image, ImageGroup, Tag
from gallery.scripts import seed as seed_script


@pytest.mark.asyncio
async def test_seed_populates_demo_gallery(session):
    created = await seed_script.seed(session=session)
    assert created == {
        "tags": seed_script.TAG_COUNT,
        "groups": seed_script.GROUP_COUNT,
        "images": seed_script.IMAGE_COUNT,
        "imageGroups": seed_script.IMAGE_COUNT,
    }

    per_group = (
        await session.execute(select(ImageGroup.group_id, func.count()).group_by(ImageGroup.group_id))
    ).all()
    assert len(per_group) == seed_script.GROUP_COUNT
    assert {count for _, count in per_group} == {seed_script.IMAGE_COUNT // seed_script.GROUP_COUNT}


@pytest.mark.asyncio
async def test_seed_is_idempotent(session):
    await seed_script.seed(session=session)
    second = await seed_script.seed(session=session)
    assert set(second.values()) == {0}

    for model, expected in (
        (Tag, seed_script.TAG_COUNT),
        (Group, seed_script.GROUP_COUNT),
        (Image, seed_script.IMAGE_COUNT),
        (ImageGroup, seed_script.IMAGE_COUNT),
    ):
        assert await session.scalar(select(func.count()).select_from(model)) == expected
