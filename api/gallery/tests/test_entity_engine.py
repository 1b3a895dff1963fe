"""Query engine tests for listing, relation scoping, and CRUD error mapping."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from gallery.core.errors import InternalError, NotFoundError, ValidationError
from gallery.models import ImageGroup
from gallery.query.pagination import MAX_OFFSET
from gallery.query.sorting import SortDirection, SortKey
from gallery.services.engines import group_engine, image_engine, image_group_engine, tag_engine
from gallery.tests.utils import add_group, add_image, add_tag, link_image


@pytest.mark.asyncio
async def test_list_defaults_to_newest_capture_first(session):
    await add_image(session, "Older", capture_date=date(2019, 1, 1))
    await add_image(session, "Newest", capture_date=date(2023, 6, 1))
    await add_image(session, "Middle", capture_date=date(2021, 3, 1))

    page = await image_engine.list(session)
    assert [image.title for image in page.rows] == ["Newest", "Middle", "Older"]
    assert page.total_count == 3
    assert page.order == (SortKey("captureDate", SortDirection.DESC), SortKey("title", SortDirection.ASC))
    assert page.sort_meta == {"sortField": "captureDate", "sortDirection": "DESC"}


@pytest.mark.asyncio
async def test_list_breaks_ties_on_title(session):
    same_day = date(2022, 2, 2)
    for title in ("Charlie", "Alpha", "Bravo"):
        await add_image(session, title, capture_date=same_day)

    page = await image_engine.list(session, sort=("captureDate", "DESC"))
    assert [image.title for image in page.rows] == ["Alpha", "Bravo", "Charlie"]


@pytest.mark.asyncio
async def test_list_filters_and_counts_before_paging(session):
    for index in range(5):
        await add_image(session, f"Lisbon {index}", location="Lisbon")
    await add_image(session, "Kyoto 0", location="Kyoto")

    page = await image_engine.list(session, limit=2, offset=2, filters={"location": "Lisbon", "title": None})
    assert page.total_count == 5
    assert len(page.rows) == 2
    assert all(image.location == "Lisbon" for image in page.rows)


@pytest.mark.asyncio
async def test_list_reports_total_past_the_last_page(session):
    await add_image(session, "Only")

    page = await image_engine.list(session, limit=10, offset=10)
    assert page.rows == []
    assert page.total_count == 1

    counted = await image_engine.list(session, limit=0)
    assert counted.rows == []
    assert counted.total_count == 1


@pytest.mark.asyncio
async def test_list_rejects_unknown_sort_field(session):
    with pytest.raises(ValidationError):
        await image_engine.list(session, sort=("owner", "ASC"))


@pytest.mark.asyncio
async def test_tag_list_uses_id_when_sorting_by_name(session):
    await add_tag(session, "zeta")
    await add_tag(session, "alpha")

    page = await tag_engine.list(session, sort=("name", "DESC"))
    assert [tag.name for tag in page.rows] == ["zeta", "alpha"]
    assert page.order[1] == SortKey("id", SortDirection.ASC)


@pytest.mark.asyncio
async def test_related_and_excluded_lists_partition_images(session):
    group = await add_group(session, "Travel")
    other = await add_group(session, "Family")
    inside = [await add_image(session, f"In {index}") for index in range(3)]
    outside = [await add_image(session, f"Out {index}") for index in range(2)]
    for image in inside:
        await link_image(session, image, group)
    await link_image(session, outside[0], other)

    related = await image_engine.list_related_to(session, group.id, "groups")
    excluded = await image_engine.list_excluding_related(session, group.id, "groups")

    related_ids = {image.id for image in related.rows}
    excluded_ids = {image.id for image in excluded.rows}
    assert related_ids == {image.id for image in inside}
    assert excluded_ids == {image.id for image in outside}
    assert not related_ids & excluded_ids
    assert related.total_count + excluded.total_count == 5


@pytest.mark.asyncio
async def test_group_without_images_excludes_everything(session):
    group = await add_group(session, "Empty")
    await add_image(session, "Loose")

    related = await image_engine.list_related_to(session, group.id, "groups")
    excluded = await image_engine.list_excluding_related(session, group.id, "groups")
    assert related.total_count == 0
    assert [image.title for image in excluded.rows] == ["Loose"]


@pytest.mark.asyncio
async def test_get_related_requires_membership(session):
    group = await add_group(session, "Travel")
    member = await add_image(session, "Member")
    stranger = await add_image(session, "Stranger")
    await link_image(session, member, group)

    found = await image_engine.get_related(session, group.id, member.id, "groups")
    assert found.id == member.id

    with pytest.raises(NotFoundError) as excinfo:
        await image_engine.get_related(session, group.id, stranger.id, "groups")
    assert excinfo.value.message == f"Image, {stranger.id}, is not in Group, {group.id}."


@pytest.mark.asyncio
async def test_get_missing_and_malformed_ids(session):
    missing = uuid.uuid4()
    with pytest.raises(NotFoundError) as excinfo:
        await image_engine.get(session, missing)
    assert excinfo.value.message == f"Image, {missing}, deleted or does not exist."
    assert excinfo.value.status_code == 404

    with pytest.raises(ValidationError):
        await image_engine.get(session, "not-a-uuid")


@pytest.mark.asyncio
async def test_create_update_delete_round_trip(session):
    created = await group_engine.create(
        session,
        {
            "thumbnail_url": "https://cdn.example.com/g.jpg",
            "image_url": "https://cdn.example.com/g-full.jpg",
            "title": "Summer",
        },
    )
    fetched = await group_engine.get(session, str(created.id))
    assert fetched.title == "Summer"
    assert fetched.created_at is not None

    updated = await group_engine.update(session, created.id, {"description": "Beach days"})
    assert updated.description == "Beach days"
    assert updated.title == "Summer"

    assert await group_engine.delete(session, created.id) == created.id
    with pytest.raises(NotFoundError):
        await group_engine.get(session, created.id)
    with pytest.raises(NotFoundError):
        await group_engine.delete(session, created.id)


@pytest.mark.asyncio
async def test_update_rejects_id_and_unknown_fields(session):
    group = await add_group(session, "Fixed")
    with pytest.raises(ValidationError):
        await group_engine.update(session, group.id, {"id": uuid.uuid4()})
    with pytest.raises(ValidationError):
        await group_engine.update(session, group.id, {"owner": "someone"})


@pytest.mark.asyncio
async def test_integrity_failures_become_validation_errors(session):
    await add_tag(session, "duplicate")
    with pytest.raises(ValidationError):
        await tag_engine.create(session, {"name": "duplicate"})

    image = await add_image(session, "Linked")
    with pytest.raises(ValidationError):
        await image_group_engine.create(session, {"image_id": image.id, "group_id": uuid.uuid4()})

    # The session stays usable after the rollback.
    assert (await tag_engine.list(session)).total_count == 1


@pytest.mark.asyncio
async def test_deleting_a_group_removes_its_links(session):
    group = await add_group(session, "Doomed")
    image = await add_image(session, "Survivor")
    await link_image(session, image, group)

    await group_engine.delete(session, group.id)
    session.expunge_all()

    links = (await session.execute(select(ImageGroup))).scalars().all()
    assert links == []
    assert (await image_engine.get(session, image.id)).title == "Survivor"


@pytest.mark.asyncio
async def test_storage_failures_become_internal_errors(session, monkeypatch):
    async def _broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "execute", _broken_execute)
    with pytest.raises(InternalError) as excinfo:
        await image_engine.list(session)
    assert excinfo.value.message == "Error fetching images."
    assert "disk" not in excinfo.value.message


@pytest.mark.asyncio
async def test_list_rejects_offsets_the_database_cannot_hold(session):
    await add_image(session, "Only")
    with pytest.raises(ValidationError):
        await image_engine.list(session, limit=30, offset=MAX_OFFSET + 1)
    with pytest.raises(ValidationError):
        await image_engine.list(session, limit=MAX_OFFSET + 1)
