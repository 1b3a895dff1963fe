from __future__ import annotations

from datetime import date

import pytest

from gallery.core.errors import ValidationError
from gallery.schema.pagination import ListRequest
from gallery.services.engines import image_controller, tag_controller
from gallery.tests.utils import add_image


@pytest.mark.asyncio
async def test_list_wraps_rows_in_envelope(session):
    for index in range(7):
        await add_image(session, f"Frame {index}", capture_date=date(2020, 1, index + 1))

    envelope = await image_controller.list(session, ListRequest(page=1, limit=3))
    body = envelope.model_dump(by_alias=True, mode="json")

    assert body["limit"] == 3
    assert body["page"] == 1
    assert body["totalItems"] == 7
    assert body["pageCount"] == 3
    assert [row["title"] for row in body["rows"]] == ["Frame 3", "Frame 2", "Frame 1"]
    assert "sort" not in body
    assert envelope.sort.model_dump(by_alias=True, mode="json") == {
        "sortField": "captureDate",
        "sortDirection": "DESC",
    }
    assert "captureDate" in body["rows"][0]


@pytest.mark.asyncio
async def test_list_rejects_negative_paging_before_querying(session, monkeypatch):
    async def _unexpected(*args, **kwargs):
        raise AssertionError("engine should not be called")

    monkeypatch.setattr(image_controller.engine, "list", _unexpected)
    with pytest.raises(ValidationError):
        await image_controller.list(session, ListRequest(page=-1))


@pytest.mark.asyncio
async def test_create_validates_mapping_payloads(session):
    created = await tag_controller.create(session, {"name": "  landscape  "})
    assert created.name == "landscape"

    with pytest.raises(ValidationError) as excinfo:
        await tag_controller.create(session, {"name": ""})
    assert "name" in excinfo.value.message


@pytest.mark.asyncio
async def test_update_only_replaces_sent_fields(session):
    image = await add_image(session, "Original", description="Keep me")

    updated = await image_controller.update(session, image.id, {"title": "Renamed"})
    assert updated.title == "Renamed"
    assert updated.description == "Keep me"

    cleared = await image_controller.update(session, image.id, {"description": None})
    assert cleared.description is None

    with pytest.raises(ValidationError):
        await image_controller.update(session, image.id, {"title": None})
