from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError


@pytest.mark.asyncio
async def test_health_reports_ok(client):
    for path in ("/health", "/api/health"):
        response = await client.get(path)
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}


@pytest.mark.asyncio
async def test_health_degrades_when_database_fails(client, session, monkeypatch):
    async def _broken_execute(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(session, "execute", _broken_execute)

    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "degraded", "database": "unreachable"}
