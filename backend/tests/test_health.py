"""Health endpoint smoke tests."""

from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from roomescape.api import deps
from roomescape.main import app

pytestmark = pytest.mark.asyncio


class _UnreachableSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionError("database is down"))


async def test_healthcheck_reports_database(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["database"] == "ok"
    assert payload["service"] == "Room Escape Reservation API"
    assert payload["timezone"] == "UTC"
    assert response.headers["X-Request-ID"]


async def test_healthcheck_degrades_without_database(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]

    async def _unreachable():
        yield _UnreachableSession()

    app.dependency_overrides[deps.get_db_session] = _unreachable
    try:
        response = await client.get("/api/v1/health")
    finally:
        app.dependency_overrides.pop(deps.get_db_session, None)

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unavailable"
