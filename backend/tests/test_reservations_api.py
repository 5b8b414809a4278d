"""Reservation, waitlist and portal API tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

SLOT_DATE = "2099-01-01"


async def _authenticate(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


async def _headers(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    token = await _authenticate(client, email, password)
    return {"Authorization": f"Bearer {token}"}


def _portal_payload(ctx: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    payload = {
        "date": SLOT_DATE,
        "time_slot_id": ctx["slot_1_id"],
        "theme_id": ctx["theme_id"],
    }
    payload.update(overrides)
    return payload


async def test_portal_booking_then_waitlist_with_ranks(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["member_password"]
    first_headers = await _headers(client, app_context["member_1_email"], password)
    second_headers = await _headers(client, app_context["member_2_email"], password)

    first = await client.post(
        "/api/v1/portal/reservations",
        json=_portal_payload(app_context),
        headers=first_headers,
    )
    assert first.status_code == 201
    assert first.json()["status"] == "reserved"
    assert first.json()["member"]["id"] == app_context["member_1_id"]

    second = await client.post(
        "/api/v1/portal/reservations",
        json=_portal_payload(app_context),
        headers=second_headers,
    )
    assert second.status_code == 201
    assert second.json()["status"] == "waiting"

    mine = await client.get("/api/v1/portal/reservations", headers=second_headers)
    assert mine.status_code == 200
    body = mine.json()
    assert len(body) == 1
    assert body[0]["id"] == second.json()["id"]
    assert body[0]["waiting_rank"] == 1
    assert body[0]["status_label"] == "waiting #1"

    holder = await client.get("/api/v1/portal/reservations", headers=first_headers)
    assert holder.json()[0]["waiting_rank"] == 0
    assert holder.json()[0]["status_label"] == "reserved"


async def test_portal_rejects_duplicate_and_past_bookings(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _headers(
        client, app_context["member_1_email"], app_context["member_password"]
    )

    created = await client.post(
        "/api/v1/portal/reservations", json=_portal_payload(app_context), headers=headers
    )
    assert created.status_code == 201

    duplicate = await client.post(
        "/api/v1/portal/reservations", json=_portal_payload(app_context), headers=headers
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"]["error"] == "duplicate_booking"

    past = await client.post(
        "/api/v1/portal/reservations",
        json=_portal_payload(app_context, date="2000-01-01"),
        headers=headers,
    )
    assert past.status_code == 400
    assert past.json()["detail"]["error"] == "past_date"

    unknown = await client.post(
        "/api/v1/portal/reservations",
        json=_portal_payload(app_context, theme_id=999),
        headers=headers,
    )
    assert unknown.status_code == 400
    assert unknown.json()["detail"]["details"]["field"] == "theme_id"


async def test_portal_requires_authentication(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.get("/api/v1/portal/reservations")
    assert response.status_code == 401

    bogus = await client.get(
        "/api/v1/portal/reservations", headers={"Authorization": "Bearer not-a-token"}
    )
    assert bogus.status_code == 401


async def test_member_withdraws_waiting_but_not_reserved(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["member_password"]
    first_headers = await _headers(client, app_context["member_1_email"], password)
    second_headers = await _headers(client, app_context["member_2_email"], password)

    reserved = await client.post(
        "/api/v1/portal/reservations",
        json=_portal_payload(app_context),
        headers=first_headers,
    )
    waiting = await client.post(
        "/api/v1/portal/reservations",
        json=_portal_payload(app_context),
        headers=second_headers,
    )

    not_owner = await client.delete(
        f"/api/v1/portal/reservations/{waiting.json()['id']}", headers=first_headers
    )
    assert not_owner.status_code == 204
    own_reserved = await client.delete(
        f"/api/v1/portal/reservations/{reserved.json()['id']}", headers=first_headers
    )
    assert own_reserved.status_code == 204
    assert len((await client.get(
        "/api/v1/portal/reservations", headers=second_headers
    )).json()) == 1
    assert len((await client.get(
        "/api/v1/portal/reservations", headers=first_headers
    )).json()) == 1

    withdrawn = await client.delete(
        f"/api/v1/portal/reservations/{waiting.json()['id']}", headers=second_headers
    )
    assert withdrawn.status_code == 204
    assert (
        await client.get("/api/v1/portal/reservations", headers=second_headers)
    ).json() == []


async def test_admin_cancel_promotes_waiting_member(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    admin_headers = await _headers(
        client, app_context["admin_email"], app_context["admin_password"]
    )

    reserved = await client.post(
        "/api/v1/reservations",
        json=_portal_payload(app_context, member_id=app_context["member_1_id"]),
        headers=admin_headers,
    )
    assert reserved.status_code == 201
    waiting = await client.post(
        "/api/v1/reservations",
        json=_portal_payload(app_context, member_id=app_context["member_2_id"]),
        headers=admin_headers,
    )
    assert waiting.json()["status"] == "waiting"

    queue = await client.get("/api/v1/reservations/waiting", headers=admin_headers)
    assert [item["id"] for item in queue.json()] == [waiting.json()["id"]]

    cancelled = await client.delete(
        f"/api/v1/reservations/{reserved.json()['id']}", headers=admin_headers
    )
    assert cancelled.status_code == 204

    remaining = await client.get("/api/v1/reservations", headers=admin_headers)
    assert remaining.status_code == 200
    assert [(item["id"], item["status"]) for item in remaining.json()] == [
        (waiting.json()["id"], "reserved")
    ]
    queue = await client.get("/api/v1/reservations/waiting", headers=admin_headers)
    assert queue.json() == []

    missing = await client.delete("/api/v1/reservations/999", headers=admin_headers)
    assert missing.status_code == 204


async def test_admin_filters_reservations(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    admin_headers = await _headers(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    for member_key, slot_key, day in (
        ("member_1_id", "slot_1_id", "2099-01-01"),
        ("member_2_id", "slot_2_id", "2099-01-01"),
        ("member_1_id", "slot_1_id", "2099-03-01"),
    ):
        response = await client.post(
            "/api/v1/reservations",
            json=_portal_payload(
                app_context,
                date=day,
                time_slot_id=app_context[slot_key],
                member_id=app_context[member_key],
            ),
            headers=admin_headers,
        )
        assert response.status_code == 201

    filtered = await client.get(
        "/api/v1/reservations",
        params={
            "member_id": app_context["member_1_id"],
            "date_from": "2099-01-01",
            "date_to": "2099-01-31",
        },
        headers=admin_headers,
    )
    assert filtered.status_code == 200
    assert len(filtered.json()) == 1
    assert filtered.json()[0]["date"] == "2099-01-01"

    inverted = await client.get(
        "/api/v1/reservations",
        params={"date_from": "2099-02-01", "date_to": "2099-01-01"},
        headers=admin_headers,
    )
    assert inverted.status_code == 400


async def test_staff_routes_reject_members(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _headers(
        client, app_context["member_1_email"], app_context["member_password"]
    )

    listing = await client.get("/api/v1/reservations", headers=headers)
    assert listing.status_code == 403
    cancel = await client.delete("/api/v1/reservations/1", headers=headers)
    assert cancel.status_code == 403
    create = await client.post(
        "/api/v1/reservations",
        json=_portal_payload(app_context, member_id=app_context["member_1_id"]),
        headers=headers,
    )
    assert create.status_code == 403
