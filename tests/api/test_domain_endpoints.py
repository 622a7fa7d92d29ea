"""Finance, inventory, events and roles endpoints: direct writes, reads, error envelope."""

from httpx import AsyncClient

from tests.fakes import (
    ACTIVITY_DIRECTOR,
    ADVISOR,
    OUTSIDER,
    PRESIDENT,
    TREASURER,
    VICE_PRESIDENT,
    FakeStore,
)


async def test_president_finance_crud(client: AsyncClient, auth_headers, store: FakeStore) -> None:
    headers = auth_headers(PRESIDENT)
    created = await client.post(
        "/api/v1/finance",
        json={"type": "income", "amount": 120.5, "description": "dues"},
        headers=headers,
    )
    assert created.status_code == 201
    record = created.json()["record"]
    assert record["approved"] is True
    assert record["recordedBy"] == PRESIDENT

    edited = await client.put(
        "/api/v1/finance", json={"recordId": record["id"], "notes": "March"}, headers=headers
    )
    assert edited.status_code == 200
    assert edited.json()["record"]["notes"] == "March"

    summary = await client.get("/api/v1/finance", params={"view": "summary"}, headers=headers)
    assert summary.json()["summary"] == {"income": 120.5, "expense": 0.0, "balance": 120.5}

    deleted = await client.request(
        "DELETE", "/api/v1/finance", json={"recordId": record["id"]}, headers=headers
    )
    assert deleted.status_code == 200
    assert deleted.json()["id"] == record["id"]
    assert store.finance.rows == {}


async def test_validation_error_envelope(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/finance",
        json={"type": "expense", "amount": -4, "description": "x"},
        headers=auth_headers(TREASURER),
    )
    assert response.status_code == 400
    body = response.json()
    assert body == {
        "success": False,
        "error": "VALIDATION_ERROR",
        "message": "amount must be greater than 0",
        "details": {"field": "amount"},
    }


async def test_schema_error_names_field(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/inventory",
        json={"name": "Net", "category": "fixed_asset", "unit": "pc", "quantity": "many"},
        headers=auth_headers(PRESIDENT),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
    assert response.json()["details"] == {"field": "quantity"}


async def test_edit_without_id(client: AsyncClient, auth_headers) -> None:
    response = await client.put(
        "/api/v1/inventory", json={"quantity": 3}, headers=auth_headers(PRESIDENT)
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "itemId"}


async def test_edit_unknown_id(client: AsyncClient, auth_headers) -> None:
    response = await client.put(
        "/api/v1/inventory",
        json={"itemId": "inv-404", "quantity": 3},
        headers=auth_headers(TREASURER),
    )
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_denied_domain(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/events",
        json={"title": "Quiz", "type": "other"},
        headers=auth_headers(TREASURER),
    )
    assert response.status_code == 403
    assert response.json()["details"] == {"resource": "event", "action": "add"}


async def test_inventory_listing_filters(client: AsyncClient, auth_headers) -> None:
    headers = auth_headers(PRESIDENT)
    for name, category in (("Net", "fixed_asset"), ("Grip tape", "consumable")):
        await client.post(
            "/api/v1/inventory",
            json={"name": name, "category": category, "unit": "pc"},
            headers=headers,
        )
    response = await client.get(
        "/api/v1/inventory", params={"category": "consumable"}, headers=auth_headers(ADVISOR)
    )
    assert [i["name"] for i in response.json()["items"]] == ["Grip tape"]


async def test_event_queue_then_delete_cascade(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    created = await client.post(
        "/api/v1/events",
        json={
            "title": "Ladder",
            "type": "competition",
            "groups": [{"name": "Pairs", "ticketCount": 3, "capacityPerTicket": 2}],
        },
        headers=auth_headers(PRESIDENT),
    )
    assert created.status_code == 201
    event = created.json()["event"]
    assert event["groups"][0]["capacity"] == 6
    store.events.register(event["id"], 2)

    queued = await client.request(
        "DELETE",
        "/api/v1/events",
        json={"eventId": event["id"]},
        headers=auth_headers(ACTIVITY_DIRECTOR),
    )
    assert queued.status_code == 202
    assert event["id"] in store.events.rows

    approved = await client.put(
        "/api/v1/approvals",
        json={"requestId": queued.json()["requestId"], "decision": "approve"},
        headers=auth_headers(PRESIDENT),
    )
    assert approved.status_code == 200
    assert store.events.calls == ["tickets", "registrations", "groups", "event"]
    assert event["id"] not in store.events.rows


async def test_event_statistics(client: AsyncClient, auth_headers, store: FakeStore) -> None:
    await client.post(
        "/api/v1/events",
        json={"title": "Open night", "type": "group_play", "groups": [{"name": "A", "capacity": 10}]},
        headers=auth_headers(PRESIDENT),
    )
    response = await client.get(
        "/api/v1/events", params={"view": "statistics"}, headers=auth_headers(VICE_PRESIDENT)
    )
    stats = response.json()["statistics"]
    assert stats[0]["totalCapacity"] == 10
    assert stats[0]["groupCount"] == 1
    assert stats[0]["registrationCount"] == 0


async def test_roster(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/roles", headers=auth_headers(ADVISOR))
    body = response.json()
    assert response.status_code == 200
    assert body["role"] == "advisor"
    assert body["roleName"] == "Advisor"
    assert len(body["roster"]) == 5


async def test_appoint_and_abdicate(client: AsyncClient, auth_headers, store: FakeStore) -> None:
    response = await client.post(
        "/api/v1/roles",
        json={"targetActorId": OUTSIDER, "role": "president"},
        headers=auth_headers(PRESIDENT),
    )
    assert response.status_code == 201
    assert response.json()["assignment"]["role"] == "president"
    assert await store.roles.get_active(PRESIDENT) is None

    followup = await client.post(
        "/api/v1/roles",
        json={"targetActorId": PRESIDENT, "role": "advisor"},
        headers=auth_headers(PRESIDENT),
    )
    assert followup.status_code == 403


async def test_appoint_requires_president(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/roles",
        json={"targetActorId": OUTSIDER, "role": "advisor"},
        headers=auth_headers(TREASURER),
    )
    assert response.status_code == 403


async def test_edit_cannot_blank_required_text(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    created = await client.post(
        "/api/v1/finance",
        json={"type": "expense", "amount": 8, "description": "tape"},
        headers=auth_headers(PRESIDENT),
    )
    record_id = created.json()["record"]["id"]

    direct = await client.put(
        "/api/v1/finance",
        json={"recordId": record_id, "description": "   "},
        headers=auth_headers(PRESIDENT),
    )
    queued = await client.put(
        "/api/v1/finance",
        json={"recordId": record_id, "description": ""},
        headers=auth_headers(TREASURER),
    )

    for response in (direct, queued):
        assert response.status_code == 400
        assert response.json()["details"] == {"field": "description"}
    assert store.finance.rows[record_id].description == "tape"
    assert store.approvals.rows == {}


async def test_amount_beyond_money_precision_rejected(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    response = await client.post(
        "/api/v1/finance",
        json={"type": "income", "amount": 0.001, "description": "dues"},
        headers=auth_headers(TREASURER),
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "amount"}
    assert store.approvals.rows == {}
