"""End-to-end approval workflow over HTTP with in-memory repositories."""

from httpx import AsyncClient

from clubops.domain.enums import ApprovalStatus
from tests.fakes import ADVISOR, PRESIDENT, TREASURER, VICE_PRESIDENT, FakeStore

TAPE = {"type": "expense", "amount": 50, "description": "tape"}


async def _queue_tape(client: AsyncClient, auth_headers) -> str:
    response = await client.post("/api/v1/finance", json=TAPE, headers=auth_headers(TREASURER))
    assert response.status_code == 202
    return response.json()["requestId"]


async def test_treasurer_finance_add_is_queued(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    """A treasurer's finance add becomes a pending request holding the exact payload."""
    response = await client.post("/api/v1/finance", json=TAPE, headers=auth_headers(TREASURER))

    assert response.status_code == 202
    body = response.json()
    assert body["success"] is True
    assert body["needsApproval"] is True
    assert body["message"] == "Request submitted for approval"
    request = store.approvals.rows[body["requestId"]]
    assert request.status is ApprovalStatus.PENDING
    assert request.request_type == "finance_add"
    assert request.payload == TAPE
    assert store.finance.rows == {}


async def test_president_approval_applies_queued_finance_add(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    """Approving the request writes the record and settles the request."""
    request_id = await _queue_tape(client, auth_headers)

    response = await client.put(
        "/api/v1/approvals",
        json={"requestId": request_id, "decision": "approved"},
        headers=auth_headers(PRESIDENT),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "approved"
    assert body["executed"] is True
    assert body["requestTypeName"] == "add finance record"
    record = store.finance.rows[body["entityId"]]
    assert record.amount == 50
    assert record.approved is True
    assert record.recorded_by == TREASURER
    assert store.approvals.rows[request_id].status is ApprovalStatus.APPROVED

    listed = await client.get("/api/v1/finance", headers=auth_headers(ADVISOR))
    assert listed.json()["records"][0]["amount"] == 50.0
    assert listed.json()["records"][0]["approvalRequestId"] == request_id


async def test_president_cannot_revoke_themselves(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    response = await client.request(
        "DELETE",
        "/api/v1/roles",
        json={"targetActorId": PRESIDENT},
        headers=auth_headers(PRESIDENT),
    )
    assert response.status_code == 403
    assert response.json()["error"] == "SELF_REVOCATION_DENIED"
    assert (await store.roles.get_active(PRESIDENT)).is_active


async def test_appointing_actor_with_active_role_conflicts(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    rows_before = len(store.roles.rows)
    response = await client.post(
        "/api/v1/roles",
        json={"targetActorId": TREASURER, "role": "advisor"},
        headers=auth_headers(PRESIDENT),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "ROLE_ALREADY_ASSIGNED"
    assert len(store.roles.rows) == rows_before


async def test_non_president_cannot_resolve(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    request_id = await _queue_tape(client, auth_headers)

    for actor in (TREASURER, VICE_PRESIDENT, ADVISOR):
        response = await client.put(
            "/api/v1/approvals",
            json={"requestId": request_id, "decision": "approved"},
            headers=auth_headers(actor),
        )
        assert response.status_code == 403
    assert store.approvals.rows[request_id].status is ApprovalStatus.PENDING
    assert store.finance.rows == {}


async def test_rejection(client: AsyncClient, auth_headers, store: FakeStore) -> None:
    request_id = await _queue_tape(client, auth_headers)
    response = await client.put(
        "/api/v1/approvals",
        json={"requestId": request_id, "action": "reject", "note": "use the old tape"},
        headers=auth_headers(PRESIDENT),
    )
    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "rejected"
    assert body["executed"] is False
    assert body["request"]["reviewerNote"] == "use the old tape"
    assert store.finance.rows == {}


async def test_second_resolution_conflicts(client: AsyncClient, auth_headers) -> None:
    request_id = await _queue_tape(client, auth_headers)
    decision = {"requestId": request_id, "decision": "approved"}
    first = await client.put("/api/v1/approvals", json=decision, headers=auth_headers(PRESIDENT))
    second = await client.put("/api/v1/approvals", json=decision, headers=auth_headers(PRESIDENT))
    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["error"] == "ALREADY_RESOLVED"


async def test_execution_failure_is_surfaced_and_retryable(
    client: AsyncClient, auth_headers, store: FakeStore
) -> None:
    request_id = await _queue_tape(client, auth_headers)
    store.finance.unavailable = True

    response = await client.put(
        "/api/v1/approvals",
        json={"requestId": request_id, "decision": "approved"},
        headers=auth_headers(PRESIDENT),
    )

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "EXECUTION_FAILED"
    assert body["status"] == "approved"
    assert body["requestId"] == request_id
    assert store.approvals.rows[request_id].awaiting_execution

    store.finance.unavailable = False
    retry = await client.post(
        f"/api/v1/approvals/{request_id}/execute", headers=auth_headers(PRESIDENT)
    )
    assert retry.status_code == 200
    assert retry.json()["executed"] is True
    assert len(store.finance.rows) == 1


async def test_pending_queue_and_own_history(client: AsyncClient, auth_headers) -> None:
    request_id = await _queue_tape(client, auth_headers)

    pending = await client.get(
        "/api/v1/approvals", params={"scope": "pending"}, headers=auth_headers(PRESIDENT)
    )
    assert [r["id"] for r in pending.json()["requests"]] == [request_id]
    assert pending.json()["requests"][0]["requestTypeName"] == "add finance record"

    own = await client.get("/api/v1/approvals", headers=auth_headers(TREASURER))
    assert [r["id"] for r in own.json()["requests"]] == [request_id]

    forbidden = await client.get(
        "/api/v1/approvals", params={"scope": "pending"}, headers=auth_headers(TREASURER)
    )
    assert forbidden.status_code == 403

    single = await client.get(f"/api/v1/approvals/{request_id}", headers=auth_headers(TREASURER))
    assert single.json()["request"]["payload"] == TAPE
    hidden = await client.get(f"/api/v1/approvals/{request_id}", headers=auth_headers(ADVISOR))
    assert hidden.status_code == 404


async def test_direct_submission(client: AsyncClient, auth_headers, store: FakeStore) -> None:
    response = await client.post(
        "/api/v1/approvals",
        json={
            "requestType": "event_add",
            "payload": {"title": "Open night", "type": "group_play"},
            "justification": "monthly social",
        },
        headers=auth_headers(VICE_PRESIDENT),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["needsApproval"] is True
    assert store.approvals.rows[body["requestId"]].justification == "monthly social"


async def test_direct_submission_errors(client: AsyncClient, auth_headers) -> None:
    invalid = await client.post(
        "/api/v1/approvals",
        json={"requestType": "role_directory_add", "payload": {}},
        headers=auth_headers(TREASURER),
    )
    assert invalid.status_code == 400
    assert invalid.json()["error"] == "INVALID_REQUEST_TYPE"

    president = await client.post(
        "/api/v1/approvals",
        json={"requestType": "finance_add", "payload": TAPE},
        headers=auth_headers(PRESIDENT),
    )
    assert president.status_code == 400
    assert president.json()["details"] == {"field": "request_type"}
