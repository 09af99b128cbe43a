"""Review Cycle Routes — HTTP contract for cycle creation and transitions.

Invariants:
    - POST /review-cycles returns 201 with a DRAFT cycle in camelCase
    - Out-of-order deadlines return 400 INVALID_DEADLINE_ORDER
    - Illegal transitions return 400 INVALID_STATE; a second active cycle 409
    - Unknown cycles return 404
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4


def _deadlines(start: datetime | None = None) -> dict:
    start = start or datetime.now(timezone.utc)
    names = [
        "selfReview", "peerFeedback", "managerEvaluation",
        "calibration", "feedbackDelivery",
    ]
    return {name: (start + timedelta(days=7 * i)).isoformat() for i, name in enumerate(names)}


async def _create(client, name="H1 2026", deadlines=None) -> dict:
    res = await client.post("/api/v1/review-cycles", json={
        "name": name, "year": 2026, "deadlines": deadlines or _deadlines(),
    })
    assert res.status_code == 201
    return res.json()


async def test_create_returns_draft_cycle(client):
    body = await _create(client)
    assert body["status"] == "DRAFT"
    assert body["name"] == "H1 2026"
    assert body["endDate"] is None
    assert set(body["deadlines"]) == {
        "selfReview", "peerFeedback", "managerEvaluation",
        "calibration", "feedbackDelivery",
    }


async def test_create_strips_name(client):
    body = await _create(client, name="  Spring  ")
    assert body["name"] == "Spring"


async def test_create_with_out_of_order_deadlines_returns_400(client):
    deadlines = _deadlines()
    deadlines["calibration"], deadlines["managerEvaluation"] = (
        deadlines["managerEvaluation"], deadlines["calibration"],
    )
    res = await client.post("/api/v1/review-cycles", json={
        "name": "Bad", "year": 2026, "deadlines": deadlines,
    })
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "INVALID_DEADLINE_ORDER"
    assert "Calibration deadline must be after Manager Evaluation deadline" == error["message"]


async def test_create_with_missing_deadline_returns_validation_error(client):
    deadlines = _deadlines()
    del deadlines["feedbackDelivery"]
    res = await client.post("/api/v1/review-cycles", json={
        "name": "Bad", "year": 2026, "deadlines": deadlines,
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_with_blank_name_returns_validation_error(client):
    res = await client.post("/api/v1/review-cycles", json={
        "name": "   ", "year": 2026, "deadlines": _deadlines(),
    })
    assert res.status_code == 400


async def test_get_cycle_by_id(client):
    created = await _create(client)
    res = await client.get(f"/api/v1/review-cycles/{created['id']}")
    assert res.status_code == 200
    assert res.json()["id"] == created["id"]


async def test_get_unknown_cycle_returns_404(client):
    res = await client.get(f"/api/v1/review-cycles/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_full_lifecycle_over_http(client):
    cycle_id = (await _create(client))["id"]

    res = await client.post(f"/api/v1/review-cycles/{cycle_id}/start")
    assert res.status_code == 200
    assert res.json()["status"] == "ACTIVE"

    active = await client.get("/api/v1/review-cycles/active")
    assert active.status_code == 200
    assert active.json()["id"] == cycle_id

    res = await client.post(f"/api/v1/review-cycles/{cycle_id}/calibration")
    assert res.json()["status"] == "CALIBRATION"

    res = await client.post(f"/api/v1/review-cycles/{cycle_id}/complete")
    assert res.status_code == 200
    assert res.json()["status"] == "COMPLETED"
    assert res.json()["endDate"] is not None


async def test_no_active_cycle_returns_404(client):
    await _create(client)
    res = await client.get("/api/v1/review-cycles/active")
    assert res.status_code == 404


async def test_complete_draft_returns_invalid_state(client):
    cycle_id = (await _create(client))["id"]
    res = await client.post(f"/api/v1/review-cycles/{cycle_id}/complete")
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "INVALID_STATE"
    assert "DRAFT" in error["message"]

    still = await client.get(f"/api/v1/review-cycles/{cycle_id}")
    assert still.json()["status"] == "DRAFT"


async def test_starting_second_cycle_returns_409(client):
    first = (await _create(client, name="A"))["id"]
    second = (await _create(client, name="B"))["id"]
    await client.post(f"/api/v1/review-cycles/{first}/start")

    res = await client.post(f"/api/v1/review-cycles/{second}/start")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ACTIVE_CYCLE_EXISTS"


async def test_health_endpoints(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"

    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "healthy"
