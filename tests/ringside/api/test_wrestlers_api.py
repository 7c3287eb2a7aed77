from __future__ import annotations

import pytest

WRESTLER = {
    "name": "Bret Hart",
    "height": 72,
    "weight": 234,
    "hometown": "Calgary, AB",
    "signature_move": "Sharpshooter",
}


@pytest.mark.asyncio
async def test_health_echoes_request_id(client) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "ring-bell"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"] == "ring-bell"


@pytest.mark.asyncio
async def test_create_and_fetch_wrestler(client) -> None:
    response = await client.post(
        "/wrestlers", json={**WRESTLER, "employed_at": "2024-01-01T00:00:00"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "employed"
    assert body["formatted_height"] == "6'0\""
    assert body["employments"][0]["started_at"] == "2024-01-01T00:00:00"

    detail = await client.get(f"/wrestlers/{body['id']}")
    assert detail.json()["name"] == "Bret Hart"


@pytest.mark.asyncio
async def test_list_filters_by_status_and_search(client) -> None:
    await client.post("/wrestlers", json={**WRESTLER, "employed_at": "2024-01-01T00:00:00"})
    await client.post("/wrestlers", json={**WRESTLER, "name": "Owen Hart"})

    employed = await client.get("/wrestlers", params={"status": "employed"})
    search = await client.get("/wrestlers", params={"q": "owen"})

    assert [item["name"] for item in employed.json()["items"]] == ["Bret Hart"]
    assert search.json()["total"] == 1
    assert search.json()["has_more"] is False


@pytest.mark.asyncio
async def test_status_actions(client) -> None:
    wrestler_id = (await client.post("/wrestlers", json=WRESTLER)).json()["id"]

    employed = await client.post(
        f"/wrestlers/{wrestler_id}/employ", json={"date": "2024-01-01T00:00:00"}
    )
    injured = await client.post(f"/wrestlers/{wrestler_id}/injure")
    cleared = await client.post(f"/wrestlers/{wrestler_id}/clear-injury")

    assert employed.json()["status"] == "employed"
    assert injured.json()["status"] == "injured"
    assert cleared.json()["status"] == "employed"
    assert len(cleared.json()["injuries"]) == 1


@pytest.mark.asyncio
async def test_rejected_transition_is_a_conflict(client) -> None:
    wrestler_id = (await client.post("/wrestlers", json=WRESTLER)).json()["id"]

    response = await client.post(
        f"/wrestlers/{wrestler_id}/retire", headers={"X-Request-ID": "req-retire"}
    )

    assert response.status_code == 409
    body = response.json()
    assert body["error_type"] == "business_rule_error"
    assert body["detail"] == "CannotBeRetired"
    assert body["reason"] == "unemployed"
    assert body["request_id"] == "req-retire"
    assert body["path"] == f"/wrestlers/{wrestler_id}/retire"
    assert "Bret Hart" in body["message"]


@pytest.mark.asyncio
async def test_unknown_wrestler_is_not_found(client) -> None:
    response = await client.post("/wrestlers/999/employ")

    assert response.status_code == 404
    assert response.json()["detail"] == "Wrestler 999 not found"


@pytest.mark.asyncio
async def test_invalid_payload_is_rejected(client) -> None:
    response = await client.post("/wrestlers", json={**WRESTLER, "height": 0})

    assert response.status_code == 422
    body = response.json()
    assert body["error_type"] == "validation_error"
    assert body["errors"][0]["field"] == "body.height"


@pytest.mark.asyncio
async def test_delete_and_restore(client) -> None:
    wrestler_id = (await client.post("/wrestlers", json=WRESTLER)).json()["id"]

    assert (await client.delete(f"/wrestlers/{wrestler_id}")).status_code == 204
    assert (await client.get(f"/wrestlers/{wrestler_id}")).status_code == 404
    listed = await client.get("/wrestlers", params={"include_deleted": "true"})
    assert listed.json()["items"][0]["deleted_at"] is not None

    restored = await client.post(f"/wrestlers/{wrestler_id}/restore")
    assert restored.status_code == 200
    assert restored.json()["deleted_at"] is None


@pytest.mark.asyncio
async def test_restoring_a_live_record_is_rejected(client) -> None:
    wrestler_id = (await client.post("/wrestlers", json=WRESTLER)).json()["id"]

    response = await client.post(f"/wrestlers/{wrestler_id}/restore")

    assert response.status_code == 422
    body = response.json()
    assert body["error_type"] == "business_rule_error"
    assert body["reason"] == "not_deleted"
    assert body["detail"] == "CannotBeRestored"
    assert body["message"].endswith("is not deleted and cannot be restored.")


@pytest.mark.asyncio
async def test_hire_and_fire_manager(client) -> None:
    wrestler_id = (
        await client.post("/wrestlers", json={**WRESTLER, "employed_at": "2024-01-01T00:00:00"})
    ).json()["id"]
    manager_id = (
        await client.post(
            "/managers",
            json={
                "first_name": "Jimmy",
                "last_name": "Hart",
                "employed_at": "2024-01-01T00:00:00",
            },
        )
    ).json()["id"]

    hired = await client.post(f"/wrestlers/{wrestler_id}/managers", json={"manager_id": manager_id})
    assert hired.json()["current_manager_ids"] == [manager_id]

    fired = await client.delete(f"/wrestlers/{wrestler_id}/managers/{manager_id}")
    assert fired.status_code == 204
    detail = await client.get(f"/wrestlers/{wrestler_id}")
    assert detail.json()["current_manager_ids"] == []
