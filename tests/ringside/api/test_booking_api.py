from __future__ import annotations

import pytest

HIRED = "2024-01-01T00:00:00"


async def _wrestler(client, name: str) -> int:
    response = await client.post(
        "/wrestlers",
        json={
            "name": name,
            "height": 74,
            "weight": 250,
            "hometown": "Greenwich, CT",
            "employed_at": HIRED,
        },
    )
    return response.json()["id"]


async def _referee(client) -> int:
    response = await client.post(
        "/referees", json={"first_name": "Earl", "last_name": "Hebner", "employed_at": HIRED}
    )
    return response.json()["id"]


@pytest.mark.asyncio
async def test_stable_membership_endpoints(client) -> None:
    ids = [await _wrestler(client, name) for name in ("Triple H", "Shawn Michaels", "Chyna")]
    created = await client.post(
        "/stables",
        json={"name": "D-Generation X", "wrestler_ids": ids[:2], "activated_at": None},
    )
    stable_id = created.json()["id"]
    assert created.json()["status"] == "unactivated"

    too_small = await client.post(f"/stables/{stable_id}/activate")
    assert too_small.status_code == 422
    assert too_small.json()["reason"] == "not_enough_members"

    added = await client.post(f"/stables/{stable_id}/members", json={"wrestler_ids": [ids[2]]})
    assert added.json()["wrestler_ids"] == ids

    activated = await client.post(f"/stables/{stable_id}/activate")
    assert activated.json()["status"] == "active"

    removed = await client.request(
        "DELETE", f"/stables/{stable_id}/members", json={"wrestler_ids": [ids[0]]}
    )
    assert removed.json()["wrestler_ids"] == ids[1:]
    members = await client.get(f"/stables/{stable_id}/members")
    assert members.json()["wrestler_ids"] == ids[1:]


@pytest.mark.asyncio
async def test_stable_members_request_needs_ids(client) -> None:
    created = await client.post("/stables", json={"name": "Empty"})

    response = await client.post(f"/stables/{created.json()['id']}/members", json={})

    assert response.status_code == 422
    assert response.json()["error_type"] == "validation_error"


@pytest.mark.asyncio
async def test_title_championship_endpoints(client) -> None:
    champion = await _wrestler(client, "Bret Hart")
    challenger = await _wrestler(client, "Yokozuna")
    title_id = (
        await client.post("/titles", json={"name": "World Heavyweight", "activated_at": HIRED})
    ).json()["id"]

    first = await client.post(
        f"/titles/{title_id}/championships",
        json={"champion_type": "wrestler", "champion_id": champion, "date": "2024-02-01T00:00:00"},
    )
    second = await client.post(
        f"/titles/{title_id}/championships",
        json={
            "champion_type": "wrestler",
            "champion_id": challenger,
            "date": "2024-04-01T00:00:00",
        },
    )
    assert first.status_code == 201
    assert second.json()["champion_id"] == challenger

    reigns = (await client.get(f"/titles/{title_id}/championships")).json()
    assert [reign["champion_id"] for reign in reigns] == [challenger, champion]
    assert reigns[1]["ended_at"] == "2024-04-01T00:00:00"

    again = await client.post(
        f"/titles/{title_id}/championships",
        json={"champion_type": "wrestler", "champion_id": challenger},
    )
    assert again.status_code == 422
    assert again.json()["reason"] == "already_champion"

    vacated = await client.post(f"/titles/{title_id}/vacate")
    assert vacated.json()["current_championship"] is None


@pytest.mark.asyncio
async def test_missing_title_is_not_found(client) -> None:
    response = await client.get("/titles/404/championships")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_event_card_and_result(client) -> None:
    venue_id = (
        await client.post(
            "/venues",
            json={
                "name": "Civic Arena",
                "street_address": "66 Mellon Arena Way",
                "city": "Pittsburgh",
                "state": "Pennsylvania",
                "zipcode": "15219",
            },
        )
    ).json()["id"]
    event = await client.post(
        "/events",
        json={"name": "Ringside Rumble", "date": "2024-06-01T19:00:00", "venue_id": venue_id},
    )
    event_id = event.json()["id"]
    assert event.json()["status"] == "past"
    first = await _wrestler(client, "Bret Hart")
    second = await _wrestler(client, "Owen Hart")
    referee = await _referee(client)
    title_id = (
        await client.post("/titles", json={"name": "Intercontinental", "activated_at": HIRED})
    ).json()["id"]

    booked = await client.post(
        f"/events/{event_id}/matches",
        json={
            "match_type": "singles",
            "sides": [
                [{"competitor_type": "wrestler", "competitor_id": first}],
                [{"competitor_type": "wrestler", "competitor_id": second}],
            ],
            "referee_ids": [referee],
            "title_ids": [title_id],
        },
    )
    assert booked.status_code == 201
    match_id = booked.json()["id"]

    result = await client.post(
        f"/events/{event_id}/matches/{match_id}/result",
        json={"decision": "pinfall", "winning_side": 2},
    )
    assert result.json()["result"]["winning_side"] == 2

    title = (await client.get(f"/titles/{title_id}")).json()
    assert title["current_championship"]["champion_id"] == second
    assert title["current_championship"]["won_event_match_id"] == match_id

    card = (await client.get(f"/events/{event_id}")).json()
    assert [match["id"] for match in card["matches"]] == [match_id]


@pytest.mark.asyncio
async def test_booking_rule_violation_payload(client) -> None:
    event_id = (await client.post("/events", json={"name": "House Show"})).json()["id"]
    wrestler = await _wrestler(client, "Bret Hart")
    referee = await _referee(client)

    response = await client.post(
        f"/events/{event_id}/matches",
        json={
            "match_type": "singles",
            "sides": [[{"competitor_type": "wrestler", "competitor_id": wrestler}]],
            "referee_ids": [referee],
        },
    )

    assert response.status_code == 422
    assert response.json()["reason"] == "not_enough_sides"
    assert response.json()["detail"] == "InvalidMatchConfiguration"


@pytest.mark.asyncio
async def test_event_with_unknown_venue_is_not_found(client) -> None:
    response = await client.post("/events", json={"name": "Nowhere", "venue_id": 12})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_tag_team_partner_swap(client) -> None:
    ax, smash, crush = [await _wrestler(client, name) for name in ("Ax", "Smash", "Crush")]
    created = await client.post(
        "/tag-teams",
        json={"name": "Demolition", "wrestler_ids": [ax, smash], "employed_at": HIRED},
    )
    tag_team_id = created.json()["id"]
    assert created.json()["current_wrestler_ids"] == [ax, smash]

    swapped = await client.put(
        f"/tag-teams/{tag_team_id}/partners", json={"wrestler_ids": [ax, crush]}
    )

    assert swapped.status_code == 200
    assert sorted(swapped.json()["current_wrestler_ids"]) == sorted([ax, crush])
    assert swapped.json()["previous_wrestler_ids"] == [smash]

    injured = await client.post(f"/tag-teams/{tag_team_id}/injure")
    assert injured.status_code == 404
