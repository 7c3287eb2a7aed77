from __future__ import annotations

import json
from pathlib import Path

import pytest

from ringside.enums import ActivationStatus, EmploymentStatus
from ringside.scripts.seed_roster import FixtureError, load_fixture, seed_roster
from ringside.services.stable_service import StableService
from ringside.services.tag_team_service import TagTeamService
from ringside.services.wrestler_service import WrestlerService

FIXTURE_PATH = Path(__file__).resolve().parents[3] / "data" / "fixtures" / "roster.json"


@pytest.mark.asyncio
async def test_seed_bundled_fixture(session) -> None:
    counts = await seed_roster(session, load_fixture(FIXTURE_PATH))

    assert counts == {
        "venues": 1,
        "wrestlers": 5,
        "managers": 1,
        "referees": 1,
        "tag_teams": 1,
        "stables": 1,
        "titles": 2,
        "events": 1,
    }

    wrestlers = await WrestlerService(session).list_page(search="Kane")
    assert wrestlers.items[0].status is EmploymentStatus.UNEMPLOYED

    tag_team = (await TagTeamService(session).list_page()).items[0]
    detail = await TagTeamService(session).detail(tag_team.id)
    assert len(detail.current_wrestler_ids) == 2
    assert detail.status is EmploymentStatus.EMPLOYED

    stable = (await StableService(session).list_page()).items[0]
    members = (await StableService(session).detail(stable.id)).current_members
    assert stable.status is ActivationStatus.ACTIVE
    assert len(members.wrestler_ids) == 1
    assert members.tag_team_ids == [tag_team.id]
    assert len(members.manager_ids) == 1


@pytest.mark.asyncio
async def test_unknown_reference_is_rejected(session) -> None:
    fixture = {
        "wrestlers": [],
        "tag_teams": [{"name": "Ghosts", "wrestlers": ["Casper", "Boo"]}],
    }

    with pytest.raises(FixtureError, match="Unknown wrestlers: Casper, Boo"):
        await seed_roster(session, fixture)


def test_load_fixture_rejects_unknown_sections(tmp_path: Path) -> None:
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"wrestlers": [], "promoters": []}), encoding="utf-8")

    with pytest.raises(FixtureError, match="promoters"):
        load_fixture(path)


def test_load_fixture_fills_missing_sections(tmp_path: Path) -> None:
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"venues": []}), encoding="utf-8")

    fixture = load_fixture(path)

    assert fixture["events"] == []
    assert list(fixture) == [
        "venues",
        "wrestlers",
        "managers",
        "referees",
        "tag_teams",
        "stables",
        "titles",
        "events",
    ]
