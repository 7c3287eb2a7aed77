from __future__ import annotations

import pytest

from ringside.enums import EmploymentStatus
from ringside.exceptions import CannotBeEmployed
from ringside.services.manager_service import ManagerService
from ringside.services.referee_service import RefereeService
from ringside.services.tag_team_service import TagTeamService
from ringside.services.wrestler_service import WrestlerService


@pytest.fixture
def service(session) -> ManagerService:
    return ManagerService(session)


@pytest.mark.asyncio
async def test_release_ends_every_client_relationship(roster, service) -> None:
    manager = await roster.manager("Heenan")
    wrestler = await roster.wrestler()
    tag_team = await roster.tag_team()
    await WrestlerService(roster.session).hire_manager(wrestler.id, manager.id)
    await TagTeamService(roster.session).hire_manager(tag_team.id, manager.id)

    detail = await service.detail(manager.id)
    assert detail.current_wrestler_ids == [wrestler.id]
    assert detail.current_tag_team_ids == [tag_team.id]

    await service.release(manager.id)

    detail = await service.detail(manager.id)
    assert detail.status is EmploymentStatus.RELEASED
    assert detail.current_wrestler_ids == []
    assert detail.current_tag_team_ids == []
    assert await WrestlerService(roster.session).current_manager_ids(wrestler.id) == []


@pytest.mark.asyncio
async def test_retire_leaves_the_stable(roster, service) -> None:
    manager = await roster.manager()
    stable = await roster.stable(
        wrestlers=[await roster.wrestler() for _ in range(3)], managers=[manager]
    )
    assert (await service.detail(manager.id)).current_stable_id == stable.id

    await service.retire(manager.id)

    detail = await service.detail(manager.id)
    assert detail.status is EmploymentStatus.RETIRED
    assert detail.current_stable_id is None


@pytest.mark.asyncio
async def test_managers_can_be_injured(roster, service) -> None:
    manager = await roster.manager()

    await service.injure(manager.id)
    await service.clear_injury(manager.id)

    detail = await service.detail(manager.id)
    assert detail.status is EmploymentStatus.EMPLOYED
    assert len(detail.injuries) == 1


@pytest.mark.asyncio
async def test_referee_lifecycle(roster, session) -> None:
    referees = RefereeService(session)
    referee = await roster.referee("Hebner")

    with pytest.raises(CannotBeEmployed):
        await referees.employ(referee.id)

    await referees.suspend(referee.id)
    await referees.reinstate(referee.id)
    await referees.retire(referee.id)

    detail = await referees.detail(referee.id)
    assert detail.status is EmploymentStatus.RETIRED
    assert detail.full_name == "Earl Hebner"
    assert len(detail.suspensions) == 1
    assert len(detail.retirements) == 1


@pytest.mark.asyncio
async def test_search_matches_first_or_last_name(roster, service) -> None:
    await roster.manager("Heenan")
    await roster.manager("Cornette")

    page = await service.list_page(search="heen")

    assert page.total == 1
    assert page.items[0].last_name == "Heenan"
