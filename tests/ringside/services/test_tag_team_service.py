from __future__ import annotations

import pytest

from ringside.enums import EmploymentStatus
from ringside.exceptions import (
    CannotBeInjured,
    CannotBeRetired,
    CannotBeSuspended,
    MembershipConflict,
)
from ringside.services.tag_team_service import TagTeamService
from ringside.services.wrestler_service import WrestlerService
from tests.conftest import PAST


@pytest.fixture
def service(session) -> TagTeamService:
    return TagTeamService(session)


@pytest.mark.asyncio
async def test_create_with_partners(roster, service) -> None:
    first = await roster.wrestler("Ax")
    second = await roster.wrestler("Smash")

    tag_team = await roster.tag_team("Demolition", wrestlers=[first, second])

    detail = await service.detail(tag_team.id)
    assert detail.status is EmploymentStatus.EMPLOYED
    assert detail.current_wrestler_ids == [first.id, second.id]
    assert detail.previous_wrestler_ids == []
    assert [period.started_at for period in detail.employments] == [PAST]


@pytest.mark.asyncio
async def test_create_requires_two_distinct_partners(roster, service) -> None:
    wrestler = await roster.wrestler()

    with pytest.raises(MembershipConflict) as excinfo:
        await service.create(
            {"name": "Solo Act", "signature_move": None, "wrestler_ids": [wrestler.id]}
        )
    assert excinfo.value.reason == "invalid_tag_team_size"

    with pytest.raises(MembershipConflict):
        await service.create(
            {
                "name": "Mirror Image",
                "signature_move": None,
                "wrestler_ids": [wrestler.id, wrestler.id],
            }
        )


@pytest.mark.asyncio
async def test_create_without_partners_is_allowed(service) -> None:
    tag_team = await service.create({"name": "Vacancy", "signature_move": None})

    detail = await service.detail(tag_team.id)
    assert detail.status is EmploymentStatus.UNEMPLOYED
    assert detail.current_wrestler_ids == []


@pytest.mark.asyncio
async def test_wrestler_cannot_join_two_teams(roster) -> None:
    first = await roster.wrestler("Ax")
    second = await roster.wrestler("Smash")
    third = await roster.wrestler("Crush")
    await roster.tag_team("Demolition", wrestlers=[first, second])

    with pytest.raises(MembershipConflict) as excinfo:
        await roster.tag_team("Demolition II", wrestlers=[first, third])

    assert excinfo.value.reason == "already_in_tag_team"
    assert "'Demolition'" in excinfo.value.message


@pytest.mark.asyncio
async def test_employing_a_team_employs_its_partners(roster, service) -> None:
    first = await roster.wrestler(employed_at=None)
    second = await roster.wrestler(employed_at=None)
    tag_team = await roster.tag_team(wrestlers=[first, second], employed_at=None)

    await service.employ(tag_team.id, PAST)

    wrestlers = WrestlerService(roster.session)
    assert (await wrestlers.get(first.id)).status is EmploymentStatus.EMPLOYED
    assert (await wrestlers.get(second.id)).status is EmploymentStatus.EMPLOYED
    assert (await service.get(tag_team.id)).status is EmploymentStatus.EMPLOYED


@pytest.mark.asyncio
async def test_suspend_and_reinstate_carry_partners(roster, service) -> None:
    tag_team = await roster.tag_team()
    partner_ids = (await service.detail(tag_team.id)).current_wrestler_ids
    wrestlers = WrestlerService(roster.session)

    await service.suspend(tag_team.id)
    for partner_id in partner_ids:
        assert (await wrestlers.get(partner_id)).status is EmploymentStatus.SUSPENDED

    await service.reinstate(tag_team.id)
    for partner_id in partner_ids:
        assert (await wrestlers.get(partner_id)).status is EmploymentStatus.EMPLOYED
    assert (await service.get(tag_team.id)).status is EmploymentStatus.EMPLOYED


@pytest.mark.asyncio
async def test_cannot_suspend_team_with_injured_partner(roster, service) -> None:
    first = await roster.wrestler("Ax")
    second = await roster.wrestler("Smash")
    tag_team = await roster.tag_team("Demolition", wrestlers=[first, second])
    tag_team_id = tag_team.id
    await WrestlerService(roster.session).injure(second.id)

    with pytest.raises(CannotBeSuspended) as excinfo:
        await service.suspend(tag_team_id)

    assert excinfo.value.reason == "partner_unavailable"
    assert (await service.get(tag_team_id)).status is EmploymentStatus.EMPLOYED


@pytest.mark.asyncio
async def test_cannot_retire_team_with_suspended_partner(roster, service) -> None:
    first = await roster.wrestler()
    second = await roster.wrestler()
    tag_team = await roster.tag_team(wrestlers=[first, second])
    await WrestlerService(roster.session).suspend(first.id)

    with pytest.raises(CannotBeRetired) as excinfo:
        await service.retire(tag_team.id)

    assert excinfo.value.reason == "partner_unavailable"


@pytest.mark.asyncio
async def test_tag_teams_cannot_be_injured(roster, service) -> None:
    tag_team = await roster.tag_team()

    with pytest.raises(CannotBeInjured) as excinfo:
        await service.injure(tag_team.id)

    assert excinfo.value.reason == "not_injurable"


@pytest.mark.asyncio
async def test_retire_disbands_the_team(roster, service) -> None:
    tag_team = await roster.tag_team()

    await service.retire(tag_team.id)

    detail = await service.detail(tag_team.id)
    assert detail.status is EmploymentStatus.RETIRED
    assert detail.current_wrestler_ids == []
    assert len(detail.previous_wrestler_ids) == 2


@pytest.mark.asyncio
async def test_release_releases_partners(roster, service) -> None:
    first = await roster.wrestler()
    second = await roster.wrestler()
    tag_team = await roster.tag_team(wrestlers=[first, second])

    await service.release(tag_team.id)

    wrestlers = WrestlerService(roster.session)
    assert (await wrestlers.get(first.id)).status is EmploymentStatus.RELEASED
    assert (await wrestlers.get(second.id)).status is EmploymentStatus.RELEASED
    assert (await service.detail(tag_team.id)).current_wrestler_ids == [first.id, second.id]


@pytest.mark.asyncio
async def test_update_partners_swaps_members(roster, service) -> None:
    first = await roster.wrestler("Ax")
    second = await roster.wrestler("Smash")
    replacement = await roster.wrestler("Crush", employed_at=None)
    tag_team = await roster.tag_team("Demolition", wrestlers=[first, second])

    partners = await service.update_partners(tag_team.id, [first.id, replacement.id])

    assert {wrestler.id for wrestler in partners} == {first.id, replacement.id}
    detail = await service.detail(tag_team.id)
    assert sorted(detail.current_wrestler_ids) == sorted([first.id, replacement.id])
    assert detail.previous_wrestler_ids == [second.id]
    # Joining an employed team brings the newcomer under contract.
    refreshed = await WrestlerService(roster.session).get(replacement.id)
    assert refreshed.status is EmploymentStatus.EMPLOYED


@pytest.mark.asyncio
async def test_update_partners_rejects_retired_wrestlers(roster, service) -> None:
    first = await roster.wrestler()
    second = await roster.wrestler()
    retiree = await roster.wrestler()
    await WrestlerService(roster.session).retire(retiree.id)
    tag_team = await roster.tag_team(wrestlers=[first, second])

    with pytest.raises(MembershipConflict) as excinfo:
        await service.update_partners(tag_team.id, [first.id, retiree.id])

    assert excinfo.value.reason == "retired_member"


@pytest.mark.asyncio
async def test_hire_manager_for_tag_team(roster, service) -> None:
    tag_team = await roster.tag_team()
    manager = await roster.manager()

    await service.hire_manager(tag_team.id, manager.id)

    assert (await service.detail(tag_team.id)).current_manager_ids == [manager.id]
