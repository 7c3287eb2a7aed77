from __future__ import annotations

import pytest

from ringside.enums import ActivationStatus, EmploymentStatus
from ringside.exceptions import (
    CannotBeActivated,
    MembershipConflict,
    NotEnoughMembers,
)
from ringside.services.manager_service import ManagerService
from ringside.services.stable_service import StableService
from ringside.services.tag_team_service import TagTeamService
from ringside.services.wrestler_service import WrestlerService
from tests.conftest import PAST


@pytest.fixture
def service(session) -> StableService:
    return StableService(session)


@pytest.mark.asyncio
async def test_create_with_members_and_activate(roster, service) -> None:
    wrestler = await roster.wrestler()
    tag_team = await roster.tag_team()
    manager = await roster.manager()

    stable = await roster.stable(
        "The Corporation", wrestlers=[wrestler], tag_teams=[tag_team], managers=[manager]
    )

    detail = await service.detail(stable.id)
    assert detail.status is ActivationStatus.ACTIVE
    assert detail.current_members.wrestler_ids == [wrestler.id]
    assert detail.current_members.tag_team_ids == [tag_team.id]
    assert detail.current_members.manager_ids == [manager.id]
    assert [period.started_at for period in detail.activations] == [PAST]


@pytest.mark.asyncio
async def test_activation_requires_three_members(roster, service) -> None:
    wrestlers = [await roster.wrestler(), await roster.wrestler()]
    stable = await roster.stable(wrestlers=wrestlers, activated_at=None)
    stable_id = stable.id

    with pytest.raises(NotEnoughMembers) as excinfo:
        await service.activate(stable_id)

    assert excinfo.value.reason == "not_enough_members"
    assert (await service.get(stable_id)).status is ActivationStatus.UNACTIVATED


@pytest.mark.asyncio
async def test_managers_do_not_count_towards_the_minimum(roster, service) -> None:
    stable = await roster.stable(
        wrestlers=[await roster.wrestler(), await roster.wrestler()],
        managers=[await roster.manager()],
        activated_at=None,
    )

    with pytest.raises(NotEnoughMembers):
        await service.activate(stable.id)


@pytest.mark.asyncio
async def test_activation_employs_unemployed_members(roster, service) -> None:
    wrestlers = [await roster.wrestler(employed_at=None) for _ in range(3)]
    manager = await roster.manager(employed_at=None)
    stable = await roster.stable(wrestlers=wrestlers, managers=[manager], activated_at=None)

    await service.activate(stable.id, PAST)

    wrestler_service = WrestlerService(roster.session)
    for wrestler in wrestlers:
        assert (await wrestler_service.get(wrestler.id)).status is EmploymentStatus.EMPLOYED
    assert (await ManagerService(roster.session).get(manager.id)).status is (
        EmploymentStatus.EMPLOYED
    )


@pytest.mark.asyncio
async def test_activation_employs_tag_team_partners(roster, service) -> None:
    first = await roster.wrestler(employed_at=None)
    second = await roster.wrestler(employed_at=None)
    tag_team = await roster.tag_team(wrestlers=[first, second], employed_at=None)
    solo = await roster.wrestler(employed_at=None)
    stable = await roster.stable(wrestlers=[solo], tag_teams=[tag_team], activated_at=None)

    await service.activate(stable.id, PAST)

    assert (await TagTeamService(roster.session).get(tag_team.id)).status is (
        EmploymentStatus.EMPLOYED
    )
    wrestlers = WrestlerService(roster.session)
    for wrestler in (first, second, solo):
        assert (await wrestlers.get(wrestler.id)).status is EmploymentStatus.EMPLOYED


@pytest.mark.asyncio
async def test_cannot_activate_twice(roster, service) -> None:
    stable = await roster.stable(wrestlers=[await roster.wrestler() for _ in range(3)])

    with pytest.raises(CannotBeActivated) as excinfo:
        await service.activate(stable.id)

    assert excinfo.value.reason == "active"


@pytest.mark.asyncio
async def test_members_belong_to_one_stable(roster, service) -> None:
    wrestler = await roster.wrestler("Triple H")
    await roster.stable("D-Generation X", wrestlers=[wrestler], activated_at=None)
    other = await roster.stable("Evolution", activated_at=None)

    with pytest.raises(MembershipConflict) as excinfo:
        await service.add_members(other.id, wrestler_ids=[wrestler.id])

    assert excinfo.value.reason == "already_in_stable"
    assert "'D-Generation X'" in excinfo.value.message


@pytest.mark.asyncio
async def test_add_and_remove_members(roster, service) -> None:
    stable = await roster.stable(activated_at=None)
    wrestler = await roster.wrestler()
    manager = await roster.manager()

    members = await service.add_members(
        stable.id, wrestler_ids=[wrestler.id], manager_ids=[manager.id]
    )
    assert members.wrestler_ids == [wrestler.id]
    assert members.manager_ids == [manager.id]

    members = await service.remove_members(stable.id, wrestler_ids=[wrestler.id])
    assert members.wrestler_ids == []
    assert members.manager_ids == [manager.id]

    detail = await service.detail(stable.id)
    assert detail.previous_members.wrestler_ids == [wrestler.id]


@pytest.mark.asyncio
async def test_removing_a_non_member_is_rejected(roster, service) -> None:
    stable = await roster.stable(activated_at=None)
    wrestler = await roster.wrestler()

    with pytest.raises(MembershipConflict) as excinfo:
        await service.remove_members(stable.id, wrestler_ids=[wrestler.id])

    assert excinfo.value.reason == "not_a_member"


@pytest.mark.asyncio
async def test_retired_wrestlers_cannot_join(roster, service) -> None:
    stable = await roster.stable(activated_at=None)
    wrestler = await roster.wrestler()
    await WrestlerService(roster.session).retire(wrestler.id)

    with pytest.raises(MembershipConflict) as excinfo:
        await service.add_members(stable.id, wrestler_ids=[wrestler.id])

    assert excinfo.value.reason == "retired_member"


@pytest.mark.asyncio
async def test_unknown_member_raises_lookup_error(roster, service) -> None:
    stable = await roster.stable(activated_at=None)

    with pytest.raises(LookupError):
        await service.add_members(stable.id, tag_team_ids=[999])


@pytest.mark.asyncio
async def test_deactivate_disbands_members(roster, service) -> None:
    stable = await roster.stable(wrestlers=[await roster.wrestler() for _ in range(3)])

    await service.deactivate(stable.id)

    detail = await service.detail(stable.id)
    assert detail.status is ActivationStatus.INACTIVE
    assert detail.current_members.wrestler_ids == []
    assert len(detail.previous_members.wrestler_ids) == 3
    assert detail.activations[0].ended_at is not None


@pytest.mark.asyncio
async def test_retired_stable_takes_no_members(roster, service) -> None:
    stable = await roster.stable(wrestlers=[await roster.wrestler() for _ in range(3)])
    stable_id = stable.id
    await service.retire(stable_id)
    newcomer = await roster.wrestler()

    with pytest.raises(MembershipConflict) as excinfo:
        await service.add_members(stable_id, wrestler_ids=[newcomer.id])
    assert excinfo.value.reason == "group_retired"

    await service.unretire(stable_id)
    assert (await service.get(stable_id)).status is ActivationStatus.INACTIVE
