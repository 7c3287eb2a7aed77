from __future__ import annotations

from datetime import datetime

import pytest

from ringside.enums import ActivationStatus, RosterMemberType, TitleType
from ringside.exceptions import CannotBeRetired, ChampionshipConflict
from ringside.services.title_service import TitleService
from ringside.services.wrestler_service import WrestlerService

WON = datetime(2024, 6, 1)
LOST = datetime(2024, 9, 1)


@pytest.fixture
def service(session) -> TitleService:
    return TitleService(session)


@pytest.mark.asyncio
async def test_award_crowns_a_champion(roster, service) -> None:
    title = await roster.title("World Heavyweight")
    wrestler = await roster.wrestler("Bret Hart")

    reign = await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id, WON)

    assert reign.champion_id == wrestler.id
    assert reign.started_at == WON
    detail = await service.detail(title.id)
    assert detail.current_championship is not None
    assert detail.current_championship.champion_id == wrestler.id


@pytest.mark.asyncio
async def test_new_champion_ends_the_previous_reign(roster, service) -> None:
    title = await roster.title()
    first = await roster.wrestler()
    second = await roster.wrestler()
    await service.award(title.id, RosterMemberType.WRESTLER, first.id, WON)

    await service.award(title.id, RosterMemberType.WRESTLER, second.id, LOST)

    history = await service.championships(title.id)
    assert [reign.champion_id for reign in history] == [second.id, first.id]
    assert history[1].ended_at == LOST
    assert history[0].ended_at is None


@pytest.mark.asyncio
async def test_current_champion_cannot_win_again(roster, service) -> None:
    title = await roster.title()
    wrestler = await roster.wrestler()
    await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id, WON)

    with pytest.raises(ChampionshipConflict) as excinfo:
        await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id, LOST)

    assert excinfo.value.reason == "already_champion"


@pytest.mark.asyncio
async def test_tag_team_titles_need_tag_team_champions(roster, service) -> None:
    title = await roster.title("Tag Team Titles", type=TitleType.TAG_TEAM)
    wrestler = await roster.wrestler()
    tag_team = await roster.tag_team()

    with pytest.raises(ChampionshipConflict) as excinfo:
        await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id, WON)
    assert excinfo.value.reason == "wrong_champion_type"

    reign = await service.award(title.id, RosterMemberType.TAG_TEAM, tag_team.id, WON)
    assert reign.champion_type is RosterMemberType.TAG_TEAM


@pytest.mark.asyncio
async def test_inactive_title_cannot_change_hands(roster, service) -> None:
    title = await roster.title(activated_at=None)
    wrestler = await roster.wrestler()

    with pytest.raises(ChampionshipConflict) as excinfo:
        await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id, WON)

    assert excinfo.value.reason == "title_not_active"


@pytest.mark.asyncio
async def test_unemployed_champion_is_rejected(roster, service) -> None:
    title = await roster.title()
    wrestler = await roster.wrestler(employed_at=None)

    with pytest.raises(ChampionshipConflict) as excinfo:
        await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id, WON)

    assert excinfo.value.reason == "champion_unavailable"


@pytest.mark.asyncio
async def test_injured_champion_can_still_be_awarded(roster, service) -> None:
    title = await roster.title()
    wrestler = await roster.wrestler()
    await WrestlerService(roster.session).injure(wrestler.id)

    reign = await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id)

    assert reign.ended_at is None


@pytest.mark.asyncio
async def test_vacate(roster, service) -> None:
    title = await roster.title()
    wrestler = await roster.wrestler()
    await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id, WON)

    reign = await service.vacate(title.id, LOST)

    assert reign.ended_at == LOST
    assert (await service.detail(title.id)).current_championship is None

    with pytest.raises(ChampionshipConflict) as excinfo:
        await service.vacate(title.id)
    assert excinfo.value.reason == "vacant"


@pytest.mark.asyncio
async def test_retiring_a_title_vacates_it(roster, service) -> None:
    title = await roster.title()
    wrestler = await roster.wrestler()
    await service.award(title.id, RosterMemberType.WRESTLER, wrestler.id, WON)

    await service.retire(title.id)

    detail = await service.detail(title.id)
    assert detail.status is ActivationStatus.RETIRED
    assert detail.current_championship is None
    assert detail.championships[0].ended_at is not None


@pytest.mark.asyncio
async def test_unactivated_title_cannot_retire(roster, service) -> None:
    title = await roster.title(activated_at=None)

    with pytest.raises(CannotBeRetired) as excinfo:
        await service.retire(title.id)

    assert excinfo.value.reason == "unactivated"


@pytest.mark.asyncio
async def test_future_activation_is_promoted(roster, service, future) -> None:
    title = await roster.title(activated_at=future)
    assert title.status is ActivationStatus.FUTURE_ACTIVATION

    promoted = await service.promote_due(future)

    assert [entity.id for entity in promoted] == [title.id]
    assert title.status is ActivationStatus.ACTIVE


@pytest.mark.asyncio
async def test_current_champion_follows_the_reigns(roster, service) -> None:
    title = await roster.title()
    first = await roster.wrestler()
    second = await roster.wrestler()
    title_id = title.id

    assert await service.current_champion(title_id) is None

    await service.award(title_id, RosterMemberType.WRESTLER, first.id, WON)
    await service.award(title_id, RosterMemberType.WRESTLER, second.id, LOST)

    current = await service.current_champion(title_id)
    assert current is not None
    assert current.champion_id == second.id
    assert current.started_at == LOST

    await service.vacate(title_id, datetime(2024, 10, 1))

    assert await service.current_champion(title_id) is None


@pytest.mark.asyncio
async def test_current_champion_of_unknown_title(service) -> None:
    with pytest.raises(LookupError):
        await service.current_champion(404)
