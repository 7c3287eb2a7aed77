from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from ringside.enums import EventStatus, MatchType, RosterMemberType
from ringside.schemas.event import CompetitorRef
from ringside.services.event_service import EventService, event_status
from ringside.services.match_service import MatchService
from ringside.utils.dates import utcnow


@pytest.fixture
def service(session) -> EventService:
    return EventService(session)


@pytest.mark.asyncio
async def test_event_status_follows_the_date(roster) -> None:
    now = datetime(2024, 6, 1, 12)
    unscheduled = await roster.event("Dark Match Taping", date=None)
    scheduled = await roster.event("WrestleMania", date=now + timedelta(days=30))
    past = await roster.event("Royal Rumble", date=now - timedelta(days=30))

    assert event_status(unscheduled, now) is EventStatus.UNSCHEDULED
    assert event_status(scheduled, now) is EventStatus.SCHEDULED
    assert event_status(past, now) is EventStatus.PAST


@pytest.mark.asyncio
async def test_list_filters_on_derived_status(roster, service) -> None:
    await roster.event("Dark Match Taping", date=None)
    await roster.event("WrestleMania", date=utcnow() + timedelta(days=30))
    await roster.event("Royal Rumble")

    scheduled = await service.list_page(status=EventStatus.SCHEDULED)
    unscheduled = await service.list_page(status=EventStatus.UNSCHEDULED)
    everything = await service.list_page()

    assert [item.name for item in scheduled.items] == ["WrestleMania"]
    assert scheduled.items[0].status is EventStatus.SCHEDULED
    assert [item.name for item in unscheduled.items] == ["Dark Match Taping"]
    assert everything.total == 3
    assert [item.name for item in everything.items] == [
        "Dark Match Taping",
        "Royal Rumble",
        "WrestleMania",
    ]


@pytest.mark.asyncio
async def test_unknown_venue_is_rejected(service) -> None:
    with pytest.raises(LookupError):
        await service.create({"name": "Nowhere", "date": None, "venue_id": 404})


@pytest.mark.asyncio
async def test_create_normalizes_aware_dates(service) -> None:
    event = await service.create(
        {"name": "Clash", "date": datetime(2024, 6, 1, 20, tzinfo=UTC), "venue_id": None}
    )

    assert event.date == datetime(2024, 6, 1, 20)
    assert event.date.tzinfo is None


@pytest.mark.asyncio
async def test_detail_includes_the_card(roster, service) -> None:
    venue = await roster.venue("Madison Square Garden")
    event = await roster.event("WrestleMania", venue=venue)
    first = await roster.wrestler()
    second = await roster.wrestler()
    referee = await roster.referee()
    await MatchService(roster.session).add_match(
        event.id,
        MatchType.SINGLES,
        [
            [CompetitorRef(competitor_type=RosterMemberType.WRESTLER, competitor_id=first.id)],
            [CompetitorRef(competitor_type=RosterMemberType.WRESTLER, competitor_id=second.id)],
        ],
        [referee.id],
        preview="Iron man match",
    )

    detail = await service.detail(event.id)

    assert detail.venue_id == venue.id
    assert detail.status is EventStatus.PAST
    assert [match.preview for match in detail.matches] == ["Iron man match"]
