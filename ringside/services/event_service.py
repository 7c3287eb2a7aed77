"""Events: scheduling state, venues and the match card."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from ringside.db.models import Event
from ringside.db.repositories import EventRepository, VenueRepository
from ringside.enums import EventStatus
from ringside.schemas.event import EventDetail, EventRead
from ringside.utils.dates import to_utc_naive, utcnow

from .match_service import MatchService
from .roster_service import RosterService


def event_status(event: Event, now: datetime | None = None) -> EventStatus:
    """Derive the scheduling state from the event date."""

    if event.date is None:
        return EventStatus.UNSCHEDULED
    moment = to_utc_naive(now) or utcnow()
    return EventStatus.SCHEDULED if event.date > moment else EventStatus.PAST


class EventService(RosterService[Event]):
    resource = "events"
    repository_class = EventRepository
    read_schema = EventRead

    repository: EventRepository

    def to_read(self, entity: Event) -> EventRead:
        return EventRead.model_validate(
            {
                "id": entity.id,
                "name": entity.name,
                "date": entity.date,
                "venue_id": entity.venue_id,
                "preview": entity.preview,
                "status": event_status(entity),
                "created_at": entity.created_at,
                "updated_at": entity.updated_at,
                "deleted_at": entity.deleted_at,
            }
        )

    async def _check_venue(self, values: Mapping[str, Any]) -> None:
        venue_id = values.get("venue_id")
        if venue_id is not None and await VenueRepository(self._session).get(venue_id) is None:
            raise LookupError(f"Venue {venue_id} not found")

    async def create(self, values: Mapping[str, Any]) -> Event:
        values = dict(values)
        values["date"] = to_utc_naive(values.get("date"))
        await self._check_venue(values)
        return await super().create(values)

    async def update(self, entity_id: int, changes: Mapping[str, Any]) -> Event:
        changes = dict(changes)
        if "date" in changes:
            changes["date"] = to_utc_naive(changes["date"])
        await self._check_venue(changes)
        return await super().update(entity_id, changes)

    async def detail(self, event_id: int) -> EventDetail:
        event = await self.get(event_id)
        matches = await MatchService(self._session, self._cache).matches_for(event.id)
        return EventDetail.model_validate(
            {**self.to_read(event).model_dump(), "matches": matches}
        )


__all__ = ["EventService", "event_status"]
