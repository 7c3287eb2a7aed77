"""Persistence for events, their match cards and results."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import Event, EventMatch, EventMatchResult
from ringside.enums import EventStatus
from ringside.utils.dates import to_utc_naive, utcnow

from .base import RosterRepository


class EventRepository(RosterRepository[Event]):
    model = Event
    search_columns = ("name",)
    order_columns = ("name",)

    def _build_list_query(
        self,
        *,
        status: Any = None,
        search: str | None = None,
        include_deleted: bool = False,
        now: datetime | None = None,
    ) -> Select[tuple[Event]]:
        # Event status is derived from the date, not stored.
        stmt = super()._build_list_query(
            status=None, search=search, include_deleted=include_deleted
        )
        if status is None:
            return stmt
        moment = to_utc_naive(now) or utcnow()
        if status is EventStatus.UNSCHEDULED:
            return stmt.where(Event.date.is_(None))
        if status is EventStatus.SCHEDULED:
            return stmt.where(Event.date.is_not(None), Event.date > moment)
        return stmt.where(Event.date.is_not(None), Event.date <= moment)


class EventMatchRepository:
    """Matches are owned by their event and are never soft-deleted."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, match_id: int) -> EventMatch | None:
        return await self._session.get(EventMatch, match_id)

    async def list_for_event(self, event_id: int) -> list[EventMatch]:
        result = await self._session.execute(
            select(EventMatch)
            .where(EventMatch.event_id == event_id)
            .order_by(EventMatch.match_number)
        )
        return list(result.scalars().all())

    async def count_for_event(self, event_id: int) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(EventMatch).where(EventMatch.event_id == event_id)
        )
        return int(result.scalar_one())

    async def add(self, match: EventMatch) -> EventMatch:
        self._session.add(match)
        await self._session.flush()
        return match

    async def get_result(self, match_id: int) -> EventMatchResult | None:
        result = await self._session.execute(
            select(EventMatchResult).where(EventMatchResult.event_match_id == match_id)
        )
        return result.scalars().first()

    async def results_for(self, match_ids: list[int]) -> dict[int, EventMatchResult]:
        if not match_ids:
            return {}
        result = await self._session.execute(
            select(EventMatchResult).where(EventMatchResult.event_match_id.in_(match_ids))
        )
        return {row.event_match_id: row for row in result.scalars().all()}

    async def add_result(self, result: EventMatchResult) -> EventMatchResult:
        self._session.add(result)
        await self._session.flush()
        return result


__all__ = ["EventMatchRepository", "EventRepository"]
