"""Booking matches onto an event card and recording their results."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ringside.cache import CacheClient, invalidate_namespace
from ringside.db.models import (
    EventMatch,
    EventMatchCompetitor,
    EventMatchReferee,
    EventMatchResult,
    EventMatchTitle,
)
from ringside.db.repositories import (
    EventMatchRepository,
    EventRepository,
    RefereeRepository,
    TagTeamRepository,
    TitleRepository,
    WrestlerRepository,
)
from ringside.enums import ActivationStatus, MatchDecision, MatchType, RosterMemberType
from ringside.exceptions import CompetitorConflict, InvalidMatchConfiguration
from ringside.schemas.event import (
    CompetitorRef,
    MatchCompetitorRead,
    MatchRead,
    MatchResultRead,
)
from ringside.utils.dates import resolve_effective_date

from . import status_rules
from .title_service import TitleService

logger = logging.getLogger(__name__)

_COMPETITOR_TYPES = (RosterMemberType.WRESTLER, RosterMemberType.TAG_TEAM)


class MatchService:
    def __init__(self, session: AsyncSession, cache: CacheClient | None = None) -> None:
        self._session = session
        self._cache = cache
        self.events = EventRepository(session)
        self.matches = EventMatchRepository(session)
        self.wrestlers = WrestlerRepository(session)
        self.tag_teams = TagTeamRepository(session)
        self.referees = RefereeRepository(session)
        self.titles = TitleRepository(session)

    async def _get_event(self, event_id: int) -> Any:
        event = await self.events.get(event_id)
        if event is None:
            raise LookupError(f"Event {event_id} not found")
        return event

    async def get_match(self, event_id: int, match_id: int) -> EventMatch:
        match = await self.matches.get(match_id)
        if match is None or match.event_id != event_id:
            raise LookupError(f"Match {match_id} not found on event {event_id}")
        return match

    async def matches_for(self, event_id: int) -> list[MatchRead]:
        matches = await self.matches.list_for_event(event_id)
        results = await self.matches.results_for([match.id for match in matches])
        return [self.to_read(match, results.get(match.id)) for match in matches]

    def to_read(self, match: EventMatch, result: EventMatchResult | None) -> MatchRead:
        return MatchRead(
            id=match.id,
            event_id=match.event_id,
            match_number=match.match_number,
            match_type=match.match_type,
            preview=match.preview,
            competitors=[MatchCompetitorRead.model_validate(row) for row in match.competitors],
            referee_ids=[row.referee_id for row in match.referees],
            title_ids=[row.title_id for row in match.titles],
            result=MatchResultRead.model_validate(result) if result is not None else None,
        )

    async def _load_competitor(self, ref: CompetitorRef) -> Any:
        repository = (
            self.tag_teams if ref.competitor_type is RosterMemberType.TAG_TEAM else self.wrestlers
        )
        competitor = await repository.get(ref.competitor_id)
        if competitor is None:
            raise LookupError(f"{ref.competitor_type.label.title()} {ref.competitor_id} not found")
        return competitor

    async def _is_bookable(self, competitor: Any) -> bool:
        if competitor.member_type is RosterMemberType.TAG_TEAM:
            partners = await self.tag_teams.current_wrestlers(competitor.id)
            return status_rules.is_tag_team_bookable(competitor, partners)
        return status_rules.is_bookable(competitor)

    async def add_match(
        self,
        event_id: int,
        match_type: MatchType,
        sides: Sequence[Sequence[CompetitorRef]],
        referee_ids: Sequence[int],
        title_ids: Sequence[int] = (),
        preview: str | None = None,
    ) -> MatchRead:
        """Validate a booking and append it to the event card.

        Checks run in a fixed order so the first broken rule is the one
        reported: side count, referee, duplicates, availability, then titles.
        """

        event = await self._get_event(event_id)
        filled = [list(side) for side in sides if side]
        if len(filled) < 2:
            raise InvalidMatchConfiguration.not_enough_sides()
        required = match_type.number_of_sides
        if required is not None and len(filled) != required:
            raise InvalidMatchConfiguration.wrong_number_of_sides(
                match_type, required, len(filled)
            )
        if not referee_ids:
            raise InvalidMatchConfiguration.missing_referee()

        seen: set[tuple[RosterMemberType, int]] = set()
        for side in filled:
            for ref in side:
                if ref.competitor_type not in _COMPETITOR_TYPES:
                    raise InvalidMatchConfiguration.invalid_competitor_type(ref.competitor_type)
                key = (ref.competitor_type, ref.competitor_id)
                if key in seen:
                    raise InvalidMatchConfiguration.duplicate_competitor(
                        await self._load_competitor(ref)
                    )
                seen.add(key)

        competitors: list[tuple[int, Any]] = []
        for side_number, side in enumerate(filled, start=1):
            for ref in side:
                competitor = await self._load_competitor(ref)
                if not await self._is_bookable(competitor):
                    raise CompetitorConflict.unavailable(competitor)
                competitors.append((side_number, competitor))

        referees = await self.referees.get_many(referee_ids)
        for referee_id in dict.fromkeys(referee_ids):
            referee = referees.get(referee_id)
            if referee is None:
                raise LookupError(f"Referee {referee_id} not found")
            if not status_rules.is_bookable(referee):
                raise CompetitorConflict.unavailable(referee)

        titles = await self.titles.get_many(title_ids)
        for title_id in dict.fromkeys(title_ids):
            title = titles.get(title_id)
            if title is None:
                raise LookupError(f"Title {title_id} not found")
            if title.status is not ActivationStatus.ACTIVE:
                raise InvalidMatchConfiguration.title_not_active(title)
            for _, competitor in competitors:
                if competitor.member_type is not title.type.champion_type:
                    raise InvalidMatchConfiguration.wrong_competitor_for_title(title, competitor)

        async with self._session.begin_nested():
            match = await self.matches.add(
                EventMatch(
                    event_id=event.id,
                    match_number=await self.matches.count_for_event(event.id) + 1,
                    match_type=match_type,
                    preview=preview,
                    competitors=[
                        EventMatchCompetitor(
                            competitor_type=competitor.member_type,
                            competitor_id=competitor.id,
                            side_number=side_number,
                        )
                        for side_number, competitor in competitors
                    ],
                    referees=[
                        EventMatchReferee(referee_id=referee_id)
                        for referee_id in dict.fromkeys(referee_ids)
                    ],
                    titles=[
                        EventMatchTitle(title_id=title_id) for title_id in dict.fromkeys(title_ids)
                    ],
                )
            )
        logger.info(
            "Booked match %s (%s) as #%s on event %s",
            match.id,
            match_type.value,
            match.match_number,
            event.id,
        )
        await invalidate_namespace(self._cache, "events")
        return self.to_read(match, None)

    async def record_result(
        self,
        event_id: int,
        match_id: int,
        decision: MatchDecision,
        winning_side: int | None = None,
        decided_at: datetime | None = None,
    ) -> MatchRead:
        """Store the outcome and move any titles a clean single winner earned."""

        event = await self._get_event(event_id)
        match = await self.get_match(event.id, match_id)
        if await self.matches.get_result(match.id) is not None:
            raise InvalidMatchConfiguration.result_already_recorded()

        sides = {row.side_number for row in match.competitors}
        if not decision.has_winner:
            winning_side = None
        elif winning_side not in sides:
            raise InvalidMatchConfiguration.invalid_winning_side(winning_side)

        when = resolve_effective_date(decided_at or event.date)
        async with self._session.begin_nested():
            result = await self.matches.add_result(
                EventMatchResult(
                    event_match_id=match.id, winning_side=winning_side, decision=decision
                )
            )
            winners = [row for row in match.competitors if row.side_number == winning_side]
            if decision.title_can_change and len(winners) == 1 and match.titles:
                await self._award_titles(match, winners[0], when)
        logger.info(
            "Recorded %s for match %s on event %s (winning side %s)",
            decision.value,
            match.id,
            event.id,
            winning_side,
        )
        await invalidate_namespace(self._cache, "events", "titles")
        return self.to_read(match, result)

    async def _award_titles(
        self, match: EventMatch, winner: EventMatchCompetitor, when: datetime
    ) -> None:
        titles = TitleService(self._session, self._cache)
        for row in match.titles:
            current = await self.titles.current_championship(row.title_id)
            if (
                current is not None
                and current.champion_type is winner.competitor_type
                and current.champion_id == winner.competitor_id
            ):
                continue
            await titles.award(
                row.title_id,
                winner.competitor_type,
                winner.competitor_id,
                when,
                event_match_id=match.id,
            )


__all__ = ["MatchService"]
