"""Titles and the championships contested for them."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from ringside.db.models import Title, TitleChampionship
from ringside.db.repositories import TagTeamRepository, TitleRepository, WrestlerRepository
from ringside.db.repositories.base import RosterRepository
from ringside.enums import ActivationStatus, RosterMemberType
from ringside.exceptions import ChampionshipConflict
from ringside.schemas.title import ChampionshipRead, TitleDetail, TitleRead
from ringside.utils.dates import resolve_effective_date

from .roster_service import ActivatableService

logger = logging.getLogger(__name__)


class TitleService(ActivatableService[Title]):
    resource = "titles"
    repository_class = TitleRepository
    read_schema = TitleRead

    repository: TitleRepository

    def _champion_repository(self, champion_type: RosterMemberType) -> RosterRepository[Any]:
        if champion_type is RosterMemberType.TAG_TEAM:
            return TagTeamRepository(self._session)
        return WrestlerRepository(self._session)

    async def detail(self, title_id: int) -> TitleDetail:
        title = await self.get(title_id)
        current = await self.repository.current_championship(title.id)
        return TitleDetail.model_validate(title).model_copy(
            update={
                "current_championship": (
                    ChampionshipRead.model_validate(current) if current is not None else None
                ),
                "championships": await self.championships(title.id),
                **await self.histories(title.id),
            }
        )

    async def current_champion(self, title_id: int) -> TitleChampionship | None:
        title = await self.get(title_id)
        return await self.repository.current_championship(title.id)

    async def championships(self, title_id: int) -> list[ChampionshipRead]:
        rows = await self.repository.championship_history(title_id)
        return [ChampionshipRead.model_validate(row) for row in rows]

    async def award(
        self,
        title_id: int,
        champion_type: RosterMemberType,
        champion_id: int,
        won_at: datetime | None = None,
        event_match_id: int | None = None,
    ) -> TitleChampionship:
        """Crown a new champion, ending the previous reign on the same date."""

        title = await self.get(title_id)
        champion = await self._champion_repository(champion_type).get(champion_id)
        if champion is None:
            raise LookupError(f"{champion_type.label.title()} {champion_id} not found")
        when = resolve_effective_date(won_at)

        async with self._session.begin_nested():
            if title.status is not ActivationStatus.ACTIVE:
                raise ChampionshipConflict.title_not_active(title)
            if champion_type is not title.type.champion_type:
                raise ChampionshipConflict.wrong_champion_type(title, champion_type)
            if not champion.status.is_employed:
                raise ChampionshipConflict.champion_unavailable(champion)
            current = await self.repository.current_championship(title.id)
            if (
                current is not None
                and current.champion_type is champion_type
                and current.champion_id == champion.id
            ):
                raise ChampionshipConflict.already_champion(title, champion)
            await self.repository.championships.end(
                title.id, when, attributes={"lost_event_match_id": event_match_id}
            )
            reign = await self.repository.championships.start(
                title.id,
                when,
                attributes={
                    "champion_type": champion_type,
                    "champion_id": champion.id,
                    "won_event_match_id": event_match_id,
                },
            )
        logger.info(
            "Awarded title %s (%s) to %s %s effective %s",
            title.id,
            title.name,
            champion_type.label,
            champion.id,
            when.isoformat(),
        )
        await self.invalidate()
        return reign

    async def vacate(self, title_id: int, ended_at: datetime | None = None) -> TitleChampionship:
        title = await self.get(title_id)
        when = resolve_effective_date(ended_at)
        async with self._session.begin_nested():
            reign = await self.repository.championships.end(title.id, when)
            if reign is None:
                raise ChampionshipConflict.vacant(title)
        logger.info("Vacated title %s (%s) effective %s", title.id, title.name, when.isoformat())
        await self.invalidate()
        return reign

    async def _do_retire(self, entity: Title, when: datetime) -> None:
        await super()._do_retire(entity, when)
        await self.repository.championships.end(entity.id, when)


__all__ = ["TitleService"]
