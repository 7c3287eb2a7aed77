from __future__ import annotations

from datetime import datetime

from ringside.db.models import Wrestler
from ringside.db.repositories import WrestlerRepository
from ringside.schemas.wrestler import WrestlerDetail, WrestlerRead

from .cascades import employ_members
from .management import ManagedClientService


class WrestlerService(ManagedClientService[Wrestler]):
    resource = "wrestlers"
    repository_class = WrestlerRepository
    read_schema = WrestlerRead
    related_resources = ("managers", "tag_teams")

    repository: WrestlerRepository

    async def detail(self, wrestler_id: int) -> WrestlerDetail:
        wrestler = await self.get(wrestler_id)
        histories = await self.histories(wrestler.id)
        return WrestlerDetail.model_validate(wrestler).model_copy(
            update={
                "current_tag_team_id": await self.repository.current_tag_team_id(wrestler.id),
                "current_stable_id": await self.repository.current_stable_id(wrestler.id),
                "current_manager_ids": await self.repository.current_manager_ids(wrestler.id),
                **histories,
            }
        )

    async def _do_employ(self, entity: Wrestler, when: datetime) -> None:
        await super()._do_employ(entity, when)
        await employ_members(
            self._session,
            when,
            manager_ids=await self.repository.current_manager_ids(entity.id),
        )

    async def _do_retire(self, entity: Wrestler, when: datetime) -> None:
        await super()._do_retire(entity, when)
        await self.repository.tag_team_memberships.end(entity.id, when)
        await self.repository.managers.end_all(when, wrestler_id=entity.id)
        await self.repository.stable_memberships.end(entity.id, when)


__all__ = ["WrestlerService"]
