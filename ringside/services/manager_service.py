from __future__ import annotations

from datetime import datetime

from ringside.db.models import Manager
from ringside.db.repositories import ManagerRepository
from ringside.schemas.person import ManagerDetail, ManagerRead

from .roster_service import EmployableService


class ManagerService(EmployableService[Manager]):
    resource = "managers"
    repository_class = ManagerRepository
    read_schema = ManagerRead

    repository: ManagerRepository

    async def detail(self, manager_id: int) -> ManagerDetail:
        manager = await self.get(manager_id)
        clients = await self.repository.current_client_ids(manager.id)
        return ManagerDetail.model_validate(manager).model_copy(
            update={
                "current_wrestler_ids": clients["wrestlers"],
                "current_tag_team_ids": clients["tag_teams"],
                "current_stable_id": await self.repository.current_stable_id(manager.id),
                **await self.histories(manager.id),
            }
        )

    async def _do_release(self, entity: Manager, when: datetime) -> None:
        await super()._do_release(entity, when)
        await self.repository.end_client_relations(entity.id, when)

    async def _do_retire(self, entity: Manager, when: datetime) -> None:
        await super()._do_retire(entity, when)
        await self.repository.end_client_relations(entity.id, when)
        await self.repository.stable_memberships.end(entity.id, when)


__all__ = ["ManagerService"]
