"""Stables: mixed groups of wrestlers, tag teams and managers."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from ringside.db.models import Stable
from ringside.db.repositories import (
    ManagerRepository,
    StableRepository,
    TagTeamRepository,
    WrestlerRepository,
)
from ringside.db.repositories.base import RosterRepository
from ringside.db.repositories.periods import PeriodRepository
from ringside.enums import ActivationStatus, EmploymentStatus
from ringside.exceptions import MembershipConflict
from ringside.schemas.stable import StableDetail, StableMembers, StableRead
from ringside.utils.dates import resolve_effective_date

from . import status_rules
from .cascades import employ_members
from .roster_service import ActivatableService

logger = logging.getLogger(__name__)

_MEMBER_KINDS = ("wrestlers", "tag_teams", "managers")


class StableService(ActivatableService[Stable]):
    resource = "stables"
    repository_class = StableRepository
    read_schema = StableRead
    related_resources = ("wrestlers", "tag_teams", "managers")

    repository: StableRepository

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._member_repositories: dict[str, RosterRepository[Any]] = {
            "wrestlers": WrestlerRepository(self._session),
            "tag_teams": TagTeamRepository(self._session),
            "managers": ManagerRepository(self._session),
        }

    async def detail(self, stable_id: int) -> StableDetail:
        stable = await self.get(stable_id)
        current = await self.repository.current_member_ids(stable.id)
        previous = await self.repository.previous_member_ids(stable.id)
        return StableDetail.model_validate(stable).model_copy(
            update={
                "current_members": _members(current),
                "previous_members": _members(previous),
                **await self.histories(stable.id),
            }
        )

    async def create(self, values: Mapping[str, Any]) -> Stable:
        values = dict(values)
        members = {
            kind: list(values.pop(f"{kind[:-1]}_ids", None) or []) for kind in _MEMBER_KINDS
        }
        activated_at = values.pop("activated_at", None)
        async with self._session.begin_nested():
            stable = await super().create(values)
            if any(members.values()):
                await self._join(stable, members, resolve_effective_date(activated_at))
            if activated_at is not None:
                await self.activate(stable.id, activated_at)
        return stable

    async def add_members(
        self,
        stable_id: int,
        *,
        wrestler_ids: Sequence[int] = (),
        tag_team_ids: Sequence[int] = (),
        manager_ids: Sequence[int] = (),
        joined_at: datetime | None = None,
    ) -> StableMembers:
        stable = await self.get(stable_id)
        when = resolve_effective_date(joined_at)
        members = {
            "wrestlers": list(wrestler_ids),
            "tag_teams": list(tag_team_ids),
            "managers": list(manager_ids),
        }
        async with self._session.begin_nested():
            if stable.status is ActivationStatus.RETIRED:
                raise MembershipConflict.group_retired(stable)
            await self._join(stable, members, when)
        logger.info(
            "Stable %s (%s) joined by %s on %s", stable.id, stable.name, members, when.isoformat()
        )
        await self.invalidate()
        return _members(await self.repository.current_member_ids(stable.id))

    async def remove_members(
        self,
        stable_id: int,
        *,
        wrestler_ids: Sequence[int] = (),
        tag_team_ids: Sequence[int] = (),
        manager_ids: Sequence[int] = (),
        left_at: datetime | None = None,
    ) -> StableMembers:
        stable = await self.get(stable_id)
        when = resolve_effective_date(left_at)
        members = {
            "wrestlers": list(wrestler_ids),
            "tag_teams": list(tag_team_ids),
            "managers": list(manager_ids),
        }
        families = self.repository.member_families()
        async with self._session.begin_nested():
            for kind, ids in members.items():
                entities = await self._load(kind, ids)
                for entity in entities:
                    row = await families[kind].end(entity.id, when, stable_id=stable.id)
                    if row is None:
                        raise MembershipConflict.not_a_member(entity, stable)
        logger.info(
            "Stable %s (%s) left by %s on %s", stable.id, stable.name, members, when.isoformat()
        )
        await self.invalidate()
        return _members(await self.repository.current_member_ids(stable.id))

    async def _load(self, kind: str, ids: Sequence[int]) -> list[Any]:
        found = await self._member_repositories[kind].get_many(ids)
        for entity_id in ids:
            if entity_id not in found:
                raise LookupError(f"{kind[:-1].replace('_', ' ').title()} {entity_id} not found")
        return [found[entity_id] for entity_id in dict.fromkeys(ids)]

    async def _join(
        self, stable: Stable, members: Mapping[str, Sequence[int]], when: datetime
    ) -> None:
        families: dict[str, PeriodRepository[Any]] = self.repository.member_families()
        for kind, ids in members.items():
            for entity in await self._load(kind, ids):
                if entity.status is EmploymentStatus.RETIRED:
                    raise MembershipConflict.retired_member(entity)
                current = await families[kind].open(entity.id)
                if current is not None:
                    holder = stable
                    if current.stable_id != stable.id:
                        holder = await self.repository.get(current.stable_id, include_deleted=True)
                    raise MembershipConflict.already_in_stable(entity, holder)
                await families[kind].start(entity.id, when, stable_id=stable.id)

    # -- actions -------------------------------------------------------------

    async def _do_activate(self, entity: Stable, when: datetime) -> None:
        status_rules.ensure_can_activate(entity)
        members = await self.repository.current_member_ids(entity.id)
        status_rules.ensure_stable_has_enough_members(
            entity, len(members["wrestlers"]), len(members["tag_teams"])
        )
        await self.repository.activate(entity, when)
        await employ_members(
            self._session,
            when,
            wrestler_ids=members["wrestlers"],
            tag_team_ids=members["tag_teams"],
            manager_ids=members["managers"],
        )

    async def _do_deactivate(self, entity: Stable, when: datetime) -> None:
        await super()._do_deactivate(entity, when)
        await self.repository.remove_all_members(entity.id, when)

    async def _do_retire(self, entity: Stable, when: datetime) -> None:
        await super()._do_retire(entity, when)
        await self.repository.remove_all_members(entity.id, when)


def _members(ids: Mapping[str, list[int]]) -> StableMembers:
    return StableMembers(
        wrestler_ids=ids["wrestlers"],
        tag_team_ids=ids["tag_teams"],
        manager_ids=ids["managers"],
    )


__all__ = ["StableService"]
