"""Tag teams: partners, and actions that carry the partners along."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from ringside.db.models import TagTeam, Wrestler
from ringside.db.repositories import TagTeamRepository, WrestlerRepository
from ringside.enums import EmploymentStatus
from ringside.exceptions import CannotBeRetired, CannotBeSuspended, MembershipConflict
from ringside.schemas.tag_team import TagTeamDetail, TagTeamRead
from ringside.utils.dates import resolve_effective_date

from . import status_rules
from .cascades import employ_members
from .management import ManagedClientService

logger = logging.getLogger(__name__)

TAG_TEAM_SIZE = 2


class TagTeamService(ManagedClientService[TagTeam]):
    resource = "tag_teams"
    repository_class = TagTeamRepository
    read_schema = TagTeamRead
    related_resources = ("wrestlers", "managers")

    repository: TagTeamRepository

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.wrestlers = WrestlerRepository(self._session)

    async def detail(self, tag_team_id: int) -> TagTeamDetail:
        tag_team = await self.get(tag_team_id)
        current = await self.repository.current_wrestler_ids(tag_team.id)
        previous = await self.repository.previous_wrestler_ids(tag_team.id)
        return TagTeamDetail.model_validate(tag_team).model_copy(
            update={
                "current_wrestler_ids": current,
                "previous_wrestler_ids": [wid for wid in previous if wid not in current],
                "current_manager_ids": await self.repository.current_manager_ids(tag_team.id),
                "current_stable_id": await self.repository.current_stable_id(tag_team.id),
                **await self.histories(tag_team.id),
            }
        )

    async def create(self, values: Mapping[str, Any]) -> TagTeam:
        values = dict(values)
        wrestler_ids = list(values.pop("wrestler_ids", None) or [])
        employed_at = values.pop("employed_at", None)
        if wrestler_ids:
            self._check_size(wrestler_ids)
        async with self._session.begin_nested():
            tag_team = await super().create(values)
            if wrestler_ids:
                await self._replace_partners(
                    tag_team, wrestler_ids, resolve_effective_date(employed_at)
                )
            if employed_at is not None:
                await self.employ(tag_team.id, employed_at)
        return tag_team

    def _check_size(self, wrestler_ids: Sequence[int]) -> None:
        if len(wrestler_ids) != TAG_TEAM_SIZE or len(set(wrestler_ids)) != TAG_TEAM_SIZE:
            raise MembershipConflict.invalid_tag_team_size(len(set(wrestler_ids)), TAG_TEAM_SIZE)

    async def update_partners(
        self, tag_team_id: int, wrestler_ids: Sequence[int], changed_at: datetime | None = None
    ) -> list[Wrestler]:
        """Replace the current partners; departing rows are closed, never deleted."""

        tag_team = await self.get(tag_team_id)
        self._check_size(wrestler_ids)
        when = resolve_effective_date(changed_at)
        async with self._session.begin_nested():
            await self._replace_partners(tag_team, wrestler_ids, when)
        logger.info(
            "Tag team %s (%s) partners set to %s effective %s",
            tag_team.id,
            tag_team.name,
            list(wrestler_ids),
            when.isoformat(),
        )
        await self.invalidate()
        return await self.repository.current_wrestlers(tag_team.id)

    async def _replace_partners(
        self, tag_team: TagTeam, wrestler_ids: Sequence[int], when: datetime
    ) -> None:
        wrestlers = await self.wrestlers.get_many(wrestler_ids)
        missing = [wid for wid in wrestler_ids if wid not in wrestlers]
        if missing:
            raise LookupError(f"Wrestler {missing[0]} not found")

        current = await self.repository.current_wrestler_ids(tag_team.id)
        joining = [wid for wid in wrestler_ids if wid not in current]
        for wrestler_id in joining:
            wrestler = wrestlers[wrestler_id]
            if wrestler.status is EmploymentStatus.RETIRED:
                raise MembershipConflict.retired_member(wrestler)
            other_team_id = await self.wrestlers.current_tag_team_id(wrestler.id)
            if other_team_id is not None:
                other_team = await self.repository.get(other_team_id, include_deleted=True)
                raise MembershipConflict.already_in_tag_team(wrestler, other_team)

        for wrestler_id in current:
            if wrestler_id not in wrestler_ids:
                await self.repository.partners.end(wrestler_id, when, tag_team_id=tag_team.id)
        for wrestler_id in joining:
            await self.repository.partners.start(wrestler_id, when, tag_team_id=tag_team.id)

        if tag_team.status.is_employed and joining:
            await employ_members(self._session, when, wrestler_ids=joining)

    # -- actions -------------------------------------------------------------

    async def _do_employ(self, entity: TagTeam, when: datetime) -> None:
        await super()._do_employ(entity, when)
        await employ_members(
            self._session,
            when,
            wrestler_ids=await self.repository.current_wrestler_ids(entity.id),
            manager_ids=await self.repository.current_manager_ids(entity.id),
        )

    async def _do_suspend(self, entity: TagTeam, when: datetime) -> None:
        status_rules.ensure_can_suspend(entity)
        partners = await self.repository.current_wrestlers(entity.id)
        status_rules.ensure_partners_available(CannotBeSuspended, entity, partners)
        await self.repository.suspend(entity, when)
        for partner in partners:
            await self.wrestlers.suspend(partner, when)

    async def _do_reinstate(self, entity: TagTeam, when: datetime) -> None:
        await super()._do_reinstate(entity, when)
        for partner in await self.repository.current_wrestlers(entity.id):
            if partner.status is EmploymentStatus.SUSPENDED:
                await self.wrestlers.reinstate(partner, when)

    async def _do_release(self, entity: TagTeam, when: datetime) -> None:
        await super()._do_release(entity, when)
        for partner in await self.repository.current_wrestlers(entity.id):
            if partner.status.is_employed:
                await self.wrestlers.release(partner, when)

    async def _do_retire(self, entity: TagTeam, when: datetime) -> None:
        status_rules.ensure_can_retire(entity)
        partners = await self.repository.current_wrestlers(entity.id)
        status_rules.ensure_partners_available(
            CannotBeRetired,
            entity,
            partners,
            unavailable=(EmploymentStatus.INJURED, EmploymentStatus.SUSPENDED),
        )
        await self.repository.retire(entity, when)
        await self.repository.stable_memberships.end(entity.id, when)
        await self.repository.managers.end_all(when, tag_team_id=entity.id)
        await self.repository.partners.end_all(when, tag_team_id=entity.id)


__all__ = ["TAG_TEAM_SIZE", "TagTeamService"]
