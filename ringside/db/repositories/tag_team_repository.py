"""Persistence for tag teams, their partners and their managers."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import (
    StableTagTeam,
    TagTeam,
    TagTeamEmployment,
    TagTeamManager,
    TagTeamRetirement,
    TagTeamSuspension,
    TagTeamWrestler,
    Wrestler,
)

from .lifecycle import EmployableRepository
from .periods import PeriodRepository


class TagTeamRepository(EmployableRepository[TagTeam]):
    model = TagTeam
    owner_column = "tag_team_id"
    employment_model = TagTeamEmployment
    suspension_model = TagTeamSuspension
    retirement_model = TagTeamRetirement

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        # Partnerships are owned by the wrestler, who can only be on one team.
        self.partners = PeriodRepository(session, TagTeamWrestler, "wrestler_id")
        self.managers = PeriodRepository(session, TagTeamManager, "tag_team_id")
        self.stable_memberships = PeriodRepository(session, StableTagTeam, "tag_team_id")

    async def current_wrestler_ids(self, tag_team_id: int) -> list[int]:
        return await self.partners.open_owner_ids(tag_team_id=tag_team_id)

    async def current_wrestlers(self, tag_team_id: int) -> list[Wrestler]:
        """Current partners in the order they joined."""

        ids = await self.current_wrestler_ids(tag_team_id)
        if not ids:
            return []
        result = await self._session.execute(select(Wrestler).where(Wrestler.id.in_(ids)))
        by_id = {wrestler.id: wrestler for wrestler in result.scalars().all()}
        return [by_id[wrestler_id] for wrestler_id in ids if wrestler_id in by_id]

    async def previous_wrestler_ids(self, tag_team_id: int) -> list[int]:
        rows = await self._session.execute(
            select(TagTeamWrestler.wrestler_id)
            .where(
                TagTeamWrestler.tag_team_id == tag_team_id,
                TagTeamWrestler.ended_at.is_not(None),
            )
            .order_by(TagTeamWrestler.ended_at.desc())
        )
        return list(dict.fromkeys(rows.scalars().all()))

    async def current_manager_ids(self, tag_team_id: int) -> list[int]:
        rows = await self.managers.open_rows(tag_team_id=tag_team_id)
        return [row.manager_id for row in rows]

    async def current_stable_id(self, tag_team_id: int) -> int | None:
        row = await self.stable_memberships.open(tag_team_id)
        return row.stable_id if row is not None else None


__all__ = ["TagTeamRepository"]
