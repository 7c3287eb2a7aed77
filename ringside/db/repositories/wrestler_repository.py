"""Persistence for wrestlers and the groups they belong to."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import (
    StableWrestler,
    TagTeamWrestler,
    Wrestler,
    WrestlerEmployment,
    WrestlerInjury,
    WrestlerManager,
    WrestlerRetirement,
    WrestlerSuspension,
)

from .lifecycle import EmployableRepository
from .periods import PeriodRepository


class WrestlerRepository(EmployableRepository[Wrestler]):
    model = Wrestler
    search_columns = ("name", "hometown")
    owner_column = "wrestler_id"
    employment_model = WrestlerEmployment
    injury_model = WrestlerInjury
    suspension_model = WrestlerSuspension
    retirement_model = WrestlerRetirement

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        # A wrestler holds at most one open row in each of these tables.
        self.tag_team_memberships = PeriodRepository(session, TagTeamWrestler, "wrestler_id")
        self.stable_memberships = PeriodRepository(session, StableWrestler, "wrestler_id")
        # Keyed on the pair: a wrestler may have several managers at once.
        self.managers = PeriodRepository(session, WrestlerManager, "wrestler_id")

    async def current_manager_ids(self, wrestler_id: int) -> list[int]:
        rows = await self.managers.open_rows(wrestler_id=wrestler_id)
        return [row.manager_id for row in rows]

    async def current_tag_team_id(self, wrestler_id: int) -> int | None:
        row = await self.tag_team_memberships.open(wrestler_id)
        return row.tag_team_id if row is not None else None

    async def current_stable_id(self, wrestler_id: int) -> int | None:
        row = await self.stable_memberships.open(wrestler_id)
        return row.stable_id if row is not None else None


__all__ = ["WrestlerRepository"]
