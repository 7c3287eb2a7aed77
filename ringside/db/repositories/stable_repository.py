"""Persistence for stables and their mixed membership."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import (
    Stable,
    StableActivation,
    StableManager,
    StableRetirement,
    StableTagTeam,
    StableWrestler,
)

from .lifecycle import ActivatableRepository
from .periods import PeriodRepository


class StableRepository(ActivatableRepository[Stable]):
    model = Stable
    owner_column = "stable_id"
    activation_model = StableActivation
    retirement_model = StableRetirement

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        # Membership rows are owned by the member: one open stable each.
        self.wrestler_members = PeriodRepository(session, StableWrestler, "wrestler_id")
        self.tag_team_members = PeriodRepository(session, StableTagTeam, "tag_team_id")
        self.manager_members = PeriodRepository(session, StableManager, "manager_id")

    def member_families(self) -> dict[str, PeriodRepository]:
        return {
            "wrestlers": self.wrestler_members,
            "tag_teams": self.tag_team_members,
            "managers": self.manager_members,
        }

    async def current_member_ids(self, stable_id: int) -> dict[str, list[int]]:
        return {
            name: await family.open_owner_ids(stable_id=stable_id)
            for name, family in self.member_families().items()
        }

    async def previous_member_ids(self, stable_id: int) -> dict[str, list[int]]:
        collected: dict[str, list[int]] = {}
        for name, family in self.member_families().items():
            rows = await family.all_rows(stable_id=stable_id)
            current = {getattr(row, family.owner_column) for row in rows if row.is_open}
            collected[name] = list(
                dict.fromkeys(
                    getattr(row, family.owner_column)
                    for row in rows
                    if not row.is_open and getattr(row, family.owner_column) not in current
                )
            )
        return collected

    async def remove_all_members(self, stable_id: int, ended_at: datetime) -> int:
        closed = 0
        for family in self.member_families().values():
            closed += len(await family.end_all(ended_at, stable_id=stable_id))
        return closed


__all__ = ["StableRepository"]
