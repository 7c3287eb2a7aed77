"""Persistence for managers and the clients they accompany."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import (
    Manager,
    ManagerEmployment,
    ManagerInjury,
    ManagerRetirement,
    ManagerSuspension,
    StableManager,
    TagTeamManager,
    WrestlerManager,
)

from .lifecycle import EmployableRepository
from .periods import PeriodRepository


class ManagerRepository(EmployableRepository[Manager]):
    model = Manager
    search_columns = ("first_name", "last_name")
    order_columns = ("last_name", "first_name")
    owner_column = "manager_id"
    employment_model = ManagerEmployment
    injury_model = ManagerInjury
    suspension_model = ManagerSuspension
    retirement_model = ManagerRetirement

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.wrestler_clients = PeriodRepository(session, WrestlerManager, "manager_id")
        self.tag_team_clients = PeriodRepository(session, TagTeamManager, "manager_id")
        self.stable_memberships = PeriodRepository(session, StableManager, "manager_id")

    async def current_client_ids(self, manager_id: int) -> dict[str, list[int]]:
        wrestlers = await self.wrestler_clients.open_rows(manager_id=manager_id)
        tag_teams = await self.tag_team_clients.open_rows(manager_id=manager_id)
        return {
            "wrestlers": [row.wrestler_id for row in wrestlers],
            "tag_teams": [row.tag_team_id for row in tag_teams],
        }

    async def end_client_relations(self, manager_id: int, ended_at: datetime) -> int:
        """Close every open client relationship; returns how many were closed."""

        closed = await self.wrestler_clients.end_all(ended_at, manager_id=manager_id)
        closed += await self.tag_team_clients.end_all(ended_at, manager_id=manager_id)
        return len(closed)

    async def current_stable_id(self, manager_id: int) -> int | None:
        row = await self.stable_memberships.open(manager_id)
        return row.stable_id if row is not None else None


__all__ = ["ManagerRepository"]
