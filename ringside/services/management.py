"""Hiring and firing managers for wrestlers and tag teams."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from ringside.db.repositories import ManagerRepository
from ringside.db.repositories.base import ModelT
from ringside.enums import EmploymentStatus
from ringside.exceptions import MembershipConflict
from ringside.utils.dates import resolve_effective_date

from .roster_service import EmployableService

logger = logging.getLogger(__name__)


class ManagedClientService(EmployableService[ModelT]):
    """Employable entities that managers can accompany.

    The repository exposes ``managers``, a period repository owned by the
    client and filtered by ``manager_id``.
    """

    related_resources = ("managers",)

    async def _get_manager(self, manager_id: int) -> Any:
        manager = await ManagerRepository(self._session).get(manager_id)
        if manager is None:
            raise LookupError(f"Manager {manager_id} not found")
        return manager

    async def current_manager_ids(self, client_id: int) -> list[int]:
        return await self.repository.current_manager_ids(client_id)

    async def hire_manager(
        self, client_id: int, manager_id: int, started_at: datetime | None = None
    ) -> Any:
        client = await self.get(client_id)
        manager = await self._get_manager(manager_id)
        when = resolve_effective_date(started_at)
        async with self._session.begin_nested():
            if manager.status is not EmploymentStatus.EMPLOYED:
                raise MembershipConflict.manager_unavailable(manager)
            if await self.repository.managers.open(client.id, manager_id=manager.id):
                raise MembershipConflict.already_has_manager(client, manager)
            row = await self.repository.managers.start(client.id, when, manager_id=manager.id)
        logger.info(
            "Hired manager %s for %s %s effective %s",
            manager.id,
            client.member_type.label,
            client.id,
            when.isoformat(),
        )
        await self.invalidate()
        return row

    async def fire_manager(
        self, client_id: int, manager_id: int, ended_at: datetime | None = None
    ) -> Any:
        client = await self.get(client_id)
        manager = await self._get_manager(manager_id)
        when = resolve_effective_date(ended_at)
        async with self._session.begin_nested():
            row = await self.repository.managers.end(client.id, when, manager_id=manager.id)
            if row is None:
                raise MembershipConflict.not_managing(manager, client)
        logger.info(
            "Fired manager %s from %s %s effective %s",
            manager.id,
            client.member_type.label,
            client.id,
            when.isoformat(),
        )
        await self.invalidate()
        return row


__all__ = ["ManagedClientService"]
