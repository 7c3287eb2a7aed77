"""Employment that ripples out from one entity to the people around it.

Employing a tag team brings its partners along, and employing anyone brings
along the managers who accompany them.  Activating a stable employs every
member who is not already under contract.  Retired or already employed
entities are left untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.repositories import ManagerRepository, TagTeamRepository, WrestlerRepository
from ringside.db.repositories.lifecycle import EmployableRepository
from ringside.enums import EmploymentStatus

logger = logging.getLogger(__name__)

_REHIRABLE = frozenset(
    {
        EmploymentStatus.UNEMPLOYED,
        EmploymentStatus.RELEASED,
        EmploymentStatus.FUTURE_EMPLOYMENT,
    }
)


async def employ_if_needed(
    repository: EmployableRepository[Any], entity: Any, when: datetime
) -> bool:
    if entity.status not in _REHIRABLE:
        return False
    await repository.employ(entity, when)
    logger.info(
        "Employed %s %s (%s) alongside its group",
        entity.member_type.label,
        entity.id,
        entity.display_name,
    )
    return True


async def _employ_all(
    repository: EmployableRepository[Any], ids: Iterable[int], when: datetime
) -> list[Any]:
    entities = await repository.get_many(ids)
    employed = []
    for entity in entities.values():
        if await employ_if_needed(repository, entity, when):
            employed.append(entity)
    return employed


async def employ_members(
    session: AsyncSession,
    when: datetime,
    *,
    wrestler_ids: Iterable[int] = (),
    tag_team_ids: Iterable[int] = (),
    manager_ids: Iterable[int] = (),
) -> None:
    """Employ the listed entities that are not under contract, plus their managers."""

    wrestlers = WrestlerRepository(session)
    tag_teams = TagTeamRepository(session)
    managers = ManagerRepository(session)

    manager_pool = set(manager_ids)
    partner_pool: set[int] = set()

    for tag_team in await _employ_all(tag_teams, tag_team_ids, when):
        partner_pool.update(await tag_teams.current_wrestler_ids(tag_team.id))
        manager_pool.update(await tag_teams.current_manager_ids(tag_team.id))

    for wrestler in await _employ_all(wrestlers, set(wrestler_ids) | partner_pool, when):
        manager_pool.update(await wrestlers.current_manager_ids(wrestler.id))

    await _employ_all(managers, manager_pool, when)


__all__ = ["employ_if_needed", "employ_members"]
