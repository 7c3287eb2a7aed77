"""Base services for roster resources.

:class:`RosterService` provides lookup, CRUD and cached listings for one
soft-deletable model.  :class:`EmployableService` and
:class:`ActivatableService` add the status actions.  Every action follows the
same path through :meth:`RosterService._transition`: resolve the effective
date, open a SAVEPOINT, validate, write the core periods, run cascades, log,
then evict the resource's cached listings.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Generic

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.cache import CacheClient, invalidate_namespace, list_key
from ringside.db.repositories import (
    ActivatableRepository,
    EmployableRepository,
    RosterRepository,
    histories,
)
from ringside.db.repositories.base import ModelT
from ringside.enums import ActivationStatus, EmploymentStatus
from ringside.exceptions import CannotBeRestored
from ringside.schemas.common import Page, PeriodRead
from ringside.services import status_rules
from ringside.services.caching import CacheableService, cached
from ringside.settings import get_settings
from ringside.utils.dates import resolve_effective_date, resolve_immediate_date

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


def _status_values(status: Enum | Sequence[Enum] | None) -> str | list[str] | None:
    if status is None:
        return None
    if isinstance(status, Enum):
        return status.value
    return [item.value for item in status]


def _list_cache_key(
    service: CacheableService,
    *,
    status: Enum | Sequence[Enum] | None = None,
    search: str | None = None,
    include_deleted: bool = False,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> str | None:
    if not get_settings().roster_cache_ttl:
        return None
    return list_key(
        service.resource,  # type: ignore[attr-defined]
        status=_status_values(status),
        search=search,
        include_deleted=include_deleted,
        limit=limit,
        offset=offset,
    )


def _list_ttl(service: CacheableService) -> int:
    return get_settings().roster_cache_ttl


def period_reads(rows: Iterable[Any]) -> list[PeriodRead]:
    return [PeriodRead.model_validate(row) for row in rows]


class RosterService(CacheableService, Generic[ModelT]):
    """CRUD and listings for one roster resource.

    Subclasses name the cache namespace (``resource``), the repository and the
    schema used for list items.
    """

    resource: ClassVar[str]
    repository_class: ClassVar[type[RosterRepository[Any]]]
    read_schema: ClassVar[type[BaseModel]]
    # Other namespaces whose listings show data this service mutates.
    related_resources: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session: AsyncSession, cache: CacheClient | None = None) -> None:
        super().__init__(cache)
        self._session = session
        self.repository = self.repository_class(session)

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def get(self, entity_id: int, *, include_deleted: bool = False) -> ModelT:
        entity = await self.repository.get(entity_id, include_deleted=include_deleted)
        if entity is None:
            raise LookupError(f"{self.repository.model.__name__} {entity_id} not found")
        return entity

    async def create(self, values: Mapping[str, Any]) -> ModelT:
        entity = await self.repository.add(self.repository.model(**values))
        logger.info("Created %s %s", self.resource, entity.id)
        await self.invalidate()
        return entity

    async def update(self, entity_id: int, changes: Mapping[str, Any]) -> ModelT:
        entity = await self.get(entity_id)
        if changes:
            await self.repository.update(entity, changes)
            logger.info("Updated %s %s: %s", self.resource, entity_id, sorted(changes))
            await self.invalidate()
        return entity

    async def delete(self, entity_id: int) -> None:
        entity = await self.get(entity_id)
        await self.repository.soft_delete(entity)
        logger.info("Deleted %s %s", self.resource, entity_id)
        await self.invalidate()

    async def restore(self, entity_id: int) -> ModelT:
        entity = await self.get(entity_id, include_deleted=True)
        if entity.deleted_at is None:
            member_type = getattr(entity, "member_type", None)
            raise CannotBeRestored.not_deleted(
                member_type.label if member_type is not None else type(entity).__name__.lower(),
                getattr(entity, "display_name", None) or entity.name,
            )
        await self.repository.restore(entity)
        logger.info("Restored %s %s", self.resource, entity_id)
        await self.invalidate()
        return entity

    async def list_page(
        self,
        *,
        status: Enum | Sequence[Enum] | None = None,
        search: str | None = None,
        include_deleted: bool = False,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> Page[Any]:
        payload = await self._list_payload(
            status=status,
            search=search,
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
        )
        return Page[self.read_schema].model_validate(payload)  # type: ignore[valid-type]

    @cached(_list_cache_key, ttl=_list_ttl)
    async def _list_payload(
        self,
        *,
        status: Enum | Sequence[Enum] | None = None,
        search: str | None = None,
        include_deleted: bool = False,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> dict[str, Any]:
        filters = {"status": status, "search": search, "include_deleted": include_deleted}
        total = await self.repository.count(**filters)
        records = await self.repository.list_records(**filters, limit=limit, offset=offset)
        items = [self.to_read(record) for record in records]
        return {
            "items": [item.model_dump(mode="json") for item in items],
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": offset + len(items) < total,
        }

    def to_read(self, entity: ModelT) -> BaseModel:
        return self.read_schema.model_validate(entity)

    async def detail(self, entity_id: int) -> BaseModel:
        return self.to_read(await self.get(entity_id))

    async def invalidate(self) -> None:
        await invalidate_namespace(self._cache, self.resource, *self.related_resources)

    async def _transition(
        self,
        entity: ModelT,
        action: str,
        when: datetime | None,
        operation: Callable[[ModelT, datetime], Awaitable[None]],
        *,
        schedulable: bool = False,
    ) -> ModelT:
        """Run ``operation`` for ``entity`` inside a SAVEPOINT.

        Future dates are kept only for ``schedulable`` actions and clamped to
        now otherwise.  Anything raised inside rolls back every row the action
        wrote and propagates unchanged.
        """

        if schedulable:
            effective = resolve_effective_date(when)
        else:
            effective = resolve_immediate_date(when)
        async with self._session.begin_nested():
            await operation(entity, effective)
        logger.info(
            "%s %s %s (%s) effective %s",
            action,
            entity.member_type.label,
            entity.id,
            entity.display_name,
            effective.isoformat(),
        )
        await self.invalidate()
        return entity


class EmployableService(RosterService[ModelT]):
    """Employment actions shared by wrestlers, tag teams, managers and referees.

    Subclasses extend ``_do_<action>`` to validate extra preconditions or
    cascade onto related entities; the base versions apply the status rule and
    the core period change.
    """

    repository: EmployableRepository[Any]

    async def create(self, values: Mapping[str, Any]) -> ModelT:
        values = dict(values)
        employed_at = values.pop("employed_at", None)
        entity = await super().create(values)
        if employed_at is not None:
            await self.employ(entity.id, employed_at)
        return entity

    async def employ(self, entity_id: int, started_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id),
            "Employed",
            started_at,
            self._do_employ,
            schedulable=True,
        )

    async def release(self, entity_id: int, ended_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Released", ended_at, self._do_release
        )

    async def retire(self, entity_id: int, started_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Retired", started_at, self._do_retire
        )

    async def unretire(self, entity_id: int, started_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Unretired", started_at, self._do_unretire
        )

    async def injure(self, entity_id: int, started_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Injured", started_at, self._do_injure
        )

    async def clear_injury(self, entity_id: int, ended_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Cleared injury of", ended_at, self._do_clear_injury
        )

    async def suspend(self, entity_id: int, started_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Suspended", started_at, self._do_suspend
        )

    async def reinstate(self, entity_id: int, ended_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Reinstated", ended_at, self._do_reinstate
        )

    async def _do_employ(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_employ(entity)
        await self.repository.employ(entity, when)

    async def _do_release(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_release(entity)
        await self.repository.release(entity, when)

    async def _do_retire(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_retire(entity)
        await self.repository.retire(entity, when)

    async def _do_unretire(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_unretire(entity)
        await self.repository.unretire(entity, when)

    async def _do_injure(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_injure(entity)
        await self.repository.injure(entity, when)

    async def _do_clear_injury(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_clear_injury(entity)
        await self.repository.clear_injury(entity, when)

    async def _do_suspend(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_suspend(entity)
        await self.repository.suspend(entity, when)

    async def _do_reinstate(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_reinstate(entity)
        await self.repository.reinstate(entity, when)

    async def histories(self, entity_id: int) -> dict[str, list[PeriodRead]]:
        collected = await histories(entity_id, self.repository.period_families())
        return {name: period_reads(rows) for name, rows in collected.items()}

    async def promote_due(self, now: datetime | None = None) -> list[ModelT]:
        """Flip ``future_employment`` entities whose start date has arrived."""

        promoted = await self.repository.due_for_promotion(now)
        for entity in promoted:
            entity.status = EmploymentStatus.EMPLOYED
            logger.info("Promoted %s %s to employed", self.resource, entity.id)
        if promoted:
            await self._session.flush()
            await self.invalidate()
        return promoted


class ActivatableService(RosterService[ModelT]):
    """Activation actions shared by stables and titles."""

    repository: ActivatableRepository[Any]

    async def create(self, values: Mapping[str, Any]) -> ModelT:
        values = dict(values)
        activated_at = values.pop("activated_at", None)
        entity = await super().create(values)
        if activated_at is not None:
            await self.activate(entity.id, activated_at)
        return entity

    async def activate(self, entity_id: int, started_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id),
            "Activated",
            started_at,
            self._do_activate,
            schedulable=True,
        )

    async def deactivate(self, entity_id: int, ended_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Deactivated", ended_at, self._do_deactivate
        )

    async def retire(self, entity_id: int, started_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Retired", started_at, self._do_retire
        )

    async def unretire(self, entity_id: int, started_at: datetime | None = None) -> ModelT:
        return await self._transition(
            await self.get(entity_id), "Unretired", started_at, self._do_unretire
        )

    async def _do_activate(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_activate(entity)
        await self.repository.activate(entity, when)

    async def _do_deactivate(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_deactivate(entity)
        await self.repository.deactivate(entity, when)

    async def _do_retire(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_retire_activatable(entity)
        await self.repository.retire(entity, when)

    async def _do_unretire(self, entity: ModelT, when: datetime) -> None:
        status_rules.ensure_can_unretire_activatable(entity)
        await self.repository.unretire(entity, when)

    async def histories(self, entity_id: int) -> dict[str, list[PeriodRead]]:
        return {
            "activations": period_reads(await self.repository.activations.history(entity_id)),
            "retirements": period_reads(await self.repository.retirements.history(entity_id)),
        }

    async def promote_due(self, now: datetime | None = None) -> list[ModelT]:
        promoted = await self.repository.due_for_promotion(now)
        for entity in promoted:
            entity.status = ActivationStatus.ACTIVE
            logger.info("Promoted %s %s to active", self.resource, entity.id)
        if promoted:
            await self._session.flush()
            await self.invalidate()
        return promoted


__all__ = [
    "ActivatableService",
    "DEFAULT_PAGE_SIZE",
    "EmployableService",
    "RosterService",
    "period_reads",
]
