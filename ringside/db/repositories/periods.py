"""One engine for every time-bounded period family.

Employments, injuries, suspensions, retirements, activations, group
memberships and title reigns all share the same shape (see
:class:`ringside.db.models.base.PeriodMixin`).  :class:`PeriodRepository` is
parameterised by the period model and the column naming the owner, so the
"current", "future" and "previous" scopes and the open/close bookkeeping are
written once.

Membership tables carry two foreign keys.  The owner column is the side that
may only hold one open row (a wrestler is in at most one tag team at a time);
the other key is passed as an extra equality criterion.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models.base import PeriodMixin
from ringside.exceptions import InvalidDateRange
from ringside.utils.dates import to_utc_naive, utcnow

logger = logging.getLogger(__name__)

PeriodT = TypeVar("PeriodT", bound=PeriodMixin)


class PeriodRepository(Generic[PeriodT]):
    """Query and mutate one period table on behalf of its owners."""

    def __init__(self, session: AsyncSession, model: type[PeriodT], owner_column: str) -> None:
        self._session = session
        self._model = model
        self._owner_column = owner_column

    @property
    def model(self) -> type[PeriodT]:
        return self._model

    @property
    def owner_column(self) -> str:
        return self._owner_column

    def _filtered(self, criteria: Mapping[str, Any]) -> Select[tuple[PeriodT]]:
        stmt = select(self._model)
        for column, value in criteria.items():
            stmt = stmt.where(getattr(self._model, column) == value)
        return stmt

    def _owned(self, owner_id: int, criteria: Mapping[str, Any]) -> Select[tuple[PeriodT]]:
        return self._filtered({self._owner_column: owner_id, **criteria})

    async def _one(self, stmt: Select[tuple[PeriodT]]) -> PeriodT | None:
        result = await self._session.execute(stmt.limit(1))
        return result.scalars().first()

    async def _all(self, stmt: Select[tuple[PeriodT]]) -> list[PeriodT]:
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    # -- scopes -------------------------------------------------------------

    async def current(
        self, owner_id: int, *, now: datetime | None = None, **criteria: Any
    ) -> PeriodT | None:
        """Return the open period that has already started."""

        moment = to_utc_naive(now) or utcnow()
        stmt = (
            self._owned(owner_id, criteria)
            .where(self._model.ended_at.is_(None), self._model.started_at <= moment)
            .order_by(self._model.started_at.desc())
        )
        return await self._one(stmt)

    async def future(
        self, owner_id: int, *, now: datetime | None = None, **criteria: Any
    ) -> PeriodT | None:
        """Return the open period scheduled to start after ``now``."""

        moment = to_utc_naive(now) or utcnow()
        stmt = (
            self._owned(owner_id, criteria)
            .where(self._model.ended_at.is_(None), self._model.started_at > moment)
            .order_by(self._model.started_at)
        )
        return await self._one(stmt)

    async def open(self, owner_id: int, **criteria: Any) -> PeriodT | None:
        """Return the open period whether or not it has started yet."""

        stmt = self._owned(owner_id, criteria).where(self._model.ended_at.is_(None))
        return await self._one(stmt.order_by(self._model.started_at.desc()))

    async def previous(self, owner_id: int, **criteria: Any) -> list[PeriodT]:
        """Return closed periods, most recently started first."""

        stmt = (
            self._owned(owner_id, criteria)
            .where(self._model.ended_at.is_not(None))
            .order_by(self._model.started_at.desc(), self._model.id.desc())
        )
        return await self._all(stmt)

    async def history(self, owner_id: int, **criteria: Any) -> list[PeriodT]:
        stmt = self._owned(owner_id, criteria).order_by(
            self._model.started_at, self._model.id
        )
        return await self._all(stmt)

    async def first(self, owner_id: int, **criteria: Any) -> PeriodT | None:
        stmt = self._owned(owner_id, criteria).order_by(self._model.started_at)
        return await self._one(stmt)

    async def exists(self, owner_id: int, **criteria: Any) -> bool:
        stmt = (
            select(func.count())
            .select_from(self._model)
            .where(getattr(self._model, self._owner_column) == owner_id)
        )
        for column, value in criteria.items():
            stmt = stmt.where(getattr(self._model, column) == value)
        result = await self._session.execute(stmt)
        return bool(result.scalar_one())

    async def open_rows(self, **criteria: Any) -> list[PeriodT]:
        """Return every open row matching ``criteria`` regardless of owner.

        ``PeriodRepository(session, StableWrestler, "wrestler_id")
        .open_rows(stable_id=3)`` lists the current members of stable 3.
        """

        stmt = (
            self._filtered(criteria)
            .where(self._model.ended_at.is_(None))
            .order_by(self._model.started_at, self._model.id)
        )
        return await self._all(stmt)

    async def all_rows(self, **criteria: Any) -> list[PeriodT]:
        """Every row matching ``criteria``, oldest first, open or closed."""

        stmt = self._filtered(criteria).order_by(self._model.started_at, self._model.id)
        return await self._all(stmt)

    async def open_owner_ids(self, **criteria: Any) -> list[int]:
        rows = await self.open_rows(**criteria)
        return [getattr(row, self._owner_column) for row in rows]

    # -- mutations ----------------------------------------------------------

    async def start(
        self,
        owner_id: int,
        started_at: datetime,
        *,
        attributes: Mapping[str, Any] | None = None,
        **criteria: Any,
    ) -> PeriodT:
        """Open a period for ``owner_id``, or move the start of the open one.

        Upserting onto the open row is what keeps each owner at one open
        period.  Neither a new period nor a moved one may start before the
        previous one ended.
        """

        started_at = to_utc_naive(started_at)
        period = await self.open(owner_id, **criteria)
        if period is not None:
            if period.started_at != started_at:
                await self._ensure_after_previous(owner_id, started_at, criteria)
                logger.debug(
                    "Moving open %s for owner %s from %s to %s",
                    self._model.__tablename__,
                    owner_id,
                    period.started_at,
                    started_at,
                )
                period.started_at = started_at
            for column, value in (attributes or {}).items():
                setattr(period, column, value)
            return period

        await self._ensure_after_previous(owner_id, started_at, criteria)
        period = self._model(
            **{self._owner_column: owner_id},
            **criteria,
            **(attributes or {}),
            started_at=started_at,
        )
        self._session.add(period)
        await self._session.flush()
        return period

    async def end(
        self,
        owner_id: int,
        ended_at: datetime,
        *,
        attributes: Mapping[str, Any] | None = None,
        **criteria: Any,
    ) -> PeriodT | None:
        """Close the open period.  Returns ``None`` when nothing is open."""

        period = await self.open(owner_id, **criteria)
        if period is None:
            return None
        self._close(period, to_utc_naive(ended_at), attributes)
        await self._session.flush()
        return period

    async def end_all(
        self,
        ended_at: datetime,
        *,
        attributes: Mapping[str, Any] | None = None,
        **criteria: Any,
    ) -> list[PeriodT]:
        """Close every open row matching ``criteria``, e.g. all members of a group."""

        ended_at = to_utc_naive(ended_at)
        rows = await self.open_rows(**criteria)
        for row in rows:
            self._close(row, ended_at, attributes)
        if rows:
            await self._session.flush()
        return rows

    def _close(
        self,
        period: PeriodT,
        ended_at: datetime,
        attributes: Mapping[str, Any] | None,
    ) -> None:
        if ended_at < period.started_at:
            raise InvalidDateRange.ends_before_start(period.started_at, ended_at)
        period.ended_at = ended_at
        for column, value in (attributes or {}).items():
            setattr(period, column, value)

    async def _ensure_after_previous(
        self, owner_id: int, started_at: datetime, criteria: Mapping[str, Any]
    ) -> None:
        stmt = (
            self._owned(owner_id, criteria)
            .where(self._model.ended_at.is_not(None))
            .order_by(self._model.ended_at.desc())
        )
        latest = await self._one(stmt)
        if latest is not None and latest.ended_at is not None and started_at < latest.ended_at:
            raise InvalidDateRange.overlaps_previous(started_at, latest.ended_at)


async def histories(
    owner_id: int, families: Mapping[str, PeriodRepository[Any] | None]
) -> dict[str, Sequence[PeriodMixin]]:
    """Collect the full history of several period families keyed by name."""

    collected: dict[str, Sequence[PeriodMixin]] = {}
    for name, repository in families.items():
        if repository is None:
            continue
        collected[name] = await repository.history(owner_id)
    return collected


__all__ = ["PeriodRepository", "histories"]
