"""Repositories for entities whose status is driven by period rows.

:class:`EmployableRepository` covers wrestlers, tag teams, managers and
referees; :class:`ActivatableRepository` covers stables and titles.  Each
mutation opens or closes the relevant periods and flips the ``status``
column in the same flush.  Rule checks live in
:mod:`ringside.services.status_rules`; these methods assume the caller has
already validated the transition.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import PeriodMixin
from ringside.enums import ActivationStatus, EmploymentStatus
from ringside.utils.dates import to_utc_naive, utcnow

from .base import ModelT, RosterRepository
from .periods import PeriodRepository


class EmployableRepository(RosterRepository[ModelT]):
    owner_column: str
    employment_model: type[PeriodMixin]
    suspension_model: type[PeriodMixin]
    retirement_model: type[PeriodMixin]
    injury_model: type[PeriodMixin] | None = None

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.employments = PeriodRepository(session, self.employment_model, self.owner_column)
        self.suspensions = PeriodRepository(session, self.suspension_model, self.owner_column)
        self.retirements = PeriodRepository(session, self.retirement_model, self.owner_column)
        self.injuries = (
            PeriodRepository(session, self.injury_model, self.owner_column)
            if self.injury_model is not None
            else None
        )

    def period_families(self) -> dict[str, PeriodRepository[Any] | None]:
        return {
            "employments": self.employments,
            "injuries": self.injuries,
            "suspensions": self.suspensions,
            "retirements": self.retirements,
        }

    async def employ(self, entity: ModelT, started_at: datetime) -> ModelT:
        started_at = to_utc_naive(started_at)
        await self.employments.start(entity.id, started_at)
        entity.status = (
            EmploymentStatus.FUTURE_EMPLOYMENT
            if started_at > utcnow()
            else EmploymentStatus.EMPLOYED
        )
        await self._session.flush()
        return entity

    async def release(self, entity: ModelT, ended_at: datetime) -> ModelT:
        await self._close_availability_periods(entity, ended_at)
        await self.employments.end(entity.id, ended_at)
        entity.status = EmploymentStatus.RELEASED
        await self._session.flush()
        return entity

    async def retire(self, entity: ModelT, started_at: datetime) -> ModelT:
        await self._close_availability_periods(entity, started_at)
        await self.employments.end(entity.id, started_at)
        await self.retirements.start(entity.id, started_at)
        entity.status = EmploymentStatus.RETIRED
        await self._session.flush()
        return entity

    async def unretire(self, entity: ModelT, ended_at: datetime) -> ModelT:
        """End the retirement and return to active employment on the same date."""

        await self.retirements.end(entity.id, ended_at)
        return await self.employ(entity, ended_at)

    async def injure(self, entity: ModelT, started_at: datetime) -> ModelT:
        if self.injuries is None:
            raise TypeError(f"{type(entity).__name__} has no injury history")
        await self.injuries.start(entity.id, started_at)
        entity.status = EmploymentStatus.INJURED
        await self._session.flush()
        return entity

    async def clear_injury(self, entity: ModelT, ended_at: datetime) -> ModelT:
        if self.injuries is None:
            raise TypeError(f"{type(entity).__name__} has no injury history")
        await self.injuries.end(entity.id, ended_at)
        entity.status = EmploymentStatus.EMPLOYED
        await self._session.flush()
        return entity

    async def suspend(self, entity: ModelT, started_at: datetime) -> ModelT:
        await self.suspensions.start(entity.id, started_at)
        entity.status = EmploymentStatus.SUSPENDED
        await self._session.flush()
        return entity

    async def reinstate(self, entity: ModelT, ended_at: datetime) -> ModelT:
        await self.suspensions.end(entity.id, ended_at)
        entity.status = EmploymentStatus.EMPLOYED
        await self._session.flush()
        return entity

    async def _close_availability_periods(self, entity: ModelT, ended_at: datetime) -> None:
        if self.injuries is not None:
            await self.injuries.end(entity.id, ended_at)
        await self.suspensions.end(entity.id, ended_at)

    async def due_for_promotion(self, now: datetime | None = None) -> list[ModelT]:
        """Entities in ``future_employment`` whose start date has arrived."""

        moment = to_utc_naive(now) or utcnow()
        period = self.employment_model
        stmt = (
            select(self.model)
            .join(period, getattr(period, self.owner_column) == self.model.id)
            .where(
                self.model.status == EmploymentStatus.FUTURE_EMPLOYMENT,
                period.ended_at.is_(None),
                period.started_at <= moment,
            )
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())


class ActivatableRepository(RosterRepository[ModelT]):
    owner_column: str
    activation_model: type[PeriodMixin]
    retirement_model: type[PeriodMixin]

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.activations = PeriodRepository(session, self.activation_model, self.owner_column)
        self.retirements = PeriodRepository(session, self.retirement_model, self.owner_column)

    def period_families(self) -> dict[str, PeriodRepository[Any] | None]:
        return {"activations": self.activations, "retirements": self.retirements}

    async def activate(self, entity: ModelT, started_at: datetime) -> ModelT:
        started_at = to_utc_naive(started_at)
        await self.activations.start(entity.id, started_at)
        entity.status = (
            ActivationStatus.FUTURE_ACTIVATION
            if started_at > utcnow()
            else ActivationStatus.ACTIVE
        )
        await self._session.flush()
        return entity

    async def deactivate(self, entity: ModelT, ended_at: datetime) -> ModelT:
        await self.activations.end(entity.id, ended_at)
        entity.status = ActivationStatus.INACTIVE
        await self._session.flush()
        return entity

    async def retire(self, entity: ModelT, started_at: datetime) -> ModelT:
        await self.activations.end(entity.id, started_at)
        await self.retirements.start(entity.id, started_at)
        entity.status = ActivationStatus.RETIRED
        await self._session.flush()
        return entity

    async def unretire(self, entity: ModelT, ended_at: datetime) -> ModelT:
        """End the retirement; the entity stays inactive until reactivated."""

        await self.retirements.end(entity.id, ended_at)
        entity.status = ActivationStatus.INACTIVE
        await self._session.flush()
        return entity

    async def due_for_promotion(self, now: datetime | None = None) -> list[ModelT]:
        moment = to_utc_naive(now) or utcnow()
        period = self.activation_model
        stmt = (
            select(self.model)
            .join(period, getattr(period, self.owner_column) == self.model.id)
            .where(
                self.model.status == ActivationStatus.FUTURE_ACTIVATION,
                period.ended_at.is_(None),
                period.started_at <= moment,
            )
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())


__all__ = ["ActivatableRepository", "EmployableRepository"]
