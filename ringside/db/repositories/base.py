"""Shared persistence helpers for soft-deletable roster records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import Base
from ringside.utils.dates import utcnow

ModelT = TypeVar("ModelT", bound=Base)


class RosterRepository(Generic[ModelT]):
    """CRUD, filtering and pagination for one soft-deletable model.

    Subclasses set :attr:`model` and the columns that ``search`` matches with
    a case-insensitive ``LIKE``.
    """

    model: type[ModelT]
    search_columns: tuple[str, ...] = ("name",)
    order_columns: tuple[str, ...] = ("name",)

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def get(self, entity_id: int, *, include_deleted: bool = False) -> ModelT | None:
        entity = await self._session.get(self.model, entity_id)
        if entity is None:
            return None
        if not include_deleted and getattr(entity, "deleted_at", None) is not None:
            return None
        return entity

    async def get_many(self, entity_ids: Iterable[int]) -> dict[int, ModelT]:
        """Return live records keyed by id; unknown ids are simply absent."""

        ids = sorted(set(entity_ids))
        if not ids:
            return {}
        stmt = select(self.model).where(self.model.id.in_(ids))
        stmt = self._exclude_deleted(stmt)
        result = await self._session.execute(stmt)
        return {entity.id: entity for entity in result.scalars().all()}

    async def add(self, entity: ModelT) -> ModelT:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def update(self, entity: ModelT, changes: Mapping[str, Any]) -> ModelT:
        for field, value in changes.items():
            setattr(entity, field, value)
        await self._session.flush()
        return entity

    async def soft_delete(self, entity: ModelT, deleted_at: datetime | None = None) -> ModelT:
        entity.deleted_at = deleted_at or utcnow()
        await self._session.flush()
        return entity

    async def restore(self, entity: ModelT) -> ModelT:
        entity.deleted_at = None
        await self._session.flush()
        return entity

    def _exclude_deleted(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.where(self.model.deleted_at.is_(None))

    def _build_list_query(
        self,
        *,
        status: Enum | Sequence[Enum] | None = None,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Select[tuple[ModelT]]:
        stmt = select(self.model)
        if not include_deleted:
            stmt = self._exclude_deleted(stmt)
        if status is not None and hasattr(self.model, "status"):
            statuses = [status] if isinstance(status, Enum) else list(status)
            stmt = stmt.where(self.model.status.in_(statuses))
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    *(
                        func.lower(getattr(self.model, column)).like(pattern)
                        for column in self.search_columns
                    )
                )
            )
        return stmt

    async def list_records(
        self,
        *,
        status: Enum | Sequence[Enum] | None = None,
        search: str | None = None,
        include_deleted: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[ModelT]:
        stmt = self._build_list_query(
            status=status, search=search, include_deleted=include_deleted
        )
        stmt = stmt.order_by(
            *(getattr(self.model, column) for column in self.order_columns), self.model.id
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count(
        self,
        *,
        status: Enum | Sequence[Enum] | None = None,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> int:
        base = self._build_list_query(
            status=status, search=search, include_deleted=include_deleted
        )
        stmt = select(func.count()).select_from(base.subquery())
        result = await self._session.execute(stmt)
        return int(result.scalar_one())


__all__ = ["ModelT", "RosterRepository"]
