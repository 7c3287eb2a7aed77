"""Declarative base and the column mixins shared by every table."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Integer
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ringside.utils.dates import utcnow


class Base(DeclarativeBase):
    """Base class for all ORM models."""


def enum_column_type(enum_cls: type[Enum]) -> SAEnum:
    """Store an enum by value in a plain VARCHAR column."""

    return SAEnum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )


class SoftDeleteMixin:
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        index=True,
        doc="Set when the record is removed from listings; restoring clears it.",
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class PeriodMixin(TimestampMixin):
    """Columns of a time-bounded period row.

    A null ``ended_at`` marks the open period.  Repositories guarantee that an
    owner has at most one open row per period family; rows are closed, never
    deleted.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)

    @property
    def is_open(self) -> bool:
        return self.ended_at is None
