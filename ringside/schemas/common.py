"""Schemas shared by every roster resource."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

ItemT = TypeVar("ItemT")


class PeriodRead(BaseModel):
    """One row of a status history."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    started_at: datetime
    ended_at: datetime | None = None


class TransitionRequest(BaseModel):
    """Optional body of a status action; the date defaults to now."""

    date: datetime | None = Field(
        None,
        description="Effective date of the action. Omit to apply it immediately.",
    )


class Page(BaseModel, Generic[ItemT]):
    items: list[ItemT]
    total: int
    limit: int
    offset: int
    has_more: bool


class ManagerAssignment(BaseModel):
    manager_id: int
    date: datetime | None = None


class RosterRecordRead(BaseModel):
    """Bookkeeping columns present on every soft-deletable record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


__all__ = [
    "ItemT",
    "ManagerAssignment",
    "Page",
    "PeriodRead",
    "RosterRecordRead",
    "TransitionRequest",
]
