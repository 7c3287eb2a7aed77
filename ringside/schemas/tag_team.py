from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ringside.enums import EmploymentStatus

from .common import PeriodRead, RosterRecordRead


class TagTeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    signature_move: str | None = Field(None, max_length=255)
    wrestler_ids: list[int] = Field(
        default_factory=list, description="Exactly two wrestler ids, or none."
    )
    employed_at: datetime | None = None


class TagTeamUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    signature_move: str | None = Field(None, max_length=255)


class PartnersUpdate(BaseModel):
    wrestler_ids: list[int]
    date: datetime | None = None


class TagTeamRead(RosterRecordRead):
    name: str
    signature_move: str | None = None
    status: EmploymentStatus


class TagTeamDetail(TagTeamRead):
    current_wrestler_ids: list[int] = Field(default_factory=list)
    previous_wrestler_ids: list[int] = Field(default_factory=list)
    current_manager_ids: list[int] = Field(default_factory=list)
    current_stable_id: int | None = None
    employments: list[PeriodRead] = Field(default_factory=list)
    suspensions: list[PeriodRead] = Field(default_factory=list)
    retirements: list[PeriodRead] = Field(default_factory=list)
