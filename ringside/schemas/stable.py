from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from ringside.enums import ActivationStatus

from .common import PeriodRead, RosterRecordRead


class StableMembers(BaseModel):
    wrestler_ids: list[int] = Field(default_factory=list)
    tag_team_ids: list[int] = Field(default_factory=list)
    manager_ids: list[int] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.wrestler_ids or self.tag_team_ids or self.manager_ids)


class StableCreate(StableMembers):
    name: str = Field(..., min_length=1, max_length=255)
    activated_at: datetime | None = Field(
        None, description="Activate the stable from this date once members are added."
    )


class StableUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)


class StableMembersRequest(StableMembers):
    date: datetime | None = None

    @model_validator(mode="after")
    def _require_members(self) -> StableMembersRequest:
        if self.is_empty():
            raise ValueError("at least one member id is required")
        return self


class StableRead(RosterRecordRead):
    name: str
    status: ActivationStatus


class StableDetail(StableRead):
    current_members: StableMembers = Field(default_factory=StableMembers)
    previous_members: StableMembers = Field(default_factory=StableMembers)
    activations: list[PeriodRead] = Field(default_factory=list)
    retirements: list[PeriodRead] = Field(default_factory=list)
