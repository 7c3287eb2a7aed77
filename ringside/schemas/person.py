"""Managers and referees share a first/last name shape."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from ringside.enums import EmploymentStatus

from .common import PeriodRead, RosterRecordRead


class PersonCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    employed_at: datetime | None = None


class PersonUpdate(BaseModel):
    first_name: str | None = Field(None, min_length=1, max_length=255)
    last_name: str | None = Field(None, min_length=1, max_length=255)


class PersonRead(RosterRecordRead):
    first_name: str
    last_name: str
    status: EmploymentStatus

    @computed_field  # type: ignore[misc]
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ManagerCreate(PersonCreate):
    pass


class ManagerUpdate(PersonUpdate):
    pass


class ManagerRead(PersonRead):
    pass


class ManagerDetail(ManagerRead):
    current_wrestler_ids: list[int] = Field(default_factory=list)
    current_tag_team_ids: list[int] = Field(default_factory=list)
    current_stable_id: int | None = None
    employments: list[PeriodRead] = Field(default_factory=list)
    injuries: list[PeriodRead] = Field(default_factory=list)
    suspensions: list[PeriodRead] = Field(default_factory=list)
    retirements: list[PeriodRead] = Field(default_factory=list)


class RefereeCreate(PersonCreate):
    pass


class RefereeUpdate(PersonUpdate):
    pass


class RefereeRead(PersonRead):
    pass


class RefereeDetail(RefereeRead):
    employments: list[PeriodRead] = Field(default_factory=list)
    injuries: list[PeriodRead] = Field(default_factory=list)
    suspensions: list[PeriodRead] = Field(default_factory=list)
    retirements: list[PeriodRead] = Field(default_factory=list)
