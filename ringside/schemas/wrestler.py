from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from ringside.enums import EmploymentStatus

from .common import PeriodRead, RosterRecordRead


class WrestlerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    height: int = Field(..., gt=0, description="Billed height in inches.")
    weight: int = Field(..., gt=0, description="Billed weight in pounds.")
    hometown: str = Field(..., min_length=1, max_length=255)
    signature_move: str | None = Field(None, max_length=255)


class WrestlerCreate(WrestlerBase):
    employed_at: datetime | None = Field(
        None, description="Employ the wrestler from this date once created."
    )


class WrestlerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    height: int | None = Field(None, gt=0)
    weight: int | None = Field(None, gt=0)
    hometown: str | None = Field(None, min_length=1, max_length=255)
    signature_move: str | None = Field(None, max_length=255)


class WrestlerRead(WrestlerBase, RosterRecordRead):
    status: EmploymentStatus

    @computed_field  # type: ignore[misc]
    @property
    def formatted_height(self) -> str:
        feet, inches = divmod(self.height, 12)
        return f"{feet}'{inches}\""


class WrestlerDetail(WrestlerRead):
    current_tag_team_id: int | None = None
    current_stable_id: int | None = None
    current_manager_ids: list[int] = Field(default_factory=list)
    employments: list[PeriodRead] = Field(default_factory=list)
    injuries: list[PeriodRead] = Field(default_factory=list)
    suspensions: list[PeriodRead] = Field(default_factory=list)
    retirements: list[PeriodRead] = Field(default_factory=list)
