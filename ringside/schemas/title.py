from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ringside.enums import ActivationStatus, RosterMemberType, TitleType

from .common import PeriodRead, RosterRecordRead


class TitleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: TitleType = TitleType.SINGLES
    activated_at: datetime | None = None


class TitleUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)


class TitleRead(RosterRecordRead):
    name: str
    type: TitleType
    status: ActivationStatus


class ChampionshipRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title_id: int
    champion_type: RosterMemberType
    champion_id: int
    started_at: datetime
    ended_at: datetime | None = None
    won_event_match_id: int | None = None
    lost_event_match_id: int | None = None


class AwardTitleRequest(BaseModel):
    champion_type: RosterMemberType
    champion_id: int
    date: datetime | None = None
    event_match_id: int | None = None


class TitleDetail(TitleRead):
    current_championship: ChampionshipRead | None = None
    championships: list[ChampionshipRead] = Field(default_factory=list)
    activations: list[PeriodRead] = Field(default_factory=list)
    retirements: list[PeriodRead] = Field(default_factory=list)
