"""Schemas for events, match cards and results."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ringside.enums import EventStatus, MatchDecision, MatchType, RosterMemberType

from .common import RosterRecordRead


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    date: datetime | None = Field(None, description="Leave empty for an unscheduled event.")
    venue_id: int | None = None
    preview: str | None = None


class EventUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    date: datetime | None = None
    venue_id: int | None = None
    preview: str | None = None


class EventRead(RosterRecordRead):
    name: str
    date: datetime | None = None
    venue_id: int | None = None
    preview: str | None = None
    status: EventStatus


class CompetitorRef(BaseModel):
    competitor_type: RosterMemberType
    competitor_id: int


class MatchCreate(BaseModel):
    match_type: MatchType
    sides: list[list[CompetitorRef]] = Field(
        ..., description="Competitors grouped by side; the first list is side 1."
    )
    referee_ids: list[int] = Field(default_factory=list)
    title_ids: list[int] = Field(default_factory=list)
    preview: str | None = None


class MatchCompetitorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    side_number: int
    competitor_type: RosterMemberType
    competitor_id: int


class MatchResultCreate(BaseModel):
    decision: MatchDecision
    winning_side: int | None = Field(None, ge=1)


class MatchResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    decision: MatchDecision
    winning_side: int | None = None
    created_at: datetime


class MatchRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    match_number: int
    match_type: MatchType
    preview: str | None = None
    competitors: list[MatchCompetitorRead] = Field(default_factory=list)
    referee_ids: list[int] = Field(default_factory=list)
    title_ids: list[int] = Field(default_factory=list)
    result: MatchResultRead | None = None


class EventDetail(EventRead):
    matches: list[MatchRead] = Field(default_factory=list)
