"""Venues, events and the matches booked on them."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ringside.enums import MatchDecision, MatchType, RosterMemberType

from .base import Base, SoftDeleteMixin, TimestampMixin, enum_column_type


class Venue(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "venues"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    street_address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(String(255), nullable=False)
    zipcode: Mapped[str] = mapped_column(String(16), nullable=False)


class Event(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    date: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        index=True,
        doc="Null until the event is scheduled.",
    )
    venue_id: Mapped[int | None] = mapped_column(
        ForeignKey("venues.id", ondelete="SET NULL"), nullable=True, index=True
    )
    preview: Mapped[str | None] = mapped_column(Text, nullable=True)


class EventMatch(TimestampMixin, Base):
    """A match on an event card.  ``match_number`` is its 1-based position."""

    __tablename__ = "events_matches"
    __table_args__ = (
        UniqueConstraint("event_id", "match_number", name="uq_events_matches_number"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    match_number: Mapped[int] = mapped_column(Integer, nullable=False)
    match_type: Mapped[MatchType] = mapped_column(enum_column_type(MatchType), nullable=False)
    preview: Mapped[str | None] = mapped_column(Text, nullable=True)

    competitors: Mapped[list["EventMatchCompetitor"]] = relationship(
        back_populates="match",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="EventMatchCompetitor.side_number",
    )
    referees: Mapped[list["EventMatchReferee"]] = relationship(
        back_populates="match", cascade="all, delete-orphan", lazy="selectin"
    )
    titles: Mapped[list["EventMatchTitle"]] = relationship(
        back_populates="match", cascade="all, delete-orphan", lazy="selectin"
    )


class EventMatchCompetitor(Base):
    """A wrestler or tag team on one side of a match."""

    __tablename__ = "events_matches_competitors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_match_id: Mapped[int] = mapped_column(
        ForeignKey("events_matches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    competitor_type: Mapped[RosterMemberType] = mapped_column(
        enum_column_type(RosterMemberType), nullable=False
    )
    competitor_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    side_number: Mapped[int] = mapped_column(Integer, nullable=False)

    match: Mapped[EventMatch] = relationship(back_populates="competitors")


class EventMatchReferee(Base):
    __tablename__ = "events_matches_referees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_match_id: Mapped[int] = mapped_column(
        ForeignKey("events_matches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    referee_id: Mapped[int] = mapped_column(
        ForeignKey("referees.id", ondelete="CASCADE"), nullable=False, index=True
    )

    match: Mapped[EventMatch] = relationship(back_populates="referees")


class EventMatchTitle(Base):
    __tablename__ = "events_matches_titles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_match_id: Mapped[int] = mapped_column(
        ForeignKey("events_matches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title_id: Mapped[int] = mapped_column(
        ForeignKey("titles.id", ondelete="CASCADE"), nullable=False, index=True
    )

    match: Mapped[EventMatch] = relationship(back_populates="titles")


class EventMatchResult(TimestampMixin, Base):
    __tablename__ = "events_matches_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_match_id: Mapped[int] = mapped_column(
        ForeignKey("events_matches.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    winning_side: Mapped[int | None] = mapped_column(
        Integer, nullable=True, doc="Null for draws and no contests."
    )
    decision: Mapped[MatchDecision] = mapped_column(
        enum_column_type(MatchDecision), nullable=False
    )
