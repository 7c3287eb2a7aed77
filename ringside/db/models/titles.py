"""Championship belts and their reigns."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ringside.enums import ActivationStatus, RosterMemberType, TitleType

from .base import Base, PeriodMixin, SoftDeleteMixin, TimestampMixin, enum_column_type


class Title(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "titles"

    member_type = RosterMemberType.TITLE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    type: Mapped[TitleType] = mapped_column(
        enum_column_type(TitleType), nullable=False, default=TitleType.SINGLES
    )
    status: Mapped[ActivationStatus] = mapped_column(
        enum_column_type(ActivationStatus),
        nullable=False,
        default=ActivationStatus.UNACTIVATED,
        index=True,
    )

    @property
    def display_name(self) -> str:
        return self.name


class TitleActivation(PeriodMixin, Base):
    __tablename__ = "titles_activations"

    title_id: Mapped[int] = mapped_column(
        ForeignKey("titles.id", ondelete="CASCADE"), nullable=False, index=True
    )


class TitleRetirement(PeriodMixin, Base):
    __tablename__ = "titles_retirements"

    title_id: Mapped[int] = mapped_column(
        ForeignKey("titles.id", ondelete="CASCADE"), nullable=False, index=True
    )


class TitleChampionship(PeriodMixin, Base):
    """One reign: ``started_at`` is when the title was won, ``ended_at`` when lost."""

    __tablename__ = "titles_championships"
    __table_args__ = (
        Index("ix_titles_championships_champion", "champion_type", "champion_id"),
    )

    title_id: Mapped[int] = mapped_column(
        ForeignKey("titles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    champion_type: Mapped[RosterMemberType] = mapped_column(
        enum_column_type(RosterMemberType),
        nullable=False,
        doc="Either 'wrestler' or 'tag_team' depending on the title type.",
    )
    champion_id: Mapped[int] = mapped_column(Integer, nullable=False)
    won_event_match_id: Mapped[int | None] = mapped_column(
        ForeignKey("events_matches.id", ondelete="SET NULL"), nullable=True
    )
    lost_event_match_id: Mapped[int | None] = mapped_column(
        ForeignKey("events_matches.id", ondelete="SET NULL"), nullable=True
    )
