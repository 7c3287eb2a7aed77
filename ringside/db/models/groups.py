"""Stables and their membership tables."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ringside.enums import ActivationStatus, RosterMemberType

from .base import Base, PeriodMixin, SoftDeleteMixin, TimestampMixin, enum_column_type


class Stable(SoftDeleteMixin, TimestampMixin, Base):
    """A faction of wrestlers, tag teams and managers."""

    __tablename__ = "stables"

    member_type = RosterMemberType.STABLE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[ActivationStatus] = mapped_column(
        enum_column_type(ActivationStatus),
        nullable=False,
        default=ActivationStatus.UNACTIVATED,
        index=True,
    )

    @property
    def display_name(self) -> str:
        return self.name


class StableActivation(PeriodMixin, Base):
    __tablename__ = "stables_activations"

    stable_id: Mapped[int] = mapped_column(
        ForeignKey("stables.id", ondelete="CASCADE"), nullable=False, index=True
    )


class StableRetirement(PeriodMixin, Base):
    __tablename__ = "stables_retirements"

    stable_id: Mapped[int] = mapped_column(
        ForeignKey("stables.id", ondelete="CASCADE"), nullable=False, index=True
    )


class StableWrestler(PeriodMixin, Base):
    __tablename__ = "stables_wrestlers"

    stable_id: Mapped[int] = mapped_column(
        ForeignKey("stables.id", ondelete="CASCADE"), nullable=False, index=True
    )
    wrestler_id: Mapped[int] = mapped_column(
        ForeignKey("wrestlers.id", ondelete="CASCADE"), nullable=False, index=True
    )


class StableTagTeam(PeriodMixin, Base):
    __tablename__ = "stables_tag_teams"

    stable_id: Mapped[int] = mapped_column(
        ForeignKey("stables.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag_team_id: Mapped[int] = mapped_column(
        ForeignKey("tag_teams.id", ondelete="CASCADE"), nullable=False, index=True
    )


class StableManager(PeriodMixin, Base):
    __tablename__ = "stables_managers"

    stable_id: Mapped[int] = mapped_column(
        ForeignKey("stables.id", ondelete="CASCADE"), nullable=False, index=True
    )
    manager_id: Mapped[int] = mapped_column(
        ForeignKey("managers.id", ondelete="CASCADE"), nullable=False, index=True
    )
