"""Employable roster members and their period tables.

Wrestlers, tag teams, managers and referees share the employment lifecycle:
each has an ``status`` column flipped by the roster services plus one table
per period family (employments, injuries, suspensions, retirements).  Tag
teams cannot be injured, so they have no injury table.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ringside.enums import EmploymentStatus, RosterMemberType

from .base import Base, PeriodMixin, SoftDeleteMixin, TimestampMixin, enum_column_type


def _owner_key(table: str) -> Mapped[int]:
    return mapped_column(
        ForeignKey(f"{table}.id", ondelete="CASCADE"), nullable=False, index=True
    )


def _employment_status() -> Mapped[EmploymentStatus]:
    return mapped_column(
        enum_column_type(EmploymentStatus),
        nullable=False,
        default=EmploymentStatus.UNEMPLOYED,
        index=True,
    )


class Wrestler(SoftDeleteMixin, TimestampMixin, Base):
    """An in-ring performer."""

    __tablename__ = "wrestlers"

    member_type = RosterMemberType.WRESTLER

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    height: Mapped[int] = mapped_column(
        Integer, nullable=False, doc="Billed height in inches."
    )
    weight: Mapped[int] = mapped_column(
        Integer, nullable=False, doc="Billed weight in pounds."
    )
    hometown: Mapped[str] = mapped_column(String(255), nullable=False)
    signature_move: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[EmploymentStatus] = _employment_status()

    @property
    def display_name(self) -> str:
        return self.name


class TagTeam(SoftDeleteMixin, TimestampMixin, Base):
    """Two wrestlers booked as a unit."""

    __tablename__ = "tag_teams"

    member_type = RosterMemberType.TAG_TEAM

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    signature_move: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[EmploymentStatus] = _employment_status()

    @property
    def display_name(self) -> str:
        return self.name


class Manager(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "managers"

    member_type = RosterMemberType.MANAGER

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[EmploymentStatus] = _employment_status()

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Referee(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "referees"

    member_type = RosterMemberType.REFEREE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[EmploymentStatus] = _employment_status()

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# -- Wrestler periods -----------------------------------------------------------


class WrestlerEmployment(PeriodMixin, Base):
    __tablename__ = "wrestlers_employments"

    wrestler_id: Mapped[int] = _owner_key("wrestlers")


class WrestlerInjury(PeriodMixin, Base):
    __tablename__ = "wrestlers_injuries"

    wrestler_id: Mapped[int] = _owner_key("wrestlers")


class WrestlerSuspension(PeriodMixin, Base):
    __tablename__ = "wrestlers_suspensions"

    wrestler_id: Mapped[int] = _owner_key("wrestlers")


class WrestlerRetirement(PeriodMixin, Base):
    __tablename__ = "wrestlers_retirements"

    wrestler_id: Mapped[int] = _owner_key("wrestlers")


# -- Tag team periods -----------------------------------------------------------


class TagTeamEmployment(PeriodMixin, Base):
    __tablename__ = "tag_teams_employments"

    tag_team_id: Mapped[int] = _owner_key("tag_teams")


class TagTeamSuspension(PeriodMixin, Base):
    __tablename__ = "tag_teams_suspensions"

    tag_team_id: Mapped[int] = _owner_key("tag_teams")


class TagTeamRetirement(PeriodMixin, Base):
    __tablename__ = "tag_teams_retirements"

    tag_team_id: Mapped[int] = _owner_key("tag_teams")


# -- Manager periods ------------------------------------------------------------


class ManagerEmployment(PeriodMixin, Base):
    __tablename__ = "managers_employments"

    manager_id: Mapped[int] = _owner_key("managers")


class ManagerInjury(PeriodMixin, Base):
    __tablename__ = "managers_injuries"

    manager_id: Mapped[int] = _owner_key("managers")


class ManagerSuspension(PeriodMixin, Base):
    __tablename__ = "managers_suspensions"

    manager_id: Mapped[int] = _owner_key("managers")


class ManagerRetirement(PeriodMixin, Base):
    __tablename__ = "managers_retirements"

    manager_id: Mapped[int] = _owner_key("managers")


# -- Referee periods ------------------------------------------------------------


class RefereeEmployment(PeriodMixin, Base):
    __tablename__ = "referees_employments"

    referee_id: Mapped[int] = _owner_key("referees")


class RefereeInjury(PeriodMixin, Base):
    __tablename__ = "referees_injuries"

    referee_id: Mapped[int] = _owner_key("referees")


class RefereeSuspension(PeriodMixin, Base):
    __tablename__ = "referees_suspensions"

    referee_id: Mapped[int] = _owner_key("referees")


class RefereeRetirement(PeriodMixin, Base):
    __tablename__ = "referees_retirements"

    referee_id: Mapped[int] = _owner_key("referees")


# -- Memberships ----------------------------------------------------------------


class TagTeamWrestler(PeriodMixin, Base):
    """A wrestler's stint as one half of a tag team."""

    __tablename__ = "tag_teams_wrestlers"

    tag_team_id: Mapped[int] = _owner_key("tag_teams")
    wrestler_id: Mapped[int] = _owner_key("wrestlers")


class WrestlerManager(PeriodMixin, Base):
    """A manager accompanying a wrestler; started_at is the hire date."""

    __tablename__ = "wrestlers_managers"

    wrestler_id: Mapped[int] = _owner_key("wrestlers")
    manager_id: Mapped[int] = _owner_key("managers")


class TagTeamManager(PeriodMixin, Base):
    __tablename__ = "tag_teams_managers"

    tag_team_id: Mapped[int] = _owner_key("tag_teams")
    manager_id: Mapped[int] = _owner_key("managers")
