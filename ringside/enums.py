"""Enumerations shared by the ORM models, schemas and services."""

from __future__ import annotations

from enum import Enum


class RosterMemberType(str, Enum):
    """Kinds of entities that carry a status history."""

    WRESTLER = "wrestler"
    TAG_TEAM = "tag_team"
    MANAGER = "manager"
    REFEREE = "referee"
    STABLE = "stable"
    TITLE = "title"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @property
    def is_individual(self) -> bool:
        return self in _INDIVIDUALS

    @property
    def can_be_injured(self) -> bool:
        # Groups and belts cannot be hurt; only people can.
        return self in _INDIVIDUALS


_INDIVIDUALS = frozenset(
    {RosterMemberType.WRESTLER, RosterMemberType.MANAGER, RosterMemberType.REFEREE}
)


class EmploymentStatus(str, Enum):
    """Status column for wrestlers, tag teams, managers and referees."""

    UNEMPLOYED = "unemployed"
    FUTURE_EMPLOYMENT = "future_employment"
    EMPLOYED = "employed"
    INJURED = "injured"
    SUSPENDED = "suspended"
    RELEASED = "released"
    RETIRED = "retired"

    @property
    def is_employed(self) -> bool:
        """Whether a current employment period is open."""

        return self in (
            EmploymentStatus.EMPLOYED,
            EmploymentStatus.INJURED,
            EmploymentStatus.SUSPENDED,
        )


class ActivationStatus(str, Enum):
    """Status column for stables and titles."""

    UNACTIVATED = "unactivated"
    FUTURE_ACTIVATION = "future_activation"
    ACTIVE = "active"
    INACTIVE = "inactive"
    RETIRED = "retired"


class TitleType(str, Enum):
    SINGLES = "singles"
    TAG_TEAM = "tag_team"

    @property
    def champion_type(self) -> RosterMemberType:
        """The only roster member type allowed to hold a title of this type."""

        if self is TitleType.TAG_TEAM:
            return RosterMemberType.TAG_TEAM
        return RosterMemberType.WRESTLER


class MatchType(str, Enum):
    """Match stipulations offered by the booking desk.

    ``number_of_sides`` is ``None`` for formats that accept any number of
    sides, such as battle royals.
    """

    SINGLES = "singles"
    TRIANGLE = "triangle"
    TRIPLE_THREAT = "triple-threat"
    FATAL_FOUR_WAY = "fatal-4-way"
    TAG_TEAM = "tag-team"
    TORNADO_TAG = "tornado-tag"
    SIX_MAN = "6-man"
    EIGHT_MAN = "8-man"
    TEN_MAN = "10-man"
    TWO_ON_ONE_HANDICAP = "2-1-handicap"
    THREE_ON_TWO_HANDICAP = "3-2-handicap"
    BATTLE_ROYAL = "battle-royal"
    ROYAL_RUMBLE = "royal-rumble"
    GAUNTLET = "gauntlet"

    @property
    def display_name(self) -> str:
        return _MATCH_TYPE_DETAILS[self][0]

    @property
    def number_of_sides(self) -> int | None:
        return _MATCH_TYPE_DETAILS[self][1]


_MATCH_TYPE_DETAILS: dict[MatchType, tuple[str, int | None]] = {
    MatchType.SINGLES: ("Singles", 2),
    MatchType.TRIANGLE: ("Triangle", 3),
    MatchType.TRIPLE_THREAT: ("Triple Threat", 3),
    MatchType.FATAL_FOUR_WAY: ("Fatal 4 Way", 4),
    MatchType.TAG_TEAM: ("Tag Team", 2),
    MatchType.TORNADO_TAG: ("Tornado Tag Team", 2),
    MatchType.SIX_MAN: ("6 Man Tag Team", 2),
    MatchType.EIGHT_MAN: ("8 Man Tag Team", 2),
    MatchType.TEN_MAN: ("10 Man Tag Team", 2),
    MatchType.TWO_ON_ONE_HANDICAP: ("Two On One Handicap", 2),
    MatchType.THREE_ON_TWO_HANDICAP: ("Three On Two Handicap", 2),
    MatchType.BATTLE_ROYAL: ("Battle Royal", None),
    MatchType.ROYAL_RUMBLE: ("Royal Rumble", None),
    MatchType.GAUNTLET: ("Gauntlet", None),
}


class MatchDecision(str, Enum):
    """How a match ended."""

    PINFALL = "pinfall"
    SUBMISSION = "submission"
    KNOCKOUT = "knockout"
    DISQUALIFICATION = "disqualification"
    COUNTOUT = "countout"
    STIPULATION = "stipulation"
    FORFEIT = "forfeit"
    REVERSE_DECISION = "reverse_decision"
    TIME_LIMIT_DRAW = "time_limit_draw"
    NO_DECISION = "no_decision"

    @property
    def has_winner(self) -> bool:
        return self not in (MatchDecision.TIME_LIMIT_DRAW, MatchDecision.NO_DECISION)

    @property
    def title_can_change(self) -> bool:
        """Titles only change hands on a decisive, clean result."""

        if not self.has_winner:
            return False
        return self not in (MatchDecision.DISQUALIFICATION, MatchDecision.COUNTOUT)


class EventStatus(str, Enum):
    """Derived scheduling state of an event."""

    UNSCHEDULED = "unscheduled"
    SCHEDULED = "scheduled"
    PAST = "past"


__all__ = [
    "ActivationStatus",
    "EmploymentStatus",
    "EventStatus",
    "MatchDecision",
    "MatchType",
    "RosterMemberType",
    "TitleType",
]
