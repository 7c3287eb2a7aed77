"""Domain exceptions raised when a booking operation breaks a business rule.

Status transition errors are built through reason-named constructors, e.g.
``CannotBeRetired.unemployed(wrestler)``, so that call sites read like the rule
they enforce and every message follows the same template::

    This wrestler 'Bret Hart' is unemployed and cannot be retired.

The exceptions carry no HTTP knowledge; :mod:`ringside.main` maps them onto
structured error responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Protocol, Self

from ringside.enums import RosterMemberType


class Describable(Protocol):
    member_type: RosterMemberType

    @property
    def display_name(self) -> str: ...


def describe(entity: Describable | None) -> str:
    """Return the `` wrestler 'Name'`` fragment inserted after ``This``."""

    if entity is None:
        return " entity"
    return f" {entity.member_type.label} '{entity.display_name}'"


def _name(entity: Describable) -> str:
    return entity.display_name


class RingsideError(Exception):
    """Base class for every error raised by the roster domain."""


class BusinessRuleError(RingsideError):
    """A requested operation conflicts with the promotion's booking rules."""

    def __init__(self, message: str, *, reason: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason


class StatusTransitionError(BusinessRuleError):
    """An action was attempted from a status that does not allow it."""

    verb: ClassVar[str] = "changed"

    @classmethod
    def _because(cls, entity: Describable | None, reason: str, phrase: str) -> Self:
        return cls(f"This{describe(entity)} {phrase}", reason=reason)

    @classmethod
    def _state(cls, entity: Describable | None, state: str) -> Self:
        return cls._because(entity, state, f"is {state} and cannot be {cls.verb}.")

    @classmethod
    def unemployed(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "unemployed")

    @classmethod
    def released(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "released")

    @classmethod
    def retired(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "retired")

    @classmethod
    def employed(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "employed")

    @classmethod
    def injured(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "injured")

    @classmethod
    def suspended(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "suspended")

    @classmethod
    def unactivated(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "unactivated")

    @classmethod
    def active(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "active")

    @classmethod
    def inactive(cls, entity: Describable | None = None) -> Self:
        return cls._state(entity, "inactive")

    @classmethod
    def has_future_employment(cls, entity: Describable | None = None) -> Self:
        return cls._because(
            entity,
            "future_employment",
            f"has not been officially employed and cannot be {cls.verb}.",
        )

    @classmethod
    def has_future_activation(cls, entity: Describable | None = None) -> Self:
        return cls._because(
            entity,
            "future_activation",
            f"has not been officially activated and cannot be {cls.verb}.",
        )

    @classmethod
    def no_active_wrestlers(cls, tag_team: Describable) -> Self:
        return cls(
            f"This team '{_name(tag_team)}' has no active wrestlers and cannot be {cls.verb}.",
            reason="no_active_wrestlers",
        )

    @classmethod
    def partner_unavailable(
        cls, tag_team: Describable, wrestler: Describable, state: str
    ) -> Self:
        return cls(
            f"Tag team '{_name(tag_team)}' cannot be {cls.verb} because wrestler "
            f"'{_name(wrestler)}' is {state}.",
            reason="partner_unavailable",
        )


class CannotBeEmployed(StatusTransitionError):
    verb = "employed"

    @classmethod
    def employed(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "employed", "is already employed.")


class CannotBeReleased(StatusTransitionError):
    verb = "released"

    @classmethod
    def released(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "released", "is already released.")


class CannotBeRetired(StatusTransitionError):
    verb = "retired"

    @classmethod
    def retired(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "retired", "is already retired.")


class CannotBeUnretired(StatusTransitionError):
    verb = "unretired"

    @classmethod
    def not_retired(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "not_retired", "is not retired and cannot be unretired.")


class CannotBeInjured(StatusTransitionError):
    verb = "injured"

    @classmethod
    def injured(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "injured", "is already injured.")

    @classmethod
    def not_injurable(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "not_injurable", "cannot be injured.")


class CannotBeClearedFromInjury(StatusTransitionError):
    verb = "cleared from an injury"

    @classmethod
    def not_injured(cls, entity: Describable | None = None) -> Self:
        return cls._because(
            entity, "not_injured", "is not injured and cannot be cleared from an injury."
        )


class CannotBeSuspended(StatusTransitionError):
    verb = "suspended"

    @classmethod
    def suspended(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "suspended", "is already suspended.")


class CannotBeReinstated(StatusTransitionError):
    verb = "reinstated"

    @classmethod
    def not_suspended(cls, entity: Describable | None = None) -> Self:
        return cls._because(
            entity, "not_suspended", "is not suspended and cannot be reinstated."
        )


class CannotBeActivated(StatusTransitionError):
    verb = "activated"

    @classmethod
    def active(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "active", "is already activated.")


class CannotBeDeactivated(StatusTransitionError):
    verb = "deactivated"

    @classmethod
    def inactive(cls, entity: Describable | None = None) -> Self:
        return cls._because(entity, "inactive", "is already deactivated.")


class CannotBeRestored(BusinessRuleError):
    @classmethod
    def not_deleted(cls, entity_type: str | None = None, entity_name: str | None = None) -> Self:
        context = f" {entity_type} '{entity_name}'" if entity_type and entity_name else " entity"
        return cls(f"This{context} is not deleted and cannot be restored.", reason="not_deleted")


class InvalidDateRange(BusinessRuleError):
    """A period would end before it starts or overlap the previous one."""

    @classmethod
    def ends_before_start(cls, started_at: datetime, ended_at: datetime) -> Self:
        return cls(
            f"End date {ended_at.isoformat()} is before start date {started_at.isoformat()}.",
            reason="ends_before_start",
        )

    @classmethod
    def overlaps_previous(cls, started_at: datetime, previous_end: datetime) -> Self:
        return cls(
            f"Start date {started_at.isoformat()} overlaps the previous period "
            f"which ended {previous_end.isoformat()}.",
            reason="overlaps_previous",
        )


class MembershipConflict(BusinessRuleError):
    @classmethod
    def already_in_tag_team(cls, wrestler: Describable, tag_team: Describable) -> Self:
        return cls(
            f"Wrestler '{_name(wrestler)}' is already a member of tag team "
            f"'{_name(tag_team)}'. Remove them from their current team first.",
            reason="already_in_tag_team",
        )

    @classmethod
    def already_in_stable(cls, member: Describable, stable: Describable) -> Self:
        return cls(
            f"{member.member_type.label.capitalize()} '{_name(member)}' is already a "
            f"member of stable '{_name(stable)}'.",
            reason="already_in_stable",
        )

    @classmethod
    def not_a_member(cls, member: Describable, group: Describable) -> Self:
        return cls(
            f"{member.member_type.label.capitalize()} '{_name(member)}' is not a current "
            f"member of {group.member_type.label} '{_name(group)}'.",
            reason="not_a_member",
        )

    @classmethod
    def already_has_manager(cls, client: Describable, manager: Describable) -> Self:
        return cls(
            f"{client.member_type.label.capitalize()} '{_name(client)}' is already managed "
            f"by '{_name(manager)}'.",
            reason="already_has_manager",
        )

    @classmethod
    def not_managing(cls, manager: Describable, client: Describable) -> Self:
        return cls(
            f"Manager '{_name(manager)}' does not currently manage "
            f"{client.member_type.label} '{_name(client)}'.",
            reason="not_managing",
        )

    @classmethod
    def group_retired(cls, group: Describable) -> Self:
        return cls(
            f"{group.member_type.label.capitalize()} '{_name(group)}' is retired and "
            "cannot take on members.",
            reason="group_retired",
        )

    @classmethod
    def manager_unavailable(cls, manager: Describable) -> Self:
        return cls(
            f"Manager '{_name(manager)}' is not available to take on clients.",
            reason="manager_unavailable",
        )

    @classmethod
    def invalid_tag_team_size(cls, current: int, required: int = 2) -> Self:
        return cls(
            f"A tag team requires exactly {required} wrestlers, {current} given.",
            reason="invalid_tag_team_size",
        )

    @classmethod
    def retired_member(cls, member: Describable) -> Self:
        return cls(
            f"{member.member_type.label.capitalize()} '{_name(member)}' is retired and "
            "cannot join a group.",
            reason="retired_member",
        )


class NotEnoughMembers(BusinessRuleError):
    @classmethod
    def for_stable(cls, minimum: int, current: int, stable: Describable | None = None) -> Self:
        context = f" '{_name(stable)}'" if stable is not None else ""
        return cls(
            f"Stable{context} has {current} members but requires at least {minimum}.",
            reason="not_enough_members",
        )


class InvalidMatchConfiguration(BusinessRuleError):
    @classmethod
    def not_enough_sides(cls) -> Self:
        return cls(
            "Match must have at least 2 sides with competitors", reason="not_enough_sides"
        )

    @classmethod
    def wrong_number_of_sides(cls, match_type: Any, required: int, given: int) -> Self:
        return cls(
            f"{match_type.display_name} matches require {required} sides, {given} given.",
            reason="wrong_number_of_sides",
        )

    @classmethod
    def missing_referee(cls) -> Self:
        return cls(
            "Match must have at least one referee assigned", reason="missing_referee"
        )

    @classmethod
    def invalid_competitor_type(cls, competitor_type: RosterMemberType) -> Self:
        return cls(
            f"A {competitor_type.label} cannot compete in a match.",
            reason="invalid_competitor_type",
        )

    @classmethod
    def duplicate_competitor(cls, competitor: Describable) -> Self:
        return cls(
            f"{competitor.member_type.label.capitalize()} '{_name(competitor)}' appears "
            "more than once in this match.",
            reason="duplicate_competitor",
        )

    @classmethod
    def title_not_active(cls, title: Describable) -> Self:
        return cls(
            f"Title '{_name(title)}' is not active and cannot be defended.",
            reason="title_not_active",
        )

    @classmethod
    def wrong_competitor_for_title(cls, title: Describable, competitor: Describable) -> Self:
        return cls(
            f"{competitor.member_type.label.capitalize()} '{_name(competitor)}' cannot "
            f"compete for title '{_name(title)}'.",
            reason="wrong_competitor_for_title",
        )

    @classmethod
    def invalid_winning_side(cls, side: int | None) -> Self:
        return cls(
            f"Side {side} is not a side of this match.", reason="invalid_winning_side"
        )

    @classmethod
    def result_already_recorded(cls) -> Self:
        return cls(
            "A result has already been recorded for this match.",
            reason="result_already_recorded",
        )


class CompetitorConflict(BusinessRuleError):
    @classmethod
    def unavailable(cls, entity: Describable) -> Self:
        return cls(
            f"{entity.member_type.label.capitalize()} '{_name(entity)}' is not available "
            "to be booked.",
            reason="unavailable",
        )


class ChampionshipConflict(BusinessRuleError):
    @classmethod
    def title_not_active(cls, title: Describable) -> Self:
        return cls(
            f"Title '{_name(title)}' is not active and cannot change hands.",
            reason="title_not_active",
        )

    @classmethod
    def wrong_champion_type(cls, title: Describable, champion_type: RosterMemberType) -> Self:
        return cls(
            f"A {champion_type.label} cannot hold title '{_name(title)}'.",
            reason="wrong_champion_type",
        )

    @classmethod
    def champion_unavailable(cls, champion: Describable) -> Self:
        return cls(
            f"{champion.member_type.label.capitalize()} '{_name(champion)}' is not employed "
            "and cannot be awarded a title.",
            reason="champion_unavailable",
        )

    @classmethod
    def already_champion(cls, title: Describable, champion: Describable) -> Self:
        return cls(
            f"'{_name(champion)}' already holds title '{_name(title)}'.",
            reason="already_champion",
        )

    @classmethod
    def vacant(cls, title: Describable) -> Self:
        return cls(f"Title '{_name(title)}' is already vacant.", reason="vacant")


__all__ = [
    "BusinessRuleError",
    "CannotBeActivated",
    "CannotBeClearedFromInjury",
    "CannotBeDeactivated",
    "CannotBeEmployed",
    "CannotBeInjured",
    "CannotBeReinstated",
    "CannotBeReleased",
    "CannotBeRestored",
    "CannotBeRetired",
    "CannotBeSuspended",
    "CannotBeUnretired",
    "ChampionshipConflict",
    "CompetitorConflict",
    "Describable",
    "InvalidDateRange",
    "InvalidMatchConfiguration",
    "MembershipConflict",
    "NotEnoughMembers",
    "RingsideError",
    "StatusTransitionError",
    "describe",
]
