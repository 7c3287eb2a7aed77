"""Transition rules keyed on an entity's current status.

Each ``ensure_can_*`` function reads the status column and raises the matching
:class:`~ringside.exceptions.StatusTransitionError` subclass when the action is
not allowed from that status.  They never touch the database, so services
call them first and only start writing once every check has passed.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from ringside.enums import ActivationStatus, EmploymentStatus
from ringside.exceptions import (
    CannotBeActivated,
    CannotBeClearedFromInjury,
    CannotBeDeactivated,
    CannotBeEmployed,
    CannotBeInjured,
    CannotBeReinstated,
    CannotBeReleased,
    CannotBeRetired,
    CannotBeSuspended,
    CannotBeUnretired,
    NotEnoughMembers,
    StatusTransitionError,
)

STABLE_MINIMUM_MEMBERS = 3

_FUTURE_REASONS = {
    EmploymentStatus.FUTURE_EMPLOYMENT: "has_future_employment",
    ActivationStatus.FUTURE_ACTIVATION: "has_future_activation",
}


def _reject(error: type[StatusTransitionError], entity: Any) -> StatusTransitionError:
    """Build ``error`` through the constructor named after the entity's status."""

    status: Enum = entity.status
    constructor = getattr(error, _FUTURE_REASONS.get(status, status.value))
    return constructor(entity)


def _require(
    entity: Any,
    allowed: Iterable[Enum],
    error: type[StatusTransitionError],
) -> None:
    if entity.status not in allowed:
        raise _reject(error, entity)


# -- employment ------------------------------------------------------------------

_EMPLOYABLE_FROM = (
    EmploymentStatus.UNEMPLOYED,
    EmploymentStatus.RELEASED,
    EmploymentStatus.FUTURE_EMPLOYMENT,
)
_RETIRABLE_FROM = (
    EmploymentStatus.EMPLOYED,
    EmploymentStatus.INJURED,
    EmploymentStatus.SUSPENDED,
    EmploymentStatus.RELEASED,
)


def ensure_can_employ(entity: Any) -> None:
    # Employed, injured and suspended all report "already employed".
    if entity.status.is_employed:
        raise CannotBeEmployed.employed(entity)
    _require(entity, _EMPLOYABLE_FROM, CannotBeEmployed)


def ensure_can_release(entity: Any) -> None:
    if not entity.status.is_employed:
        raise _reject(CannotBeReleased, entity)


def ensure_can_retire(entity: Any) -> None:
    _require(entity, _RETIRABLE_FROM, CannotBeRetired)


def ensure_can_unretire(entity: Any) -> None:
    if entity.status is not EmploymentStatus.RETIRED:
        raise CannotBeUnretired.not_retired(entity)


def ensure_can_injure(entity: Any) -> None:
    if not entity.member_type.can_be_injured:
        raise CannotBeInjured.not_injurable(entity)
    _require(entity, (EmploymentStatus.EMPLOYED,), CannotBeInjured)


def ensure_can_clear_injury(entity: Any) -> None:
    if entity.status is not EmploymentStatus.INJURED:
        raise CannotBeClearedFromInjury.not_injured(entity)


def ensure_can_suspend(entity: Any) -> None:
    _require(entity, (EmploymentStatus.EMPLOYED,), CannotBeSuspended)


def ensure_can_reinstate(entity: Any) -> None:
    if entity.status is not EmploymentStatus.SUSPENDED:
        raise CannotBeReinstated.not_suspended(entity)


def is_bookable(entity: Any) -> bool:
    """Employed and neither injured nor suspended."""

    return entity.status is EmploymentStatus.EMPLOYED


# -- tag teams -------------------------------------------------------------------


def ensure_partners_available(
    error: type[StatusTransitionError],
    tag_team: Any,
    partners: Sequence[Any],
    *,
    unavailable: Iterable[EmploymentStatus] | None = None,
) -> None:
    """Reject a tag team action when its partners cannot follow along.

    With ``unavailable`` unset every partner must be ``employed``; otherwise only
    the listed statuses are rejected.
    """

    if not partners:
        raise error.no_active_wrestlers(tag_team)
    blocked = set(unavailable) if unavailable is not None else None
    for partner in partners:
        status = partner.status
        if blocked is None and status is EmploymentStatus.EMPLOYED:
            continue
        if blocked is not None and status not in blocked:
            continue
        raise error.partner_unavailable(tag_team, partner, status.value.replace("_", " "))


def is_tag_team_bookable(tag_team: Any, partners: Sequence[Any]) -> bool:
    return (
        is_bookable(tag_team)
        and len(partners) == 2
        and all(is_bookable(partner) for partner in partners)
    )


# -- activation ------------------------------------------------------------------

_ACTIVATABLE_FROM = (
    ActivationStatus.UNACTIVATED,
    ActivationStatus.INACTIVE,
    ActivationStatus.FUTURE_ACTIVATION,
)


def ensure_can_activate(entity: Any) -> None:
    _require(entity, _ACTIVATABLE_FROM, CannotBeActivated)


def ensure_can_deactivate(entity: Any) -> None:
    _require(entity, (ActivationStatus.ACTIVE,), CannotBeDeactivated)


def ensure_can_retire_activatable(entity: Any) -> None:
    _require(entity, (ActivationStatus.ACTIVE, ActivationStatus.INACTIVE), CannotBeRetired)


def ensure_can_unretire_activatable(entity: Any) -> None:
    if entity.status is not ActivationStatus.RETIRED:
        raise CannotBeUnretired.not_retired(entity)


def stable_member_count(wrestlers: int, tag_teams: int) -> int:
    """Each tag team counts as two members; managers are not counted."""

    return wrestlers + 2 * tag_teams


def ensure_stable_has_enough_members(stable: Any, wrestlers: int, tag_teams: int) -> None:
    count = stable_member_count(wrestlers, tag_teams)
    if count < STABLE_MINIMUM_MEMBERS:
        raise NotEnoughMembers.for_stable(STABLE_MINIMUM_MEMBERS, count, stable)


__all__ = [
    "STABLE_MINIMUM_MEMBERS",
    "ensure_can_activate",
    "ensure_can_clear_injury",
    "ensure_can_deactivate",
    "ensure_can_employ",
    "ensure_can_injure",
    "ensure_can_reinstate",
    "ensure_can_release",
    "ensure_can_retire",
    "ensure_can_retire_activatable",
    "ensure_can_suspend",
    "ensure_can_unretire",
    "ensure_can_unretire_activatable",
    "ensure_partners_available",
    "ensure_stable_has_enough_members",
    "is_bookable",
    "is_tag_team_bookable",
    "stable_member_count",
]
