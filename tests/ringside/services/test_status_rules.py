from __future__ import annotations

from types import SimpleNamespace

import pytest

from ringside.enums import ActivationStatus, EmploymentStatus, RosterMemberType
from ringside.exceptions import (
    CannotBeActivated,
    CannotBeEmployed,
    CannotBeInjured,
    CannotBeReleased,
    CannotBeRetired,
    CannotBeSuspended,
    CannotBeUnretired,
    NotEnoughMembers,
)
from ringside.services import status_rules


def _wrestler(status: EmploymentStatus, name: str = "Bret Hart") -> SimpleNamespace:
    return SimpleNamespace(
        member_type=RosterMemberType.WRESTLER, display_name=name, status=status
    )


def _tag_team(status: EmploymentStatus) -> SimpleNamespace:
    return SimpleNamespace(
        member_type=RosterMemberType.TAG_TEAM, display_name="Demolition", status=status
    )


def _title(status: ActivationStatus) -> SimpleNamespace:
    return SimpleNamespace(
        member_type=RosterMemberType.TITLE, display_name="World Title", status=status
    )


@pytest.mark.parametrize(
    "status",
    [
        EmploymentStatus.UNEMPLOYED,
        EmploymentStatus.RELEASED,
        EmploymentStatus.FUTURE_EMPLOYMENT,
    ],
)
def test_employ_allowed_before_employment(status: EmploymentStatus) -> None:
    status_rules.ensure_can_employ(_wrestler(status))


@pytest.mark.parametrize(
    "status",
    [EmploymentStatus.EMPLOYED, EmploymentStatus.INJURED, EmploymentStatus.SUSPENDED],
)
def test_employ_rejected_while_under_contract(status: EmploymentStatus) -> None:
    with pytest.raises(CannotBeEmployed) as excinfo:
        status_rules.ensure_can_employ(_wrestler(status))

    assert excinfo.value.reason == "employed"


def test_employ_rejected_when_retired() -> None:
    with pytest.raises(CannotBeEmployed) as excinfo:
        status_rules.ensure_can_employ(_wrestler(EmploymentStatus.RETIRED))

    assert excinfo.value.reason == "retired"


@pytest.mark.parametrize(
    ("status", "reason"),
    [
        (EmploymentStatus.UNEMPLOYED, "unemployed"),
        (EmploymentStatus.FUTURE_EMPLOYMENT, "future_employment"),
        (EmploymentStatus.RETIRED, "retired"),
    ],
)
def test_retire_rejections_report_the_current_status(
    status: EmploymentStatus, reason: str
) -> None:
    with pytest.raises(CannotBeRetired) as excinfo:
        status_rules.ensure_can_retire(_wrestler(status))

    assert excinfo.value.reason == reason


def test_retire_allowed_after_release() -> None:
    status_rules.ensure_can_retire(_wrestler(EmploymentStatus.RELEASED))


def test_release_rejected_when_not_employed() -> None:
    with pytest.raises(CannotBeReleased) as excinfo:
        status_rules.ensure_can_release(_wrestler(EmploymentStatus.RELEASED))

    assert excinfo.value.message == "This wrestler 'Bret Hart' is already released."


def test_tag_teams_cannot_be_injured() -> None:
    with pytest.raises(CannotBeInjured) as excinfo:
        status_rules.ensure_can_injure(_tag_team(EmploymentStatus.EMPLOYED))

    assert excinfo.value.reason == "not_injurable"


def test_injury_requires_an_employed_wrestler() -> None:
    status_rules.ensure_can_injure(_wrestler(EmploymentStatus.EMPLOYED))

    with pytest.raises(CannotBeInjured) as excinfo:
        status_rules.ensure_can_injure(_wrestler(EmploymentStatus.SUSPENDED))

    assert excinfo.value.reason == "suspended"


def test_unretire_requires_retirement() -> None:
    with pytest.raises(CannotBeUnretired) as excinfo:
        status_rules.ensure_can_unretire(_wrestler(EmploymentStatus.EMPLOYED))

    assert excinfo.value.reason == "not_retired"


def test_partners_must_be_employed_to_suspend_a_team() -> None:
    team = _tag_team(EmploymentStatus.EMPLOYED)
    partners = [
        _wrestler(EmploymentStatus.EMPLOYED, "Ax"),
        _wrestler(EmploymentStatus.INJURED, "Smash"),
    ]

    with pytest.raises(CannotBeSuspended) as excinfo:
        status_rules.ensure_partners_available(CannotBeSuspended, team, partners)

    assert excinfo.value.reason == "partner_unavailable"
    assert "'Smash' is injured" in excinfo.value.message


def test_team_without_partners_has_no_active_wrestlers() -> None:
    with pytest.raises(CannotBeRetired) as excinfo:
        status_rules.ensure_partners_available(
            CannotBeRetired, _tag_team(EmploymentStatus.EMPLOYED), []
        )

    assert excinfo.value.reason == "no_active_wrestlers"


def test_only_listed_partner_statuses_block_when_given() -> None:
    team = _tag_team(EmploymentStatus.EMPLOYED)
    partners = [
        _wrestler(EmploymentStatus.EMPLOYED, "Ax"),
        _wrestler(EmploymentStatus.RELEASED, "Smash"),
    ]

    status_rules.ensure_partners_available(
        CannotBeRetired,
        team,
        partners,
        unavailable=(EmploymentStatus.INJURED, EmploymentStatus.SUSPENDED),
    )


def test_bookability() -> None:
    employed = _wrestler(EmploymentStatus.EMPLOYED)
    injured = _wrestler(EmploymentStatus.INJURED)
    team = _tag_team(EmploymentStatus.EMPLOYED)

    assert status_rules.is_bookable(employed)
    assert not status_rules.is_bookable(injured)
    assert status_rules.is_tag_team_bookable(team, [employed, employed])
    assert not status_rules.is_tag_team_bookable(team, [employed, injured])
    assert not status_rules.is_tag_team_bookable(team, [employed])


def test_activation_rules() -> None:
    status_rules.ensure_can_activate(_title(ActivationStatus.INACTIVE))

    with pytest.raises(CannotBeActivated) as excinfo:
        status_rules.ensure_can_activate(_title(ActivationStatus.ACTIVE))
    assert excinfo.value.reason == "active"

    with pytest.raises(CannotBeRetired) as excinfo:
        status_rules.ensure_can_retire_activatable(_title(ActivationStatus.UNACTIVATED))
    assert excinfo.value.reason == "unactivated"


def test_stable_member_count_counts_tag_teams_twice() -> None:
    assert status_rules.stable_member_count(1, 1) == 3
    assert status_rules.stable_member_count(2, 0) == 2

    stable = SimpleNamespace(member_type=RosterMemberType.STABLE, display_name="nWo")
    status_rules.ensure_stable_has_enough_members(stable, 3, 0)
    with pytest.raises(NotEnoughMembers) as excinfo:
        status_rules.ensure_stable_has_enough_members(stable, 2, 0)
    assert excinfo.value.reason == "not_enough_members"
