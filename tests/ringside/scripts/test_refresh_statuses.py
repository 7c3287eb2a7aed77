from __future__ import annotations

from datetime import timedelta

import pytest

from ringside.enums import ActivationStatus, EmploymentStatus
from ringside.scripts.refresh_statuses import refresh_statuses


@pytest.mark.asyncio
async def test_promotes_records_whose_start_date_arrived(roster, session, future) -> None:
    wrestler = await roster.wrestler(employed_at=future)
    title = await roster.title(activated_at=future)
    later = await roster.manager(employed_at=future + timedelta(days=30))
    assert wrestler.status is EmploymentStatus.FUTURE_EMPLOYMENT

    promoted = await refresh_statuses(session, now=future)

    assert promoted["wrestlers"] == 1
    assert promoted["titles"] == 1
    assert promoted["managers"] == 0
    assert wrestler.status is EmploymentStatus.EMPLOYED
    assert title.status is ActivationStatus.ACTIVE
    assert later.status is EmploymentStatus.FUTURE_EMPLOYMENT


@pytest.mark.asyncio
async def test_nothing_due_before_the_start_date(roster, session, future) -> None:
    await roster.wrestler(employed_at=future)

    promoted = await refresh_statuses(session, now=future - timedelta(days=1))

    assert set(promoted.values()) == {0}
    assert set(promoted) == {
        "wrestlers",
        "tag_teams",
        "managers",
        "referees",
        "stables",
        "titles",
    }
