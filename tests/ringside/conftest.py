"""Builders for roster records used across the service and API tests."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import Event, Manager, Referee, Stable, TagTeam, Title, Venue, Wrestler
from ringside.enums import TitleType
from ringside.services.event_service import EventService
from ringside.services.manager_service import ManagerService
from ringside.services.referee_service import RefereeService
from ringside.services.stable_service import StableService
from ringside.services.tag_team_service import TagTeamService
from ringside.services.title_service import TitleService
from ringside.services.venue_service import VenueService
from ringside.services.wrestler_service import WrestlerService
from tests.conftest import PAST

_UNSET: Any = object()


def _when(value: datetime | None) -> datetime | None:
    return PAST if value is _UNSET else value


class Roster:
    """Creates records through the services so every rule and cascade applies.

    Employable records are employed on ``PAST`` unless ``employed_at=None``
    is passed; stables and titles are activated on ``PAST`` the same way.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def reload(self, entity: Any) -> Any:
        await self.session.refresh(entity)
        return entity

    async def wrestler(
        self, name: str | None = None, *, employed_at: Any = _UNSET, **values: Any
    ) -> Wrestler:
        number = self._next()
        return await WrestlerService(self.session).create(
            {
                "name": name or f"Wrestler {number}",
                "height": 72,
                "weight": 230,
                "hometown": "Calgary, AB",
                "signature_move": None,
                "employed_at": _when(employed_at),
                **values,
            }
        )

    async def tag_team(
        self,
        name: str | None = None,
        *,
        wrestlers: Sequence[Wrestler] | None = None,
        employed_at: Any = _UNSET,
    ) -> TagTeam:
        if wrestlers is None:
            wrestlers = [
                await self.wrestler(employed_at=employed_at),
                await self.wrestler(employed_at=employed_at),
            ]
        return await TagTeamService(self.session).create(
            {
                "name": name or f"Tag Team {self._next()}",
                "signature_move": None,
                "wrestler_ids": [wrestler.id for wrestler in wrestlers],
                "employed_at": _when(employed_at),
            }
        )

    async def manager(
        self, last_name: str | None = None, *, employed_at: Any = _UNSET
    ) -> Manager:
        return await ManagerService(self.session).create(
            {
                "first_name": "Jimmy",
                "last_name": last_name or f"Hart {self._next()}",
                "employed_at": _when(employed_at),
            }
        )

    async def referee(
        self, last_name: str | None = None, *, employed_at: Any = _UNSET
    ) -> Referee:
        return await RefereeService(self.session).create(
            {
                "first_name": "Earl",
                "last_name": last_name or f"Hebner {self._next()}",
                "employed_at": _when(employed_at),
            }
        )

    async def stable(
        self,
        name: str | None = None,
        *,
        wrestlers: Sequence[Wrestler] = (),
        tag_teams: Sequence[TagTeam] = (),
        managers: Sequence[Manager] = (),
        activated_at: Any = _UNSET,
    ) -> Stable:
        return await StableService(self.session).create(
            {
                "name": name or f"Stable {self._next()}",
                "wrestler_ids": [wrestler.id for wrestler in wrestlers],
                "tag_team_ids": [tag_team.id for tag_team in tag_teams],
                "manager_ids": [manager.id for manager in managers],
                "activated_at": _when(activated_at),
            }
        )

    async def title(
        self,
        name: str | None = None,
        *,
        type: TitleType = TitleType.SINGLES,
        activated_at: Any = _UNSET,
    ) -> Title:
        return await TitleService(self.session).create(
            {
                "name": name or f"Title {self._next()}",
                "type": type,
                "activated_at": _when(activated_at),
            }
        )

    async def venue(self, name: str | None = None) -> Venue:
        return await VenueService(self.session).create(
            {
                "name": name or f"Arena {self._next()}",
                "street_address": "1 Main Street",
                "city": "Pittsburgh",
                "state": "Pennsylvania",
                "zipcode": "15219",
            }
        )

    async def event(
        self,
        name: str | None = None,
        *,
        date: datetime | None = PAST,
        venue: Venue | None = None,
    ) -> Event:
        return await EventService(self.session).create(
            {
                "name": name or f"Event {self._next()}",
                "date": date,
                "venue_id": venue.id if venue is not None else None,
                "preview": None,
            }
        )


@pytest.fixture
def roster(session: AsyncSession) -> Roster:
    return Roster(session)
