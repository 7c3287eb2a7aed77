"""FastAPI dependency wiring for the roster services.

Each factory resolves the request session and the cache client, then builds
the service.  Service modules stay free of web-layer imports so scripts and
tests can construct them directly.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.cache import CacheClient, get_cache_client
from ringside.db.connection import get_db
from ringside.services.event_service import EventService
from ringside.services.manager_service import ManagerService
from ringside.services.match_service import MatchService
from ringside.services.referee_service import RefereeService
from ringside.services.stable_service import StableService
from ringside.services.tag_team_service import TagTeamService
from ringside.services.title_service import TitleService
from ringside.services.venue_service import VenueService
from ringside.services.wrestler_service import WrestlerService


def get_wrestler_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> WrestlerService:
    return WrestlerService(session, cache=cache)


def get_tag_team_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> TagTeamService:
    return TagTeamService(session, cache=cache)


def get_manager_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> ManagerService:
    return ManagerService(session, cache=cache)


def get_referee_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> RefereeService:
    return RefereeService(session, cache=cache)


def get_stable_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> StableService:
    return StableService(session, cache=cache)


def get_title_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> TitleService:
    return TitleService(session, cache=cache)


def get_venue_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> VenueService:
    return VenueService(session, cache=cache)


def get_event_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> EventService:
    return EventService(session, cache=cache)


def get_match_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> MatchService:
    """Matches share the request session with the event service."""

    return MatchService(session, cache=cache)


__all__ = [
    "get_event_service",
    "get_manager_service",
    "get_match_service",
    "get_referee_service",
    "get_stable_service",
    "get_tag_team_service",
    "get_title_service",
    "get_venue_service",
    "get_wrestler_service",
]
