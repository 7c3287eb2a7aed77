#!/usr/bin/env python
"""Promote roster records whose future start date has arrived.

Employing or activating with a future date leaves the record in
``future_employment`` / ``future_activation``.  Run this periodically
(e.g. from cron) to flip those records once the date passes.

Usage:
    python -m ringside.scripts.refresh_statuses
"""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from ringside.cache import CacheClient, close_redis, get_cache_client
from ringside.db.connection import dispose_engine, get_async_session_context
from ringside.services.manager_service import ManagerService
from ringside.services.referee_service import RefereeService
from ringside.services.stable_service import StableService
from ringside.services.tag_team_service import TagTeamService
from ringside.services.title_service import TitleService
from ringside.services.wrestler_service import WrestlerService
from ringside.settings import get_settings
from ringside.utils.dates import utcnow

logger = logging.getLogger(__name__)

SERVICES = (
    WrestlerService,
    TagTeamService,
    ManagerService,
    RefereeService,
    StableService,
    TitleService,
)


async def refresh_statuses(
    session: AsyncSession,
    cache: CacheClient | None = None,
    now: datetime | None = None,
) -> dict[str, int]:
    """Promote every due record; returns the count per resource."""

    moment = now or utcnow()
    promoted: dict[str, int] = {}
    for service_class in SERVICES:
        service = service_class(session, cache=cache)
        entities = await service.promote_due(moment)
        promoted[service.resource] = len(entities)
        if entities:
            logger.info(
                "Promoted %s %s: %s",
                len(entities),
                service.resource,
                [entity.id for entity in entities],
            )
    return promoted


async def main() -> int:
    logging.basicConfig(
        level=get_settings().log_level_numeric,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    cache = await get_cache_client()
    try:
        async with get_async_session_context() as session:
            promoted = await refresh_statuses(session, cache)
            await session.commit()
    finally:
        await close_redis()
        await dispose_engine()

    total = sum(promoted.values())
    print(f"Promoted {total} record(s): {promoted}")
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
