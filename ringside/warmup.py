"""Startup warmup so the first request does not pay for cold connections.

Each step logs and swallows its own failure: a cold cache or an unreachable
Redis must never keep the API from starting.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


async def warmup_database(
    resolve_db_type: Callable[[], str] | None = None,
    resolve_engine: Callable[[], AsyncEngine] | None = None,
) -> None:
    """Open one pooled connection and issue ``SELECT 1``."""
    try:
        if resolve_db_type is None:
            from ringside.db.connection import get_database_type as resolve_db_type

        if resolve_engine is None:
            from ringside.db.connection import get_engine as resolve_engine

        start = time.time()
        db_type = resolve_db_type()
        logger.debug("Database warmup target detected as %s", db_type)

        engine = resolve_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        elapsed = (time.time() - start) * 1000
        logger.info("Database connection warmed up (%s, %.0fms)", db_type, elapsed)
    except Exception as e:
        logger.warning(f"Database warmup failed: {e}")


async def warmup_redis() -> None:
    """Connect to Redis; degrades to the in-process cache when it is down."""
    from ringside.cache import get_redis

    try:
        start = time.time()
        redis = await get_redis()

        if redis is None:
            logger.info("Redis warmup skipped (connection unavailable)")
            return

        await redis.ping()

        elapsed = (time.time() - start) * 1000
        logger.info("Redis connection warmed up (%.0fms)", elapsed)
    except Exception as e:
        logger.warning(f"Redis warmup failed: {e}")


async def warmup_repository_queries() -> None:
    """Run one roster listing so mapper configuration happens before traffic."""
    from ringside.db.connection import get_async_session_context
    from ringside.db.repositories import WrestlerRepository

    try:
        start = time.time()
        async with get_async_session_context() as session:
            await WrestlerRepository(session).list_records(limit=1, offset=0)

        elapsed = (time.time() - start) * 1000
        logger.info("Repository warmup executed (%.0fms)", elapsed)
    except Exception as e:
        logger.warning(f"Repository warmup failed: {e}")


async def warmup_all(
    resolve_db_type: Callable[[], str] | None = None,
    resolve_engine: Callable[[], AsyncEngine] | None = None,
) -> None:
    logger.info("=" * 60)
    logger.info("Warming up roster API connections...")
    logger.info("=" * 60)

    start = time.time()

    await warmup_database(
        resolve_db_type=resolve_db_type,
        resolve_engine=resolve_engine,
    )
    await warmup_redis()
    await warmup_repository_queries()

    total_elapsed = (time.time() - start) * 1000
    logger.info("=" * 60)
    logger.info("Warmup complete (%.0fms)", total_elapsed)
    logger.info("=" * 60)
