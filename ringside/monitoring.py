"""Slow query logging for the Ringside database engine."""

import logging
import time
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

_STATEMENT_PREVIEW_LENGTH = 500


def setup_query_monitoring(engine: AsyncEngine, slow_query_threshold: float = 0.1) -> None:
    """Log a warning for every statement slower than ``slow_query_threshold`` seconds.

    Period lookups run on nearly every request, so a missing index on an
    ``ended_at`` column shows up here first.
    """

    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _start_timer(
        conn: Any,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        conn.info.setdefault("ringside_query_start", []).append(time.perf_counter())

    @event.listens_for(sync_engine, "after_cursor_execute")
    def _log_if_slow(
        conn: Any,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        elapsed = time.perf_counter() - conn.info["ringside_query_start"].pop()
        if elapsed <= slow_query_threshold:
            return

        preview = statement[:_STATEMENT_PREVIEW_LENGTH]
        if len(statement) > _STATEMENT_PREVIEW_LENGTH:
            preview += "..."
        logger.warning(
            "Slow query detected (%.3fs): %s",
            elapsed,
            preview,
            extra={"duration_seconds": elapsed, "threshold_seconds": slow_query_threshold},
        )

    logger.info("Query monitoring enabled (slow query threshold: %ss)", slow_query_threshold)
