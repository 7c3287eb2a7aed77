"""Fixtures shared by every Ringside test module."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ringside.cache import local_cache_clear_all
from ringside.db.connection import enable_sqlite_savepoints
from ringside.db.models import Base
from ringside.utils.dates import utcnow

# Fixed point in the past used as the effective date of seeded actions.
PAST = datetime(2024, 1, 1)


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    """Provide an in-memory SQLite session with working SAVEPOINTs."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()
    await engine.dispose()


@pytest_asyncio.fixture(autouse=True)
async def _clear_local_cache() -> AsyncIterator[None]:
    await local_cache_clear_all()
    yield
    await local_cache_clear_all()


@pytest.fixture
def past() -> datetime:
    return PAST


@pytest.fixture
def future() -> datetime:
    return utcnow() + timedelta(days=30)
