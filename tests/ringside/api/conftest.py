"""HTTP client wired to the test session, with Redis switched off."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.cache import CacheClient, get_cache_client
from ringside.db.connection import get_db
from ringside.main import app


@pytest_asyncio.fixture
async def client(session: AsyncSession) -> AsyncIterator[AsyncClient]:
    async def _session_override() -> AsyncIterator[AsyncSession]:
        yield session

    async def _cache_override() -> CacheClient:
        return CacheClient(None)

    app.dependency_overrides[get_db] = _session_override
    app.dependency_overrides[get_cache_client] = _cache_override
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_cache_client, None)
