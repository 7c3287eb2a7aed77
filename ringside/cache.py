from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Sequence
from hashlib import sha256
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from ringside.settings import get_settings

logger = logging.getLogger(__name__)

_DEFAULT_TTL_SECONDS = 600
_LIST_SUFFIX = "list"

_LOCAL_CACHE_DEFAULT_TTL = 300
_local_cache: dict[str, tuple[float, Any]] = {}
_local_cache_lock = asyncio.Lock()

_redis_client: Redis | None = None
_client_lock = asyncio.Lock()
_redis_disabled = False

_REDIS_UNAVAILABLE = (RedisConnectionError, RedisTimeoutError, OSError)


async def local_cache_get(key: str) -> Any | None:
    """Return an entry from the in-process cache while it is still fresh."""

    async with _local_cache_lock:
        entry = _local_cache.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at < time.time():
            _local_cache.pop(key, None)
            return None
        return value


async def local_cache_set(key: str, value: Any, ttl: int | None = None) -> None:
    ttl_seconds = ttl if ttl is not None and ttl > 0 else _LOCAL_CACHE_DEFAULT_TTL
    async with _local_cache_lock:
        _local_cache[key] = (time.time() + ttl_seconds, value)


async def local_cache_evict(
    *,
    keys: Sequence[str] | None = None,
    prefixes: Sequence[str] | None = None,
) -> None:
    """Drop exact ``keys`` and every key that starts with one of ``prefixes``."""

    async with _local_cache_lock:
        for key in keys or ():
            _local_cache.pop(key, None)
        if prefixes:
            stale = [
                key
                for key in _local_cache
                if any(key.startswith(prefix) for prefix in prefixes)
            ]
            for key in stale:
                _local_cache.pop(key, None)


async def local_cache_clear_all() -> None:
    """Empty the in-process cache; tests call this between cases."""

    async with _local_cache_lock:
        _local_cache.clear()


def list_prefix(resource: str) -> str:
    return f"{resource}:{_LIST_SUFFIX}"


def list_key(
    resource: str,
    *,
    status: str | Sequence[str] | None = None,
    search: str | None = None,
    include_deleted: bool = False,
    limit: int | None = None,
    offset: int | None = None,
) -> str:
    """Key for one page of a resource listing, e.g. ``wrestlers:list:<digest>``."""

    if status is None:
        status_part = ""
    elif isinstance(status, str):
        status_part = status
    else:
        status_part = ",".join(sorted(status))
    parts = [
        status_part,
        (search or "").strip().lower(),
        "1" if include_deleted else "0",
        str(limit) if limit is not None else "",
        str(offset) if offset is not None else "",
    ]
    digest = sha256("|".join(parts).encode("utf-8")).hexdigest()
    return f"{list_prefix(resource)}:{digest}"


async def get_redis() -> Redis | None:
    """Return the shared Redis client, or ``None`` once Redis proved unreachable."""

    global _redis_client, _redis_disabled
    if _redis_disabled:
        logger.debug("Redis disabled after a previous failure; skipping connection attempt.")
        return None

    async with _client_lock:
        if _redis_client is not None:
            return _redis_client
        if _redis_disabled:
            return None

        client = Redis.from_url(
            get_settings().effective_redis_url, decode_responses=True, encoding="utf-8"
        )
        try:
            await client.ping()
        except _REDIS_UNAVAILABLE as exc:
            logger.warning("Redis connection failed: %s. Caching will be disabled.", exc)
            await client.aclose()
            _redis_disabled = True
            return None
        _redis_client = client
        logger.info("Redis connection established successfully")
        return _redis_client


class CacheClient:
    """JSON cache on top of Redis that turns connection failures into misses."""

    def __init__(self, redis: Redis | None) -> None:
        self._redis = redis

    @property
    def enabled(self) -> bool:
        return self._redis is not None

    async def get_json(self, key: str) -> Any:
        if self._redis is None:
            return None
        try:
            payload = await self._redis.get(key)
        except _REDIS_UNAVAILABLE as exc:
            logger.debug("Redis get failed for key %s: %s", key, exc)
            return None
        if payload is None:
            return None
        try:
            return json.loads(payload)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._redis is None:
            return
        encoded = json.dumps(value, default=str)
        try:
            await self._redis.set(key, encoded, ex=ttl or _DEFAULT_TTL_SECONDS)
        except _REDIS_UNAVAILABLE as exc:
            logger.debug("Redis set failed for key %s: %s", key, exc)

    async def delete(self, *keys: str) -> None:
        if self._redis is None or not keys:
            return
        try:
            await self._redis.delete(*keys)
        except _REDIS_UNAVAILABLE as exc:
            logger.debug("Redis delete failed: %s", exc)

    async def delete_pattern(self, pattern: str) -> None:
        if self._redis is None:
            return
        try:
            async for key in self._redis.scan_iter(match=pattern):
                await self._redis.delete(key)
        except _REDIS_UNAVAILABLE as exc:
            logger.debug("Redis delete_pattern failed for %s: %s", pattern, exc)


async def get_cache_client() -> CacheClient:
    return CacheClient(await get_redis())


async def close_redis() -> None:
    """Close the shared Redis connection and allow a fresh connection attempt."""

    global _redis_client, _redis_disabled
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
    _redis_disabled = False


async def invalidate_namespace(cache: CacheClient | None, *resources: str) -> None:
    """Forget every cached listing page of ``resources`` in both tiers."""

    prefixes = [list_prefix(resource) for resource in resources]
    if cache is not None:
        for prefix in prefixes:
            await cache.delete_pattern(f"{prefix}:*")
    await local_cache_evict(prefixes=prefixes)


__all__ = [
    "CacheClient",
    "close_redis",
    "get_cache_client",
    "get_redis",
    "invalidate_namespace",
    "list_key",
    "list_prefix",
    "local_cache_clear_all",
    "local_cache_evict",
    "local_cache_get",
    "local_cache_set",
]
