"""Two-tier caching shared by the roster services.

The :func:`cached` decorator wraps an async service method: it consults Redis
through :class:`ringside.cache.CacheClient` first, then the in-process cache
in :mod:`ringside.cache`, and stores fresh results in both.  Mutations evict
through :func:`ringside.cache.invalidate_namespace`, which reaches the same two
tiers.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, Concatenate, ParamSpec, TypeVar, cast

from ringside.cache import CacheClient, local_cache_get, local_cache_set

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

CacheKeyBuilder = Callable[Concatenate["CacheableService", P], str | None]
CacheSerializer = Callable[[T], Any]
CacheDeserializer = Callable[[Any], T]
DecoratedCallable = Callable[Concatenate["CacheableService", P], Awaitable[T]]


class CacheableService:
    """Mixin giving services ``_cache_get``/``_cache_set`` over both tiers."""

    def __init__(self, cache: CacheClient | None = None) -> None:
        self._cache = cache

    async def _cache_get(self, key: str) -> Any:
        value: Any | None = None
        if self._cache is not None:
            value = await self._cache.get_json(key)
        if value is not None:
            return value
        return await local_cache_get(key)

    async def _cache_set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._cache is not None:
            await self._cache.set_json(key, value, ttl=ttl)
        if value is not None:
            await local_cache_set(key, value, ttl=ttl)


def cached(
    key_builder: CacheKeyBuilder[P],
    *,
    ttl: int | Callable[["CacheableService"], int | None] | None = None,
    serializer: CacheSerializer[T] | None = None,
    deserializer: CacheDeserializer[T] | None = None,
) -> Callable[[DecoratedCallable], DecoratedCallable]:
    """Decorate an async service method with read-through caching.

    Parameters
    ----------
    key_builder:
        Returns the cache key for the call; ``None`` bypasses the cache.
    ttl:
        Lifetime in seconds, or a callable receiving the service so the value
        can come from settings at call time.
    serializer / deserializer:
        Convert between the method's return value and a JSON-friendly payload.
    """

    def decorator(func: DecoratedCallable) -> DecoratedCallable:
        @wraps(func)
        async def wrapper(self: CacheableService, *args: P.args, **kwargs: P.kwargs) -> T:
            cache_key = key_builder(self, *args, **kwargs)
            if cache_key:
                cached_value = await self._cache_get(cache_key)
                if cached_value is not None:
                    if deserializer is None:
                        return cast(T, cached_value)
                    try:
                        return deserializer(cached_value)
                    except ValueError as exc:
                        logger.warning("Ignoring stale cache entry %s: %s", cache_key, exc)

            result = await func(self, *args, **kwargs)

            if cache_key and result is not None:
                payload: Any = serializer(result) if serializer is not None else result
                lifetime = ttl(self) if callable(ttl) else ttl
                await self._cache_set(cache_key, payload, ttl=lifetime)
            return result

        return wrapper

    return decorator


__all__ = ["CacheableService", "cached"]
