"""Common caching utilities shared across service layers.

The :func:`cached` decorator adds a thin asynchronous wrapper around service
methods, providing two-tier caching (Redis + in-process) with optional
serialisation hooks.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, Concatenate, ParamSpec, TypeVar, cast

from pydantic import ValidationError

from fishlog.cache import CacheClient, local_cache_get, local_cache_set

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

CacheKeyBuilder = Callable[Concatenate["CacheableService", P], str | None]
CacheSerializer = Callable[[T], Any]
CacheDeserializer = Callable[[Any], T]
DecoratedCallable = Callable[Concatenate["CacheableService", P], Awaitable[T]]


class CacheableService:
    """Base class that exposes helper methods for two-tier caching.

    ``_cache_get`` first consults the distributed cache (when configured)
    before falling back to the in-process dictionary; ``_cache_set`` writes
    to both.
    """

    def __init__(self, cache: CacheClient | None = None) -> None:
        self._cache = cache

    async def _cache_get(self, key: str) -> Any:
        cached: Any | None = None
        if self._cache is not None:
            cached = await self._cache.get_json(key)
        if cached is not None:
            return cached
        return await local_cache_get(key)

    async def _cache_set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._cache is not None:
            await self._cache.set_json(key, value, ttl=ttl)
        if value is not None:
            await local_cache_set(key, value, ttl=ttl)


def cached(
    key_builder: CacheKeyBuilder[P],
    *,
    ttl: int | None = None,
    serializer: CacheSerializer[T] | None = None,
    deserializer: CacheDeserializer[T] | None = None,
    deserialize_error_message: str | None = None,
) -> Callable[[DecoratedCallable], DecoratedCallable]:
    """Decorate an async service method with transparent caching behaviour.

    Parameters
    ----------
    key_builder:
        Callable that returns the cache key for the invocation. Returning
        ``None`` short-circuits caching for the call.
    ttl:
        Optional cache lifetime in seconds.
    serializer / deserializer:
        Optional hooks converting between Python objects and JSON-serialisable
        payloads. A deserializer returning ``None`` counts as a cache miss.
    deserialize_error_message:
        Optional ``str.format`` template logged when a cached payload cannot be
        deserialised; the method then recomputes the value.
    """

    def decorator(func: DecoratedCallable) -> DecoratedCallable:
        @wraps(func)
        async def wrapper(self: "CacheableService", *args: P.args, **kwargs: P.kwargs) -> T:
            cache_key = key_builder(self, *args, **kwargs)
            if cache_key:
                cached_value = await self._cache_get(cache_key)
                if cached_value is not None:
                    if deserializer is None:
                        return cast(T, cached_value)
                    try:
                        restored = deserializer(cached_value)
                    except (ValidationError, TypeError, ValueError) as exc:
                        if deserialize_error_message:
                            logger.warning(
                                deserialize_error_message.format(key=cache_key, error=exc)
                            )
                    else:
                        if restored is not None:
                            return restored

            result = await func(self, *args, **kwargs)

            if cache_key and result is not None:
                payload: Any = result
                if serializer is not None:
                    payload = serializer(result)
                await self._cache_set(cache_key, payload, ttl=ttl)

            return result

        return wrapper

    return decorator


__all__ = ["CacheableService", "cached"]
