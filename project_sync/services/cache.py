"""Cache backends for project snapshots."""

import fnmatch
import json
import logging
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Callable, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger("cache")


class CacheBackend(ABC):
    """Key/value cache with per-entry TTL and wildcard deletion."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value or None."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""

    @abstractmethod
    async def delete(self, key: str) -> int:
        """Delete a key or every key matching a ``*`` pattern.

        Returns:
            The number of entries removed.
        """

    async def close(self) -> None:
        """Release resources held by the backend."""
        return None


class NullCache(CacheBackend):
    """Cache that stores nothing."""

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        return None

    async def delete(self, key: str) -> int:
        return 0


class MemoryCache(CacheBackend):
    """Bounded in-process cache.

    Expired entries are purged on every write as well as on read, and the
    least recently used entry is evicted once ``max_entries`` is reached.
    """

    def __init__(
        self,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic
    ):
        """Initialize the cache.

        Args:
            max_entries: Maximum number of live entries.
            clock: Monotonic time source in seconds.
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return value

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._purge_expired()
        self._entries[key] = (self._clock() + ttl_seconds, value)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cache entry %s", evicted)

    async def delete(self, key: str) -> int:
        if "*" not in key:
            return 1 if self._entries.pop(key, None) is not None else 0

        matched = [k for k in self._entries if fnmatch.fnmatchcase(k, key)]
        for k in matched:
            del self._entries[k]
        return len(matched)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]


class RedisCache(CacheBackend):
    """Cache shared through Redis.

    Values are stored as JSON text with ``SETEX``. Redis failures are logged
    and treated as cache misses so reads fall through to the database.
    """

    def __init__(self, client: aioredis.Redis, scan_count: int = 100):
        """Initialize the cache.

        Args:
            client: Redis client created with ``decode_responses=True``.
            scan_count: ``COUNT`` hint for pattern scans.
        """
        self._client = client
        self.scan_count = scan_count

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        """Create a cache connected to ``url``."""
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            logger.warning("Cache get failed for %s: %s", key, e)
            return None
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            await self._client.setex(key, ttl_seconds, json.dumps(value))
        except RedisError as e:
            logger.warning("Cache set failed for %s: %s", key, e)

    async def delete(self, key: str) -> int:
        try:
            if "*" not in key:
                return await self._client.delete(key)
            keys = [
                k async for k in self._client.scan_iter(match=key, count=self.scan_count)
            ]
            if not keys:
                return 0
            return await self._client.delete(*keys)
        except RedisError as e:
            logger.warning("Cache delete failed for %s: %s", key, e)
            return 0

    async def close(self) -> None:
        await self._client.aclose()


def create_cache(
    backend: str,
    max_entries: int = 256,
    redis_url: Optional[str] = None
) -> CacheBackend:
    """Build the cache backend selected in settings.

    Args:
        backend: ``memory``, ``redis`` or ``none``.
        max_entries: Bound for the memory backend.
        redis_url: Connection URL for the redis backend.

    Returns:
        The cache backend.
    """
    if backend == "memory":
        return MemoryCache(max_entries=max_entries)
    if backend == "redis":
        if not redis_url:
            raise ValueError("redis_url is required for the redis cache backend")
        return RedisCache.from_url(redis_url)
    if backend == "none":
        return NullCache()
    raise ValueError(f"Unknown cache backend: {backend}")
