"""
SingleFlightCache - Async memoizing cache with TTL and request coalescing.

Features:
- Memory-based cache keyed by opaque strings
- TTL (Time To Live) per entry, zero or negative TTL means "never store"
- At most one in-flight production per key, shared by all waiters
- Failures are propagated to every waiter and never cached
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Generic, TypeVar

from loguru import logger

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A single cache entry with its absolute expiry."""

    data: T
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check if entry is past its TTL."""
        return now > self.expires_at


class SingleFlightCache:
    """
    Concurrency-safe memoizing cache.

    Usage:
        cache = SingleFlightCache()

        payload = await cache.get_or_add(
            key=url,
            producer=lambda: client.fetch_rest(url),
            ttl=timedelta(seconds=60),
        )

    Concurrent callers asking for the same key while a production is in
    flight await that production instead of starting their own.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        debug: bool = False,
    ):
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._in_flight: dict[str, asyncio.Task[Any]] = {}
        self._clock = clock
        self._debug = debug
        self._lock = asyncio.Lock()
        self._stats = CacheStats()

    async def get_or_add(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl: timedelta,
    ) -> T:
        """
        Return the cached value for ``key`` or produce it exactly once.

        Args:
            key: Cache key
            producer: Async function producing the value on a miss
            ttl: Lifetime of a successfully produced value

        Returns:
            The cached value, or the result of the (possibly shared) production

        Raises:
            Whatever ``producer`` raised, unchanged, to every waiter
        """
        async with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if not entry.is_expired(self._clock()):
                    self._stats.hits += 1
                    self._log(f"HIT: {key[:50]}...")
                    return entry.data
                del self._entries[key]
                self._log(f"EXPIRED: {key[:50]}...")

            task = self._in_flight.get(key)
            if task is not None:
                self._stats.coalesced += 1
                self._log(f"COALESCE: Waiting for in-flight production: {key[:50]}...")
            else:
                self._stats.misses += 1
                self._stats.productions += 1
                self._log(f"MISS: Starting production: {key[:50]}...")
                task = asyncio.create_task(self._produce(key, producer, ttl))
                self._in_flight[key] = task

        # A cancelled waiter must not cancel the shared production
        return await asyncio.shield(task)

    async def _produce(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl: timedelta,
    ) -> T:
        """Run the producer, then store the value and drop the in-flight marker."""
        try:
            data = await producer()
        except BaseException:
            async with self._lock:
                self._in_flight.pop(key, None)
                self._stats.failures += 1
                self._log(f"FAILED: {key[:50]}...")
            raise

        async with self._lock:
            if ttl > timedelta(0):
                self._entries[key] = CacheEntry(data=data, expires_at=self._clock() + ttl)
                self._log(f"SET: {key[:50]}... (TTL: {ttl.total_seconds()}s)")
            else:
                self._log(f"SKIP: {key[:50]}... (TTL: {ttl.total_seconds()}s)")
            self._in_flight.pop(key, None)
        return data

    async def get(self, key: str) -> Any | None:
        """Return a live cached value without producing, or None."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.is_expired(self._clock()):
                return None
            return entry.data

    async def delete(self, key: str) -> bool:
        """Delete a specific key from cache."""
        async with self._lock:
            if key in self._entries:
                del self._entries[key]
                self._log(f"DELETE: {key[:50]}...")
                return True
            return False

    async def clear(self) -> None:
        """Clear all cache entries. In-flight productions are left to finish."""
        async with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._log(f"CLEAR: {count} entries removed")

    async def cleanup_expired(self) -> int:
        """Remove all expired entries. Returns count of removed entries."""
        async with self._lock:
            now = self._clock()
            expired_keys = [k for k, v in self._entries.items() if v.is_expired(now)]
            for key in expired_keys:
                del self._entries[key]

            if expired_keys:
                self._log(f"CLEANUP: {len(expired_keys)} expired entries removed")

            return len(expired_keys)

    def get_in_flight_count(self) -> int:
        """Get number of in-flight productions."""
        return len(self._in_flight)

    def get_stats(self) -> "CacheStats":
        """Get cache statistics."""
        self._stats.size = len(self._entries)
        self._stats.in_flight = len(self._in_flight)
        return self._stats

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[SingleFlightCache] {message}")


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    productions: int = 0
    failures: int = 0
    size: int = 0
    in_flight: int = 0

    @property
    def hit_rate(self) -> float:
        """Share of lookups answered without a new production."""
        total = self.hits + self.coalesced + self.misses
        if total == 0:
            return 0.0
        return (self.hits + self.coalesced) / total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "coalesced": self.coalesced,
            "productions": self.productions,
            "failures": self.failures,
            "size": self.size,
            "in_flight": self.in_flight,
            "hit_rate": f"{self.hit_rate:.2%}",
        }
