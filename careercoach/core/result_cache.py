"""
Result Cache for CareerCoach

In-process cache of finished results, keyed by profile fingerprint.

Each result kind has its own size cap and two TTLs:
- write TTL: an entry expires this long after it was stored
- access TTL: an entry expires this long after it was last read

get_or_compute() is read-through with at most one computation in flight
per key: concurrent misses await the first computation instead of
starting their own. Failed computations are never cached.
"""

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class CacheKind(str, Enum):
    INTERVIEW_QUESTIONS = "interview_questions"
    LEARNING_PATHS = "learning_paths"
    AI_RESPONSES = "ai_responses"


@dataclass(frozen=True)
class CachePolicy:
    max_size: int
    write_ttl: float
    access_ttl: float


DEFAULT_POLICIES = {
    CacheKind.INTERVIEW_QUESTIONS: CachePolicy(max_size=500, write_ttl=3600, access_ttl=1800),
    CacheKind.LEARNING_PATHS: CachePolicy(max_size=200, write_ttl=7200, access_ttl=3600),
    CacheKind.AI_RESPONSES: CachePolicy(max_size=300, write_ttl=2700, access_ttl=1200),
}


@dataclass
class CacheEntry:
    key: str
    value: Any
    written_at: float
    accessed_at: float


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0


@dataclass
class _Region:
    policy: CachePolicy
    entries: OrderedDict = field(default_factory=OrderedDict)
    stats: CacheStats = field(default_factory=CacheStats)


class ResultCache:
    """
    LRU + TTL cache with one region per result kind.

    Usage:
        cache = ResultCache()
        value = await cache.get_or_compute(
            CacheKind.LEARNING_PATHS, "orchestrated:" + fingerprint, factory
        )
    """

    def __init__(
        self,
        policies: dict[CacheKind, CachePolicy] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.clock = clock
        merged = dict(DEFAULT_POLICIES)
        merged.update(policies or {})
        self._regions = {kind: _Region(policy) for kind, policy in merged.items()}
        self._lock = asyncio.Lock()
        self._in_flight: dict[tuple[CacheKind, str], asyncio.Future] = {}

    # =========================================================================
    # SYNCHRONOUS ACCESS
    # =========================================================================

    def _expired(self, entry: CacheEntry, policy: CachePolicy, now: float) -> bool:
        return (
            now - entry.written_at >= policy.write_ttl
            or now - entry.accessed_at >= policy.access_ttl
        )

    def get(self, kind: CacheKind, key: str) -> Any | None:
        """Return a live entry's value, or None. Refreshes recency."""
        region = self._regions[kind]
        entry = region.entries.get(key)
        now = self.clock()

        if entry is None:
            region.stats.misses += 1
            return None

        if self._expired(entry, region.policy, now):
            del region.entries[key]
            region.stats.evictions += 1
            region.stats.misses += 1
            return None

        entry.accessed_at = now
        region.entries.move_to_end(key)
        region.stats.hits += 1
        return entry.value

    def put(self, kind: CacheKind, key: str, value: Any) -> None:
        region = self._regions[kind]
        now = self.clock()
        region.entries[key] = CacheEntry(key=key, value=value, written_at=now, accessed_at=now)
        region.entries.move_to_end(key)

        while len(region.entries) > region.policy.max_size:
            evicted, _ = region.entries.popitem(last=False)
            region.stats.evictions += 1
            logger.debug(f"Evicted {kind.value} entry {evicted[:12]}")

    def discard(self, kind: CacheKind, key: str) -> bool:
        """Drop one entry. Returns whether it was present."""
        return self._regions[kind].entries.pop(key, None) is not None

    def invalidate(self, fingerprint: str) -> int:
        """
        Drop every entry whose key contains the fingerprint, in all kinds.

        Returns:
            Number of entries removed
        """
        removed = 0
        for region in self._regions.values():
            for key in [k for k in region.entries if fingerprint in k]:
                del region.entries[key]
                removed += 1
        if removed:
            logger.info(f"Invalidated {removed} cached result(s) for profile {fingerprint[:12]}")
        return removed

    def stats(self) -> dict[str, CacheStats]:
        result = {}
        for kind, region in self._regions.items():
            region.stats.size = len(region.entries)
            result[kind.value] = region.stats
        return result

    # =========================================================================
    # READ-THROUGH
    # =========================================================================

    async def get_or_compute(
        self,
        kind: CacheKind,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        should_cache: Callable[[Any], bool] | None = None,
    ) -> Any:
        """
        Return the cached value or compute, store and return it.

        Only one factory call runs per key at a time; concurrent callers
        for the same key wait for it and receive its result or exception.

        Args:
            kind: Result kind (selects size cap and TTLs)
            key: Cache key, normally containing the profile fingerprint
            factory: Coroutine function computing the value on a miss
            should_cache: Optional predicate; values it rejects are returned
                to every waiter but not stored
        """
        flight_key = (kind, key)

        async with self._lock:
            value = self.get(kind, key)
            if value is not None:
                return value

            pending = self._in_flight.get(flight_key)
            owner = pending is None
            if owner:
                pending = asyncio.get_running_loop().create_future()
                self._in_flight[flight_key] = pending

        if not owner:
            return await asyncio.shield(pending)

        try:
            value = await factory()
        except asyncio.CancelledError:
            pending.cancel()
            raise
        except Exception as e:
            pending.set_exception(e)
            # Mark retrieved so an unobserved failure is not reported at GC
            pending.exception()
            raise
        else:
            if should_cache is None or should_cache(value):
                self.put(kind, key, value)
            pending.set_result(value)
            return value
        finally:
            async with self._lock:
                self._in_flight.pop(flight_key, None)
