"""Bounded in-memory cache with TTL expiration and LRU eviction.

Every entry carries a monotonic insertion timestamp (used for TTL) and a
last-access timestamp (used for LRU). Expired entries are dropped lazily
on read and, when capacity is needed, before any live entry is evicted.

Three structures share one key set and are only mutated under the lock:
- _entries: key -> CacheEntry
- _recency: LRU order, least recently used first
- _expiry: insertion order, oldest first. With a single TTL for the whole
  cache, expired keys always form a prefix of this queue.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Generic, Hashable, List, Optional, TypeVar, Union

from core.errors import InvalidConfiguration

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = logging.getLogger(__name__)


class CacheMiss:
    """Result of get() for an absent or expired key. Never an error."""

    _instance: Optional["CacheMiss"] = None

    def __new__(cls) -> "CacheMiss":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISS"

    def __reduce__(self):
        return (CacheMiss, ())


MISS = CacheMiss()


@dataclass(slots=True)
class CacheEntry(Generic[K, V]):
    key: K
    value: V
    inserted_at: float  # time.monotonic()
    last_accessed_at: float  # time.monotonic()

    def age(self, now: float) -> float:
        return now - self.inserted_at


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time counters for a cache instance."""

    hits: int
    misses: int
    evictions: int
    expirations: int
    size: int
    max_size: int
    ttl_seconds: float

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_bounds(max_size: Any, ttl_seconds: Any) -> None:
    if isinstance(max_size, bool) or not isinstance(max_size, int):
        raise InvalidConfiguration(f"max_size must be an integer, got {max_size!r}")
    if max_size < 1:
        raise InvalidConfiguration(f"max_size must be >= 1, got {max_size!r}")
    if not _is_number(ttl_seconds) or math.isnan(ttl_seconds):
        raise InvalidConfiguration(f"ttl_seconds must be a number, got {ttl_seconds!r}")
    if ttl_seconds <= 0:
        raise InvalidConfiguration(f"ttl_seconds must be > 0, got {ttl_seconds!r}")


def validate_batch(max_batch: Any) -> None:
    if isinstance(max_batch, bool) or not isinstance(max_batch, int) or max_batch < 1:
        raise InvalidConfiguration(f"max_batch must be a positive integer, got {max_batch!r}")


def validate_interval(interval_seconds: Any) -> None:
    # inf would park the sweeper forever, same as nan.
    if not _is_number(interval_seconds) or not math.isfinite(interval_seconds):
        raise InvalidConfiguration(f"interval_seconds must be a finite number, got {interval_seconds!r}")
    if interval_seconds <= 0:
        raise InvalidConfiguration(f"interval_seconds must be > 0, got {interval_seconds!r}")


class BoundedTTLCache(Generic[K, V]):
    """Thread-safe key/value store bounded by entry count and entry age.

    ``size()`` counts every entry still held, including expired entries
    that no read, insert or sweep has dropped yet. Use ``key in cache`` or
    ``get`` to check liveness.

    Values are stored by reference. Store immutable values when callers
    must not observe each other's mutations.
    """

    def __init__(self, *, max_size: int, ttl_seconds: float) -> None:
        validate_bounds(max_size, ttl_seconds)
        self._max_size = int(max_size)
        self._ttl = float(ttl_seconds)

        self._entries: Dict[K, CacheEntry[K, V]] = {}
        self._recency: "OrderedDict[K, None]" = OrderedDict()
        self._expiry: "OrderedDict[K, None]" = OrderedDict()

        # One lock for all three structures; every public method is a
        # single critical section with no I/O inside.
        self._lock = threading.Lock()

        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def put(self, key: K, value: V) -> None:
        evicted: Optional[K] = None
        expired = 0
        with self._lock:
            now = time.monotonic()
            entry = self._entries.get(key)
            if entry is not None:
                # Overwrite keeps the size unchanged, so nothing is evicted.
                entry.value = value
                entry.inserted_at = now
                entry.last_accessed_at = now
                self._recency.move_to_end(key, last=True)
                self._expiry.move_to_end(key, last=True)
                return

            if len(self._entries) >= self._max_size:
                expired = self._purge_expired_locked(now, limit=None)
                if expired == 0:
                    evicted = self._evict_lru_locked()

            self._entries[key] = CacheEntry(key=key, value=value, inserted_at=now, last_accessed_at=now)
            self._recency[key] = None
            self._expiry[key] = None

        if expired:
            logger.debug("Purged %d expired entries to make room for %r", expired, key)
        if evicted is not None:
            logger.debug("Evicted least recently used key %r", evicted)

    def get(self, key: K, default: Any = MISS) -> Union[V, Any]:
        """Return the live value for key, or ``default`` (MISS) otherwise."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return default

            now = time.monotonic()
            if entry.age(now) >= self._ttl:
                self._discard_locked(key)
                self._expirations += 1
                self._misses += 1
                return default

            entry.last_accessed_at = now
            self._recency.move_to_end(key, last=True)
            self._hits += 1
            return entry.value

    def remove(self, key: K) -> bool:
        with self._lock:
            if key not in self._entries:
                return False
            self._discard_locked(key)
            return True

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        # Liveness check only: no promotion, no purge, no stats.
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and entry.age(time.monotonic()) < self._ttl

    def keys(self) -> List[K]:
        """Snapshot of held keys, least recently used first."""
        with self._lock:
            return list(self._recency)

    def clear(self) -> int:
        """Drop every entry and return how many were held."""
        with self._lock:
            cleared = len(self._entries)
            self._entries.clear()
            self._recency.clear()
            self._expiry.clear()
        return cleared

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were dropped."""
        with self._lock:
            removed = self._purge_expired_locked(time.monotonic(), limit=None)
        if removed:
            logger.debug("Purged %d expired entries", removed)
        return removed

    def sweep(self, max_batch: int) -> int:
        """Drop at most max_batch expired entries under one lock hold."""
        validate_batch(max_batch)
        with self._lock:
            return self._purge_expired_locked(time.monotonic(), limit=max_batch)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                expirations=self._expirations,
                size=len(self._entries),
                max_size=self._max_size,
                ttl_seconds=self._ttl,
            )

    # Helpers below expect the caller to hold self._lock.

    def _discard_locked(self, key: K) -> None:
        del self._entries[key]
        del self._recency[key]
        del self._expiry[key]

    def _evict_lru_locked(self) -> K:
        key = next(iter(self._recency))
        self._discard_locked(key)
        self._evictions += 1
        return key

    def _purge_expired_locked(self, now: float, *, limit: Optional[int]) -> int:
        removed = 0
        while self._expiry and (limit is None or removed < limit):
            oldest = next(iter(self._expiry))
            if self._entries[oldest].age(now) < self._ttl:
                break
            self._discard_locked(oldest)
            removed += 1
        self._expirations += removed
        return removed
