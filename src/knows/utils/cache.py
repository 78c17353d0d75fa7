"""Caching utilities for evidence detail lookups."""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the clock reading after which it is stale."""

    value: Any
    expires_at: float


class DetailCache:
    """Bounded in-memory cache with TTL and insertion-order eviction.

    When full, the key inserted first is evicted. Overwriting an existing key
    refreshes its value and expiry but keeps its original position, so eviction
    order is FIFO by first insertion, not LRU.

    All operations hold a single lock and never perform I/O, so the cache is
    safe to share between batch workers and threads.
    """

    def __init__(
        self,
        ttl: float,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize detail cache.

        Args:
            ttl: Time-to-live in seconds
            max_entries: Capacity; zero or less disables caching
            clock: Monotonic time source, injectable for tests
        """
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def make_key(kind: str, evidence_id: str, flag: bool = False) -> str:
        """Build a cache key from the lookup parameters that affect the result."""
        return f"{kind}:{evidence_id}:{'true' if flag else 'false'}"

    @property
    def enabled(self) -> bool:
        return self.max_entries > 0

    def get(self, key: str) -> tuple[Any, bool]:
        """Get value from cache.

        Returns:
            (value, found) - value is None when not found
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache miss", key=key)
                return None, False

            if self._clock() > entry.expires_at:
                del self._entries[key]
                logger.debug("Cache entry expired", key=key)
                return None, False

        logger.debug("Cache hit", key=key)
        return entry.value, True

    def set(self, key: str, value: Any) -> None:
        """Set value in cache."""
        if not self.enabled:
            return

        with self._lock:
            if key not in self._entries:
                while len(self._entries) >= self.max_entries:
                    oldest, _ = self._entries.popitem(last=False)
                    logger.debug("Cache evicted", key=oldest)

            # Assigning to an existing OrderedDict key keeps its position
            self._entries[key] = CacheEntry(
                value=value,
                expires_at=self._clock() + self.ttl,
            )

        logger.debug("Cache set", key=key, ttl=self.ttl)

    def clear(self) -> None:
        """Clear all cached values."""
        with self._lock:
            self._entries.clear()
        logger.debug("Cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
