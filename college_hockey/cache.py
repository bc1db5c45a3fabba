# college_hockey/cache.py
"""
Simple in-memory TTL cache.

This is per-process cache. If you run multiple gunicorn workers, each worker has its own cache.
Writes are last-write-wins; there is no locking.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A single cached value and the timestamp after which it is stale."""
    expires_at: float
    value: Optional[T]


class TTLCache:
    """A small key/value TTL cache with lazy loading."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        """Initialize an empty cache store."""
        self._store: dict[str, CacheEntry] = {}
        self._clock = clock

    def get(self, key: str) -> Optional[T]:
        """Return a live cached value, or None when missing/expired."""
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._store.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: T, ttl_seconds: int) -> None:
        """Store a value that expires ttl_seconds from now, dropping expired entries first."""
        self.cleanup()
        self._store[key] = CacheEntry(expires_at=self._clock() + ttl_seconds, value=value)

    def get_or_set(self, key: str, ttl_seconds: int, loader: Callable[[], T]) -> T:
        """
        Retrieve a cached value if not expired, otherwise compute & store a new value.

        Args:
            key: Cache key.
            ttl_seconds: Time-to-live for the entry.
            loader: Function that returns the value if the cache is stale/missing.

        Returns:
            The cached or newly loaded value. None results are returned but not stored.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        value = loader()
        if value is not None:
            self.set(key, value, ttl_seconds)
        return value

    def cleanup(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        stale = [k for k, e in self._store.items() if now >= e.expires_at]
        for k in stale:
            del self._store[k]
        return len(stale)

    def __len__(self) -> int:
        return len(self._store)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._store.clear()
