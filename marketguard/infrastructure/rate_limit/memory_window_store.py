"""In-memory window store for fixed-window rate limiting.

Single-process only: each worker keeps its own counters. Running several
workers behind a load balancer multiplies the effective limit by the number
of workers; a shared external store would be needed to avoid that.

Locking:
    One asyncio.Lock per key. Locks are created lazily and dropped together
    with their window on delete() or eviction, unless a coroutine currently
    holds or waits on them.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from marketguard.domain.value_objects.rate_limit_rule import RateLimitWindow


class MemoryWindowStore:
    """Process-local WindowStoreProtocol implementation."""

    def __init__(self) -> None:
        self._windows: dict[str, RateLimitWindow] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._windows)

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        """Serialize read-modify-write for one key."""
        key_lock = self._locks.get(key)
        if key_lock is None:
            key_lock = asyncio.Lock()
            self._locks[key] = key_lock
        async with key_lock:
            yield

    async def get(self, key: str) -> RateLimitWindow | None:
        return self._windows.get(key)

    async def set(self, key: str, window: RateLimitWindow) -> None:
        self._windows[key] = window

    async def delete(self, key: str) -> None:
        self._windows.pop(key, None)
        self._drop_idle_lock(key)

    async def evict_expired(self, now_ms: float) -> int:
        """Drop every window whose own length has elapsed.

        Each entry is judged against the window length it was opened with,
        so keys throttled by different policies expire independently.
        """
        expired = [
            key for key, window in self._windows.items() if window.is_expired(now_ms)
        ]
        for key in expired:
            del self._windows[key]
            self._drop_idle_lock(key)
        return len(expired)

    def _drop_idle_lock(self, key: str) -> None:
        key_lock = self._locks.get(key)
        if key_lock is not None and not key_lock.locked():
            del self._locks[key]
