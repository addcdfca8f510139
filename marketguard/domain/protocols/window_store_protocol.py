"""Window store protocol (port) for fixed-window rate limiting.

The window store is the only shared mutable state in the engine. Keeping
it behind this protocol lets a single-node in-memory store and an external
counter store be swapped without touching the rate limiter's logic.

Atomicity:
    The limiter performs read-modify-write under lock(key). Implementations
    MUST serialize holders of the same key's lock; different keys may
    proceed concurrently.

Usage:
    async with store.lock(key):
        window = await store.get(key)
        ...
        await store.set(key, RateLimitWindow(...))
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from marketguard.domain.value_objects.rate_limit_rule import RateLimitWindow


class WindowStoreProtocol(Protocol):
    """Storage for (client identifier, endpoint) rate limit windows."""

    def lock(self, key: str) -> AbstractAsyncContextManager[None]:
        """Return an async context manager serializing access to one key."""
        ...

    async def get(self, key: str) -> RateLimitWindow | None:
        """Return the stored window for key, or None if there is none."""
        ...

    async def set(self, key: str, window: RateLimitWindow) -> None:
        """Store (replace) the window for key."""
        ...

    async def delete(self, key: str) -> None:
        """Remove the window for key. Missing keys are ignored."""
        ...

    async def evict_expired(self, now_ms: float) -> int:
        """Drop every window whose own length has elapsed.

        Args:
            now_ms: Current epoch milliseconds.

        Returns:
            Number of evicted windows.
        """
        ...
