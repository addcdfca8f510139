"""Rate limit value objects for fixed-window throttling.

Fixed Window Algorithm:
    - First request for a key opens a window (count=1, window_start=now)
    - Each admitted request increments the count
    - Once count reaches max_requests, further requests are denied
    - The first request arriving more than window_ms after window_start
      replaces the window wholesale

Boundary bursts (up to 2x max_requests across a window edge) are accepted:
the algorithm needs O(1) memory and O(1) time per key.

Usage:
    from marketguard.domain.value_objects import RateLimitRule

    rule = RateLimitRule(max_requests=5, window_ms=60_000)
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitRule:
    """Rate limit rule configuration (value object).

    Attributes:
        max_requests: Requests admitted per window.
        window_ms: Window length in milliseconds.
        enabled: Disabled rules always admit.

    Raises:
        ValueError: If max_requests <= 0 or window_ms <= 0.
    """

    max_requests: int
    window_ms: int
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate rule configuration after initialization.

        Raises:
            ValueError: If any numeric field is invalid.
        """
        if self.max_requests <= 0:
            raise ValueError(f"max_requests must be positive, got {self.max_requests}")
        if self.window_ms <= 0:
            raise ValueError(f"window_ms must be positive, got {self.window_ms}")

    @property
    def window_seconds(self) -> float:
        """Window length in seconds."""
        return self.window_ms / 1000.0


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitWindow:
    """Counter state for one (client identifier, endpoint) key.

    Ephemeral and process-wide; never persisted. Replaced wholesale rather
    than mutated so a store can swap entries atomically.

    Attributes:
        count: Requests admitted in this window.
        window_start_ms: Epoch milliseconds when the window opened.
        window_ms: Window length the entry was opened with (used for eviction).
    """

    count: int
    window_start_ms: float
    window_ms: int

    def elapsed_ms(self, now_ms: float) -> float:
        """Milliseconds since the window opened."""
        return now_ms - self.window_start_ms

    def is_expired(self, now_ms: float, window_ms: int | None = None) -> bool:
        """Whether more than the window length has passed since window_start.

        Args:
            now_ms: Current epoch milliseconds.
            window_ms: Override window length (defaults to the entry's own).
        """
        length = self.window_ms if window_ms is None else window_ms
        return self.elapsed_ms(now_ms) > length

    def retry_after_seconds(self, now_ms: float, window_ms: int | None = None) -> int:
        """Whole seconds until this window resets, never less than 1.

        ceil((window_ms - elapsed) / 1000), floored at 1 so a denial always
        carries a positive Retry-After.
        """
        length = self.window_ms if window_ms is None else window_ms
        remaining_ms = length - self.elapsed_ms(now_ms)
        return max(1, math.ceil(remaining_ms / 1000))


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitDecision:
    """Result of an admit() check.

    Attributes:
        allowed: Whether the request is admitted.
        retry_after_seconds: Seconds until retry allowed (0 when allowed,
            always >= 1 when denied).
        count: Requests counted in the current window after this check.
        limit: Configured maximum for the window (0 when no limit applied).
        window_ms: Window length applied (0 when no limit applied).
    """

    allowed: bool
    retry_after_seconds: int = 0
    count: int = 0
    limit: int = 0
    window_ms: int = 0

    @property
    def remaining(self) -> int:
        """Requests left in the current window."""
        return max(0, self.limit - self.count)
