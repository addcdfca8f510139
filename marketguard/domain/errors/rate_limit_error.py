"""Rate limiter failures.

A denied request is a Success(RateLimitDecision(allowed=False)), never a
RateLimitError. Window store outages during admit() fail open and are only
logged. What remains:

    INVALID_RATE_LIMIT_RULE   non-positive max_requests or window_ms
    RATE_LIMIT_RESET_FAILED   reset() could not delete the window
"""

from dataclasses import dataclass

from marketguard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitError(DomainError):
    """Rate limiter configuration or admin failure."""
