"""Rate Limit protocol (port) for fixed-window throttling.

Usage:
    result = await rate_limiter.admit(
        client_id="192.168.1.1",
        endpoint="orders",
        max_requests=5,
        window_ms=60_000,
    )
    match result:
        case Success(value=decision) if not decision.allowed:
            # Respond 429 with Retry-After: decision.retry_after_seconds
            ...
"""

from typing import Protocol

from marketguard.core.result import Result
from marketguard.domain.enums import RateLimitPolicy
from marketguard.domain.errors import RateLimitError
from marketguard.domain.value_objects.rate_limit_rule import RateLimitDecision


class RateLimitProtocol(Protocol):
    """Protocol for rate limiting.

    Fail-Open Design:
        On window store errors, implementations return
        Success(RateLimitDecision(allowed=True)). Failure is reserved for
        invalid arguments and failed resets.
    """

    async def admit(
        self,
        *,
        client_id: str,
        endpoint: str,
        max_requests: int,
        window_ms: int,
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Admit or deny one request for (client_id, endpoint).

        Returns:
            Success(RateLimitDecision) with allowed=False and a positive
            retry_after_seconds when the window is exhausted.
        """
        ...

    async def admit_policy(
        self,
        *,
        client_id: str,
        endpoint: str,
        policy: RateLimitPolicy,
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Admit using the limits configured for a named policy."""
        ...

    async def reset(
        self,
        *,
        client_id: str,
        endpoint: str,
    ) -> Result[None, RateLimitError]:
        """Drop the window for (client_id, endpoint). Does NOT fail-open."""
        ...
