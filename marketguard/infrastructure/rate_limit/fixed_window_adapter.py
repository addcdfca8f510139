"""Fixed-window adapter implementing RateLimitProtocol.

This adapter coordinates between:
- WindowStoreProtocol: per-key counters and locks
- Policy rules: RateLimitPolicy -> RateLimitRule mapping
- SecurityAuditRecorder: violation upsert and security event on denial
- Logger: structured logging

Architecture:
    Domain Protocol <- FixedWindowRateLimiter -> WindowStoreProtocol

Fail-Open Design:
    Window store errors admit the request (logged at error level).
    Rate limit failures should NEVER cause denial-of-service. Invalid
    limits and failed resets are reported as Failure(RateLimitError).

Usage:
    from marketguard.core.container import get_rate_limiter

    result = await get_rate_limiter().admit(
        client_id="192.168.1.1",
        endpoint="orders",
        max_requests=5,
        window_ms=60_000,
    )
"""

from __future__ import annotations

from collections.abc import Callable
from time import time
from typing import TYPE_CHECKING

from marketguard.core.enums import ErrorCode
from marketguard.core.result import Failure, Result, Success
from marketguard.domain.entities import SecurityEvent
from marketguard.domain.enums import IncidentType, RateLimitPolicy, Severity
from marketguard.domain.errors import RateLimitError
from marketguard.domain.value_objects.rate_limit_rule import (
    RateLimitDecision,
    RateLimitRule,
    RateLimitWindow,
)

if TYPE_CHECKING:
    from marketguard.domain.protocols import LoggerProtocol, WindowStoreProtocol
    from marketguard.infrastructure.audit.audit_recorder import SecurityAuditRecorder


def _epoch_ms() -> float:
    return time() * 1000


class FixedWindowRateLimiter:
    """Fixed-window rate limiter implementing RateLimitProtocol.

    Args:
        store: Window storage (shared across all endpoints).
        logger: Structured logger.
        policies: Rules for admit_policy().
        recorder: Audit recorder; denials are only logged when omitted.
        clock: Returns current epoch milliseconds (injectable for tests).
    """

    def __init__(
        self,
        *,
        store: WindowStoreProtocol,
        logger: LoggerProtocol,
        policies: dict[RateLimitPolicy, RateLimitRule] | None = None,
        recorder: SecurityAuditRecorder | None = None,
        clock: Callable[[], float] = _epoch_ms,
    ) -> None:
        self._store = store
        self._logger = logger
        self._policies = policies or {}
        self._recorder = recorder
        self._clock = clock

    # -------------------------------------------------------------------------
    # RateLimitProtocol implementation
    # -------------------------------------------------------------------------
    async def admit(
        self,
        *,
        client_id: str,
        endpoint: str,
        max_requests: int,
        window_ms: int,
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Admit or deny one request for (client_id, endpoint).

        Args:
            client_id: Client identifier (usually the IP address).
            endpoint: Endpoint or endpoint group being throttled.
            max_requests: Requests admitted per window (must be positive).
            window_ms: Window length in milliseconds (must be positive).

        Returns:
            Result[RateLimitDecision, RateLimitError]:
                - Success(decision) for both admit and deny
                - Failure only for non-positive limits

        Fail-Open:
            On window store errors, returns Success(allowed=True).
        """
        if max_requests <= 0 or window_ms <= 0:
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.INVALID_RATE_LIMIT_RULE,
                    message=(
                        "max_requests and window_ms must be positive, got "
                        f"{max_requests} and {window_ms}"
                    ),
                    details={"endpoint": endpoint},
                )
            )

        key = self._build_key(client_id=client_id, endpoint=endpoint)
        now_ms = self._clock()

        try:
            await self._store.evict_expired(now_ms)
            async with self._store.lock(key):
                decision = await self._count_request(
                    key=key,
                    now_ms=now_ms,
                    max_requests=max_requests,
                    window_ms=window_ms,
                )
        except Exception as exc:  # Fail-open
            self._logger.error(
                "Rate limit window store error - allowing request",
                error=exc,
                endpoint=endpoint,
                client_id=client_id,
            )
            return Success(
                value=RateLimitDecision(
                    allowed=True, limit=max_requests, window_ms=window_ms
                )
            )

        if decision.allowed:
            self._logger.debug(
                "Rate limit check allowed",
                endpoint=endpoint,
                client_id=client_id,
                count=decision.count,
                limit=max_requests,
            )
        else:
            await self._record_denial(
                client_id=client_id, endpoint=endpoint, decision=decision
            )

        return Success(value=decision)

    async def admit_policy(
        self,
        *,
        client_id: str,
        endpoint: str,
        policy: RateLimitPolicy,
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Admit using the rule configured for a named policy.

        Unknown policies and disabled rules admit the request.
        """
        rule = self._policies.get(policy)
        if rule is None:
            self._logger.debug(
                "Rate limit policy not configured",
                policy=policy.value,
                endpoint=endpoint,
            )
            return Success(value=RateLimitDecision(allowed=True))

        if not rule.enabled:
            return Success(
                value=RateLimitDecision(
                    allowed=True, limit=rule.max_requests, window_ms=rule.window_ms
                )
            )

        return await self.admit(
            client_id=client_id,
            endpoint=endpoint,
            max_requests=rule.max_requests,
            window_ms=rule.window_ms,
        )

    async def reset(
        self,
        *,
        client_id: str,
        endpoint: str,
    ) -> Result[None, RateLimitError]:
        """Drop the window for (client_id, endpoint).

        Unlike admit, this method does NOT fail-open.
        Admin operations should know if they succeeded or failed.
        """
        key = self._build_key(client_id=client_id, endpoint=endpoint)
        try:
            async with self._store.lock(key):
                await self._store.delete(key)
        except Exception as exc:
            self._logger.error(
                "Rate limit reset failed",
                error=exc,
                endpoint=endpoint,
                client_id=client_id,
            )
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_RESET_FAILED,
                    message=f"Failed to reset rate limit window: {exc}",
                    details={"endpoint": endpoint, "client_id": client_id},
                )
            )

        self._logger.info(
            "Rate limit reset",
            endpoint=endpoint,
            client_id=client_id,
        )
        return Success(value=None)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------
    async def _count_request(
        self,
        *,
        key: str,
        now_ms: float,
        max_requests: int,
        window_ms: int,
    ) -> RateLimitDecision:
        """Read-modify-write of one window. Caller holds the key's lock."""
        window = await self._store.get(key)

        if window is None or window.is_expired(now_ms, window_ms):
            await self._store.set(
                key,
                RateLimitWindow(count=1, window_start_ms=now_ms, window_ms=window_ms),
            )
            return RateLimitDecision(
                allowed=True, count=1, limit=max_requests, window_ms=window_ms
            )

        if window.count >= max_requests:
            # Denied requests are not counted
            return RateLimitDecision(
                allowed=False,
                retry_after_seconds=window.retry_after_seconds(now_ms, window_ms),
                count=window.count,
                limit=max_requests,
                window_ms=window_ms,
            )

        count = window.count + 1
        await self._store.set(
            key,
            RateLimitWindow(
                count=count,
                window_start_ms=window.window_start_ms,
                window_ms=window_ms,
            ),
        )
        return RateLimitDecision(
            allowed=True, count=count, limit=max_requests, window_ms=window_ms
        )

    async def _record_denial(
        self,
        *,
        client_id: str,
        endpoint: str,
        decision: RateLimitDecision,
    ) -> None:
        self._logger.warning(
            "Rate limit exceeded",
            endpoint=endpoint,
            client_id=client_id,
            count=decision.count,
            limit=decision.limit,
            retry_after=decision.retry_after_seconds,
        )
        if self._recorder is None:
            return

        await self._recorder.record_rate_limit_violation(
            client_id, endpoint, decision.count
        )
        await self._recorder.record_event(
            SecurityEvent(
                incident_type=IncidentType.RATE_LIMIT_EXCEEDED,
                severity=Severity.MEDIUM,
                ip_address=client_id,
                request_path=endpoint,
                is_blocked=True,
                response_status=429,
                description=f"Rate limit exceeded for endpoint {endpoint}",
                metadata={
                    "endpoint": endpoint,
                    "request_count": decision.count,
                    "max_requests": decision.limit,
                    "retry_after_seconds": decision.retry_after_seconds,
                },
            )
        )

    @staticmethod
    def _build_key(*, client_id: str, endpoint: str) -> str:
        """Build the window store key for (client_id, endpoint)."""
        return f"ratelimit:{endpoint}:{client_id}"
