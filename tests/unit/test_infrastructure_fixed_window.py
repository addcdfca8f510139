"""Unit tests for FixedWindowRateLimiter.

Tests cover:
- Admission up to max_requests, denial of the next request
- Window reset after window_ms
- Retry-After always positive on denial
- Violation upsert and security event on denial
- Fail-open on window store errors
- Invalid limits, policy lookup, disabled rules, reset
- Per-key serialization under concurrency
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from marketguard.core.enums import ErrorCode
from marketguard.core.result import Failure, Success
from marketguard.domain.enums import IncidentType, RateLimitPolicy, Severity
from marketguard.domain.value_objects import RateLimitRule, RateLimitWindow
from marketguard.infrastructure.audit import SecurityAuditRecorder
from marketguard.infrastructure.rate_limit import (
    FixedWindowRateLimiter,
    MemoryWindowStore,
)


class FakeClock:
    """Epoch-milliseconds clock advanced by hand."""

    def __init__(self, start_ms: float = 1_700_000_000_000.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryWindowStore()


@pytest.fixture
def limiter(store, mock_logger, recorder, clock):
    return FixedWindowRateLimiter(
        store=store,
        logger=mock_logger,
        recorder=recorder,
        clock=clock,
        policies={
            RateLimitPolicy.ORDERS: RateLimitRule(max_requests=2, window_ms=60_000),
            RateLimitPolicy.AUTH: RateLimitRule(
                max_requests=1, window_ms=60_000, enabled=False
            ),
        },
    )


async def _admit(limiter, client_id="192.168.1.1", endpoint="orders"):
    result = await limiter.admit(
        client_id=client_id, endpoint=endpoint, max_requests=5, window_ms=60_000
    )
    assert isinstance(result, Success)
    return result.value


@pytest.mark.unit
class TestAdmission:
    """Fixed-window counting."""

    @pytest.mark.asyncio
    async def test_first_five_allowed_sixth_denied(self, limiter):
        decisions = [await _admit(limiter) for _ in range(6)]

        assert [d.allowed for d in decisions] == [True] * 5 + [False]
        assert [d.count for d in decisions[:5]] == [1, 2, 3, 4, 5]
        assert decisions[5].retry_after_seconds == 60

    @pytest.mark.asyncio
    async def test_retry_after_counts_down_with_elapsed_time(self, limiter, clock):
        for _ in range(5):
            await _admit(limiter)

        clock.advance(45_500)
        decision = await _admit(limiter)

        assert decision.allowed is False
        assert decision.retry_after_seconds == 15

    @pytest.mark.asyncio
    async def test_retry_after_is_positive_at_window_edge(self, limiter, clock):
        for _ in range(5):
            await _admit(limiter)

        clock.advance(60_000)
        decision = await _admit(limiter)

        assert decision.allowed is False
        assert decision.retry_after_seconds == 1

    @pytest.mark.asyncio
    async def test_window_resets_after_window_ms(self, limiter, clock):
        for _ in range(6):
            await _admit(limiter)

        clock.advance(60_001)
        decision = await _admit(limiter)

        assert decision.allowed is True
        assert decision.count == 1

    @pytest.mark.asyncio
    async def test_denied_requests_are_not_counted(self, limiter, store):
        for _ in range(8):
            await _admit(limiter)

        window = await store.get("ratelimit:orders:192.168.1.1")
        assert window.count == 5

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, limiter):
        for _ in range(5):
            await _admit(limiter)

        other_client = await _admit(limiter, client_id="10.0.0.9")
        other_endpoint = await _admit(limiter, endpoint="login")

        assert other_client.allowed is True
        assert other_endpoint.allowed is True

    @pytest.mark.asyncio
    async def test_decision_reports_remaining(self, limiter):
        decision = await _admit(limiter)

        assert decision.limit == 5
        assert decision.remaining == 4
        assert decision.window_ms == 60_000

    @pytest.mark.asyncio
    async def test_expired_windows_are_evicted(self, limiter, store, clock):
        await _admit(limiter, client_id="a")
        await _admit(limiter, client_id="b")
        assert len(store) == 2

        clock.advance(60_001)
        await _admit(limiter, client_id="c")

        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_concurrent_requests_admit_exactly_max(self, limiter):
        results = await asyncio.gather(
            *(
                limiter.admit(
                    client_id="192.168.1.1",
                    endpoint="orders",
                    max_requests=5,
                    window_ms=60_000,
                )
                for _ in range(20)
            )
        )

        allowed = [r.value.allowed for r in results]
        assert allowed.count(True) == 5
        assert allowed.count(False) == 15


@pytest.mark.unit
class TestDenialAudit:
    """Violation upsert and security event on denial."""

    @pytest.mark.asyncio
    async def test_denial_records_violation_and_event(self, limiter, audit):
        for _ in range(6):
            await _admit(limiter)

        violation = audit.get_violation("192.168.1.1", "orders")
        assert violation is not None
        assert violation.violation_count == 1
        assert violation.attempt_count == 5

        [event] = audit.security_events
        assert event.incident_type == IncidentType.RATE_LIMIT_EXCEEDED
        assert event.severity == Severity.MEDIUM
        assert event.ip_address == "192.168.1.1"
        assert event.metadata["endpoint"] == "orders"
        assert event.metadata["request_count"] == 5
        assert event.metadata["max_requests"] == 5

    @pytest.mark.asyncio
    async def test_repeated_denials_upsert_one_violation(self, limiter, audit):
        for _ in range(8):
            await _admit(limiter)

        assert len(audit.rate_limit_violations) == 1
        assert audit.rate_limit_violations[0].violation_count == 3
        assert len(audit.security_events) == 3

    @pytest.mark.asyncio
    async def test_audit_failure_does_not_change_decision(
        self, store, mock_logger, clock
    ):
        failing_audit = AsyncMock()
        failing_audit.log_rate_limit_violation.side_effect = RuntimeError("db down")
        failing_audit.log_security_event.side_effect = RuntimeError("db down")
        monitoring = MagicMock()

        limiter = FixedWindowRateLimiter(
            store=store,
            logger=mock_logger,
            recorder=SecurityAuditRecorder(
                audit=failing_audit, logger=mock_logger, monitoring=monitoring
            ),
            clock=clock,
        )
        for _ in range(5):
            await _admit(limiter)

        decision = await _admit(limiter)

        assert decision.allowed is False
        assert decision.retry_after_seconds == 60
        assert monitoring.capture_exception.call_count == 2

    @pytest.mark.asyncio
    async def test_denial_without_recorder_is_logged(self, store, mock_logger, clock):
        limiter = FixedWindowRateLimiter(store=store, logger=mock_logger, clock=clock)
        for _ in range(6):
            await _admit(limiter)

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "Rate limit exceeded"


@pytest.mark.unit
class TestFailOpen:
    """Window store errors admit the request."""

    @pytest.mark.asyncio
    async def test_store_error_allows_request(self, mock_logger, clock):
        store = MemoryWindowStore()
        store.get = AsyncMock(side_effect=ConnectionError("store unavailable"))
        limiter = FixedWindowRateLimiter(store=store, logger=mock_logger, clock=clock)

        decision = await _admit(limiter)

        assert decision.allowed is True
        mock_logger.error.assert_called_once()
        assert isinstance(mock_logger.error.call_args.kwargs["error"], ConnectionError)

    @pytest.mark.asyncio
    async def test_eviction_error_allows_request(self, mock_logger, clock):
        store = MemoryWindowStore()
        store.evict_expired = AsyncMock(side_effect=RuntimeError("boom"))
        limiter = FixedWindowRateLimiter(store=store, logger=mock_logger, clock=clock)

        decision = await _admit(limiter)

        assert decision.allowed is True


@pytest.mark.unit
class TestInvalidLimits:
    """Non-positive limits are rejected."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("max_requests", "window_ms"), [(0, 1000), (5, 0), (-1, -1)]
    )
    async def test_non_positive_limits_fail(self, limiter, max_requests, window_ms):
        result = await limiter.admit(
            client_id="1.1.1.1",
            endpoint="orders",
            max_requests=max_requests,
            window_ms=window_ms,
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_RATE_LIMIT_RULE


@pytest.mark.unit
class TestPolicies:
    """admit_policy() rule lookup."""

    @pytest.mark.asyncio
    async def test_policy_limits_are_applied(self, limiter):
        results = [
            await limiter.admit_policy(
                client_id="1.1.1.1", endpoint="orders", policy=RateLimitPolicy.ORDERS
            )
            for _ in range(3)
        ]

        assert [r.value.allowed for r in results] == [True, True, False]
        assert results[2].value.limit == 2

    @pytest.mark.asyncio
    async def test_disabled_policy_always_allows(self, limiter):
        for _ in range(5):
            result = await limiter.admit_policy(
                client_id="1.1.1.1", endpoint="login", policy=RateLimitPolicy.AUTH
            )
            assert result.value.allowed is True

    @pytest.mark.asyncio
    async def test_unconfigured_policy_allows(self, limiter, mock_logger):
        result = await limiter.admit_policy(
            client_id="1.1.1.1", endpoint="api", policy=RateLimitPolicy.API
        )

        assert result.value.allowed is True
        assert result.value.limit == 0
        mock_logger.debug.assert_called()


@pytest.mark.unit
class TestReset:
    """reset() drops the window and does not fail open."""

    @pytest.mark.asyncio
    async def test_reset_allows_client_again(self, limiter):
        for _ in range(6):
            await _admit(limiter)

        result = await limiter.reset(client_id="192.168.1.1", endpoint="orders")
        decision = await _admit(limiter)

        assert isinstance(result, Success)
        assert decision.allowed is True
        assert decision.count == 1

    @pytest.mark.asyncio
    async def test_reset_failure_returns_failure(self, mock_logger, clock):
        store = MemoryWindowStore()
        store.delete = AsyncMock(side_effect=RuntimeError("boom"))
        limiter = FixedWindowRateLimiter(store=store, logger=mock_logger, clock=clock)

        result = await limiter.reset(client_id="1.1.1.1", endpoint="orders")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.RATE_LIMIT_RESET_FAILED


@pytest.mark.unit
class TestMemoryWindowStore:
    """MemoryWindowStore behavior."""

    @pytest.mark.asyncio
    async def test_set_get_delete(self, store):
        window = RateLimitWindow(count=1, window_start_ms=0, window_ms=1000)

        await store.set("k", window)
        assert await store.get("k") == window

        await store.delete("k")
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_evict_uses_each_entry_window(self, store):
        await store.set(
            "short", RateLimitWindow(count=1, window_start_ms=0, window_ms=1000)
        )
        await store.set(
            "long", RateLimitWindow(count=1, window_start_ms=0, window_ms=10_000)
        )

        evicted = await store.evict_expired(now_ms=5000)

        assert evicted == 1
        assert await store.get("short") is None
        assert await store.get("long") is not None

    @pytest.mark.asyncio
    async def test_lock_serializes_same_key(self, store):
        order: list[str] = []

        async def hold(name: str) -> None:
            async with store.lock("k"):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(hold("a"), hold("b"))

        assert order == ["a-in", "a-out", "b-in", "b-out"]
