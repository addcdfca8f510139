"""Unit tests for SecurityGateService.

Tests cover:
- screen_order() control flow: rate limit, blacklist, fraud detection
- Security events for enforced verdicts
- Feature toggles (rate limiting, blacklist, fraud, auto-block)
- Delegation of admit(), check_blacklist(), inspect_request()
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from marketguard.application.dtos import ScreeningRejection
from marketguard.application.services import SecurityGateService
from marketguard.core.config import Settings
from marketguard.domain.entities import BehaviorProfile, KnownDevice
from marketguard.domain.enums import (
    BlacklistType,
    FraudStatus,
    IncidentType,
    PaymentMethodType,
    Severity,
    VerificationType,
)
from marketguard.domain.value_objects import (
    FraudDetectionResult,
    OrderData,
    PaymentMethod,
    RequestContext,
    RiskFactors,
    UserContext,
)
from marketguard.infrastructure.blacklist import BlacklistGate
from marketguard.infrastructure.fraud import FraudDetector, RiskScorer, RuleEngine
from marketguard.infrastructure.rate_limit import (
    FixedWindowRateLimiter,
    MemoryWindowStore,
    build_policy_rules,
)
from marketguard.infrastructure.security import SuspiciousActivityDetector
from tests.utils.fakes import (
    FIXED_NOW,
    account_created,
    recent_orders,
    sessions_from,
    verified,
)

CLIENT_IP = "41.138.90.12"


def make_settings(**overrides):
    values = {"orders_rate_limit_max_requests": 2, "rate_limit_window_ms": 60_000}
    values.update(overrides)
    return Settings(**values)


def make_gate(
    settings, history, blacklist_store, recorder, logger, fraud_detector=None
):
    if fraud_detector is None:
        fraud_detector = FraudDetector(
            scorer=RiskScorer(
                history=history,
                logger=logger,
                proxy_ip_ranges=settings.proxy_ip_ranges,
                timeout_seconds=0.05,
                clock=lambda: FIXED_NOW,
            ),
            engine=RuleEngine(),
            recorder=recorder,
            logger=logger,
        )
    return SecurityGateService(
        rate_limiter=FixedWindowRateLimiter(
            store=MemoryWindowStore(),
            logger=logger,
            policies=build_policy_rules(settings),
            recorder=recorder,
        ),
        blacklist_gate=BlacklistGate(
            store=blacklist_store, logger=logger, recorder=recorder
        ),
        fraud_detector=fraud_detector,
        activity_detector=SuspiciousActivityDetector(
            recorder=recorder, logger=logger, clock=lambda: FIXED_NOW
        ),
        recorder=recorder,
        settings=settings,
        logger=logger,
    )


def order_request(user_id="user-1", ip_address=CLIENT_IP):
    return RequestContext(
        ip_address=ip_address,
        method="POST",
        path="/api/orders",
        user_agent="Mozilla/5.0",
        device_fingerprint="fp-known",
        user_id=user_id,
    )


def mobile_money_order(amount="10000", email=None):
    return OrderData(
        order_id="ord-1",
        amount=Decimal(amount),
        payment_method=PaymentMethod(type=PaymentMethodType.MOBILE_MONEY),
        email=email,
    )


def fraud_result(status, score):
    return FraudDetectionResult(
        risk_score=score,
        status=status,
        risk_factors=RiskFactors(),
        rules=(),
        recommendation=status.recommendation,
    )


@pytest.fixture
def trusted_history(history):
    history.user = account_created(FIXED_NOW, days=10)
    history.verifications = verified(VerificationType.EMAIL, VerificationType.PHONE)
    history.devices = [KnownDevice(fingerprint="fp-known")]
    history.profile = BehaviorProfile(average_order_amount=Decimal("10000"))
    history.sessions = sessions_from(CLIENT_IP)
    return history


@pytest.fixture
def risky_history(history):
    history.user = account_created(FIXED_NOW, days=0.5)
    history.orders = recent_orders(12, amount=50_000)
    return history


@pytest.mark.unit
class TestScreenOrder:
    """Order submission control flow."""

    @pytest.mark.asyncio
    async def test_trusted_order_is_allowed(
        self, trusted_history, blacklist_store, recorder, audit, mock_logger
    ):
        gate = make_gate(
            make_settings(), trusted_history, blacklist_store, recorder, mock_logger
        )

        result = await gate.screen_order(order_request(), mobile_money_order())

        assert result.allowed is True
        assert result.rejection_reason is None
        assert result.fraud.status == FraudStatus.APPROVED
        assert result.requires_review is False
        assert audit.security_events == []

    @pytest.mark.asyncio
    async def test_rate_limited_after_orders_budget(
        self, trusted_history, blacklist_store, recorder, audit, mock_logger
    ):
        gate = make_gate(
            make_settings(), trusted_history, blacklist_store, recorder, mock_logger
        )

        for _ in range(2):
            assert (
                await gate.screen_order(order_request(), mobile_money_order())
            ).allowed

        result = await gate.screen_order(order_request(), mobile_money_order())

        assert result.allowed is False
        assert result.rejection_reason == ScreeningRejection.RATE_LIMITED
        assert result.retry_after_seconds > 0
        assert result.fraud is None
        assert audit.get_violation(CLIENT_IP, "orders") is not None

    @pytest.mark.asyncio
    async def test_blacklisted_ip_is_rejected_before_scoring(
        self, trusted_history, blacklist_store, recorder, audit, mock_logger
    ):
        blacklist_store.add(BlacklistType.IP_ADDRESS, CLIENT_IP, "Card testing")
        gate = make_gate(
            make_settings(), trusted_history, blacklist_store, recorder, mock_logger
        )

        result = await gate.screen_order(order_request(), mobile_money_order())

        assert result.allowed is False
        assert result.rejection_reason == ScreeningRejection.BLACKLISTED
        assert result.blacklist.reason == "Card testing"
        assert trusted_history.calls == []
        [event] = audit.security_events
        assert event.incident_type == IncidentType.BLACKLIST_ACCESS_ATTEMPT
        assert event.severity == Severity.HIGH
        assert event.metadata["matched_type"] == "ip_address"

    @pytest.mark.asyncio
    async def test_order_email_domain_is_checked(
        self, trusted_history, blacklist_store, recorder, mock_logger
    ):
        blacklist_store.add(BlacklistType.EMAIL_DOMAIN, "spam.example", "Disposable")
        gate = make_gate(
            make_settings(), trusted_history, blacklist_store, recorder, mock_logger
        )

        result = await gate.screen_order(
            order_request(), mobile_money_order(email="x@spam.example")
        )

        assert result.rejection_reason == ScreeningRejection.BLACKLISTED

    @pytest.mark.asyncio
    async def test_anonymous_order_skips_fraud_detection(
        self, trusted_history, blacklist_store, recorder, mock_logger
    ):
        gate = make_gate(
            make_settings(), trusted_history, blacklist_store, recorder, mock_logger
        )

        result = await gate.screen_order(
            order_request(user_id=None), mobile_money_order()
        )

        assert result.allowed is True
        assert result.fraud is None
        assert trusted_history.calls == []
        assert blacklist_store.calls == [(BlacklistType.IP_ADDRESS, CLIENT_IP)]

    @pytest.mark.asyncio
    async def test_blocked_fraud_is_rejected_with_critical_event(
        self, risky_history, blacklist_store, recorder, audit, mock_logger
    ):
        gate = make_gate(
            make_settings(), risky_history, blacklist_store, recorder, mock_logger
        )

        result = await gate.screen_order(
            order_request(), mobile_money_order(amount="600000")
        )

        assert result.allowed is False
        assert result.rejection_reason == ScreeningRejection.FRAUD_BLOCKED
        assert result.fraud.status == FraudStatus.BLOCKED
        [event] = audit.security_events
        assert event.incident_type == IncidentType.FRAUDULENT_ORDER
        assert event.severity == Severity.CRITICAL
        assert event.is_blocked is True
        assert len(audit.fraud_analyses) == 1

    @pytest.mark.asyncio
    async def test_blocked_fraud_without_auto_block_proceeds_for_review(
        self, risky_history, blacklist_store, recorder, audit, mock_logger
    ):
        gate = make_gate(
            make_settings(fraud_auto_block=False),
            risky_history,
            blacklist_store,
            recorder,
            mock_logger,
        )

        result = await gate.screen_order(
            order_request(), mobile_money_order(amount="600000")
        )

        assert result.allowed is True
        assert result.requires_review is True
        assert audit.security_events[0].is_blocked is False

    @pytest.mark.asyncio
    async def test_manual_review_proceeds_with_medium_event(
        self, history, blacklist_store, recorder, audit, mock_logger
    ):
        detector = MagicMock()
        detector.detect_order_fraud = AsyncMock(
            return_value=fraud_result(FraudStatus.MANUAL_REVIEW, 0.65)
        )
        gate = make_gate(
            make_settings(), history, blacklist_store, recorder, mock_logger, detector
        )

        result = await gate.screen_order(order_request(), mobile_money_order())

        assert result.allowed is True
        assert result.requires_review is True
        [event] = audit.security_events
        assert event.incident_type == IncidentType.FRAUDULENT_ORDER
        assert event.severity == Severity.MEDIUM
        assert event.risk_score == 0.65

    @pytest.mark.asyncio
    async def test_flagged_order_proceeds_without_event(
        self, history, blacklist_store, recorder, audit, mock_logger
    ):
        detector = MagicMock()
        detector.detect_order_fraud = AsyncMock(
            return_value=fraud_result(FraudStatus.FLAGGED, 0.45)
        )
        gate = make_gate(
            make_settings(), history, blacklist_store, recorder, mock_logger, detector
        )

        result = await gate.screen_order(order_request(), mobile_money_order())

        assert result.allowed is True
        assert result.requires_review is False
        assert audit.security_events == []

    @pytest.mark.asyncio
    async def test_context_derived_from_request(
        self, history, blacklist_store, recorder, mock_logger
    ):
        detector = MagicMock()
        detector.detect_order_fraud = AsyncMock(
            return_value=fraud_result(FraudStatus.APPROVED, 0.1)
        )
        gate = make_gate(
            make_settings(), history, blacklist_store, recorder, mock_logger, detector
        )

        await gate.screen_order(order_request(), mobile_money_order())

        _, context = detector.detect_order_fraud.call_args.args
        assert context.user_id == "user-1"
        assert context.ip_address == CLIENT_IP
        assert context.device_fingerprint == "fp-known"


    @pytest.mark.asyncio
    async def test_events_use_explicit_user_context(
        self, history, blacklist_store, recorder, audit, mock_logger
    ):
        detector = MagicMock()
        detector.detect_order_fraud = AsyncMock(
            return_value=fraud_result(FraudStatus.MANUAL_REVIEW, 0.65)
        )
        gate = make_gate(
            make_settings(), history, blacklist_store, recorder, mock_logger, detector
        )
        context = UserContext(user_id="user-9", ip_address=CLIENT_IP)

        result = await gate.screen_order(
            order_request(user_id=None), mobile_money_order(), context
        )

        assert result.requires_review is True
        [event] = audit.security_events
        assert event.user_id == "user-9"

    @pytest.mark.asyncio
    async def test_blacklist_event_uses_explicit_user_context(
        self, history, blacklist_store, recorder, audit, mock_logger
    ):
        blacklist_store.add(BlacklistType.USER_ACCOUNT, "user-9", "Chargebacks")
        gate = make_gate(make_settings(), history, blacklist_store, recorder, mock_logger)
        context = UserContext(user_id="user-9", ip_address=CLIENT_IP)

        result = await gate.screen_order(
            order_request(user_id=None), mobile_money_order(), context
        )

        assert result.rejection_reason == ScreeningRejection.BLACKLISTED
        assert audit.security_events[0].user_id == "user-9"

@pytest.mark.unit
class TestFeatureToggles:
    """Settings switches."""

    @pytest.mark.asyncio
    async def test_rate_limiting_disabled(
        self, trusted_history, blacklist_store, recorder, mock_logger
    ):
        gate = make_gate(
            make_settings(rate_limiting_enabled=False),
            trusted_history,
            blacklist_store,
            recorder,
            mock_logger,
        )

        results = [
            await gate.screen_order(order_request(), mobile_money_order())
            for _ in range(5)
        ]

        assert all(r.allowed for r in results)

    @pytest.mark.asyncio
    async def test_blacklist_disabled(
        self, trusted_history, blacklist_store, recorder, mock_logger
    ):
        blacklist_store.add(BlacklistType.IP_ADDRESS, CLIENT_IP, "Card testing")
        gate = make_gate(
            make_settings(blacklist_enabled=False),
            trusted_history,
            blacklist_store,
            recorder,
            mock_logger,
        )

        result = await gate.screen_order(order_request(), mobile_money_order())

        assert result.allowed is True
        assert blacklist_store.calls == []

    @pytest.mark.asyncio
    async def test_fraud_detection_disabled(
        self, risky_history, blacklist_store, recorder, mock_logger
    ):
        gate = make_gate(
            make_settings(fraud_detection_enabled=False),
            risky_history,
            blacklist_store,
            recorder,
            mock_logger,
        )

        result = await gate.screen_order(
            order_request(), mobile_money_order(amount="600000")
        )

        assert result.allowed is True
        assert result.fraud is None


@pytest.mark.unit
class TestDelegation:
    """Thin operations."""

    @pytest.mark.asyncio
    async def test_admit_uses_explicit_limits(
        self, history, blacklist_store, recorder, mock_logger
    ):
        gate = make_gate(make_settings(), history, blacklist_store, recorder, mock_logger)

        results = [
            await gate.admit(
                client_id=CLIENT_IP, endpoint="login", max_requests=1, window_ms=1000
            )
            for _ in range(2)
        ]

        assert [r.value.allowed for r in results] == [True, False]

    @pytest.mark.asyncio
    async def test_admit_when_rate_limiting_disabled(
        self, history, blacklist_store, recorder, mock_logger
    ):
        gate = make_gate(
            make_settings(rate_limiting_enabled=False),
            history,
            blacklist_store,
            recorder,
            mock_logger,
        )

        for _ in range(3):
            result = await gate.admit(
                client_id=CLIENT_IP, endpoint="login", max_requests=1, window_ms=1000
            )
            assert result.value.allowed is True

    @pytest.mark.asyncio
    async def test_inspect_request(
        self, history, blacklist_store, recorder, audit, mock_logger
    ):
        gate = make_gate(make_settings(), history, blacklist_store, recorder, mock_logger)
        request = RequestContext(
            ip_address=CLIENT_IP,
            method="POST",
            path="/api/reviews",
            user_agent="Mozilla/5.0",
            body="<script>alert(1)</script>",
        )

        result = await gate.inspect_request(request)

        assert result.is_blocked is True
        assert audit.security_events[0].incident_type == IncidentType.SQL_INJECTION
