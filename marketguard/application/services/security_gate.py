"""Security gate service.

Application-level facade the request pipeline calls before sensitive work.
Wires the control flow for order submission and turns verdicts into
security events.

Order Screening:
    1. Rate limit (orders policy), denied -> rejected with retry-after
    2. Blacklist (IP, account, email domain), match -> rejected
    3. Fraud detection (authenticated users only)
       - blocked -> critical event, rejected when fraud_auto_block is on
       - manual_review -> medium event, order proceeds flagged for review

Usage:
    gate = build_security_gate(history=history, blacklist_store=store, audit=audit)

    result = await gate.screen_order(request, order)
    if not result.allowed:
        ...  # 429 for rate_limited, 403 otherwise
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from marketguard.application.dtos.screening_dtos import (
    OrderScreeningResult,
    ScreeningRejection,
)
from marketguard.core.result import Failure, Result, Success
from marketguard.domain.entities import SecurityEvent
from marketguard.domain.enums import (
    FraudStatus,
    IncidentType,
    RateLimitPolicy,
    Severity,
)
from marketguard.domain.value_objects.blacklist_result import BlacklistCheckResult
from marketguard.domain.value_objects.order import UserContext
from marketguard.domain.value_objects.rate_limit_rule import RateLimitDecision

if TYPE_CHECKING:
    from marketguard.core.config import Settings
    from marketguard.domain.errors import RateLimitError
    from marketguard.domain.protocols import LoggerProtocol, RateLimitProtocol
    from marketguard.domain.value_objects.fraud_result import FraudDetectionResult
    from marketguard.domain.value_objects.order import OrderData
    from marketguard.domain.value_objects.request_context import (
        RequestContext,
        SuspiciousActivityResult,
    )
    from marketguard.infrastructure.audit.audit_recorder import SecurityAuditRecorder
    from marketguard.infrastructure.blacklist.blacklist_gate import BlacklistGate
    from marketguard.infrastructure.fraud.fraud_detector import FraudDetector
    from marketguard.infrastructure.security.suspicious_activity_detector import (
        SuspiciousActivityDetector,
    )

ORDERS_ENDPOINT = "orders"


class SecurityGateService:
    """Facade over rate limiting, blacklist, fraud and request checks.

    Dependencies (injected via constructor):
        - RateLimitProtocol: request throttling
        - BlacklistGate: IP/account/email-domain checks
        - FraudDetector: six-factor scoring and verdict
        - SuspiciousActivityDetector: request pattern anomalies
        - SecurityAuditRecorder: security events for enforced verdicts
        - Settings: feature toggles
    """

    def __init__(
        self,
        *,
        rate_limiter: RateLimitProtocol,
        blacklist_gate: BlacklistGate,
        fraud_detector: FraudDetector,
        activity_detector: SuspiciousActivityDetector,
        recorder: SecurityAuditRecorder,
        settings: Settings,
        logger: LoggerProtocol,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._blacklist_gate = blacklist_gate
        self._fraud_detector = fraud_detector
        self._activity_detector = activity_detector
        self._recorder = recorder
        self._settings = settings
        self._logger = logger

    async def admit(
        self,
        *,
        client_id: str,
        endpoint: str,
        max_requests: int,
        window_ms: int,
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Rate limit one request with explicit limits."""
        if not self._settings.rate_limiting_enabled:
            return Success(value=RateLimitDecision(allowed=True))
        return await self._rate_limiter.admit(
            client_id=client_id,
            endpoint=endpoint,
            max_requests=max_requests,
            window_ms=window_ms,
        )

    async def check_blacklist(
        self,
        ip_address: str,
        user_id: str | None = None,
        email: str | None = None,
    ) -> BlacklistCheckResult:
        """Check the blacklist (always clear when the check is disabled)."""
        if not self._settings.blacklist_enabled:
            return BlacklistCheckResult.clear()
        return await self._blacklist_gate.check_blacklist(
            ip_address, user_id=user_id, email=email
        )

    async def detect_order_fraud(
        self, order: OrderData, user_context: UserContext
    ) -> FraudDetectionResult:
        """Score an order for fraud."""
        return await self._fraud_detector.detect_order_fraud(order, user_context)

    async def inspect_request(
        self, request: RequestContext
    ) -> SuspiciousActivityResult:
        """Score a request for suspicious patterns."""
        return await self._activity_detector.inspect(request)

    async def screen_order(
        self,
        request: RequestContext,
        order: OrderData,
        user_context: UserContext | None = None,
    ) -> OrderScreeningResult:
        """Run the full order submission gate.

        Args:
            request: Inbound request (IP, fingerprint, location, user).
            order: Order being submitted.
            user_context: Overrides the context derived from request.

        Returns:
            OrderScreeningResult; allowed=False stops order persistence.
        """
        if user_context is None and request.user_id:
            user_context = UserContext(
                user_id=request.user_id,
                ip_address=request.ip_address,
                device_fingerprint=request.device_fingerprint,
                geo_location=request.geo_location,
            )

        # 1. Rate limit
        if self._settings.rate_limiting_enabled:
            result = await self._rate_limiter.admit_policy(
                client_id=request.ip_address,
                endpoint=ORDERS_ENDPOINT,
                policy=RateLimitPolicy.ORDERS,
            )
            match result:
                case Success(value=decision) if not decision.allowed:
                    return OrderScreeningResult(
                        allowed=False,
                        rejection_reason=ScreeningRejection.RATE_LIMITED,
                        retry_after_seconds=decision.retry_after_seconds,
                    )
                case Failure(error=error):
                    self._logger.error(
                        "Order rate limit check failed - continuing",
                        error_code=error.code.value,
                        error_message=error.message,
                    )
                case _:
                    pass

        # 2. Blacklist
        user_id = user_context.user_id if user_context else None
        blacklist = await self.check_blacklist(
            request.ip_address, user_id=user_id, email=order.email
        )
        if blacklist.is_blacklisted:
            await self._record(
                request,
                user_id=user_id,
                incident_type=IncidentType.BLACKLIST_ACCESS_ATTEMPT,
                severity=Severity.HIGH,
                is_blocked=True,
                description="Blacklisted client attempted to place an order",
                metadata={
                    "reason": blacklist.reason,
                    "matched_type": (
                        blacklist.matched_type.value
                        if blacklist.matched_type
                        else None
                    ),
                },
            )
            return OrderScreeningResult(
                allowed=False,
                rejection_reason=ScreeningRejection.BLACKLISTED,
                blacklist=blacklist,
            )

        # 3. Fraud detection (anonymous users are not scored)
        if user_context is None or not self._settings.fraud_detection_enabled:
            return OrderScreeningResult(allowed=True, blacklist=blacklist)

        fraud = await self.detect_order_fraud(order, user_context)

        if fraud.status == FraudStatus.BLOCKED:
            auto_block = self._settings.fraud_auto_block
            await self._record(
                request,
                user_id=user_id,
                incident_type=IncidentType.FRAUDULENT_ORDER,
                severity=Severity.CRITICAL,
                is_blocked=auto_block,
                risk_score=fraud.risk_score,
                description="High-risk order blocked by fraud detection",
                metadata={
                    "order_id": order.order_id,
                    "rules": list(fraud.rules),
                    "risk_factors": fraud.risk_factors.to_dict(),
                },
            )
            if auto_block:
                return OrderScreeningResult(
                    allowed=False,
                    rejection_reason=ScreeningRejection.FRAUD_BLOCKED,
                    blacklist=blacklist,
                    fraud=fraud,
                )
            return OrderScreeningResult(
                allowed=True, blacklist=blacklist, fraud=fraud, requires_review=True
            )

        if fraud.status == FraudStatus.MANUAL_REVIEW:
            await self._record(
                request,
                user_id=user_id,
                incident_type=IncidentType.FRAUDULENT_ORDER,
                severity=Severity.MEDIUM,
                is_blocked=False,
                risk_score=fraud.risk_score,
                description="Order flagged for manual review",
                metadata={"order_id": order.order_id, "rules": list(fraud.rules)},
            )
            return OrderScreeningResult(
                allowed=True, blacklist=blacklist, fraud=fraud, requires_review=True
            )

        return OrderScreeningResult(allowed=True, blacklist=blacklist, fraud=fraud)

    async def _record(
        self,
        request: RequestContext,
        *,
        user_id: str | None,
        incident_type: IncidentType,
        severity: Severity,
        is_blocked: bool,
        description: str,
        metadata: dict,
        risk_score: float = 0.0,
    ) -> None:
        await self._recorder.record_event(
            SecurityEvent(
                incident_type=incident_type,
                severity=severity,
                user_id=user_id,
                session_id=request.session_id,
                ip_address=request.ip_address,
                user_agent=request.user_agent,
                request_path=request.path,
                request_method=request.method,
                geo_location=request.geo_location,
                is_blocked=is_blocked,
                risk_score=risk_score,
                description=description,
                metadata=metadata,
            )
        )
