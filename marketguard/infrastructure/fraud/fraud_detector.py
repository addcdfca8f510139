"""detect_order_fraud(): risk scoring, decision policy and audit record.

Usage:
    detector = FraudDetector(scorer=scorer, engine=RuleEngine(), recorder=recorder, logger=logger)
    result = await detector.detect_order_fraud(order, user_context)
    if result.is_blocked:
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from marketguard.domain.entities import FraudAnalysis
from marketguard.domain.value_objects.fraud_result import FraudDetectionResult

if TYPE_CHECKING:
    from marketguard.domain.protocols import LoggerProtocol
    from marketguard.domain.value_objects.order import OrderData, UserContext
    from marketguard.infrastructure.audit.audit_recorder import SecurityAuditRecorder
    from marketguard.infrastructure.fraud.risk_scorer import RiskScorer
    from marketguard.infrastructure.fraud.rule_engine import RuleEngine


class FraudDetector:
    """Scores an order and persists the analysis.

    Args:
        scorer: Six-factor risk scorer.
        engine: Decision policy.
        recorder: Audit recorder for the FraudAnalysis.
        logger: Structured logger.
    """

    def __init__(
        self,
        *,
        scorer: RiskScorer,
        engine: RuleEngine,
        recorder: SecurityAuditRecorder,
        logger: LoggerProtocol,
    ) -> None:
        self._scorer = scorer
        self._engine = engine
        self._recorder = recorder
        self._logger = logger

    async def detect_order_fraud(
        self, order: OrderData, user_context: UserContext
    ) -> FraudDetectionResult:
        """Score one order.

        History provider and audit failures never propagate: they degrade a
        factor to its fallback or are captured by the recorder.

        Args:
            order: Order being submitted.
            user_context: Account, IP, device fingerprint and location.

        Returns:
            FraudDetectionResult (risk_score, status, factors, rules,
            recommendation).
        """
        factors = await self._scorer.score(order, user_context)
        result = self._engine.evaluate(factors, order.amount)

        await self._recorder.record_fraud_analysis(
            FraudAnalysis(
                user_id=user_context.user_id,
                order_id=order.order_id,
                risk_score=result.risk_score,
                risk_factors=factors,
                status=result.status,
                rules=list(result.rules),
                ip_address=user_context.ip_address,
                device_fingerprint=user_context.device_fingerprint,
                geo_location=user_context.geo_location,
            )
        )

        self._logger.info(
            "Order fraud analysis completed",
            user_id=user_context.user_id,
            order_id=order.order_id,
            risk_score=round(result.risk_score, 4),
            status=result.status.value,
            rules=list(result.rules),
        )
        return result
