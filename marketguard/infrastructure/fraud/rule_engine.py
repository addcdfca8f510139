"""Decision policy turning six risk factors into a fraud verdict.

Composite = weighted sum of the factors (weights sum to 1.0, so the
composite stays within [0, 1]). Rule overlays then add fixed amounts and
record a tag each. The final score is NOT re-clamped and may exceed 1.0.

Overlays:
    velocity_risk > 0.8        +0.20  HIGH_VELOCITY_PURCHASES
    location_risk > 0.7        +0.15  SUSPICIOUS_LOCATION
    account_risk > 0.9         +0.25  HIGH_RISK_ACCOUNT
    order amount > 500,000     +0.10  HIGH_VALUE_ORDER

Verdict thresholds: >= 0.8 blocked, >= 0.6 manual_review, >= 0.4 flagged,
else approved.
"""

from dataclasses import dataclass
from decimal import Decimal

from marketguard.domain.enums import FraudStatus
from marketguard.domain.value_objects.fraud_result import FraudDetectionResult
from marketguard.domain.value_objects.risk_factors import RiskFactors

FACTOR_WEIGHTS: dict[str, float] = {
    "velocity_risk": 0.25,
    "location_risk": 0.15,
    "device_risk": 0.15,
    "behavior_risk": 0.20,
    "account_risk": 0.15,
    "payment_risk": 0.10,
}

HIGH_VALUE_ORDER_AMOUNT = Decimal(500_000)

STATUS_THRESHOLDS: tuple[tuple[float, FraudStatus], ...] = (
    (0.8, FraudStatus.BLOCKED),
    (0.6, FraudStatus.MANUAL_REVIEW),
    (0.4, FraudStatus.FLAGGED),
)


@dataclass(frozen=True, slots=True, kw_only=True)
class RuleOverlay:
    """Factor threshold that adds a fixed amount to the score."""

    tag: str
    factor: str
    threshold: float
    addition: float


FACTOR_OVERLAYS: tuple[RuleOverlay, ...] = (
    RuleOverlay(
        tag="HIGH_VELOCITY_PURCHASES",
        factor="velocity_risk",
        threshold=0.8,
        addition=0.20,
    ),
    RuleOverlay(
        tag="SUSPICIOUS_LOCATION",
        factor="location_risk",
        threshold=0.7,
        addition=0.15,
    ),
    RuleOverlay(
        tag="HIGH_RISK_ACCOUNT",
        factor="account_risk",
        threshold=0.9,
        addition=0.25,
    ),
)
HIGH_VALUE_ORDER_TAG = "HIGH_VALUE_ORDER"
HIGH_VALUE_ORDER_ADDITION = 0.10


def composite_score(factors: RiskFactors) -> float:
    """Weighted sum of the six factors, within [0, 1]."""
    values = factors.to_dict()
    return sum(weight * values[name] for name, weight in FACTOR_WEIGHTS.items())


def status_for_score(score: float) -> FraudStatus:
    """Map a final score onto a verdict."""
    for threshold, status in STATUS_THRESHOLDS:
        if score >= threshold:
            return status
    return FraudStatus.APPROVED


class RuleEngine:
    """Stateless decision policy. Deterministic for fixed inputs."""

    def evaluate(
        self, factors: RiskFactors, order_amount: Decimal
    ) -> FraudDetectionResult:
        """Combine factors, apply overlays and pick the verdict.

        Args:
            factors: The six clamped risk factors.
            order_amount: Total of the order being scored.

        Returns:
            FraudDetectionResult with the (possibly > 1.0) final score.
        """
        score = composite_score(factors)
        values = factors.to_dict()
        rules: list[str] = []

        for overlay in FACTOR_OVERLAYS:
            if values[overlay.factor] > overlay.threshold:
                score += overlay.addition
                rules.append(overlay.tag)

        if order_amount > HIGH_VALUE_ORDER_AMOUNT:
            score += HIGH_VALUE_ORDER_ADDITION
            rules.append(HIGH_VALUE_ORDER_TAG)

        status = status_for_score(score)
        return FraudDetectionResult(
            risk_score=score,
            status=status,
            risk_factors=factors,
            rules=tuple(rules),
            recommendation=status.recommendation,
        )
