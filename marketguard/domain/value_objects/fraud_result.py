"""Fraud detection result returned to the order pipeline."""

from dataclasses import dataclass, field

from marketguard.domain.enums import FraudStatus
from marketguard.domain.value_objects.risk_factors import RiskFactors


@dataclass(frozen=True, slots=True, kw_only=True)
class FraudDetectionResult:
    """Verdict for a single order.

    Attributes:
        risk_score: Weighted composite plus rule overlays. Not re-clamped,
            so it may exceed 1.0.
        status: Verdict derived from risk_score thresholds.
        risk_factors: The six clamped factors.
        rules: Tags of the rule overlays that fired, in evaluation order.
        recommendation: Fixed text for the status.
    """

    risk_score: float
    status: FraudStatus
    risk_factors: RiskFactors
    rules: tuple[str, ...] = field(default_factory=tuple)
    recommendation: str = ""

    @property
    def is_blocked(self) -> bool:
        """Whether the order must not proceed."""
        return self.status == FraudStatus.BLOCKED

    @property
    def requires_review(self) -> bool:
        """Whether a human has to look at the order before fulfilment."""
        return self.status == FraudStatus.MANUAL_REVIEW
