"""Order screening DTOs.

Result dataclasses returned by SecurityGateService to the order pipeline.
"""

from dataclasses import dataclass

from marketguard.domain.value_objects.blacklist_result import BlacklistCheckResult
from marketguard.domain.value_objects.fraud_result import FraudDetectionResult


class ScreeningRejection:
    """Standard rejection reasons."""

    RATE_LIMITED = "rate_limited"
    BLACKLISTED = "blacklisted"
    FRAUD_BLOCKED = "fraud_blocked"


@dataclass(frozen=True, kw_only=True)
class OrderScreeningResult:
    """Outcome of screen_order().

    Attributes:
        allowed: Whether the order may be persisted.
        rejection_reason: ScreeningRejection value when rejected.
        retry_after_seconds: Seconds before retrying (rate limited only).
        blacklist: Blacklist check outcome, when the check ran.
        fraud: Fraud verdict, when scoring ran.
        requires_review: Order proceeds but needs manual review.
    """

    allowed: bool
    rejection_reason: str | None = None
    retry_after_seconds: int = 0
    blacklist: BlacklistCheckResult | None = None
    fraud: FraudDetectionResult | None = None
    requires_review: bool = False
