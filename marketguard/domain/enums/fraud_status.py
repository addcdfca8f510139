"""Fraud verdicts produced by the decision policy.

Thresholds on the final (possibly >1.0) score:
    >= 0.8  BLOCKED
    >= 0.6  MANUAL_REVIEW
    >= 0.4  FLAGGED
    else    APPROVED
"""

from enum import Enum


class FraudStatus(str, Enum):
    """Fraud analysis status."""

    APPROVED = "approved"
    FLAGGED = "flagged"
    MANUAL_REVIEW = "manual_review"
    BLOCKED = "blocked"

    @property
    def recommendation(self) -> str:
        """Fixed human-readable recommendation for this verdict."""
        return _RECOMMENDATIONS[self]


_RECOMMENDATIONS: dict[FraudStatus, str] = {
    FraudStatus.APPROVED: "Order appears legitimate, proceed with processing.",
    FraudStatus.FLAGGED: (
        "Low-medium fraud risk. Monitor closely and consider additional verification."
    ),
    FraudStatus.MANUAL_REVIEW: (
        "Moderate fraud risk. Requires manual review before processing."
    ),
    FraudStatus.BLOCKED: "High fraud risk detected. Block order and investigate.",
}
