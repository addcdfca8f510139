"""FraudAnalysis domain entity.

Appended once per scored order; a human reviewer may later attach a
review (reviewed_at, reviewed_by, notes) and override the status.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from marketguard.domain.enums import FraudStatus
from marketguard.domain.value_objects.risk_factors import RiskFactors


@dataclass(slots=True, kw_only=True)
class FraudAnalysis:
    """Fraud analysis record.

    Attributes:
        id: Time-ordered identifier (UUIDv7).
        user_id: Account that placed the order.
        order_id: Scored order (None if scored before persistence).
        risk_score: Final score, may exceed 1.0.
        risk_factors: The six factor values.
        status: Verdict.
        rules: Rule overlay tags that fired.
        ip_address, device_fingerprint, geo_location: Request context.
        flagged_at: When the analysis was produced.
        reviewed_at, reviewed_by, notes: Human review, set by mark_reviewed().
    """

    user_id: str
    risk_score: float
    risk_factors: RiskFactors
    status: FraudStatus
    id: UUID = field(default_factory=uuid7)
    order_id: str | None = None
    rules: list[str] = field(default_factory=list)
    ip_address: str | None = None
    device_fingerprint: str | None = None
    geo_location: dict[str, Any] | None = None
    flagged_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    notes: str | None = None

    @property
    def is_reviewed(self) -> bool:
        """Whether a reviewer has signed off on this analysis."""
        return self.reviewed_at is not None

    def mark_reviewed(
        self,
        *,
        reviewed_by: str,
        status: FraudStatus | None = None,
        notes: str | None = None,
    ) -> None:
        """Attach a human review.

        Args:
            reviewed_by: Reviewer identifier.
            status: Overriding verdict, if the reviewer changed it.
            notes: Free-text review notes.
        """
        self.reviewed_at = datetime.now(UTC)
        self.reviewed_by = reviewed_by
        if status is not None:
            self.status = status
        if notes is not None:
            self.notes = notes
