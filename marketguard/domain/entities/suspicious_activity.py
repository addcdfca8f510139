"""SuspiciousActivity domain entity (append-only)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from marketguard.domain.enums import ActivityType


@dataclass(slots=True, kw_only=True)
class SuspiciousActivity:
    """Request that crossed the suspicious-activity logging threshold."""

    activity_type: ActivityType
    risk_score: float
    id: UUID = field(default_factory=uuid7)
    user_id: str | None = None
    anomaly_factors: list[str] = field(default_factory=list)
    ip_address: str | None = None
    user_agent: str | None = None
    geo_location: dict[str, Any] | None = None
    session_data: dict[str, Any] = field(default_factory=dict)
    detected_at: datetime = field(default_factory=lambda: datetime.now(UTC))
