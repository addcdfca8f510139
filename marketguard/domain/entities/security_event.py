"""SecurityEvent domain entity.

Append-only record of a security-relevant incident. Only the resolution
fields (is_resolved, resolved_at, resolved_by) change after creation, and
only through resolve(), which is driven by a resolution workflow outside
this library.

Example:
    >>> event = SecurityEvent(
    ...     incident_type=IncidentType.RATE_LIMIT_EXCEEDED,
    ...     severity=Severity.MEDIUM,
    ...     ip_address="192.168.1.1",
    ...     description="Rate limit exceeded for endpoint orders",
    ...     metadata={"endpoint": "orders", "request_count": 5, "max_requests": 5},
    ... )
    >>> event.is_resolved
    False
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from marketguard.domain.enums import IncidentType, Severity


@dataclass(slots=True, kw_only=True)
class SecurityEvent:
    """Security incident record.

    Attributes:
        id: Time-ordered identifier (UUIDv7).
        incident_type: Incident category.
        severity: low, medium, high or critical.

        Request Information:
            user_id, session_id: Actor, when known.
            ip_address, user_agent: Client network identity.
            request_path, request_method: What was called.
            request_headers, request_body: Optional snapshots.
            response_status: Status returned to the client, if any.
            geo_location: Resolved client location.

        Assessment:
            is_blocked: Whether the request was rejected.
            risk_score: Score that triggered the event (0 when not scored).
            description: Human-readable summary.
            metadata: Structured incident details.

        Resolution:
            is_resolved, resolved_at, resolved_by: Set by resolve().
    """

    incident_type: IncidentType
    severity: Severity
    id: UUID = field(default_factory=uuid7)

    user_id: str | None = None
    session_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    request_path: str | None = None
    request_method: str | None = None
    request_headers: dict[str, str] | None = None
    request_body: Any = None
    response_status: int | None = None
    geo_location: dict[str, Any] | None = None

    is_blocked: bool = False
    risk_score: float = 0.0
    description: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    is_resolved: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    resolved_at: datetime | None = None
    resolved_by: str | None = None

    def resolve(self, resolved_by: str) -> None:
        """Mark the incident as handled.

        Args:
            resolved_by: Operator who resolved the incident.

        Raises:
            ValueError: If the event is already resolved.
        """
        if self.is_resolved:
            raise ValueError(f"Security event {self.id} is already resolved")
        self.is_resolved = True
        self.resolved_at = datetime.now(UTC)
        self.resolved_by = resolved_by
