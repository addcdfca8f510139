"""RateLimitViolation domain entity.

One row per (ip_address, endpoint), upserted on every denial: the first
denial creates it, later denials bump violation_count and last_violation.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(slots=True, kw_only=True)
class RateLimitViolation:
    """Rate limit violation record.

    Attributes:
        id: Time-ordered identifier (UUIDv7).
        ip_address: Client identifier that was throttled.
        endpoint: Throttled endpoint.
        violation_count: Denials recorded for this key.
        attempt_count: Requests observed in the window at the latest denial.
        window_start: Start of the window the latest denial fell into.
        last_violation: Timestamp of the latest denial.
        is_blocked: Whether the client has been escalated to a block.
        created_at: First denial timestamp.
    """

    ip_address: str
    endpoint: str
    id: UUID = field(default_factory=uuid7)
    violation_count: int = 1
    attempt_count: int = 0
    window_start: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_violation: datetime = field(default_factory=lambda: datetime.now(UTC))
    is_blocked: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def record_violation(
        self, attempt_count: int, window_start: datetime | None = None
    ) -> None:
        """Register another denial for this key."""
        self.violation_count += 1
        self.attempt_count = attempt_count
        self.last_violation = datetime.now(UTC)
        if window_start is not None:
            self.window_start = window_start
