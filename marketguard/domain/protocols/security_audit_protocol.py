"""Security audit protocol (port).

Sinks for durable security records. From the engine's perspective every
write is fire-and-forget: callers go through SecurityAuditRecorder, which
captures sink failures so they never fail an admission or fraud decision.

Implementations:
    - InMemorySecurityAuditAdapter: development and tests
    - Persistence collaborator adapters: provided by the host application
"""

from typing import Protocol

from marketguard.domain.entities import (
    FraudAnalysis,
    RateLimitViolation,
    SecurityEvent,
    SuspiciousActivity,
)


class SecurityAuditProtocol(Protocol):
    """Audit sinks for security records."""

    async def log_security_event(self, event: SecurityEvent) -> None:
        """Append a security event."""
        ...

    async def log_rate_limit_violation(
        self, ip_address: str, endpoint: str, count: int
    ) -> RateLimitViolation | None:
        """Upsert the violation row for (ip_address, endpoint).

        Args:
            ip_address: Throttled client identifier.
            endpoint: Throttled endpoint.
            count: Requests observed in the window at denial time.

        Returns:
            The upserted violation, when the sink exposes it.
        """
        ...

    async def log_fraud_analysis(self, record: FraudAnalysis) -> None:
        """Append a fraud analysis."""
        ...

    async def log_suspicious_activity(self, activity: SuspiciousActivity) -> None:
        """Append a suspicious activity entry."""
        ...
