"""In-memory SecurityAuditProtocol implementation.

Keeps every record in process memory. Used in development and tests, and
by build_security_gate() when the host application passes no audit sinks.

Rate limit violations are upserted on (ip_address, endpoint): the first
denial creates the row and later denials bump its counters.
"""

from marketguard.domain.entities import (
    FraudAnalysis,
    RateLimitViolation,
    SecurityEvent,
    SuspiciousActivity,
)


class InMemorySecurityAuditAdapter:
    """Audit sinks backed by lists and a dict."""

    def __init__(self) -> None:
        self.security_events: list[SecurityEvent] = []
        self.fraud_analyses: list[FraudAnalysis] = []
        self.suspicious_activities: list[SuspiciousActivity] = []
        self._violations: dict[tuple[str, str], RateLimitViolation] = {}

    @property
    def rate_limit_violations(self) -> list[RateLimitViolation]:
        return list(self._violations.values())

    async def log_security_event(self, event: SecurityEvent) -> None:
        self.security_events.append(event)

    async def log_rate_limit_violation(
        self, ip_address: str, endpoint: str, count: int
    ) -> RateLimitViolation:
        key = (ip_address, endpoint)
        violation = self._violations.get(key)
        if violation is None:
            violation = RateLimitViolation(
                ip_address=ip_address,
                endpoint=endpoint,
                attempt_count=count,
            )
            self._violations[key] = violation
        else:
            violation.record_violation(count)
        return violation

    async def log_fraud_analysis(self, record: FraudAnalysis) -> None:
        self.fraud_analyses.append(record)

    async def log_suspicious_activity(self, activity: SuspiciousActivity) -> None:
        self.suspicious_activities.append(activity)

    def get_violation(self, ip_address: str, endpoint: str) -> RateLimitViolation | None:
        """Return the violation row for a key, if any."""
        return self._violations.get((ip_address, endpoint))
