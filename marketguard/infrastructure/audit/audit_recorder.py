"""Fire-and-forget wrapper over the security audit sinks.

Audit writes must never fail an admission or fraud decision. The recorder
converts every sink exception into Failure(AuditError), logs it at error
level and forwards it to the monitoring collaborator. Callers may inspect
the Result but are free to ignore it.

Usage:
    recorder = SecurityAuditRecorder(audit=audit, logger=logger, monitoring=monitoring)

    await recorder.record_event(event)  # never raises
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from marketguard.core.enums import ErrorCode
from marketguard.core.result import Failure, Result, Success
from marketguard.domain.errors import AuditError

if TYPE_CHECKING:
    from marketguard.domain.entities import (
        FraudAnalysis,
        SecurityEvent,
        SuspiciousActivity,
    )
    from marketguard.domain.protocols import (
        LoggerProtocol,
        MonitoringProtocol,
        SecurityAuditProtocol,
    )


class SecurityAuditRecorder:
    """Captures audit sink failures instead of propagating them.

    Args:
        audit: Audit sinks.
        logger: Structured logger.
        monitoring: Optional error reporting collaborator.
    """

    def __init__(
        self,
        *,
        audit: SecurityAuditProtocol,
        logger: LoggerProtocol,
        monitoring: MonitoringProtocol | None = None,
    ) -> None:
        self._audit = audit
        self._logger = logger
        self._monitoring = monitoring

    async def record_event(self, event: SecurityEvent) -> Result[None, AuditError]:
        """Append a security event."""
        return await self._write(
            "security_event",
            lambda: self._audit.log_security_event(event),
            incident_type=event.incident_type.value,
            severity=event.severity.value,
        )

    async def record_rate_limit_violation(
        self, ip_address: str, endpoint: str, count: int
    ) -> Result[None, AuditError]:
        """Upsert the violation row for (ip_address, endpoint)."""
        return await self._write(
            "rate_limit_violation",
            lambda: self._audit.log_rate_limit_violation(ip_address, endpoint, count),
            ip_address=ip_address,
            endpoint=endpoint,
        )

    async def record_fraud_analysis(
        self, record: FraudAnalysis
    ) -> Result[None, AuditError]:
        """Append a fraud analysis."""
        return await self._write(
            "fraud_analysis",
            lambda: self._audit.log_fraud_analysis(record),
            user_id=record.user_id,
            order_id=record.order_id,
        )

    async def record_suspicious_activity(
        self, activity: SuspiciousActivity
    ) -> Result[None, AuditError]:
        """Append a suspicious activity entry."""
        return await self._write(
            "suspicious_activity",
            lambda: self._audit.log_suspicious_activity(activity),
            activity_type=activity.activity_type.value,
        )

    async def _write(
        self,
        record_type: str,
        write: Callable[[], Awaitable[Any]],
        **context: Any,
    ) -> Result[None, AuditError]:
        try:
            await write()
        except Exception as exc:
            self._logger.error(
                "Security audit write failed",
                error=exc,
                record_type=record_type,
                **context,
            )
            if self._monitoring is not None:
                self._monitoring.capture_exception(
                    exc, record_type=record_type, **context
                )
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message=f"Failed to record {record_type}: {exc}",
                    record_type=record_type,
                    details={"error_type": type(exc).__name__},
                )
            )
        return Success(value=None)
