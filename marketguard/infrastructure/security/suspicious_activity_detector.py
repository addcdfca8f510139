"""Suspicious request pattern detection.

Scores a request on four anomalies:

    POST body over 100,000 chars        +0.3  LARGE_REQUEST_BODY
    SQL/script injection pattern        +0.8  SQL_INJECTION_ATTEMPT
    local time before 04:00/after 23:00 +0.2  UNUSUAL_HOUR
    automated user agent                +0.4  SUSPICIOUS_USER_AGENT

A score >= 0.4 is logged as SuspiciousActivity. A score >= 0.8 blocks the
request and records a high-severity SecurityEvent.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime, time
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from marketguard.domain.entities import SecurityEvent, SuspiciousActivity
from marketguard.domain.enums import ActivityType, IncidentType, Severity
from marketguard.domain.value_objects.request_context import (
    RequestContext,
    SuspiciousActivityResult,
)

if TYPE_CHECKING:
    from marketguard.domain.protocols import LoggerProtocol
    from marketguard.infrastructure.audit.audit_recorder import SecurityAuditRecorder

LOG_THRESHOLD = 0.4
BLOCK_THRESHOLD = 0.8
MAX_BODY_CHARS = 100_000

INJECTION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"union\s+select",
        r"drop\s+table",
        r"delete\s+from",
        r"insert\s+into",
        r"update\s+set",
        r"script\s*>",
        r"<\s*script",
    )
)
AUTOMATED_AGENTS = ("bot", "crawler", "spider", "scraper", "curl", "wget")

_QUIET_HOURS_END = time(4)
_QUIET_HOURS_START = time(23)


def incident_type_for(anomaly_factors: tuple[str, ...]) -> IncidentType:
    """Pick the incident category for a blocked request."""
    if "SQL_INJECTION_ATTEMPT" in anomaly_factors:
        return IncidentType.SQL_INJECTION
    if "SUSPICIOUS_USER_AGENT" in anomaly_factors:
        return IncidentType.SUSPICIOUS_LOGIN
    if "LARGE_REQUEST_BODY" in anomaly_factors:
        return IncidentType.MALICIOUS_UPLOAD
    return IncidentType.SUSPICIOUS_ACTIVITY


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SuspiciousActivityDetector:
    """Request anomaly scoring with logging and blocking thresholds.

    Args:
        recorder: Audit recorder for activities and block events.
        logger: Structured logger.
        market_timezone: Timezone for the local hour when the request
            carries no geo_location timezone.
        clock: Returns the current aware datetime (injectable for tests).
    """

    def __init__(
        self,
        *,
        recorder: SecurityAuditRecorder,
        logger: LoggerProtocol,
        market_timezone: str = "Africa/Ouagadougou",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._recorder = recorder
        self._logger = logger
        self._market_timezone = ZoneInfo(market_timezone)
        self._clock = clock

    def score(self, request: RequestContext) -> tuple[float, tuple[str, ...]]:
        """Score a request without recording anything.

        Returns:
            (risk_score, anomaly_factors)
        """
        risk_score = 0.0
        factors: list[str] = []

        if request.method == "POST" and request.body:
            if len(request.body) > MAX_BODY_CHARS:
                risk_score += 0.3
                factors.append("LARGE_REQUEST_BODY")

            body = request.body.lower()
            if any(pattern.search(body) for pattern in INJECTION_PATTERNS):
                risk_score += 0.8
                factors.append("SQL_INJECTION_ATTEMPT")

        local_time = self._local_now(request).time()
        if local_time < _QUIET_HOURS_END or local_time > _QUIET_HOURS_START:
            risk_score += 0.2
            factors.append("UNUSUAL_HOUR")

        user_agent = request.user_agent.lower()
        if any(agent in user_agent for agent in AUTOMATED_AGENTS):
            risk_score += 0.4
            factors.append("SUSPICIOUS_USER_AGENT")

        return risk_score, tuple(factors)

    async def inspect(self, request: RequestContext) -> SuspiciousActivityResult:
        """Score a request and record it when it crosses the thresholds."""
        risk_score, factors = self.score(request)

        if risk_score < LOG_THRESHOLD:
            return SuspiciousActivityResult(
                risk_score=risk_score, anomaly_factors=factors
            )

        now = self._clock()
        await self._recorder.record_suspicious_activity(
            SuspiciousActivity(
                activity_type=ActivityType.from_path(request.path),
                risk_score=risk_score,
                user_id=request.user_id,
                anomaly_factors=list(factors),
                ip_address=request.ip_address,
                user_agent=request.user_agent,
                geo_location=request.geo_location,
                session_data={
                    "path": request.path,
                    "method": request.method,
                    "timestamp": now.isoformat(),
                },
            )
        )

        if risk_score < BLOCK_THRESHOLD:
            self._logger.info(
                "Suspicious activity logged",
                path=request.path,
                risk_score=risk_score,
                anomaly_factors=list(factors),
            )
            return SuspiciousActivityResult(
                risk_score=risk_score, anomaly_factors=factors, is_logged=True
            )

        incident_type = incident_type_for(factors)
        self._logger.warning(
            "High-risk activity blocked",
            path=request.path,
            ip_address=request.ip_address,
            risk_score=risk_score,
            anomaly_factors=list(factors),
        )
        await self._recorder.record_event(
            SecurityEvent(
                incident_type=incident_type,
                severity=Severity.HIGH,
                user_id=request.user_id,
                session_id=request.session_id,
                ip_address=request.ip_address,
                user_agent=request.user_agent,
                request_path=request.path,
                request_method=request.method,
                geo_location=request.geo_location,
                response_status=403,
                is_blocked=True,
                risk_score=risk_score,
                description=f"High-risk activity blocked: {', '.join(factors)}",
                metadata={"risk_score": risk_score, "anomaly_factors": list(factors)},
            )
        )
        return SuspiciousActivityResult(
            risk_score=risk_score,
            anomaly_factors=factors,
            is_logged=True,
            is_blocked=True,
            incident_type=incident_type,
        )

    def _local_now(self, request: RequestContext) -> datetime:
        tz = self._market_timezone
        tz_name = (request.geo_location or {}).get("timezone")
        if tz_name:
            try:
                tz = ZoneInfo(tz_name)
            except (ZoneInfoNotFoundError, ValueError):
                self._logger.debug("Unknown geo timezone", timezone=tz_name)
        return self._clock().astimezone(tz)
