"""Blacklist gate for order submission.

Checks the client IP, the account and the email domain against the
blacklist store, in that order, and stops at the first match.

Fail-Open Design:
    A lookup that raises or times out is treated as "not blacklisted" and
    the remaining lookups still run, so a later match is still reported.
    When no dimension matched and at least one lookup failed, a single
    high-severity blacklist_check_failed event makes the gap visible.

Usage:
    gate = BlacklistGate(store=store, logger=logger, recorder=recorder)
    result = await gate.check_blacklist("41.138.90.12", user_id="user-1")
    if result.is_blacklisted:
        ...
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from marketguard.core.enums import ErrorCode
from marketguard.core.result import Failure, Result, Success
from marketguard.domain.entities import SecurityEvent
from marketguard.domain.enums import BlacklistType, IncidentType, Severity
from marketguard.domain.errors import BlacklistError
from marketguard.domain.value_objects.blacklist_result import BlacklistCheckResult

if TYPE_CHECKING:
    from marketguard.domain.protocols import (
        BlacklistStoreProtocol,
        LoggerProtocol,
        MonitoringProtocol,
    )
    from marketguard.infrastructure.audit.audit_recorder import SecurityAuditRecorder


def email_domain(email: str) -> str | None:
    """Return the part after '@', or None when the address has no domain.

    Examples:
        >>> email_domain("awa@example.bf")
        'example.bf'
        >>> email_domain("not-an-email") is None
        True
    """
    _, separator, domain = email.partition("@")
    if not separator or not domain:
        return None
    return domain


class BlacklistGate:
    """IP, account and email-domain blacklist checks.

    Args:
        store: Blacklist store.
        logger: Structured logger.
        recorder: Audit recorder for the lookup-failure event.
        monitoring: Receives lookup exceptions.
        timeout_seconds: Upper bound for each store lookup.
    """

    def __init__(
        self,
        *,
        store: BlacklistStoreProtocol,
        logger: LoggerProtocol,
        recorder: SecurityAuditRecorder | None = None,
        monitoring: MonitoringProtocol | None = None,
        timeout_seconds: float = 1.0,
    ) -> None:
        self._store = store
        self._logger = logger
        self._recorder = recorder
        self._monitoring = monitoring
        self._timeout_seconds = timeout_seconds

    async def check_blacklist(
        self,
        ip_address: str,
        user_id: str | None = None,
        email: str | None = None,
    ) -> BlacklistCheckResult:
        """Check every supplied dimension, first match wins.

        Args:
            ip_address: Client IP (always checked).
            user_id: Account to check, if authenticated.
            email: Email whose domain is checked, if supplied.

        Returns:
            BlacklistCheckResult; is_blacklisted=False when nothing matched
            or every failing lookup was skipped (fail-open).
        """
        checks: list[tuple[BlacklistType, str]] = [
            (BlacklistType.IP_ADDRESS, ip_address)
        ]
        if user_id:
            checks.append((BlacklistType.USER_ACCOUNT, user_id))
        if email:
            domain = email_domain(email)
            if domain is not None:
                checks.append((BlacklistType.EMAIL_DOMAIN, domain))

        failures: list[BlacklistError] = []
        for blacklist_type, value in checks:
            result = await self._lookup(blacklist_type, value)
            match result:
                case Success(value=check) if check.is_blacklisted:
                    self._logger.warning(
                        "Blacklist match",
                        blacklist_type=blacklist_type.value,
                        reason=check.reason,
                    )
                    return BlacklistCheckResult(
                        is_blacklisted=True,
                        reason=check.reason,
                        matched_type=check.matched_type or blacklist_type,
                    )
                case Failure(error=error):
                    failures.append(error)
                case _:
                    pass

        if failures:
            await self._record_check_failed(ip_address, user_id, failures)

        return BlacklistCheckResult.clear()

    async def _lookup(
        self, blacklist_type: BlacklistType, value: str
    ) -> Result[BlacklistCheckResult, BlacklistError]:
        try:
            check = await asyncio.wait_for(
                self._store.is_blacklisted(blacklist_type, value),
                timeout=self._timeout_seconds,
            )
        except Exception as exc:  # Fail-open
            timed_out = isinstance(exc, TimeoutError)
            self._logger.error(
                "Blacklist lookup failed - treating as not blacklisted",
                error=exc,
                blacklist_type=blacklist_type.value,
                timed_out=timed_out,
            )
            if self._monitoring is not None:
                self._monitoring.capture_exception(
                    exc, blacklist_type=blacklist_type.value
                )
            return Failure(
                error=BlacklistError(
                    code=ErrorCode.BLACKLIST_STORE_UNAVAILABLE,
                    message=(
                        "Blacklist lookup timed out"
                        if timed_out
                        else f"Blacklist lookup failed: {exc}"
                    ),
                    blacklist_type=blacklist_type.value,
                    details={"error_type": type(exc).__name__},
                )
            )
        return Success(value=check)

    async def _record_check_failed(
        self,
        ip_address: str,
        user_id: str | None,
        failures: list[BlacklistError],
    ) -> None:
        if self._recorder is None:
            return
        await self._recorder.record_event(
            SecurityEvent(
                incident_type=IncidentType.BLACKLIST_CHECK_FAILED,
                severity=Severity.HIGH,
                user_id=user_id,
                ip_address=ip_address,
                description="Blacklist check failed; request allowed without it",
                metadata={
                    "failed_checks": [error.blacklist_type for error in failures],
                    "errors": [error.message for error in failures],
                },
            )
        )
