"""Inbound request snapshot used by the security gate."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from marketguard.core.fingerprinting import generate_device_fingerprint, get_client_ip
from marketguard.domain.enums import IncidentType


@dataclass(frozen=True, slots=True, kw_only=True)
class RequestContext:
    """Transport-agnostic view of an HTTP request.

    Attributes:
        ip_address: Resolved client IP.
        method: HTTP method.
        path: Request path.
        user_agent: User-Agent header value.
        device_fingerprint: SHA256 fingerprint of the request headers.
        body: Raw request body text, if any.
        user_id: Authenticated account, if any.
        session_id: Session identifier, if any.
        geo_location: Resolved location, supplied by the caller.
    """

    ip_address: str
    method: str
    path: str
    user_agent: str = ""
    device_fingerprint: str | None = None
    body: str | None = None
    user_id: str | None = None
    session_id: str | None = None
    geo_location: dict[str, Any] | None = None

    @classmethod
    def from_headers(
        cls,
        *,
        method: str,
        path: str,
        headers: Mapping[str, str],
        remote_addr: str | None = None,
        body: str | None = None,
        user_id: str | None = None,
        session_id: str | None = None,
        geo_location: dict[str, Any] | None = None,
    ) -> "RequestContext":
        """Build a context from raw headers (IP and fingerprint derived)."""
        user_agent = next(
            (value for key, value in headers.items() if key.lower() == "user-agent"),
            "",
        )
        return cls(
            ip_address=get_client_ip(headers, remote_addr),
            method=method.upper(),
            path=path,
            user_agent=user_agent,
            device_fingerprint=generate_device_fingerprint(headers),
            body=body,
            user_id=user_id,
            session_id=session_id,
            geo_location=geo_location,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class SuspiciousActivityResult:
    """Outcome of request pattern inspection.

    Attributes:
        risk_score: Sum of anomaly contributions (not clamped).
        anomaly_factors: Tags of anomalies found.
        is_logged: Whether the activity crossed the logging threshold.
        is_blocked: Whether the request must be rejected.
        incident_type: Incident category when blocked.
    """

    risk_score: float
    anomaly_factors: tuple[str, ...] = field(default_factory=tuple)
    is_logged: bool = False
    is_blocked: bool = False
    incident_type: IncidentType | None = None
