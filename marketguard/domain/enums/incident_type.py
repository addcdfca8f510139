"""Security incident categories.

Usage:
    from marketguard.domain.enums import IncidentType

    event = SecurityEvent(
        incident_type=IncidentType.RATE_LIMIT_EXCEEDED,
        severity=Severity.MEDIUM,
        ...
    )
"""

from enum import Enum


class IncidentType(str, Enum):
    """Incident type recorded on a SecurityEvent.

    Values are snake_case strings so they can be stored verbatim by the
    audit collaborator.
    """

    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    """A client exceeded the request budget for an endpoint window."""

    BLACKLIST_ACCESS_ATTEMPT = "blacklist_access_attempt"
    """A blacklisted IP, account or email domain tried to submit an order."""

    BLACKLIST_CHECK_FAILED = "blacklist_check_failed"
    """The blacklist store could not be queried; the gate failed open."""

    FRAUDULENT_ORDER = "fraudulent_order"
    """An order was blocked or sent to manual review by the fraud engine."""

    SQL_INJECTION = "sql_injection"
    SUSPICIOUS_LOGIN = "suspicious_login"
    MALICIOUS_UPLOAD = "malicious_upload"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"
