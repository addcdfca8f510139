"""Domain-level error codes (machine-readable).

Grouped by the subsystem that produces them. Logged as error_code.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Rate limiting
    INVALID_RATE_LIMIT_RULE = "invalid_rate_limit_rule"
    RATE_LIMIT_RESET_FAILED = "rate_limit_reset_failed"

    # History provider errors
    HISTORY_LOOKUP_FAILED = "history_lookup_failed"
    HISTORY_LOOKUP_TIMEOUT = "history_lookup_timeout"

    # Blacklist errors
    BLACKLIST_STORE_UNAVAILABLE = "blacklist_store_unavailable"

    # Audit trail errors
    AUDIT_RECORD_FAILED = "audit_record_failed"
