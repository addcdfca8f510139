"""Domain error types.

Usage:
    from marketguard.domain.errors import RateLimitError, HistoryLookupError
"""

from marketguard.domain.errors.audit_error import AuditError
from marketguard.domain.errors.blacklist_error import BlacklistError
from marketguard.domain.errors.history_error import HistoryLookupError
from marketguard.domain.errors.rate_limit_error import RateLimitError

__all__ = [
    "AuditError",
    "BlacklistError",
    "HistoryLookupError",
    "RateLimitError",
]
