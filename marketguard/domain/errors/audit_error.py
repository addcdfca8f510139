"""Audit trail error types.

Used when a security event, rate limit violation, fraud analysis or
suspicious activity could not be written to the audit collaborator.
"""

from dataclasses import dataclass

from marketguard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditError(DomainError):
    """Audit sink failure.

    Attributes:
        record_type: Kind of record that failed to persist.
    """

    record_type: str
