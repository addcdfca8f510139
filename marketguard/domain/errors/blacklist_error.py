"""Blacklist store errors."""

from dataclasses import dataclass

from marketguard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class BlacklistError(DomainError):
    """Blacklist store unreachable or timed out.

    The gate fails open on this error and records a high-severity event.

    Attributes:
        blacklist_type: Dimension that was being checked.
    """

    blacklist_type: str
