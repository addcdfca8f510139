"""Blacklist lookup result."""

from dataclasses import dataclass

from marketguard.domain.enums import BlacklistType


@dataclass(frozen=True, slots=True, kw_only=True)
class BlacklistCheckResult:
    """Outcome of a blacklist lookup.

    Returned both by the blacklist store (one dimension) and by the gate
    (all dimensions, first match wins).

    Attributes:
        is_blacklisted: Whether a matching entry exists.
        reason: Reason recorded on the matching entry.
        matched_type: Dimension that matched.
    """

    is_blacklisted: bool
    reason: str | None = None
    matched_type: BlacklistType | None = None

    @classmethod
    def clear(cls) -> "BlacklistCheckResult":
        """Result for a value with no blacklist entry."""
        return cls(is_blacklisted=False)
