"""History provider lookup errors.

Produced by the risk scorer when a history query raises or exceeds its
timeout. The scorer logs the error and substitutes the factor's fallback
value; it is never propagated to callers of detect_order_fraud().
"""

from dataclasses import dataclass

from marketguard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class HistoryLookupError(DomainError):
    """History provider query failure.

    Attributes:
        query: Name of the history provider method that failed.
    """

    query: str
