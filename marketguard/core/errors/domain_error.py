"""DomainError: failures carried inside Failure(error=...).

Expected failures (bad rule configuration, a history query that timed out,
an audit sink that refused a write) are values, not exceptions. Each error
family in marketguard.domain.errors subclasses DomainError and may add
fields of its own.

Example:
    >>> error = RateLimitError(
    ...     code=ErrorCode.INVALID_RATE_LIMIT_RULE,
    ...     message="window_ms must be positive, got 0",
    ... )
    >>> str(error)
    'invalid_rate_limit_rule: window_ms must be positive, got 0'
"""

from dataclasses import dataclass

from marketguard.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Failure payload.

    Attributes:
        code: ErrorCode identifying the failure.
        message: Text for logs and operators.
        details: Extra key/value context (endpoint, client id, query name).
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
