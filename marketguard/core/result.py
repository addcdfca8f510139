"""Success/Failure result types.

The rate limiter, history lookups, blacklist lookups and audit writes
return a Result when a failure is part of normal operation. Callers branch
with structural pattern matching:

    match await limiter.admit(...):
        case Success(value=decision) if not decision.allowed:
            reject(decision.retry_after_seconds)
        case Failure(error=error):
            logger.error("Rate limit check failed", error_code=error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Operation completed; `value` holds its output."""

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Operation did not complete; `error` says why (usually a DomainError)."""

    error: E


Result: TypeAlias = Success[T] | Failure[E]
