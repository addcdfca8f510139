"""Error base class shared by every domain error family."""

from marketguard.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
