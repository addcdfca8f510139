"""Blacklist store protocol (port).

Read-only view of the blacklist maintained by the persistence collaborator.
Implementations may raise when the store is unreachable; the blacklist
gate fails open on such errors.
"""

from typing import Protocol

from marketguard.domain.enums import BlacklistType
from marketguard.domain.value_objects.blacklist_result import BlacklistCheckResult


class BlacklistStoreProtocol(Protocol):
    """Blacklist lookups by dimension."""

    async def is_blacklisted(
        self, blacklist_type: BlacklistType, value: str
    ) -> BlacklistCheckResult:
        """Look up one value in one blacklist dimension.

        Args:
            blacklist_type: ip_address, user_account or email_domain.
            value: IP address, user id or email domain.

        Returns:
            BlacklistCheckResult with the entry's reason when matched.
        """
        ...
