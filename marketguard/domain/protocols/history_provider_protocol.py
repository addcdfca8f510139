"""History provider protocol (port).

Read-only queries against the persistence collaborator, one method per
signal the risk scorer needs. Synthetic implementations drive fully
deterministic tests without a database.

Error Handling:
    Implementations may raise on connectivity errors. The risk scorer
    bounds every call with a timeout and isolates failures per factor, so
    a failing method degrades one factor to its fallback value.
"""

from typing import Protocol

from marketguard.domain.entities.history_records import (
    BehaviorProfile,
    KnownDevice,
    OrderRecord,
    SessionRecord,
    UserAccount,
    Verification,
)


class HistoryProviderProtocol(Protocol):
    """Order, session, device, profile, account and payment history."""

    async def get_user_recent_orders(
        self, user_id: str, hours: int
    ) -> list[OrderRecord]:
        """Orders placed by the account in the trailing `hours`."""
        ...

    async def get_user_recent_sessions(
        self, user_id: str, days: int
    ) -> list[SessionRecord]:
        """Sessions opened by the account in the trailing `days`."""
        ...

    async def get_user_known_devices(self, user_id: str) -> list[KnownDevice]:
        """Devices registered to the account."""
        ...

    async def get_user_behavior_profile(
        self, user_id: str
    ) -> BehaviorProfile | None:
        """Behavior profile, or None when the account has no history."""
        ...

    async def get_user(self, user_id: str) -> UserAccount | None:
        """Account metadata, or None when the account does not exist."""
        ...

    async def get_user_verifications(self, user_id: str) -> list[Verification]:
        """Verification records for the account."""
        ...

    async def is_known_payment_method(self, user_id: str, hashed_id: str) -> bool:
        """Whether the hashed payment identifier was used by the account before."""
        ...
