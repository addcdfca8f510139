"""Read-only records returned by the history provider.

These mirror what the persistence collaborator stores for orders, sessions,
devices, behavior profiles, accounts and verifications. The security engine
never writes them.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from marketguard.domain.enums import VerificationStatus, VerificationType


@dataclass(frozen=True, slots=True, kw_only=True)
class OrderRecord:
    """Past order placed by the account."""

    order_id: str
    total_amount: Decimal
    created_at: datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionRecord:
    """Past session opened by the account."""

    ip_address: str
    created_at: datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class KnownDevice:
    """Device previously registered to the account."""

    fingerprint: str


@dataclass(frozen=True, slots=True, kw_only=True)
class BehaviorProfile:
    """Aggregated ordering behavior for the account."""

    average_order_amount: Decimal


@dataclass(frozen=True, slots=True, kw_only=True)
class UserAccount:
    """Account metadata."""

    user_id: str
    created_at: datetime
    email: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Verification:
    """Verification attempt on the account."""

    verification_type: VerificationType
    status: VerificationStatus

    @property
    def is_verified(self) -> bool:
        return self.status == VerificationStatus.VERIFIED
