"""Domain entities.

Durable security records written through the audit collaborator, plus the
read-only history records consumed from the history provider.
"""

from marketguard.domain.entities.fraud_analysis import FraudAnalysis
from marketguard.domain.entities.history_records import (
    BehaviorProfile,
    KnownDevice,
    OrderRecord,
    SessionRecord,
    UserAccount,
    Verification,
)
from marketguard.domain.entities.rate_limit_violation import RateLimitViolation
from marketguard.domain.entities.security_event import SecurityEvent
from marketguard.domain.entities.suspicious_activity import SuspiciousActivity

__all__ = [
    "BehaviorProfile",
    "FraudAnalysis",
    "KnownDevice",
    "OrderRecord",
    "RateLimitViolation",
    "SecurityEvent",
    "SessionRecord",
    "SuspiciousActivity",
    "UserAccount",
    "Verification",
]
