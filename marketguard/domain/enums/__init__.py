"""Domain enums for the security engine.

All domain enums live in marketguard/domain/enums/ for discoverability.

Available Enums:
    - Severity: Security event severity (low, medium, high, critical)
    - IncidentType: Security incident categories
    - FraudStatus: Fraud verdicts (approved, flagged, manual_review, blocked)
    - BlacklistType: Blacklist dimensions (ip_address, user_account, email_domain)
    - PaymentMethodType: Payment instruments
    - VerificationType / VerificationStatus: Account verification records
    - RateLimitPolicy: Named endpoint throttling presets
    - ActivityType: Request categories for suspicious activity logging
"""

from marketguard.domain.enums.activity_type import ActivityType
from marketguard.domain.enums.blacklist_type import BlacklistType
from marketguard.domain.enums.fraud_status import FraudStatus
from marketguard.domain.enums.incident_type import IncidentType
from marketguard.domain.enums.payment_method_type import PaymentMethodType
from marketguard.domain.enums.rate_limit_policy import RateLimitPolicy
from marketguard.domain.enums.severity import Severity
from marketguard.domain.enums.verification import (
    VerificationStatus,
    VerificationType,
)

__all__ = [
    "ActivityType",
    "BlacklistType",
    "FraudStatus",
    "IncidentType",
    "PaymentMethodType",
    "RateLimitPolicy",
    "Severity",
    "VerificationStatus",
    "VerificationType",
]
