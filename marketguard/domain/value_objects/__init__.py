"""Domain value objects (immutable).

Usage:
    from marketguard.domain.value_objects import RateLimitRule, RiskFactors
"""

from marketguard.domain.value_objects.blacklist_result import BlacklistCheckResult
from marketguard.domain.value_objects.fraud_result import FraudDetectionResult
from marketguard.domain.value_objects.order import OrderData, PaymentMethod, UserContext
from marketguard.domain.value_objects.rate_limit_rule import (
    RateLimitDecision,
    RateLimitRule,
    RateLimitWindow,
)
from marketguard.domain.value_objects.request_context import (
    RequestContext,
    SuspiciousActivityResult,
)
from marketguard.domain.value_objects.risk_factors import RiskFactors, clamp_risk

__all__ = [
    "BlacklistCheckResult",
    "FraudDetectionResult",
    "OrderData",
    "PaymentMethod",
    "RateLimitDecision",
    "RateLimitRule",
    "RateLimitWindow",
    "RequestContext",
    "RiskFactors",
    "SuspiciousActivityResult",
    "UserContext",
    "clamp_risk",
]
