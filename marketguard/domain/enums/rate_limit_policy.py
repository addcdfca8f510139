"""Named rate limit presets for endpoint groups.

Usage:
    from marketguard.domain.enums import RateLimitPolicy

    result = await rate_limiter.admit_policy(
        client_id="192.168.1.1",
        endpoint="POST /api/orders",
        policy=RateLimitPolicy.ORDERS,
    )
"""

from enum import Enum


class RateLimitPolicy(str, Enum):
    """Endpoint groups with their own request budget.

    The concrete limits live in configuration (see
    marketguard.infrastructure.rate_limit.policies).
    """

    GLOBAL = "global"
    """Catch-all budget (admin and unclassified endpoints)."""

    AUTH = "auth"
    """Login and signup endpoints."""

    API = "api"
    """General authenticated API endpoints."""

    ORDERS = "orders"
    """Order submission."""
