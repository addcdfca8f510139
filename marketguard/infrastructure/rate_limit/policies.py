"""Rate limit policy implementation (RateLimitPolicy -> RateLimitRule).

Two-tier configuration:
    Tier 1: callers pick a RateLimitPolicy per endpoint group.
    Tier 2: this module maps each policy to concrete limits from Settings.

Changing a limit here (or via MARKETGUARD_* environment variables) changes
it for every endpoint using that policy.
"""

from marketguard.core.config import Settings
from marketguard.domain.enums import RateLimitPolicy
from marketguard.domain.value_objects.rate_limit_rule import RateLimitRule


def build_policy_rules(settings: Settings) -> dict[RateLimitPolicy, RateLimitRule]:
    """Build the rule for every named policy.

    All policies share the configured window length; only the request
    budget differs. Rules are disabled when rate limiting is turned off.

    Args:
        settings: Loaded settings.

    Returns:
        Dict mapping each RateLimitPolicy to its RateLimitRule.

    Example:
        >>> rules = build_policy_rules(Settings())
        >>> rules[RateLimitPolicy.ORDERS].max_requests
        10
    """
    budgets: dict[RateLimitPolicy, int] = {
        RateLimitPolicy.GLOBAL: settings.rate_limit_max_requests,
        RateLimitPolicy.AUTH: settings.auth_rate_limit_max_requests,
        RateLimitPolicy.API: settings.api_rate_limit_max_requests,
        RateLimitPolicy.ORDERS: settings.orders_rate_limit_max_requests,
    }
    return {
        policy: RateLimitRule(
            max_requests=max_requests,
            window_ms=settings.rate_limit_window_ms,
            enabled=settings.rate_limiting_enabled,
        )
        for policy, max_requests in budgets.items()
    }
