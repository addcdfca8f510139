"""Fixed-window rate limiting infrastructure.

Components:
    - MemoryWindowStore: process-local WindowStoreProtocol implementation
    - FixedWindowRateLimiter: RateLimitProtocol implementation
    - build_policy_rules: RateLimitPolicy -> RateLimitRule from settings
"""

from marketguard.infrastructure.rate_limit.fixed_window_adapter import (
    FixedWindowRateLimiter,
)
from marketguard.infrastructure.rate_limit.memory_window_store import (
    MemoryWindowStore,
)
from marketguard.infrastructure.rate_limit.policies import build_policy_rules

__all__ = [
    "FixedWindowRateLimiter",
    "MemoryWindowStore",
    "build_policy_rules",
]
