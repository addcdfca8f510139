"""Domain protocols (ports) package.

Protocol definitions the domain needs. Infrastructure adapters implement
these protocols structurally, without inheritance.

Usage:
    from marketguard.domain.protocols import HistoryProviderProtocol, WindowStoreProtocol
"""

from marketguard.domain.protocols.blacklist_store_protocol import (
    BlacklistStoreProtocol,
)
from marketguard.domain.protocols.history_provider_protocol import (
    HistoryProviderProtocol,
)
from marketguard.domain.protocols.logger_protocol import LoggerProtocol
from marketguard.domain.protocols.monitoring_protocol import MonitoringProtocol
from marketguard.domain.protocols.rate_limit_protocol import RateLimitProtocol
from marketguard.domain.protocols.security_audit_protocol import (
    SecurityAuditProtocol,
)
from marketguard.domain.protocols.window_store_protocol import WindowStoreProtocol

__all__ = [
    "BlacklistStoreProtocol",
    "HistoryProviderProtocol",
    "LoggerProtocol",
    "MonitoringProtocol",
    "RateLimitProtocol",
    "SecurityAuditProtocol",
    "WindowStoreProtocol",
]
