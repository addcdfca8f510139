"""Security audit infrastructure.

Components:
    - SecurityAuditRecorder: fire-and-forget wrapper used by the engine
    - InMemorySecurityAuditAdapter: SecurityAuditProtocol for development/tests
"""

from marketguard.infrastructure.audit.audit_recorder import SecurityAuditRecorder
from marketguard.infrastructure.audit.memory_adapter import (
    InMemorySecurityAuditAdapter,
)

__all__ = ["InMemorySecurityAuditAdapter", "SecurityAuditRecorder"]
