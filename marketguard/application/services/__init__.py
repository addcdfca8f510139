"""Application services."""

from marketguard.application.services.security_gate import SecurityGateService

__all__ = ["SecurityGateService"]
