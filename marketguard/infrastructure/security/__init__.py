"""Request pattern security checks."""

from marketguard.infrastructure.security.suspicious_activity_detector import (
    SuspiciousActivityDetector,
)

__all__ = ["SuspiciousActivityDetector"]
