"""Security event severity levels."""

from enum import Enum


class Severity(str, Enum):
    """Severity of a recorded security event.

    String Enum:
        Inherits from str for easy serialization and database storage.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
