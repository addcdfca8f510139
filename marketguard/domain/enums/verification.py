"""Account verification enums."""

from enum import Enum


class VerificationType(str, Enum):
    """Channel an account verification was performed on."""

    EMAIL = "email"
    PHONE = "phone"


class VerificationStatus(str, Enum):
    """State of a verification record."""

    PENDING = "pending"
    VERIFIED = "verified"
    FAILED = "failed"
