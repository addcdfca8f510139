"""Core enums package.

Usage:
    from marketguard.core.enums import ErrorCode, Environment
"""

from marketguard.core.enums.environment import Environment
from marketguard.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
