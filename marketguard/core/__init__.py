"""Shared kernel for marketguard.

Result types, the DomainError base and error codes. Nothing here imports
from the domain, infrastructure or application packages.
"""

from marketguard.core.enums import ErrorCode
from marketguard.core.errors import DomainError
from marketguard.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
