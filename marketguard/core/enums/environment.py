"""Deployment environments recognised by Settings.

Anything other than DEVELOPMENT switches the default logger to JSON output.
"""

from enum import Enum


class Environment(str, Enum):
    """Where the engine is running (MARKETGUARD_ENVIRONMENT)."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
