"""Pytest configuration.

Registers markers, auto-marks async tests and provides shared fixtures
(mock logger, fixed clocks, synthetic collaborators).
"""

import inspect
from unittest.mock import MagicMock

import pytest

from marketguard.infrastructure.audit import (
    InMemorySecurityAuditAdapter,
    SecurityAuditRecorder,
)
from tests.utils.fakes import (
    FIXED_NOW,
    InMemoryBlacklistStore,
    InMemoryHistoryProvider,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "asyncio: Async test that requires event loop")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture
def mock_logger():
    """Create mock logger."""
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.critical = MagicMock()
    return logger


@pytest.fixture
def fixed_clock():
    """Clock returning FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def audit():
    """In-memory audit sinks."""
    return InMemorySecurityAuditAdapter()


@pytest.fixture
def recorder(audit, mock_logger):
    """Audit recorder over the in-memory sinks."""
    return SecurityAuditRecorder(audit=audit, logger=mock_logger)


@pytest.fixture
def history():
    """Empty synthetic history provider."""
    return InMemoryHistoryProvider()


@pytest.fixture
def blacklist_store():
    """Empty synthetic blacklist store."""
    return InMemoryBlacklistStore()
