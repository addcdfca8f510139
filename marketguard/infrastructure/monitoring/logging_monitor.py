"""MonitoringProtocol adapter that reports captured exceptions to the log.

Default monitoring collaborator when the host application does not wire an
error tracker. Reports at critical level so captured failures stand out
from ordinary error logs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from marketguard.domain.protocols import LoggerProtocol


class LoggingMonitor:
    """Logs every captured exception.

    Args:
        logger: Structured logger.
    """

    def __init__(self, *, logger: LoggerProtocol) -> None:
        self._logger = logger
        self.captured_count = 0

    def capture_exception(self, error: BaseException, /, **context: Any) -> None:
        self.captured_count += 1
        self._logger.critical(
            "Exception captured",
            error=error if isinstance(error, Exception) else None,
            **context,
        )
