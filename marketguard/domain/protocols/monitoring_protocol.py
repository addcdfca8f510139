"""Monitoring protocol (port).

Receives failures that were swallowed to keep a decision path alive
(audit sink errors, blacklist outages) so operators can still see them.
"""

from typing import Any, Protocol


class MonitoringProtocol(Protocol):
    """Error reporting collaborator."""

    def capture_exception(self, error: BaseException, /, **context: Any) -> None:
        """Report a handled exception with structured context."""
        ...
