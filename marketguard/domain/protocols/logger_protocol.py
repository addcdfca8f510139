"""Structured logger port.

Every component receives a logger through its constructor and logs a fixed
message plus key/value context. Card numbers and request bodies never go
into log context.

Levels used by the engine:
    debug    allowed rate limit checks, timezone fallbacks
    info     fraud verdicts, admin resets
    warning  denials, blacklist matches, history fallbacks, blocked requests
    error    fail-open paths (window store, blacklist store, audit sinks)
    critical exceptions forwarded to monitoring
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Structured logger (ConsoleAdapter in production, MagicMock in tests)."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a fail-open path.

        Args:
            message: Fixed message; variable parts go in context.
            error: Exception that triggered the fallback, flattened by the
                adapter into error_type and error_message.
            **context: Key/value context.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger that adds `context` to every entry."""
        ...
