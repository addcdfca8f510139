"""Logging adapters implementing LoggerProtocol."""

from marketguard.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
