"""Monitoring adapters implementing MonitoringProtocol."""

from marketguard.infrastructure.monitoring.logging_monitor import LoggingMonitor

__all__ = ["LoggingMonitor"]
