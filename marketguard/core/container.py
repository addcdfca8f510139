"""Dependency factories (composition root).

Application-scoped singletons for engine infrastructure:
- Logging (structlog console/JSON)
- Window store (in-memory, one per process)
- Rate limiting (fixed window)

External collaborators (history, blacklist store, audit sinks, monitoring)
belong to the host application and are passed to build_security_gate().
Audit sinks and monitoring have in-process defaults.

Usage:
    from marketguard.core.container import build_security_gate, get_logger

    gate = build_security_gate(
        history=history_provider,
        blacklist_store=blacklist_store,
        audit=audit_sinks,
    )
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from marketguard.core.config import Settings, get_settings

if TYPE_CHECKING:
    from marketguard.application.services.security_gate import SecurityGateService
    from marketguard.domain.protocols import (
        BlacklistStoreProtocol,
        HistoryProviderProtocol,
        LoggerProtocol,
        MonitoringProtocol,
        RateLimitProtocol,
        SecurityAuditProtocol,
        WindowStoreProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production or log_json: ConsoleAdapter (JSON)
    """
    from marketguard.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.log_json or settings.environment.value != "development"
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_window_store() -> "WindowStoreProtocol":
    """Return the process-wide window store.

    Every limiter in the process shares it, so counters survive across
    gate instances. Multi-process deployments get one store per worker.
    """
    from marketguard.infrastructure.rate_limit.memory_window_store import (
        MemoryWindowStore,
    )

    return MemoryWindowStore()


@lru_cache()
def get_rate_limiter() -> "RateLimitProtocol":
    """Return a rate limiter singleton without audit sinks.

    Denials are logged only. Use build_security_gate() when violations
    must reach the audit trail.

    Fail-Open Design:
        Window store failures return allowed=True. Rate limiting should
        NEVER cause denial of service.
    """
    from marketguard.infrastructure.rate_limit import (
        FixedWindowRateLimiter,
        build_policy_rules,
    )

    return FixedWindowRateLimiter(
        store=get_window_store(),
        logger=get_logger(),
        policies=build_policy_rules(get_settings()),
    )


# ============================================================================
# Composition Root
# ============================================================================


def build_security_gate(
    *,
    history: "HistoryProviderProtocol",
    blacklist_store: "BlacklistStoreProtocol",
    audit: "SecurityAuditProtocol | None" = None,
    monitoring: "MonitoringProtocol | None" = None,
    settings: Settings | None = None,
    logger: "LoggerProtocol | None" = None,
    window_store: "WindowStoreProtocol | None" = None,
) -> "SecurityGateService":
    """Wire the security gate around the host application's collaborators.

    Args:
        history: History provider for risk scoring.
        blacklist_store: Blacklist lookups.
        audit: Audit sinks; defaults to an in-memory adapter (records are
            lost on restart).
        monitoring: Error reporting; defaults to LoggingMonitor.
        settings: Defaults to get_settings().
        logger: Defaults to get_logger().
        window_store: Defaults to the process-wide store.

    Returns:
        SecurityGateService ready for screen_order() and inspect_request().
    """
    from marketguard.application.services.security_gate import SecurityGateService
    from marketguard.infrastructure.audit import (
        InMemorySecurityAuditAdapter,
        SecurityAuditRecorder,
    )
    from marketguard.infrastructure.blacklist import BlacklistGate
    from marketguard.infrastructure.fraud import FraudDetector, RiskScorer, RuleEngine
    from marketguard.infrastructure.monitoring import LoggingMonitor
    from marketguard.infrastructure.rate_limit import (
        FixedWindowRateLimiter,
        build_policy_rules,
    )
    from marketguard.infrastructure.security import SuspiciousActivityDetector

    settings = settings or get_settings()
    logger = logger or get_logger()
    monitoring = monitoring or LoggingMonitor(logger=logger)
    if audit is None:
        audit = InMemorySecurityAuditAdapter()
    recorder = SecurityAuditRecorder(audit=audit, logger=logger, monitoring=monitoring)

    rate_limiter = FixedWindowRateLimiter(
        store=window_store or get_window_store(),
        logger=logger,
        policies=build_policy_rules(settings),
        recorder=recorder,
    )
    blacklist_gate = BlacklistGate(
        store=blacklist_store,
        logger=logger,
        recorder=recorder,
        monitoring=monitoring,
        timeout_seconds=settings.blacklist_lookup_timeout_seconds,
    )
    fraud_detector = FraudDetector(
        scorer=RiskScorer(
            history=history,
            logger=logger,
            proxy_ip_ranges=settings.proxy_ip_ranges,
            timeout_seconds=settings.history_lookup_timeout_seconds,
            market_timezone=settings.market_timezone,
        ),
        engine=RuleEngine(),
        recorder=recorder,
        logger=logger,
    )
    activity_detector = SuspiciousActivityDetector(
        recorder=recorder,
        logger=logger,
        market_timezone=settings.market_timezone,
    )

    return SecurityGateService(
        rate_limiter=rate_limiter,
        blacklist_gate=blacklist_gate,
        fraud_detector=fraud_detector,
        activity_detector=activity_detector,
        recorder=recorder,
        settings=settings,
        logger=logger,
    )
