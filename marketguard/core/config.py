"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic

Usage:
    from marketguard.core.config import get_settings

    settings = get_settings()
    timeout = settings.history_lookup_timeout_seconds
"""

import ipaddress
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from marketguard.core.enums import Environment


class Settings(BaseSettings):
    """
    Security engine settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON (CI/production) instead of console output",
    )

    # Feature toggles
    rate_limiting_enabled: bool = Field(
        default=True,
        description="Apply request throttling in the security gate",
    )
    blacklist_enabled: bool = Field(
        default=True,
        description="Check IP/account/email-domain blacklists for order submission",
    )
    fraud_detection_enabled: bool = Field(
        default=True,
        description="Score orders for fraud before persistence",
    )
    fraud_auto_block: bool = Field(
        default=True,
        description="Reject orders whose fraud verdict is 'blocked'",
    )

    # Rate limiting (fixed window)
    rate_limit_window_ms: int = Field(
        default=15 * 60 * 1000,
        gt=0,
        description="Default window length in milliseconds (15 minutes)",
    )
    rate_limit_max_requests: int = Field(
        default=100,
        gt=0,
        description="Default requests allowed per window",
    )
    auth_rate_limit_max_requests: int = Field(
        default=20,
        gt=0,
        description="Requests allowed per window on authentication endpoints",
    )
    api_rate_limit_max_requests: int = Field(
        default=100,
        gt=0,
        description="Requests allowed per window on general API endpoints",
    )
    orders_rate_limit_max_requests: int = Field(
        default=10,
        gt=0,
        description="Order submissions allowed per window",
    )

    # External lookups
    history_lookup_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Upper bound for a single history provider query",
    )
    blacklist_lookup_timeout_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Upper bound for a single blacklist store query",
    )

    # Risk scoring
    proxy_ip_ranges: list[str] = Field(
        default=["10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16"],
        description="CIDR ranges treated as proxy/VPN egress for location risk",
    )
    market_timezone: str = Field(
        default="Africa/Ouagadougou",
        description="IANA timezone used for the local order hour",
    )

    model_config = SettingsConfigDict(
        env_prefix="MARKETGUARD_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("proxy_ip_ranges")
    @classmethod
    def validate_proxy_ip_ranges(cls, v: list[str]) -> list[str]:
        """
        Validate that every proxy range is a CIDR network.

        Raises:
            ValueError: If a range cannot be parsed.
        """
        for cidr in v:
            ipaddress.ip_network(cidr, strict=False)
        return v

    @field_validator("market_timezone")
    @classmethod
    def validate_market_timezone(cls, v: str) -> str:
        """
        Validate the IANA timezone name.

        Raises:
            ValueError: If the timezone is unknown.
        """
        try:
            ZoneInfo(v)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings instance (loaded once per process).
    """
    return Settings()
