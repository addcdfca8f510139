"""Six-factor fraud risk scorer.

Each calculator turns history provider data into a normalized [0, 1] risk
value. The six calculators run concurrently (asyncio.gather) and every
history query is bounded by a timeout (asyncio.wait_for).

Fallbacks:
    A query that raises or times out never aborts scoring. It is logged and
    the calculator substitutes a fixed value:

    | query                      | fallback                        |
    |----------------------------|---------------------------------|
    | get_user_recent_orders     | no recent orders                |
    | get_user_recent_sessions   | no recent sessions              |
    | get_user_known_devices     | device_risk = 0.5               |
    | get_user_behavior_profile  | behavior_risk = 0.8             |
    | get_user                   | account_risk = 1.0              |
    | get_user_verifications     | email and phone unverified      |
    | is_known_payment_method    | card treated as never seen      |

    A calculator that raises on a malformed record falls back to the same
    factor value (velocity and location fall back to 0, payment to 0.4).
"""

from __future__ import annotations

import asyncio
import ipaddress
from collections.abc import Awaitable, Callable, Sequence
from datetime import UTC, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from marketguard.core.enums import ErrorCode
from marketguard.core.fingerprinting import hash_payment_identifier
from marketguard.core.result import Failure, Result, Success
from marketguard.domain.enums import PaymentMethodType, VerificationType
from marketguard.domain.errors import HistoryLookupError
from marketguard.domain.value_objects.risk_factors import RiskFactors, clamp_risk

if TYPE_CHECKING:
    from marketguard.domain.protocols import HistoryProviderProtocol, LoggerProtocol
    from marketguard.domain.value_objects.order import OrderData, UserContext

T = TypeVar("T")

VELOCITY_WINDOW_HOURS = 24
SESSION_WINDOW_DAYS = 7

UNKNOWN_DEVICE_RISK = 0.5
NO_PROFILE_RISK = 0.8
UNKNOWN_ACCOUNT_RISK = 1.0
UNSEEN_CARD_RISK = 0.4

_EARLY_HOUR = time(6)
_LATE_HOUR = time(23)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _as_decimal(value: Any) -> Decimal:
    """Coerce a history amount (Decimal, int, float, str or None) to Decimal.

    Missing or unparseable amounts count as 0.
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return Decimal(0)
    return amount if amount.is_finite() else Decimal(0)


class RiskScorer:
    """Computes the six risk factors for an order.

    Args:
        history: History provider.
        logger: Structured logger.
        proxy_ip_ranges: CIDR ranges treated as proxy/VPN egress.
        timeout_seconds: Upper bound for each history query.
        market_timezone: Timezone for the local order hour when the
            request carries no geo_location timezone.
        clock: Returns the current aware datetime (injectable for tests).
    """

    def __init__(
        self,
        *,
        history: HistoryProviderProtocol,
        logger: LoggerProtocol,
        proxy_ip_ranges: Sequence[str] = (),
        timeout_seconds: float = 2.0,
        market_timezone: str = "Africa/Ouagadougou",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._history = history
        self._logger = logger
        self._proxy_networks = [
            ipaddress.ip_network(cidr, strict=False) for cidr in proxy_ip_ranges
        ]
        self._timeout_seconds = timeout_seconds
        self._market_timezone = ZoneInfo(market_timezone)
        self._clock = clock

    async def score(self, order: OrderData, context: UserContext) -> RiskFactors:
        """Run the six calculators concurrently.

        A calculator that raises (for example on a malformed history record)
        is logged and replaced by its factor fallback; the other five still
        count.

        Returns:
            RiskFactors with every value clamped to [0, 1].
        """
        user_id = context.user_id
        (
            velocity,
            location,
            device,
            behavior,
            account,
            payment,
        ) = await asyncio.gather(
            self._isolate("velocity_risk", self.velocity_risk(user_id), 0.0),
            self._isolate(
                "location_risk", self.location_risk(user_id, context.ip_address), 0.0
            ),
            self._isolate(
                "device_risk",
                self.device_risk(user_id, context.device_fingerprint),
                UNKNOWN_DEVICE_RISK,
            ),
            self._isolate(
                "behavior_risk",
                self.behavior_risk(user_id, order.amount, context.geo_location),
                NO_PROFILE_RISK,
            ),
            self._isolate(
                "account_risk", self.account_risk(user_id), UNKNOWN_ACCOUNT_RISK
            ),
            self._isolate(
                "payment_risk", self.payment_risk(user_id, order), UNSEEN_CARD_RISK
            ),
        )
        return RiskFactors(
            velocity_risk=velocity,
            location_risk=location,
            device_risk=device,
            behavior_risk=behavior,
            account_risk=account,
            payment_risk=payment,
        )

    # -------------------------------------------------------------------------
    # Factor calculators
    # -------------------------------------------------------------------------
    async def velocity_risk(self, user_id: str) -> float:
        """Order count and spend over the trailing 24 hours."""
        result = await self._lookup(
            "get_user_recent_orders",
            self._history.get_user_recent_orders(user_id, VELOCITY_WINDOW_HOURS),
            user_id=user_id,
        )
        orders = result.value if isinstance(result, Success) else []

        risk = 0.0
        order_count = len(orders)
        if order_count > 10:
            risk += 0.8
        elif order_count > 5:
            risk += 0.5
        elif order_count > 2:
            risk += 0.2

        total_amount = sum(
            (_as_decimal(order.total_amount) for order in orders), Decimal(0)
        )
        if total_amount > 1_000_000:
            risk += 0.6
        elif total_amount > 500_000:
            risk += 0.3

        return clamp_risk(risk)

    async def location_risk(self, user_id: str, ip_address: str) -> float:
        """Proxy/VPN egress plus distinct IPs over the trailing 7 days."""
        risk = 0.4 if self.is_proxy_ip(ip_address) else 0.0

        result = await self._lookup(
            "get_user_recent_sessions",
            self._history.get_user_recent_sessions(user_id, SESSION_WINDOW_DAYS),
            user_id=user_id,
        )
        sessions = result.value if isinstance(result, Success) else []

        unique_ips = {session.ip_address for session in sessions}
        if len(unique_ips) > 10:
            risk += 0.6
        elif len(unique_ips) > 5:
            risk += 0.3

        return clamp_risk(risk)

    async def device_risk(self, user_id: str, device_fingerprint: str | None) -> float:
        """0.1 for a registered device, 0.7 for an unrecognized one."""
        if not device_fingerprint:
            return UNKNOWN_DEVICE_RISK

        result = await self._lookup(
            "get_user_known_devices",
            self._history.get_user_known_devices(user_id),
            user_id=user_id,
        )
        match result:
            case Success(value=devices):
                known = any(d.fingerprint == device_fingerprint for d in devices)
                return 0.1 if known else 0.7
            case _:
                return UNKNOWN_DEVICE_RISK

    async def behavior_risk(
        self,
        user_id: str,
        amount: Decimal,
        geo_location: dict[str, Any] | None = None,
    ) -> float:
        """Order hour and amount against the account's behavior profile."""
        result = await self._lookup(
            "get_user_behavior_profile",
            self._history.get_user_behavior_profile(user_id),
            user_id=user_id,
        )
        profile = result.value if isinstance(result, Success) else None
        if profile is None:
            return NO_PROFILE_RISK

        risk = 0.0
        local_time = self._local_now(geo_location).time()
        if local_time < _EARLY_HOUR or local_time > _LATE_HOUR:
            risk += 0.3

        average = _as_decimal(profile.average_order_amount)
        if average > 0 and amount > average * 5:
            risk += 0.5

        return clamp_risk(risk)

    async def account_risk(self, user_id: str) -> float:
        """Account age tiers plus unverified email/phone."""
        user_result, verification_result = await asyncio.gather(
            self._lookup(
                "get_user", self._history.get_user(user_id), user_id=user_id
            ),
            self._lookup(
                "get_user_verifications",
                self._history.get_user_verifications(user_id),
                user_id=user_id,
            ),
        )
        user = user_result.value if isinstance(user_result, Success) else None
        if user is None:
            return UNKNOWN_ACCOUNT_RISK

        risk = 0.0
        created_at = user.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        age_days = (self._clock() - created_at).total_seconds() / 86_400
        if age_days < 1:
            risk += 0.8
        elif age_days < 7:
            risk += 0.4
        elif age_days < 30:
            risk += 0.2

        verifications = (
            verification_result.value
            if isinstance(verification_result, Success)
            else []
        )
        verified = {v.verification_type for v in verifications if v.is_verified}
        if VerificationType.EMAIL not in verified:
            risk += 0.3
        if VerificationType.PHONE not in verified:
            risk += 0.2

        return clamp_risk(risk)

    async def payment_risk(self, user_id: str, order: OrderData) -> float:
        """Unseen cards and the mobile money baseline."""
        payment = order.payment_method
        if payment.type == PaymentMethodType.MOBILE_MONEY:
            return 0.1
        if payment.type != PaymentMethodType.CREDIT_CARD:
            return 0.0
        if not payment.card_number:
            return UNSEEN_CARD_RISK

        result = await self._lookup(
            "is_known_payment_method",
            self._history.is_known_payment_method(
                user_id, hash_payment_identifier(payment.card_number)
            ),
            user_id=user_id,
        )
        match result:
            case Success(value=True):
                return 0.0
            case _:
                return UNSEEN_CARD_RISK

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def is_proxy_ip(self, ip_address: str) -> bool:
        """Whether the address falls in a configured proxy/VPN range."""
        try:
            address = ipaddress.ip_address(ip_address)
        except ValueError:
            return False
        return any(
            address.version == network.version and address in network
            for network in self._proxy_networks
        )

    def _local_now(self, geo_location: dict[str, Any] | None) -> datetime:
        tz = self._market_timezone
        tz_name = (geo_location or {}).get("timezone")
        if tz_name:
            try:
                tz = ZoneInfo(tz_name)
            except (ZoneInfoNotFoundError, ValueError):
                self._logger.debug("Unknown geo timezone", timezone=tz_name)
        return self._clock().astimezone(tz)

    async def _isolate(
        self, factor: str, calculation: Awaitable[float], fallback: float
    ) -> float:
        try:
            return await calculation
        except Exception as exc:
            self._logger.warning(
                "Risk factor calculation failed - using fallback",
                factor=factor,
                fallback=fallback,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            return fallback

    async def _lookup(
        self,
        query: str,
        call: Awaitable[T],
        **context: Any,
    ) -> Result[T, HistoryLookupError]:
        """Await one history query with the configured timeout."""
        try:
            value = await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except TimeoutError:
            self._logger.warning(
                "History lookup timed out - using fallback",
                query=query,
                timeout_seconds=self._timeout_seconds,
                **context,
            )
            return Failure(
                error=HistoryLookupError(
                    code=ErrorCode.HISTORY_LOOKUP_TIMEOUT,
                    message=f"{query} timed out",
                    query=query,
                )
            )
        except Exception as exc:
            self._logger.warning(
                "History lookup failed - using fallback",
                query=query,
                error_type=type(exc).__name__,
                error_message=str(exc),
                **context,
            )
            return Failure(
                error=HistoryLookupError(
                    code=ErrorCode.HISTORY_LOOKUP_FAILED,
                    message=f"{query} failed: {exc}",
                    query=query,
                )
            )
        return Success(value=value)
