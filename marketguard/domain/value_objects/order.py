"""Order screening inputs.

Usage:
    order = OrderData(
        order_id="ord-42",
        amount=Decimal("10000"),
        payment_method=PaymentMethod(type=PaymentMethodType.MOBILE_MONEY),
    )
    context = UserContext(
        user_id="user-1",
        ip_address="41.138.90.12",
        device_fingerprint=fingerprint,
    )
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from marketguard.domain.enums import PaymentMethodType


@dataclass(frozen=True, slots=True, kw_only=True)
class PaymentMethod:
    """Payment instrument attached to an order.

    Attributes:
        type: Instrument type.
        card_number: Raw card number for CREDIT_CARD; hashed before any
            history lookup and never logged.
    """

    type: PaymentMethodType
    card_number: str | None = field(default=None, repr=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class OrderData:
    """Order being submitted.

    Attributes:
        order_id: Identifier assigned by the order pipeline (may be None
            before persistence).
        amount: Order total in the market currency (XOF).
        payment_method: Instrument used to pay.
        email: Customer email, used for the email-domain blacklist.
    """

    amount: Decimal
    payment_method: PaymentMethod
    order_id: str | None = None
    email: str | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"amount must not be negative, got {self.amount}")


@dataclass(frozen=True, slots=True, kw_only=True)
class UserContext:
    """Who is placing the order and from where.

    Attributes:
        user_id: Account identifier.
        ip_address: Client IP address.
        device_fingerprint: SHA256 device fingerprint, if the client sent
            enough headers to compute one.
        geo_location: Resolved location (country, city, lat, lng, timezone).
    """

    user_id: str
    ip_address: str
    device_fingerprint: str | None = None
    geo_location: dict[str, Any] | None = None
