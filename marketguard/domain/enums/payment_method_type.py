"""Payment instruments accepted at checkout."""

from enum import Enum


class PaymentMethodType(str, Enum):
    """Payment method type.

    CREDIT_CARD is the only instrument checked against the account's known
    payment methods. MOBILE_MONEY carries a flat low baseline risk.
    """

    CREDIT_CARD = "credit_card"
    MOBILE_MONEY = "mobile_money"
    BANK_TRANSFER = "bank_transfer"
    CASH_ON_DELIVERY = "cash_on_delivery"
