"""Blacklist dimensions, in the order the gate evaluates them."""

from enum import Enum


class BlacklistType(str, Enum):
    """Type of a blacklist entry."""

    IP_ADDRESS = "ip_address"
    USER_ACCOUNT = "user_account"
    EMAIL_DOMAIN = "email_domain"
