"""Request categories recorded on suspicious activity entries."""

from enum import Enum


class ActivityType(str, Enum):
    """Activity type derived from the request path."""

    LOGIN = "login"
    ORDER_CREATION = "order_creation"
    PAYMENT_ATTEMPT = "payment_attempt"
    PROFILE_UPDATE = "profile_update"
    REVIEW_SUBMISSION = "review_submission"
    MESSAGE_SENT = "message_sent"
    PRODUCT_LISTING = "product_listing"
    UNKNOWN = "unknown"

    @classmethod
    def from_path(cls, path: str) -> "ActivityType":
        """Classify a request path by its first matching segment."""
        for fragment, activity in _PATH_FRAGMENTS:
            if fragment in path:
                return activity
        return cls.UNKNOWN


_PATH_FRAGMENTS: tuple[tuple[str, ActivityType], ...] = (
    ("/login", ActivityType.LOGIN),
    ("/orders", ActivityType.ORDER_CREATION),
    ("/payment", ActivityType.PAYMENT_ATTEMPT),
    ("/profile", ActivityType.PROFILE_UPDATE),
    ("/reviews", ActivityType.REVIEW_SUBMISSION),
    ("/messages", ActivityType.MESSAGE_SENT),
    ("/products", ActivityType.PRODUCT_LISTING),
)
