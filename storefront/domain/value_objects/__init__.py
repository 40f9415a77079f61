"""Domain value objects.

Usage:
    from storefront.domain.value_objects import DownloadGrant, Email
"""

from storefront.domain.value_objects.download_grant import DownloadGrant
from storefront.domain.value_objects.email import Email
from storefront.domain.value_objects.payment import (
    CHECKOUT_SESSION_COMPLETED,
    CHECKOUT_SESSION_EXPIRED,
    CheckoutSession,
    PaymentEvent,
)
from storefront.domain.value_objects.rate_limit_rule import (
    RateLimitResult,
    RateLimitRule,
)

__all__ = [
    "CHECKOUT_SESSION_COMPLETED",
    "CHECKOUT_SESSION_EXPIRED",
    "CheckoutSession",
    "DownloadGrant",
    "Email",
    "PaymentEvent",
    "RateLimitResult",
    "RateLimitRule",
]
