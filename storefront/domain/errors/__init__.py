"""Domain errors package.

Usage:
    from storefront.domain.errors import TokenError, CheckoutError
"""

from storefront.domain.errors.artifact_error import ArtifactError
from storefront.domain.errors.checkout_error import CheckoutError
from storefront.domain.errors.payment_provider_error import (
    PaymentProviderError,
    WebhookVerificationError,
)
from storefront.domain.errors.rate_limit_error import RateLimitError
from storefront.domain.errors.token_error import TokenError

__all__ = [
    "ArtifactError",
    "CheckoutError",
    "PaymentProviderError",
    "RateLimitError",
    "TokenError",
    "WebhookVerificationError",
]
