"""Payment provider adapters."""

from storefront.infrastructure.payments.stripe_adapter import StripePaymentProvider

__all__ = ["StripePaymentProvider"]
