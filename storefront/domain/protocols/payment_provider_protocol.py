"""Payment provider protocol.

The provider hosts the payment page and signs its webhooks. Adapters convert
SDK exceptions into PaymentProviderError values; nothing raises across this
boundary.

Implementations:
    - StripePaymentProvider: storefront/infrastructure/payments/stripe_adapter.py
    - Test fakes in tests/
"""

from collections.abc import Mapping, Sequence
from typing import Protocol

from storefront.core.result import Result
from storefront.domain.entities import LineItem
from storefront.domain.errors import PaymentProviderError, WebhookVerificationError
from storefront.domain.value_objects import CheckoutSession, PaymentEvent


class PaymentProviderProtocol(Protocol):
    """Hosted checkout and webhook verification capability."""

    async def create_checkout_session(
        self,
        line_items: Sequence[LineItem],
        customer_email: str,
        metadata: Mapping[str, str],
    ) -> Result[CheckoutSession, PaymentProviderError]:
        """Create a hosted checkout session.

        Args:
            line_items: Cart lines to charge.
            customer_email: Prefilled customer email.
            metadata: Opaque key-value data echoed back in webhook events.

        Returns:
            Success(CheckoutSession) with the redirect url, or
            Failure(PaymentProviderError). Called once, never retried.
        """
        ...

    def verify_webhook_signature(
        self, raw_body: bytes, signature_header: str | None
    ) -> Result[PaymentEvent, WebhookVerificationError]:
        """Authenticate a webhook call and parse its event.

        Args:
            raw_body: Exact request body bytes.
            signature_header: Value of the provider signature header.

        Returns:
            Success(PaymentEvent) if the signature is valid, otherwise
            Failure(WebhookVerificationError).
        """
        ...
