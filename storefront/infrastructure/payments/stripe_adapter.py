"""Stripe payment provider adapter (implements PaymentProviderProtocol).

Hosted Checkout in `payment` mode. The Stripe SDK is synchronous, so session
creation runs in a worker thread to keep the event loop free.

Webhooks:
    The signature is checked with `stripe.Webhook.construct_event` over the
    exact raw body; the verified body is then parsed as plain JSON.
"""

import asyncio
import json
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import stripe

from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Result, Success
from storefront.domain.entities import LineItem
from storefront.domain.errors import PaymentProviderError, WebhookVerificationError
from storefront.domain.protocols import LoggerProtocol
from storefront.domain.value_objects import CheckoutSession, PaymentEvent

PROVIDER_NAME = "stripe"


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount (pounds) to minor units (pence)."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StripePaymentProvider:
    """Stripe Checkout adapter."""

    def __init__(
        self,
        *,
        secret_key: str | None,
        webhook_secret: str | None,
        base_url: str,
        currency: str,
        product_description: str,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize Stripe adapter.

        Args:
            secret_key: Stripe secret API key.
            webhook_secret: Webhook endpoint signing secret.
            base_url: Public base URL for success/cancel pages.
            currency: Lowercase ISO 4217 code.
            product_description: Line item description.
            logger: Structured logger.
        """
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        self._base_url = base_url
        self._currency = currency.lower()
        self._product_description = product_description
        self._logger = logger.bind(provider=PROVIDER_NAME)

    async def create_checkout_session(
        self,
        line_items: Sequence[LineItem],
        customer_email: str,
        metadata: Mapping[str, str],
    ) -> Result[CheckoutSession, PaymentProviderError]:
        """Create a Stripe Checkout Session.

        Returns:
            Success(CheckoutSession) or Failure(PaymentProviderError).
        """
        if not self._secret_key:
            return Failure(
                error=PaymentProviderError(
                    code=ErrorCode.PROVIDER_ERROR,
                    message="Stripe secret key is not configured",
                    provider_name=PROVIDER_NAME,
                )
            )

        params = self._session_params(line_items, customer_email, metadata)
        try:
            session = await asyncio.to_thread(
                stripe.checkout.Session.create,
                api_key=self._secret_key,
                **params,
            )
        except stripe.StripeError as e:
            self._logger.error("Stripe session creation failed", error=e)
            return Failure(
                error=PaymentProviderError(
                    code=ErrorCode.PROVIDER_ERROR,
                    message="Failed to create checkout session",
                    provider_name=PROVIDER_NAME,
                    details={"stripe_error": type(e).__name__},
                )
            )

        self._logger.info("Stripe session created", session_id=session.id)
        return Success(value=CheckoutSession(session_id=session.id, redirect_url=session.url))

    def verify_webhook_signature(
        self, raw_body: bytes, signature_header: str | None
    ) -> Result[PaymentEvent, WebhookVerificationError]:
        """Verify a Stripe webhook and parse the event.

        Returns:
            Success(PaymentEvent) or Failure(WebhookVerificationError).
        """
        if not self._webhook_secret or not signature_header:
            return Failure(error=self._rejected("Missing webhook secret or signature"))

        try:
            stripe.Webhook.construct_event(
                raw_body, signature_header, self._webhook_secret
            )
        except stripe.SignatureVerificationError:
            return Failure(error=self._rejected("Webhook signature verification failed"))
        except ValueError:
            return Failure(
                error=self._rejected(
                    "Webhook payload is not valid JSON",
                    code=ErrorCode.WEBHOOK_PAYLOAD_INVALID,
                )
            )

        return parse_event(json.loads(raw_body))

    def _session_params(
        self,
        line_items: Sequence[LineItem],
        customer_email: str,
        metadata: Mapping[str, str],
    ) -> dict[str, Any]:
        return {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self._currency,
                        "product_data": {
                            "name": item.name,
                            "description": self._product_description,
                            **({"images": [item.image]} if item.image else {}),
                        },
                        "unit_amount": to_minor_units(item.unit_price),
                    },
                    "quantity": item.quantity,
                }
                for item in line_items
            ],
            "success_url": f"{self._base_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{self._base_url}/cancel",
            "customer_email": customer_email,
            "metadata": dict(metadata),
        }

    @staticmethod
    def _rejected(
        message: str, code: ErrorCode = ErrorCode.WEBHOOK_SIGNATURE_INVALID
    ) -> WebhookVerificationError:
        return WebhookVerificationError(
            code=code,
            message=message,
            provider_name=PROVIDER_NAME,
        )


def parse_event(payload: Mapping[str, Any]) -> Result[PaymentEvent, WebhookVerificationError]:
    """Map a verified Stripe event body onto a PaymentEvent.

    Args:
        payload: Decoded event JSON.

    Returns:
        Success(PaymentEvent), or Failure if the body lacks the event id,
        type or session object.
    """
    session = (payload.get("data") or {}).get("object") or {}
    event_id = payload.get("id")
    event_type = payload.get("type")
    session_id = session.get("id")
    if not (event_id and event_type and session_id):
        return Failure(
            error=WebhookVerificationError(
                code=ErrorCode.WEBHOOK_PAYLOAD_INVALID,
                message="Webhook event is missing id, type or session",
                provider_name=PROVIDER_NAME,
            )
        )

    details = session.get("customer_details") or {}
    metadata = session.get("metadata") or {}
    return Success(
        value=PaymentEvent(
            event_id=event_id,
            event_type=event_type,
            session_id=session_id,
            customer_email=details.get("email") or session.get("customer_email"),
            customer_name=details.get("name") or metadata.get("customer_name"),
            order_reference=metadata.get("order_reference"),
        )
    )
