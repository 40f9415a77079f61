"""Unit tests for StripePaymentProvider.

Tests cover:
- Minor unit conversion
- Checkout session parameters (payment mode, line items, return urls)
- Stripe errors mapped to PROVIDER_ERROR
- Webhook signature verification with a real Stripe-style signature
- Event parsing (customer details, metadata, missing fields)
"""

import hashlib
import hmac
import json
import time
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import stripe

from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Success
from storefront.domain.entities import LineItem
from storefront.domain.value_objects import CheckoutSession
from storefront.infrastructure.payments import StripePaymentProvider
from storefront.infrastructure.payments.stripe_adapter import parse_event, to_minor_units

WEBHOOK_SECRET = "whsec_test_secret"


def make_provider(logger, **overrides) -> StripePaymentProvider:
    values = {
        "secret_key": "sk_test_123",
        "webhook_secret": WEBHOOK_SECRET,
        "base_url": "https://shop.example.com",
        "currency": "GBP",
        "product_description": "Digital Recipe Collection",
        "logger": logger,
    }
    values.update(overrides)
    return StripePaymentProvider(**values)


def sign(payload: bytes, secret: str = WEBHOOK_SECRET) -> str:
    timestamp = int(time.time())
    signed = f"{timestamp}.".encode() + payload
    signature = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def completed_payload(**session_overrides) -> bytes:
    session = {
        "id": "cs_test_1",
        "object": "checkout.session",
        "customer_details": {"email": "cook@example.com", "name": "Sam Cook"},
        "metadata": {"order_reference": "ref-1", "customer_name": "Sam"},
    }
    session.update(session_overrides)
    return json.dumps(
        {
            "id": "evt_1",
            "object": "event",
            "type": "checkout.session.completed",
            "data": {"object": session},
        }
    ).encode()


@pytest.mark.unit
class TestMinorUnits:
    """Test currency conversion."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("9.99"), 999),
            (Decimal("10"), 1000),
            (Decimal("0.005"), 1),
            (Decimal("12.344"), 1234),
        ],
    )
    def test_to_minor_units(self, amount, expected):
        assert to_minor_units(amount) == expected


@pytest.mark.unit
class TestCreateCheckoutSession:
    """Test hosted checkout session creation."""

    @pytest.mark.asyncio
    async def test_creates_payment_session(self, logger, monkeypatch):
        create = Mock(
            return_value=SimpleNamespace(
                id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1"
            )
        )
        monkeypatch.setattr(stripe.checkout.Session, "create", create)
        provider = make_provider(logger)

        result = await provider.create_checkout_session(
            line_items=[
                LineItem(
                    name="Recipe Collection",
                    unit_price=Decimal("9.99"),
                    quantity=2,
                    image="https://shop.example.com/cover.png",
                )
            ],
            customer_email="cook@example.com",
            metadata={"order_reference": "ref-1"},
        )

        assert result == Success(
            value=CheckoutSession(
                session_id="cs_test_1",
                redirect_url="https://checkout.stripe.com/c/pay/cs_test_1",
            )
        )
        kwargs = create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test_123"
        assert kwargs["mode"] == "payment"
        assert kwargs["success_url"] == (
            "https://shop.example.com/success?session_id={CHECKOUT_SESSION_ID}"
        )
        assert kwargs["cancel_url"] == "https://shop.example.com/cancel"
        assert kwargs["customer_email"] == "cook@example.com"
        assert kwargs["metadata"] == {"order_reference": "ref-1"}
        line = kwargs["line_items"][0]
        assert line["quantity"] == 2
        assert line["price_data"]["currency"] == "gbp"
        assert line["price_data"]["unit_amount"] == 999
        assert line["price_data"]["product_data"]["images"] == [
            "https://shop.example.com/cover.png"
        ]

    @pytest.mark.asyncio
    async def test_stripe_error_maps_to_provider_error(self, logger, monkeypatch):
        monkeypatch.setattr(
            stripe.checkout.Session,
            "create",
            Mock(side_effect=stripe.APIConnectionError("network down")),
        )
        provider = make_provider(logger)

        result = await provider.create_checkout_session(
            line_items=[LineItem(name="x", unit_price=Decimal("1"), quantity=1)],
            customer_email="cook@example.com",
            metadata={},
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PROVIDER_ERROR
        assert result.error.provider_name == "stripe"

    @pytest.mark.asyncio
    async def test_missing_secret_key(self, logger):
        provider = make_provider(logger, secret_key=None)

        result = await provider.create_checkout_session(
            line_items=[], customer_email="cook@example.com", metadata={}
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PROVIDER_ERROR


@pytest.mark.unit
class TestVerifyWebhookSignature:
    """Test webhook verification."""

    def test_valid_signature(self, logger):
        payload = completed_payload()

        result = make_provider(logger).verify_webhook_signature(payload, sign(payload))

        assert isinstance(result, Success)
        assert result.value.event_type == "checkout.session.completed"
        assert result.value.session_id == "cs_test_1"

    def test_wrong_secret_rejected(self, logger):
        payload = completed_payload()

        result = make_provider(logger).verify_webhook_signature(
            payload, sign(payload, secret="whsec_other")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.WEBHOOK_SIGNATURE_INVALID

    def test_tampered_body_rejected(self, logger):
        payload = completed_payload()
        header = sign(payload)

        result = make_provider(logger).verify_webhook_signature(
            payload.replace(b"cook@example.com", b"thief@example.com"), header
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.WEBHOOK_SIGNATURE_INVALID

    def test_missing_header_rejected(self, logger):
        result = make_provider(logger).verify_webhook_signature(
            completed_payload(), None
        )

        assert isinstance(result, Failure)

    def test_missing_webhook_secret_rejected(self, logger):
        payload = completed_payload()

        result = make_provider(logger, webhook_secret=None).verify_webhook_signature(
            payload, sign(payload)
        )

        assert isinstance(result, Failure)


@pytest.mark.unit
class TestParseEvent:
    """Test mapping of event bodies."""

    def test_customer_details_preferred(self):
        result = parse_event(json.loads(completed_payload()))

        assert isinstance(result, Success)
        event = result.value
        assert event.event_id == "evt_1"
        assert event.customer_email == "cook@example.com"
        assert event.customer_name == "Sam Cook"
        assert event.order_reference == "ref-1"

    def test_falls_back_to_session_email_and_metadata_name(self):
        result = parse_event(
            json.loads(
                completed_payload(customer_details=None, customer_email="a@example.com")
            )
        )

        assert isinstance(result, Success)
        assert result.value.customer_email == "a@example.com"
        assert result.value.customer_name == "Sam"

    def test_missing_session_rejected(self):
        result = parse_event({"id": "evt_1", "type": "checkout.session.completed"})

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.WEBHOOK_PAYLOAD_INVALID
