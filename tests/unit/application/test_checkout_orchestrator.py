"""Unit tests for CheckoutOrchestrator.

Tests cover:
- CSRF check runs first (no provider call on invalid token)
- Order validation (items, prices, quantities, email, total)
- Order state transitions on success and provider failure
- Payment confirmation issues a download token and notifies the customer
- Notifier failure (False or exception) keeps the token valid
- Session expiry abandons the order
- Redelivered payment events issue one token and one email
- End-to-end: CSRF -> session -> paid -> download link valid

Architecture:
- Real token services on a fake clock
- AsyncMock payment provider and notifier
"""

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from storefront.application.commands import CreateCheckoutSession
from storefront.application.services import CheckoutOrchestrator
from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Success
from storefront.domain.entities import LineItem
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import PaymentProviderError
from storefront.domain.value_objects import (
    CHECKOUT_SESSION_COMPLETED,
    CHECKOUT_SESSION_EXPIRED,
    CheckoutSession,
    PaymentEvent,
)

BASE_URL = "https://shop.example.com"


def make_item(**overrides) -> LineItem:
    values = {
        "name": "Complete Recipe Collection",
        "unit_price": Decimal("9.99"),
        "quantity": 1,
    }
    values.update(overrides)
    return LineItem(**values)


def make_command(csrf_token, **overrides) -> CreateCheckoutSession:
    values = {
        "csrf_token": csrf_token,
        "items": (make_item(),),
        "customer_email": "Cook@Example.com",
        "customer_name": "Sam Cook",
        "total": Decimal("9.99"),
    }
    values.update(overrides)
    return CreateCheckoutSession(**values)


def completed_event(session_id="cs_test_1", **overrides) -> PaymentEvent:
    values = {
        "event_id": "evt_1",
        "event_type": CHECKOUT_SESSION_COMPLETED,
        "session_id": session_id,
        "customer_email": "cook@example.com",
        "customer_name": "Sam Cook",
    }
    values.update(overrides)
    return PaymentEvent(**values)


@pytest.fixture
def provider():
    mock_provider = Mock()
    mock_provider.create_checkout_session = AsyncMock(
        return_value=Success(
            value=CheckoutSession(
                session_id="cs_test_1",
                redirect_url="https://checkout.stripe.com/c/pay/cs_test_1",
            )
        )
    )
    return mock_provider


@pytest.fixture
def notifier():
    mock_notifier = Mock()
    mock_notifier.send_download_link = AsyncMock(return_value=True)
    return mock_notifier


@pytest.fixture
def orchestrator(csrf_service, download_service, provider, notifier, logger):
    return CheckoutOrchestrator(
        csrf_service=csrf_service,
        download_service=download_service,
        payment_provider=provider,
        notifier=notifier,
        logger=logger,
        base_url=BASE_URL + "/",
    )


@pytest.mark.unit
class TestCreateSession:
    """Test checkout session creation."""

    @pytest.mark.asyncio
    async def test_returns_redirect_url(self, orchestrator, csrf_service, provider):
        result = await orchestrator.create_session(make_command(csrf_service.issue()))

        assert isinstance(result, Success)
        assert result.value.redirect_url == "https://checkout.stripe.com/c/pay/cs_test_1"
        provider.create_checkout_session.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_passes_normalized_email_and_metadata(
        self, orchestrator, csrf_service, provider
    ):
        await orchestrator.create_session(make_command(csrf_service.issue()))

        kwargs = provider.create_checkout_session.await_args.kwargs
        assert kwargs["customer_email"] == "Cook@example.com"
        assert kwargs["metadata"]["customer_name"] == "Sam Cook"
        order = orchestrator.get_order(kwargs["metadata"]["order_reference"])
        assert order is not None
        assert order.status == OrderStatus.SESSION_ACTIVE
        assert order.provider_session_id == "cs_test_1"

    @pytest.mark.asyncio
    async def test_invalid_csrf_rejected_before_validation(
        self, orchestrator, provider
    ):
        result = await orchestrator.create_session(
            make_command("not-a-token", items=())
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CSRF_TOKEN
        provider.create_checkout_session.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_csrf_rejected(self, orchestrator):
        result = await orchestrator.create_session(make_command(None))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CSRF_TOKEN

    @pytest.mark.asyncio
    async def test_csrf_token_is_single_use(self, orchestrator, csrf_service):
        token = csrf_service.issue()
        await orchestrator.create_session(make_command(token))

        result = await orchestrator.create_session(make_command(token))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CSRF_TOKEN

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"items": ()}, "items"),
            ({"items": (make_item(name="  "),)}, "items"),
            ({"items": (make_item(unit_price=Decimal("0")),)}, "items"),
            ({"items": (make_item(unit_price=Decimal("-1")),)}, "items"),
            ({"items": (make_item(quantity=0),)}, "items"),
            ({"total": Decimal("0")}, "total"),
            ({"customer_email": "not-an-email"}, "customerEmail"),
        ],
    )
    async def test_invalid_order_rejected(
        self, orchestrator, csrf_service, provider, overrides, field
    ):
        result = await orchestrator.create_session(
            make_command(csrf_service.issue(), **overrides)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_ORDER
        assert result.error.field == field
        provider.create_checkout_session.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_failure_abandons_order(
        self, orchestrator, csrf_service, provider
    ):
        provider.create_checkout_session.return_value = Failure(
            error=PaymentProviderError(
                code=ErrorCode.PROVIDER_ERROR,
                message="card_declined",
                provider_name="stripe",
            )
        )

        result = await orchestrator.create_session(make_command(csrf_service.issue()))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PROVIDER_ERROR
        reference = provider.create_checkout_session.await_args.kwargs["metadata"][
            "order_reference"
        ]
        assert orchestrator.get_order(reference).status == OrderStatus.ABANDONED

    @pytest.mark.asyncio
    async def test_provider_called_once_without_retry(
        self, orchestrator, csrf_service, provider
    ):
        provider.create_checkout_session.return_value = Failure(
            error=PaymentProviderError(
                code=ErrorCode.PROVIDER_ERROR,
                message="timeout",
                provider_name="stripe",
            )
        )

        await orchestrator.create_session(make_command(csrf_service.issue()))

        assert provider.create_checkout_session.await_count == 1


@pytest.mark.unit
class TestPaymentConfirmed:
    """Test fulfilment after a verified payment."""

    @pytest.mark.asyncio
    async def test_issues_token_and_notifies(
        self, orchestrator, notifier, download_service
    ):
        result = await orchestrator.on_payment_confirmed(completed_event())

        assert isinstance(result, Success)
        token = result.value
        assert download_service.uses_remaining(token) == 5
        notifier.send_download_link.assert_awaited_once_with(
            customer_email="cook@example.com",
            customer_name="Sam Cook",
            download_url=f"{BASE_URL}/download/{token}",
            order_id="cs_test_1",
        )

    @pytest.mark.asyncio
    async def test_grant_carries_order_id(self, orchestrator, download_service):
        result = await orchestrator.on_payment_confirmed(completed_event())

        grant = download_service.redeem(result.value)

        assert isinstance(grant, Success)
        assert grant.value.order_id == "cs_test_1"
        assert grant.value.customer_email == "cook@example.com"

    @pytest.mark.asyncio
    async def test_notifier_returning_false_keeps_token(
        self, orchestrator, notifier, download_service, logger
    ):
        notifier.send_download_link.return_value = False

        result = await orchestrator.on_payment_confirmed(completed_event())

        assert isinstance(result, Success)
        assert download_service.uses_remaining(result.value) == 5
        error_codes = [c.kwargs.get("error_code") for c in logger.error.call_args_list]
        assert ErrorCode.NOTIFIER_ERROR.value in error_codes

    @pytest.mark.asyncio
    async def test_notifier_exception_keeps_token(
        self, orchestrator, notifier, download_service
    ):
        notifier.send_download_link.side_effect = ConnectionError("smtp down")

        result = await orchestrator.on_payment_confirmed(completed_event())

        assert isinstance(result, Success)
        assert download_service.uses_remaining(result.value) == 5

    @pytest.mark.asyncio
    async def test_missing_email_is_rejected(self, orchestrator, notifier):
        result = await orchestrator.on_payment_confirmed(
            completed_event(customer_email=None)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_ORDER
        notifier.send_download_link.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_redelivered_event_issues_one_token(
        self, orchestrator, notifier, download_service
    ):
        first = await orchestrator.handle_event(completed_event())
        second = await orchestrator.handle_event(completed_event())

        assert isinstance(first, Success)
        assert second == first
        assert len(download_service.store) == 1
        notifier.send_download_link.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_new_event_id_for_same_session_is_deduplicated(
        self, orchestrator, notifier, download_service
    ):
        await orchestrator.on_payment_confirmed(completed_event())

        result = await orchestrator.on_payment_confirmed(
            completed_event(event_id="evt_2")
        )

        assert isinstance(result, Success)
        assert len(download_service.store) == 1
        notifier.send_download_link.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_concurrent_redelivery_issues_one_token(
        self, orchestrator, notifier, download_service
    ):
        results = await asyncio.gather(
            orchestrator.on_payment_confirmed(completed_event()),
            orchestrator.on_payment_confirmed(completed_event()),
        )

        assert results[0] == results[1]
        assert len(download_service.store) == 1
        notifier.send_download_link.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_sessions_are_fulfilled_separately(
        self, orchestrator, download_service
    ):
        first = await orchestrator.on_payment_confirmed(completed_event())
        second = await orchestrator.on_payment_confirmed(
            completed_event(session_id="cs_test_2", event_id="evt_2")
        )

        assert first.value != second.value
        assert len(download_service.store) == 2

    @pytest.mark.asyncio
    async def test_unknown_order_still_fulfilled(self, orchestrator):
        result = await orchestrator.on_payment_confirmed(
            completed_event(session_id="cs_from_another_instance")
        )

        assert isinstance(result, Success)


@pytest.mark.unit
class TestEventRouting:
    """Test handle_event dispatch and session expiry."""

    @pytest.mark.asyncio
    async def test_expired_session_abandons_order(
        self, orchestrator, csrf_service, provider
    ):
        await orchestrator.create_session(make_command(csrf_service.issue()))

        result = await orchestrator.handle_event(
            completed_event(event_type=CHECKOUT_SESSION_EXPIRED)
        )

        assert result == Success(value=None)
        assert (
            orchestrator.get_order_by_session("cs_test_1").status
            == OrderStatus.ABANDONED
        )

    @pytest.mark.asyncio
    async def test_unrelated_event_ignored(self, orchestrator, notifier):
        result = await orchestrator.handle_event(
            completed_event(event_type="payment_intent.created")
        )

        assert result == Success(value=None)
        notifier.send_download_link.assert_not_awaited()

    def test_get_order_with_invalid_reference(self, orchestrator):
        assert orchestrator.get_order("not-a-uuid") is None


@pytest.mark.unit
class TestEndToEnd:
    """CSRF -> create session -> paid -> download link."""

    @pytest.mark.asyncio
    async def test_full_checkout_flow(
        self, orchestrator, csrf_service, download_service, notifier
    ):
        csrf_token = csrf_service.issue()

        session = await orchestrator.create_session(make_command(csrf_token))
        assert isinstance(session, Success)
        assert csrf_service.validate_and_consume(csrf_token) is False

        fulfilled = await orchestrator.handle_event(completed_event())
        assert isinstance(fulfilled, Success)

        order = orchestrator.get_order_by_session("cs_test_1")
        assert order.status == OrderStatus.COMPLETED
        download_url = notifier.send_download_link.await_args.kwargs["download_url"]
        token = download_url.rsplit("/", 1)[-1]
        assert isinstance(download_service.redeem(token), Success)
