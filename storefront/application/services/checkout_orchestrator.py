"""Checkout orchestrator.

Create session flow:
1. Consume the CSRF token (forged or replayed requests stop here)
2. Validate the order (items, email, total)
3. Record the order: CREATED -> SESSION_REQUESTED
4. Ask the payment provider for a hosted checkout session (single call)
5. Provider failure: order ABANDONED, return PROVIDER_ERROR
6. Order SESSION_ACTIVE, return the redirect URL

Payment confirmed flow (after webhook signature verification):
1. Issue a download token for the order (once per session; redelivered
   events return the token issued the first time)
2. Hand the download link to the notifier
3. Notifier failure is logged as NOTIFIER_ERROR; the token stays valid
4. Order COMPLETED (when it is still tracked)

Architecture:
- Depends on protocols (provider, notifier, logger) and the token services
- Orders are tracked in process memory for state inspection only; webhook
  handling never depends on finding the order
"""

from __future__ import annotations

from collections import OrderedDict
from uuid import UUID

from storefront.application.commands import CreateCheckoutSession
from storefront.core.constants import token_prefix
from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Result, Success
from storefront.domain.entities import Order
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import CheckoutError
from storefront.domain.protocols import (
    LoggerProtocol,
    NotifierProtocol,
    PaymentProviderProtocol,
)
from storefront.domain.value_objects import (
    CHECKOUT_SESSION_COMPLETED,
    CHECKOUT_SESSION_EXPIRED,
    CheckoutSession,
    Email,
    PaymentEvent,
)
from storefront.infrastructure.security import CsrfTokenService, DownloadTokenService

DEFAULT_MAX_TRACKED_ORDERS = 10_000


def _invalid_order(message: str, field: str) -> CheckoutError:
    return CheckoutError(code=ErrorCode.INVALID_ORDER, message=message, field=field)


def validate_order(cmd: CreateCheckoutSession) -> Result[Email, CheckoutError]:
    """Validate the order shape of a checkout command.

    Args:
        cmd: Checkout command.

    Returns:
        Success(normalized Email) or Failure(CheckoutError) with INVALID_ORDER.
    """
    if not cmd.items:
        return Failure(error=_invalid_order("Cart is empty", "items"))

    for item in cmd.items:
        if not item.name.strip():
            return Failure(error=_invalid_order("Item name is required", "items"))
        if item.unit_price <= 0:
            return Failure(error=_invalid_order("Item price must be positive", "items"))
        if item.quantity <= 0:
            return Failure(
                error=_invalid_order("Item quantity must be positive", "items")
            )

    if cmd.total <= 0:
        return Failure(error=_invalid_order("Order total must be positive", "total"))

    try:
        email = Email(cmd.customer_email)
    except ValueError:
        return Failure(
            error=_invalid_order("A valid email address is required", "customerEmail")
        )

    return Success(value=email)


class CheckoutOrchestrator:
    """Drives an order from cart submission to artifact delivery."""

    def __init__(
        self,
        *,
        csrf_service: CsrfTokenService,
        download_service: DownloadTokenService,
        payment_provider: PaymentProviderProtocol,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        base_url: str,
        max_tracked_orders: int = DEFAULT_MAX_TRACKED_ORDERS,
    ) -> None:
        """Initialize orchestrator with dependencies.

        Args:
            csrf_service: CSRF token validation.
            download_service: Download token issuance.
            payment_provider: Hosted checkout provider.
            notifier: Delivery email sender.
            logger: Structured logger.
            base_url: Public base URL for download links.
            max_tracked_orders: Oldest orders and fulfilled sessions are
                forgotten beyond this count.
        """
        self._csrf = csrf_service
        self._downloads = download_service
        self._provider = payment_provider
        self._notifier = notifier
        self._logger = logger.bind(component="checkout")
        self._base_url = base_url.rstrip("/")
        self._max_tracked_orders = max_tracked_orders
        self._orders: OrderedDict[UUID, Order] = OrderedDict()
        self._orders_by_session: dict[str, UUID] = {}
        self._fulfilled: OrderedDict[str, str] = OrderedDict()

    async def create_session(
        self, cmd: CreateCheckoutSession
    ) -> Result[CheckoutSession, CheckoutError]:
        """Validate the order and create a hosted checkout session.

        Args:
            cmd: CreateCheckoutSession command.

        Returns:
            Success(CheckoutSession) with the redirect URL, or
            Failure(CheckoutError) with INVALID_CSRF_TOKEN, INVALID_ORDER or
            PROVIDER_ERROR.
        """
        if not self._csrf.validate_and_consume(cmd.csrf_token):
            self._logger.warning("Checkout rejected: invalid CSRF token")
            return Failure(
                error=CheckoutError(
                    code=ErrorCode.INVALID_CSRF_TOKEN,
                    message="Invalid or missing CSRF token",
                )
            )

        match validate_order(cmd):
            case Failure(error=error):
                self._logger.info(
                    "Checkout rejected: invalid order",
                    reason=error.message,
                    field=error.field,
                )
                return Failure(error=error)
            case Success(value=email):
                customer_email = str(email)

        order = Order(
            items=list(cmd.items),
            customer_email=customer_email,
            customer_name=cmd.customer_name.strip(),
            total=cmd.total,
        )
        self._track(order)
        order.transition_to(OrderStatus.SESSION_REQUESTED)

        result = await self._provider.create_checkout_session(
            line_items=order.items,
            customer_email=customer_email,
            metadata={
                "order_reference": str(order.order_reference),
                "customer_name": order.customer_name,
                "customer_email": customer_email,
            },
        )

        match result:
            case Failure(error=provider_error):
                order.transition_to(OrderStatus.ABANDONED)
                self._logger.error(
                    "Checkout session creation failed",
                    order_reference=str(order.order_reference),
                    provider=provider_error.provider_name,
                    reason=provider_error.message,
                )
                return Failure(
                    error=CheckoutError(
                        code=ErrorCode.PROVIDER_ERROR,
                        message="Failed to create checkout session",
                        details={"provider": provider_error.provider_name},
                    )
                )
            case Success(value=session):
                order.provider_session_id = session.session_id
                self._orders_by_session[session.session_id] = order.order_reference
                order.transition_to(OrderStatus.SESSION_ACTIVE)
                self._logger.info(
                    "Checkout session created",
                    order_reference=str(order.order_reference),
                    session_id=session.session_id,
                    item_count=len(order.items),
                    total=str(order.total),
                )
                return Success(value=session)

    async def handle_event(
        self, event: PaymentEvent
    ) -> Result[str | None, CheckoutError]:
        """Route a verified provider event to its handler.

        Args:
            event: Verified webhook event.

        Returns:
            Success(download token) for completed checkouts, Success(None)
            for other events, Failure(CheckoutError) when a completed
            checkout cannot be delivered.
        """
        if event.event_type == CHECKOUT_SESSION_COMPLETED:
            return await self.on_payment_confirmed(event)
        if event.event_type == CHECKOUT_SESSION_EXPIRED:
            self.on_session_expired(event)
        else:
            self._logger.debug("Webhook event ignored", event_type=event.event_type)
        return Success(value=None)

    async def on_payment_confirmed(
        self, event: PaymentEvent
    ) -> Result[str, CheckoutError]:
        """Mint a download token for a paid order and notify the customer.

        Must only be called with an event whose signature was verified.

        Args:
            event: checkout.session.completed event.

        Returns:
            Success(download token id), or Failure(CheckoutError) with
            INVALID_ORDER if the event has no customer email. A notifier
            failure does not fail the call. A session that was already
            fulfilled returns its original token without notifying again.
        """
        order_id = event.session_id
        previous_token = self._fulfilled.get(order_id)
        if previous_token is not None:
            self._logger.info(
                "Duplicate payment confirmation ignored",
                order_id=order_id,
                event_id=event.event_id,
            )
            return Success(value=previous_token)

        if not event.customer_email:
            self._logger.error("Paid order has no customer email", order_id=order_id)
            return Failure(
                error=CheckoutError(
                    code=ErrorCode.INVALID_ORDER,
                    message="Payment event has no customer email",
                    details={"order_id": order_id},
                )
            )

        token = self._downloads.issue(
            customer_email=event.customer_email,
            order_id=order_id,
            customer_name=event.customer_name,
        )
        self._remember_fulfilled(order_id, token)
        download_url = f"{self._base_url}/download/{token}"

        delivered = await self._notify(event, download_url)
        if delivered:
            self._logger.info(
                "Order completed, artifact delivered",
                order_id=order_id,
                token=token_prefix(token),
            )
        else:
            # Token stays valid.
            self._logger.error(
                "Order completed but delivery email failed",
                order_id=order_id,
                error_code=ErrorCode.NOTIFIER_ERROR.value,
                token=token_prefix(token),
            )

        self._finish(event, OrderStatus.COMPLETED)
        return Success(value=token)

    def on_session_expired(self, event: PaymentEvent) -> None:
        """Mark the order of an unpaid, expired session as abandoned."""
        self._logger.info("Checkout session expired", session_id=event.session_id)
        self._finish(event, OrderStatus.ABANDONED)

    def get_order(self, order_reference: UUID | str) -> Order | None:
        """Return a tracked order by its reference."""
        try:
            reference = UUID(str(order_reference))
        except ValueError:
            return None
        return self._orders.get(reference)

    def get_order_by_session(self, session_id: str) -> Order | None:
        """Return a tracked order by provider session id."""
        reference = self._orders_by_session.get(session_id)
        return self._orders.get(reference) if reference is not None else None

    async def _notify(self, event: PaymentEvent, download_url: str) -> bool:
        try:
            return await self._notifier.send_download_link(
                customer_email=event.customer_email or "",
                customer_name=event.customer_name,
                download_url=download_url,
                order_id=event.session_id,
            )
        except Exception as e:
            self._logger.error(
                "Notifier raised while sending download link",
                error=e,
                order_id=event.session_id,
            )
            return False

    def _finish(self, event: PaymentEvent, target: OrderStatus) -> None:
        order = self.get_order_by_session(event.session_id)
        if order is None and event.order_reference:
            order = self.get_order(event.order_reference)
        if order is None:
            return
        match order.transition_to(target):
            case Failure(error=error):
                self._logger.warning(
                    "Order state not updated",
                    order_reference=str(order.order_reference),
                    reason=error.message,
                )
            case Success():
                pass

    def _remember_fulfilled(self, session_id: str, token: str) -> None:
        self._fulfilled[session_id] = token
        while len(self._fulfilled) > self._max_tracked_orders:
            self._fulfilled.popitem(last=False)

    def _track(self, order: Order) -> None:
        self._orders[order.order_reference] = order
        while len(self._orders) > self._max_tracked_orders:
            _, evicted = self._orders.popitem(last=False)
            if evicted.provider_session_id:
                self._orders_by_session.pop(evicted.provider_session_id, None)
