"""Order entity and checkout state machine.

State machine:
    CREATED -> SESSION_REQUESTED -> SESSION_ACTIVE -> COMPLETED
                      |                   |
                      +----> ABANDONED <--+

Transitions are validated; an illegal transition returns a Failure and leaves
the order untouched.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Result, Success
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import CheckoutError

_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.CREATED: frozenset({OrderStatus.SESSION_REQUESTED}),
    OrderStatus.SESSION_REQUESTED: frozenset(
        {OrderStatus.SESSION_ACTIVE, OrderStatus.ABANDONED}
    ),
    OrderStatus.SESSION_ACTIVE: frozenset(
        {OrderStatus.COMPLETED, OrderStatus.ABANDONED}
    ),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.ABANDONED: frozenset(),
}


@dataclass(frozen=True, slots=True, kw_only=True)
class LineItem:
    """A single cart line.

    Attributes:
        name: Product name shown on the hosted checkout page.
        unit_price: Price per unit in major currency units.
        quantity: Number of units (positive).
        image: Optional product image URL.
    """

    name: str
    unit_price: Decimal
    quantity: int
    image: str | None = None

    @property
    def subtotal(self) -> Decimal:
        """Line total in major currency units."""
        return self.unit_price * self.quantity


@dataclass(kw_only=True)
class Order:
    """Customer order tracked through the checkout lifecycle.

    Attributes:
        order_reference: Local identifier sent to the provider as metadata.
        items: Cart lines.
        customer_email: Normalized customer email.
        customer_name: Name given at checkout.
        total: Order total claimed by the client.
        status: Current lifecycle state.
        provider_session_id: Hosted checkout session id once active.
        created_at: When the order was recorded.
        updated_at: Last transition instant.
    """

    items: list[LineItem]
    customer_email: str
    customer_name: str
    total: Decimal
    order_reference: UUID = field(default_factory=uuid4)
    status: OrderStatus = OrderStatus.CREATED
    provider_session_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def can_transition_to(self, target: OrderStatus) -> bool:
        """Return True if target is reachable from the current status."""
        return target in _ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, target: OrderStatus) -> Result[None, CheckoutError]:
        """Move the order to target if the state machine allows it.

        Args:
            target: Desired status.

        Returns:
            Success(None) on a legal transition, Failure otherwise.
        """
        if not self.can_transition_to(target):
            return Failure(
                error=CheckoutError(
                    code=ErrorCode.ORDER_TRANSITION_INVALID,
                    message=f"Cannot move order from {self.status.value} to {target.value}",
                    details={"order_reference": str(self.order_reference)},
                )
            )
        self.status = target
        self.updated_at = datetime.now(UTC)
        return Success(value=None)

    @property
    def is_terminal(self) -> bool:
        """True once the order is COMPLETED or ABANDONED."""
        return not _ALLOWED_TRANSITIONS[self.status]
