"""Checkout commands (write operations).

Commands are immutable data containers; the orchestrator validates them and
returns Result types.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.entities import LineItem


@dataclass(frozen=True, kw_only=True)
class CreateCheckoutSession:
    """Start a hosted checkout for the customer's cart.

    Fields hold the values as submitted; nothing here is trusted until the
    orchestrator has validated it.

    Attributes:
        csrf_token: Token from the X-CSRF-Token header (None if absent).
        items: Cart lines.
        customer_email: Email as typed by the customer.
        customer_name: Name as typed by the customer.
        total: Total shown to the customer.

    Example:
        >>> command = CreateCheckoutSession(
        ...     csrf_token=token,
        ...     items=(LineItem(name="Recipe Collection", unit_price=Decimal("9.99"), quantity=1),),
        ...     customer_email="cook@example.com",
        ...     customer_name="Sam Cook",
        ...     total=Decimal("9.99"),
        ... )
    """

    csrf_token: str | None
    items: tuple[LineItem, ...]
    customer_email: str
    customer_name: str
    total: Decimal
