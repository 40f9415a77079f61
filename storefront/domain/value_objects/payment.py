"""Payment provider value objects.

CheckoutSession is what the provider hands back when a hosted checkout page
is created. PaymentEvent is a webhook event that has already passed
signature verification.
"""

from dataclasses import dataclass

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
"""Customer paid; deliver the artifact."""

CHECKOUT_SESSION_EXPIRED = "checkout.session.expired"
"""Hosted page expired without payment."""


@dataclass(frozen=True, slots=True, kw_only=True)
class CheckoutSession:
    """Hosted checkout session.

    Attributes:
        session_id: Provider session id (doubles as the order id).
        redirect_url: Hosted payment page the browser is sent to.
    """

    session_id: str
    redirect_url: str


@dataclass(frozen=True, slots=True, kw_only=True)
class PaymentEvent:
    """Verified provider webhook event.

    Attributes:
        event_id: Provider event id.
        event_type: Provider event type (e.g. checkout.session.completed).
        session_id: Checkout session the event refers to.
        customer_email: Email entered on the hosted page.
        customer_name: Name entered on the hosted page.
        order_reference: Local order reference echoed back from metadata.
    """

    event_id: str
    event_type: str
    session_id: str
    customer_email: str | None = None
    customer_name: str | None = None
    order_reference: str | None = None
