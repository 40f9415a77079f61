"""Checkout orchestration error types.

Codes:
    INVALID_CSRF_TOKEN: Missing, replayed, expired or unknown CSRF token.
    INVALID_ORDER: Empty cart, bad email, non-positive totals.
    PROVIDER_ERROR: Payment provider refused or failed to create a session.
    NOTIFIER_ERROR: Delivery email could not be sent (logged only).
    ORDER_TRANSITION_INVALID: Illegal order state change.
"""

from dataclasses import dataclass

from storefront.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class CheckoutError(DomainError):
    """Checkout flow failure surfaced to the caller."""

    field: str | None = None
