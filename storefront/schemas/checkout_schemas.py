"""Checkout request and response schemas.

Pydantic schemas for the storefront endpoints. Includes:
- Request schemas (browser -> API), camelCase on the wire
- Response schemas (API -> browser)
- Schema-to-command conversion

Request schemas only check types. Business rules (positive prices, a valid
email, a non-empty cart) are enforced by the checkout orchestrator so that
every order rejection carries the same error shape.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from storefront.application.commands import CreateCheckoutSession
from storefront.domain.entities import LineItem


# =============================================================================
# Request Schemas
# =============================================================================


class CheckoutItemRequest(BaseModel):
    """Single cart line.

    Attributes:
        name: Product name shown on the checkout page.
        price: Unit price in major currency units.
        quantity: Number of units.
        image: Optional absolute image URL.
    """

    name: str = Field(..., description="Product name", examples=["Complete Recipe Collection"])
    price: Decimal = Field(..., description="Unit price (major units)", examples=["9.99"])
    quantity: int = Field(1, description="Number of units")
    image: str | None = Field(None, description="Product image URL")


class CreateCheckoutSessionRequest(BaseModel):
    """Cart submitted by the storefront page."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[CheckoutItemRequest] = Field(..., description="Cart lines")
    customer_email: str = Field(..., alias="customerEmail", description="Customer email")
    customer_name: str = Field("", alias="customerName", description="Customer name")
    total: Decimal = Field(..., description="Order total shown to the customer")

    def to_command(self, csrf_token: str | None) -> CreateCheckoutSession:
        """Build the checkout command.

        Args:
            csrf_token: Value of the X-CSRF-Token header.

        Returns:
            CreateCheckoutSession command.
        """
        return CreateCheckoutSession(
            csrf_token=csrf_token,
            items=tuple(
                LineItem(
                    name=item.name,
                    unit_price=item.price,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in self.items
            ),
            customer_email=self.customer_email,
            customer_name=self.customer_name,
            total=self.total,
        )


# =============================================================================
# Response Schemas
# =============================================================================


class CsrfTokenResponse(BaseModel):
    """Freshly issued CSRF token."""

    token: str = Field(..., description="Single-use CSRF token")


class CheckoutSessionResponse(BaseModel):
    """Hosted checkout redirect."""

    url: str = Field(..., description="Hosted checkout page URL")


class WebhookAckResponse(BaseModel):
    """Webhook acknowledgment."""

    received: bool = Field(True, description="Event was received")


class ErrorResponse(BaseModel):
    """Error body returned by every storefront endpoint."""

    error: str = Field(..., description="Fixed, user-facing error message")
    message: str | None = Field(None, description="Additional detail")
