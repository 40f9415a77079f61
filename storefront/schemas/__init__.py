"""Request and response schemas."""

from storefront.schemas.checkout_schemas import (
    CheckoutItemRequest,
    CheckoutSessionResponse,
    CreateCheckoutSessionRequest,
    CsrfTokenResponse,
    ErrorResponse,
    WebhookAckResponse,
)
from storefront.schemas.system_schemas import (
    CheckoutReturnResponse,
    HealthResponse,
    PublicConfigResponse,
    RootResponse,
)

__all__ = [
    "CheckoutItemRequest",
    "CheckoutReturnResponse",
    "CheckoutSessionResponse",
    "CreateCheckoutSessionRequest",
    "CsrfTokenResponse",
    "ErrorResponse",
    "HealthResponse",
    "PublicConfigResponse",
    "RootResponse",
    "WebhookAckResponse",
]
