"""System router for service-level endpoints.

Provides root, health, public configuration and the checkout return pages.
These endpoints are lightweight and side-effect free.
"""

import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from storefront.core.config import settings
from storefront.core.container import get_clock
from storefront.domain.protocols import ClockProtocol
from storefront.presentation.errors import error_response
from storefront.schemas import (
    CheckoutReturnResponse,
    ErrorResponse,
    HealthResponse,
    PublicConfigResponse,
    RootResponse,
)
from storefront.schemas.system_schemas import StripePublicConfig

HEALTH_SERVICE_NAME = "RecipeRush E-Book Delivery"

_STARTED_AT = time.monotonic()

system_router = APIRouter(tags=["System"])


@system_router.get("/", response_model=RootResponse)
async def root(clock: ClockProtocol = Depends(get_clock)) -> RootResponse:
    """Root endpoint - service status and endpoint listing."""
    return RootResponse(
        message="RecipeRush API is running",
        status="operational",
        version=settings.app_version,
        timestamp=clock.now().isoformat(),
        endpoints={
            "health": "/health",
            "config": "/api/config",
            "csrf": "/api/csrf-token",
            "checkout": "/create-checkout-session",
            "success": "/success",
            "cancel": "/cancel",
            "webhook": "/webhook/stripe",
            "download": "/download/{token}",
        },
    )


@system_router.get("/health", response_model=HealthResponse)
async def health(clock: ClockProtocol = Depends(get_clock)) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    return HealthResponse(
        status="healthy",
        service=HEALTH_SERVICE_NAME,
        timestamp=clock.now().isoformat(),
        environment=settings.environment.value,
        port=settings.port,
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )


@system_router.get(
    "/api/config",
    response_model=PublicConfigResponse,
    responses={500: {"model": ErrorResponse}},
)
async def public_config() -> PublicConfigResponse | JSONResponse:
    """Browser-side configuration.

    Only the publishable key leaves the server.

    Returns:
        PublicConfigResponse, or 500 when the publishable key is missing.
    """
    if not settings.stripe_publishable_key:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Configuration incomplete",
            "Stripe publishable key not configured",
        )
    return PublicConfigResponse(
        stripe=StripePublicConfig(publishable_key=settings.stripe_publishable_key)
    )


@system_router.get("/success", response_model=CheckoutReturnResponse)
async def checkout_success(session_id: str | None = None) -> CheckoutReturnResponse:
    """Landing after a completed hosted checkout."""
    return CheckoutReturnResponse(
        status="success",
        message="Payment successful! Your download link is on its way to your inbox.",
        session_id=session_id,
    )


@system_router.get("/cancel", response_model=CheckoutReturnResponse)
async def checkout_cancel() -> CheckoutReturnResponse:
    """Landing after the customer left the hosted checkout."""
    return CheckoutReturnResponse(
        status="cancelled",
        message="Payment cancelled. No charge was made.",
    )
