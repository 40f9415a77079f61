"""Checkout session endpoint.

POST /create-checkout-session
    Header X-CSRF-Token, body {items[], customerEmail, customerName, total}
    200 {"url": ...}   hosted checkout page
    403 {"error": ...} invalid or replayed CSRF token
    400 {"error": ...} invalid order or malformed body
    502 {"error": ...} payment provider failure
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from storefront.application.services import CheckoutOrchestrator
from storefront.core.constants import CSRF_HEADER_NAME
from storefront.core.container import get_checkout_orchestrator
from storefront.core.result import Failure, Success
from storefront.presentation.errors import checkout_error_response
from storefront.schemas import (
    CheckoutSessionResponse,
    CreateCheckoutSessionRequest,
    ErrorResponse,
)

checkout_router = APIRouter(tags=["Checkout"])


@checkout_router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def create_checkout_session(
    body: CreateCheckoutSessionRequest,
    csrf_token: Annotated[str | None, Header(alias=CSRF_HEADER_NAME)] = None,
    orchestrator: CheckoutOrchestrator = Depends(get_checkout_orchestrator),
) -> CheckoutSessionResponse | JSONResponse:
    """Create a hosted checkout session for the submitted cart.

    Args:
        body: Cart and customer details.
        csrf_token: Single-use CSRF token from the request header.
        orchestrator: Checkout orchestrator (injected).

    Returns:
        CheckoutSessionResponse with the redirect URL.
        JSONResponse with `{"error": ...}` on failure.
    """
    result = await orchestrator.create_session(body.to_command(csrf_token))

    match result:
        case Success(value=session):
            return CheckoutSessionResponse(url=session.redirect_url)
        case Failure(error=error):
            return checkout_error_response(error)
