"""Payment provider webhook endpoint.

POST /webhook/stripe reads the raw body (signature verification needs the
exact bytes) and the Stripe-Signature header.

- Signature or payload rejected -> 400, nothing is processed
- Verified event -> handed to the checkout orchestrator
- Processing errors are logged; the event is still acknowledged so the
  provider does not retry a delivery that already minted a token
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from storefront.application.services import CheckoutOrchestrator
from storefront.core.constants import STRIPE_SIGNATURE_HEADER
from storefront.core.container import (
    get_checkout_orchestrator,
    get_logger,
    get_payment_provider,
)
from storefront.core.result import Failure, Success
from storefront.domain.protocols import LoggerProtocol, PaymentProviderProtocol
from storefront.presentation.errors import error_response
from storefront.schemas import ErrorResponse, WebhookAckResponse

webhooks_router = APIRouter(tags=["Webhooks"])


@webhooks_router.post(
    "/webhook/stripe",
    response_model=WebhookAckResponse,
    responses={400: {"model": ErrorResponse}},
)
async def stripe_webhook(
    request: Request,
    signature: Annotated[str | None, Header(alias=STRIPE_SIGNATURE_HEADER)] = None,
    provider: PaymentProviderProtocol = Depends(get_payment_provider),
    orchestrator: CheckoutOrchestrator = Depends(get_checkout_orchestrator),
    logger: LoggerProtocol = Depends(get_logger),
) -> WebhookAckResponse | JSONResponse:
    """Verify and process a Stripe webhook event.

    Args:
        request: FastAPI request (raw body source).
        signature: Stripe-Signature header.
        provider: Payment provider (injected).
        orchestrator: Checkout orchestrator (injected).
        logger: Logger (injected).

    Returns:
        WebhookAckResponse, or 400 JSONResponse when verification fails.
    """
    raw_body = await request.body()

    match provider.verify_webhook_signature(raw_body, signature):
        case Failure(error=error):
            logger.warning(
                "Webhook rejected",
                error_code=error.code.value,
                reason=error.message,
            )
            return error_response(
                status.HTTP_400_BAD_REQUEST, "Webhook signature verification failed"
            )
        case Success(value=event):
            pass

    try:
        result = await orchestrator.handle_event(event)
    except Exception as e:
        logger.error(
            "Webhook processing failed",
            error=e,
            event_id=event.event_id,
            event_type=event.event_type,
        )
        return WebhookAckResponse(received=True)

    if isinstance(result, Failure):
        logger.warning(
            "Webhook event not fulfilled",
            event_id=event.event_id,
            error_code=result.error.code.value,
            reason=result.error.message,
        )
    return WebhookAckResponse(received=True)
