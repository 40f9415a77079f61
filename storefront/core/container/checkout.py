"""Checkout dependency factories.

Token services own one EphemeralTokenStore each. The stores' sweep tasks are
started and stopped by the application lifespan (see storefront/main.py).
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from storefront.core.config import settings
from storefront.core.container.infrastructure import (
    get_clock,
    get_logger,
    get_notifier,
)

if TYPE_CHECKING:
    from storefront.application.services import CheckoutOrchestrator
    from storefront.domain.protocols import PaymentProviderProtocol
    from storefront.infrastructure.security import (
        CsrfTokenService,
        DownloadTokenService,
    )


@lru_cache()
def get_csrf_token_service() -> "CsrfTokenService":
    """Get CSRF token service singleton (single-use, short-lived tokens).

    Returns:
        CsrfTokenService backed by its own token store.
    """
    from storefront.infrastructure.security import CsrfTokenService
    from storefront.infrastructure.tokens import EphemeralTokenStore

    store: EphemeralTokenStore[None] = EphemeralTokenStore(
        name="csrf",
        clock=get_clock(),
        logger=get_logger(),
        sweep_interval_seconds=settings.token_sweep_interval_seconds,
    )
    return CsrfTokenService(store, ttl=settings.csrf_token_ttl)


@lru_cache()
def get_download_token_service() -> "DownloadTokenService":
    """Get download token service singleton.

    Lifetime depends on environment (7 days production, 30 days elsewhere);
    uses are capped by `settings.download_token_max_uses`.

    Returns:
        DownloadTokenService backed by its own token store.
    """
    from storefront.domain.value_objects import DownloadGrant
    from storefront.infrastructure.security import DownloadTokenService
    from storefront.infrastructure.tokens import EphemeralTokenStore

    store: EphemeralTokenStore[DownloadGrant] = EphemeralTokenStore(
        name="download",
        clock=get_clock(),
        logger=get_logger(),
        sweep_interval_seconds=settings.token_sweep_interval_seconds,
    )
    return DownloadTokenService(
        store,
        ttl=settings.download_token_ttl,
        max_uses=settings.download_token_max_uses,
    )


@lru_cache()
def get_payment_provider() -> "PaymentProviderProtocol":
    """Get payment provider singleton (Stripe hosted checkout).

    Missing keys do not fail startup; the provider returns a Failure on use
    and `/api/config` reports the configuration as incomplete.
    """
    from storefront.infrastructure.payments import StripePaymentProvider

    return StripePaymentProvider(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        base_url=settings.base_url,
        currency=settings.currency,
        product_description=settings.product_description,
        logger=get_logger(),
    )


@lru_cache()
def get_checkout_orchestrator() -> "CheckoutOrchestrator":
    """Get checkout orchestrator singleton wired to the other singletons."""
    from storefront.application.services import CheckoutOrchestrator

    return CheckoutOrchestrator(
        csrf_service=get_csrf_token_service(),
        download_service=get_download_token_service(),
        payment_provider=get_payment_provider(),
        notifier=get_notifier(),
        logger=get_logger(),
        base_url=settings.base_url,
    )
