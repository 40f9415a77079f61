"""Container module - Centralized dependency injection.

Re-exports every factory so callers import from one place:

    from storefront.core.container import get_logger, get_checkout_orchestrator

The container is organized into modules by concern:
- infrastructure: Core services (logging, clock, notifier, artifact, rate limit)
- checkout: Token services, payment provider and the checkout orchestrator

All factories are lru_cache singletons (application-scoped). Tests replace
them through FastAPI's `app.dependency_overrides` or call `cache_clear()`.
"""

from storefront.core.container.checkout import (
    get_checkout_orchestrator,
    get_csrf_token_service,
    get_download_token_service,
    get_payment_provider,
)
from storefront.core.container.infrastructure import (
    get_artifact_store,
    get_clock,
    get_logger,
    get_notifier,
    get_rate_limit,
)

__all__ = [
    # Infrastructure
    "get_artifact_store",
    "get_clock",
    "get_logger",
    "get_notifier",
    "get_rate_limit",
    # Checkout
    "get_checkout_orchestrator",
    "get_csrf_token_service",
    "get_download_token_service",
    "get_payment_provider",
]
