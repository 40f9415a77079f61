"""Application services."""

from storefront.application.services.checkout_orchestrator import (
    CheckoutOrchestrator,
)

__all__ = ["CheckoutOrchestrator"]
