"""Application commands."""

from storefront.application.commands.checkout_commands import CreateCheckoutSession

__all__ = ["CreateCheckoutSession"]
