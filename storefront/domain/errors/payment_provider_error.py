"""Payment provider error types.

Part of the PaymentProviderProtocol contract: adapters convert their SDK
exceptions into these errors and return them in a Failure.
"""

from dataclasses import dataclass

from storefront.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PaymentProviderError(DomainError):
    """Payment provider call failed.

    Attributes:
        provider_name: Name of the provider (stripe, fake, ...).
    """

    provider_name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class WebhookVerificationError(PaymentProviderError):
    """Webhook payload or signature rejected."""

    pass
