"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols structurally, without
inheritance.

Usage:
    from storefront.domain.protocols import ClockProtocol, NotifierProtocol
"""

from storefront.domain.protocols.artifact_store_protocol import ArtifactStoreProtocol
from storefront.domain.protocols.clock_protocol import ClockProtocol
from storefront.domain.protocols.logger_protocol import LoggerProtocol
from storefront.domain.protocols.notifier_protocol import NotifierProtocol
from storefront.domain.protocols.payment_provider_protocol import (
    PaymentProviderProtocol,
)
from storefront.domain.protocols.rate_limit_protocol import RateLimitProtocol

__all__ = [
    "ArtifactStoreProtocol",
    "ClockProtocol",
    "LoggerProtocol",
    "NotifierProtocol",
    "PaymentProviderProtocol",
    "RateLimitProtocol",
]
