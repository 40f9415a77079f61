"""Rate limit error types.

A denied request is NOT an error: it is a Success with allowed=False. This
type covers real failures of the limiter (bad rule, failed reset).
"""

from dataclasses import dataclass

from storefront.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitError(DomainError):
    """Rate limit system failure."""

    pass
