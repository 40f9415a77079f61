"""Rate limit protocol (port) for token bucket rate limiting.

Fail-Open Design:
    Implementations return Success(allowed=True) on internal errors. A broken
    limiter must never block customers from checking out.

Usage:
    result = await rate_limit.is_allowed(
        endpoint="GET /api/csrf-token",
        identifier="192.168.1.1",
    )
"""

from typing import Protocol

from storefront.core.result import Result
from storefront.domain.errors import RateLimitError
from storefront.domain.value_objects import RateLimitResult


class RateLimitProtocol(Protocol):
    """Protocol for rate limiting systems."""

    async def is_allowed(
        self,
        *,
        endpoint: str,
        identifier: str,
        cost: int = 1,
    ) -> Result[RateLimitResult, RateLimitError]:
        """Check if request is allowed and consume tokens if so.

        Args:
            endpoint: Endpoint key ("METHOD /path"); must match a rule.
            identifier: IP address or other scope identifier.
            cost: Number of tokens to consume.

        Returns:
            Success(RateLimitResult) with the decision, or
            Failure(RateLimitError) for configuration errors.
        """
        ...

    async def reset(
        self,
        *,
        endpoint: str,
        identifier: str,
    ) -> Result[None, RateLimitError]:
        """Reset a bucket to full capacity.

        Args:
            endpoint: Endpoint key.
            identifier: Scope identifier.

        Returns:
            Success(None) or Failure(RateLimitError).
        """
        ...
