"""Rate limit rule value object.

Immutable configuration for a single token bucket rule.

Usage:
    rule = RateLimitRule(
        max_tokens=30,
        refill_rate=30.0,
        scope=RateLimitScope.IP,
    )
"""

from dataclasses import dataclass

from storefront.domain.enums.rate_limit_scope import RateLimitScope


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitRule:
    """Rate limit rule configuration (value object).

    Token Bucket Algorithm:
        - Bucket starts full (max_tokens)
        - Each request consumes `cost` tokens
        - Tokens refill at `refill_rate` per minute
        - If not enough tokens, request is denied with retry_after

    Attributes:
        max_tokens: Maximum tokens in bucket (burst capacity).
        refill_rate: Tokens added per minute.
        scope: How to scope rate limits (IP or GLOBAL).
        cost: Tokens consumed per request.
        enabled: Whether this rule is active.

    Raises:
        ValueError: If max_tokens <= 0 or refill_rate <= 0 or cost <= 0.
    """

    max_tokens: int
    refill_rate: float
    scope: RateLimitScope
    cost: int = 1
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate rule configuration after initialization.

        Raises:
            ValueError: If any numeric field is invalid.
        """
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.refill_rate <= 0:
            raise ValueError(f"refill_rate must be positive, got {self.refill_rate}")
        if self.cost <= 0:
            raise ValueError(f"cost must be positive, got {self.cost}")

    @property
    def seconds_per_token(self) -> float:
        """Seconds between token refills (60 / refill_rate)."""
        return 60.0 / self.refill_rate


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed.
        retry_after: Seconds until retry allowed (0 if allowed).
        remaining: Tokens remaining in bucket.
        limit: Maximum tokens (bucket capacity).
        reset_seconds: Seconds until bucket fully refills.
    """

    allowed: bool
    retry_after: float = 0.0
    remaining: int = 0
    limit: int = 0
    reset_seconds: int = 0
