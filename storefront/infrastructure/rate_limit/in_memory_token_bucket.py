"""In-memory token bucket rate limiter (implements RateLimitProtocol).

Buckets live in process memory, keyed by scope, identifier and endpoint:
    rate_limit:ip:{address}:{endpoint}
    rate_limit:global:{endpoint}

Each check refills the bucket for the elapsed time, then consumes `cost`
tokens if enough are available. Check and consume happen without an await,
so they are atomic on the event loop.

A bucket that has refilled to capacity behaves like a missing one, so idle
buckets are pruned at most once per `prune_interval_seconds`.
"""

import math
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Result, Success
from storefront.domain.enums import RateLimitScope
from storefront.domain.errors import RateLimitError
from storefront.domain.protocols import LoggerProtocol
from storefront.domain.value_objects import RateLimitResult, RateLimitRule


DEFAULT_PRUNE_INTERVAL_SECONDS: float = 60.0


@dataclass(slots=True)
class _Bucket:
    tokens: float
    updated_at: float
    capacity: float
    seconds_per_token: float

    def level_at(self, now: float) -> float:
        elapsed = max(0.0, now - self.updated_at)
        return min(self.capacity, self.tokens + elapsed / self.seconds_per_token)


class InMemoryTokenBucket:
    """Token bucket limiter over a fixed rule table."""

    def __init__(
        self,
        rules: Mapping[str, RateLimitRule],
        logger: LoggerProtocol,
        time_source: Callable[[], float] = time.monotonic,
        prune_interval_seconds: float = DEFAULT_PRUNE_INTERVAL_SECONDS,
    ) -> None:
        """Initialize limiter.

        Args:
            rules: Endpoint key to rule.
            logger: Structured logger.
            time_source: Monotonic seconds (injectable for tests).
            prune_interval_seconds: Minimum delay between idle bucket prunes.
        """
        self._rules = dict(rules)
        self._logger = logger
        self._time = time_source
        self._buckets: dict[str, _Bucket] = {}
        self._prune_interval = prune_interval_seconds
        self._last_prune = time_source()

    async def is_allowed(
        self,
        *,
        endpoint: str,
        identifier: str,
        cost: int = 1,
    ) -> Result[RateLimitResult, RateLimitError]:
        """Check and consume tokens for a request.

        Returns:
            Success(RateLimitResult), or Failure(RateLimitError) if the
            endpoint has no rule.
        """
        rule = self._rules.get(endpoint)
        if rule is None:
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_CHECK_FAILED,
                    message=f"No rate limit rule for {endpoint}",
                )
            )
        if not rule.enabled:
            return Success(value=RateLimitResult(allowed=True, limit=rule.max_tokens))

        key = self._key(rule, endpoint, identifier)
        now = self._time()
        self._prune_idle(now)
        bucket = self._refill(key, rule, now)

        if bucket.tokens >= cost:
            bucket.tokens -= cost
            return Success(
                value=RateLimitResult(
                    allowed=True,
                    remaining=int(bucket.tokens),
                    limit=rule.max_tokens,
                    reset_seconds=self._reset_seconds(bucket, rule),
                )
            )

        retry_after = (cost - bucket.tokens) * rule.seconds_per_token
        self._logger.warning(
            "Rate limit exceeded",
            endpoint=endpoint,
            identifier=identifier,
            retry_after=round(retry_after, 2),
        )
        return Success(
            value=RateLimitResult(
                allowed=False,
                retry_after=retry_after,
                remaining=int(bucket.tokens),
                limit=rule.max_tokens,
                reset_seconds=self._reset_seconds(bucket, rule),
            )
        )

    async def reset(
        self,
        *,
        endpoint: str,
        identifier: str,
    ) -> Result[None, RateLimitError]:
        """Reset a bucket to full capacity.

        Returns:
            Success(None), or Failure(RateLimitError) for unknown endpoints.
        """
        rule = self._rules.get(endpoint)
        if rule is None:
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_RESET_FAILED,
                    message=f"No rate limit rule for {endpoint}",
                )
            )
        self._buckets.pop(self._key(rule, endpoint, identifier), None)
        return Success(value=None)

    def _refill(self, key: str, rule: RateLimitRule, now: float) -> _Bucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = _Bucket(
                tokens=float(rule.max_tokens),
                updated_at=now,
                capacity=float(rule.max_tokens),
                seconds_per_token=rule.seconds_per_token,
            )
            self._buckets[key] = bucket
            return bucket
        bucket.tokens = bucket.level_at(now)
        bucket.updated_at = now
        return bucket

    def _prune_idle(self, now: float) -> None:
        if now - self._last_prune < self._prune_interval:
            return
        self._last_prune = now
        idle = [
            key
            for key, bucket in self._buckets.items()
            if bucket.level_at(now) >= bucket.capacity
        ]
        for key in idle:
            del self._buckets[key]
        if idle:
            self._logger.debug(
                "Idle rate limit buckets pruned",
                removed=len(idle),
                remaining=len(self._buckets),
            )

    @staticmethod
    def _reset_seconds(bucket: _Bucket, rule: RateLimitRule) -> int:
        missing = rule.max_tokens - bucket.tokens
        return math.ceil(missing * rule.seconds_per_token)

    @staticmethod
    def _key(rule: RateLimitRule, endpoint: str, identifier: str) -> str:
        if rule.scope == RateLimitScope.GLOBAL:
            return f"rate_limit:global:{endpoint}"
        return f"rate_limit:ip:{identifier}:{endpoint}"
