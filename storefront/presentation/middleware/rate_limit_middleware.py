"""Rate limit middleware for FastAPI.

This middleware intercepts HTTP requests and applies rate limits based on
the endpoint configuration. It handles:
- IP-scoped limits for CSRF token issuance and checkout session creation
- HTTP 429 responses with RFC 6585 headers
- Fail-open semantics (never blocks if the rate limiter fails)

Architecture:
    Presentation Layer middleware that uses RateLimitProtocol (domain) via
    InMemoryTokenBucket (infrastructure) from the container.

Usage:
    # In main.py
    from storefront.presentation.middleware import RateLimitMiddleware

    app.add_middleware(RateLimitMiddleware)
"""

from typing import TYPE_CHECKING, Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from storefront.core.result import Success
from storefront.domain.enums import RateLimitScope
from storefront.domain.value_objects import RateLimitRule
from storefront.infrastructure.rate_limit import get_rule_for_endpoint

if TYPE_CHECKING:
    from storefront.domain.protocols import LoggerProtocol, RateLimitProtocol


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Starlette middleware for rate limiting HTTP requests.

    Fail-Open Design:
        All errors result in allowing the request.

    Response Headers (RFC 6585):
        - Retry-After: Seconds until retry allowed (on 429)
        - X-RateLimit-Limit: Maximum tokens (bucket capacity)
        - X-RateLimit-Remaining: Tokens remaining
        - X-RateLimit-Reset: Seconds until bucket fully refills

    Attributes:
        _rate_limit: Injected RateLimitProtocol (container singleton when None).
        _logger: LoggerProtocol for structured logging (lazy loaded).
        _rule_lookup: Endpoint key to rule (None when unlimited).
    """

    def __init__(
        self,
        app: ASGIApp,
        rate_limit: "RateLimitProtocol | None" = None,
        logger: "LoggerProtocol | None" = None,
        rule_lookup: Callable[[str], RateLimitRule | None] = get_rule_for_endpoint,
    ) -> None:
        """Initialize rate limit middleware.

        Args:
            app: The ASGI application to wrap.
            rate_limit: Limiter to use instead of the container singleton.
            logger: Logger to use instead of the container singleton.
            rule_lookup: Rule resolver for "METHOD /path" keys.
        """
        super().__init__(app)
        self._rate_limit = rate_limit
        self._logger = logger
        self._rule_lookup = rule_lookup

    def _get_rate_limit(self) -> "RateLimitProtocol":
        """Return the injected limiter, else the container singleton."""
        if self._rate_limit is not None:
            return self._rate_limit

        from storefront.core.container import get_rate_limit

        return get_rate_limit()

    def _get_logger(self) -> "LoggerProtocol":
        """Lazy load logger from container."""
        if self._logger is None:
            from storefront.core.container import get_logger

            self._logger = get_logger()
        return self._logger

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Intercept request and apply rate limit.

        Args:
            request: Incoming HTTP request.
            call_next: Next handler in middleware chain.

        Returns:
            Response: Either rate limit error (429) or downstream response.
        """
        endpoint = f"{request.method} {request.url.path}"

        rule = self._rule_lookup(endpoint)
        if rule is None or not rule.enabled:
            return await call_next(request)

        identifier = self._extract_identifier(request, rule.scope)

        try:
            result = await self._get_rate_limit().is_allowed(
                endpoint=endpoint,
                identifier=identifier,
                cost=rule.cost,
            )
        except Exception as exc:
            self._log_fail_open(
                "rate_limit_middleware_exception",
                endpoint,
                identifier,
                error=str(exc),
            )
            return await call_next(request)

        match result:
            case Success(value=rate_result):
                if not rate_result.allowed:
                    return self._build_429_response(
                        retry_after=rate_result.retry_after,
                        limit=rate_result.limit,
                        remaining=rate_result.remaining,
                        reset_seconds=rate_result.reset_seconds,
                    )

                response = await call_next(request)
                response.headers["X-RateLimit-Limit"] = str(rate_result.limit)
                response.headers["X-RateLimit-Remaining"] = str(rate_result.remaining)
                response.headers["X-RateLimit-Reset"] = str(rate_result.reset_seconds)
                return response

            case _:
                self._log_fail_open("rate_limit_result_failure", endpoint, identifier)
                return await call_next(request)

    def _extract_identifier(self, request: Request, scope: RateLimitScope) -> str:
        """Extract rate limit identifier based on scope."""
        if scope == RateLimitScope.GLOBAL:
            return "global"
        return self._get_client_ip(request)

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request.

        Takes the first X-Forwarded-For entry when behind a reverse proxy.

        Args:
            request: HTTP request.

        Returns:
            Client IP address.
        """
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

        if request.client:
            return request.client.host

        return "unknown"

    def _build_429_response(
        self,
        retry_after: float,
        limit: int,
        remaining: int,
        reset_seconds: int,
    ) -> JSONResponse:
        """Build HTTP 429 rate limit response.

        Args:
            retry_after: Seconds until retry allowed.
            limit: Maximum tokens (bucket capacity).
            remaining: Tokens remaining (should be 0).
            reset_seconds: Seconds until bucket fully refills.

        Returns:
            JSONResponse with 429 status and proper headers.
        """
        retry_after_int = max(1, int(retry_after + 0.5))

        return JSONResponse(
            status_code=429,
            content={
                "error": (
                    f"Too many requests. Please try again in {retry_after_int} seconds."
                ),
                "retry_after": retry_after_int,
            },
            headers={
                "Retry-After": str(retry_after_int),
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": str(remaining),
                "X-RateLimit-Reset": str(reset_seconds),
            },
        )

    def _log_fail_open(
        self,
        event: str,
        endpoint: str,
        identifier: str,
        error: str | None = None,
    ) -> None:
        """Log fail-open event for monitoring."""
        self._get_logger().warning(
            "Rate limit fail-open",
            event=event,
            endpoint=endpoint,
            identifier=identifier,
            error=error,
            result="fail_open",
        )
