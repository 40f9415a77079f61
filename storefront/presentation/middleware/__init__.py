from storefront.presentation.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
)
from storefront.presentation.middleware.trace_middleware import TraceMiddleware

__all__ = ["RateLimitMiddleware", "TraceMiddleware"]
