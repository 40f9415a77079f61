"""Domain enums.

Usage:
    from storefront.domain.enums import OrderStatus, RateLimitScope
"""

from storefront.domain.enums.order_status import OrderStatus
from storefront.domain.enums.rate_limit_scope import RateLimitScope

__all__ = ["OrderStatus", "RateLimitScope"]
