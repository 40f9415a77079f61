"""Domain entities.

Usage:
    from storefront.domain.entities import EphemeralToken, Order, LineItem
"""

from storefront.domain.entities.order import LineItem, Order
from storefront.domain.entities.token import EphemeralToken

__all__ = [
    "EphemeralToken",
    "LineItem",
    "Order",
]
