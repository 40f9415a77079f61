"""Core errors package.

Usage:
    from storefront.core.errors import DomainError
"""

from storefront.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
]
