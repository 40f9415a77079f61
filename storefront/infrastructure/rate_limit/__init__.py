"""Rate limiting infrastructure."""

from storefront.infrastructure.rate_limit.config import (
    build_rate_limit_rules,
    get_rule_for_endpoint,
)
from storefront.infrastructure.rate_limit.in_memory_token_bucket import (
    InMemoryTokenBucket,
)

__all__ = [
    "InMemoryTokenBucket",
    "build_rate_limit_rules",
    "get_rule_for_endpoint",
]
