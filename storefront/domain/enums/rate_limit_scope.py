"""Rate limit scope types.

Determines how rate limit bucket keys are built:
    IP: rate_limit:ip:{address}:{endpoint}
    GLOBAL: rate_limit:global:{endpoint}
"""

from enum import Enum


class RateLimitScope(str, Enum):
    """Scope types for rate limit rules."""

    IP = "ip"
    GLOBAL = "global"
