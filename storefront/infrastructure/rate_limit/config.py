"""Rate limit rules per endpoint.

Endpoint keys are "METHOD /path". Endpoints without a rule are not limited.

Usage:
    rule = get_rule_for_endpoint("GET /api/csrf-token")
"""

from functools import lru_cache

from storefront.core.config import Settings, get_settings
from storefront.domain.enums import RateLimitScope
from storefront.domain.value_objects import RateLimitRule

CSRF_TOKEN_ENDPOINT = "GET /api/csrf-token"
CHECKOUT_SESSION_ENDPOINT = "POST /create-checkout-session"


def build_rate_limit_rules(settings: Settings) -> dict[str, RateLimitRule]:
    """Build the endpoint rule table from settings.

    Args:
        settings: Application settings.

    Returns:
        Mapping of endpoint key to rule.
    """
    return {
        CSRF_TOKEN_ENDPOINT: RateLimitRule(
            max_tokens=settings.csrf_rate_limit_per_minute,
            refill_rate=float(settings.csrf_rate_limit_per_minute),
            scope=RateLimitScope.IP,
        ),
        CHECKOUT_SESSION_ENDPOINT: RateLimitRule(
            max_tokens=settings.checkout_rate_limit_per_minute,
            refill_rate=float(settings.checkout_rate_limit_per_minute),
            scope=RateLimitScope.IP,
        ),
    }


@lru_cache
def _rules() -> dict[str, RateLimitRule]:
    return build_rate_limit_rules(get_settings())


def get_rule_for_endpoint(endpoint: str) -> RateLimitRule | None:
    """Return the rule for an endpoint key, or None if unlimited."""
    return _rules().get(endpoint)
