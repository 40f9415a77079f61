"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console/JSON)
- Clock (system UTC time)
- Notifier (stub email, logs the message)
- Artifact store (local file)
- Rate limiting (in-memory token bucket)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from storefront.core.config import settings

if TYPE_CHECKING:
    from storefront.domain.protocols import (
        ArtifactStoreProtocol,
        ClockProtocol,
        LoggerProtocol,
        NotifierProtocol,
        RateLimitProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from storefront.infrastructure.logging import ConsoleAdapter

    level = "DEBUG" if settings.debug else settings.log_level
    return ConsoleAdapter(use_json=not settings.is_development, level=level)


@lru_cache()
def get_clock() -> "ClockProtocol":
    """Get the system clock singleton (UTC)."""
    from storefront.infrastructure.clock import SystemClock

    return SystemClock()


@lru_cache()
def get_notifier() -> "NotifierProtocol":
    """Get delivery notifier singleton (app-scoped).

    Every environment currently uses StubNotifier, which logs the rendered
    message instead of sending it.

    Returns:
        Notifier implementing NotifierProtocol.
    """
    from storefront.infrastructure.email import StubNotifier

    return StubNotifier(
        get_logger(),
        product_name=settings.product_name,
        link_ttl_days=settings.download_token_ttl.days,
        max_downloads=settings.download_token_max_uses,
    )


@lru_cache()
def get_artifact_store() -> "ArtifactStoreProtocol":
    """Get the artifact store singleton reading `settings.artifact_path`."""
    from storefront.infrastructure.artifacts import FileArtifactStore

    return FileArtifactStore(settings.artifact_path)


# ============================================================================
# Rate Limiting (Application-Scoped)
# ============================================================================


@lru_cache()
def get_rate_limit() -> "RateLimitProtocol":
    """Get rate limiter singleton (app-scoped).

    Creates InMemoryTokenBucket with the endpoint rules built from settings.

    Fail-Open Design:
        The middleware lets requests through when a check fails. Rate
        limiting never causes denial of service.

    Returns:
        Rate limiter implementing RateLimitProtocol.
    """
    from storefront.infrastructure.rate_limit import (
        InMemoryTokenBucket,
        build_rate_limit_rules,
    )

    return InMemoryTokenBucket(
        rules=build_rate_limit_rules(settings),
        logger=get_logger(),
    )
