"""Pytest configuration and shared fixtures.

This configuration provides:
1. A testing environment for Settings before any application import
2. FakeClock for deterministic expiry tests
3. Token stores and services wired to the fake clock
4. A mock logger whose bind() returns itself
"""

import asyncio
import os
from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

os.environ.setdefault("ENVIRONMENT", "testing")

from storefront.domain.value_objects import DownloadGrant  # noqa: E402
from storefront.infrastructure.security import (  # noqa: E402
    CsrfTokenService,
    DownloadTokenService,
)
from storefront.infrastructure.tokens import EphemeralTokenStore  # noqa: E402


class FakeClock:
    """Manually advanced clock (implements ClockProtocol)."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def logger() -> Mock:
    """Provide a mock logger; bound loggers are the same mock."""
    mock_logger = Mock()
    mock_logger.bind.return_value = mock_logger
    return mock_logger


@pytest.fixture
def store(clock, logger) -> EphemeralTokenStore[str]:
    """Provide an empty token store on the fake clock."""
    return EphemeralTokenStore(name="test", clock=clock, logger=logger)


@pytest.fixture
def csrf_service(clock, logger) -> CsrfTokenService:
    """Provide a CSRF token service on the fake clock."""
    csrf_store: EphemeralTokenStore[None] = EphemeralTokenStore(
        name="csrf", clock=clock, logger=logger
    )
    return CsrfTokenService(csrf_store, ttl=timedelta(minutes=15))


@pytest.fixture
def download_service(clock, logger) -> DownloadTokenService:
    """Provide a download token service on the fake clock (7 days, 5 uses)."""
    download_store: EphemeralTokenStore[DownloadGrant] = EphemeralTokenStore(
        name="download", clock=clock, logger=logger
    )
    return DownloadTokenService(download_store, ttl=timedelta(days=7), max_uses=5)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "api: API endpoint tests through TestClient")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)
