"""Fixtures for API endpoint tests.

Container factories are replaced through `app.dependency_overrides` with
services running on the fake clock, a mocked payment provider, the stub
notifier and a temporary artifact file.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from storefront.application.services import CheckoutOrchestrator
from storefront.core.container import (
    get_artifact_store,
    get_checkout_orchestrator,
    get_csrf_token_service,
    get_download_token_service,
    get_payment_provider,
    get_rate_limit,
)
from storefront.core.result import Success
from storefront.domain.value_objects import CheckoutSession
from storefront.infrastructure.artifacts import FileArtifactStore
from storefront.infrastructure.email import StubNotifier
from storefront.main import app

ARTIFACT_BYTES = b"%PDF-1.7\n" + b"recipe" * 20_000
BASE_URL = "https://shop.example.com"


@pytest.fixture
def provider():
    """Payment provider double: session creation succeeds by default."""
    mock_provider = Mock()
    mock_provider.create_checkout_session = AsyncMock(
        return_value=Success(
            value=CheckoutSession(
                session_id="cs_test_1",
                redirect_url="https://checkout.stripe.com/c/pay/cs_test_1",
            )
        )
    )
    mock_provider.verify_webhook_signature = Mock()
    return mock_provider


@pytest.fixture
def notifier(logger):
    return StubNotifier(
        logger, product_name="Complete Recipe Collection", link_ttl_days=7, max_downloads=5
    )


@pytest.fixture
def artifact_store(tmp_path):
    artifact = tmp_path / "complete-recipe-collection.pdf"
    artifact.write_bytes(ARTIFACT_BYTES)
    return FileArtifactStore(artifact)


@pytest.fixture
def orchestrator(csrf_service, download_service, provider, notifier, logger):
    return CheckoutOrchestrator(
        csrf_service=csrf_service,
        download_service=download_service,
        payment_provider=provider,
        notifier=notifier,
        logger=logger,
        base_url=BASE_URL,
    )


@pytest.fixture
def client(csrf_service, download_service, provider, orchestrator, artifact_store):
    """Provide test client with overridden dependencies and fresh rate limits."""
    get_rate_limit.cache_clear()
    app.dependency_overrides.update(
        {
            get_csrf_token_service: lambda: csrf_service,
            get_download_token_service: lambda: download_service,
            get_payment_provider: lambda: provider,
            get_checkout_orchestrator: lambda: orchestrator,
            get_artifact_store: lambda: artifact_store,
        }
    )
    yield TestClient(app)
    app.dependency_overrides.clear()
    get_rate_limit.cache_clear()
