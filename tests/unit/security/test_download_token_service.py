"""Unit tests for DownloadTokenService.

Tests cover:
- Issue stores a DownloadGrant with the configured lifetime and use cap
- Two-phase redemption: redeem holds, commit consumes, release returns
- Failed transfers never cost a use
- Five downloads, then EXHAUSTED
- Concurrent redemption of a one-use token has exactly one winner
"""

import asyncio
from datetime import timedelta

import pytest

from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Success
from storefront.domain.value_objects import DownloadGrant
from storefront.infrastructure.security import DownloadTokenService
from storefront.infrastructure.tokens import EphemeralTokenStore


def download_once(service, token):
    """Redeem and commit, as a successful transfer does."""
    match service.redeem(token):
        case Failure() as failure:
            return failure
        case Success():
            return service.commit(token)


@pytest.mark.unit
class TestIssue:
    """Test download token issuance."""

    def test_issue_stores_grant(self, download_service):
        token = download_service.issue(
            customer_email="cook@example.com",
            order_id="cs_test_123",
            customer_name="Sam Cook",
        )

        result = download_service.redeem(token)

        assert result == Success(
            value=DownloadGrant(
                customer_email="cook@example.com",
                order_id="cs_test_123",
                customer_name="Sam Cook",
            )
        )

    def test_issue_uses_configured_limits(self, download_service, clock):
        token = download_service.issue(customer_email="a@example.com", order_id="o1")

        assert download_service.uses_remaining(token) == 5
        clock.advance(timedelta(days=7))
        result = download_service.redeem(token)
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED


@pytest.mark.unit
class TestRedemption:
    """Test two-phase redemption."""

    def test_redeem_does_not_consume(self, download_service):
        token = download_service.issue(customer_email="a@example.com", order_id="o1")

        download_service.redeem(token)

        assert download_service.uses_remaining(token) == 5

    def test_commit_consumes_one_use(self, download_service):
        token = download_service.issue(customer_email="a@example.com", order_id="o1")

        assert isinstance(download_once(download_service, token), Success)
        assert download_service.uses_remaining(token) == 4

    def test_failed_transfer_keeps_use(self, download_service):
        token = download_service.issue(customer_email="a@example.com", order_id="o1")
        download_service.redeem(token)

        download_service.release(token)

        assert download_service.uses_remaining(token) == 5

    def test_five_downloads_then_exhausted(self, download_service):
        token = download_service.issue(customer_email="a@example.com", order_id="o1")

        for _ in range(5):
            assert isinstance(download_once(download_service, token), Success)

        result = download_service.redeem(token)
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXHAUSTED

    def test_expired_token(self, download_service, clock):
        token = download_service.issue(customer_email="a@example.com", order_id="o1")
        clock.advance(timedelta(days=7))

        result = download_service.redeem(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED

    def test_unknown_token(self, download_service):
        result = download_service.redeem("0" * 64)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_NOT_FOUND


@pytest.mark.unit
class TestConcurrentRedemption:
    """Test racing redemptions of the same token."""

    @pytest.mark.asyncio
    async def test_one_use_token_has_single_winner(self, clock, logger):
        store: EphemeralTokenStore[DownloadGrant] = EphemeralTokenStore(
            name="download", clock=clock, logger=logger
        )
        service = DownloadTokenService(store, ttl=timedelta(days=7), max_uses=1)
        token = service.issue(customer_email="a@example.com", order_id="o1")

        async def redeem_and_transfer():
            match service.redeem(token):
                case Failure(error=error):
                    return error.code
                case Success():
                    await asyncio.sleep(0.01)  # artifact transfer
                    return service.commit(token)

        results = await asyncio.gather(*(redeem_and_transfer() for _ in range(5)))

        winners = [r for r in results if isinstance(r, Success)]
        losers = [r for r in results if not isinstance(r, Success)]
        assert len(winners) == 1
        assert losers == [ErrorCode.TOKEN_EXHAUSTED] * 4
        assert token not in store
