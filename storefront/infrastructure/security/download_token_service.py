"""Download token service.

Token Strategy:
    - 32-byte random hex string (64 characters)
    - 7-day expiration in production, 30 days elsewhere (configurable)
    - 5 successful downloads per token (configurable)
    - Issued once per completed order

Two-phase redemption:
    1. redeem(token)  -> validates and holds one use; uses_remaining unchanged
    2a. commit(token) -> artifact bytes delivered; one use consumed
    2b. release(token) -> transfer failed; the held use is given back

    A failed transfer therefore never costs the customer a download, and two
    concurrent redemptions of a token with one use left cannot both pass
    phase 1.

Usage:
    match service.redeem(token):
        case Success(value=grant):
            try:
                send(artifact)
            except OSError:
                service.release(token)
                raise
            service.commit(token)
        case Failure(error=error):
            ...  # TOKEN_NOT_FOUND / TOKEN_EXPIRED -> 404/410, TOKEN_EXHAUSTED -> 429
"""

from datetime import timedelta

from storefront.core.result import Result
from storefront.domain.errors import TokenError
from storefront.domain.value_objects import DownloadGrant
from storefront.infrastructure.tokens import EphemeralTokenStore


class DownloadTokenService:
    """Issues and redeems download tokens for purchased artifacts."""

    def __init__(
        self,
        store: EphemeralTokenStore[DownloadGrant],
        ttl: timedelta = timedelta(days=7),
        max_uses: int = 5,
    ) -> None:
        """Initialize download token service.

        Args:
            store: Store dedicated to download tokens.
            ttl: Token lifetime.
            max_uses: Successful downloads allowed per token.
        """
        self._store = store
        self._ttl = ttl
        self._max_uses = max_uses

    @property
    def store(self) -> EphemeralTokenStore[DownloadGrant]:
        """Backing store (lifecycle is managed by the container)."""
        return self._store

    @property
    def ttl(self) -> timedelta:
        """Configured token lifetime."""
        return self._ttl

    @property
    def max_uses(self) -> int:
        """Configured downloads per token."""
        return self._max_uses

    def issue(
        self,
        customer_email: str,
        order_id: str,
        customer_name: str | None = None,
    ) -> str:
        """Issue a download token for a completed order.

        Args:
            customer_email: Customer the link is delivered to.
            order_id: Provider order id.
            customer_name: Name for the delivery email.

        Returns:
            64-character hex token.
        """
        grant = DownloadGrant(
            customer_email=customer_email,
            order_id=order_id,
            customer_name=customer_name,
        )
        return self._store.issue(ttl=self._ttl, max_uses=self._max_uses, payload=grant)

    def redeem(self, token_id: str) -> Result[DownloadGrant, TokenError]:
        """Phase one: validate the token and hold one download.

        Args:
            token_id: Token from the download link.

        Returns:
            Success(DownloadGrant), or Failure(TokenError) with
            TOKEN_NOT_FOUND, TOKEN_EXPIRED or TOKEN_EXHAUSTED.
        """
        return self._store.reserve(token_id)

    def commit(self, token_id: str) -> Result[DownloadGrant, TokenError]:
        """Phase two: record a completed download.

        Args:
            token_id: Token previously passed to `redeem`.

        Returns:
            Success(DownloadGrant) after the use is consumed, or
            Failure(TokenError) if the token vanished meanwhile.
        """
        return self._store.commit(token_id)

    def release(self, token_id: str) -> None:
        """Phase two (failure): return the held download."""
        self._store.release(token_id)

    def uses_remaining(self, token_id: str) -> int | None:
        """Downloads left for a live token, or None if it is gone."""
        return self._store.uses_remaining(token_id)
