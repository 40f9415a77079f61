"""CSRF token service.

Token Strategy:
    - 32-byte random hex string (64 characters)
    - 15-minute expiration (configurable)
    - Strictly single use: a replayed token fails even within its ttl
    - Issuance is rate limited at the HTTP boundary, not here

Usage:
    service = CsrfTokenService(store=store, ttl=timedelta(minutes=15))
    token = service.issue()
    service.validate_and_consume(token)   # True
    service.validate_and_consume(token)   # False (replay)
"""

from datetime import timedelta

from storefront.core.result import Success
from storefront.infrastructure.tokens import EphemeralTokenStore

CSRF_MAX_USES = 1


class CsrfTokenService:
    """Issues and validates single-use CSRF tokens."""

    def __init__(
        self,
        store: EphemeralTokenStore[None],
        ttl: timedelta = timedelta(minutes=15),
    ) -> None:
        """Initialize CSRF token service.

        Args:
            store: Store dedicated to CSRF tokens.
            ttl: Token lifetime.
        """
        self._store = store
        self._ttl = ttl

    @property
    def store(self) -> EphemeralTokenStore[None]:
        """Backing store (lifecycle is managed by the container)."""
        return self._store

    def issue(self) -> str:
        """Issue a fresh CSRF token.

        Returns:
            64-character hex token.
        """
        return self._store.issue(ttl=self._ttl, max_uses=CSRF_MAX_USES, payload=None)

    def validate_and_consume(self, token_id: str | None) -> bool:
        """Validate a CSRF token and consume it.

        Every failure (missing, unknown, expired, replayed) collapses to
        False: the caller only needs to know if the request is legitimate.

        Args:
            token_id: Token submitted with the request.

        Returns:
            True exactly once per issued token.
        """
        if not token_id:
            return False
        return isinstance(self._store.consume(token_id), Success)
