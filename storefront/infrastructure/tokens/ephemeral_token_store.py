"""Generic in-memory ephemeral token store.

One store instance per token kind (CSRF, download). The store is the only
authority on token validity and the only code that mutates token records.

Token Strategy:
    - 32-byte random hex ids from `secrets` (2^256 possibilities)
    - Absolute expiry (created_at + ttl); now == expires_at is expired
    - Usage cap; the record is removed when the last use is consumed
    - Expired/exhausted records are removed on sight, never marked and kept

Exhaustion:
    When the last use is consumed the live record is removed and its id is
    remembered in a tombstone until the original expiry. The next attempt on
    that id reports TOKEN_EXHAUSTED and drops the tombstone, so later lookups
    report TOKEN_NOT_FOUND.

Reservations:
    `reserve` holds one use for an in-flight operation without decrementing
    `uses_remaining`. `commit` turns the hold into a consumed use, `release`
    gives it back. Concurrent reservations can never exceed the remaining
    uses, so a 1-use token admits exactly one in-flight redemption.

Concurrency:
    All mutations are synchronous dict operations with no await between the
    validity check and the mutation, so every operation is atomic with
    respect to other coroutines on the event loop.

Usage:
    store: EphemeralTokenStore[DownloadGrant] = EphemeralTokenStore(
        name="download",
        clock=SystemClock(),
        logger=logger,
    )
    store.start()                    # inside a running event loop
    token_id = store.issue(ttl=timedelta(days=7), max_uses=5, payload=grant)
    match store.consume(token_id):
        case Success(value=grant): ...
        case Failure(error=error): ...
    await store.stop()
"""

import asyncio
import secrets
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from storefront.core.constants import TOKEN_BYTES, token_prefix
from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Result, Success
from storefront.domain.entities import EphemeralToken
from storefront.domain.errors import TokenError
from storefront.domain.protocols import ClockProtocol, LoggerProtocol

P = TypeVar("P")

DEFAULT_SWEEP_INTERVAL_SECONDS: float = 300.0


class EphemeralTokenStore(Generic[P]):
    """Expiring, usage-capped token store keyed by token id.

    Attributes:
        name: Token kind, used in logs and the sweep task name.
    """

    def __init__(
        self,
        *,
        name: str,
        clock: ClockProtocol,
        logger: LoggerProtocol,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ) -> None:
        """Initialize an empty store.

        Args:
            name: Token kind ("csrf", "download").
            clock: Time source for expiry checks.
            logger: Structured logger.
            sweep_interval_seconds: Delay between periodic sweeps.

        Raises:
            ValueError: If sweep_interval_seconds is not positive.
        """
        if sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be positive")
        self.name = name
        self._clock = clock
        self._logger = logger.bind(token_store=name)
        self._sweep_interval = sweep_interval_seconds
        self._tokens: dict[str, EphemeralToken[P]] = {}
        self._in_flight: dict[str, int] = {}
        self._exhausted: dict[str, datetime] = {}
        self._sweep_task: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        """Number of live (not yet removed) tokens."""
        return len(self._tokens)

    def __contains__(self, token_id: object) -> bool:
        """True if a live record exists for token_id."""
        return token_id in self._tokens

    # =========================================================================
    # Issue / consume
    # =========================================================================

    def issue(self, ttl: timedelta, max_uses: int, payload: P) -> str:
        """Create a token and return its id.

        Args:
            ttl: Lifetime from now.
            max_uses: Successful consumptions allowed.
            payload: Data returned on successful consumption.

        Returns:
            64-character hex token id.

        Raises:
            ValueError: If ttl or max_uses is not positive.
        """
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        if max_uses <= 0:
            raise ValueError("max_uses must be positive")

        token_id = secrets.token_hex(TOKEN_BYTES)
        while token_id in self._tokens or token_id in self._exhausted:
            token_id = secrets.token_hex(TOKEN_BYTES)

        now = self._clock.now()
        self._tokens[token_id] = EphemeralToken(
            token_id=token_id,
            created_at=now,
            expires_at=now + ttl,
            uses_remaining=max_uses,
            payload=payload,
        )
        self._logger.debug(
            "Token issued",
            token=token_prefix(token_id),
            max_uses=max_uses,
            ttl_seconds=int(ttl.total_seconds()),
        )
        return token_id

    def consume(self, token_id: str) -> Result[P, TokenError]:
        """Consume one use of a token.

        Args:
            token_id: Token to consume.

        Returns:
            Success(payload), or Failure(TokenError) with TOKEN_NOT_FOUND,
            TOKEN_EXPIRED or TOKEN_EXHAUSTED. Expired and exhausted records
            are removed as a side effect.
        """
        match self._lookup(token_id):
            case Failure() as failure:
                return failure
            case Success(value=token):
                self._spend_use(token)
                return Success(value=token.payload)

    # =========================================================================
    # Two-phase consumption
    # =========================================================================

    def reserve(self, token_id: str) -> Result[P, TokenError]:
        """Hold one use for an in-flight operation.

        `uses_remaining` is not changed. Fails with TOKEN_EXHAUSTED if every
        remaining use is already held by another in-flight operation.

        Args:
            token_id: Token to reserve.

        Returns:
            Success(payload) with one use held, or Failure(TokenError).
        """
        match self._lookup(token_id):
            case Failure() as failure:
                return failure
            case Success(value=token):
                self._in_flight[token_id] = self._in_flight.get(token_id, 0) + 1
                return Success(value=token.payload)

    def commit(self, token_id: str) -> Result[P, TokenError]:
        """Turn a held use into a consumed use.

        Expiry is not re-checked: the operation started while the token was
        valid. If the record disappeared meanwhile (swept), TOKEN_NOT_FOUND
        is returned and nothing changes.

        Args:
            token_id: Previously reserved token.

        Returns:
            Success(payload) after decrementing, or Failure(TokenError).
        """
        token = self._tokens.get(token_id)
        if token is None or self._in_flight.get(token_id, 0) <= 0:
            self._in_flight.pop(token_id, None)
            return Failure(error=self._not_found(token_id))
        self._release_hold(token_id)
        self._spend_use(token)
        return Success(value=token.payload)

    def release(self, token_id: str) -> None:
        """Give back a held use without consuming it."""
        if self._in_flight.get(token_id, 0) > 0:
            self._release_hold(token_id)

    def uses_remaining(self, token_id: str) -> int | None:
        """Return remaining uses of a live token, or None if absent."""
        token = self._tokens.get(token_id)
        return token.uses_remaining if token is not None else None

    # =========================================================================
    # Sweep lifecycle
    # =========================================================================

    def sweep_expired(self) -> int:
        """Remove every expired record.

        Returns:
            Number of live tokens removed.
        """
        now = self._clock.now()
        expired = [t for t, token in self._tokens.items() if token.is_expired(now)]
        for token_id in expired:
            self._remove(token_id)

        stale = [t for t, expires_at in self._exhausted.items() if now >= expires_at]
        for token_id in stale:
            del self._exhausted[token_id]

        if expired:
            self._logger.info(
                "Expired tokens swept",
                removed=len(expired),
                remaining=len(self._tokens),
            )
        return len(expired)

    @property
    def is_running(self) -> bool:
        """True while the periodic sweep task is active."""
        return self._sweep_task is not None and not self._sweep_task.done()

    def start(self) -> None:
        """Start the periodic sweep task.

        Must be called from inside a running event loop. Calling it while a
        sweep task is already running does nothing.
        """
        if self.is_running:
            return
        self._sweep_task = asyncio.create_task(
            self._sweep_loop(), name=f"{self.name}-token-sweep"
        )
        self._logger.info(
            "Token sweep started", interval_seconds=self._sweep_interval
        )

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._logger.info("Token sweep stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            self.sweep_expired()

    # =========================================================================
    # Internals
    # =========================================================================

    def _lookup(self, token_id: str) -> Result[EphemeralToken[P], TokenError]:
        token = self._tokens.get(token_id)
        if token is None:
            if self._exhausted.pop(token_id, None) is not None:
                return Failure(error=self._exhausted_error(token_id))
            return Failure(error=self._not_found(token_id))

        if token.is_expired(self._clock.now()):
            self._remove(token_id)
            return Failure(
                error=TokenError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message="Token has expired",
                    details={"token": token_prefix(token_id)},
                )
            )

        if token.is_exhausted():
            self._remove(token_id)
            return Failure(error=self._exhausted_error(token_id))

        # Every remaining use is held by an in-flight operation; the record
        # stays because a release may free a use again.
        if token.uses_remaining - self._in_flight.get(token_id, 0) <= 0:
            return Failure(error=self._exhausted_error(token_id))

        return Success(value=token)

    def _spend_use(self, token: EphemeralToken[P]) -> None:
        token.uses_remaining -= 1
        if token.uses_remaining <= 0:
            self._remove(token.token_id)
            self._exhausted[token.token_id] = token.expires_at
            self._logger.debug("Token exhausted", token=token_prefix(token.token_id))

    def _release_hold(self, token_id: str) -> None:
        remaining_holds = self._in_flight[token_id] - 1
        if remaining_holds > 0:
            self._in_flight[token_id] = remaining_holds
        else:
            del self._in_flight[token_id]

    def _remove(self, token_id: str) -> None:
        self._tokens.pop(token_id, None)
        self._in_flight.pop(token_id, None)

    @staticmethod
    def _not_found(token_id: str) -> TokenError:
        return TokenError(
            code=ErrorCode.TOKEN_NOT_FOUND,
            message="Token not found",
            details={"token": token_prefix(token_id)},
        )

    @staticmethod
    def _exhausted_error(token_id: str) -> TokenError:
        return TokenError(
            code=ErrorCode.TOKEN_EXHAUSTED,
            message="Token has no uses remaining",
            details={"token": token_prefix(token_id)},
        )
