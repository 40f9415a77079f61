"""Ephemeral token entity.

A token is an unguessable id bound to a payload, an expiry instant and a
remaining-use counter. The store that owns it is the only code allowed to
mutate `uses_remaining`.

Validity:
    valid iff present in the store AND now < expires_at AND uses_remaining > 0.
    now == expires_at counts as expired.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

P = TypeVar("P")


@dataclass(slots=True, kw_only=True)
class EphemeralToken(Generic[P]):
    """Expiring, usage-capped token record.

    Attributes:
        token_id: Opaque 64-character hex id (256 bits of entropy).
        created_at: Issue instant (UTC).
        expires_at: created_at + ttl (UTC).
        uses_remaining: Successful consumptions left before removal.
        payload: Kind-specific data (None for CSRF tokens).
    """

    token_id: str
    created_at: datetime
    expires_at: datetime
    uses_remaining: int
    payload: P

    def is_expired(self, now: datetime) -> bool:
        """Return True once now has reached expires_at."""
        return now >= self.expires_at

    def is_exhausted(self) -> bool:
        """Return True when no uses remain."""
        return self.uses_remaining <= 0
