"""Token lifecycle error types.

Returned by the ephemeral token store when a token cannot be consumed.
Missing, expired and exhausted tokens are normal outcomes (tokens are
attacker-guessable targets), so they travel as data, never as exceptions.

Codes:
    TOKEN_NOT_FOUND: No record for the id (never issued, consumed, or swept).
    TOKEN_EXPIRED: now >= expires_at. The record is removed.
    TOKEN_EXHAUSTED: uses_remaining <= 0. The record is removed.
"""

from dataclasses import dataclass

from storefront.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenError(DomainError):
    """Token could not be validated or consumed."""

    pass
