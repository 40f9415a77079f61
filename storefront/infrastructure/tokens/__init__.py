"""Ephemeral token storage."""

from storefront.infrastructure.tokens.ephemeral_token_store import (
    EphemeralTokenStore,
)

__all__ = ["EphemeralTokenStore"]
