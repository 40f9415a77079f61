"""Centralized constants for internal implementation details.

Constants here are NOT environment-specific configuration. For tunable
settings (token lifetimes, limits, keys) use `storefront/core/config.py`.

Example:
    >>> from storefront.core.constants import TOKEN_BYTES
    >>> token = secrets.token_hex(TOKEN_BYTES)
"""

# =============================================================================
# Token Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of bytes for secure token generation (32 bytes = 256 bits)."""

TOKEN_HEX_LENGTH: int = 64
"""Length of hex-encoded token string (TOKEN_BYTES * 2)."""

TOKEN_LOG_PREFIX_LENGTH: int = 8
"""Characters of a token id that may appear in logs."""


# =============================================================================
# Headers
# =============================================================================

CSRF_HEADER_NAME: str = "X-CSRF-Token"
"""Request header carrying the CSRF token on state-changing requests."""

STRIPE_SIGNATURE_HEADER: str = "Stripe-Signature"
"""Header carrying the webhook signature."""


# =============================================================================
# Artifact Streaming
# =============================================================================

ARTIFACT_CHUNK_SIZE: int = 64 * 1024
"""Bytes read per chunk when streaming the artifact."""

ARTIFACT_MEDIA_TYPE: str = "application/pdf"
"""Content type of the purchased artifact."""


def token_prefix(token_id: str) -> str:
    """Truncate a token id for logging."""
    return token_id[:TOKEN_LOG_PREFIX_LENGTH] + "..."
