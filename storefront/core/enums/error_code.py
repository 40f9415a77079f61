"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_REASON naming. Used with Result types; the HTTP
layer maps each code to a status and a fixed user-facing message.

Categories:
- Token lifecycle errors (TOKEN_*)
- Checkout errors (INVALID_*, PROVIDER_*, NOTIFIER_*, ORDER_*, WEBHOOK_*)
- Artifact errors (ARTIFACT_*)
- Rate limit errors (RATE_LIMIT_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Token lifecycle errors
    TOKEN_NOT_FOUND = "token_not_found"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_EXHAUSTED = "token_exhausted"

    # Checkout errors
    INVALID_CSRF_TOKEN = "invalid_csrf_token"
    INVALID_ORDER = "invalid_order"
    PROVIDER_ERROR = "provider_error"
    NOTIFIER_ERROR = "notifier_error"
    ORDER_TRANSITION_INVALID = "order_transition_invalid"
    WEBHOOK_SIGNATURE_INVALID = "webhook_signature_invalid"
    WEBHOOK_PAYLOAD_INVALID = "webhook_payload_invalid"

    # Artifact errors
    ARTIFACT_NOT_FOUND = "artifact_not_found"

    # Rate limit errors
    RATE_LIMIT_CHECK_FAILED = "rate_limit_check_failed"
    RATE_LIMIT_RESET_FAILED = "rate_limit_reset_failed"
