"""HTTP error mapping and exception handlers."""

from storefront.presentation.errors.error_responses import (
    artifact_error_response,
    checkout_error_response,
    error_response,
    token_error_response,
)
from storefront.presentation.errors.exception_handlers import (
    register_exception_handlers,
)

__all__ = [
    "artifact_error_response",
    "checkout_error_response",
    "error_response",
    "register_exception_handlers",
    "token_error_response",
]
