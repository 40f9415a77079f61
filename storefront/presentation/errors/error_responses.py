"""Domain error to HTTP response mapping.

Each error code maps to a status and a fixed message. Internal messages and
details never reach the client.
"""

from fastapi import status
from fastapi.responses import JSONResponse, PlainTextResponse

from storefront.core.enums import ErrorCode
from storefront.domain.errors import CheckoutError, TokenError

_CHECKOUT_ERRORS: dict[ErrorCode, tuple[int, str]] = {
    ErrorCode.INVALID_CSRF_TOKEN: (
        status.HTTP_403_FORBIDDEN,
        "Invalid or missing CSRF token",
    ),
    ErrorCode.INVALID_ORDER: (
        status.HTTP_400_BAD_REQUEST,
        "Invalid order",
    ),
    ErrorCode.PROVIDER_ERROR: (
        status.HTTP_502_BAD_GATEWAY,
        "Failed to create checkout session",
    ),
}

_DOWNLOAD_ERRORS: dict[ErrorCode, tuple[int, str]] = {
    ErrorCode.TOKEN_NOT_FOUND: (
        status.HTTP_404_NOT_FOUND,
        "Download link not found or expired.",
    ),
    ErrorCode.TOKEN_EXPIRED: (
        status.HTTP_410_GONE,
        "Download link has expired.",
    ),
    ErrorCode.TOKEN_EXHAUSTED: (
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Maximum download limit reached.",
    ),
}

ARTIFACT_ERROR_MESSAGE = "Error downloading e-book."


def error_response(
    status_code: int, error: str, message: str | None = None
) -> JSONResponse:
    """Build a JSON `{error[, message]}` response."""
    content: dict[str, str] = {"error": error}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def checkout_error_response(error: CheckoutError) -> JSONResponse:
    """Map a checkout failure to its HTTP response.

    INVALID_ORDER responses carry the validation message, which names the
    offending field but never internal state.
    """
    status_code, message = _CHECKOUT_ERRORS.get(
        error.code,
        (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"),
    )
    if error.code == ErrorCode.INVALID_ORDER:
        return error_response(status_code, message, error.message)
    return error_response(status_code, message)


def token_error_response(error: TokenError) -> PlainTextResponse:
    """Map a download token failure to its plain-text HTTP response."""
    status_code, message = _DOWNLOAD_ERRORS.get(
        error.code, _DOWNLOAD_ERRORS[ErrorCode.TOKEN_NOT_FOUND]
    )
    return PlainTextResponse(message, status_code=status_code)


def artifact_error_response() -> PlainTextResponse:
    """Response for a download whose artifact could not be read."""
    return PlainTextResponse(
        ARTIFACT_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
