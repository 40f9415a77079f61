"""Global exception handlers for FastAPI application.

Every error leaves the API as `{"error": ...}` with a fixed message:
- RequestValidationError (malformed or mistyped body) -> 400
- Any unhandled exception -> 500, logged

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.core.container import get_logger
from storefront.presentation.errors.error_responses import error_response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed request bodies with 400.

    Args:
        request: FastAPI Request object
        exc: Validation error raised while parsing the request

    Returns:
        JSONResponse (400 Bad Request)
    """
    get_logger().info(
        "Request validation failed",
        path=request.url.path,
        error_count=len(exc.errors()),
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Prevents leaking stack traces or internal details to API consumers.

    Args:
        request: FastAPI Request object
        exc: Unhandled exception

    Returns:
        JSONResponse (500 Internal Server Error)
    """
    get_logger().error(
        "Unhandled exception",
        error=exc,
        request_path=request.url.path,
        request_method=request.method,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
