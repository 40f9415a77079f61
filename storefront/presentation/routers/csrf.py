"""CSRF token endpoint.

GET /api/csrf-token issues a single-use token the storefront page sends back
in the X-CSRF-Token header. Issuance is rate limited per client IP by
RateLimitMiddleware.
"""

from fastapi import APIRouter, Depends

from storefront.core.container import get_csrf_token_service
from storefront.infrastructure.security import CsrfTokenService
from storefront.schemas import CsrfTokenResponse

csrf_router = APIRouter(tags=["Security"])


@csrf_router.get("/api/csrf-token", response_model=CsrfTokenResponse)
async def issue_csrf_token(
    csrf_service: CsrfTokenService = Depends(get_csrf_token_service),
) -> CsrfTokenResponse:
    """Issue a fresh CSRF token.

    GET /api/csrf-token -> 200 OK
    """
    return CsrfTokenResponse(token=csrf_service.issue())
