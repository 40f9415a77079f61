"""Token services built on the ephemeral token store.

- CsrfTokenService: single-use, short-lived request guards
- DownloadTokenService: multi-use, long-lived artifact access
"""

from storefront.infrastructure.security.csrf_token_service import CsrfTokenService
from storefront.infrastructure.security.download_token_service import (
    DownloadTokenService,
)

__all__ = [
    "CsrfTokenService",
    "DownloadTokenService",
]
