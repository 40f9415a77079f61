"""HTTP routers."""

from storefront.presentation.routers.checkout import checkout_router
from storefront.presentation.routers.csrf import csrf_router
from storefront.presentation.routers.downloads import downloads_router
from storefront.presentation.routers.system import system_router
from storefront.presentation.routers.webhooks import webhooks_router

__all__ = [
    "checkout_router",
    "csrf_router",
    "downloads_router",
    "system_router",
    "webhooks_router",
]
