"""
Main FastAPI application entry point.

This module initializes the FastAPI application instance and wires
middleware, exception handlers and routers.

Lifespan:
- Startup: start the expired-token sweep of the CSRF and download stores
- Shutdown: stop both sweep tasks before the event loop closes
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import settings
from storefront.core.container import (
    get_csrf_token_service,
    get_download_token_service,
    get_logger,
)
from storefront.presentation.errors import register_exception_handlers
from storefront.presentation.middleware import RateLimitMiddleware, TraceMiddleware
from storefront.presentation.routers import (
    checkout_router,
    csrf_router,
    downloads_router,
    system_router,
    webhooks_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    stores = [
        get_csrf_token_service().store,
        get_download_token_service().store,
    ]
    for store in stores:
        store.start()

    get_logger().info(
        "Storefront started",
        environment=settings.environment.value,
        version=settings.app_version,
        payments_configured=bool(settings.stripe_secret_key),
    )

    yield

    for store in stores:
        await store.stop()
    get_logger().info("Storefront stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Storefront checkout and e-book delivery",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware runs in reverse order of registration: trace first, then
# rate limiting, then CORS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-CSRF-Token"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(TraceMiddleware)

register_exception_handlers(app)

app.include_router(system_router)
app.include_router(csrf_router)
app.include_router(checkout_router)
app.include_router(webhooks_router)
app.include_router(downloads_router)


def run() -> None:
    """Run the application with uvicorn (console script entry point)."""
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
