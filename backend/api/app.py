"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    ExternalServiceError,
    IntegrityError,
    StorefrontError,
    ValidationError,
)
from shared.logging_config import configure_logging
from modules.auth.routes import router as auth_router
from modules.orders.routes import admin_router as admin_orders_router
from modules.orders.routes import router as orders_router

from .dependencies import get_container
from .models import ErrorResponse
from .routes import health, users

logger = logging.getLogger(__name__)

# Most specific first; anything else is a 500.
ERROR_STATUS_CODES: list[tuple[type[StorefrontError], int]] = [
    (IntegrityError, 409),
    (ValidationError, 422),
    (AuthenticationError, 401),
    (ExternalServiceError, 502),
]


def status_code_for(exc: StorefrontError) -> int:
    """HTTP status for a storefront error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Render a StorefrontError as an ErrorResponse."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.code}): {exc.message}")
    body = ErrorResponse(error=exc.code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_container().settings
    configure_logging(settings)
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(storage: {settings.storage_backend})"
    )
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Vortex Cloud Storefront API",
        description="Game-server hosting storefront: accounts, orders and coupons",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(StorefrontError, storefront_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(orders_router, prefix="/api", tags=["orders"])
    app.include_router(users.admin_router, prefix="/api/admin/users", tags=["admin"])
    app.include_router(admin_orders_router, prefix="/api/admin/orders", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()
