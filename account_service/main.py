"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context, plus health)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Account store start-up (engine and schema)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from account_service.core.config import settings
from account_service.interfaces.account.dependencies import get_account_repository
from account_service.interfaces.account.router import router as account_router
from account_service.interfaces.health import router as health_router
from account_service.shared.errors.handlers import register_error_handlers
from account_service.shared.logging import configure_logging
from account_service.shared.security.headers import SecurityHeadersMiddleware
from account_service.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open the account store before serving."""
    if get_account_repository not in app.dependency_overrides:
        repo = get_account_repository()
        logger.info("Account store ready: %s", type(repo).__name__)

    yield

    logger.info("Shutting down %s", settings.project_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level, service=settings.project_name)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(account_router, prefix="/api/v1")

    return app


app = create_app()
