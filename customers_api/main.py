"""Customer Management API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CustomerApiError kinds → structured JSON responses
    - CORS and GZip configured from settings (not hardcoded)
    - Rate limiting (per client address) and security headers configured from settings;
      health probes are never rate limited
    - Object graph (session manager → store → service) built once in create_app
      and handed to routes through app.state; no global container
    - The session manager is disposed on shutdown via the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Wiring in create_app rather than lifespan: test clients that skip lifespan
      events still get a fully wired app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from customers_api.api.error_handlers import register_error_handlers
from customers_api.api.middleware import (
    RequestRateLimiter, add_security_headers, rate_limit_requests,
)
from customers_api.api.routes import customers, health
from customers_api.config import Settings, get_settings
from customers_api.infrastructure.customer_store import SqlAlchemyCustomerStore
from customers_api.infrastructure.database import DatabaseSessionManager, init_db
from customers_api.infrastructure.observability import log_requests, setup_logging
from customers_api.services.customer_service import CustomerService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    db_manager: DatabaseSessionManager | None = None,
) -> FastAPI:
    """Build the application and its explicit dependency graph."""
    settings = settings or get_settings()
    db_manager = db_manager or init_db(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info("Customer API started")
        yield
        logger.info("Customer API shutting down")
        await db_manager.dispose()

    app = FastAPI(
        title=settings.api_title, version=settings.api_version, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.customer_service = CustomerService(
        SqlAlchemyCustomerStore(db_manager),
    )

    if settings.rate_limit_enabled:
        app.state.rate_limiter = RequestRateLimiter.from_settings(settings)

    # Last added runs first: logging wraps everything, limiter sits inside CORS
    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
    app.middleware("http")(rate_limit_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Retry-After", "X-RateLimit-Limit",
            "X-RateLimit-Remaining", "X-RateLimit-Reset",
        ],
    )
    if settings.security_headers_enabled:
        app.middleware("http")(add_security_headers)
    app.middleware("http")(log_requests)

    app.include_router(health.router)
    app.include_router(customers.router)

    register_error_handlers(app)
    return app


app = create_app()
