"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (trades, shares, portfolios, health)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Database schema creation on start-up

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from crossexchange.core.config import settings
from crossexchange.infrastructure.trading.database import create_schema
from crossexchange.interfaces.health import router as health_router
from crossexchange.interfaces.trading.dependencies import get_engine
from crossexchange.interfaces.trading.router import (
    portfolio_router,
    share_router,
    trade_router,
)
from crossexchange.shared.errors.handlers import register_error_handlers
from crossexchange.shared.logging import configure_logging
from crossexchange.shared.security.headers import SecurityHeadersMiddleware
from crossexchange.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: make sure the trading tables exist."""
    engine = app.dependency_overrides.get(get_engine, get_engine)()
    create_schema(engine)
    logger.info("%s %s started.", settings.project_name, settings.version)

    yield

    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level, sql_echo=settings.database_echo)

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

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api")
    app.include_router(trade_router, prefix="/api")
    app.include_router(share_router, prefix="/api")
    app.include_router(portfolio_router, prefix="/api")

    return app


app = create_app()
