"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.

Trade validation errors are rejected requests, not faults: they are
returned as 400 with their fixed message and logged at WARNING.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from crossexchange.domain.trading.errors import (
    ConcurrentPortfolioUpdateError,
    InsufficientSharesError,
    NoSuchHoldingError,
    PortfolioNotFoundError,
    ShareNotFoundError,
    TradingDomainError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_409 = 409
HTTP_500 = 500


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(PortfolioNotFoundError)
    async def handle_portfolio_not_found(
        _request: Request, exc: PortfolioNotFoundError
    ) -> JSONResponse:
        """Handle unregistered portfolio errors."""
        logger.warning("Portfolio not found: %s", exc.portfolio_id)
        return _error_response(HTTP_400, exc.message)

    @app.exception_handler(ShareNotFoundError)
    async def handle_share_not_found(
        _request: Request, exc: ShareNotFoundError
    ) -> JSONResponse:
        """Handle unregistered share errors."""
        logger.warning("Share not found: %s", exc.symbol)
        return _error_response(HTTP_400, exc.message)

    @app.exception_handler(NoSuchHoldingError)
    async def handle_no_such_holding(
        _request: Request, exc: NoSuchHoldingError
    ) -> JSONResponse:
        """Handle sells of symbols the portfolio never traded."""
        logger.warning("No holding of %s in portfolio %s", exc.symbol, exc.portfolio_id)
        return _error_response(HTTP_400, exc.message)

    @app.exception_handler(InsufficientSharesError)
    async def handle_insufficient_shares(
        _request: Request, exc: InsufficientSharesError
    ) -> JSONResponse:
        """Handle sells exceeding the available quantity."""
        logger.warning(
            "Insufficient shares of %s: requested %d, available %d",
            exc.symbol,
            exc.requested,
            exc.available,
        )
        return _error_response(HTTP_400, exc.message)

    @app.exception_handler(ConcurrentPortfolioUpdateError)
    async def handle_concurrent_update(
        _request: Request, exc: ConcurrentPortfolioUpdateError
    ) -> JSONResponse:
        """Handle portfolios changed by another writer."""
        logger.warning("Concurrent update of portfolio %s", exc.portfolio_id)
        return _error_response(HTTP_409, "Portfolio was modified concurrently", exc.message)

    @app.exception_handler(TradingDomainError)
    async def handle_trading_domain(
        _request: Request, exc: TradingDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled trading domain errors."""
        logger.error("Unhandled trading domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage(
        _request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Storage failures are system faults, distinct from rejected trades."""
        logger.exception("Storage error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
