"""
Health check router.

Reports the application version and whether the trading store
answers a trivial query. Always returns 200; a database that cannot
be reached marks the service as degraded.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from crossexchange.core.config import settings
from crossexchange.interfaces.trading.dependencies import get_engine
from crossexchange.interfaces.trading.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns service status, version and database reachability.",
)
def health_check(engine: Engine = Depends(get_engine)) -> HealthResponse:
    """Return current application health status."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check: database unreachable", exc_info=True)
        return HealthResponse(status="degraded", version=settings.version, database="unavailable")

    return HealthResponse(status="ok", version=settings.version, database="ok")
