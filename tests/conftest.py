"""
Shared pytest configuration.

Environment overrides are applied before the application package is
imported so that settings pick them up.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from crossexchange.infrastructure.trading.database import (  # noqa: E402
    build_engine,
    create_schema,
)


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database with the trading schema."""
    engine = build_engine("sqlite://")
    create_schema(engine)
    yield engine
    engine.dispose()
