"""
SQL schema and engine factory for the trading store.

Tables:
    - share_quotes: time series of quotes per symbol
    - portfolios: portfolio identity and name
    - trades: append-only ledger, one row per executed trade

Timestamps are stored as naive UTC. Rates and prices are exact
decimals at four places on every backend.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    TypeDecorator,
    create_engine,
)
from sqlalchemy.engine import Dialect, Engine
from sqlalchemy.pool import StaticPool

from crossexchange.domain.trading.entities import Trade, TradeAction

logger = logging.getLogger(__name__)


class ExactDecimal(TypeDecorator):
    """Fixed-scale decimal column that never round-trips through float.

    Backed by NUMERIC where the driver handles Decimal natively. SQLite
    has no such type, so values are stored there as text at the column
    scale.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(self.impl.precision + 2))
        return dialect.type_descriptor(self.impl)

    def _quantize(self, value: Any) -> Decimal:
        return Decimal(str(value)).quantize(Decimal(1).scaleb(-self.impl.scale))

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        quantized = self._quantize(value)
        return str(quantized) if dialect.name == "sqlite" else quantized

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        return self._quantize(value)


metadata = MetaData()

share_quotes = Table(
    "share_quotes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("symbol", String(10), nullable=False, index=True),
    Column("rate", ExactDecimal(18, 4), nullable=False),
    Column("timestamp", DateTime, nullable=False),
)

portfolios = Table(
    "portfolios",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
)

trades = Table(
    "trades",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("portfolio_id", Integer, ForeignKey("portfolios.id"), nullable=False, index=True),
    Column("symbol", String(10), nullable=False),
    Column("action", String(4), nullable=False),
    Column("no_of_shares", Integer, nullable=False),
    Column("price", ExactDecimal(18, 4), nullable=False),
)


def build_engine(url: str) -> Engine:
    """Build a SQLAlchemy engine for the given database URL.

    In-memory SQLite databases share a single connection so that
    every session sees the same tables.
    """
    if url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def create_schema(engine: Engine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    metadata.create_all(engine)
    logger.info("Trading schema ready on %s.", engine.dialect.name)


def to_storage_timestamp(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC. Naive inputs are taken as UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_storage_timestamp(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


def trade_from_row(row: Any) -> Trade:
    """Map a ``trades`` row to a Trade entity."""
    return Trade(
        symbol=row.symbol,
        action=TradeAction(row.action),
        no_of_shares=row.no_of_shares,
        price=Decimal(str(row.price)),
        portfolio_id=row.portfolio_id,
    )
