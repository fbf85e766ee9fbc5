"""
Adapter: Trade ledger repository.

Implements TradeLedgerRepository port.
Read-only queries over the trades table.
"""

from sqlalchemy import select
from sqlalchemy.engine import Engine

from crossexchange.domain.trading.entities import Trade
from crossexchange.domain.trading.ports import TradeLedgerRepository
from crossexchange.infrastructure.trading.database import trade_from_row, trades


class TradeLedgerRepositoryAdapter(TradeLedgerRepository):
    """SQL implementation of the trade ledger."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def by_portfolio(self, portfolio_id: int) -> list[Trade]:
        """Return the trades of a portfolio in insertion order.

        An unknown portfolio id yields an empty list.
        """
        query = (
            select(trades)
            .where(trades.c.portfolio_id == portfolio_id)
            .order_by(trades.c.id.asc())
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).all()

        return [trade_from_row(row) for row in rows]
